# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Remote synchronization: request signing, merge-from-remote and the upload client."""

from archsync.sync.auth import sign_request
from archsync.sync.client import SyncClient, SyncState
from archsync.sync.merge import merge

__all__ = [
    "SyncClient",
    "SyncState",
    "merge",
    "sign_request",
]
