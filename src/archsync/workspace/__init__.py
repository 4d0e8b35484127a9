# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Workspace aggregate, its JSON document codec and the sync configuration."""

from archsync.workspace.config import (
    API_KEY_ENV,
    API_SECRET_ENV,
    CONFIG_FILE_NAME,
    SyncConfig,
    load_sync_config,
)
from archsync.workspace.document import (
    DOCUMENT_FORMAT_VERSION,
    decode_workspace,
    deserialize,
    encode_workspace,
    read_workspace,
    serialize,
    write_workspace,
)
from archsync.workspace.workspace import Workspace

__all__ = [
    "API_KEY_ENV",
    "API_SECRET_ENV",
    "CONFIG_FILE_NAME",
    "DOCUMENT_FORMAT_VERSION",
    "SyncConfig",
    "Workspace",
    "decode_workspace",
    "deserialize",
    "encode_workspace",
    "load_sync_config",
    "read_workspace",
    "serialize",
    "write_workspace",
]
