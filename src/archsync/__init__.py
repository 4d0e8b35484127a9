# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""ArchSync: architecture models, derived views, and remote workspace sync."""

__version__ = "0.1.0"
