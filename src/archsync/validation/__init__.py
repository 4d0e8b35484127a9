# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Advisory checks for workspaces (unused elements, unstyled tags, etc.)."""

from archsync.validation.checks import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate,
)

__all__ = [
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate",
]
