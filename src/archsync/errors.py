# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy shared by all ArchSync modules."""

# ###############
# Public Interface
# ###############


class ArchSyncError(Exception):
    """Base class for every error raised by ArchSync."""


class ModelError(ArchSyncError):
    """Raised when an add operation would break a model invariant."""


class DuplicateNameError(ModelError):
    """Raised when a sibling element with the same name already exists."""


class UnknownElementError(ModelError):
    """Raised when an element is not registered in the model being modified."""


class InvalidParentError(ModelError):
    """Raised when an element is added below a parent of the wrong kind."""


class InvalidElementError(ModelError):
    """Raised when element attributes are invalid (e.g. a blank name)."""


class ViewError(ArchSyncError):
    """Raised when a view cannot be created or modified."""


class DuplicateKeyError(ViewError):
    """Raised when a view key is already used in the view set."""


class InvalidScopeError(ViewError):
    """Raised when a view is scoped to an element of the wrong kind."""


class InvalidViewElementError(ViewError):
    """Raised when an element does not belong to the abstraction tier of a view."""


class DocumentError(ArchSyncError):
    """Raised when a serialized workspace document cannot be decoded."""


class SyncConfigError(ArchSyncError):
    """Raised when the sync configuration file is invalid or cannot be loaded."""


class SyncError(ArchSyncError):
    """Base class for errors raised while talking to the remote store."""


class AuthenticationError(SyncError):
    """Raised when credentials are missing or rejected by the remote store."""


class NetworkError(SyncError):
    """Raised on transport failures and unexpected responses from the remote store."""


class ConflictError(SyncError):
    """Raised when the remote revision changed between fetch and write."""
