# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""The workspace aggregate: model, views and styles uploaded as one document."""

from __future__ import annotations

from datetime import datetime

from archsync.model.registry import Model
from archsync.styles.styles import Styles
from archsync.views.views import ViewSet

# ###############
# Public Interface
# ###############


class Workspace:
    """A named bundle of one model, the views derived from it and their styles.

    Attributes:
        name: Display name of the workspace.
        description: Optional human-readable description.
        revision: Revision last stored remotely (0 if never uploaded).
        last_modified: Time of the last successful upload, if any.
    """

    def __init__(
        self,
        name: str,
        description: str | None = None,
        *,
        model: Model | None = None,
        styles: Styles | None = None,
    ) -> None:
        self.name = name
        self.description = description
        self.revision = 0
        self.last_modified: datetime | None = None
        self._model = model if model is not None else Model()
        self._views = ViewSet(self._model)
        self._styles = styles if styles is not None else Styles()

    @property
    def model(self) -> Model:
        return self._model

    @property
    def views(self) -> ViewSet:
        return self._views

    @property
    def styles(self) -> Styles:
        return self._styles

    def get_model(self) -> Model:
        return self._model

    def get_views(self) -> ViewSet:
        return self._views

    def get_styles(self) -> Styles:
        return self._styles
