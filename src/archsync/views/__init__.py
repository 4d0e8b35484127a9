# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""View catalog: system context, container, component and dynamic views."""

from archsync.views.views import (
    ComponentView,
    ContainerView,
    DynamicView,
    ElementPosition,
    InteractionStep,
    StaticView,
    SystemContextView,
    View,
    ViewSet,
    ViewType,
)

__all__ = [
    "ComponentView",
    "ContainerView",
    "DynamicView",
    "ElementPosition",
    "InteractionStep",
    "StaticView",
    "SystemContextView",
    "View",
    "ViewSet",
    "ViewType",
]
