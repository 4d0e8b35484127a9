# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Architecture graph: elements, relationships and the registry that owns them."""

from archsync.model.elements import (
    ASYNCHRONOUS_TAG,
    COMPONENT_TAG,
    CONTAINER_TAG,
    ELEMENT_TAG,
    PERSON_TAG,
    RELATIONSHIP_TAG,
    SOFTWARE_SYSTEM_TAG,
    SYNCHRONOUS_TAG,
    Element,
    ElementKind,
    InteractionStyle,
    Location,
    Relationship,
)
from archsync.model.registry import Model

__all__ = [
    # Records
    "Element",
    "ElementKind",
    "InteractionStyle",
    "Location",
    "Relationship",
    # Registry
    "Model",
    # Built-in tags
    "ASYNCHRONOUS_TAG",
    "COMPONENT_TAG",
    "CONTAINER_TAG",
    "ELEMENT_TAG",
    "PERSON_TAG",
    "RELATIONSHIP_TAG",
    "SOFTWARE_SYSTEM_TAG",
    "SYNCHRONOUS_TAG",
]
