# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Element and relationship records of the architecture graph."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class ElementKind(Enum):
    """Discriminant of the element variants."""

    PERSON = "Person"
    SOFTWARE_SYSTEM = "SoftwareSystem"
    CONTAINER = "Container"
    COMPONENT = "Component"


class Location(Enum):
    """Whether a person or software system sits inside or outside the enterprise."""

    UNSPECIFIED = "Unspecified"
    INTERNAL = "Internal"
    EXTERNAL = "External"


class InteractionStyle(Enum):
    """How the source of a relationship talks to its destination."""

    SYNCHRONOUS = "Synchronous"
    ASYNCHRONOUS = "Asynchronous"


# Built-in tags applied automatically; styles may target them like any other tag.
ELEMENT_TAG = "Element"
RELATIONSHIP_TAG = "Relationship"
PERSON_TAG = "Person"
SOFTWARE_SYSTEM_TAG = "Software System"
CONTAINER_TAG = "Container"
COMPONENT_TAG = "Component"
SYNCHRONOUS_TAG = "Synchronous"
ASYNCHRONOUS_TAG = "Asynchronous"

KIND_TAGS: dict[ElementKind, str] = {
    ElementKind.PERSON: PERSON_TAG,
    ElementKind.SOFTWARE_SYSTEM: SOFTWARE_SYSTEM_TAG,
    ElementKind.CONTAINER: CONTAINER_TAG,
    ElementKind.COMPONENT: COMPONENT_TAG,
}

INTERACTION_TAGS: dict[InteractionStyle, str] = {
    InteractionStyle.SYNCHRONOUS: SYNCHRONOUS_TAG,
    InteractionStyle.ASYNCHRONOUS: ASYNCHRONOUS_TAG,
}

# Kind of the parent each kind must be nested in (``None`` means top-level).
PARENT_KINDS: dict[ElementKind, ElementKind | None] = {
    ElementKind.PERSON: None,
    ElementKind.SOFTWARE_SYSTEM: None,
    ElementKind.CONTAINER: ElementKind.SOFTWARE_SYSTEM,
    ElementKind.COMPONENT: ElementKind.CONTAINER,
}


class Element(BaseModel):
    """A node of the architecture graph.

    All four variants share this one record; ``kind`` tells them apart and
    ``parent_id`` points at the owning element (``None`` for people and
    software systems).
    """

    id: str
    kind: ElementKind
    name: str
    description: str | None = None
    technology: str | None = None
    url: str | None = None
    location: Location = Location.UNSPECIFIED
    tags: list[str] = _Field(default_factory=list)
    parent_id: str | None = None

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


class Relationship(BaseModel):
    """A directed edge between two elements of the same model."""

    id: str
    source_id: str
    destination_id: str
    description: str | None = None
    technology: str | None = None
    interaction_style: InteractionStyle = InteractionStyle.SYNCHRONOUS
    tags: list[str] = _Field(default_factory=list)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


def default_element_tags(kind: ElementKind) -> list[str]:
    """Return the built-in tags every element of *kind* starts with."""
    return [ELEMENT_TAG, KIND_TAGS[kind]]


def default_relationship_tags(style: InteractionStyle) -> list[str]:
    """Return the built-in tags every relationship with *style* starts with."""
    return [RELATIONSHIP_TAG, INTERACTION_TAGS[style]]
