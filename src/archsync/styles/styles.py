# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tag-based rendering hints for elements and relationships.

Styles are purely advisory: they never take part in model validation, and
a tag without a style entry simply contributes nothing during resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

from archsync.model.elements import Element, Relationship

# ###############
# Public Interface
# ###############


class Shape(Enum):
    """Shapes an element can be drawn with."""

    BOX = "Box"
    ROUNDED_BOX = "RoundedBox"
    CIRCLE = "Circle"
    ELLIPSE = "Ellipse"
    HEXAGON = "Hexagon"
    CYLINDER = "Cylinder"
    PERSON = "Person"
    PIPE = "Pipe"
    WEB_BROWSER = "WebBrowser"
    MOBILE_DEVICE_PORTRAIT = "MobileDevicePortrait"
    FOLDER = "Folder"
    ROBOT = "Robot"
    COMPONENT = "Component"


class Routing(Enum):
    """Line routing of a relationship."""

    DIRECT = "Direct"
    ORTHOGONAL = "Orthogonal"
    CURVED = "Curved"


class ElementStyle(BaseModel):
    """Style entry applied to every element carrying ``tag``."""

    tag: str
    color: str | None = None
    background: str | None = None
    shape: Shape | None = None


class RelationshipStyle(BaseModel):
    """Style entry applied to every relationship carrying ``tag``."""

    tag: str
    dashed: bool | None = None
    routing: Routing | None = None


@dataclass(frozen=True)
class ResolvedElementStyle:
    """Fully resolved style of one element."""

    color: str
    background: str
    shape: Shape


@dataclass(frozen=True)
class ResolvedRelationshipStyle:
    """Fully resolved style of one relationship."""

    dashed: bool
    routing: Routing


DEFAULT_ELEMENT_STYLE = ResolvedElementStyle(color="#000000", background="#dddddd", shape=Shape.BOX)
DEFAULT_RELATIONSHIP_STYLE = ResolvedRelationshipStyle(dashed=True, routing=Routing.DIRECT)


class Styles:
    """Registry of element and relationship styles, keyed by tag."""

    def __init__(self) -> None:
        self._element_styles: dict[str, ElementStyle] = {}
        self._relationship_styles: dict[str, RelationshipStyle] = {}

    @property
    def element_styles(self) -> list[ElementStyle]:
        """Element style entries in registration order."""
        return list(self._element_styles.values())

    @property
    def relationship_styles(self) -> list[RelationshipStyle]:
        """Relationship style entries in registration order."""
        return list(self._relationship_styles.values())

    def set_element_style(
        self,
        tag: str,
        color: str | None = None,
        background: str | None = None,
        shape: Shape | None = None,
    ) -> ElementStyle:
        """Create or update the element style for *tag*.

        Only the given (non-``None``) properties are changed on an existing
        entry.
        """
        style = self._element_styles.get(tag)
        if style is None:
            style = self._element_styles[tag] = ElementStyle(tag=tag)
        if color is not None:
            style.color = color
        if background is not None:
            style.background = background
        if shape is not None:
            style.shape = shape
        return style

    def set_relationship_style(
        self,
        tag: str,
        dashed: bool | None = None,
        routing: Routing | None = None,
    ) -> RelationshipStyle:
        """Create or update the relationship style for *tag*."""
        style = self._relationship_styles.get(tag)
        if style is None:
            style = self._relationship_styles[tag] = RelationshipStyle(tag=tag)
        if dashed is not None:
            style.dashed = dashed
        if routing is not None:
            style.routing = routing
        return style

    def element_style(self, tag: str) -> ElementStyle | None:
        return self._element_styles.get(tag)

    def relationship_style(self, tag: str) -> RelationshipStyle | None:
        return self._relationship_styles.get(tag)

    def resolve_element_style(self, element: Element) -> ResolvedElementStyle:
        """Merge the styles of *element*'s tags, later tags overriding earlier ones per property."""
        color = DEFAULT_ELEMENT_STYLE.color
        background = DEFAULT_ELEMENT_STYLE.background
        shape = DEFAULT_ELEMENT_STYLE.shape
        for tag in element.tags:
            style = self._element_styles.get(tag)
            if style is None:
                continue
            color = style.color if style.color is not None else color
            background = style.background if style.background is not None else background
            shape = style.shape if style.shape is not None else shape
        return ResolvedElementStyle(color=color, background=background, shape=shape)

    def resolve_relationship_style(self, relationship: Relationship) -> ResolvedRelationshipStyle:
        """Merge the styles of *relationship*'s tags, later tags overriding earlier ones per property."""
        dashed = DEFAULT_RELATIONSHIP_STYLE.dashed
        routing = DEFAULT_RELATIONSHIP_STYLE.routing
        for tag in relationship.tags:
            style = self._relationship_styles.get(tag)
            if style is None:
                continue
            dashed = style.dashed if style.dashed is not None else dashed
            routing = style.routing if style.routing is not None else routing
        return ResolvedRelationshipStyle(dashed=dashed, routing=routing)
