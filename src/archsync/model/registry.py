# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""The element and relationship registry (the workspace *model*).

Elements live in one flat table keyed by id; containment is recorded with
``parent_id`` references. Every add operation validates its arguments before
touching any state, so a rejected call leaves the model exactly as it was.
"""

from __future__ import annotations

from collections.abc import Iterable

from archsync.errors import (
    DuplicateNameError,
    InvalidElementError,
    InvalidParentError,
    UnknownElementError,
)
from archsync.model.elements import (
    PARENT_KINDS,
    Element,
    ElementKind,
    InteractionStyle,
    Location,
    Relationship,
    default_element_tags,
    default_relationship_tags,
)

# ###############
# Public Interface
# ###############


class Model:
    """Registry of all elements and relationships of a workspace."""

    def __init__(self) -> None:
        self._elements: dict[str, Element] = {}
        self._relationships: dict[str, Relationship] = {}
        self._next_id = 1

    # -------- queries --------

    @property
    def elements(self) -> list[Element]:
        """All elements in registration order."""
        return list(self._elements.values())

    @property
    def relationships(self) -> list[Relationship]:
        """All relationships in registration order."""
        return list(self._relationships.values())

    @property
    def people(self) -> list[Element]:
        return self._of_kind(ElementKind.PERSON)

    @property
    def software_systems(self) -> list[Element]:
        return self._of_kind(ElementKind.SOFTWARE_SYSTEM)

    def get_element(self, element_id: str) -> Element:
        """Return the element with *element_id*.

        Raises:
            UnknownElementError: If no such element is registered.
        """
        try:
            return self._elements[element_id]
        except KeyError:
            raise UnknownElementError(f"No element with id '{element_id}'") from None

    def get_relationship(self, relationship_id: str) -> Relationship:
        """Return the relationship with *relationship_id*.

        Raises:
            UnknownElementError: If no such relationship is registered.
        """
        try:
            return self._relationships[relationship_id]
        except KeyError:
            raise UnknownElementError(f"No relationship with id '{relationship_id}'") from None

    def has_element(self, element: Element) -> bool:
        """Return whether *element* is registered in this model (by identity)."""
        return self._elements.get(element.id) is element

    def children_of(self, element: Element | None) -> list[Element]:
        """Return the direct children of *element* (``None`` for top-level elements)."""
        parent_id = element.id if element is not None else None
        return [e for e in self._elements.values() if e.parent_id == parent_id]

    def parent_of(self, element: Element) -> Element | None:
        return self._elements[element.parent_id] if element.parent_id is not None else None

    def find_element(self, name: str, parent: Element | None = None) -> Element | None:
        """Return the child of *parent* named *name*, or ``None``."""
        for child in self.children_of(parent):
            if child.name == name:
                return child
        return None

    def relationships_between(self, source: Element, destination: Element) -> list[Relationship]:
        """Return every relationship from *source* to *destination*, in registration order."""
        return [
            r
            for r in self._relationships.values()
            if r.source_id == source.id and r.destination_id == destination.id
        ]

    def relationships_of(self, element: Element) -> list[Relationship]:
        """Return every relationship that starts or ends at *element*."""
        return [
            r
            for r in self._relationships.values()
            if element.id in (r.source_id, r.destination_id)
        ]

    def canonical_name(self, element: Element) -> str:
        """Return a name for *element* that is stable across runs.

        The canonical name combines the kind with the containment path, for
        example ``Container://My System.Database``. Dots and backslashes
        inside names are escaped with a backslash, so container ``B.C`` of
        system ``A`` (``Container://A.B\\.C``) and container ``C`` of system
        ``A.B`` (``Container://A\\.B.C``) keep distinct names.
        """
        path = [_escape_segment(element.name)]
        parent_id = element.parent_id
        while parent_id is not None:
            parent = self._elements[parent_id]
            path.append(_escape_segment(parent.name))
            parent_id = parent.parent_id
        return f"{element.kind.value}://{'.'.join(reversed(path))}"

    # -------- element construction --------

    def add_person(
        self,
        name: str,
        description: str | None = None,
        location: Location = Location.UNSPECIFIED,
    ) -> Element:
        """Register a top-level person."""
        return self._add_element(ElementKind.PERSON, None, name, description, None, location)

    def add_software_system(
        self,
        name: str,
        description: str | None = None,
        location: Location = Location.UNSPECIFIED,
    ) -> Element:
        """Register a top-level software system."""
        return self._add_element(ElementKind.SOFTWARE_SYSTEM, None, name, description, None, location)

    def add_container(
        self,
        parent_system: Element,
        name: str,
        description: str | None = None,
        technology: str | None = None,
    ) -> Element:
        """Register a container owned by *parent_system*.

        Raises:
            UnknownElementError: If *parent_system* is not registered here.
            InvalidParentError: If *parent_system* is not a software system.
            DuplicateNameError: If the system already has a container named *name*.
        """
        return self._add_element(ElementKind.CONTAINER, parent_system, name, description, technology)

    def add_component(
        self,
        parent_container: Element,
        name: str,
        description: str | None = None,
        technology: str | None = None,
    ) -> Element:
        """Register a component owned by *parent_container*.

        Raises:
            UnknownElementError: If *parent_container* is not registered here.
            InvalidParentError: If *parent_container* is not a container.
            DuplicateNameError: If the container already has a component named *name*.
        """
        return self._add_element(ElementKind.COMPONENT, parent_container, name, description, technology)

    # -------- relationships and tags --------

    def add_relationship(
        self,
        source: Element,
        destination: Element,
        description: str | None = None,
        technology: str | None = None,
        interaction_style: InteractionStyle = InteractionStyle.SYNCHRONOUS,
    ) -> Relationship:
        """Register a directed relationship from *source* to *destination*.

        Self-relationships are allowed and relationships over the same pair
        are never merged.

        Raises:
            UnknownElementError: If either endpoint is not registered here.
        """
        self._require_registered(source, "source")
        self._require_registered(destination, "destination")
        relationship = Relationship(
            id=self._allocate_id(),
            source_id=source.id,
            destination_id=destination.id,
            description=description,
            technology=technology,
            interaction_style=interaction_style,
            tags=default_relationship_tags(interaction_style),
        )
        self._relationships[relationship.id] = relationship
        return relationship

    def add_tags(self, item: Element | Relationship, *tags: str) -> None:
        """Append *tags* to an element or relationship, skipping tags it already has."""
        if isinstance(item, Element):
            self._require_registered(item, "element")
        elif self._relationships.get(item.id) is not item:
            raise UnknownElementError(f"Relationship '{item.id}' is not registered in this model")
        for tag in tags:
            tag = tag.strip()
            if tag and tag not in item.tags:
                item.tags.append(tag)

    def set_url(self, element: Element, url: str | None) -> None:
        self._require_registered(element, "element")
        element.url = url

    def set_location(self, element: Element, location: Location) -> None:
        self._require_registered(element, "element")
        element.location = location

    # -------- reconstruction --------

    @classmethod
    def from_records(
        cls,
        elements: Iterable[Element],
        relationships: Iterable[Relationship],
    ) -> Model:
        """Rebuild a model from decoded records, re-checking every invariant.

        Elements may be given in any order; parents are registered before
        their children.

        Raises:
            ModelError: If the records violate an invariant of the model.
        """
        model = cls()
        pending = list(elements)
        ids = [e.id for e in pending]
        if len(ids) != len(set(ids)):
            raise InvalidElementError("Element ids must be unique")
        for depth_kinds in _KINDS_BY_DEPTH:
            for element in pending:
                if element.kind in depth_kinds:
                    model._restore_element(element)
        for relationship in relationships:
            model._restore_relationship(relationship)
        return model

    # ################
    # Implementation
    # ################

    def _of_kind(self, kind: ElementKind) -> list[Element]:
        return [e for e in self._elements.values() if e.kind == kind]

    def _allocate_id(self) -> str:
        while str(self._next_id) in self._elements or str(self._next_id) in self._relationships:
            self._next_id += 1
        allocated = str(self._next_id)
        self._next_id += 1
        return allocated

    def _require_registered(self, element: Element, role: str) -> None:
        if not self.has_element(element):
            raise UnknownElementError(f"The {role} '{element.name}' is not registered in this model")

    def _check_placement(self, kind: ElementKind, parent_id: str | None, name: str) -> None:
        """Validate name and parent of a new element without mutating anything."""
        if not name or not name.strip():
            raise InvalidElementError(f"A {kind.value} needs a non-empty name")
        expected = PARENT_KINDS[kind]
        if expected is None and parent_id is not None:
            raise InvalidParentError(f"A {kind.value} cannot have a parent element")
        if expected is not None:
            parent = self._elements.get(parent_id) if parent_id is not None else None
            if parent is None:
                raise UnknownElementError(f"The parent of {kind.value} '{name}' is not registered in this model")
            if parent.kind != expected:
                raise InvalidParentError(
                    f"A {kind.value} must be added to a {expected.value}, not to {parent.kind.value} '{parent.name}'"
                )
        for sibling in self._elements.values():
            if sibling.parent_id == parent_id and sibling.name == name:
                where = "at the top level" if parent_id is None else f"in '{self._elements[parent_id].name}'"
                raise DuplicateNameError(f"An element named '{name}' already exists {where}")

    def _add_element(
        self,
        kind: ElementKind,
        parent: Element | None,
        name: str,
        description: str | None,
        technology: str | None,
        location: Location = Location.UNSPECIFIED,
    ) -> Element:
        if parent is not None:
            self._require_registered(parent, "parent")
        parent_id = parent.id if parent is not None else None
        self._check_placement(kind, parent_id, name)
        element = Element(
            id=self._allocate_id(),
            kind=kind,
            name=name,
            description=description,
            technology=technology,
            location=location,
            tags=default_element_tags(kind),
            parent_id=parent_id,
        )
        self._elements[element.id] = element
        return element

    def _restore_element(self, element: Element) -> None:
        self._check_placement(element.kind, element.parent_id, element.name)
        self._elements[element.id] = element

    def _restore_relationship(self, relationship: Relationship) -> None:
        if relationship.id in self._elements or relationship.id in self._relationships:
            raise InvalidElementError(f"Duplicate id '{relationship.id}' in relationship records")
        for endpoint in (relationship.source_id, relationship.destination_id):
            if endpoint not in self._elements:
                raise UnknownElementError(f"Relationship '{relationship.id}' references unknown element '{endpoint}'")
        self._relationships[relationship.id] = relationship


def _escape_segment(name: str) -> str:
    return name.replace("\\", "\\\\").replace(".", "\\.")


_KINDS_BY_DEPTH: tuple[frozenset[ElementKind], ...] = (
    frozenset({ElementKind.PERSON, ElementKind.SOFTWARE_SYSTEM}),
    frozenset({ElementKind.CONTAINER}),
    frozenset({ElementKind.COMPONENT}),
)
