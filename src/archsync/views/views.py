# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Named views derived from the architecture model.

Static views (system context, container, component) are inclusion sets of
element ids; the relationships they show are every model relationship whose
two endpoints are included. Dynamic views are explicit, ordered sequences of
interaction steps describing one traced scenario.

Views only store ids. They keep a reference to the model they were created
from so that inclusion can be computed and checked.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypeVar

from archsync.errors import (
    DuplicateKeyError,
    InvalidScopeError,
    InvalidViewElementError,
    UnknownElementError,
    ViewError,
)
from archsync.model.elements import Element, ElementKind, Relationship
from archsync.model.registry import Model

# ###############
# Public Interface
# ###############


class ViewType(Enum):
    """Variants of a view."""

    SYSTEM_CONTEXT = "SystemContext"
    CONTAINER = "Container"
    COMPONENT = "Component"
    DYNAMIC = "Dynamic"


@dataclass(frozen=True)
class ElementPosition:
    """Manual layout coordinates of an element (or a relationship vertex)."""

    x: int
    y: int


@dataclass(frozen=True)
class InteractionStep:
    """One numbered step of a dynamic view.

    Attributes:
        order: 1-based position of the step in declaration order.
        source_id: Id of the calling element.
        destination_id: Id of the called element.
        relationship_id: Id of the model relationship the step follows, if any.
        description: What happens in this step.
    """

    order: int
    source_id: str
    destination_id: str
    relationship_id: str | None = None
    description: str | None = None


class View(ABC):
    """Common state of every view: identity, scope and manual layout."""

    view_type: ClassVar[ViewType]

    def __init__(
        self,
        model: Model,
        scope: Element,
        key: str,
        description: str | None = None,
        title: str | None = None,
    ) -> None:
        self._model = model
        self.scope_id = scope.id
        self.key = key
        self.description = description
        self.title = title
        self._positions: dict[str, ElementPosition] = {}
        self._vertices: dict[str, list[ElementPosition]] = {}

    @property
    def model(self) -> Model:
        return self._model

    @property
    def scope(self) -> Element:
        return self._model.get_element(self.scope_id)

    @property
    @abstractmethod
    def element_ids(self) -> frozenset[str]: ...

    @property
    @abstractmethod
    def relationship_ids(self) -> frozenset[str]: ...

    @property
    def positions(self) -> dict[str, ElementPosition]:
        """Manual element positions keyed by element id."""
        return dict(self._positions)

    @property
    def vertices(self) -> dict[str, list[ElementPosition]]:
        """Manual routing vertices keyed by relationship id."""
        return {rid: list(points) for rid, points in self._vertices.items()}

    def set_position(self, element: Element, x: int, y: int) -> None:
        """Pin *element* to ``(x, y)`` in this view."""
        _require_registered(self._model, element)
        self._positions[element.id] = ElementPosition(x=x, y=y)

    def position_of(self, element: Element) -> ElementPosition | None:
        return self._positions.get(element.id)

    def set_vertices(self, relationship: Relationship, points: Iterable[tuple[int, int]]) -> None:
        """Route *relationship* through the given points in this view."""
        if self._model.get_relationship(relationship.id) is not relationship:
            raise UnknownElementError(f"Relationship '{relationship.id}' is not registered in this model")
        self._vertices[relationship.id] = [ElementPosition(x=x, y=y) for x, y in points]


class StaticView(View):
    """A view whose content is a set of elements of one abstraction tier."""

    def __init__(
        self,
        model: Model,
        scope: Element,
        key: str,
        description: str | None = None,
        title: str | None = None,
    ) -> None:
        super().__init__(model, scope, key, description, title)
        self._element_ids: set[str] = set()

    @property
    def element_ids(self) -> frozenset[str]:
        return frozenset(self._element_ids)

    @property
    def relationship_ids(self) -> frozenset[str]:
        return frozenset(
            r.id
            for r in self._model.relationships
            if r.source_id in self._element_ids and r.destination_id in self._element_ids
        )

    @property
    def elements(self) -> list[Element]:
        """Included elements in model registration order."""
        return [e for e in self._model.elements if e.id in self._element_ids]

    def add_element(self, element: Element) -> None:
        """Include *element* explicitly.

        Raises:
            UnknownElementError: If *element* is not registered in the model.
            InvalidViewElementError: If *element* does not belong in this view's tier.
        """
        _require_registered(self._model, element)
        if not self._accepts(element):
            raise InvalidViewElementError(
                f"{element.kind.value} '{element.name}' cannot be shown in {self.view_type.value} view '{self.key}'"
            )
        self._element_ids.add(element.id)

    def remove_element(self, element: Element) -> None:
        self._element_ids.discard(element.id)
        self._positions.pop(element.id, None)

    def add_all_elements(self) -> None:
        """Include the scope tier plus every directly related element of an allowed tier.

        The expansion is a single hop over the relationship graph, in both
        directions, starting from the elements returned by :meth:`_seeds`.
        Seeds and their neighbours are visited in id order.
        """
        seeds = sorted(self._seeds(), key=lambda e: _id_order(e.id))
        included = {seed.id for seed in seeds}
        for seed in seeds:
            neighbour_ids = {
                r.destination_id if r.source_id == seed.id else r.source_id for r in self._model.relationships_of(seed)
            }
            for other_id in sorted(neighbour_ids - included, key=_id_order):
                if self._accepts(self._model.get_element(other_id)):
                    included.add(other_id)
        self._element_ids |= included

    @abstractmethod
    def _seeds(self) -> list[Element]:
        """Return the elements of the scope tier."""

    @abstractmethod
    def _accepts(self, element: Element) -> bool:
        """Return whether *element* belongs in this view."""


class SystemContextView(StaticView):
    """A software system with the people and systems around it."""

    view_type = ViewType.SYSTEM_CONTEXT

    def _seeds(self) -> list[Element]:
        return [self.scope]

    def _accepts(self, element: Element) -> bool:
        return element.kind in (ElementKind.PERSON, ElementKind.SOFTWARE_SYSTEM)


class ContainerView(StaticView):
    """The containers of a software system plus the external elements they talk to."""

    view_type = ViewType.CONTAINER

    def _seeds(self) -> list[Element]:
        return self._model.children_of(self.scope)

    def _accepts(self, element: Element) -> bool:
        if element.kind == ElementKind.SOFTWARE_SYSTEM:
            return element.id != self.scope_id
        return element.kind in (ElementKind.PERSON, ElementKind.CONTAINER)


class ComponentView(StaticView):
    """The components of a container plus the elements they talk to."""

    view_type = ViewType.COMPONENT

    def _seeds(self) -> list[Element]:
        return self._model.children_of(self.scope)

    def _accepts(self, element: Element) -> bool:
        if element.kind == ElementKind.SOFTWARE_SYSTEM:
            return element.id != self.scope.parent_id
        if element.kind == ElementKind.CONTAINER:
            return element.id != self.scope_id
        return element.kind in (ElementKind.PERSON, ElementKind.COMPONENT)


class DynamicView(View):
    """An ordered, explicitly declared sequence of interactions."""

    view_type = ViewType.DYNAMIC

    def __init__(
        self,
        model: Model,
        scope: Element,
        key: str,
        description: str | None = None,
        title: str | None = None,
    ) -> None:
        super().__init__(model, scope, key, description, title)
        self._steps: list[InteractionStep] = []

    @property
    def steps(self) -> list[InteractionStep]:
        return list(self._steps)

    @property
    def element_ids(self) -> frozenset[str]:
        return frozenset(s.source_id for s in self._steps) | frozenset(s.destination_id for s in self._steps)

    @property
    def relationship_ids(self) -> frozenset[str]:
        return frozenset(s.relationship_id for s in self._steps if s.relationship_id is not None)

    def add(
        self,
        source: Element,
        destination: Element,
        description: str | None = None,
        relationship: Relationship | None = None,
    ) -> InteractionStep:
        """Append the interaction ``source -> destination`` as the next step.

        Unless *relationship* is given, the step follows the first model
        relationship between the two elements (preferring one whose
        description equals *description*). The same pair may be added any
        number of times.

        Raises:
            UnknownElementError: If either element is not registered in the model.
            InvalidViewElementError: If *relationship* does not connect the two elements.
        """
        _require_registered(self._model, source)
        _require_registered(self._model, destination)
        if relationship is None:
            candidates = self._model.relationships_between(source, destination)
            matching = [r for r in candidates if description is not None and r.description == description]
            relationship = (matching or candidates or [None])[0]
        elif (relationship.source_id, relationship.destination_id) != (source.id, destination.id):
            raise InvalidViewElementError(
                f"Relationship '{relationship.id}' does not lead from '{source.name}' to '{destination.name}'"
            )
        if description is None and relationship is not None:
            description = relationship.description
        step = InteractionStep(
            order=len(self._steps) + 1,
            source_id=source.id,
            destination_id=destination.id,
            relationship_id=relationship.id if relationship is not None else None,
            description=description,
        )
        self._steps.append(step)
        return step

    def _restore_step(self, step: InteractionStep) -> InteractionStep:
        """Append a decoded step exactly as stored, renumbered to follow the existing steps."""
        self._model.get_element(step.source_id)
        self._model.get_element(step.destination_id)
        if step.relationship_id is not None:
            relationship = self._model.get_relationship(step.relationship_id)
            if (relationship.source_id, relationship.destination_id) != (step.source_id, step.destination_id):
                raise InvalidViewElementError(
                    f"Relationship '{relationship.id}' does not lead from element '{step.source_id}' "
                    f"to element '{step.destination_id}'"
                )
        restored = InteractionStep(
            order=len(self._steps) + 1,
            source_id=step.source_id,
            destination_id=step.destination_id,
            relationship_id=step.relationship_id,
            description=step.description,
        )
        self._steps.append(restored)
        return restored


_V = TypeVar("_V", bound=View)


class ViewSet:
    """The catalog of views of one workspace, keyed by view key."""

    def __init__(self, model: Model) -> None:
        self._model = model
        self._views: dict[str, View] = {}

    @property
    def views(self) -> list[View]:
        """All views in creation order."""
        return list(self._views.values())

    @property
    def system_context_views(self) -> list[SystemContextView]:
        return [v for v in self._views.values() if isinstance(v, SystemContextView)]

    @property
    def container_views(self) -> list[ContainerView]:
        return [v for v in self._views.values() if isinstance(v, ContainerView)]

    @property
    def component_views(self) -> list[ComponentView]:
        return [v for v in self._views.values() if isinstance(v, ComponentView)]

    @property
    def dynamic_views(self) -> list[DynamicView]:
        return [v for v in self._views.values() if isinstance(v, DynamicView)]

    def get_view(self, key: str) -> View | None:
        return self._views.get(key)

    def create_system_context_view(
        self, system: Element, key: str, description: str | None = None, title: str | None = None
    ) -> SystemContextView:
        """Create a system context view scoped to a software system."""
        self._check_new_view(system, key, (ElementKind.SOFTWARE_SYSTEM,))
        return self._register(SystemContextView(self._model, system, key, description, title))

    def create_container_view(
        self, system: Element, key: str, description: str | None = None, title: str | None = None
    ) -> ContainerView:
        """Create a container view scoped to a software system."""
        self._check_new_view(system, key, (ElementKind.SOFTWARE_SYSTEM,))
        return self._register(ContainerView(self._model, system, key, description, title))

    def create_component_view(
        self, container: Element, key: str, description: str | None = None, title: str | None = None
    ) -> ComponentView:
        """Create a component view scoped to a container."""
        self._check_new_view(container, key, (ElementKind.CONTAINER,))
        return self._register(ComponentView(self._model, container, key, description, title))

    def create_dynamic_view(
        self, scope: Element, key: str, description: str | None = None, title: str | None = None
    ) -> DynamicView:
        """Create a dynamic view scoped to a container or software system."""
        self._check_new_view(scope, key, (ElementKind.CONTAINER, ElementKind.SOFTWARE_SYSTEM))
        return self._register(DynamicView(self._model, scope, key, description, title))

    # ################
    # Implementation
    # ################

    def _check_new_view(self, scope: Element, key: str, kinds: tuple[ElementKind, ...]) -> None:
        _require_registered(self._model, scope)
        if scope.kind not in kinds:
            allowed = " or ".join(k.value for k in kinds)
            raise InvalidScopeError(f"View '{key}' must be scoped to a {allowed}, not {scope.kind.value}")
        if not key or not key.strip():
            raise ViewError("A view needs a non-empty key")
        if key in self._views:
            raise DuplicateKeyError(f"A view with key '{key}' already exists")

    def _register(self, view: _V) -> _V:
        self._views[view.key] = view
        return view


def _id_order(element_id: str) -> tuple[int, str]:
    # Sequence ids sort numerically ("2" before "10").
    return (len(element_id), element_id)


def _require_registered(model: Model, element: Element) -> None:
    if not model.has_element(element):
        raise UnknownElementError(f"Element '{element.name}' is not registered in this model")
