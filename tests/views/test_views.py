# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for view creation and element inclusion."""

from dataclasses import dataclass

import pytest

from archsync.errors import (
    DuplicateKeyError,
    InvalidScopeError,
    InvalidViewElementError,
    UnknownElementError,
)
from archsync.model import Element, ElementKind, InteractionStyle, Model
from archsync.views import ElementPosition, StaticView, ViewSet, ViewType

# ###############
# Helpers
# ###############


@dataclass
class Landscape:
    """A small modular-monolith model used across the view tests."""

    model: Model
    user: Element
    client: Element
    system: Element
    ui: Element
    api: Element
    db: Element
    events: Element
    web: Element
    command: Element
    query: Element


def _landscape() -> Landscape:
    model = Model()
    user = model.add_person("User")
    client = model.add_software_system("Client System")
    system = model.add_software_system("Information System")
    model.add_relationship(user, system, "Uses")
    model.add_relationship(client, system, "Uses")

    ui = model.add_container(system, "UI Application", technology="Angular")
    api = model.add_container(system, "Web Application", technology="Spring Boot")
    db = model.add_container(system, "Database")
    events = model.add_container(system, "Event Store")
    model.add_relationship(user, ui, "Uses")
    model.add_relationship(ui, api, "Consumes")
    model.add_relationship(client, api, "Uses")
    model.add_relationship(api, db, "Reads projections", "SQL")
    model.add_relationship(api, events, "Persists events", "SQL")

    web = model.add_component(api, "Web Component")
    command = model.add_component(api, "Command Side")
    query = model.add_component(api, "Query Side")
    model.add_relationship(ui, web, "Uses")
    model.add_relationship(client, web, "Uses")
    model.add_relationship(web, command, "Sends commands")
    model.add_relationship(web, query, "Reads materialized view")
    model.add_relationship(command, events, "Persists events")
    model.add_relationship(query, events, "Subscribes to events", "SQL", InteractionStyle.ASYNCHRONOUS)
    model.add_relationship(query, db, "Writes materialized views", "SQL")

    return Landscape(model, user, client, system, ui, api, db, events, web, command, query)


@pytest.fixture
def land() -> Landscape:
    return _landscape()


# ###############
# View catalog
# ###############


def test_create_views_of_each_type(land: Landscape) -> None:
    views = ViewSet(land.model)
    context = views.create_system_context_view(land.system, "Context", "Context diagram")
    containers = views.create_container_view(land.system, "Containers")
    components = views.create_component_view(land.api, "Components")
    dynamic = views.create_dynamic_view(land.api, "Create Blog", "Creating a blog post")

    assert context.view_type is ViewType.SYSTEM_CONTEXT
    assert context.scope is land.system
    assert context.description == "Context diagram"
    assert containers.view_type is ViewType.CONTAINER
    assert components.scope_id == land.api.id
    assert dynamic.view_type is ViewType.DYNAMIC
    assert views.views == [context, containers, components, dynamic]
    assert views.get_view("Components") is components
    assert views.dynamic_views == [dynamic]


def test_duplicate_view_key_is_rejected(land: Landscape) -> None:
    views = ViewSet(land.model)
    views.create_system_context_view(land.system, "Context")
    with pytest.raises(DuplicateKeyError):
        views.create_container_view(land.system, "Context")
    assert len(views.views) == 1


def test_view_scope_kind_is_checked(land: Landscape) -> None:
    views = ViewSet(land.model)
    with pytest.raises(InvalidScopeError):
        views.create_system_context_view(land.api, "Context")
    with pytest.raises(InvalidScopeError):
        views.create_container_view(land.user, "Containers")
    with pytest.raises(InvalidScopeError):
        views.create_component_view(land.system, "Components")
    with pytest.raises(InvalidScopeError):
        views.create_dynamic_view(land.web, "Dynamic")


def test_view_scope_must_be_registered(land: Landscape) -> None:
    views = ViewSet(land.model)
    stranger = Element(id=land.system.id, kind=ElementKind.SOFTWARE_SYSTEM, name="Elsewhere")
    with pytest.raises(UnknownElementError):
        views.create_system_context_view(stranger, "Context")


# ###############
# add_all_elements
# ###############


def test_context_view_end_to_end() -> None:
    """Context view of S includes U and S and U->S, but not the container C1."""
    model = Model()
    user = model.add_person("U")
    system = model.add_software_system("S")
    container = model.add_container(system, "C1")
    rel = model.add_relationship(user, system, "Uses")

    view = ViewSet(model).create_system_context_view(system, "Context")
    view.add_all_elements()

    assert view.element_ids == {user.id, system.id}
    assert view.relationship_ids == {rel.id}
    assert container.id not in view.element_ids


def test_context_view_includes_one_hop_people_and_systems(land: Landscape) -> None:
    view = ViewSet(land.model).create_system_context_view(land.system, "Context")
    view.add_all_elements()

    assert view.element_ids == {land.user.id, land.client.id, land.system.id}
    assert {land.model.get_relationship(r).description for r in view.relationship_ids} == {"Uses"}
    assert len(view.relationship_ids) == 2


def test_context_view_skips_unrelated_systems(land: Landscape) -> None:
    lonely = land.model.add_software_system("Lonely")
    view = ViewSet(land.model).create_system_context_view(land.system, "Context")
    view.add_all_elements()
    assert lonely.id not in view.element_ids


def test_container_view_includes_containers_and_related_externals(land: Landscape) -> None:
    view = ViewSet(land.model).create_container_view(land.system, "Containers")
    view.add_all_elements()

    assert view.element_ids == {
        land.user.id,
        land.client.id,
        land.ui.id,
        land.api.id,
        land.db.id,
        land.events.id,
    }
    # Never the scope system itself and never components.
    assert land.system.id not in view.element_ids
    assert land.web.id not in view.element_ids


def test_container_view_includes_directly_related_foreign_container(land: Landscape) -> None:
    crm = land.model.add_software_system("CRM")
    crm_api = land.model.add_container(crm, "CRM API")
    land.model.add_relationship(land.api, crm_api, "Looks up customers")

    view = ViewSet(land.model).create_container_view(land.system, "Containers")
    view.add_all_elements()

    assert crm_api.id in view.element_ids
    assert crm.id not in view.element_ids


def test_component_view_includes_components_and_related_elements(land: Landscape) -> None:
    view = ViewSet(land.model).create_component_view(land.api, "Components")
    view.add_all_elements()

    assert view.element_ids == {
        land.web.id,
        land.command.id,
        land.query.id,
        land.ui.id,
        land.client.id,
        land.db.id,
        land.events.id,
    }
    assert land.api.id not in view.element_ids
    assert land.system.id not in view.element_ids
    assert land.user.id not in view.element_ids


def test_component_view_skips_unrelated_sibling_containers(land: Landscape) -> None:
    cache = land.model.add_container(land.system, "Cache")
    view = ViewSet(land.model).create_component_view(land.api, "Components")
    view.add_all_elements()
    assert cache.id not in view.element_ids


def test_relationships_follow_included_elements(land: Landscape) -> None:
    """A static view shows exactly the relationships between its included elements."""
    view = ViewSet(land.model).create_component_view(land.api, "Components")
    view.add_all_elements()

    for relationship in land.model.relationships:
        both_in = relationship.source_id in view.element_ids and relationship.destination_id in view.element_ids
        assert (relationship.id in view.relationship_ids) == both_in


def test_add_all_elements_is_deterministic() -> None:
    """Two views with the same scope over the same model include the same elements."""
    first = _landscape()
    second = _landscape()
    views_a = ViewSet(first.model)
    views_b = ViewSet(second.model)

    for create, scope_a, scope_b in (
        ("create_system_context_view", first.system, second.system),
        ("create_container_view", first.system, second.system),
        ("create_component_view", first.api, second.api),
    ):
        view_a = getattr(views_a, create)(scope_a, create)
        view_b = getattr(views_b, create)(scope_b, create)
        view_a.add_all_elements()
        view_b.add_all_elements()
        assert view_a.element_ids == view_b.element_ids
        assert view_a.relationship_ids == view_b.relationship_ids


def test_add_all_elements_ignores_relationship_order() -> None:
    """Expansion depends on the graph, not on the order relationships were registered in."""

    def build(reverse: bool) -> frozenset[str]:
        model = Model()
        shop = model.add_software_system("Shop")
        others = [model.add_software_system(f"Partner {i}") for i in range(12)]
        user = model.add_person("User")
        pairs = [(user, shop), *((shop, other) for other in others)]
        for source, destination in reversed(pairs) if reverse else pairs:
            model.add_relationship(source, destination, "Talks to")
        view = ViewSet(model).create_system_context_view(shop, "Context")
        view.add_all_elements()
        return frozenset(model.canonical_name(model.get_element(eid)) for eid in view.element_ids)

    assert build(reverse=False) == build(reverse=True)
    assert len(build(reverse=False)) == 14


def test_static_view_without_expansion_hooks_cannot_be_created(land: Landscape) -> None:
    class Unfinished(StaticView):
        view_type = ViewType.CONTAINER

        def _seeds(self) -> list[Element]:
            return []

    with pytest.raises(TypeError):
        Unfinished(land.model, land.system, "Unfinished")


def test_add_all_elements_twice_is_stable(land: Landscape) -> None:
    views = ViewSet(land.model)
    first = views.create_container_view(land.system, "A")
    second = views.create_container_view(land.system, "B")
    first.add_all_elements()
    second.add_all_elements()
    second.add_all_elements()
    assert first.element_ids == second.element_ids


# ###############
# Explicit curation and layout
# ###############


def test_add_and_remove_element(land: Landscape) -> None:
    view = ViewSet(land.model).create_system_context_view(land.system, "Context")
    view.add_element(land.system)
    view.add_element(land.user)
    view.set_position(land.user, 10, 20)

    assert view.element_ids == {land.system.id, land.user.id}
    view.remove_element(land.user)
    assert view.element_ids == {land.system.id}
    assert view.position_of(land.user) is None


def test_add_element_of_wrong_tier_is_rejected(land: Landscape) -> None:
    views = ViewSet(land.model)
    context = views.create_system_context_view(land.system, "Context")
    containers = views.create_container_view(land.system, "Containers")

    with pytest.raises(InvalidViewElementError):
        context.add_element(land.api)
    with pytest.raises(InvalidViewElementError):
        containers.add_element(land.web)
    with pytest.raises(InvalidViewElementError):
        containers.add_element(land.system)


def test_positions_and_vertices(land: Landscape) -> None:
    view = ViewSet(land.model).create_container_view(land.system, "Containers")
    view.add_all_elements()
    rel = land.model.relationships_between(land.api, land.db)[0]

    view.set_position(land.api, 100, 200)
    view.set_vertices(rel, [(150, 250), (175, 300)])

    assert view.position_of(land.api) == ElementPosition(100, 200)
    assert view.positions == {land.api.id: ElementPosition(100, 200)}
    assert view.vertices == {rel.id: [ElementPosition(150, 250), ElementPosition(175, 300)]}


# ###############
# Dynamic views
# ###############


def test_dynamic_view_preserves_declaration_order(land: Landscape) -> None:
    view = ViewSet(land.model).create_dynamic_view(land.api, "Create Blog")
    view.add(land.ui, land.web)
    view.add(land.web, land.command)

    assert [(s.order, s.source_id, s.destination_id) for s in view.steps] == [
        (1, land.ui.id, land.web.id),
        (2, land.web.id, land.command.id),
    ]


def test_dynamic_view_allows_repeated_pairs(land: Landscape) -> None:
    view = ViewSet(land.model).create_dynamic_view(land.api, "Polling")
    view.add(land.query, land.events)
    view.add(land.query, land.events)

    assert len(view.steps) == 2
    assert [s.order for s in view.steps] == [1, 2]
    assert view.element_ids == {land.query.id, land.events.id}


def test_dynamic_step_follows_model_relationship(land: Landscape) -> None:
    view = ViewSet(land.model).create_dynamic_view(land.api, "Create Project")
    step = view.add(land.web, land.command)
    relationship = land.model.relationships_between(land.web, land.command)[0]

    assert step.relationship_id == relationship.id
    assert step.description == "Sends commands"
    assert view.relationship_ids == {relationship.id}


def test_dynamic_step_prefers_relationship_matching_description(land: Landscape) -> None:
    second = land.model.add_relationship(land.api, land.db, "Writes projections", "SQL")
    view = ViewSet(land.model).create_dynamic_view(land.api, "Write")
    step = view.add(land.api, land.db, "Writes projections")
    assert step.relationship_id == second.id


def test_dynamic_step_without_relationship(land: Landscape) -> None:
    """Dynamic views are explicit: a step need not follow a modeled relationship."""
    view = ViewSet(land.model).create_dynamic_view(land.api, "Adhoc")
    step = view.add(land.db, land.user, "Notifies")
    assert step.relationship_id is None
    assert step.description == "Notifies"


def test_dynamic_view_rejects_unknown_elements(land: Landscape) -> None:
    view = ViewSet(land.model).create_dynamic_view(land.api, "Broken")
    stranger = Element(id="999", kind=ElementKind.COMPONENT, name="Ghost")
    with pytest.raises(UnknownElementError):
        view.add(land.web, stranger)
    assert view.steps == []


def test_dynamic_step_rejects_mismatched_relationship(land: Landscape) -> None:
    view = ViewSet(land.model).create_dynamic_view(land.api, "Mismatch")
    wrong = land.model.relationships_between(land.web, land.query)[0]
    with pytest.raises(InvalidViewElementError):
        view.add(land.web, land.command, relationship=wrong)
