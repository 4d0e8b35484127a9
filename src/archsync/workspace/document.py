# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of workspace documents.

Documents are compact JSON, the same format that is exchanged with the
remote store. The format is versioned so future schema changes can be
detected.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from archsync.errors import ArchSyncError, DocumentError
from archsync.model.elements import Element, ElementKind, InteractionStyle, Location, Relationship
from archsync.model.registry import Model
from archsync.styles.styles import ElementStyle, RelationshipStyle, Routing, Shape, Styles
from archsync.views.views import (
    DynamicView,
    ElementPosition,
    InteractionStep,
    StaticView,
    View,
    ViewSet,
    ViewType,
)
from archsync.workspace.workspace import Workspace

# ###############
# Public Interface
# ###############

DOCUMENT_FORMAT_VERSION = "1"


def encode_workspace(workspace: Workspace) -> dict[str, Any]:
    """Encode *workspace* as a JSON-compatible document."""
    d: dict[str, Any] = {
        "v": DOCUMENT_FORMAT_VERSION,
        "name": workspace.name,
        "revision": workspace.revision,
        "model": _model_to_dict(workspace.model),
        "views": [_view_to_dict(v) for v in workspace.views.views],
        "styles": _styles_to_dict(workspace.styles),
    }
    if workspace.description is not None:
        d["description"] = workspace.description
    if workspace.last_modified is not None:
        d["lastModified"] = workspace.last_modified.isoformat()
    return d


def decode_workspace(obj: dict[str, Any]) -> Workspace:
    """Decode a document produced by :func:`encode_workspace`.

    Raises:
        DocumentError: If the format version is not recognised or the
            document is malformed or violates a model invariant.
    """
    if not isinstance(obj, dict):
        raise DocumentError("A workspace document must be a JSON object")
    version = obj.get("v")
    if version != DOCUMENT_FORMAT_VERSION:
        raise DocumentError(f"Unsupported document format version: {version!r}")
    try:
        return _workspace_from_dict(obj)
    except DocumentError:
        raise
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise DocumentError(f"Malformed workspace document: {exc!r}") from exc
    except ArchSyncError as exc:
        raise DocumentError(f"Inconsistent workspace document: {exc}") from exc


def serialize(workspace: Workspace) -> str:
    """Serialize a workspace to a compact JSON string."""
    return json.dumps(encode_workspace(workspace), separators=(",", ":"))


def deserialize(data: str | bytes) -> Workspace:
    """Deserialize a workspace from a JSON string."""
    try:
        obj = json.loads(data)
    except ValueError as exc:
        raise DocumentError(f"Workspace document is not valid JSON: {exc}") from exc
    return decode_workspace(obj)


def write_workspace(workspace: Workspace, path: Path) -> None:
    """Write a workspace document to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(workspace), encoding="utf-8")


def read_workspace(path: Path) -> Workspace:
    """Read and deserialize a workspace document from *path*.

    Raises:
        DocumentError: If the file cannot be read or decoded.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentError(f"Cannot read workspace document '{path}': {exc}") from exc
    return deserialize(text)


# ################
# Implementation
# ################


def _workspace_from_dict(obj: dict[str, Any]) -> Workspace:
    model_obj = obj.get("model", {})
    model = Model.from_records(
        [_element_from_dict(e) for e in model_obj.get("elements", [])],
        [_relationship_from_dict(r) for r in model_obj.get("relationships", [])],
    )
    workspace = Workspace(
        obj["name"],
        obj.get("description"),
        model=model,
        styles=_styles_from_dict(obj.get("styles", {})),
    )
    workspace.revision = int(obj.get("revision", 0))
    if "lastModified" in obj:
        workspace.last_modified = datetime.fromisoformat(obj["lastModified"])
    for view_obj in obj.get("views", []):
        _view_from_dict(workspace.views, model, view_obj)
    return workspace


def _model_to_dict(model: Model) -> dict[str, Any]:
    return {
        "elements": [_element_to_dict(e) for e in model.elements],
        "relationships": [_relationship_to_dict(r) for r in model.relationships],
    }


def _element_to_dict(element: Element) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": element.id,
        "kind": element.kind.value,
        "name": element.name,
        "tags": list(element.tags),
    }
    if element.parent_id is not None:
        d["parent"] = element.parent_id
    if element.description is not None:
        d["description"] = element.description
    if element.technology is not None:
        d["technology"] = element.technology
    if element.url is not None:
        d["url"] = element.url
    if element.location is not Location.UNSPECIFIED:
        d["location"] = element.location.value
    return d


def _element_from_dict(obj: dict[str, Any]) -> Element:
    return Element(
        id=obj["id"],
        kind=ElementKind(obj["kind"]),
        name=obj["name"],
        description=obj.get("description"),
        technology=obj.get("technology"),
        url=obj.get("url"),
        location=Location(obj.get("location", Location.UNSPECIFIED.value)),
        tags=list(obj.get("tags", [])),
        parent_id=obj.get("parent"),
    )


def _relationship_to_dict(relationship: Relationship) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": relationship.id,
        "source": relationship.source_id,
        "destination": relationship.destination_id,
        "style": relationship.interaction_style.value,
        "tags": list(relationship.tags),
    }
    if relationship.description is not None:
        d["description"] = relationship.description
    if relationship.technology is not None:
        d["technology"] = relationship.technology
    return d


def _relationship_from_dict(obj: dict[str, Any]) -> Relationship:
    return Relationship(
        id=obj["id"],
        source_id=obj["source"],
        destination_id=obj["destination"],
        description=obj.get("description"),
        technology=obj.get("technology"),
        interaction_style=InteractionStyle(obj.get("style", InteractionStyle.SYNCHRONOUS.value)),
        tags=list(obj.get("tags", [])),
    )


def _position_to_dict(element_id: str, position: ElementPosition | None) -> dict[str, Any]:
    d: dict[str, Any] = {"id": element_id}
    if position is not None:
        d["x"] = position.x
        d["y"] = position.y
    return d


def _view_to_dict(view: View) -> dict[str, Any]:
    d: dict[str, Any] = {
        "type": view.view_type.value,
        "key": view.key,
        "scope": view.scope_id,
    }
    if view.title is not None:
        d["title"] = view.title
    if view.description is not None:
        d["description"] = view.description
    positions = view.positions
    if isinstance(view, StaticView):
        d["elements"] = [_position_to_dict(e.id, positions.get(e.id)) for e in view.elements]
    else:
        d["elements"] = [_position_to_dict(eid, pos) for eid, pos in sorted(positions.items())]
    if isinstance(view, DynamicView):
        d["steps"] = [_step_to_dict(s) for s in view.steps]
    vertices = view.vertices
    if vertices:
        d["vertices"] = [
            {"relationship": rid, "points": [[p.x, p.y] for p in points]} for rid, points in sorted(vertices.items())
        ]
    return d


def _view_from_dict(views: ViewSet, model: Model, obj: dict[str, Any]) -> View:
    view_type = ViewType(obj["type"])
    scope = model.get_element(obj["scope"])
    key = obj["key"]
    description = obj.get("description")
    title = obj.get("title")
    view: View
    if view_type is ViewType.SYSTEM_CONTEXT:
        view = views.create_system_context_view(scope, key, description, title)
    elif view_type is ViewType.CONTAINER:
        view = views.create_container_view(scope, key, description, title)
    elif view_type is ViewType.COMPONENT:
        view = views.create_component_view(scope, key, description, title)
    else:
        view = views.create_dynamic_view(scope, key, description, title)

    if isinstance(view, DynamicView):
        steps = sorted((_step_from_dict(s) for s in obj.get("steps", [])), key=lambda s: s.order)
        for step in steps:
            view._restore_step(step)

    for entry in obj.get("elements", []):
        element = model.get_element(entry["id"])
        if isinstance(view, StaticView):
            view.add_element(element)
        if "x" in entry and "y" in entry:
            view.set_position(element, int(entry["x"]), int(entry["y"]))

    for entry in obj.get("vertices", []):
        relationship = model.get_relationship(entry["relationship"])
        view.set_vertices(relationship, [(int(x), int(y)) for x, y in entry["points"]])
    return view


def _step_to_dict(step: InteractionStep) -> dict[str, Any]:
    d: dict[str, Any] = {"order": step.order, "source": step.source_id, "destination": step.destination_id}
    if step.relationship_id is not None:
        d["relationship"] = step.relationship_id
    if step.description is not None:
        d["description"] = step.description
    return d


def _step_from_dict(obj: dict[str, Any]) -> InteractionStep:
    return InteractionStep(
        order=int(obj["order"]),
        source_id=obj["source"],
        destination_id=obj["destination"],
        relationship_id=obj.get("relationship"),
        description=obj.get("description"),
    )


def _styles_to_dict(styles: Styles) -> dict[str, Any]:
    return {
        "elements": [_element_style_to_dict(s) for s in styles.element_styles],
        "relationships": [_relationship_style_to_dict(s) for s in styles.relationship_styles],
    }


def _styles_from_dict(obj: dict[str, Any]) -> Styles:
    styles = Styles()
    for entry in obj.get("elements", []):
        shape = entry.get("shape")
        styles.set_element_style(
            entry["tag"],
            color=entry.get("color"),
            background=entry.get("background"),
            shape=Shape(shape) if shape is not None else None,
        )
    for entry in obj.get("relationships", []):
        routing = entry.get("routing")
        styles.set_relationship_style(
            entry["tag"],
            dashed=entry.get("dashed"),
            routing=Routing(routing) if routing is not None else None,
        )
    return styles


def _element_style_to_dict(style: ElementStyle) -> dict[str, Any]:
    d: dict[str, Any] = {"tag": style.tag}
    if style.color is not None:
        d["color"] = style.color
    if style.background is not None:
        d["background"] = style.background
    if style.shape is not None:
        d["shape"] = style.shape.value
    return d


def _relationship_style_to_dict(style: RelationshipStyle) -> dict[str, Any]:
    d: dict[str, Any] = {"tag": style.tag}
    if style.dashed is not None:
        d["dashed"] = style.dashed
    if style.routing is not None:
        d["routing"] = style.routing.value
    return d
