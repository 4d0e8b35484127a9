# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Merge of a locally built workspace with the workspace stored remotely.

Local structural content (elements, relationships, tags, view membership,
styles) always wins. The remote workspace only contributes presentation
data the local build does not express: element positions and relationship
vertices in views that exist on both sides. Elements are matched by
canonical name and relationships by endpoints and description, because ids
are reassigned on every run.
"""

from __future__ import annotations

import copy

from loguru import logger

from archsync.model.registry import Model
from archsync.workspace.workspace import Workspace

# ###############
# Public Interface
# ###############

RelationshipKey = tuple[str, str, str, int]


def merge(remote: Workspace | None, local: Workspace) -> Workspace:
    """Return a copy of *local* enriched with the layout found in *remote*.

    Neither argument is modified. A ``None`` remote yields a plain copy.
    """
    merged = copy.deepcopy(local)
    if remote is None:
        return merged

    remote_names = {e.id: remote.model.canonical_name(e) for e in remote.model.elements}
    local_ids = {merged.model.canonical_name(e): e.id for e in merged.model.elements}
    remote_keys = relationship_keys(remote.model)
    local_rel_ids = {key: rid for rid, key in relationship_keys(merged.model).items()}

    restored = 0
    for view in merged.views.views:
        remote_view = remote.views.get_view(view.key)
        if remote_view is None or remote_view.view_type is not view.view_type:
            continue

        included = view.element_ids
        for remote_id, position in remote_view.positions.items():
            local_id = local_ids.get(remote_names.get(remote_id, ""))
            if local_id is None or local_id not in included:
                continue
            element = merged.model.get_element(local_id)
            if view.position_of(element) is None:
                view.set_position(element, position.x, position.y)
                restored += 1

        shown = view.relationship_ids
        local_vertices = view.vertices
        for remote_rid, points in remote_view.vertices.items():
            key = remote_keys.get(remote_rid)
            local_rid = local_rel_ids.get(key) if key is not None else None
            if local_rid is None or local_rid not in shown or local_rid in local_vertices:
                continue
            view.set_vertices(merged.model.get_relationship(local_rid), [(p.x, p.y) for p in points])
            restored += 1

    logger.debug("Merged remote layout into workspace '{}' ({} item(s) restored)", local.name, restored)
    return merged


def relationship_keys(model: Model) -> dict[str, RelationshipKey]:
    """Map relationship ids to keys that are stable across runs.

    A key is ``(source canonical name, destination canonical name,
    description, occurrence)``; the occurrence counter tells apart
    relationships that agree on the first three parts.
    """
    seen: dict[tuple[str, str, str], int] = {}
    keys: dict[str, RelationshipKey] = {}
    for relationship in model.relationships:
        base = (
            model.canonical_name(model.get_element(relationship.source_id)),
            model.canonical_name(model.get_element(relationship.destination_id)),
            relationship.description or "",
        )
        occurrence = seen.get(base, 0)
        seen[base] = occurrence + 1
        keys[relationship.id] = (*base, occurrence)
    return keys
