# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tag-to-style registry consulted when views are rendered or serialized."""

from archsync.styles.styles import (
    DEFAULT_ELEMENT_STYLE,
    DEFAULT_RELATIONSHIP_STYLE,
    ElementStyle,
    RelationshipStyle,
    ResolvedElementStyle,
    ResolvedRelationshipStyle,
    Routing,
    Shape,
    Styles,
)

__all__ = [
    "DEFAULT_ELEMENT_STYLE",
    "DEFAULT_RELATIONSHIP_STYLE",
    "ElementStyle",
    "RelationshipStyle",
    "ResolvedElementStyle",
    "ResolvedRelationshipStyle",
    "Routing",
    "Shape",
    "Styles",
]
