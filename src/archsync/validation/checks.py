# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Advisory checks for assembled workspaces.

Construction already guarantees the structural invariants of the model;
these checks flag content that is valid but probably unintended, before a
workspace is uploaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from archsync.model.elements import ELEMENT_TAG, INTERACTION_TAGS, KIND_TAGS, RELATIONSHIP_TAG
from archsync.views.views import DynamicView, StaticView
from archsync.workspace.workspace import Workspace

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal finding; the workspace can still be uploaded as is.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """A finding that makes a diagram misleading and should be corrected.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running the workspace checks.

    Attributes:
        warnings: Non-fatal issues found during validation.
        errors: Issues that should be fixed before uploading.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any validation errors were found."""
        return len(self.errors) > 0


def validate(workspace: Workspace) -> ValidationResult:
    """Run all checks on *workspace*.

    Checks performed:

    1. **Unused elements** (warning): elements that appear in no view.
    2. **Empty views** (warning): static views without elements and dynamic
       views without steps.
    3. **Unstyled tags** (warning): custom tags that no style entry targets.
       Such tags fall back to the default style, which is allowed but often
       a typo.
    4. **Untraced steps** (error): dynamic view steps that do not follow any
       relationship of the model.

    Returns:
        A :class:`ValidationResult`; an empty result means nothing was found.
    """
    warnings: list[ValidationWarning] = []
    errors: list[ValidationError] = []

    warnings.extend(_check_unused_elements(workspace))
    warnings.extend(_check_empty_views(workspace))
    warnings.extend(_check_unstyled_tags(workspace))
    errors.extend(_check_untraced_steps(workspace))

    return ValidationResult(warnings=warnings, errors=errors)


# ################
# Implementation
# ################

_BUILT_IN_TAGS = frozenset({ELEMENT_TAG, RELATIONSHIP_TAG, *KIND_TAGS.values(), *INTERACTION_TAGS.values()})


def _check_unused_elements(workspace: Workspace) -> list[ValidationWarning]:
    shown: set[str] = set()
    for view in workspace.views.views:
        shown |= view.element_ids
        shown.add(view.scope_id)
    return [
        ValidationWarning(message=f"{e.kind.value} '{e.name}' is not shown in any view.")
        for e in workspace.model.elements
        if e.id not in shown
    ]


def _check_empty_views(workspace: Workspace) -> list[ValidationWarning]:
    warnings: list[ValidationWarning] = []
    for view in workspace.views.views:
        if isinstance(view, StaticView) and not view.element_ids:
            warnings.append(ValidationWarning(message=f"View '{view.key}' contains no elements."))
        elif isinstance(view, DynamicView) and not view.steps:
            warnings.append(ValidationWarning(message=f"Dynamic view '{view.key}' contains no steps."))
    return warnings


def _check_unstyled_tags(workspace: Workspace) -> list[ValidationWarning]:
    styles = workspace.styles
    element_tags: dict[str, None] = {}
    for element in workspace.model.elements:
        element_tags.update(dict.fromkeys(element.tags))
    relationship_tags: dict[str, None] = {}
    for relationship in workspace.model.relationships:
        relationship_tags.update(dict.fromkeys(relationship.tags))

    warnings = [
        ValidationWarning(message=f"Element tag '{tag}' has no element style.")
        for tag in element_tags
        if tag not in _BUILT_IN_TAGS and styles.element_style(tag) is None
    ]
    warnings += [
        ValidationWarning(message=f"Relationship tag '{tag}' has no relationship style.")
        for tag in relationship_tags
        if tag not in _BUILT_IN_TAGS and styles.relationship_style(tag) is None
    ]
    return warnings


def _check_untraced_steps(workspace: Workspace) -> list[ValidationError]:
    model = workspace.model
    errors: list[ValidationError] = []
    for view in workspace.views.dynamic_views:
        for step in view.steps:
            if step.relationship_id is None:
                source = model.get_element(step.source_id)
                destination = model.get_element(step.destination_id)
                errors.append(
                    ValidationError(
                        message=(
                            f"Step {step.order} of dynamic view '{view.key}' has no relationship "
                            f"from '{source.name}' to '{destination.name}'."
                        )
                    )
                )
    return errors
