# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the workspace validation checks."""

from archsync.validation.checks import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate,
)
from archsync.workspace import Workspace

# ###############
# Test Helpers
# ###############


def _clean_workspace() -> Workspace:
    """A workspace that passes every check."""
    ws = Workspace("Clean")
    user = ws.model.add_person("User")
    system = ws.model.add_software_system("Shop")
    ws.model.add_relationship(user, system, "Uses")
    ws.views.create_system_context_view(system, "Context").add_all_elements()
    return ws


def _messages(result: ValidationResult) -> list[str]:
    return [w.message for w in result.warnings] + [e.message for e in result.errors]


# ###############
# Normal Cases
# ###############


def test_clean_workspace_has_no_findings() -> None:
    result = validate(_clean_workspace())
    assert result == ValidationResult()
    assert not result.has_errors


def test_unused_element_is_a_warning() -> None:
    ws = _clean_workspace()
    ws.model.add_software_system("Forgotten")

    result = validate(ws)

    assert result.warnings == [ValidationWarning(message="SoftwareSystem 'Forgotten' is not shown in any view.")]
    assert not result.has_errors


def test_view_scope_counts_as_shown() -> None:
    ws = _clean_workspace()
    shop = ws.model.find_element("Shop")
    api = ws.model.add_container(shop, "API")
    ws.views.create_component_view(api, "Components")

    messages = _messages(validate(ws))

    assert not any("'API' is not shown" in m for m in messages)
    assert "View 'Components' contains no elements." in messages


def test_empty_dynamic_view_is_a_warning() -> None:
    ws = _clean_workspace()
    ws.views.create_dynamic_view(ws.model.find_element("Shop"), "Scenario")
    assert "Dynamic view 'Scenario' contains no steps." in _messages(validate(ws))


def test_unstyled_custom_tag_is_a_warning() -> None:
    ws = _clean_workspace()
    shop = ws.model.find_element("Shop")
    ws.model.add_tags(shop, "Legacy", "Styled")
    ws.styles.set_element_style("Styled", color="#123456")

    messages = _messages(validate(ws))

    assert "Element tag 'Legacy' has no element style." in messages
    assert not any("'Styled'" in m for m in messages)
    # Built-in tags never produce findings.
    assert not any("'Element'" in m for m in messages)


def test_unstyled_relationship_tag_is_a_warning() -> None:
    ws = _clean_workspace()
    ws.model.add_tags(ws.model.relationships[0], "Critical")
    assert "Relationship tag 'Critical' has no relationship style." in _messages(validate(ws))


def test_untraced_dynamic_step_is_an_error() -> None:
    ws = _clean_workspace()
    user = ws.model.find_element("User")
    shop = ws.model.find_element("Shop")
    scenario = ws.views.create_dynamic_view(shop, "Scenario")
    scenario.add(user, shop)
    scenario.add(shop, user, "Sends newsletter")

    result = validate(ws)

    assert result.has_errors
    assert result.errors == [
        ValidationError(message="Step 2 of dynamic view 'Scenario' has no relationship from 'Shop' to 'User'.")
    ]
