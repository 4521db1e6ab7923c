"""Unit tests for the builtin template set."""

from __future__ import annotations

import pytest

from promptforge.prompts.builtin import REACT_COMPONENT_ID, REACT_VITE_BASE_ID, builtin_templates
from promptforge.prompts.grammar import check_syntax, referenced_names
from promptforge.prompts.models import TemplateCategory


@pytest.mark.unit
def test_ids_and_categories():
    templates = {t.id: t for t in builtin_templates()}
    assert templates[REACT_VITE_BASE_ID].category == TemplateCategory.PROJECT_CREATION
    assert templates[REACT_COMPONENT_ID].category == TemplateCategory.COMPONENT_GENERATION


@pytest.mark.unit
def test_contents_are_well_formed():
    for template in builtin_templates():
        check_syntax(template.content)


@pytest.mark.unit
def test_project_template_variables():
    template = builtin_templates()[0]
    assert [v.name for v in template.required_variables()] == [
        "projectName",
        "projectDescription",
        "uiLibrary",
    ]
    assert template.defaults() == {"features": ["routing"], "animations": False}
    assert "antd" in template.get_variable("uiLibrary").options


@pytest.mark.unit
def test_project_template_asks_for_file_markers():
    content = builtin_templates()[0].content
    assert "===FILE: package.json===" in content
    assert {"features", "animations", "uiLibraryPackage"} <= set(referenced_names(content))


@pytest.mark.unit
def test_component_template_asks_for_named_fence():
    template = builtin_templates()[1]
    assert "// src/components/{{componentName}}.tsx" in template.content
    assert template.metadata.dependencies == [REACT_VITE_BASE_ID]


@pytest.mark.unit
def test_each_call_returns_fresh_copies():
    first = builtin_templates()
    first[0].variables.clear()
    assert builtin_templates()[0].variables
