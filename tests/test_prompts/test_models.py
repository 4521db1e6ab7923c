"""Unit tests for promptforge.prompts.models."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from promptforge.prompts.models import (
    CompiledPrompt,
    CompiledPromptMetadata,
    PromptContext,
    PromptTemplate,
    TemplateCategory,
    TemplateVariable,
    VariableType,
)


class TestTemplateVariable:
    @pytest.mark.unit
    def test_defaults(self):
        variable = TemplateVariable(name="x")
        assert variable.type == VariableType.STRING
        assert variable.required is False
        assert variable.default_value is None
        assert variable.options is None

    @pytest.mark.unit
    def test_camel_case_keys(self):
        variable = TemplateVariable.model_validate(
            {"name": "ui", "type": "string", "defaultValue": "antd", "options": ["antd", "mui"]}
        )
        assert variable.default_value == "antd"
        assert variable.options == ["antd", "mui"]

    @pytest.mark.unit
    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            TemplateVariable(name="")

    @pytest.mark.unit
    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            TemplateVariable(name="x", type="date")


class TestPromptTemplate:
    @pytest.mark.unit
    def test_from_catalog_json(self, sample_template):
        assert sample_template.id == "sample-project"
        assert sample_template.category == TemplateCategory.PROJECT_CREATION
        assert isinstance(sample_template.metadata.created_at, datetime)
        assert sample_template.metadata.compatibility == ["react@18+"]

    @pytest.mark.unit
    def test_tags_are_deduplicated_in_order(self, sample_template):
        assert sample_template.tags == ["react", "sample"]

    @pytest.mark.unit
    def test_duplicate_variable_names_rejected(self, sample_template_data):
        sample_template_data["variables"].append({"name": "projectName", "type": "string"})
        with pytest.raises(ValidationError, match="duplicate variable name"):
            PromptTemplate.model_validate(sample_template_data)

    @pytest.mark.unit
    def test_unknown_category_rejected(self, sample_template_data):
        sample_template_data["category"] = "deployment"
        with pytest.raises(ValidationError):
            PromptTemplate.model_validate(sample_template_data)

    @pytest.mark.unit
    def test_metadata_defaults(self, make_template):
        template = make_template()
        assert template.metadata.author == ""
        assert template.metadata.created_at.tzinfo is not None

    @pytest.mark.unit
    def test_get_variable(self, sample_template):
        assert sample_template.get_variable("animations").type == VariableType.BOOLEAN
        assert sample_template.get_variable("nope") is None

    @pytest.mark.unit
    def test_required_variables(self, sample_template):
        assert [v.name for v in sample_template.required_variables()] == ["projectName"]

    @pytest.mark.unit
    def test_defaults_keep_falsy_values(self, sample_template):
        assert sample_template.defaults() == {"animations": False}

    @pytest.mark.unit
    def test_dump_by_alias_uses_camel_case(self, sample_template):
        dumped = sample_template.model_dump(by_alias=True)
        assert "defaultValue" in dumped["variables"][1]
        assert "createdAt" in dumped["metadata"]


class TestPromptContext:
    @pytest.mark.unit
    def test_accepts_both_key_styles(self):
        a = PromptContext(ui_library="mui", project_type="react-vite")
        b = PromptContext.model_validate({"uiLibrary": "mui", "projectType": "react-vite"})
        assert a == b

    @pytest.mark.unit
    def test_empty_context(self):
        context = PromptContext()
        assert context.features == []
        assert context.custom_variables == {}


class TestCompiledPrompt:
    @pytest.mark.unit
    def test_is_frozen(self, context):
        prompt = CompiledPrompt(
            id="prompt_1",
            content="text",
            metadata=CompiledPromptMetadata(template_id="t", context=context),
        )
        with pytest.raises(ValidationError):
            prompt.content = "changed"
