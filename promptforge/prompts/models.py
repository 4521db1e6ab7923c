"""Pydantic v2 models for the PromptForge template engine.

Defines the data model for prompt templates, their declared variables, the
caller-supplied compilation context, and the immutable compiled result.
Wire-facing models accept the camelCase keys used by the remote template
catalog (``defaultValue``, ``createdAt``, ``uiLibrary`` ...) as well as the
snake_case field names.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TemplateCategory(str, Enum):
    """What a template produces."""
    PROJECT_CREATION = "project-creation"
    COMPONENT_GENERATION = "component-generation"
    PAGE_LAYOUT = "page-layout"
    ANIMATION = "animation"
    STYLING = "styling"
    TESTING = "testing"
    DOCUMENTATION = "documentation"


class VariableType(str, Enum):
    """Declared type of a template variable."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


class _CamelModel(BaseModel):
    """Base for models exchanged with the template catalog."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Template definition
# ---------------------------------------------------------------------------

class TemplateVariable(_CamelModel):
    """A variable declared by a template."""
    name: str = Field(..., min_length=1, description="Variable name, unique within a template")
    type: VariableType = Field(default=VariableType.STRING, description="Declared value type")
    required: bool = Field(default=False, description="Whether a compile call must supply it")
    description: str = Field(default="", description="What the variable controls")
    default_value: Optional[Any] = Field(default=None, description="Value used when not supplied")
    options: Optional[list[Any]] = Field(default=None, description="Allowed values, for enum-like variables")


class TemplateMetadata(_CamelModel):
    """Authorship and compatibility information for a template."""
    author: str = Field(default="")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    license: str = Field(default="")
    compatibility: list[str] = Field(default_factory=list, description="e.g. 'react@18+'")
    dependencies: list[str] = Field(default_factory=list, description="Template ids this one builds on")


class PromptTemplate(_CamelModel):
    """A parameterised prompt document."""
    id: str = Field(..., min_length=1, description="Unique template identifier")
    name: str = Field(..., description="Human-readable name")
    description: str = Field(default="")
    version: str = Field(..., description="Template version, e.g. '1.0.0'")
    category: TemplateCategory = Field(..., description="What the template produces")
    tags: list[str] = Field(default_factory=list)
    variables: list[TemplateVariable] = Field(default_factory=list)
    content: str = Field(..., description="Body written in the template grammar")
    metadata: TemplateMetadata = Field(default_factory=TemplateMetadata)

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, tags: list[str]) -> list[str]:
        return list(dict.fromkeys(tags))

    @field_validator("variables")
    @classmethod
    def _unique_variable_names(cls, variables: list[TemplateVariable]) -> list[TemplateVariable]:
        seen: set[str] = set()
        for variable in variables:
            if variable.name in seen:
                raise ValueError(f"duplicate variable name: {variable.name}")
            seen.add(variable.name)
        return variables

    def get_variable(self, name: str) -> TemplateVariable | None:
        """Return the declared variable called *name*, if any."""
        for variable in self.variables:
            if variable.name == name:
                return variable
        return None

    def required_variables(self) -> list[TemplateVariable]:
        """Declared variables a compile call must supply, in declaration order."""
        return [v for v in self.variables if v.required]

    def defaults(self) -> dict[str, Any]:
        """``{name: default_value}`` for every variable that declares a default."""
        return {
            v.name: v.default_value for v in self.variables if v.default_value is not None
        }


class RemoteTemplateInfo(BaseModel):
    """An entry of the remote catalog listing (``GET /templates``)."""
    id: str
    name: str
    version: str


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------

class PromptContext(_CamelModel):
    """Caller-supplied situational data merged into every compilation."""
    project_type: str = Field(default="", description="e.g. 'react-vite'")
    ui_library: str = Field(default="", description="UI library id, e.g. 'antd'")
    framework: str = Field(default="", description="e.g. 'react'")
    features: list[str] = Field(default_factory=list, description="Ordered feature flags")
    custom_variables: dict[str, Any] = Field(default_factory=dict)


class CompiledPromptMetadata(_CamelModel):
    """Provenance of a compiled prompt."""
    model_config = ConfigDict(frozen=True)

    template_id: str
    compiled_at: datetime = Field(default_factory=_utcnow)
    context: PromptContext


class CompiledPrompt(_CamelModel):
    """The fully substituted result of compiling a template. Never mutated."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique per compile call")
    content: str = Field(..., description="Prompt text handed to the AI transport")
    variables: dict[str, Any] = Field(
        default_factory=dict, description="Snapshot of the merged context and variables"
    )
    metadata: CompiledPromptMetadata


class EngineStats(BaseModel):
    """Read-only engine introspection."""
    templates_count: int = 0
    cache_size: int = 0
    categories: list[str] = Field(default_factory=list)
