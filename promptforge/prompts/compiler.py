"""Template compilation with a content-hash keyed cache.

Resolves a template from the ``TemplateStore``, merges the caller's context
and variables with template defaults and derived UI-library fields, checks
required variables, and renders the template grammar into a
``CompiledPrompt``.
"""

from __future__ import annotations

import copy
import hashlib
import json
import uuid
from typing import Any

from . import grammar
from .errors import MissingRequiredVariableError, TemplateNotFoundError
from .models import (
    CompiledPrompt,
    CompiledPromptMetadata,
    EngineStats,
    PromptContext,
    PromptTemplate,
)
from .store import TemplateStore

# UI library id -> (display name, npm package).
UI_LIBRARIES: dict[str, tuple[str, str]] = {
    "antd": ("Ant Design", "antd"),
    "mui": ("Material-UI", "@mui/material"),
    "chakra": ("Chakra UI", "@chakra-ui/react"),
    "mantine": ("Mantine", "@mantine/core"),
    "nextui": ("NextUI", "@nextui-org/react"),
    "arco": ("Arco Design", "@arco-design/web-react"),
}


def ui_library_info(ui_library: str) -> dict[str, str]:
    """Derived template fields for *ui_library*.

    Unknown ids pass through as their own display and package name.
    """
    name, package = UI_LIBRARIES.get(ui_library, (ui_library, ui_library))
    return {"uiLibraryName": name, "uiLibraryPackage": package}


def cache_key(template_id: str, context: PromptContext, variables: dict[str, Any]) -> str:
    """Stable cache key over the compile arguments.

    The arguments are serialised to canonical JSON (sorted keys, compact
    separators) and hashed with a 64-bit BLAKE2b digest.
    """
    payload = {
        "templateId": template_id,
        "context": context.model_dump(mode="json", by_alias=True),
        "variables": variables,
    }
    canonical = json.dumps(
        payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str
    )
    digest = hashlib.blake2b(canonical.encode("utf-8"), digest_size=8).hexdigest()
    return f"cache_{digest}"


def _new_prompt_id() -> str:
    return f"prompt_{uuid.uuid4().hex}"


class TemplateCompiler:
    """Compiles registered templates into ``CompiledPrompt`` objects.

    Compiled prompts are cached for the lifetime of the compiler, keyed by
    ``cache_key(template_id, context, variables)``, until ``clear_cache()``
    is called. Registering a new version of a template does not evict
    entries compiled from the old one.
    """

    def __init__(self, store: TemplateStore, cache_enabled: bool = True) -> None:
        self.store = store
        self.cache_enabled = cache_enabled
        self._cache: dict[str, CompiledPrompt] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compile(
        self,
        template_id: str,
        context: PromptContext,
        variables: dict[str, Any] | None = None,
    ) -> CompiledPrompt:
        """Compile *template_id* against *context* and *variables*.

        Args:
            template_id: Id of a template registered in the store.
            context: Caller-supplied situational data.
            variables: Explicit template variables; these override context
                fields of the same name.

        Returns:
            A new ``CompiledPrompt``, or the cached one for identical
            arguments when caching is enabled.

        Raises:
            TemplateNotFoundError: If *template_id* is not registered.
            MissingRequiredVariableError: If a required variable is absent
                or ``None``. Raised before any substitution.
            TemplateSyntaxError: If the template content is malformed.
        """
        variables = dict(variables or {})
        key = cache_key(template_id, context, variables)
        if self.cache_enabled and key in self._cache:
            return self._cache[key]

        template = self.store.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)

        supplied = self._supplied_values(context, variables)
        self._check_required(template, supplied)

        data = {**template.defaults(), **supplied, **ui_library_info(context.ui_library)}
        content = grammar.render(template.content, data)

        compiled = CompiledPrompt(
            id=_new_prompt_id(),
            content=content,
            variables=copy.deepcopy({**context.model_dump(by_alias=True), **variables}),
            metadata=CompiledPromptMetadata(
                template_id=template_id,
                context=context.model_copy(deep=True),
            ),
        )

        if self.cache_enabled:
            self._cache[key] = compiled
        return compiled

    def clear_cache(self) -> None:
        """Drop every cached compilation."""
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def get_stats(self) -> EngineStats:
        """Template count, cache size and categories. No side effects."""
        return EngineStats(
            templates_count=len(self.store),
            cache_size=len(self._cache),
            categories=self.store.categories(),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _supplied_values(context: PromptContext, variables: dict[str, Any]) -> dict[str, Any]:
        """Context fields, then flattened custom variables, then explicit variables."""
        return {
            **context.model_dump(by_alias=True),
            **context.custom_variables,
            **variables,
        }

    @staticmethod
    def _check_required(template: PromptTemplate, supplied: dict[str, Any]) -> None:
        for variable in template.required_variables():
            if supplied.get(variable.name) is None:
                raise MissingRequiredVariableError(variable.name, template.id)
