"""In-memory template store keyed by template id."""

from __future__ import annotations

from typing import Iterable

from .models import PromptTemplate, TemplateCategory


class TemplateStore:
    """Owns every registered ``PromptTemplate``.

    Registration order is preserved, and re-registering an id replaces the
    previous definition in place (last registration wins). The store never
    touches the compile cache, so a replaced template may still be served
    from previously cached compilations until the cache is cleared.
    """

    def __init__(self, templates: Iterable[PromptTemplate] = ()) -> None:
        self._templates: dict[str, PromptTemplate] = {}
        self.register_many(templates)

    def register(self, template: PromptTemplate) -> None:
        """Insert or replace *template* by its id."""
        self._templates[template.id] = template

    def register_many(self, templates: Iterable[PromptTemplate]) -> None:
        for template in templates:
            self.register(template)

    def get(self, template_id: str) -> PromptTemplate | None:
        """Return the template registered under *template_id*, or ``None``."""
        return self._templates.get(template_id)

    def list_all(self) -> list[PromptTemplate]:
        return list(self._templates.values())

    def list_by_category(self, category: TemplateCategory | str) -> list[PromptTemplate]:
        """Templates in *category*, in insertion order.

        *category* may be the enum member or its string value; an unknown
        string simply matches nothing.
        """
        value = category.value if isinstance(category, TemplateCategory) else str(category)
        return [t for t in self._templates.values() if t.category.value == value]

    def categories(self) -> list[str]:
        """Distinct categories present, in first-seen order."""
        return list(dict.fromkeys(t.category.value for t in self._templates.values()))

    def clear(self) -> None:
        self._templates.clear()

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates
