"""Exceptions raised by the PromptForge template engine."""

from __future__ import annotations


class PromptEngineError(Exception):
    """Base class for every template engine failure."""


class TemplateNotFoundError(PromptEngineError):
    """Raised when a template id is not registered in the store."""

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"Template not found: {template_id}")


class MissingRequiredVariableError(PromptEngineError):
    """Raised when a required template variable is absent or ``None``."""

    def __init__(self, name: str, template_id: str = "") -> None:
        self.name = name
        self.template_id = template_id
        where = f" (template {template_id})" if template_id else ""
        super().__init__(f"Required variable missing: {name}{where}")


class TemplateValidationError(PromptEngineError):
    """Raised when a template definition is structurally invalid.

    ``field`` names the first missing or malformed field.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class TemplateSyntaxError(TemplateValidationError):
    """Raised when template content is not well-formed in the template grammar."""

    def __init__(self, message: str, position: int = -1) -> None:
        self.position = position
        where = f" at offset {position}" if position >= 0 else ""
        super().__init__("content", f"{message}{where}")


class RemoteUnavailableError(PromptEngineError):
    """Raised when the remote template catalog cannot be used."""

    def __init__(self, message: str, url: str | None = None) -> None:
        self.url = url
        super().__init__(message)


class TemplateLoadError(PromptEngineError):
    """Raised when a local template resource is unreachable or malformed."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"Failed to load template from {source}: {message}")
