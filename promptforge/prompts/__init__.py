"""PromptForge template engine.

Registers prompt templates, loads them from builtin, local and remote
sources, and compiles them into cacheable prompt strings.

Key classes:
    TemplateStore        - In-memory template registry
    TemplateLoader       - Builtin / local / remote template acquisition
    TemplateCompiler     - Template grammar rendering with a compile cache
    PromptEngineManager  - Initialization policy and convenience API
"""

from .compiler import TemplateCompiler, cache_key, ui_library_info
from .errors import (
    MissingRequiredVariableError,
    PromptEngineError,
    RemoteUnavailableError,
    TemplateLoadError,
    TemplateNotFoundError,
    TemplateSyntaxError,
    TemplateValidationError,
)
from .loader import TemplateLoader
from .manager import InitializationResult, LoadStatus, PromptEngineManager, RemoteLoadResult
from .models import (
    CompiledPrompt,
    EngineStats,
    PromptContext,
    PromptTemplate,
    RemoteTemplateInfo,
    TemplateCategory,
    TemplateMetadata,
    TemplateVariable,
    VariableType,
)
from .store import TemplateStore

__all__ = [
    # Engine
    "PromptEngineManager",
    "InitializationResult",
    "RemoteLoadResult",
    "LoadStatus",
    "TemplateStore",
    "TemplateLoader",
    "TemplateCompiler",
    "cache_key",
    "ui_library_info",
    # Models
    "PromptTemplate",
    "TemplateVariable",
    "TemplateMetadata",
    "TemplateCategory",
    "VariableType",
    "PromptContext",
    "CompiledPrompt",
    "RemoteTemplateInfo",
    "EngineStats",
    # Errors
    "PromptEngineError",
    "TemplateNotFoundError",
    "MissingRequiredVariableError",
    "TemplateValidationError",
    "TemplateSyntaxError",
    "RemoteUnavailableError",
    "TemplateLoadError",
]
