"""Prompt engine orchestration.

``PromptEngineManager`` ties the store, loader and compiler together and owns
the initialization policy: builtin templates are always registered first,
then the remote catalog is loaded when a base URL is configured. With
``fallback_mode`` enabled a remote failure leaves the manager running on
the builtin set (``DEGRADED``); without it the failure propagates.

Quick usage::

    manager = await PromptEngineManager.create(EngineConfig())
    prompt = manager.compile_project_prompt("shop", "An online shop", "antd", ["routing"])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..config import EngineConfig
from ..utils import console, print_warning
from .builtin import REACT_VITE_BASE_ID
from .compiler import TemplateCompiler
from .errors import PromptEngineError, RemoteUnavailableError, TemplateValidationError
from .loader import TemplateLoader
from .models import CompiledPrompt, EngineStats, PromptContext, PromptTemplate, TemplateCategory
from .store import TemplateStore


class LoadStatus(str, Enum):
    """Outcome of a loading step."""
    READY = "ready"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass
class RemoteLoadResult:
    """Outcome of loading the remote catalog.

    ``FAILED`` means the catalog listing itself could not be fetched; failures
    of individual templates are recorded in ``failed`` and do not change the
    status.
    """

    status: LoadStatus
    loaded: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    error: PromptEngineError | None = None


@dataclass
class InitializationResult:
    """Outcome of ``PromptEngineManager.initialize()``."""

    status: LoadStatus
    builtin: list[str] = field(default_factory=list)
    remote: RemoteLoadResult | None = None

    @property
    def degraded(self) -> bool:
        """True when only the builtin templates are usable after a remote failure."""
        return self.status is LoadStatus.DEGRADED


class PromptEngineManager:
    """Caller-owned facade over the template store, loader and compiler.

    Args:
        config: Engine configuration. Defaults to ``EngineConfig()``.
        loader: Optional pre-built loader (mainly for tests).
    """

    def __init__(self, config: EngineConfig | None = None, loader: TemplateLoader | None = None) -> None:
        self.config = config or EngineConfig()
        self.store = TemplateStore()
        self.loader = loader or TemplateLoader(timeout=self.config.timeout)
        self.compiler = TemplateCompiler(self.store, cache_enabled=self.config.cache_enabled)
        self._result: InitializationResult | None = None

    @classmethod
    async def create(cls, config: EngineConfig | None = None) -> "PromptEngineManager":
        """Construct a manager and initialize it in one call."""
        manager = cls(config)
        await manager.initialize()
        return manager

    @property
    def initialized(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> InitializationResult | None:
        """The result of the last successful ``initialize()`` call."""
        return self._result

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    async def initialize(self) -> InitializationResult:
        """Register builtin templates, then remote ones if configured.

        Calling this again after a successful initialization returns the
        previous result without reloading.

        Raises:
            RemoteUnavailableError: If remote loading fails and
                ``fallback_mode`` is disabled.
        """
        if self._result is not None:
            return self._result

        builtin = self.loader.load_builtin()
        self.store.register_many(builtin)
        console.print(f"[dim]Loaded {len(builtin)} builtin templates[/dim]")
        result = InitializationResult(status=LoadStatus.READY, builtin=[t.id for t in builtin])

        if self.config.base_url:
            self.loader.set_base_url(self.config.base_url)
            if self.config.api_key:
                self.loader.set_api_key(self.config.api_key)

            remote = await self.load_remote_templates()
            result.remote = remote
            if remote.status is LoadStatus.FAILED:
                if not self.config.fallback_mode:
                    raise remote.error or RemoteUnavailableError("Remote template loading failed")
                print_warning(f"Remote templates unavailable, using builtin templates only: {remote.error}")
                result.status = LoadStatus.DEGRADED

        self._result = result
        console.print(
            f"[green]Prompt engine initialized[/green] "
            f"({len(self.store)} templates, status: {result.status.value})"
        )
        return result

    async def load_remote_templates(self) -> RemoteLoadResult:
        """Register every template from the remote catalog.

        Transport failures are captured in the returned result instead of
        being raised.
        """
        try:
            listing = await self.loader.load_remote_list()
        except RemoteUnavailableError as exc:
            return RemoteLoadResult(status=LoadStatus.FAILED, error=exc)

        console.print(f"[dim]Found {len(listing)} remote templates[/dim]")
        result = RemoteLoadResult(status=LoadStatus.READY)
        for info in listing:
            try:
                template = await self.loader.load_remote(info.id)
            except (RemoteUnavailableError, TemplateValidationError) as exc:
                print_warning(f"Failed to load remote template {info.id}: {exc}")
                result.failed[info.id] = str(exc)
                continue
            self.store.register(template)
            result.loaded.append(template.id)
        return result

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def compile(
        self,
        template_id: str,
        context: PromptContext,
        variables: dict[str, Any] | None = None,
    ) -> CompiledPrompt:
        """Compile a registered template. See ``TemplateCompiler.compile``."""
        return self.compiler.compile(template_id, context, variables)

    def compile_project_prompt(
        self,
        project_name: str,
        project_description: str,
        ui_library: str,
        features: list[str] | None = None,
        animations: bool = False,
    ) -> CompiledPrompt:
        """Compile the builtin React + Vite project-creation prompt.

        Raises:
            PromptEngineError: If the manager has not been initialized.
        """
        if not self.initialized:
            raise PromptEngineError("Prompt engine is not initialized; call initialize() first")

        features = list(features or [])
        context = PromptContext(
            project_type="react-vite",
            ui_library=ui_library,
            framework="react",
            features=features,
        )
        variables = {
            "projectName": project_name,
            "projectDescription": project_description,
            "uiLibrary": ui_library,
            "features": features,
            "animations": animations,
        }
        return self.compiler.compile(REACT_VITE_BASE_ID, context, variables)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_template(self, template_id: str) -> PromptTemplate | None:
        return self.store.get(template_id)

    def list_templates(self) -> list[PromptTemplate]:
        return self.store.list_all()

    def list_by_category(self, category: TemplateCategory | str) -> list[PromptTemplate]:
        return self.store.list_by_category(category)

    def get_stats(self) -> EngineStats:
        return self.compiler.get_stats()

    def clear_cache(self) -> None:
        self.compiler.clear_cache()

    def reset(self) -> None:
        """Drop all templates and cached prompts and mark the manager uninitialized."""
        self.store.clear()
        self.compiler.clear_cache()
        self._result = None
