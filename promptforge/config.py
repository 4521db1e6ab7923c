"""PromptForge engine configuration.

Typed configuration for the prompt engine. Settings use a Pydantic v2 model
so they are validated at construction time and can be serialised to/from
JSON or read from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool | None:
    """Read a boolean environment variable, returning ``None`` when unset."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip().lower() in _TRUE_VALUES


class EngineConfig(BaseModel):
    """Configuration for a ``PromptEngineManager``.

    Instances are typically created once by the caller (or by the CLI entry
    point) and passed to the manager, which hands the relevant parts to the
    template loader and compiler.
    """

    base_url: Optional[str] = Field(
        default=None, description="Remote template catalog root; remote loading is skipped when unset"
    )
    api_key: Optional[str] = Field(
        default=None, description="Bearer token sent to the remote catalog"
    )
    version: str = Field(default="1.0.0")
    cache_enabled: bool = Field(default=True, description="Cache compiled prompts by argument hash")
    fallback_mode: bool = Field(
        default=True,
        description="Keep running on builtin templates when remote loading fails",
    )
    timeout: int = Field(default=30, ge=1, description="Per-request timeout in seconds")

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "EngineConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build an ``EngineConfig`` from environment variables.

        Recognised variables (all optional):
            PROMPTFORGE_BASE_URL, PROMPTFORGE_API_KEY,
            PROMPTFORGE_CACHE_ENABLED, PROMPTFORGE_FALLBACK_MODE,
            PROMPTFORGE_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("PROMPTFORGE_BASE_URL"):
            kwargs["base_url"] = os.environ["PROMPTFORGE_BASE_URL"]
        if os.environ.get("PROMPTFORGE_API_KEY"):
            kwargs["api_key"] = os.environ["PROMPTFORGE_API_KEY"]
        if os.environ.get("PROMPTFORGE_TIMEOUT"):
            kwargs["timeout"] = int(os.environ["PROMPTFORGE_TIMEOUT"])

        cache_enabled = _env_flag("PROMPTFORGE_CACHE_ENABLED")
        if cache_enabled is not None:
            kwargs["cache_enabled"] = cache_enabled
        fallback_mode = _env_flag("PROMPTFORGE_FALLBACK_MODE")
        if fallback_mode is not None:
            kwargs["fallback_mode"] = fallback_mode

        return cls(**kwargs)
