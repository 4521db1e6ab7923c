"""Template acquisition from builtin, local and remote sources.

The loader never registers anything itself: it returns validated
``PromptTemplate`` objects and leaves registration to the caller (normally
``PromptEngineManager``). Remote access goes through ``httpx.AsyncClient``
against a catalog exposing::

    GET {base_url}/templates        -> [{"id", "name", "version"}, ...]
    GET {base_url}/templates/{id}   -> template JSON

Typical usage::

    loader = TemplateLoader(base_url="https://templates.example.com", api_key="...")
    for info in await loader.load_remote_list():
        template = await loader.load_remote(info.id)
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import quote

import httpx
import yaml
from pydantic import ValidationError

from ..utils import print_warning
from . import grammar
from .builtin import builtin_templates
from .errors import (
    RemoteUnavailableError,
    TemplateLoadError,
    TemplateValidationError,
)
from .models import PromptTemplate, RemoteTemplateInfo

# Checked in this order so the first missing field is the one reported.
REQUIRED_FIELDS = ("id", "name", "version", "category", "content", "variables", "metadata")

_YAML_SUFFIXES = {".yaml", ".yml"}


def _decode_document(text: str, source: str) -> Any:
    """Parse a template document as YAML or JSON depending on *source*."""
    if Path(source.split("?", 1)[0]).suffix.lower() in _YAML_SUFFIXES:
        return yaml.safe_load(text)
    return json.loads(text)


class TemplateLoader:
    """Loads ``PromptTemplate`` definitions from the various sources.

    Args:
        base_url: Root of the remote template catalog. Remote calls fail
            with ``RemoteUnavailableError`` while this is empty.
        api_key: Optional bearer token for the catalog.
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, base_url: str = "", api_key: str | None = None, timeout: int = 30) -> None:
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def set_base_url(self, base_url: str) -> None:
        self.base_url = (base_url or "").rstrip("/")

    def set_api_key(self, api_key: str | None) -> None:
        self.api_key = api_key

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self, base_url: str = "") -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with *base_url* and our timeout."""
        return httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _get_remote_json(self, path: str) -> Any:
        """GET ``{base_url}{path}`` and decode the JSON body.

        Raises:
            RemoteUnavailableError: On missing base URL, transport failure,
                non-2xx status, or a body that is not JSON.
        """
        if not self.base_url:
            raise RemoteUnavailableError("Base URL not configured for remote loading")

        url = f"{self.base_url}{path}"
        try:
            async with self._client(self.base_url) as client:
                response = await client.get(path, headers=self._headers())
                response.raise_for_status()
                return response.json()
        except httpx.ConnectError as exc:
            raise RemoteUnavailableError(f"Cannot connect to template catalog at {url}", url) from exc
        except httpx.TimeoutException as exc:
            raise RemoteUnavailableError(
                f"Request to {url} timed out after {self.timeout}s", url
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise RemoteUnavailableError(
                f"Template catalog returned HTTP {exc.response.status_code} for {url}", url
            ) from exc
        except httpx.HTTPError as exc:
            raise RemoteUnavailableError(f"Request to {url} failed: {exc}", url) from exc
        except ValueError as exc:
            raise RemoteUnavailableError(f"Template catalog returned invalid JSON for {url}", url) from exc

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def validate(candidate: Any) -> PromptTemplate:
        """Check *candidate* is a well-formed template definition.

        Required fields are checked in ``REQUIRED_FIELDS`` order, then the
        full model is validated and the content is parsed.

        Returns:
            The validated ``PromptTemplate``.

        Raises:
            TemplateValidationError: Naming the first missing or malformed field.
        """
        if isinstance(candidate, PromptTemplate):
            candidate = candidate.model_dump(by_alias=True)
        if not isinstance(candidate, Mapping):
            raise TemplateValidationError("template", "Template definition must be an object")

        for field_name in REQUIRED_FIELDS:
            if field_name not in candidate:
                raise TemplateValidationError(
                    field_name, f"Template missing required field: {field_name}"
                )
        if not isinstance(candidate["variables"], list):
            raise TemplateValidationError("variables", "Template variables must be an array")
        if not isinstance(candidate["content"], str):
            raise TemplateValidationError("content", "Template content must be a string")

        try:
            template = PromptTemplate.model_validate(dict(candidate))
        except ValidationError as exc:
            first = exc.errors()[0]
            field_name = str(first["loc"][0]) if first["loc"] else "template"
            raise TemplateValidationError(
                field_name, f"Template field '{field_name}' is invalid: {first['msg']}"
            ) from exc

        grammar.check_syntax(template.content)
        return template

    # ------------------------------------------------------------------
    # Builtin
    # ------------------------------------------------------------------

    def load_builtin(self) -> list[PromptTemplate]:
        """Return the hard-coded builtin templates. No I/O, never fails."""
        return builtin_templates()

    # ------------------------------------------------------------------
    # Local
    # ------------------------------------------------------------------

    async def load_local(self, path: str | Path) -> PromptTemplate:
        """Load one template from a local file or bundled-asset URL.

        ``.yaml``/``.yml`` documents are parsed as YAML, anything else as
        JSON. ``http://`` and ``https://`` sources are fetched with httpx.

        Raises:
            TemplateLoadError: If the resource is unreachable or malformed.
        """
        source = str(path)
        try:
            if source.startswith(("http://", "https://")):
                async with self._client() as client:
                    response = await client.get(source)
                    response.raise_for_status()
                    text = response.text
            else:
                text = await asyncio.to_thread(Path(source).read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError, httpx.HTTPError) as exc:
            raise TemplateLoadError(source, str(exc) or type(exc).__name__) from exc

        try:
            document = _decode_document(text, source)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise TemplateLoadError(source, f"not a valid template document ({exc})") from exc

        try:
            return self.validate(document)
        except TemplateValidationError as exc:
            raise TemplateLoadError(source, str(exc)) from exc

    async def load_local_many(self, paths: list[str | Path]) -> list[PromptTemplate]:
        """Load several local templates concurrently.

        Failed paths are reported as warnings and left out of the result.
        """
        results = await asyncio.gather(
            *(self.load_local(p) for p in paths), return_exceptions=True
        )
        templates: list[PromptTemplate] = []
        for path, result in zip(paths, results):
            if isinstance(result, TemplateLoadError):
                print_warning(f"Skipping template {path}: {result}")
            elif isinstance(result, BaseException):
                raise result
            else:
                templates.append(result)
        return templates

    # ------------------------------------------------------------------
    # Remote
    # ------------------------------------------------------------------

    async def load_remote_list(self) -> list[RemoteTemplateInfo]:
        """Fetch the remote catalog listing.

        Raises:
            RemoteUnavailableError: If no base URL is configured, the request
                fails, or the listing is malformed.
        """
        data = await self._get_remote_json("/templates")
        if not isinstance(data, list):
            raise RemoteUnavailableError(
                "Template catalog listing must be an array", f"{self.base_url}/templates"
            )
        try:
            return [RemoteTemplateInfo.model_validate(item) for item in data]
        except ValidationError as exc:
            raise RemoteUnavailableError(
                f"Template catalog listing is malformed: {exc.errors()[0]['msg']}",
                f"{self.base_url}/templates",
            ) from exc

    async def load_remote(self, template_id: str) -> PromptTemplate:
        """Fetch and validate one template from the remote catalog.

        Raises:
            RemoteUnavailableError: If no base URL is configured or the
                request fails.
            TemplateValidationError: If the returned definition is malformed.
        """
        data = await self._get_remote_json(f"/templates/{quote(template_id, safe='')}")
        return self.validate(data)
