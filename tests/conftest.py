"""Shared pytest fixtures for the PromptForge test suite.

Provides reusable fixtures for:
- Sample template definitions (raw catalog JSON and validated models)
- Pre-populated template stores and compilers
- Mocked ``httpx.AsyncClient`` instances for loader tests
- Sample AI replies in both extraction grammars
"""

from __future__ import annotations

import textwrap
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from promptforge.prompts.compiler import TemplateCompiler
from promptforge.prompts.models import PromptContext, PromptTemplate
from promptforge.prompts.store import TemplateStore


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

SAMPLE_CONTENT = textwrap.dedent("""\
    Create {{projectName}} with {{uiLibraryName}}.{{#if animations}}
    Use Framer Motion.{{/if}}{{#if features.includes 'routing'}}
    Add react-router.{{/if}}
    Package: {{uiLibraryPackage}}
    """)


@pytest.fixture
def sample_template_data() -> dict[str, Any]:
    """A template definition as served by the remote catalog (camelCase keys)."""
    return {
        "id": "sample-project",
        "name": "Sample project",
        "description": "A small project-creation template",
        "version": "1.2.0",
        "category": "project-creation",
        "tags": ["react", "sample", "react"],
        "variables": [
            {
                "name": "projectName",
                "type": "string",
                "required": True,
                "description": "Project name",
            },
            {
                "name": "animations",
                "type": "boolean",
                "required": False,
                "description": "Include animations",
                "defaultValue": False,
            },
        ],
        "content": SAMPLE_CONTENT,
        "metadata": {
            "author": "tests",
            "createdAt": "2024-05-01T10:00:00Z",
            "updatedAt": "2024-05-02T10:00:00Z",
            "license": "MIT",
            "compatibility": ["react@18+"],
            "dependencies": [],
        },
    }


@pytest.fixture
def sample_template(sample_template_data: dict[str, Any]) -> PromptTemplate:
    return PromptTemplate.model_validate(sample_template_data)


@pytest.fixture
def make_template() -> Callable[..., PromptTemplate]:
    """Factory for minimal templates with a given id, content and variables."""

    def _make(
        template_id: str = "t",
        content: str = "",
        variables: list[dict[str, Any]] | None = None,
        category: str = "project-creation",
    ) -> PromptTemplate:
        return PromptTemplate.model_validate(
            {
                "id": template_id,
                "name": template_id.title(),
                "version": "1.0.0",
                "category": category,
                "content": content,
                "variables": variables or [],
            }
        )

    return _make


@pytest.fixture
def store(sample_template: PromptTemplate) -> TemplateStore:
    return TemplateStore([sample_template])


@pytest.fixture
def compiler(store: TemplateStore) -> TemplateCompiler:
    return TemplateCompiler(store)


@pytest.fixture
def context() -> PromptContext:
    return PromptContext(
        project_type="react-vite",
        ui_library="antd",
        framework="react",
        features=["routing", "state"],
    )


# ---------------------------------------------------------------------------
# HTTP mocks
# ---------------------------------------------------------------------------


def json_response(data: Any, status_code: int = 200) -> MagicMock:
    """A MagicMock shaped like an ``httpx.Response`` carrying *data* as JSON."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = data
    response.text = str(data)
    if status_code >= 400:
        response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError(
                f"HTTP {status_code}", request=MagicMock(), response=response
            )
        )
    else:
        response.raise_for_status = MagicMock()
    return response


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    return json_response


@pytest.fixture
def mock_http_client() -> Callable[..., AsyncMock]:
    """Build an ``AsyncClient`` stand-in whose ``get`` is an ``AsyncMock``.

    Pass ``get=`` as either a return value or a ``side_effect`` callable /
    exception / list.
    """

    def _make(get: Any = None, side_effect: Any = None) -> AsyncMock:
        client = AsyncMock()
        if side_effect is not None:
            client.get = AsyncMock(side_effect=side_effect)
        else:
            client.get = AsyncMock(return_value=get)
        client.__aenter__ = AsyncMock(return_value=client)
        client.__aexit__ = AsyncMock(return_value=False)
        return client

    return _make


# ---------------------------------------------------------------------------
# AI replies
# ---------------------------------------------------------------------------


@pytest.fixture
def marker_reply() -> str:
    """A reply using the ``===FILE: path===`` delimiter grammar."""
    return textwrap.dedent("""\
        Sure! Here is your project.

        ===FILE: package.json===
        {
          "name": "shop"
        }

        ===FILE: src/App.tsx===
        export default function App() {
          return <h1>Shop</h1>
        }
        """)


@pytest.fixture
def fenced_reply() -> str:
    """A reply using fenced code blocks with filename comments."""
    return textwrap.dedent("""\
        Here are the files:

        ```tsx
        // src/App.tsx
        export default function App() {
          return null
        }
        ```

        And a helper:

        ```ts
        // src/utils/cn.ts
        export const cn = (...c: string[]) => c.join(' ')
        ```
        """)
