"""Shared utility functions for PromptForge.

Provides the shared Rich console, levelled status lines, key/value tables,
and the small file-system helpers the CLI uses to materialise a generated
file set on disk.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------


def parse_assignment(text: str) -> tuple[str, Any]:
    """Split a ``key=value`` string, decoding the value as JSON when possible.

    Examples::

        parse_assignment("animations=true")       -> ("animations", True)
        parse_assignment('features=["routing"]')  -> ("features", ["routing"])
        parse_assignment("projectName=my app")    -> ("projectName", "my app")

    Raises:
        ValueError: If *text* has no ``=`` or an empty key.
    """
    key, sep, raw = text.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ValueError(f"Expected key=value, got: {text!r}")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return key, value


def split_csv(text: str | None) -> list[str]:
    """Split a comma-separated string into trimmed, non-empty items."""
    if not text:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def resolve_inside(root: str | Path, relative: str) -> Path:
    """Join *relative* onto *root*, refusing paths that escape *root*.

    Raises:
        ValueError: If *relative* is absolute or climbs out of *root*.
    """
    base = Path(root).resolve()
    candidate = (base / relative).resolve()
    if Path(relative).is_absolute() or not candidate.is_relative_to(base):
        raise ValueError(f"Refusing to write outside {base}: {relative}")
    return candidate


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


async def write_file_set(files: dict[str, str], output_dir: str | Path) -> list[Path]:
    """Write every ``path -> content`` entry under *output_dir*.

    Writes run in a worker thread so the event loop is not blocked. A
    trailing newline is appended because extraction trims contents.

    Returns:
        List of written file paths, in the order of *files*.
    """
    root = Path(output_dir)
    await asyncio.to_thread(root.mkdir, parents=True, exist_ok=True)
    root = root.resolve()
    written: list[Path] = []
    for relative, content in files.items():
        target = resolve_inside(root, relative)
        await asyncio.to_thread(_write_file, target, content + "\n")
        written.append(target)
    return written


# ---------------------------------------------------------------------------
# Rich console helpers
# ---------------------------------------------------------------------------

_STATUS_STYLES = {
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
}


def print_status(level: str, message: str) -> None:
    """Print *message* in the style for *level*; markup in it is not interpreted."""
    style = _STATUS_STYLES[level]
    console.print(f"[{style}]{escape(message)}[/{style}]", highlight=False)


def print_success(message: str) -> None:
    print_status("success", message)


def print_warning(message: str) -> None:
    print_status("warning", message)


def print_error(message: str) -> None:
    print_status("error", message)


def print_key_values(rows: Iterable[tuple[str, Any]], title: str) -> None:
    """Render *rows* as a two-column table headed *title*."""
    table = Table(title=title, header_style="bold cyan")
    table.add_column("Metric", style="dim", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for label, value in rows:
        table.add_row(label, "-" if value in (None, "") else str(value))
    console.print(table)
