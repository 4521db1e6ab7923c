"""Recovers generated files from an AI backend's raw text reply.

Models encode several files in one reply in one of two ways. The
delimiter form is what the builtin prompts ask for::

    ===FILE: src/App.tsx===
    export default function App() { ... }

Replies that ignore the instruction usually fall back to fenced code blocks
whose first line names the file::

    ```tsx
    // src/App.tsx
    export default function App() { ... }
    ```

The delimiter grammar is tried first; fenced blocks are only considered
when it finds nothing. Parsing never raises: an empty result is the
caller's signal that the reply could not be used.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

GeneratedFileSet = dict[str, str]

# ``===FILE: path===`` (spaces allowed) then a newline; content runs to the
# next marker at the start of a line, or to the end of the text.
_FILE_MARKER_RE = re.compile(
    r"===[ \t]*FILE:[ \t]*(?P<path>[^\n]*?)[ \t]*===[ \t]*\r?\n"
    r"(?P<content>.*?)"
    r"(?=^===[ \t]*FILE:|\Z)",
    re.DOTALL | re.MULTILINE,
)

# A fence with an optional language tag, a ``// path`` comment (on the fence
# line or the first body line), then the body up to the closing fence.
# Blocks without the comment still match, with no path, so the scan stays
# aligned on fence pairs.
_FENCED_BLOCK_RE = re.compile(
    r"```(?P<lang>[\w+#.-]*)[ \t]*"
    r"(?://[ \t]*(?P<inline_path>[^\n`]+?)[ \t]*|[^\n`]*)\r?\n"
    r"(?:[ \t]*//[ \t]*(?P<path>[^\n]+?)[ \t]*\r?\n)?"
    r"(?P<content>.*?)```",
    re.DOTALL,
)


class ExtractionGrammar(str, Enum):
    """Which encoding a reply was recognised as."""
    FILE_MARKER = "file-marker"
    FENCED_BLOCK = "fenced-block"
    NONE = "none"


@dataclass
class ExtractionResult:
    """Files recovered from a reply, plus the grammar that produced them."""

    files: GeneratedFileSet = field(default_factory=dict)
    grammar: ExtractionGrammar = ExtractionGrammar.NONE

    @property
    def success(self) -> bool:
        return bool(self.files)

    def summary(self) -> str:
        """Return a human-readable summary of the result."""
        if not self.files:
            return "No files could be parsed from the generated output"
        lines = [f"Parsed {len(self.files)} files ({self.grammar.value})"]
        for path, content in self.files.items():
            lines.append(f"  - {path} ({len(content)} chars)")
        return "\n".join(lines)


def _collect(pairs: Iterator[tuple[str | None, str | None]]) -> GeneratedFileSet:
    """Trim each ``(path, content)`` pair and keep the non-empty ones.

    Later pairs overwrite earlier ones with the same path.
    """
    files: GeneratedFileSet = {}
    for path, content in pairs:
        path = (path or "").strip()
        content = (content or "").strip()
        if path and content:
            files[path] = content
    return files


def _parse_file_markers(text: str) -> GeneratedFileSet:
    return _collect(
        (m.group("path"), m.group("content")) for m in _FILE_MARKER_RE.finditer(text)
    )


def _parse_fenced_blocks(text: str) -> GeneratedFileSet:
    # TODO: confirm with product whether unnamed blocks should become
    # anonymous files; they are dropped for now.
    return _collect(
        (m.group("inline_path") or m.group("path"), m.group("content"))
        for m in _FENCED_BLOCK_RE.finditer(text)
    )


def parse_generated_output(raw_text: object) -> ExtractionResult:
    """Parse *raw_text* with the delimiter grammar, then fenced blocks.

    Non-string input is treated as empty.
    """
    if not isinstance(raw_text, str) or not raw_text.strip():
        return ExtractionResult()

    files = _parse_file_markers(raw_text)
    if files:
        return ExtractionResult(files=files, grammar=ExtractionGrammar.FILE_MARKER)

    files = _parse_fenced_blocks(raw_text)
    if files:
        return ExtractionResult(files=files, grammar=ExtractionGrammar.FENCED_BLOCK)

    return ExtractionResult()


def extract_files(raw_text: object) -> GeneratedFileSet:
    """Map relative file path -> content for every file found in *raw_text*.

    Never raises; returns an empty dict when nothing could be parsed.
    """
    return parse_generated_output(raw_text).files
