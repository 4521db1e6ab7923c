"""Unit tests for utility functions (promptforge.utils).

Tests cover:
- parse_assignment / split_csv
- resolve_inside
- write_file_set (use tmp_path)
- Rich status lines and key/value tables
"""

from __future__ import annotations

import io
from unittest.mock import patch

import pytest
from rich.console import Console

from promptforge.utils import (
    parse_assignment,
    print_error,
    print_key_values,
    print_status,
    print_success,
    print_warning,
    resolve_inside,
    split_csv,
    write_file_set,
)


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------


class TestParseAssignment:
    @pytest.mark.unit
    def test_json_values(self):
        assert parse_assignment("animations=true") == ("animations", True)
        assert parse_assignment("count=3") == ("count", 3)
        assert parse_assignment('features=["routing","state"]') == (
            "features",
            ["routing", "state"],
        )

    @pytest.mark.unit
    def test_plain_string_value(self):
        assert parse_assignment("projectName=my app") == ("projectName", "my app")

    @pytest.mark.unit
    def test_value_may_contain_equals(self):
        assert parse_assignment("expr=a=b") == ("expr", "a=b")

    @pytest.mark.unit
    def test_empty_value(self):
        assert parse_assignment("x=") == ("x", "")

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["novalue", "=value", "  =x"])
    def test_invalid(self, text):
        with pytest.raises(ValueError, match="Expected key=value"):
            parse_assignment(text)


class TestSplitCsv:
    @pytest.mark.unit
    def test_trims_and_drops_empty(self):
        assert split_csv(" routing, ,state ,") == ["routing", "state"]

    @pytest.mark.unit
    def test_empty(self):
        assert split_csv("") == []
        assert split_csv(None) == []


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestResolveInside:
    @pytest.mark.unit
    def test_relative_path(self, tmp_path):
        assert resolve_inside(tmp_path, "src/App.tsx") == (tmp_path / "src" / "App.tsx").resolve()

    @pytest.mark.unit
    @pytest.mark.parametrize("relative", ["../escape.txt", "src/../../x", "/etc/passwd"])
    def test_rejects_escaping_paths(self, tmp_path, relative):
        with pytest.raises(ValueError, match="Refusing to write outside"):
            resolve_inside(tmp_path, relative)


class TestWriteFileSet:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_writes_files(self, tmp_path):
        out = tmp_path / "out"
        written = await write_file_set({"a.txt": "hello", "src/b.ts": "export {}"}, out)
        assert [p.name for p in written] == ["a.txt", "b.ts"]
        assert (out / "a.txt").read_text(encoding="utf-8") == "hello\n"
        assert (out / "src" / "b.ts").read_text(encoding="utf-8") == "export {}\n"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_refuses_escaping_path(self, tmp_path):
        with pytest.raises(ValueError):
            await write_file_set({"../evil.txt": "x"}, tmp_path / "out")
        assert not (tmp_path / "evil.txt").exists()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_creates_missing_output_dir(self, tmp_path):
        out = tmp_path / "deep" / "nested" / "out"
        written = await write_file_set({"a.txt": "x"}, out)
        assert out.is_dir()
        assert written == [(out / "a.txt").resolve()]


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def captured_console():
    """Swap the shared console for one that writes into a buffer."""
    buffer = io.StringIO()
    with patch("promptforge.utils.console", Console(file=buffer, width=100, color_system=None)):
        yield buffer


class TestStatusLines:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "helper, message",
        [
            (print_success, "Wrote 3 files"),
            (print_warning, "Skipping template x: bad"),
            (print_error, "Template not found: x"),
        ],
    )
    def test_helpers_print_message(self, captured_console, helper, message):
        helper(message)
        assert captured_console.getvalue().strip() == message

    @pytest.mark.unit
    def test_markup_in_message_is_literal(self, captured_console):
        print_warning("Skipping template [/weird]: [bold]bad[/bold]")
        assert captured_console.getvalue().strip() == "Skipping template [/weird]: [bold]bad[/bold]"

    @pytest.mark.unit
    def test_unknown_level_raises(self, captured_console):
        with pytest.raises(KeyError):
            print_status("debug", "nope")


class TestKeyValues:
    @pytest.mark.unit
    def test_rows_and_title_rendered(self, captured_console):
        print_key_values([("Templates", 2), ("Status", "ready")], title="Prompt engine")
        out = captured_console.getvalue()
        assert "Prompt engine" in out
        assert "Metric" in out
        assert "Templates" in out and "2" in out
        assert "ready" in out

    @pytest.mark.unit
    def test_empty_values_render_as_dash(self, captured_console):
        print_key_values([("Categories", ""), ("Status", None)], title="t")
        lines = [line for line in captured_console.getvalue().splitlines() if "Categories" in line or "Status" in line]
        assert len(lines) == 2
        assert all("-" in line for line in lines)

    @pytest.mark.unit
    def test_zero_is_not_treated_as_empty(self, captured_console):
        print_key_values([("Cached prompts", 0)], title="t")
        row = next(line for line in captured_console.getvalue().splitlines() if "Cached prompts" in line)
        assert "0" in row
