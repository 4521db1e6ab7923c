"""PromptForge command-line interface.

Usage::

    promptforge list
    promptforge show react-vite-base
    promptforge compile react-vite-base --ui-library antd --features routing,state \\
        --var projectName=shop --var 'projectDescription=An online shop' --var animations=true
    promptforge extract reply.txt --output-dir ./shop
    promptforge stats

Global options ``--base-url``/``--api-key`` enable the remote template
catalog (``PROMPTFORGE_BASE_URL``/``PROMPTFORGE_API_KEY`` are honoured too).
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from promptforge.config import EngineConfig
from promptforge.extraction import parse_generated_output
from promptforge.prompts import PromptContext, PromptEngineError, PromptEngineManager
from promptforge.prompts.grammar import referenced_names
from promptforge.utils import (
    console,
    parse_assignment,
    print_error,
    print_key_values,
    print_success,
    split_csv,
    write_file_set,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promptforge",
        description="PromptForge -- compile scaffold prompts and extract generated files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  promptforge list --category project-creation\n"
            "  promptforge compile react-component --ui-library mui "
            "--var componentName=LoginForm --var 'userIntent=A login form'\n"
            "  promptforge extract reply.txt -o ./generated\n"
        ),
    )
    parser.add_argument("--base-url", default=None, help="Remote template catalog URL")
    parser.add_argument("--api-key", default=None, help="Bearer token for the remote catalog")
    parser.add_argument(
        "--no-fallback", action="store_true",
        help="Fail instead of continuing on builtin templates when the remote catalog is unavailable",
    )
    parser.add_argument("--no-cache", action="store_true", help="Disable the compile cache")

    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="List available templates")
    list_cmd.add_argument("--category", default=None, help="Only show this category")

    show_cmd = sub.add_parser("show", help="Show a template's variables")
    show_cmd.add_argument("template_id")

    compile_cmd = sub.add_parser("compile", help="Compile a template into a prompt")
    compile_cmd.add_argument("template_id")
    compile_cmd.add_argument("--project-type", default="react-vite")
    compile_cmd.add_argument("--ui-library", default="antd")
    compile_cmd.add_argument("--framework", default="react")
    compile_cmd.add_argument("--features", default="", help="Comma-separated feature list")
    compile_cmd.add_argument(
        "--var", action="append", default=[], metavar="KEY=VALUE",
        help="Template variable; VALUE is parsed as JSON when possible (repeatable)",
    )
    compile_cmd.add_argument("--output", "-o", default=None, help="Write the prompt to this file")

    extract_cmd = sub.add_parser("extract", help="Extract files from a raw AI reply")
    extract_cmd.add_argument("reply", help="Reply text file, or '-' for stdin")
    extract_cmd.add_argument("--output-dir", "-o", default=None, help="Write the files here")

    sub.add_parser("stats", help="Show engine statistics")
    return parser


def _config_from_args(args: argparse.Namespace) -> EngineConfig:
    config = EngineConfig.from_env()
    updates: dict[str, object] = {}
    if args.base_url:
        updates["base_url"] = args.base_url
    if args.api_key:
        updates["api_key"] = args.api_key
    if args.no_fallback:
        updates["fallback_mode"] = False
    if args.no_cache:
        updates["cache_enabled"] = False
    return config.model_copy(update=updates)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_list(manager: PromptEngineManager, args: argparse.Namespace) -> int:
    templates = (
        manager.list_by_category(args.category) if args.category else manager.list_templates()
    )
    table = Table(title="Templates", header_style="bold cyan")
    table.add_column("Id", no_wrap=True)
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Version")
    for template in templates:
        table.add_row(template.id, template.name, template.category.value, template.version)
    console.print(table)
    return 0


def _cmd_show(manager: PromptEngineManager, args: argparse.Namespace) -> int:
    template = manager.get_template(args.template_id)
    if template is None:
        print_error(f"Template not found: {args.template_id}")
        return 1

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Variable", no_wrap=True)
    table.add_column("Type")
    table.add_column("Required")
    table.add_column("Default")
    table.add_column("Description")
    for variable in template.variables:
        table.add_row(
            variable.name,
            variable.type.value,
            "yes" if variable.required else "no",
            "" if variable.default_value is None else repr(variable.default_value),
            variable.description,
        )
    console.print(
        Panel(
            table,
            title=f"{template.name} ({template.id} v{template.version})",
            subtitle=f"references: {', '.join(referenced_names(template.content))}",
            border_style="cyan",
        )
    )
    return 0


async def _cmd_compile(manager: PromptEngineManager, args: argparse.Namespace) -> int:
    variables = dict(parse_assignment(item) for item in args.var)
    context = PromptContext(
        project_type=args.project_type,
        ui_library=args.ui_library,
        framework=args.framework,
        features=split_csv(args.features),
    )
    prompt = manager.compile(args.template_id, context, variables)

    if args.output:
        target = Path(args.output)
        target.parent.mkdir(parents=True, exist_ok=True)
        await asyncio.to_thread(target.write_text, prompt.content, "utf-8")
        print_success(f"Prompt {prompt.id} written to {target}")
    else:
        console.print(prompt.content, markup=False, highlight=False, soft_wrap=True)
    return 0


async def _cmd_extract(args: argparse.Namespace) -> int:
    if args.reply == "-":
        raw = sys.stdin.read()
    else:
        raw = await asyncio.to_thread(Path(args.reply).read_text, encoding="utf-8")

    result = parse_generated_output(raw)
    if not result.success:
        print_error("Could not parse generated output: no files found")
        return 1

    console.print(result.summary(), markup=False, highlight=False)
    if args.output_dir:
        written = await write_file_set(result.files, args.output_dir)
        print_success(f"Wrote {len(written)} files to {args.output_dir}")
    return 0


def _cmd_stats(manager: PromptEngineManager) -> int:
    stats = manager.get_stats()
    print_key_values(
        [
            ("Templates", stats.templates_count),
            ("Cached prompts", stats.cache_size),
            ("Categories", ", ".join(stats.categories)),
            ("Status", manager.result.status.value if manager.result else None),
        ],
        title="Prompt engine",
    )
    return 0


async def run(args: argparse.Namespace) -> int:
    """Execute the parsed command and return the process exit code."""
    if args.command == "extract":
        return await _cmd_extract(args)

    manager = PromptEngineManager(_config_from_args(args))
    await manager.initialize()

    if args.command == "list":
        return _cmd_list(manager, args)
    if args.command == "show":
        return _cmd_show(manager, args)
    if args.command == "compile":
        return await _cmd_compile(manager, args)
    return _cmd_stats(manager)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``promptforge`` / ``python -m promptforge.cli``."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        code = asyncio.run(run(args))
    except (PromptEngineError, OSError, ValueError) as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", highlight=False)
        sys.exit(1)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
