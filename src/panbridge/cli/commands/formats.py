#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Format negotiation commands for the panbridge CLI.

This module implements ``resolve`` (negotiate a format request and show
the result), ``extensions`` (print pandoc's extension list for a dialect)
and ``format-with`` (insert toggles into a format string). Output is plain
text by default, JSON with ``--json`` and a formatted table with
``--rich``.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

from panbridge.cli.exit_codes import EXIT_SUCCESS
from panbridge.constants import KNOWN_EXTENSIONS
from panbridge.engine.base import PandocEngine
from panbridge.formats import ResolvedFormat, format_with, resolve_format


def add_format_commands(subparsers: Any) -> None:
    """Register the format negotiation subcommands.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        Subparser collection of the main parser

    """
    resolve_parser = subparsers.add_parser(
        "resolve", help="Resolve a format request such as 'markdown+footnotes-smart'"
    )
    resolve_parser.add_argument("format", help="Format request (base name followed by +ext/-ext toggles)")
    output_group = resolve_parser.add_mutually_exclusive_group()
    output_group.add_argument("--json", action="store_true", help="Print the resolved format as JSON")
    output_group.add_argument("--rich", action="store_true", help="Use rich terminal output with formatting")
    resolve_parser.set_defaults(handler=handle_resolve_command, needs_engine=True)

    extensions_parser = subparsers.add_parser("extensions", help="List the extensions pandoc reports for a dialect")
    extensions_parser.add_argument("dialect", help="Base dialect name (e.g. 'gfm')")
    extensions_parser.set_defaults(handler=handle_extensions_command, needs_engine=True)

    with_parser = subparsers.add_parser(
        "format-with",
        help="Insert extension toggles into a format string",
        description="Toggles that start with '-' must be passed as --prepend=-name / --append=-name.",
    )
    with_parser.add_argument("format", help="Existing format string")
    with_parser.add_argument("--prepend", default="", help="Toggles inserted after the base name")
    with_parser.add_argument("--append", default="", help="Toggles appended after the existing options")
    with_parser.set_defaults(handler=handle_format_with_command, needs_engine=False)


def _print_warnings(resolved: ResolvedFormat) -> None:
    """Report negotiation warnings on stderr."""
    if resolved.warnings.invalid_format:
        print(
            f"Warning: unsupported format '{resolved.warnings.invalid_format}', using '{resolved.base_name}'",
            file=sys.stderr,
        )
    for name in resolved.warnings.invalid_options:
        print(f"Warning: extension '{name}' is not supported by '{resolved.base_name}'", file=sys.stderr)


def _render_plain(resolved: ResolvedFormat) -> None:
    enabled = resolved.enabled_extensions()
    print(f"Format: {resolved.full_name}")
    print(f"Base: {resolved.base_name}")
    print(f"Enabled extensions ({len(enabled)}): {', '.join(enabled) or 'none'}")


def _render_rich(resolved: ResolvedFormat) -> None:
    """Render a resolved format using Rich.

    Parameters
    ----------
    resolved : ResolvedFormat
        Format to display

    """
    from rich.console import Console
    from rich.panel import Panel
    from rich.table import Table

    console = Console()

    content = [
        f"[bold]Format:[/bold] {resolved.full_name}",
        f"[bold]Base:[/bold] {resolved.base_name}",
    ]
    if resolved.warnings.invalid_format:
        content.append(f"[yellow]Unsupported format:[/yellow] {resolved.warnings.invalid_format}")
    if resolved.warnings.invalid_options:
        content.append(f"[yellow]Unsupported extensions:[/yellow] {', '.join(resolved.warnings.invalid_options)}")
    console.print(Panel("\n".join(content), title="Resolved Format"))

    table = Table(title="Extensions")
    table.add_column("Extension", style="cyan")
    table.add_column("Status", style="magenta")
    known = set(KNOWN_EXTENSIONS)
    for name in sorted(resolved.extensions):
        status = "[green]enabled[/green]" if resolved.extensions[name] else "[dim]disabled[/dim]"
        label = name if name in known else f"{name} [yellow](new)[/yellow]"
        table.add_row(label, status)
    console.print(table)


async def handle_resolve_command(parsed_args: argparse.Namespace, engine: PandocEngine) -> int:
    """Resolve a format request and print the result."""
    resolved = await resolve_format(engine, parsed_args.format)

    if parsed_args.json:
        print(resolved.to_json(indent=2))
        return EXIT_SUCCESS

    if parsed_args.rich:
        _render_rich(resolved)
    else:
        _print_warnings(resolved)
        _render_plain(resolved)
    return EXIT_SUCCESS


async def handle_extensions_command(parsed_args: argparse.Namespace, engine: PandocEngine) -> int:
    """Print pandoc's extension list for a dialect."""
    output = await engine.list_extensions(parsed_args.dialect)
    print(output.rstrip("\n"))
    return EXIT_SUCCESS


async def handle_format_with_command(parsed_args: argparse.Namespace, engine: PandocEngine | None = None) -> int:
    """Print a format string with toggles inserted."""
    print(format_with(parsed_args.format, parsed_args.prepend, parsed_args.append))
    return EXIT_SUCCESS
