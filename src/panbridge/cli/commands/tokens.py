#  Copyright (c) 2025 Tom Villani, Ph.D.

"""AST inspection commands for the panbridge CLI.

Both commands read a document in pandoc's JSON format (as written by
``pandoc --to json``) from a file or from stdin when the path is ``-``.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from panbridge.ast import PandocAst, ast_from_json, collect_text
from panbridge.cli.exit_codes import EXIT_SUCCESS
from panbridge.engine.base import PandocEngine
from panbridge.exceptions import MalformedAstError
from panbridge.metadata import title_from_ast


def add_token_commands(subparsers: Any) -> None:
    """Register the AST inspection subcommands."""
    text_parser = subparsers.add_parser("text", help="Print the plain text of a pandoc JSON document")
    text_parser.add_argument("input", help="pandoc JSON file, or '-' for stdin")
    text_parser.set_defaults(handler=handle_text_command, needs_engine=False)

    title_parser = subparsers.add_parser("title", help="Print the title of a pandoc JSON document")
    title_parser.add_argument("input", help="pandoc JSON file, or '-' for stdin")
    title_parser.set_defaults(handler=handle_title_command, needs_engine=False)


def read_ast(source: str) -> PandocAst:
    """Read a pandoc JSON document from a path or stdin.

    Raises
    ------
    OSError
        If the file cannot be read
    MalformedAstError
        If the content is not UTF-8 text or not a pandoc document

    """
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedAstError(f"{source} is not UTF-8 encoded text: {e}", original_error=e) from e
    return ast_from_json(text)


async def handle_text_command(parsed_args: argparse.Namespace, engine: PandocEngine | None = None) -> int:
    """Print one line of plain text per top-level block."""
    ast = read_ast(parsed_args.input)
    for block in ast.blocks:
        print(collect_text([block]))
    return EXIT_SUCCESS


async def handle_title_command(parsed_args: argparse.Namespace, engine: PandocEngine | None = None) -> int:
    """Print the document title (an empty line if there is none)."""
    ast = read_ast(parsed_args.input)
    print(title_from_ast(ast))
    return EXIT_SUCCESS
