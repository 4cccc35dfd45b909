#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Subcommands of the panbridge CLI."""

from panbridge.cli.commands.formats import (
    add_format_commands,
    handle_extensions_command,
    handle_format_with_command,
    handle_resolve_command,
)
from panbridge.cli.commands.tokens import add_token_commands, handle_text_command, handle_title_command, read_ast

__all__ = [
    "add_format_commands",
    "add_token_commands",
    "handle_extensions_command",
    "handle_format_with_command",
    "handle_resolve_command",
    "handle_text_command",
    "handle_title_command",
    "read_ast",
]
