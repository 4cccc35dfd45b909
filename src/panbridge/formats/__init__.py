#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/panbridge/formats/__init__.py
"""Markdown dialect and extension negotiation."""

from panbridge.formats.extensions import (
    ExtensionDescriptor,
    disable_extensions,
    extensions_to_mapping,
    parse_extensions,
)
from panbridge.formats.negotiation import (
    FormatResolver,
    FormatSplit,
    FormatWarnings,
    ResolvedFormat,
    format_with,
    resolve_format,
    split_format,
)

__all__ = [
    "ExtensionDescriptor",
    "FormatResolver",
    "FormatSplit",
    "FormatWarnings",
    "ResolvedFormat",
    "disable_extensions",
    "extensions_to_mapping",
    "format_with",
    "parse_extensions",
    "resolve_format",
    "split_format",
]
