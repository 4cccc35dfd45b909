#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for panbridge.

This module centralizes the fixed values used across the library:

1. Type Definitions - Literal types and type aliases
2. Format Negotiation - supported dialects and the extension enumeration
3. Engine Defaults - pandoc invocation settings
4. Configuration - config file names and environment variables
5. Logging - log record formats for the command line tool
"""

from __future__ import annotations

from typing import Literal, get_args

# =============================================================================
# Type Definitions
# =============================================================================

BaseFormatName = Literal[
    "markdown",
    "markdown_phpextra",
    "markdown_github",
    "markdown_mmd",
    "markdown_strict",
    "gfm",
    "commonmark",
]

# =============================================================================
# Format Negotiation
# =============================================================================

# Dialects a format request may name; anything else falls back to DEFAULT_BASE_FORMAT
SUPPORTED_BASE_FORMATS: tuple[str, ...] = get_args(BaseFormatName)

DEFAULT_BASE_FORMAT = "markdown"

# Dialects whose extensions are expressed as deltas over a fully disabled markdown set
DELTA_BASE_FORMATS: frozenset[str] = frozenset({"gfm", "commonmark"})

EXTENSION_ENABLE_SIGN = "+"
EXTENSION_DISABLE_SIGN = "-"

# Extension names pandoc reported when this list was written. Only used to
# flag unfamiliar names in CLI output: the engine may report names that are
# not listed here and they are carried through negotiation unchanged.
KNOWN_EXTENSIONS: tuple[str, ...] = (
    "abbreviations",
    "all_symbols_escapable",
    "amuse",
    "angle_brackets_escapable",
    "ascii_identifiers",
    "auto_identifiers",
    "autolink_bare_uris",
    "backtick_code_blocks",
    "blank_before_blockquote",
    "blank_before_header",
    "bracketed_spans",
    "citations",
    "compact_definition_lists",
    "definition_lists",
    "east_asian_line_breaks",
    "emoji",
    "empty_paragraphs",
    "epub_html_exts",
    "escaped_line_breaks",
    "example_lists",
    "fancy_lists",
    "fenced_code_attributes",
    "fenced_code_blocks",
    "fenced_divs",
    "footnotes",
    "four_space_rule",
    "gfm_auto_identifiers",
    "grid_tables",
    "gutenberg",
    "hard_line_breaks",
    "header_attributes",
    "ignore_line_breaks",
    "implicit_figures",
    "implicit_header_references",
    "inline_code_attributes",
    "inline_notes",
    "intraword_underscores",
    "latex_macros",
    "line_blocks",
    "link_attributes",
    "lists_without_preceding_blankline",
    "literate_haskell",
    "markdown_attribute",
    "markdown_in_html_blocks",
    "mmd_header_identifiers",
    "mmd_link_attributes",
    "mmd_title_block",
    "multiline_tables",
    "native_divs",
    "native_numbering",
    "native_spans",
    "ntb",
    "old_dashes",
    "pandoc_title_block",
    "pipe_tables",
    "raw_attribute",
    "raw_html",
    "raw_tex",
    "shortcut_reference_links",
    "simple_tables",
    "smart",
    "space_in_atx_header",
    "spaced_reference_links",
    "startnum",
    "strikeout",
    "styles",
    "subscript",
    "superscript",
    "table_captions",
    "task_lists",
    "tex_math_dollars",
    "tex_math_double_backslash",
    "tex_math_single_backslash",
    "yaml_metadata_block",
)

# =============================================================================
# Engine Defaults
# =============================================================================

DEFAULT_PANDOC_PATH = "pandoc"
DEFAULT_ENGINE_TIMEOUT: float | None = None
PANDOC_JSON_FORMAT = "json"
PANDOC_TEXT_ENCODING = "utf-8"

# =============================================================================
# Configuration
# =============================================================================

CONFIG_ENV_VAR = "PANBRIDGE_CONFIG"
PANDOC_PATH_ENV_VAR = "PANBRIDGE_PANDOC"
CONFIG_FILENAMES: tuple[str, ...] = (".panbridge.toml", ".panbridge.yaml", ".panbridge.yml", ".panbridge.json")
PYPROJECT_TOOL_SECTION = "panbridge"
DEFAULT_LOG_LEVEL = "WARNING"

# =============================================================================
# Logging
# =============================================================================

LOG_FORMAT = "%(levelname)s: %(message)s"
TRACE_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that stay at WARNING unless --trace is given
QUIET_LOGGERS: tuple[str, ...] = ("asyncio",)
