"""panbridge - translate between pandoc's markdown AST and editable documents.

panbridge is the core shared by the readers and writers of a pandoc-backed
markdown editor. pandoc parses and writes markdown; panbridge decides which
markdown dialect and which extensions pandoc should use, and provides the
tree utilities every reader and writer walks pandoc's AST with.

Key Features
------------
- Format negotiation: resolve requests such as ``markdown+footnotes-smart``
  or ``gfm-emoji`` against pandoc's extension lists, with warnings for
  unsupported formats and extensions instead of errors
- Token tree utilities: depth-first visiting, rebuilding and plain-text
  flattening of pandoc ASTs
- An asyncio engine that drives a local pandoc executable
- Title helpers for YAML metadata blocks and AST metadata

Requirements
------------
- Python 3.10+
- pandoc on ``PATH`` for :class:`~panbridge.engine.PandocProcessEngine`

Examples
--------
Negotiate a format:

    >>> import asyncio
    >>> from panbridge import PandocProcessEngine, resolve_format
    >>> fmt = asyncio.run(resolve_format(PandocProcessEngine(), "gfm+smart"))
    >>> fmt.full_name, fmt.extensions["smart"]
    ('gfm+smart', True)

Flatten inline tokens to text:

    >>> from panbridge import Token, collect_text
    >>> collect_text([Token("Str", "Hello"), Token("Space"), Token("Str", "world")])
    'Hello world'

"""

from __future__ import annotations

from panbridge.ast import (
    PandocAst,
    Token,
    TokenType,
    ast_from_json,
    ast_to_json,
    collect_text,
    find_tokens,
    for_each_token,
    is_token,
    map_tokens,
)
from panbridge.engine import PandocEngine, PandocProcessEngine
from panbridge.exceptions import (
    EngineError,
    EngineNotFoundError,
    EngineTimeoutError,
    MalformedAstError,
    PanbridgeError,
    ValidationError,
)
from panbridge.formats import (
    ExtensionDescriptor,
    FormatResolver,
    FormatWarnings,
    ResolvedFormat,
    format_with,
    parse_extensions,
    resolve_format,
    split_format,
)
from panbridge.metadata import extract_title, replace_title, title_block, title_from_ast, title_from_metadata_blocks
from panbridge.options import EngineOptions

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Formats
    "ExtensionDescriptor",
    "FormatResolver",
    "FormatWarnings",
    "ResolvedFormat",
    "format_with",
    "parse_extensions",
    "resolve_format",
    "split_format",
    # AST
    "PandocAst",
    "Token",
    "TokenType",
    "ast_from_json",
    "ast_to_json",
    "collect_text",
    "find_tokens",
    "for_each_token",
    "is_token",
    "map_tokens",
    # Engine
    "EngineOptions",
    "PandocEngine",
    "PandocProcessEngine",
    # Metadata
    "extract_title",
    "replace_title",
    "title_block",
    "title_from_ast",
    "title_from_metadata_blocks",
    # Exceptions
    "EngineError",
    "EngineNotFoundError",
    "EngineTimeoutError",
    "MalformedAstError",
    "PanbridgeError",
    "ValidationError",
]
