#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/panbridge/ast/__init__.py
"""pandoc AST tokens and the utilities that walk them.

The module consists of several components:

- tokens: the :class:`Token` element type and the :class:`TokenType` tags
- utils: traversal (``for_each_token``), rebuilding (``map_tokens``) and
  text flattening (``collect_text``)
- serialization: conversion to and from pandoc's JSON document format

Examples
--------
    >>> from panbridge.ast import Token, collect_text, map_tokens
    >>> inlines = [Token("Str", "Hello"), Token("Space"), Token("Strong", [Token("Str", "world")])]
    >>> collect_text(inlines)
    'Hello world'

"""

from __future__ import annotations

from panbridge.ast.serialization import PandocAst, ast_from_json, ast_to_json, tokens_from_json, tokens_to_json
from panbridge.ast.tokens import Token, TokenType, is_token
from panbridge.ast.utils import (
    TokenTransformFn,
    TokenVisitFn,
    collect_text,
    find_tokens,
    for_each_token,
    map_tokens,
)

__all__ = [
    "PandocAst",
    "Token",
    "TokenTransformFn",
    "TokenType",
    "TokenVisitFn",
    "ast_from_json",
    "ast_to_json",
    "collect_text",
    "find_tokens",
    "for_each_token",
    "is_token",
    "map_tokens",
    "tokens_from_json",
    "tokens_to_json",
]
