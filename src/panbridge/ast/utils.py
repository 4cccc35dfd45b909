#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/panbridge/ast/utils.py
"""Generic traversal utilities for pandoc token trees.

These functions are the shared substrate of every reader and writer: they
walk a token tree without knowing anything about individual token shapes.

Functions
---------
collect_text : Flatten tokens into plain text, ignoring formatting
for_each_token : Visit every token depth-first in document order
map_tokens : Rebuild a token tree with a per-token transform applied
find_tokens : Collect every token with a given tag

A payload is walked as follows: a :class:`Token` is visited, a list is
walked element by element, and anything else (strings, numbers, attribute
dictionaries) is opaque.

Examples
--------
Extract image alt text:

    >>> alt = [Token("Str", "A"), Token("Space"), Token("Emph", [Token("Str", "cat")])]
    >>> collect_text(alt)
    'A cat'

Upgrade every level-2 header to level 1:

    >>> def promote(tok):
    ...     if tok.t == "Header" and tok.c[0] == 2:
    ...         return Token("Header", [1, *tok.c[1:]])
    ...     return tok
    >>> blocks = map_tokens(blocks, promote)

"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Iterable

from panbridge.ast.tokens import Token, TokenType

TokenVisitFn = Callable[[Token], None]
TokenTransformFn = Callable[[Token], Token]


def collect_text(tokens: Iterable[Any]) -> str:
    """Collect the plain text of a token sequence.

    ``Str`` tokens contribute their text and ``Space`` tokens a single
    space. Any other token contributes the text of its payload, so marks
    such as ``Emph`` or ``Strong`` are dropped but their content is kept.
    No separators are inserted.

    Parameters
    ----------
    tokens : iterable
        Tokens (typically inline content)

    Returns
    -------
    str
        Concatenated text

    """
    return "".join(_value_text(value) for value in tokens)


def _value_text(value: Any) -> str:
    if isinstance(value, Token):
        if value.t == TokenType.Str.value:
            return value.c if isinstance(value.c, str) else ""
        if value.t == TokenType.Space.value:
            return " "
        if value.c is not None:
            return _value_text(value.c)
        return ""
    if isinstance(value, list):
        return collect_text(value)
    return ""


def for_each_token(tokens: Iterable[Any], visit: TokenVisitFn) -> None:
    """Call ``visit`` on every token reachable from ``tokens``.

    Traversal is depth-first pre-order: a token is visited before the
    tokens in its payload, and siblings are visited in document order.
    Every token is visited exactly once.

    Parameters
    ----------
    tokens : iterable
        Root tokens
    visit : callable
        Called with each token; its return value is ignored

    """
    for value in tokens:
        _visit_value(value, visit)


def _visit_value(value: Any, visit: TokenVisitFn) -> None:
    if isinstance(value, Token):
        visit(value)
        _visit_value(value.c, visit)
    elif isinstance(value, list):
        for item in value:
            _visit_value(item, visit)


def map_tokens(tokens: Iterable[Any], transform: TokenTransformFn) -> list[Any]:
    """Rebuild a token tree with ``transform`` applied to every token.

    Each token is passed to ``transform`` first; if the returned token has a
    payload containing tokens, that payload is rebuilt the same way. The
    transform therefore sees parents before children, and sees the children
    of the token it returned rather than those of the token it received.

    The input tree is left untouched: tokens whose payload is rebuilt are
    copies. ``transform`` may return the token it was given.

    Parameters
    ----------
    tokens : iterable
        Root tokens
    transform : callable
        Maps a token to its replacement

    Returns
    -------
    list
        New top-level sequence

    """
    return [_map_value(value, transform) for value in tokens]


def _map_value(value: Any, transform: TokenTransformFn) -> Any:
    if isinstance(value, Token):
        return _map_token(value, transform)
    if isinstance(value, list):
        return [_map_value(item, transform) for item in value]
    return value


def _map_token(token: Token, transform: TokenTransformFn) -> Token:
    mapped = transform(token)
    if isinstance(mapped.c, (list, Token)):
        return replace(mapped, c=_map_value(mapped.c, transform))
    return mapped


def find_tokens(tokens: Iterable[Any], token_type: TokenType | str) -> list[Token]:
    """Return every token with the given tag, in document order.

    Parameters
    ----------
    tokens : iterable
        Root tokens
    token_type : TokenType or str
        Tag to look for

    Returns
    -------
    list of Token
        Matching tokens (nested matches included)

    """
    found: list[Token] = []

    def _collect(tok: Token) -> None:
        if tok.is_type(token_type):
            found.append(tok)

    for_each_token(tokens, _collect)
    return found


__all__ = [
    "TokenTransformFn",
    "TokenVisitFn",
    "collect_text",
    "find_tokens",
    "for_each_token",
    "map_tokens",
]
