#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/panbridge/ast/tokens.py
"""Token types for pandoc's document tree.

pandoc's JSON AST is a tree of tagged values: every element carries a type
tag ``t`` and an optional payload ``c``. The payload may be a nested
element, a list mixing elements and plain values (attributes, URLs,
levels), or a primitive such as the text of a ``Str``.

In panbridge every element is a :class:`Token`. Anything that is not a
``Token`` is opaque payload.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TokenType(str, Enum):
    """Tag names used by pandoc's AST."""

    Str = "Str"
    Space = "Space"
    Strong = "Strong"
    Emph = "Emph"
    Code = "Code"
    Superscript = "Superscript"
    Subscript = "Subscript"
    Strikeout = "Strikeout"
    SmallCaps = "SmallCaps"
    Quoted = "Quoted"
    RawInline = "RawInline"
    RawBlock = "RawBlock"
    LineBlock = "LineBlock"
    Para = "Para"
    Plain = "Plain"
    Header = "Header"
    CodeBlock = "CodeBlock"
    BlockQuote = "BlockQuote"
    BulletList = "BulletList"
    OrderedList = "OrderedList"
    DefinitionList = "DefinitionList"
    Image = "Image"
    Link = "Link"
    Note = "Note"
    Cite = "Cite"
    Table = "Table"
    AlignRight = "AlignRight"
    AlignLeft = "AlignLeft"
    AlignDefault = "AlignDefault"
    AlignCenter = "AlignCenter"
    HorizontalRule = "HorizontalRule"
    LineBreak = "LineBreak"
    SoftBreak = "SoftBreak"
    Math = "Math"
    InlineMath = "InlineMath"
    DisplayMath = "DisplayMath"
    Div = "Div"
    Span = "Span"
    Null = "Null"


@dataclass
class Token:
    """One element of a pandoc AST.

    Parameters
    ----------
    t : str
        Type tag (see :class:`TokenType`). Tags outside the enumeration are
        allowed since pandoc's AST grows over time.
    c : Any, default=None
        Payload. ``None`` means the element has no payload (e.g. ``Space``).

    Examples
    --------
    >>> Token(TokenType.Str, "hello")
    Token(t='Str', c='hello')
    >>> Token("Space").has_payload
    False

    """

    t: str
    c: Any = None

    def __post_init__(self) -> None:
        # Store plain strings so tokens compare equal to ones built from JSON
        if isinstance(self.t, TokenType):
            self.t = self.t.value

    @property
    def has_payload(self) -> bool:
        """Whether the token carries a payload."""
        return self.c is not None

    @property
    def has_children(self) -> bool:
        """Whether the payload is a list that may contain nested tokens."""
        return isinstance(self.c, list)

    def is_type(self, token_type: TokenType | str) -> bool:
        """Return True if this token has the given tag."""
        tag = token_type.value if isinstance(token_type, TokenType) else token_type
        return self.t == tag


def is_token(value: Any) -> bool:
    """Return True if ``value`` is an AST element rather than opaque payload."""
    return isinstance(value, Token)


__all__ = ["Token", "TokenType", "is_token"]
