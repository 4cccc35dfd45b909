#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/panbridge/ast/serialization.py
"""Conversion between pandoc's JSON AST and :class:`Token` trees.

pandoc emits documents of the form::

    {
        "pandoc-api-version": [1, 23, 1],
        "meta": {"title": {"t": "MetaInlines", "c": [...]}},
        "blocks": [{"t": "Para", "c": [{"t": "Str", "c": "Hello"}]}]
    }

Every JSON object carrying a ``t`` key becomes a :class:`Token`; objects
without one (the ``meta`` map, ``MetaMap`` payloads) stay dictionaries
whose values are converted recursively. Converting back yields JSON equal
to the input.

Examples
--------
    >>> ast = ast_from_json(pandoc_output)
    >>> ast.blocks[0].t
    'Para'
    >>> json.loads(ast_to_json(ast)) == json.loads(pandoc_output)
    True

"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from panbridge.ast.tokens import Token
from panbridge.exceptions import MalformedAstError

API_VERSION_KEY = "pandoc-api-version"


def tokens_from_json(data: Any) -> Any:
    """Convert decoded pandoc JSON into tokens.

    Parameters
    ----------
    data : Any
        Value produced by ``json.loads`` (object, list or primitive)

    Returns
    -------
    Any
        The same structure with every tagged object replaced by a Token

    Raises
    ------
    MalformedAstError
        If an object carries a ``t`` key that is not a string

    """
    if isinstance(data, dict):
        if "t" in data:
            tag = data["t"]
            if not isinstance(tag, str):
                raise MalformedAstError(f"Token tag must be a string, got {type(tag).__name__}", parameter_value=tag)
            return Token(t=tag, c=tokens_from_json(data["c"]) if "c" in data else None)
        return {key: tokens_from_json(value) for key, value in data.items()}
    if isinstance(data, list):
        return [tokens_from_json(item) for item in data]
    return data


def tokens_to_json(value: Any) -> Any:
    """Convert tokens back into JSON-compatible data.

    Parameters
    ----------
    value : Any
        Token, list, dictionary or primitive

    Returns
    -------
    Any
        Data suitable for ``json.dumps``. Tokens without a payload are
        written without a ``c`` key.

    """
    if isinstance(value, Token):
        result: dict[str, Any] = {"t": value.t}
        if value.c is not None:
            result["c"] = tokens_to_json(value.c)
        return result
    if isinstance(value, list):
        return [tokens_to_json(item) for item in value]
    if isinstance(value, dict):
        return {key: tokens_to_json(item) for key, item in value.items()}
    return value


@dataclass
class PandocAst:
    """A complete pandoc document.

    Parameters
    ----------
    blocks : list of Token
        Top-level block tokens
    api_version : list of int, default=[]
        ``pandoc-api-version`` of the producing engine. Writing a document
        back to pandoc requires the version pandoc expects.
    meta : dict, default={}
        Document metadata; values are ``Meta*`` tokens

    """

    blocks: list[Token] = field(default_factory=list)
    api_version: list[int] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PandocAst:
        """Build a document from decoded pandoc JSON.

        Raises
        ------
        MalformedAstError
            If the data is not a pandoc document

        """
        if not isinstance(data, dict):
            raise MalformedAstError(f"pandoc document must be an object, got {type(data).__name__}")
        blocks = data.get("blocks")
        if not isinstance(blocks, list):
            raise MalformedAstError("pandoc document has no 'blocks' list", parameter_value=blocks)
        meta = data.get("meta", {})
        if not isinstance(meta, dict):
            raise MalformedAstError("pandoc document 'meta' must be an object", parameter_value=meta)
        api_version = data.get(API_VERSION_KEY, [])
        if not isinstance(api_version, list) or not all(
            isinstance(part, int) and not isinstance(part, bool) for part in api_version
        ):
            raise MalformedAstError(
                f"pandoc document '{API_VERSION_KEY}' must be a list of integers", parameter_value=api_version
            )

        converted = tokens_from_json(blocks)
        for block in converted:
            if not isinstance(block, Token):
                raise MalformedAstError("pandoc document blocks must be tagged objects", parameter_value=block)

        return cls(
            blocks=converted,
            api_version=list(api_version),
            meta=tokens_from_json(meta),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to pandoc's JSON document shape."""
        return {
            API_VERSION_KEY: list(self.api_version),
            "meta": tokens_to_json(self.meta),
            "blocks": tokens_to_json(self.blocks),
        }


def ast_from_json(json_str: str | bytes) -> PandocAst:
    """Parse pandoc JSON output into a :class:`PandocAst`.

    Parameters
    ----------
    json_str : str or bytes
        JSON document produced by ``pandoc --to json``

    Returns
    -------
    PandocAst
        Parsed document

    Raises
    ------
    MalformedAstError
        If the input is not valid JSON or not a pandoc document

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise MalformedAstError(f"Invalid pandoc JSON: {e}", original_error=e) from e
    return PandocAst.from_dict(data)


def ast_to_json(ast: PandocAst, indent: int | None = None) -> str:
    """Serialize a :class:`PandocAst` to pandoc JSON."""
    return json.dumps(ast.to_dict(), indent=indent, ensure_ascii=False)


__all__ = [
    "PandocAst",
    "ast_from_json",
    "ast_to_json",
    "tokens_from_json",
    "tokens_to_json",
]
