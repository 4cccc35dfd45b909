#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/panbridge/metadata.py
"""Document title derived from YAML metadata.

Editors keep YAML front matter as raw text blocks. These helpers read and
rewrite the ``title:`` line of such blocks without reparsing the YAML, so
the rest of the block (comments, ordering, formatting) is preserved
exactly. :func:`title_from_ast` covers the case where the document has
already been through pandoc and the title lives in the AST metadata.

"""

from __future__ import annotations

import re
from typing import Iterable

from panbridge.ast.serialization import PandocAst
from panbridge.ast.tokens import Token
from panbridge.ast.utils import collect_text

_TITLE_PATTERN = re.compile(r"\ntitle:(.*)\n")
_SURROUNDING_QUOTES = re.compile(r"^[\"']|[\"']$")

YAML_DELIMITER = "---"


def extract_title(yaml_text: str) -> str:
    """Return the title declared in a YAML metadata block.

    Only a ``title:`` key at the start of a line after the first one is
    recognised, which is where it sits in a ``---`` delimited block. One
    pair of surrounding quotes is removed and ``\\"`` and ``''`` escapes are
    undone.

    Parameters
    ----------
    yaml_text : str
        Full text of the metadata block, delimiters included

    Returns
    -------
    str
        The title, or an empty string if the block has none

    Examples
    --------
    >>> extract_title('---\\ntitle: "My \\\\"Doc\\\\""\\n---')
    'My "Doc"'

    """
    match = _TITLE_PATTERN.search(yaml_text)
    if not match:
        return ""
    title = match.group(1).strip()
    title = _SURROUNDING_QUOTES.sub("", title)
    title = title.replace('\\"', '"')
    title = title.replace("''", "'")
    return title


def title_from_metadata_blocks(blocks: Iterable[str]) -> str:
    """Return the title of the first metadata block that declares one."""
    for block in blocks:
        if _TITLE_PATTERN.search(block):
            return extract_title(block)
    return ""


def _title_line(title: str) -> str:
    escaped = title.replace('"', '\\"')
    return f'\ntitle: "{escaped}"\n'


def replace_title(yaml_text: str, title: str) -> str | None:
    """Replace the title line of a metadata block.

    Parameters
    ----------
    yaml_text : str
        Full text of the metadata block
    title : str
        New title; double quotes are escaped

    Returns
    -------
    str or None
        Updated block text, or None if the block has no title line

    """
    if not _TITLE_PATTERN.search(yaml_text):
        return None
    line = _title_line(title)
    return _TITLE_PATTERN.sub(lambda _match: line, yaml_text, count=1)


def title_block(title: str) -> str:
    """Build a new metadata block containing only a title."""
    return f"{YAML_DELIMITER}{_title_line(title)}{YAML_DELIMITER}"


def title_from_ast(ast: PandocAst) -> str:
    """Return the plain text of the ``title`` entry of a document's metadata.

    Parameters
    ----------
    ast : PandocAst
        Document produced by the engine

    Returns
    -------
    str
        Title text with formatting removed, or an empty string

    """
    value = ast.meta.get("title")
    if not isinstance(value, Token):
        return ""
    if value.t == "MetaString":
        return value.c if isinstance(value.c, str) else ""
    return collect_text([value])


__all__ = [
    "extract_title",
    "replace_title",
    "title_block",
    "title_from_ast",
    "title_from_metadata_blocks",
]
