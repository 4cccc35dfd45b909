"""Test utilities for the panbridge test suite.

This module provides an in-memory pandoc engine with canned extension
lists and sample pandoc JSON documents shared by the unit tests.
"""

from __future__ import annotations

import copy
from typing import Any, Sequence

from panbridge.ast import PandocAst
from panbridge.engine import PandocEngine

# Trimmed-down versions of `pandoc --list-extensions=<dialect>` output
MARKDOWN_EXTENSIONS = """+auto_identifiers
+backtick_code_blocks
-emoji
+footnotes
-hard_line_breaks
+pipe_tables
+raw_html
+smart
-task_lists
+yaml_metadata_block
"""

GFM_EXTENSIONS = """+autolink_bare_uris
+emoji
+gfm_auto_identifiers
-hard_line_breaks
+pipe_tables
+raw_html
-smart
+strikeout
+task_lists
"""

COMMONMARK_EXTENSIONS = """-emoji
-hard_line_breaks
+raw_html
-smart
"""

STRICT_EXTENSIONS = """+raw_html
-smart
"""

DIALECT_EXTENSIONS = {
    "markdown": MARKDOWN_EXTENSIONS,
    "markdown_phpextra": "+footnotes\n+pipe_tables\n+raw_html\n-smart\n",
    "markdown_github": "+autolink_bare_uris\n+pipe_tables\n+raw_html\n-smart\n",
    "markdown_mmd": "+footnotes\n+mmd_title_block\n+pipe_tables\n-smart\n",
    "markdown_strict": STRICT_EXTENSIONS,
    "gfm": GFM_EXTENSIONS,
    "commonmark": COMMONMARK_EXTENSIONS,
}


class FakePandocEngine(PandocEngine):
    """In-memory engine returning canned extension lists.

    Every call is recorded in ``calls`` as ``(operation, argument)``.
    Set ``error`` to make every call raise it.
    """

    def __init__(self, extensions: dict[str, str] | None = None, error: Exception | None = None) -> None:
        self.extensions = DIALECT_EXTENSIONS if extensions is None else extensions
        self.error = error
        self.calls: list[tuple[str, Any]] = []

    async def list_extensions(self, format: str) -> str:
        self.calls.append(("list_extensions", format))
        if self.error is not None:
            raise self.error
        return self.extensions[format]

    async def markdown_to_ast(self, markdown: str, format: str, options: Sequence[str]) -> PandocAst:
        self.calls.append(("markdown_to_ast", format))
        if self.error is not None:
            raise self.error
        return PandocAst.from_dict(copy.deepcopy(SAMPLE_DOCUMENT))

    async def ast_to_markdown(self, ast: PandocAst, format: str, options: Sequence[str]) -> str:
        self.calls.append(("ast_to_markdown", format))
        if self.error is not None:
            raise self.error
        return "# Sample\n"


# pandoc -f markdown -t json for:
#
#   ---
#   title: My *Great* Doc
#   ---
#   # Intro
#
#   Hello **bold** [link](http://example.com).
SAMPLE_DOCUMENT: dict[str, Any] = {
    "pandoc-api-version": [1, 23, 1],
    "meta": {
        "title": {
            "t": "MetaInlines",
            "c": [
                {"t": "Str", "c": "My"},
                {"t": "Space"},
                {"t": "Emph", "c": [{"t": "Str", "c": "Great"}]},
                {"t": "Space"},
                {"t": "Str", "c": "Doc"},
            ],
        }
    },
    "blocks": [
        {"t": "Header", "c": [1, ["intro", [], []], [{"t": "Str", "c": "Intro"}]]},
        {
            "t": "Para",
            "c": [
                {"t": "Str", "c": "Hello"},
                {"t": "Space"},
                {"t": "Strong", "c": [{"t": "Str", "c": "bold"}]},
                {"t": "Space"},
                {
                    "t": "Link",
                    "c": [["", [], []], [{"t": "Str", "c": "link"}], ["http://example.com", ""]],
                },
                {"t": "Str", "c": "."},
            ],
        },
    ],
}
