#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/panbridge/engine/base.py
"""Abstract interface to the markdown conversion engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from panbridge.ast.serialization import PandocAst


class PandocEngine(ABC):
    """Engine that converts between markdown text and pandoc's AST.

    panbridge never parses markdown itself; every conversion and every
    question about dialect capabilities goes through an engine. All
    methods are coroutines. Implementations raise
    :class:`~panbridge.exceptions.EngineError` on failure and must not
    retry internally.
    """

    @abstractmethod
    async def markdown_to_ast(self, markdown: str, format: str, options: Sequence[str]) -> PandocAst:
        """Parse markdown into a pandoc AST.

        Parameters
        ----------
        markdown : str
            Source text
        format : str
            Input format including extension toggles (e.g. a resolved
            format's ``full_name``)
        options : sequence of str
            Additional engine command line options

        Returns
        -------
        PandocAst
            Parsed document

        """
        ...

    @abstractmethod
    async def ast_to_markdown(self, ast: PandocAst, format: str, options: Sequence[str]) -> str:
        """Write a pandoc AST as markdown.

        Parameters
        ----------
        ast : PandocAst
            Document to write
        format : str
            Output format including extension toggles
        options : sequence of str
            Additional engine command line options

        Returns
        -------
        str
            Markdown text

        """
        ...

    @abstractmethod
    async def list_extensions(self, format: str) -> str:
        """Describe the extensions applicable to a dialect.

        Must be side-effect free and return the same text for the same
        dialect.

        Parameters
        ----------
        format : str
            Base dialect name

        Returns
        -------
        str
            Newline separated ``+name``/``-name`` entries; the sign gives
            the dialect's default state

        """
        ...
