#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/panbridge/engine/process.py
"""pandoc engine backed by a local pandoc executable.

Every call launches one pandoc process through asyncio, feeds it the input
on stdin and reads the result from stdout. Calls share no state and can run
concurrently.

Examples
--------
    >>> engine = PandocProcessEngine(EngineOptions(timeout=30))
    >>> await engine.list_extensions("gfm")
    '+autolink_bare_uris\\n+emoji\\n...'

"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Sequence

from panbridge.ast.serialization import PandocAst, ast_from_json, ast_to_json
from panbridge.constants import PANDOC_JSON_FORMAT, PANDOC_TEXT_ENCODING
from panbridge.engine.base import PandocEngine
from panbridge.exceptions import EngineError, EngineNotFoundError, EngineTimeoutError, MalformedAstError
from panbridge.options import EngineOptions

logger = logging.getLogger(__name__)


class PandocProcessEngine(PandocEngine):
    """Run pandoc as a subprocess for each engine call.

    Parameters
    ----------
    options : EngineOptions, optional
        Executable path, timeout and extra arguments. Defaults to
        ``EngineOptions()``.

    """

    def __init__(self, options: EngineOptions | None = None) -> None:
        self.options = options or EngineOptions()

    async def markdown_to_ast(self, markdown: str, format: str, options: Sequence[str]) -> PandocAst:
        """Parse markdown with ``pandoc --from <format> --to json``."""
        args = ["--from", format, "--to", PANDOC_JSON_FORMAT, *self.options.extra_args, *options]
        output = await self._run(args, operation="markdown_to_ast", input_text=markdown)
        try:
            return ast_from_json(output)
        except MalformedAstError as e:
            raise EngineError(
                f"pandoc returned an invalid AST: {e.message}", operation="markdown_to_ast", original_error=e
            ) from e

    async def ast_to_markdown(self, ast: PandocAst, format: str, options: Sequence[str]) -> str:
        """Write markdown with ``pandoc --from json --to <format>``."""
        args = ["--from", PANDOC_JSON_FORMAT, "--to", format, *self.options.extra_args, *options]
        return await self._run(args, operation="ast_to_markdown", input_text=ast_to_json(ast))

    async def list_extensions(self, format: str) -> str:
        """Return the output of ``pandoc --list-extensions=<format>``."""
        return await self._run([f"--list-extensions={format}"], operation="list_extensions")

    async def version(self) -> str:
        """Return the first line of ``pandoc --version`` (e.g. ``"pandoc 3.1.9"``)."""
        output = await self._run(["--version"], operation="version")
        return output.splitlines()[0].strip() if output else ""

    async def _run(self, args: list[str], operation: str, input_text: str | None = None) -> str:
        """Run pandoc and return its decoded standard output.

        Raises
        ------
        EngineNotFoundError
            If the executable cannot be found
        EngineTimeoutError
            If the configured timeout elapses; the process is killed
        EngineError
            If the process cannot be started, exits non-zero, or writes
            output that is not valid text

        """
        command = [self.options.pandoc_path, *args]
        logger.debug("Running %s", " ".join(command))

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE if input_text is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise EngineNotFoundError(self.options.pandoc_path, operation=operation, original_error=e) from e
        except OSError as e:
            raise EngineError(f"Could not start pandoc: {e}", operation=operation, original_error=e) from e

        stdin_data = input_text.encode(PANDOC_TEXT_ENCODING) if input_text is not None else None
        try:
            if self.options.timeout is None:
                stdout, stderr = await process.communicate(stdin_data)
            else:
                stdout, stderr = await asyncio.wait_for(process.communicate(stdin_data), self.options.timeout)
        except asyncio.TimeoutError:
            await _kill(process)
            logger.warning("pandoc %s timed out after %s seconds", operation, self.options.timeout)
            raise EngineTimeoutError(self.options.timeout, operation=operation) from None
        except asyncio.CancelledError:
            # Cancelled by the caller; pandoc must not outlive the call
            await _kill(process)
            raise

        error_text = stderr.decode(PANDOC_TEXT_ENCODING, errors="replace").strip() if stderr else ""
        if process.returncode != 0:
            raise EngineError(
                f"pandoc {operation} failed with exit code {process.returncode}: {error_text}",
                operation=operation,
                returncode=process.returncode,
                stderr=error_text,
            )
        if error_text:
            logger.debug("pandoc %s: %s", operation, error_text)

        try:
            return stdout.decode(PANDOC_TEXT_ENCODING)
        except UnicodeDecodeError as e:
            raise EngineError(
                f"pandoc {operation} produced output that is not {PANDOC_TEXT_ENCODING}",
                operation=operation,
                original_error=e,
            ) from e


async def _kill(process: asyncio.subprocess.Process) -> None:
    """Kill a pandoc process that is still running and reap it."""
    if process.returncode is None:
        with contextlib.suppress(ProcessLookupError):
            process.kill()
    await process.wait()
