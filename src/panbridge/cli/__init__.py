#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for panbridge.

Usage::

    panbridge resolve markdown+footnotes-smart
    panbridge resolve gfm --rich
    panbridge extensions commonmark
    panbridge format-with markdown+footnotes --prepend=+smart --append=-raw_html
    panbridge text document.json
    panbridge title document.json

Engine settings come from (highest priority first) command-line flags,
the ``PANBRIDGE_PANDOC`` environment variable, and a configuration file
(see :mod:`panbridge.cli.config`).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Any

from panbridge import __version__
from panbridge.cli.commands import add_format_commands, add_token_commands
from panbridge.cli.config import load_config_with_priority
from panbridge.cli.exit_codes import (
    EXIT_ENGINE_ERROR,
    EXIT_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from panbridge.constants import CONFIG_ENV_VAR, DEFAULT_LOG_LEVEL, PANDOC_PATH_ENV_VAR
from panbridge.engine import PandocProcessEngine
from panbridge.exceptions import EngineError, MalformedAstError, PanbridgeError
from panbridge.logging_utils import configure_logging
from panbridge.options import EngineOptions

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands registered.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="panbridge",
        description="Negotiate pandoc markdown formats and inspect pandoc ASTs.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Configuration file (.toml, .yaml, .json or pyproject.toml)")
    parser.add_argument("--no-config", action="store_true", help="Ignore configuration files")
    parser.add_argument("--pandoc", dest="pandoc_path", help="pandoc executable to run")
    parser.add_argument("--timeout", type=float, help="Seconds allowed for each pandoc invocation")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")

    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True
    add_format_commands(subparsers)
    add_token_commands(subparsers)
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace, config: dict[str, Any]) -> None:
    """Set up logging; --trace wins over --log-level, which wins over the config file."""
    if parsed_args.trace:
        log_level: int | str = logging.DEBUG
    else:
        log_level = parsed_args.log_level or config.get("log_level") or DEFAULT_LOG_LEVEL

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def build_engine_options(parsed_args: argparse.Namespace, config: dict[str, Any]) -> EngineOptions:
    """Combine config file values, environment and flags into engine options.

    Raises
    ------
    ValueError
        If a value is invalid (e.g. a non-positive timeout)

    """
    options = EngineOptions.from_mapping(config)

    env_pandoc = os.environ.get(PANDOC_PATH_ENV_VAR)
    if env_pandoc:
        options = options.create_updated(pandoc_path=env_pandoc)
    if parsed_args.pandoc_path:
        options = options.create_updated(pandoc_path=parsed_args.pandoc_path)
    if parsed_args.timeout is not None:
        options = options.create_updated(timeout=parsed_args.timeout)
    return options


def main(args: list[str] | None = None) -> int:
    """Run the panbridge CLI.

    Parameters
    ----------
    args : list of str, optional
        Arguments to parse instead of ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    config: dict[str, Any] = {}
    if not parsed_args.no_config:
        try:
            config = load_config_with_priority(
                explicit_path=parsed_args.config, env_var_path=os.environ.get(CONFIG_ENV_VAR)
            )
        except argparse.ArgumentTypeError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_VALIDATION_ERROR

    _setup_logging_level(parsed_args, config)

    try:
        options = build_engine_options(parsed_args, config)
    except (TypeError, ValueError) as e:
        print(f"Error: invalid engine configuration: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    engine = PandocProcessEngine(options) if parsed_args.needs_engine else None
    logger.debug("Running command '%s' with %s", parsed_args.command, options)

    try:
        return asyncio.run(parsed_args.handler(parsed_args, engine))
    except EngineError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_ENGINE_ERROR
    except MalformedAstError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except OSError as e:
        print(f"Error: cannot read input: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except PanbridgeError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_ERROR


__all__ = ["EXIT_SUCCESS", "build_engine_options", "create_parser", "main"]
