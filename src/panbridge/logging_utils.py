"""Logging setup for the panbridge command line tool.

Library modules only create module-level loggers; handlers are installed
here, once, by the CLI entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from panbridge.constants import LOG_FORMAT, QUIET_LOGGERS, TRACE_DATE_FORMAT, TRACE_LOG_FORMAT


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    # getLevelName answers "Level X" for names it does not know
    return level if isinstance(level, int) else logging.INFO


def _attach(root: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root.addHandler(handler)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install the CLI's handlers on the root logger.

    Existing root handlers are replaced. Output goes to stderr so that
    command results on stdout stay machine readable, and is optionally
    copied to ``log_file``. Unless tracing, the loggers in
    ``QUIET_LOGGERS`` are held at WARNING so event loop chatter does not
    drown pandoc diagnostics at DEBUG.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name; unknown names mean INFO.
    log_file : str, optional
        File that receives a copy of the log output. If it cannot be
        opened a warning is logged and only stderr is used.
    trace_mode : bool, default False
        Include timestamps and logger names in every record.

    Returns
    -------
    logging.Logger
        The configured root logger.

    """
    level = _resolve_level(log_level)
    if trace_mode:
        formatter = logging.Formatter(TRACE_LOG_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(LOG_FORMAT)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    _attach(root, logging.StreamHandler(sys.stderr), level, formatter)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if trace_mode else max(level, logging.WARNING))

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            root.warning("Cannot write log file %s: %s", log_file, e)
        else:
            _attach(root, file_handler, level, formatter)
            root.debug("Copying log output to %s", log_file)

    return root
