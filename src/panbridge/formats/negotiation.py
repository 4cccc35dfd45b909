#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/panbridge/formats/negotiation.py
"""Negotiation of pandoc markdown formats and their extensions.

A format request names a base dialect followed by extension toggles, e.g.
``markdown+footnotes-smart`` or ``gfm-emoji``. Resolving a request asks the
engine which extensions the dialect understands and produces a
:class:`ResolvedFormat` holding:

- the validated base dialect (``markdown`` when the request named an
  unsupported one),
- the full format name rebuilt from the toggles that validated,
- the complete extension map for the dialect with the toggles applied,
- warnings describing anything that was dropped.

Unknown formats and unknown extensions are reported as warnings, never
raised. Engine failures propagate to the caller unchanged.

Examples
--------
Resolve a request against a running pandoc:

    >>> from panbridge.engine import PandocProcessEngine
    >>> fmt = await resolve_format(PandocProcessEngine(), "markdown+footnotes-smart")
    >>> fmt.full_name
    'markdown+footnotes-smart'
    >>> fmt.extensions["smart"]
    False

Add toggles to a format string without resolving it:

    >>> format_with("markdown+footnotes", "+x", "-y")
    'markdown+x+footnotes-y'

"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NamedTuple

from panbridge.constants import (
    DEFAULT_BASE_FORMAT,
    DELTA_BASE_FORMATS,
    EXTENSION_DISABLE_SIGN,
    EXTENSION_ENABLE_SIGN,
    SUPPORTED_BASE_FORMATS,
)
from panbridge.formats.extensions import disable_extensions, extensions_to_mapping, parse_extensions

if TYPE_CHECKING:
    from panbridge.engine.base import PandocEngine

logger = logging.getLogger(__name__)


class FormatSplit(NamedTuple):
    """A format string split into its base name and option suffix."""

    base: str
    options: str


def split_format(format: str) -> FormatSplit:
    """Split a format string at the first ``+`` or ``-``.

    Parameters
    ----------
    format : str
        Format string such as ``"markdown+footnotes-smart"``

    Returns
    -------
    FormatSplit
        ``base`` is everything before the first sign, ``options`` is the
        remainder starting with that sign (empty when there is no sign)

    Examples
    --------
    >>> split_format("gfm-emoji+smart")
    FormatSplit(base='gfm', options='-emoji+smart')
    >>> split_format("commonmark")
    FormatSplit(base='commonmark', options='')

    """
    positions = [pos for pos in (format.find(EXTENSION_ENABLE_SIGN), format.find(EXTENSION_DISABLE_SIGN)) if pos != -1]
    if not positions:
        return FormatSplit(format, "")
    split_at = min(positions)
    return FormatSplit(format[:split_at], format[split_at:])


def format_with(format: str, prepend: str, append: str) -> str:
    """Insert extension toggles around the options of a format string.

    No validation is performed; the result is meant to be passed to
    :func:`resolve_format` or straight to the engine.

    Parameters
    ----------
    format : str
        Existing format string
    prepend : str
        Toggles inserted directly after the base name
    append : str
        Toggles appended after the existing options

    Returns
    -------
    str
        ``base + prepend + options + append``

    """
    split = split_format(format)
    return f"{split.base}{prepend}{split.options}{append}"


@dataclass
class FormatWarnings:
    """Non-fatal problems found while resolving a format request.

    Parameters
    ----------
    invalid_format : str, default=""
        The requested base format when it was not supported. Empty when the
        base format was accepted.
    invalid_options : list of str, default=[]
        Names of requested extensions the dialect does not support, in the
        order they were requested

    """

    invalid_format: str = ""
    invalid_options: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        """Return True if any warning was recorded."""
        return bool(self.invalid_format or self.invalid_options)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the ``invalidFormat``/``invalidOptions`` record."""
        return {"invalidFormat": self.invalid_format, "invalidOptions": list(self.invalid_options)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FormatWarnings:
        """Build warnings from the record produced by :meth:`to_dict`."""
        return cls(
            invalid_format=data.get("invalidFormat", ""),
            invalid_options=list(data.get("invalidOptions", [])),
        )


@dataclass
class ResolvedFormat:
    """The negotiated description of a markdown dialect.

    Parameters
    ----------
    base_name : str
        Validated base dialect, always one of the supported base formats
    full_name : str
        ``base_name`` followed by every requested toggle that validated, in
        request order
    extensions : dict of str to bool
        Every extension applicable to the dialect mapped to its state. Keys
        are open ended: names unknown to this package are legal.
    warnings : FormatWarnings
        What was dropped from the request

    """

    base_name: str
    full_name: str
    extensions: dict[str, bool] = field(default_factory=dict)
    warnings: FormatWarnings = field(default_factory=FormatWarnings)

    @property
    def has_warnings(self) -> bool:
        """Whether the request was altered during negotiation."""
        return bool(self.warnings)

    def is_enabled(self, name: str) -> bool:
        """Return whether extension ``name`` is active (unknown names are not)."""
        return self.extensions.get(name, False)

    def enabled_extensions(self) -> list[str]:
        """Return the names of active extensions, sorted."""
        return sorted(name for name, enabled in self.extensions.items() if enabled)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON record exposed to callers.

        Returns
        -------
        dict
            ``{"baseName", "fullName", "extensions", "warnings"}``

        """
        return {
            "baseName": self.base_name,
            "fullName": self.full_name,
            "extensions": dict(self.extensions),
            "warnings": self.warnings.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResolvedFormat:
        """Rebuild a resolved format from :meth:`to_dict` output.

        Parameters
        ----------
        data : dict
            Record with ``baseName``, ``fullName``, ``extensions`` and
            ``warnings`` keys

        Returns
        -------
        ResolvedFormat
            The restored format

        Raises
        ------
        KeyError
            If ``baseName`` or ``fullName`` is missing

        """
        return cls(
            base_name=data["baseName"],
            full_name=data["fullName"],
            extensions={str(name): bool(enabled) for name, enabled in data.get("extensions", {}).items()},
            warnings=FormatWarnings.from_dict(data.get("warnings", {})),
        )

    def to_json(self, indent: int | None = None) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


async def resolve_format(engine: PandocEngine, request_format: str) -> ResolvedFormat:
    """Resolve a format request against the engine's extension lists.

    Parameters
    ----------
    engine : PandocEngine
        Engine queried for dialect extension lists
    request_format : str
        Requested format, ``base`` optionally followed by ``+ext``/``-ext``

    Returns
    -------
    ResolvedFormat
        The negotiated format and any warnings

    Raises
    ------
    EngineError
        Propagated unchanged from the engine; no partial result is returned

    Notes
    -----
    ``gfm`` and ``commonmark`` are described by pandoc as deltas on top of
    markdown: every markdown extension starts disabled and the dialect's own
    list is layered over it. The extension map is filled in order, so a
    later entry for the same name wins.

    """
    warnings = FormatWarnings()

    base_name, options = split_format(request_format)
    if base_name not in SUPPORTED_BASE_FORMATS:
        logger.warning("Unsupported format '%s', falling back to '%s'", base_name, DEFAULT_BASE_FORMAT)
        warnings.invalid_format = base_name
        base_name = DEFAULT_BASE_FORMAT

    valid_options = await engine.list_extensions(base_name)
    if base_name in DELTA_BASE_FORMATS:
        markdown_options = await engine.list_extensions(DEFAULT_BASE_FORMAT)
        format_options = disable_extensions(markdown_options) + valid_options
    else:
        format_options = valid_options

    extensions = extensions_to_mapping(parse_extensions(format_options))

    valid_option_names = {descriptor.name for descriptor in parse_extensions(valid_options)}
    full_name = base_name
    for descriptor in parse_extensions(options):
        if descriptor.name in valid_option_names:
            full_name += str(descriptor)
            extensions[descriptor.name] = descriptor.enabled
        else:
            logger.warning("Extension '%s' is not supported by format '%s'", descriptor.name, base_name)
            warnings.invalid_options.append(descriptor.name)

    logger.debug("Resolved format '%s' to '%s' (%d extensions)", request_format, full_name, len(extensions))
    return ResolvedFormat(base_name=base_name, full_name=full_name, extensions=extensions, warnings=warnings)


class FormatResolver:
    """Resolve format requests with results memoized per request string.

    pandoc's extension lists are fixed for a given dialect, so repeated
    requests for the same format string can reuse an earlier answer.
    Failed resolutions are not cached. Every call returns its own copy, so
    callers may modify the result freely.

    Parameters
    ----------
    engine : PandocEngine
        Engine used for cache misses

    """

    def __init__(self, engine: PandocEngine) -> None:
        self.engine = engine
        self._cache: dict[str, ResolvedFormat] = {}

    async def resolve(self, request_format: str) -> ResolvedFormat:
        """Return the resolved format for ``request_format``."""
        cached = self._cache.get(request_format)
        if cached is None:
            cached = await resolve_format(self.engine, request_format)
            self._cache[request_format] = cached
        return copy.deepcopy(cached)

    def clear(self) -> None:
        """Drop every cached result."""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


__all__ = [
    "FormatSplit",
    "FormatWarnings",
    "ResolvedFormat",
    "FormatResolver",
    "split_format",
    "format_with",
    "resolve_format",
]
