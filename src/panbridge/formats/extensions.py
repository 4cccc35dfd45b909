#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/panbridge/formats/extensions.py
"""Parsing of pandoc extension descriptor strings.

pandoc describes the extensions of a dialect as a run of signed names, one
per line, for example::

    +auto_identifiers
    -ascii_identifiers
    +backtick_code_blocks

The same encoding is used for the option part of a format request
(``markdown+footnotes-smart``). This module turns such strings into
:class:`ExtensionDescriptor` sequences.

Tokens that do not match ``(+|-)name`` with ``name`` made of lowercase
letters and underscores are skipped without complaint.

"""

from __future__ import annotations

import re
from dataclasses import dataclass

from panbridge.constants import EXTENSION_DISABLE_SIGN, EXTENSION_ENABLE_SIGN

_EXTENSION_PATTERN = re.compile(r"([+-])([a-z_]+)")


@dataclass(frozen=True)
class ExtensionDescriptor:
    """A single extension toggle.

    Parameters
    ----------
    name : str
        Extension name (e.g. ``"footnotes"``)
    enabled : bool
        Whether the extension is switched on

    """

    name: str
    enabled: bool

    def __str__(self) -> str:
        """Return the signed form used in format strings."""
        sign = EXTENSION_ENABLE_SIGN if self.enabled else EXTENSION_DISABLE_SIGN
        return f"{sign}{self.name}"


def parse_extensions(text: str) -> list[ExtensionDescriptor]:
    """Parse an extension descriptor string.

    Line breaks are removed before matching, so descriptors listed one per
    line and descriptors written inline (``+a-b``) parse the same way.

    Parameters
    ----------
    text : str
        Descriptor string as produced by ``pandoc --list-extensions`` or the
        option part of a format request

    Returns
    -------
    list of ExtensionDescriptor
        Descriptors in the order they appear. Duplicates are kept.

    Examples
    --------
    >>> parse_extensions("+footnotes\\n-smart")
    [ExtensionDescriptor(name='footnotes', enabled=True), ExtensionDescriptor(name='smart', enabled=False)]

    """
    text = text.replace("\r", "").replace("\n", "")
    return [
        ExtensionDescriptor(name=match.group(2), enabled=match.group(1) == EXTENSION_ENABLE_SIGN)
        for match in _EXTENSION_PATTERN.finditer(text)
    ]


def disable_extensions(text: str) -> str:
    """Flip every enabling sign in a descriptor string to a disabling one.

    Parameters
    ----------
    text : str
        Descriptor string

    Returns
    -------
    str
        The same string with every ``+`` replaced by ``-``

    """
    return text.replace(EXTENSION_ENABLE_SIGN, EXTENSION_DISABLE_SIGN)


def extensions_to_mapping(descriptors: list[ExtensionDescriptor]) -> dict[str, bool]:
    """Fold descriptors into a name -> enabled mapping.

    A later descriptor for the same name overwrites an earlier one.

    Parameters
    ----------
    descriptors : list of ExtensionDescriptor
        Descriptors in precedence order (lowest first)

    Returns
    -------
    dict
        Mapping of extension name to enabled flag

    """
    mapping: dict[str, bool] = {}
    for descriptor in descriptors:
        mapping[descriptor.name] = descriptor.enabled
    return mapping


__all__ = [
    "ExtensionDescriptor",
    "parse_extensions",
    "disable_extensions",
    "extensions_to_mapping",
]
