#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/panbridge/options.py
"""Options controlling how panbridge talks to the pandoc engine."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from panbridge.constants import DEFAULT_ENGINE_TIMEOUT, DEFAULT_PANDOC_PATH


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class EngineOptions(CloneFrozenMixin):
    """Settings for the subprocess-backed pandoc engine.

    Parameters
    ----------
    pandoc_path : str, default="pandoc"
        Executable name or path used to launch pandoc
    timeout : float or None, default=None
        Seconds to wait for a single pandoc invocation. ``None`` waits
        indefinitely; callers that need a deadline on negotiation should
        either set this or wrap the call in ``asyncio.wait_for``.
    extra_args : tuple of str, default=()
        Additional command line arguments passed to every conversion call

    """

    pandoc_path: str = field(
        default=DEFAULT_PANDOC_PATH,
        metadata={"help": "Executable name or path used to launch pandoc"},
    )
    timeout: float | None = field(
        default=DEFAULT_ENGINE_TIMEOUT,
        metadata={"help": "Seconds to wait for a single pandoc invocation (unset waits indefinitely)"},
    )
    extra_args: tuple[str, ...] = field(
        default=(),
        metadata={"help": "Additional arguments passed to every pandoc conversion"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if not self.pandoc_path:
            raise ValueError("pandoc_path must not be empty")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        # Config files may give a single argument as a plain string
        if isinstance(self.extra_args, str):
            object.__setattr__(self, "extra_args", (self.extra_args,))
        elif isinstance(self.extra_args, list):
            object.__setattr__(self, "extra_args", tuple(self.extra_args))
        elif not isinstance(self.extra_args, tuple):
            raise ValueError(f"extra_args must be a list of strings, got {type(self.extra_args).__name__}")
        if not all(isinstance(arg, str) for arg in self.extra_args):
            raise ValueError(f"extra_args must contain only strings, got {list(self.extra_args)!r}")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> EngineOptions:
        """Build options from a configuration dictionary.

        Unknown keys are ignored so that a shared config file may carry
        settings for other parts of the tool (e.g. ``log_level``).

        Parameters
        ----------
        config : Mapping
            Loaded configuration values

        Returns
        -------
        EngineOptions
            Options with every recognised key applied

        """
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in config.items() if key in known}
        if values.get("timeout") is not None:
            values["timeout"] = float(values["timeout"])
        return cls(**values)


__all__ = ["CloneFrozenMixin", "EngineOptions"]
