#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the panbridge CLI.

Settings are layered: a configuration file discovered near the working
directory (or in the home directory) supplies defaults, and a file named
with ``--config`` or ``PANBRIDGE_CONFIG`` is merged over it. Command-line
flags are applied last by :func:`panbridge.cli.build_engine_options`.

Recognised keys
---------------
pandoc_path : str
    Executable used to launch pandoc
timeout : float
    Seconds allowed for a single pandoc invocation
extra_args : list of str
    Extra arguments passed to every pandoc conversion
log_level : str
    Default logging level name

Examples
--------
A ``.panbridge.toml`` in a project directory::

    pandoc_path = "/opt/pandoc-3/bin/pandoc"
    timeout = 30
    extra_args = ["--wrap=none"]

"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from panbridge.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION

logger = logging.getLogger(__name__)

PYPROJECT_FILENAME = "pyproject.toml"


def _read_toml(path: Path) -> Any:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _read_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


# suffix -> (reader, format label, decode error type)
_READERS: Dict[str, tuple[Callable[[Path], Any], str, type[Exception]]] = {
    ".toml": (_read_toml, "TOML", tomllib.TOMLDecodeError),
    ".json": (_read_json, "JSON", json.JSONDecodeError),
    ".yaml": (_read_yaml, "YAML", yaml.YAMLError),
    ".yml": (_read_yaml, "YAML", yaml.YAMLError),
}


def _parse(path: Path) -> Any:
    """Decode a config file, converting every failure to ArgumentTypeError."""
    suffix = path.suffix.lower()
    if suffix not in _READERS:
        raise argparse.ArgumentTypeError(
            f"Unsupported config file format: {suffix}. Use .json, .toml, or .yaml"
        )
    reader, label, decode_error = _READERS[suffix]
    try:
        return reader(path)
    except decode_error as e:
        raise argparse.ArgumentTypeError(f"Invalid {label} in config file {path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {path}: {e}") from e


def _pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.panbridge]`` table of a pyproject.toml (empty if absent).

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be parsed or the section is not a table

    """
    section = _parse(pyproject_path).get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(section).__name__}"
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Each directory from ``start_dir`` up to the filesystem root is checked
    for the ``.panbridge.*`` dotfiles, then for a ``pyproject.toml`` with a
    non-empty ``[tool.panbridge]`` table. Unparsable pyproject files are
    skipped.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    directory = (start_dir or Path.cwd()).resolve()

    for current in (directory, *directory.parents):
        for filename in CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                return candidate

        pyproject = current / PYPROJECT_FILENAME
        if pyproject.is_file():
            try:
                if _pyproject_section(pyproject):
                    return pyproject
            except argparse.ArgumentTypeError as e:
                logger.debug("Skipping %s: %s", pyproject, e)

    return None


def discover_config_file() -> Optional[Path]:
    """Discover a configuration file near the working directory or in the home directory."""
    found = find_config_in_parents()
    if found:
        return found

    home = Path.home()
    return next((home / name for name in CONFIG_FILENAMES if (home / name).is_file()), None)


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has an unsupported format

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    if config_path.name.lower() == PYPROJECT_FILENAME:
        return _pyproject_section(config_path)

    config = _parse(config_path)
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {config_path} must contain a mapping at root level, got {type(config).__name__}"
        )
    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries with deep merging.

    The override dictionary takes precedence over base for conflicting keys.
    Nested dictionaries are merged recursively, not replaced entirely.

    Parameters
    ----------
    base : dict
        Base configuration dictionary
    override : dict
        Override configuration dictionary (higher priority)

    Returns
    -------
    dict
        Merged configuration dictionary

    Examples
    --------
    >>> merge_configs({"pandoc_path": "pandoc", "timeout": 5}, {"timeout": 30})
    {'pandoc_path': 'pandoc', 'timeout': 30}

    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load the layered CLI configuration.

    The auto-discovered file provides defaults. The file named by
    ``--config`` (or, failing that, by ``PANBRIDGE_CONFIG``) is merged over
    it, so a project file only needs the keys it changes.

    Parameters
    ----------
    explicit_path : str, optional
        Explicit config file path from --config flag
    env_var_path : str, optional
        Config file path from the PANBRIDGE_CONFIG environment variable

    Returns
    -------
    dict
        Merged configuration (empty dict if no file was found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a named or discovered config file cannot be loaded

    """
    config: Dict[str, Any] = {}

    discovered = discover_config_file()
    selected = explicit_path or env_var_path

    if discovered and not (selected and Path(selected).resolve() == discovered.resolve()):
        logger.debug("Loading discovered configuration %s", discovered)
        config = load_config_file(discovered)

    if selected:
        logger.debug("Loading configuration %s", selected)
        config = merge_configs(config, load_config_file(selected))

    return config
