# topmark:header:start
#
#   project      : CartSniff
#   file         : loaders.py
#   file_relpath : src/cartsniff/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources and extract typed values.

Parsing is done with `tomlkit` and returned as plain `dict` structures. The
getters validate the expected shape: a value of the wrong type is logged as a
warning and treated as absent, so a typo in a config file never changes the
defaulting behavior.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeAlias, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from cartsniff.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from cartsniff.config.logging import CartsniffLogger

logger: CartsniffLogger = get_logger(__name__)

TomlTable: TypeAlias = dict[str, Any]


class ConfigLoadError(ValueError):
    """Raised when a configuration file cannot be read or is not valid TOML.

    Attributes:
        path (Path): The offending file.
    """

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid configuration file {path}: {reason}")
        self.path = path


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``cartsniff.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigLoadError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigLoadError(path, str(e)) from e
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        raise ConfigLoadError(path, str(e)) from e

    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def get_table(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table ``key`` of ``table`` (an empty dict if absent or not a table)."""
    value: Any = table.get(key)
    if value is None:
        return {}
    if isinstance(value, dict):
        return cast("TomlTable", value)
    logger.warning("Ignoring [%s]: expected a table, got %s", key, type(value).__name__)
    return {}


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Extract an optional boolean value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        bool | None: The value, or ``None`` when absent or not a boolean.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    logger.warning("Ignoring '%s' = %r: expected a boolean", key, value)
    return None


def get_int_value_or_none(table: TomlTable, key: str, *, minimum: int = 0) -> int | None:
    """Extract an optional integer value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        minimum (int): Smallest accepted value.

    Returns:
        int | None: The value, or ``None`` when absent, not an integer, or below ``minimum``.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    # bool is an int subclass; `true` is not a size
    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning("Ignoring '%s' = %r: expected an integer", key, value)
        return None
    if value < minimum:
        logger.warning("Ignoring '%s' = %d: must be >= %d", key, value, minimum)
        return None
    return value


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        str | None: The value, or ``None`` when absent or not a string.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    logger.warning("Ignoring '%s' = %r: expected a string", key, value)
    return None
