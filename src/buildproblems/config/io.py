# topmark:header:start
#
#   project      : BuildProblems
#   file         : io.py
#   file_relpath : src/buildproblems/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for BuildProblems configuration.

Parsing and rendering use `tomlkit`; parsed documents are unwrapped into plain
``dict`` structures (`TomlTable`) before the config layer reads them.

Getters come in the *checked* flavor only: they validate the expected shape and
log a **warning** (with a stable ``[section].key`` location) when a user value has
the wrong type, then fall back to the caller's default. They never raise, so a
typo in a config file degrades to defaults instead of breaking a build.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, Final, TypeGuard, TypeVar, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from buildproblems.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from buildproblems.config.logging import ProblemsLogger

logger: ProblemsLogger = get_logger(__name__)

TomlTable = dict[str, Any]

E = TypeVar("E", bound=Enum)


# --- Type guards ---


def is_toml_table(obj: object) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping."""
    return isinstance(obj, dict)


def is_any_list(obj: object) -> TypeGuard[list[Any]]:
    """Type guard for a generic list value (item types are not checked)."""
    return isinstance(obj, list)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Args:
        table (TomlTable): Parent table mapping.
        key (str): Sub-table key.

    Returns:
        TomlTable: The sub-table if present and a mapping, otherwise an empty dict.
    """
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


# --- File I/O ---


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``buildproblems.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


# --- Checked getters ---


def get_string_value_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    default: str | None = None,
) -> str | None:
    """Return a string value, warning when the value is not a `str`.

    Missing keys return ``default``; no coercion is attempted.
    """
    value: Any | None = table.get(key)
    if value is None:
        return default
    if isinstance(value, str):
        return value

    loc: Final[str] = f"{where}.{key}"
    logger.warning("Expected string in %s, got %s: %r", loc, type(value).__name__, value)
    return default


def get_bool_value_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    default: bool | None = None,
) -> bool | None:
    """Return a boolean value, warning when the value is not a `bool`.

    Integers are not coerced. Missing keys return ``default``.
    """
    value: Any | None = table.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value

    loc: Final[str] = f"{where}.{key}"
    logger.warning("Expected bool in %s, got %s: %r", loc, type(value).__name__, value)
    return default


def get_string_list_value_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
) -> list[str] | None:
    """Extract a list of strings, dropping non-string entries with a warning.

    Returns:
        list[str] | None: The string entries, or ``None`` when the key is missing
            or its value is not a list.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"

    if not is_any_list(value):
        logger.warning("Expected list in %s, got %s: %r", loc, type(value).__name__, value)
        return None

    out: list[str] = []
    for v in value:
        if isinstance(v, str):
            out.append(v)
        else:
            logger.warning("Ignoring non-string entry in %s: %r", loc, v)
    return out


def get_enum_value_checked(
    table: TomlTable,
    key: str,
    enum_cls: type[E],
    *,
    where: str,
) -> E | None:
    """Parse an enum value from its string form.

    - Missing key -> None
    - Wrong type -> warning + None
    - Unknown enum value -> warning + None
    """
    raw: Any | None = table.get(key)
    if raw is None:
        return None

    loc: Final[str] = f"{where}.{key}"
    if not isinstance(raw, str):
        logger.warning(
            "Expected string enum value in %s, got %s: %r",
            loc,
            type(raw).__name__,
            raw,
        )
        return None

    try:
        return enum_cls(raw)
    except ValueError:
        allowed: str = ", ".join(str(e.value) for e in enum_cls)
        logger.warning("Invalid value for %s: %r (allowed: %s)", loc, raw, allowed)
        return None


# --- Rendering ---


def _strip_none_for_toml(value: object) -> object:
    """Remove TOML-incompatible `None` from mappings and lists (TOML has no null)."""
    if isinstance(value, Mapping):
        out: dict[str, object] = {}
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        for k_any, v_any in m.items():
            if v_any is None:
                logger.debug("Ignoring `None` entry in Mapping for key %s", k_any)
                continue
            out[str(k_any)] = _strip_none_for_toml(v_any)
        return out

    if isinstance(value, (list, tuple)):
        seq: list[object] = list(cast("list[object]", value))
        return [_strip_none_for_toml(v) for v in seq if v is not None]

    return value


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a TOML mapping to a string.

    Args:
        toml_dict (TomlTable): TOML mapping to render.

    Returns:
        str: The rendered TOML document.
    """
    cleaned: Any = _strip_none_for_toml(toml_dict)
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))
