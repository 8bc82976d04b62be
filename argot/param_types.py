# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ParamType`, the tagged type enumeration used to check and coerce the
string arguments collected for options and commands.

Each tag maps to one pure coercion function. A coercion either returns the
converted value or raises `ArgumentTypeError`; no coercion has side effects.

Tags can be given as members, as strings ("int", "integer", "number", ...) or
as the matching Python types (`int`, `str`, `float`, `bool`, `datetime`).

Example:
    ParamType("integer") → ParamType.INT
    ParamType(float)     → ParamType.FLOAT
    ParamType.INT.coerce("6") → 6
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Sequence

from dateutil import parser as date_parser

from argot.exceptions import ArgumentTypeError


def coerce_str(value: Any) -> str:
    if not isinstance(value, str):
        raise ArgumentTypeError(f"Expected a string, got {type(value).__name__}.")
    return value


def coerce_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ArgumentTypeError(f"Value '{value}' is not an integer.")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise ArgumentTypeError(f"Value '{value}' is not an integer.") from None


def coerce_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ArgumentTypeError(f"Value '{value}' is not a number.")
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        raise ArgumentTypeError(f"Value '{value}' is not a number.") from None


def coerce_numeric(value: Any) -> int | float:
    """Coerce to an int when possible, otherwise to a float."""
    try:
        return coerce_int(value)
    except ArgumentTypeError:
        return coerce_float(value)


def coerce_bool(value: Any) -> bool:
    """
    Convert a string to a boolean.

    Accepts 'true', 'yes', '1', 'on' and their negative counterparts,
    case-insensitively. Anything else is rejected.
    """
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in {"true", "t", "1", "yes", "y", "on"}:
        return True
    if normalized in {"false", "f", "0", "no", "n", "off"}:
        return False
    raise ArgumentTypeError(f"Value '{value}' is not a boolean.")


def coerce_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        return date_parser.parse(str(value))
    except (ValueError, OverflowError):
        raise ArgumentTypeError(
            f"Value '{value}' could not be parsed as a datetime."
        ) from None


class ParamType(Enum):
    """
    Tagged argument types.

    Members:
        STR: Any string (non-string values are rejected).
        INT: Whole numbers.
        FLOAT: Floating point numbers.
        NUMERIC: Whole or floating point numbers, int preferred.
        BOOL: true/false, yes/no, on/off, 1/0.
        DATETIME: Anything `dateutil` can parse.

    Aliases:
        "string" → "str", "integer" → "int", "number" → "numeric",
        "boolean" → "bool", "date" → "datetime"
    """

    STR = "str"
    INT = "int"
    FLOAT = "float"
    NUMERIC = "numeric"
    BOOL = "bool"
    DATETIME = "datetime"

    @classmethod
    def choices(cls) -> list[ParamType]:
        """Return a list of all parameter types."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "string": "str",
            "integer": "int",
            "number": "numeric",
            "boolean": "bool",
            "date": "datetime",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ParamType:
        if isinstance(value, type):
            for python_type, member in _PYTHON_TYPES:
                if value is python_type:
                    return member
            raise ValueError(f"Unsupported {cls.__name__}: {value.__name__}")
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @classmethod
    def from_annotation(cls, annotation: Any) -> ParamType | None:
        """Map a signature annotation to a tag, or None when it has no tag."""
        for python_type, member in _PYTHON_TYPES:
            if annotation is python_type:
                return member
        return None

    def coerce(self, value: Any) -> Any:
        """Validate and convert `value` for this tag."""
        return _COERCERS[self](value)

    def __str__(self) -> str:
        """Return the string representation of the parameter type."""
        return self.value


_PYTHON_TYPES: tuple[tuple[type, ParamType], ...] = (
    (str, ParamType.STR),
    (int, ParamType.INT),
    (float, ParamType.FLOAT),
    (bool, ParamType.BOOL),
    (datetime, ParamType.DATETIME),
)

_COERCERS: dict[ParamType, Callable[[Any], Any]] = {
    ParamType.STR: coerce_str,
    ParamType.INT: coerce_int,
    ParamType.FLOAT: coerce_float,
    ParamType.NUMERIC: coerce_numeric,
    ParamType.BOOL: coerce_bool,
    ParamType.DATETIME: coerce_datetime,
}


def coerce_arguments(
    name: str, values: Sequence[Any], types: Sequence[ParamType | None]
) -> list[Any]:
    """
    Coerce each value with the tag of its slot.

    Slots without a tag (or beyond the end of `types`) are passed through.

    Raises:
        ArgumentTypeError: naming the parameter and the failing position.
    """
    coerced = []
    for index, value in enumerate(values):
        param_type = types[index] if index < len(types) else None
        if param_type is None:
            coerced.append(value)
            continue
        try:
            coerced.append(param_type.coerce(value))
        except ArgumentTypeError as error:
            raise ArgumentTypeError(
                f"Argument {index + 1} of '{name}' must be {param_type}: {error}"
            ) from error
    return coerced
