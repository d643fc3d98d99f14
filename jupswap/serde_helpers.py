"""Helpers that carry values in JSON as strings."""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


class FieldParseError(ValueError):
    """A JSON value could not be turned into the expected field."""


def field_to_string(value: Any) -> str:
    """Write a value as its string form."""
    return str(value)


def field_from_string(value: Any, parse: Callable[[str], T]) -> T:
    """Read a value from a JSON string using ``parse``."""
    if not isinstance(value, str):
        raise FieldParseError(f"invalid type: expected a string, got {value!r}")
    try:
        return parse(value)
    except (ValueError, TypeError) as exc:
        raise FieldParseError(f"Parse error: {exc}") from exc


def option_field_to_string(value: Optional[Any]) -> Optional[str]:
    """Write an optional value as a string, keeping None."""
    return None if value is None else str(value)


def option_field_from_string(value: Any, parse: Callable[[str], T]) -> Optional[T]:
    """Read an optional value from a JSON string or null."""
    if value is None:
        return None
    return field_from_string(value, parse)