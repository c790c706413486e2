"""Shared parsing helpers for environment and YAML value normalization."""

from __future__ import annotations


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off"})


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_permissive_boolean(value: object) -> bool | None:
    """Parse a permissive boolean token and return `None` for invalid values."""

    if isinstance(value, bool):
        return value

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None

    token = normalized.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None


def parse_int_in_range(value: object, field_name: str, *, minimum: int, maximum: int) -> int:
    """Parse an integer token and enforce inclusive bounds.

    Raises:
        ValueError: If the token is not an integer or falls outside the bounds.
    """

    if isinstance(value, bool):
        raise ValueError(f"`{field_name}` must be an integer between {minimum} and {maximum}.")
    try:
        parsed = int(str(value).strip())
    except ValueError as exc:
        raise ValueError(
            f"`{field_name}` must be an integer between {minimum} and {maximum}."
        ) from exc
    if parsed < minimum or parsed > maximum:
        raise ValueError(f"`{field_name}` must be an integer between {minimum} and {maximum}.")
    return parsed
