"""Helpers for turning upstream JSON values into model fields."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any


def parse_text(value: Any) -> str:
    """Return ``value`` as a string, using ``""`` for missing values."""

    if value is None:
        return ""
    return str(value)


def parse_decimal(value: Any, field: str) -> Decimal:
    """Parse a numeric JSON value (or a human readable number) exactly."""

    if isinstance(value, bool) or value is None:
        raise ValueError(f"{field} must be numeric, got {value!r}")
    if isinstance(value, (int, float)):
        # str() keeps the shortest repr, so 0.3 becomes Decimal("0.3").
        result = Decimal(str(value))
    else:
        cleaned = str(value).strip().replace(",", "")
        try:
            result = Decimal(cleaned)
        except InvalidOperation as exc:
            raise ValueError(f"{field} must be numeric, got {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"{field} must be a finite number, got {value!r}")
    return result


__all__ = ["parse_decimal", "parse_text"]
