# src/castgraph/models/validators.py
"""Custom validators for Pydantic models."""

from __future__ import annotations

from typing import Any


def validate_non_empty(value: str) -> str:
    """Ensure ``value`` is not empty or whitespace."""
    if not value.strip():
        raise ValueError("must not be empty")
    return value


def text_or_empty(value: Any) -> str:
    """Coerce missing or non-string scene text to a string."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def clamp_unit(value: Any) -> float:
    """Coerce ``value`` to a float in ``[0, 1]``; unparseable input becomes 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number:  # NaN
        return 0.0
    return min(max(number, 0.0), 1.0)


__all__ = ["validate_non_empty", "text_or_empty", "clamp_unit"]
