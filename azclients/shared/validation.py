# azclients/shared/validation.py
"""Null/empty argument checks shared by every public operation."""
from typing import Any

from azclients.core.domain.exceptions import ArgumentError


def assert_not_none(value: Any, name: str) -> None:
    if value is None:
        raise ArgumentError(name, "value cannot be None")


def assert_not_none_or_empty(value: Any, name: str) -> None:
    """Rejects None and empty strings/collections."""
    assert_not_none(value, name)
    if isinstance(value, str):
        if not value.strip():
            raise ArgumentError(name, "value cannot be an empty string")
    elif hasattr(value, "__len__") and len(value) == 0:
        raise ArgumentError(name, "value cannot be empty")
