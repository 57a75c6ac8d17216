"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import TypeVar

T = TypeVar("T")


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive and
    assumed to be UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def epoch_millis() -> str:
    """Current epoch time in milliseconds, as a string."""
    return str(int(datetime.now(timezone.utc).timestamp() * 1000))


def unique(items: Iterable[T]) -> list[T]:
    """Drop repeated items, keeping the first occurrence of each."""
    return list(dict.fromkeys(items))
