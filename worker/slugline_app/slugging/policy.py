from __future__ import annotations

from typing import Any, Callable, Optional

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable

RegenerationPolicy = Callable[[Any, bool, Optional[str]], bool]


def slug_missing(record: Any, is_new: bool, current_slug: Optional[str]) -> bool:
    """Default policy: regenerate only when the slug is unset. An empty string counts as set."""

    return current_slug is None


def always(record: Any, is_new: bool, current_slug: Optional[str]) -> bool:
    return True


def never(record: Any, is_new: bool, current_slug: Optional[str]) -> bool:
    return False


def record_is_new(record: Any, primary_key: str = "id") -> bool:
    """True until the record has been persisted.

    Mapped instances report their identity state; anything else is new while
    its primary key is unset.
    """

    try:
        state = inspect(record)
    except NoInspectionAvailable:
        return getattr(record, primary_key, None) is None
    return not state.has_identity


__all__ = ["RegenerationPolicy", "always", "never", "record_is_new", "slug_missing"]
