from __future__ import annotations

"""Classification of lookup values as slugs or primary keys."""

from enum import Enum
from numbers import Number
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable


class IdentifierKind(str, Enum):
    FRIENDLY = "friendly"
    UNFRIENDLY = "unfriendly"
    AMBIGUOUS = "ambiguous"


def _is_mapped_instance(value: Any) -> bool:
    try:
        inspect(value)
    except NoInspectionAvailable:
        return False
    return True


def classify_identifier(value: Any) -> IdentifierKind:
    """Tell whether ``value`` could be a slug.

    Numbers, booleans, ``None``, containers and ORM instances are never slugs.
    A string is a slug unless it reads back identically as an integer, in
    which case it may be either a slug or a primary key::

        classify_identifier(123)       -> UNFRIENDLY
        classify_identifier("123")     -> AMBIGUOUS
        classify_identifier("abc123")  -> FRIENDLY
    """

    if value is None or isinstance(value, (Number, list, tuple, dict, set)):
        return IdentifierKind.UNFRIENDLY
    if isinstance(value, str):
        try:
            as_int = int(value)
        except ValueError:
            return IdentifierKind.FRIENDLY
        return IdentifierKind.AMBIGUOUS if str(as_int) == value else IdentifierKind.FRIENDLY
    if _is_mapped_instance(value):
        return IdentifierKind.UNFRIENDLY
    return IdentifierKind.AMBIGUOUS


def is_friendly_id(value: Any) -> bool:
    return classify_identifier(value) is IdentifierKind.FRIENDLY


def is_unfriendly_id(value: Any) -> bool:
    return classify_identifier(value) is IdentifierKind.UNFRIENDLY


def is_possibly_friendly_id(value: Any) -> bool:
    return classify_identifier(value) is not IdentifierKind.UNFRIENDLY


__all__ = [
    "IdentifierKind",
    "classify_identifier",
    "is_friendly_id",
    "is_possibly_friendly_id",
    "is_unfriendly_id",
]
