from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

import pytest

from conftest import Journalist
from slugline_app.slugging.identifiers import (
    IdentifierKind,
    classify_identifier,
    is_friendly_id,
    is_possibly_friendly_id,
    is_unfriendly_id,
)


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        ("abc123", IdentifierKind.FRIENDLY),
        ("0123", IdentifierKind.FRIENDLY),
        ("plaza-diner", IdentifierKind.FRIENDLY),
        ("123", IdentifierKind.AMBIGUOUS),
        ("-5", IdentifierKind.AMBIGUOUS),
        (123, IdentifierKind.UNFRIENDLY),
        (1.5, IdentifierKind.UNFRIENDLY),
        (Decimal("1.5"), IdentifierKind.UNFRIENDLY),
        (Fraction(1, 2), IdentifierKind.UNFRIENDLY),
        (True, IdentifierKind.UNFRIENDLY),
        (None, IdentifierKind.UNFRIENDLY),
        (["name = ?", "joe"], IdentifierKind.UNFRIENDLY),
        ({"name": "joe"}, IdentifierKind.UNFRIENDLY),
        (object(), IdentifierKind.AMBIGUOUS),
    ],
)
def test_classify_identifier(value, kind) -> None:
    assert classify_identifier(value) is kind


def test_mapped_instance_is_unfriendly() -> None:
    assert classify_identifier(Journalist(name="x")) is IdentifierKind.UNFRIENDLY


def test_predicates() -> None:
    assert is_friendly_id("abc") and not is_unfriendly_id("abc")
    assert not is_friendly_id("123") and not is_unfriendly_id("123")
    assert is_possibly_friendly_id("123")
    assert not is_possibly_friendly_id(123)
