from __future__ import annotations

import pytest

from slugline_app.slugging.normalizer import SlugNormalizer, normalize


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Plaza Diner", "plaza-diner"),
        ("I'm unique", "i-m-unique"),
        ("  --Hello,   World!--  ", "hello-world"),
        ("Crème Brûlée", "creme-brulee"),
        ("already-a-slug", "already-a-slug"),
        ("!!!", ""),
        ("", ""),
    ],
)
def test_normalize_examples(raw: str, expected: str) -> None:
    assert normalize(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["Plaza Diner", "a__b--c", "  Ünïcödé  text ", "-x-", "a/b?c=d#e", "日本語 title"],
)
def test_normalize_is_idempotent(raw: str) -> None:
    normalizer = SlugNormalizer()
    once = normalizer(raw)
    assert normalizer(once) == once


def test_custom_separator_and_max_length() -> None:
    normalizer = SlugNormalizer(separator="_", max_length=9)

    slug = normalizer("Hello big wide world")

    assert slug == "hello_big"
    assert normalizer(slug) == slug


def test_truncation_does_not_leave_trailing_separator() -> None:
    assert SlugNormalizer(max_length=6)("hello world") == "hello"
