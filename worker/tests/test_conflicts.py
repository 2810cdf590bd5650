from __future__ import annotations

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from conftest import Journalist, Restaurant
from slugline_app.slugging.conflicts import ConflictDetector, SQLConflictQuery


def _add(session: Session, *rows) -> None:
    for row in rows:
        session.add(row)
    session.commit()


def test_conflicts_are_ordered_most_sequenced_first(session: Session) -> None:
    _add(
        session,
        Journalist(name="Post", slug="post"),
        Journalist(name="Post", slug="post-2"),
        Journalist(name="Post", slug="post-10"),
        Journalist(name="Post", slug="post-9"),
        Journalist(name="Poster", slug="poster"),
    )
    detector = ConflictDetector(SQLConflictQuery(session, Journalist))

    assert detector.find_conflicts("post") == ["post-10", "post-9", "post-2", "post"]


def test_no_conflicts_for_unique_value(session: Session) -> None:
    _add(session, Journalist(name="Post", slug="post"))

    assert ConflictDetector(SQLConflictQuery(session, Journalist)).find_conflicts("plaza-diner") == []


def test_current_row_is_excluded(session: Session) -> None:
    own = Journalist(name="Post", slug="post")
    _add(session, own, Journalist(name="Post", slug="post-2"))
    detector = ConflictDetector(SQLConflictQuery(session, Journalist))

    assert detector.find_conflicts("post", exclude_pk=own.id) == ["post-2"]


def test_like_wildcards_in_base_are_literal(session: Session) -> None:
    _add(session, Journalist(name="x", slug="a-b-2"), Journalist(name="x", slug="aab_2"))
    detector = ConflictDetector(SQLConflictQuery(session, Journalist), separator="_")

    assert detector.find_conflicts("a_b") == []


def test_scope_isolates_conflicts(session: Session) -> None:
    _add(session, Restaurant(name="Plaza Diner", city_id=1, slug="plaza-diner"))
    detector = ConflictDetector(SQLConflictQuery(session, Restaurant))

    assert detector.find_conflicts("plaza-diner", {"city_id": 1}) == ["plaza-diner"]
    assert detector.find_conflicts("plaza-diner", {"city_id": 2}) == []


def test_none_scope_value_matches_null(session: Session) -> None:
    _add(session, Restaurant(name="Plaza Diner", city_id=None, slug="plaza-diner"))
    detector = ConflictDetector(SQLConflictQuery(session, Restaurant))

    assert detector.find_conflicts("plaza-diner", {"city_id": None}) == ["plaza-diner"]


def test_storage_errors_propagate(session: Session) -> None:
    missing = Table("missing", MetaData(), Column("id", Integer, primary_key=True), Column("slug", String))
    query = SQLConflictQuery(session, missing)

    with pytest.raises(OperationalError):
        ConflictDetector(query).find_conflicts("post")
