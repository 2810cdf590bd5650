from __future__ import annotations

from typing import Iterator, List, Optional

import pytest
from sqlalchemy import Column, String, UniqueConstraint
from sqlmodel import Field, Session, SQLModel, create_engine


class Journalist(SQLModel, table=True):  # pragma: no cover - test table
    __tablename__ = "journalists"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: Optional[str] = Field(default=None)
    slug: Optional[str] = Field(default=None, sa_column=Column(String, unique=True))


class Restaurant(SQLModel, table=True):  # pragma: no cover - test table
    __tablename__ = "restaurants"
    __table_args__ = (UniqueConstraint("slug", "city_id", name="uq_restaurants_slug_city"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: Optional[str] = Field(default=None)
    city_id: Optional[int] = Field(default=None, index=True)
    slug: Optional[str] = Field(default=None)


class City(SQLModel, table=True):  # pragma: no cover - test table
    __tablename__ = "cities"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: Optional[str] = Field(default=None)
    code: Optional[str] = Field(default=None, max_length=3)
    slug: Optional[str] = Field(default=None, sa_column=Column(String, unique=True))


class StaticConflicts:
    """ConflictQuery returning canned rows and recording each call."""

    def __init__(self, rows: Optional[dict] = None) -> None:
        self.rows = rows or {}
        self.calls: List[tuple] = []

    def __call__(self, normalized, separator, scope, exclude_pk):
        self.calls.append((normalized, separator, dict(scope), exclude_pk))
        return list(self.rows.get(normalized, []))


def create_session() -> Session:
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    return Session(engine)


@pytest.fixture()
def session() -> Iterator[Session]:
    with create_session() as session:
        yield session
