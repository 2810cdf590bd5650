from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator

from sqlalchemy import MetaData, Table
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from .config import Settings

_engines: Dict[str, Engine] = {}


def get_engine(settings: Settings) -> Engine:
    engine = _engines.get(settings.database_url)
    if engine is not None:
        return engine
    connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
    engine = create_engine(settings.database_url, echo=False, connect_args=connect_args)
    _engines[settings.database_url] = engine
    return engine


@contextmanager
def session_scope(settings: Settings) -> Iterator[Session]:
    engine = get_engine(settings)
    with Session(engine) as session:
        yield session


def reflect_table(settings: Settings, name: str) -> Table:
    """Load an existing table definition from the configured database."""

    return Table(name, MetaData(), autoload_with=get_engine(settings))
