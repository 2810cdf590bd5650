from __future__ import annotations

"""Conflict detection against persisted slugs."""

from typing import Any, List, Mapping, Optional, Protocol, Sequence

from sqlalchemy import Table, func, or_
from sqlmodel import Session, select

from ..utils.logging import get_logger

logger = get_logger(__name__)

_LIKE_ESCAPE = "\\"


class ConflictQuery(Protocol):
    """Returns existing slugs clashing with ``normalized``, most sequenced first."""

    def __call__(
        self,
        normalized: str,
        separator: str,
        scope: Mapping[str, Any],
        exclude_pk: Optional[Any],
    ) -> Sequence[str]:
        ...


def _escape_like(value: str) -> str:
    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


class SQLConflictQuery:
    """Conflict query over a SQLModel table class or a reflected ``Table``.

    Matches rows whose slug equals the base or starts with ``base + separator``,
    narrowed by equality on every scope column. ``None`` scope values match
    ``IS NULL``. Database errors propagate to the caller.
    """

    def __init__(
        self,
        session: Session,
        table: Any,
        *,
        slug_column: str = "slug",
        primary_key: Optional[str] = None,
    ) -> None:
        self.session = session
        self.table: Table = getattr(table, "__table__", table)
        self.slug_column = slug_column
        if primary_key is None:
            pk_columns = list(self.table.primary_key.columns)
            primary_key = pk_columns[0].name if pk_columns else None
        self.primary_key = primary_key

    def __call__(
        self,
        normalized: str,
        separator: str,
        scope: Mapping[str, Any],
        exclude_pk: Optional[Any],
    ) -> List[str]:
        column = self.table.c[self.slug_column]
        pattern = f"{_escape_like(normalized + separator)}%"
        statement = select(column).where(or_(column == normalized, column.like(pattern, escape=_LIKE_ESCAPE)))
        for name, value in scope.items():
            statement = statement.where(self.table.c[name] == value)
        if exclude_pk is not None and self.primary_key is not None:
            statement = statement.where(self.table.c[self.primary_key] != exclude_pk)
        statement = statement.order_by(func.length(column).desc(), column.desc())
        return list(self.session.exec(statement).all())


class ConflictDetector:
    """Thin wrapper giving a ``ConflictQuery`` the generator's vocabulary."""

    def __init__(self, query: ConflictQuery, separator: str = "-") -> None:
        self.query = query
        self.separator = separator

    def find_conflicts(
        self,
        normalized: str,
        scope: Optional[Mapping[str, Any]] = None,
        exclude_pk: Optional[Any] = None,
    ) -> List[str]:
        conflicts = list(self.query(normalized, self.separator, dict(scope or {}), exclude_pk))
        if conflicts:
            logger.debug("Slug %r conflicts with %d existing row(s)", normalized, len(conflicts))
        return conflicts


__all__ = ["ConflictDetector", "ConflictQuery", "SQLConflictQuery"]
