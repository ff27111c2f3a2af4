"""Dialect helpers shared by league repositories."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import insert
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def dialect_name(session: Session) -> str:
    bind = session.get_bind()
    return "" if bind is None else bind.dialect.name


def supports_upsert(session: Session) -> bool:
    """True when the bound dialect has ``INSERT ... ON CONFLICT``."""
    return dialect_name(session) in _UPSERT_DIALECTS


def insert_ignoring_conflicts(
    session: Session,
    model: type[Any],
    rows: Sequence[dict[str, Any]],
    *,
    conflict_columns: Sequence[str],
) -> None:
    """Insert rows, leaving existing rows with the same key untouched."""
    statement = _UPSERT_DIALECTS[dialect_name(session)](model).values(list(rows))
    session.execute(statement.on_conflict_do_nothing(index_elements=list(conflict_columns)))


def upsert_rows(
    session: Session,
    model: type[Any],
    rows: Sequence[dict[str, Any]],
    *,
    conflict_columns: Sequence[str],
    update_columns: Sequence[str],
) -> None:
    """Insert rows, overwriting ``update_columns`` where the key already exists."""
    statement = _UPSERT_DIALECTS[dialect_name(session)](model).values(list(rows))
    session.execute(
        statement.on_conflict_do_update(
            index_elements=list(conflict_columns),
            set_={column: statement.excluded[column] for column in update_columns},
        )
    )


def insert_rows(session: Session, model: type[Any], rows: Sequence[dict[str, Any]]) -> None:
    if rows:
        session.execute(insert(model), list(rows))


__all__ = [
    "dialect_name",
    "insert_ignoring_conflicts",
    "insert_rows",
    "supports_upsert",
    "upsert_rows",
]
