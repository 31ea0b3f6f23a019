"""Shared write helpers: every write runs in a savepoint so constraint errors are recoverable."""
from __future__ import annotations

from typing import Any, Mapping, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

ModelT = TypeVar("ModelT")


def get_by_id(db: Session, model: type[ModelT], row_id: int) -> ModelT | None:
    # Always hit the DB: rows removed by FK cascade may linger in the identity map
    result = db.execute(select(model).where(model.id == row_id))
    return result.scalar_one_or_none()


def insert_row(db: Session, row: ModelT) -> ModelT:
    """
    Add and flush one row inside a SAVEPOINT.
    IntegrityError propagates; the outer transaction stays usable.
    """
    with db.begin_nested():
        db.add(row)
    return row


def update_row(db: Session, row: ModelT, attributes: Mapping[str, Any]) -> ModelT:
    with db.begin_nested():
        for key, value in attributes.items():
            setattr(row, key, value)
    return row


def delete_row(db: Session, row: Any) -> None:
    """Delete one row; children go with it through ON DELETE CASCADE."""
    db.delete(row)
    db.flush()
