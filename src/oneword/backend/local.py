# ABOUTME: SQLite-backed implementation of the DataStore protocol.
# ABOUTME: Translates table/filter calls into SQLModel statements and integrity errors into codes.

import asyncio
import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, col, select

from oneword.backend.exceptions import (
    FOREIGN_KEY_VIOLATION,
    INTEGRITY_VIOLATION,
    INVALID_INPUT,
    NOT_NULL_VIOLATION,
    UNDEFINED_COLUMN,
    UNDEFINED_TABLE,
    UNIQUE_VIOLATION,
    DataStoreError,
)
from oneword.backend.protocol import Filters, Row
from oneword.database import DatabaseService
from oneword.models import Follow, Notification, Profile, Prompt, Reaction, Word

logger = logging.getLogger(__name__)

TABLES: dict[str, type[SQLModel]] = {
    "profiles": Profile,
    "prompts": Prompt,
    "words": Word,
    "reactions": Reaction,
    "follows": Follow,
    "notifications": Notification,
}


def _integrity_code(error: IntegrityError) -> str:
    message = str(error.orig).upper()
    if "UNIQUE" in message:
        return UNIQUE_VIOLATION
    if "FOREIGN KEY" in message:
        return FOREIGN_KEY_VIOLATION
    if "NOT NULL" in message:
        return NOT_NULL_VIOLATION
    return INTEGRITY_VIOLATION


class LocalDataStore:
    """DataStore over a local SQLite database.

    Inserting into "words" also advances the author's streak in the same
    transaction, the way the hosted backend does with a trigger. Session work
    runs in a worker thread so awaiting a call does not block the event loop.
    """

    def __init__(self, db_service: DatabaseService) -> None:
        """Initialize the data store.

        Args:
            db_service: Database service owning the engine and schema.
        """
        self._db_service = db_service

    def _model(self, table: str) -> type[SQLModel]:
        try:
            return TABLES[table]
        except KeyError:
            raise DataStoreError(
                f'relation "{table}" does not exist', code=UNDEFINED_TABLE
            ) from None

    def _column(self, model: type[SQLModel], name: str) -> Any:
        if name not in model.model_fields:
            raise DataStoreError(
                f'column "{name}" of relation "{model.__tablename__}" does not exist',
                code=UNDEFINED_COLUMN,
            )
        return col(getattr(model, name))

    def _where(self, model: type[SQLModel], filters: Filters | None) -> list[Any]:
        clauses = []
        for name, value in (filters or {}).items():
            column = self._column(model, name)
            if isinstance(value, (list, tuple)):
                clauses.append(column.in_(list(value)))
            elif value is None:
                clauses.append(column.is_(None))
            else:
                clauses.append(column == value)
        return clauses

    @contextmanager
    def _transaction(self) -> Generator[Session, None, None]:
        with self._db_service.get_session() as session:
            try:
                yield session
                session.commit()
            except IntegrityError as e:
                session.rollback()
                code = _integrity_code(e)
                logger.debug("Integrity error %s: %s", code, e.orig)
                raise DataStoreError(str(e.orig), code=code) from e
            except SQLAlchemyError as e:
                session.rollback()
                raise DataStoreError(str(e)) from e

    def _insert(self, row: SQLModel) -> Row:
        with self._transaction() as session:
            session.add(row)
            session.flush()
            if isinstance(row, Word):
                self._db_service.update_streak(session, row.user_id, row.created_at.date())
            session.commit()
            session.refresh(row)
            return row.model_dump()

    async def insert(self, table: str, values: Row) -> Row:
        """Insert one row and return it with generated columns filled in.

        Raises:
            DataStoreError: On unknown table/column or a constraint violation.
        """
        model = self._model(table)
        for name in values:
            self._column(model, name)

        try:
            row = model.model_validate(values)
        except ValidationError as e:
            raise DataStoreError(str(e), code=INVALID_INPUT) from e

        return await asyncio.to_thread(self._insert, row)

    def _update(self, model: type[SQLModel], values: Row, filters: Filters) -> list[Row]:
        with self._transaction() as session:
            rows = list(session.exec(select(model).where(*self._where(model, filters))).all())
            for row in rows:
                for name, value in values.items():
                    setattr(row, name, value)
                session.add(row)
            session.commit()
            for row in rows:
                session.refresh(row)
            return [row.model_dump() for row in rows]

    async def update(self, table: str, values: Row, filters: Filters) -> list[Row]:
        """Set columns on every row matching filters and return the updated rows."""
        model = self._model(table)
        for name in values:
            self._column(model, name)
        return await asyncio.to_thread(self._update, model, values, filters)

    def _delete(self, model: type[SQLModel], filters: Filters) -> int:
        with self._transaction() as session:
            rows = list(session.exec(select(model).where(*self._where(model, filters))).all())
            for row in rows:
                session.delete(row)
            return len(rows)

    async def delete(self, table: str, filters: Filters) -> int:
        """Delete every row matching filters and return how many were removed."""
        return await asyncio.to_thread(self._delete, self._model(table), filters)

    def _select(self, statement: Any) -> list[Row]:
        with self._transaction() as session:
            return [row.model_dump() for row in session.exec(statement).all()]

    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        ilike: Filters | None = None,
    ) -> list[Row]:
        """Read rows matching equality filters and case-insensitive matches.

        Args:
            table: Table name.
            filters: Column equality filters; list values match any member.
            order_by: Column to sort by.
            descending: Sort newest/largest first.
            limit: Maximum rows to return.
            ilike: Column to value map compared case-insensitively.

        Returns:
            Matching rows as dictionaries.
        """
        model = self._model(table)
        statement = select(model).where(*self._where(model, filters))
        for name, value in (ilike or {}).items():
            statement = statement.where(func.lower(self._column(model, name)) == str(value).lower())
        if order_by is not None:
            column = self._column(model, order_by)
            statement = statement.order_by(column.desc() if descending else column)
        if limit is not None:
            statement = statement.limit(limit)

        return await asyncio.to_thread(self._select, statement)
