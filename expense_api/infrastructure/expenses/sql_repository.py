"""
Adapter: Relational expense store.

Implements ExpenseRepository port on top of SQLAlchemy Core.
PostgreSQL in production (tags as TEXT[]), SQLite for local runs and
tests (tags as JSON). One transaction per call.
"""

import logging
from typing import Any, Mapping

from sqlalchemy import (
    JSON,
    BigInteger,
    Column,
    Float,
    Integer,
    MetaData,
    Table,
    Text,
    create_engine,
    insert,
    select,
    update,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from expense_api.domain.expenses.entities import Expense
from expense_api.domain.expenses.errors import (
    ExpenseNotFoundError,
    ExpenseStorageError,
)
from expense_api.domain.expenses.ports import ExpenseRepository

logger = logging.getLogger(__name__)

metadata = MetaData()

# SQLite only autoincrements a column declared exactly INTEGER PRIMARY KEY.
expenses_table = Table(
    "expenses",
    metadata,
    Column(
        "id",
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    ),
    Column("title", Text, nullable=False),
    Column("amount", Float, nullable=False),
    Column("note", Text, nullable=False),
    Column("tags", JSON().with_variant(ARRAY(Text), "postgresql"), nullable=False),
)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Build a SQLAlchemy engine for the given URL.

    In-memory SQLite databases share a single connection so that every
    session sees the same data.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **options)
    return create_engine(url, echo=echo, pool_pre_ping=True)


def create_schema(engine: Engine) -> None:
    """Create the expenses table if it does not exist yet."""
    metadata.create_all(engine)
    logger.info("Expense schema ensured on %s", engine.url.render_as_string())


def _row_to_expense(row: Mapping[str, Any]) -> Expense:
    return Expense(
        id=row["id"],
        title=row["title"],
        amount=row["amount"],
        note=row["note"],
        tags=list(row["tags"] or []),
    )


class SqlExpenseRepository(ExpenseRepository):
    """Reads and writes expenses in the `expenses` table.

    Implements the ExpenseRepository port defined in the domain layer.
    SQLAlchemy failures are re-raised as ExpenseStorageError.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create(self, expense: Expense) -> Expense:
        statement = insert(expenses_table).values(
            title=expense.title,
            amount=expense.amount,
            note=expense.note,
            tags=list(expense.tags),
        )
        try:
            with self._engine.begin() as conn:
                result = conn.execute(statement)
                expense_id = result.inserted_primary_key[0]
        except SQLAlchemyError as exc:
            logger.error("Insert into expenses failed: %s", type(exc).__name__)
            raise ExpenseStorageError("create", str(exc)) from exc

        return expense.with_id(int(expense_id))

    def get_by_id(self, expense_id: int) -> Expense:
        query = select(expenses_table).where(expenses_table.c.id == expense_id)
        try:
            with self._engine.connect() as conn:
                row = conn.execute(query).mappings().first()
        except SQLAlchemyError as exc:
            logger.error("Select from expenses failed: %s", type(exc).__name__)
            raise ExpenseStorageError("get_by_id", str(exc)) from exc

        if row is None:
            raise ExpenseNotFoundError(expense_id)
        return _row_to_expense(row)

    def replace(self, expense: Expense) -> Expense:
        statement = (
            update(expenses_table)
            .where(expenses_table.c.id == expense.id)
            .values(
                title=expense.title,
                amount=expense.amount,
                note=expense.note,
                tags=list(expense.tags),
            )
        )
        try:
            with self._engine.begin() as conn:
                result = conn.execute(statement)
        except SQLAlchemyError as exc:
            logger.error("Update of expenses failed: %s", type(exc).__name__)
            raise ExpenseStorageError("replace", str(exc)) from exc

        if result.rowcount == 0:
            raise ExpenseNotFoundError(expense.id)
        return expense

    def list_all(self) -> list[Expense]:
        query = select(expenses_table).order_by(expenses_table.c.id)
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as exc:
            logger.error("Select from expenses failed: %s", type(exc).__name__)
            raise ExpenseStorageError("list_all", str(exc)) from exc

        return [_row_to_expense(row) for row in rows]
