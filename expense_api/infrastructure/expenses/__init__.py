"""Adapters implementing the expense repository port."""

from expense_api.infrastructure.expenses.memory_repository import (
    InMemoryExpenseRepository,
)
from expense_api.infrastructure.expenses.sql_repository import (
    SqlExpenseRepository,
    build_engine,
    create_schema,
)

__all__ = [
    "InMemoryExpenseRepository",
    "SqlExpenseRepository",
    "build_engine",
    "create_schema",
]
