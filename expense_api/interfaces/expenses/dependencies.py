"""
Dependency injection for the expense bounded context.

Builds the expense repository from settings at startup and provides
FastAPI dependency functions that hand it to the request handler.
This is the composition root for the expense context.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.engine import Engine

from expense_api.core.config import Settings
from expense_api.domain.expenses.ports import ExpenseRepository
from expense_api.infrastructure.expenses import (
    InMemoryExpenseRepository,
    SqlExpenseRepository,
    build_engine,
)
from expense_api.interfaces.expenses.handler import ExpenseHandler

HANDLER_LOGGER_NAME = "expense_api.expenses"


def build_expense_repository(
    app_settings: Settings,
) -> tuple[ExpenseRepository, Optional[Engine]]:
    """Build the configured repository.

    Returns:
        The repository and, for the SQL backend, the engine behind it so
        the application lifespan can create the schema and dispose of it.
    """
    if app_settings.store_backend == "memory":
        return InMemoryExpenseRepository(), None

    engine = build_engine(app_settings.database_url, echo=app_settings.database_echo)
    return SqlExpenseRepository(engine), engine


def get_expense_repository(request: Request) -> ExpenseRepository:
    """Return the repository built for this application instance."""
    return request.app.state.expense_repository


def get_expense_handler(
    repository: ExpenseRepository = Depends(get_expense_repository),
) -> ExpenseHandler:
    """Build ExpenseHandler with its repository and logger."""
    return ExpenseHandler(
        repository=repository, logger=logging.getLogger(HANDLER_LOGGER_NAME)
    )
