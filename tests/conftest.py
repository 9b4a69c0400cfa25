"""
Shared fixtures for the expense API tests.

Each test gets its own application built from isolated settings, backed by
a fresh in-memory repository injected through dependency overrides.
"""

from typing import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from expense_api.core.config import Settings
from expense_api.domain.expenses.entities import Expense
from expense_api.domain.expenses.errors import ExpenseStorageError
from expense_api.domain.expenses.ports import ExpenseRepository
from expense_api.infrastructure.expenses import InMemoryExpenseRepository
from expense_api.interfaces.expenses.dependencies import get_expense_repository
from expense_api.main import create_app

TOKEN = "test-secret-token"


class FailingExpenseRepository(ExpenseRepository):
    """Repository whose selected operations raise ExpenseStorageError.

    Operations not listed in `failing` delegate to an in-memory store,
    so a test can seed data and then break a single call.
    """

    def __init__(self, *failing: str) -> None:
        self.failing = set(failing)
        self.inner = InMemoryExpenseRepository()

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise ExpenseStorageError(operation, "connection refused")

    def create(self, expense: Expense) -> Expense:
        self._check("create")
        return self.inner.create(expense)

    def get_by_id(self, expense_id: int) -> Expense:
        self._check("get_by_id")
        return self.inner.get_by_id(expense_id)

    def replace(self, expense: Expense) -> Expense:
        self._check("replace")
        return self.inner.replace(expense)

    def list_all(self) -> list[Expense]:
        self._check("list_all")
        return self.inner.list_all()


@pytest.fixture
def app_settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        store_backend="memory",
        auth_token=TOKEN,
        rate_limit_enabled=False,
        log_level="WARNING",
    )


@pytest.fixture
def repository() -> InMemoryExpenseRepository:
    return InMemoryExpenseRepository()


@pytest.fixture
def app(app_settings: Settings, repository: ExpenseRepository) -> FastAPI:
    application = create_app(app_settings)
    application.dependency_overrides[get_expense_repository] = lambda: repository
    return application


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": TOKEN}


@pytest.fixture
def make_expense() -> Callable[..., Expense]:
    """Factory for expenses with sensible defaults."""

    def _make(**overrides) -> Expense:
        fields = {
            "id": None,
            "title": "test expense",
            "amount": 100.0,
            "note": "test note",
            "tags": ["tag1", "tag2"],
        }
        fields.update(overrides)
        return Expense(**fields)

    return _make


@pytest.fixture
def failing_repository() -> type[FailingExpenseRepository]:
    """The FailingExpenseRepository class, for tests to instantiate."""
    return FailingExpenseRepository
