"""
Tests for the expense repository adapters.

The SQL adapter runs against in-memory SQLite; the in-memory adapter
needs nothing. Both must honor the same port contract.
"""

from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.engine import Engine

from expense_api.core.config import Settings
from expense_api.domain.expenses.entities import Expense
from expense_api.domain.expenses.errors import (
    ExpenseNotFoundError,
    ExpenseStorageError,
)
from expense_api.domain.expenses.ports import ExpenseRepository
from expense_api.infrastructure.expenses import (
    InMemoryExpenseRepository,
    SqlExpenseRepository,
    build_engine,
    create_schema,
)
from expense_api.main import create_app


@pytest.fixture
def engine() -> Iterator[Engine]:
    sqlite_engine = build_engine("sqlite://")
    create_schema(sqlite_engine)
    yield sqlite_engine
    sqlite_engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request: pytest.FixtureRequest, engine: Engine) -> ExpenseRepository:
    if request.param == "memory":
        return InMemoryExpenseRepository()
    return SqlExpenseRepository(engine)


class TestRepositoryContract:
    """Behavior shared by every ExpenseRepository adapter."""

    def test_create_assigns_sequential_ids(
        self, store: ExpenseRepository, make_expense: Callable[..., Expense]
    ) -> None:
        first = store.create(make_expense())
        second = store.create(make_expense(title="second"))

        assert first.id == 1
        assert second.id == 2
        assert second.title == "second"

    def test_create_ignores_given_id(
        self, store: ExpenseRepository, make_expense: Callable[..., Expense]
    ) -> None:
        assert store.create(make_expense(id=42)).id == 1

    def test_get_returns_stored_fields(
        self, store: ExpenseRepository, make_expense: Callable[..., Expense]
    ) -> None:
        created = store.create(make_expense(amount=12.5, tags=["food", "work"]))

        assert store.get_by_id(created.id) == created

    def test_get_unknown_raises_not_found(self, store: ExpenseRepository) -> None:
        with pytest.raises(ExpenseNotFoundError) as exc_info:
            store.get_by_id(999)
        assert exc_info.value.expense_id == 999

    def test_replace_overwrites_every_field(
        self, store: ExpenseRepository, make_expense: Callable[..., Expense]
    ) -> None:
        created = store.create(make_expense())
        replacement = make_expense(
            id=created.id, title="new", amount=0.0, note="", tags=[]
        )

        assert store.replace(replacement) == replacement
        assert store.get_by_id(created.id) == replacement

    def test_replace_unknown_raises_not_found(
        self, store: ExpenseRepository, make_expense: Callable[..., Expense]
    ) -> None:
        with pytest.raises(ExpenseNotFoundError):
            store.replace(make_expense(id=7))
        assert store.list_all() == []

    def test_list_preserves_id_order(
        self, store: ExpenseRepository, make_expense: Callable[..., Expense]
    ) -> None:
        for title in ("a", "b", "c"):
            store.create(make_expense(title=title))

        assert [e.title for e in store.list_all()] == ["a", "b", "c"]

    def test_tag_order_preserved(
        self, store: ExpenseRepository, make_expense: Callable[..., Expense]
    ) -> None:
        created = store.create(make_expense(tags=["z", "a", "m"]))

        assert store.get_by_id(created.id).tags == ["z", "a", "m"]


class TestInMemoryIsolation:
    """The in-memory store never shares mutable state with callers."""

    def test_mutating_returned_tags_does_not_leak(
        self, make_expense: Callable[..., Expense]
    ) -> None:
        repo = InMemoryExpenseRepository()
        created = repo.create(make_expense(tags=["a"]))

        created.tags.append("b")

        assert repo.get_by_id(created.id).tags == ["a"]


class TestSqlFailures:
    """SQLAlchemy errors surface as ExpenseStorageError."""

    def test_missing_table_wrapped(
        self, engine: Engine, make_expense: Callable[..., Expense]
    ) -> None:
        with engine.begin() as conn:
            conn.execute(text("DROP TABLE expenses"))
        repo = SqlExpenseRepository(engine)

        with pytest.raises(ExpenseStorageError) as exc_info:
            repo.list_all()
        assert exc_info.value.operation == "list_all"

        with pytest.raises(ExpenseStorageError):
            repo.create(make_expense())
        with pytest.raises(ExpenseStorageError):
            repo.get_by_id(1)
        with pytest.raises(ExpenseStorageError):
            repo.replace(make_expense(id=1))

    def test_create_schema_is_idempotent(self, engine: Engine) -> None:
        create_schema(engine)
        assert SqlExpenseRepository(engine).list_all() == []


class TestSqlBackedApp:
    """The application wired to the SQL store through settings."""

    def test_round_trip_through_sqlite(self, tmp_path) -> None:
        app_settings = Settings(
            _env_file=None,
            database_url=f"sqlite:///{tmp_path / 'expenses.db'}",
            auth_token="secret",
            rate_limit_enabled=False,
        )
        headers = {"Authorization": "secret"}

        with TestClient(create_app(app_settings)) as client:
            created = client.post(
                "/expenses/",
                json={"title": "taxi", "amount": 35.5, "note": "", "tags": ["travel"]},
                headers=headers,
            )
            listed = client.get("/expenses/", headers=headers)

        assert created.status_code == 201
        assert listed.json() == [created.json()]

        # Data survives an application restart.
        with TestClient(create_app(app_settings)) as client:
            fetched = client.get(f"/expenses/{created.json()['id']}", headers=headers)

        assert fetched.json() == created.json()

    def test_missing_schema_is_500_not_404(self, tmp_path) -> None:
        app_settings = Settings(
            _env_file=None,
            database_url=f"sqlite:///{tmp_path / 'empty.db'}",
            auto_create_schema=False,
            auth_token="secret",
            rate_limit_enabled=False,
        )

        with TestClient(create_app(app_settings)) as client:
            response = client.get("/expenses/1", headers={"Authorization": "secret"})

        assert response.status_code == 500
        assert response.json() == {"error": "failed to get expense"}
