"""
Adapter: In-memory expense store.

Implements ExpenseRepository port.
Keeps expenses in a process-local dict. Used as a test double and for
quick local runs; nothing survives a restart.
"""

import threading

from expense_api.domain.expenses.entities import Expense
from expense_api.domain.expenses.errors import ExpenseNotFoundError
from expense_api.domain.expenses.ports import ExpenseRepository


class InMemoryExpenseRepository(ExpenseRepository):
    """Dict-backed expense store with sequential ids starting at 1.

    Stored and returned expenses are copies, so callers can never mutate
    the store's state through a reference they hold.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._expenses: dict[int, Expense] = {}
        self._next_id = 1

    def create(self, expense: Expense) -> Expense:
        with self._lock:
            created = expense.with_id(self._next_id)
            self._expenses[created.id] = created
            self._next_id += 1
        return created.with_id(created.id)

    def get_by_id(self, expense_id: int) -> Expense:
        with self._lock:
            expense = self._expenses.get(expense_id)
        if expense is None:
            raise ExpenseNotFoundError(expense_id)
        return expense.with_id(expense_id)

    def replace(self, expense: Expense) -> Expense:
        with self._lock:
            if expense.id not in self._expenses:
                raise ExpenseNotFoundError(expense.id)
            self._expenses[expense.id] = expense.with_id(expense.id)
        return expense

    def list_all(self) -> list[Expense]:
        with self._lock:
            return [
                self._expenses[expense_id].with_id(expense_id)
                for expense_id in sorted(self._expenses)
            ]
