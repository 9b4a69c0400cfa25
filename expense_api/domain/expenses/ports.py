"""
Port interfaces (ABCs) for the expense bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The request handler never depends on concrete implementations.
"""

from abc import ABC, abstractmethod

from expense_api.domain.expenses.entities import Expense


class ExpenseRepository(ABC):
    """Port for persisting and retrieving expenses.

    Implementations raise ExpenseNotFoundError when an id is unknown and
    ExpenseStorageError (or any other exception) for every other failure.
    """

    @abstractmethod
    def create(self, expense: Expense) -> Expense:
        """Persist a new expense.

        Args:
            expense: Expense to store. Its id is ignored.

        Returns:
            The stored expense carrying its newly assigned id.
        """
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, expense_id: int) -> Expense:
        """Return the expense with the given id.

        Raises:
            ExpenseNotFoundError: If no such expense exists.
        """
        raise NotImplementedError

    @abstractmethod
    def replace(self, expense: Expense) -> Expense:
        """Overwrite every field of an existing expense.

        Args:
            expense: Full expense, including the id of the record to replace.

        Returns:
            The replaced expense.

        Raises:
            ExpenseNotFoundError: If no expense exists with expense.id.
        """
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Expense]:
        """Return every expense ordered by id ascending."""
        raise NotImplementedError
