"""
Domain-specific errors for the expense bounded context.

All errors raised by expense repositories must be defined here.
They are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class ExpenseDomainError(Exception):
    """Base error for all expense domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ExpenseNotFoundError(ExpenseDomainError):
    """Raised when no expense exists with the requested id."""

    def __init__(self, expense_id: int) -> None:
        super().__init__(f"Expense not found: {expense_id}")
        self.expense_id = expense_id


class ExpenseStorageError(ExpenseDomainError):
    """Raised when the underlying store fails for any other reason."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"Expense store failed during {operation}: {reason}")
        self.operation = operation
        self.reason = reason
