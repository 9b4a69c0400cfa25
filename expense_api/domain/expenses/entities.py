"""
Domain entities for the expense bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

# Whole amounts below this magnitude are written without a fraction.
_INTEGRAL_LIMIT = 1e21


def json_number(value: float) -> Union[int, float]:
    """Return `value` as an int when it is whole, so 100.0 is written as 100."""
    if float(value).is_integer() and abs(value) < _INTEGRAL_LIMIT:
        return int(value)
    return value


@dataclass(frozen=True)
class Expense:
    """A single recorded expense.

    Attributes:
        id: Store-assigned identifier. None until the expense is created.
        title: Short non-empty description.
        amount: Amount spent. Zero is a valid amount.
        note: Free-form note, possibly empty.
        tags: Ordered labels attached to the expense.
    """

    id: Optional[int]
    title: str
    amount: float
    note: str
    tags: list[str] = field(default_factory=list)

    def with_id(self, expense_id: int) -> "Expense":
        """Return a copy of this expense carrying the given identifier."""
        return Expense(
            id=expense_id,
            title=self.title,
            amount=self.amount,
            note=self.note,
            tags=list(self.tags),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "amount": json_number(self.amount),
            "note": self.note,
            "tags": list(self.tags),
        }
