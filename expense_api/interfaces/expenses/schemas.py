"""
Pydantic schemas for expense API request/response validation.

These schemas enforce input validation and define the API contract.
Parsing is strict: no string-to-number coercion, every field required.
No business logic belongs here.
"""

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator
from pydantic_core import PydanticCustomError

from expense_api.domain.expenses.entities import Expense


class CreateExpenseRequest(BaseModel):
    """Request schema for creating an expense.

    Attributes:
        title: Non-empty title.
        amount: Amount spent; zero is accepted but the key must be present.
        note: Note text; may be empty but the key must be present.
        tags: Labels; may be an empty array but the key must be present.
    """

    model_config = ConfigDict(strict=True)

    title: str = Field(..., description="Short description of the expense")
    amount: float = Field(..., allow_inf_nan=False, description="Amount spent")
    note: str = Field(..., description="Free-form note")
    tags: list[str] = Field(..., description="Ordered labels")

    @field_validator("title")
    @classmethod
    def _title_not_empty(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("required", "title is required")
        return value

    def to_entity(self) -> Expense:
        """Build an expense awaiting an id from the store."""
        return Expense(
            id=None,
            title=self.title,
            amount=self.amount,
            note=self.note,
            tags=list(self.tags),
        )


class UpdateExpenseRequest(CreateExpenseRequest):
    """Request schema for replacing an expense. Carries the full record."""

    id: int = Field(..., description="Identifier; must match the path id")

    def to_entity(self) -> Expense:
        return Expense(
            id=self.id,
            title=self.title,
            amount=self.amount,
            note=self.note,
            tags=list(self.tags),
        )


class ExpenseResponse(BaseModel):
    """Response schema for a stored expense."""

    id: int
    title: str
    amount: float
    note: str
    tags: list[str]


class ErrorResponse(RootModel[dict[str, str]]):
    """Error body: `{"error": message}` or a field -> message map."""


class HealthResponse(BaseModel):
    """Response schema for the health endpoint."""

    status: str
    version: str
