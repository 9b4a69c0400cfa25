"""
Request handler for the expense resource.

One method per HTTP verb. Each follows the same linear pipeline:
parse the input, call the repository, map the outcome to a status
code and a JSON body. No state is kept between requests.

Store failures are classified exactly once (not found vs. anything
else) and answered with a fixed message; the underlying error text
only goes to the log.
"""

import logging
import re
from typing import Optional, Union

from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette import status

from expense_api.domain.expenses.entities import Expense
from expense_api.domain.expenses.errors import ExpenseNotFoundError
from expense_api.domain.expenses.ports import ExpenseRepository
from expense_api.interfaces.expenses.schemas import (
    CreateExpenseRequest,
    UpdateExpenseRequest,
)
from expense_api.shared.errors.mapper import (
    AppError,
    GenericError,
    error_payload,
    failure_from_validation_error,
)

ERR_CREATE_FAILED = GenericError("failed to create expense")
ERR_INVALID_ID = GenericError("invalid id")
ERR_ID_MISMATCH = GenericError("id mismatch")
ERR_NOT_FOUND = GenericError("expense not found")
ERR_GET_FAILED = GenericError("failed to get expense")
ERR_UPDATE_FAILED = GenericError("failed to update expense")
ERR_LIST_FAILED = GenericError("failed to list expenses")

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_ID_MIN = -(2**63)
_ID_MAX = 2**63 - 1


def parse_id(raw_id: str) -> Optional[int]:
    """Parse a path id as a signed 64-bit integer.

    Returns:
        The integer, or None when the text is not a plain decimal integer
        or does not fit in 64 bits.
    """
    if not _ID_PATTERN.fullmatch(raw_id):
        return None
    value = int(raw_id)
    if not _ID_MIN <= value <= _ID_MAX:
        return None
    return value


def _error(status_code: int, error: AppError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_payload(error))


class ExpenseHandler:
    """Handles create, get, update and list requests for expenses.

    Depends only on the ExpenseRepository port and an injected logger.
    """

    def __init__(
        self, repository: ExpenseRepository, logger: Optional[logging.Logger] = None
    ) -> None:
        """Initialize the handler.

        Args:
            repository: Store used for every operation.
            logger: Destination for request outcome logs.
        """
        self._repository = repository
        self._logger = logger or logging.getLogger(__name__)

    def create(self, body: Union[bytes, str]) -> JSONResponse:
        """Create an expense from a JSON body. 201 on success."""
        try:
            request = CreateExpenseRequest.model_validate_json(body)
        except ValidationError as exc:
            self._logger.warning(
                "Failed to bind create body: %d error(s)", exc.error_count()
            )
            return _error(status.HTTP_400_BAD_REQUEST, failure_from_validation_error(exc))

        try:
            created = self._repository.create(request.to_entity())
        except Exception:
            self._logger.exception("Failed to create expense")
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, ERR_CREATE_FAILED)

        self._logger.info("Created expense %s", created.id)
        return JSONResponse(status_code=status.HTTP_201_CREATED, content=created.to_dict())

    def get(self, raw_id: str) -> JSONResponse:
        """Return the expense identified by the path id."""
        expense_id = parse_id(raw_id)
        if expense_id is None:
            self._logger.warning("Invalid id: %r", raw_id)
            return _error(status.HTTP_400_BAD_REQUEST, ERR_INVALID_ID)

        outcome = self._fetch(expense_id)
        if not isinstance(outcome, Expense):
            return outcome
        return JSONResponse(status_code=status.HTTP_200_OK, content=outcome.to_dict())

    def update(self, raw_id: str, body: Union[bytes, str]) -> JSONResponse:
        """Replace an existing expense with the full record in the body."""
        try:
            request = UpdateExpenseRequest.model_validate_json(body)
        except ValidationError as exc:
            self._logger.warning(
                "Failed to bind update body: %d error(s)", exc.error_count()
            )
            return _error(status.HTTP_400_BAD_REQUEST, failure_from_validation_error(exc))

        expense_id = parse_id(raw_id)
        if expense_id is None:
            self._logger.warning("Invalid id: %r", raw_id)
            return _error(status.HTTP_400_BAD_REQUEST, ERR_INVALID_ID)

        if request.id != expense_id:
            self._logger.warning("Id mismatch: %d != %d", expense_id, request.id)
            return _error(status.HTTP_400_BAD_REQUEST, ERR_ID_MISMATCH)

        outcome = self._fetch(expense_id)
        if not isinstance(outcome, Expense):
            return outcome

        expense = request.to_entity()
        try:
            self._repository.replace(expense)
        except Exception:
            self._logger.exception("Failed to update expense %d", expense_id)
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, ERR_UPDATE_FAILED)

        self._logger.info("Updated expense %d", expense_id)
        return JSONResponse(status_code=status.HTTP_200_OK, content=expense.to_dict())

    def list(self) -> JSONResponse:
        """Return every expense in store order."""
        try:
            expenses = self._repository.list_all()
        except Exception:
            self._logger.exception("Failed to list expenses")
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, ERR_LIST_FAILED)

        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=[expense.to_dict() for expense in expenses],
        )

    def _fetch(self, expense_id: int) -> Union[Expense, JSONResponse]:
        """Look up an expense, or build the 404/500 response for the failure."""
        try:
            return self._repository.get_by_id(expense_id)
        except ExpenseNotFoundError:
            self._logger.warning("Expense not found: %d", expense_id)
            return _error(status.HTTP_404_NOT_FOUND, ERR_NOT_FOUND)
        except Exception:
            self._logger.exception("Failed to get expense %d", expense_id)
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, ERR_GET_FAILED)
