"""
FastAPI router for the expense resource.

All routes delegate to ExpenseHandler. No business logic here.
Bodies are read raw and path ids taken as text so that the handler,
not the framework, decides what a bad request looks like.
The handler runs in the thread pool since store calls block.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from expense_api.interfaces.expenses.dependencies import get_expense_handler
from expense_api.interfaces.expenses.handler import ExpenseHandler
from expense_api.interfaces.expenses.schemas import (
    CreateExpenseRequest,
    ErrorResponse,
    ExpenseResponse,
    UpdateExpenseRequest,
)
from expense_api.shared.security.auth import require_token

router = APIRouter(
    prefix="/expenses",
    tags=["expenses"],
    dependencies=[Depends(require_token)],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def _json_body(model: type) -> dict[str, Any]:
    """OpenAPI request body entry for a raw-read JSON body."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


@router.post(
    "/",
    status_code=201,
    response_model=ExpenseResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Create an expense",
    openapi_extra=_json_body(CreateExpenseRequest),
)
async def create_expense(
    request: Request,
    handler: ExpenseHandler = Depends(get_expense_handler),
) -> JSONResponse:
    """Create an expense; the store assigns its id."""
    body = await request.body()
    return await run_in_threadpool(handler.create, body)


@router.get(
    "/{expense_id}",
    response_model=ExpenseResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get an expense",
)
async def get_expense(
    expense_id: str,
    handler: ExpenseHandler = Depends(get_expense_handler),
) -> JSONResponse:
    """Return a single expense by id."""
    return await run_in_threadpool(handler.get, expense_id)


@router.put(
    "/{expense_id}",
    response_model=ExpenseResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Replace an expense",
    openapi_extra=_json_body(UpdateExpenseRequest),
)
async def update_expense(
    expense_id: str,
    request: Request,
    handler: ExpenseHandler = Depends(get_expense_handler),
) -> JSONResponse:
    """Replace every field of an existing expense."""
    body = await request.body()
    return await run_in_threadpool(handler.update, expense_id, body)


@router.get(
    "/",
    response_model=list[ExpenseResponse],
    summary="List expenses",
)
async def list_expenses(
    handler: ExpenseHandler = Depends(get_expense_handler),
) -> JSONResponse:
    """Return every expense in store order."""
    return await run_in_threadpool(handler.list)
