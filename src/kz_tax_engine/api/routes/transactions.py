"""Transaction CRUD endpoints."""

import datetime
from typing import Annotated, Literal

from fastapi import APIRouter, HTTPException, Path, Query, status

from kz_tax_engine.api.dependencies import DbSession, Transactions, UserId
from kz_tax_engine.api.schemas import (
    ErrorResponse,
    TransactionCreate,
    TransactionListResponse,
    TransactionResponse,
    TransactionUpdate,
)
from kz_tax_engine.calculators.balances import summarize_transactions
from kz_tax_engine.calculators.types import Transaction
from kz_tax_engine.repositories import (
    DateRange,
    NewTransaction,
    TransactionFilter,
    TransactionNotFoundError,
)

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _to_response(txn: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=txn.id,
        amount=txn.amount,
        type=txn.type.value,
        category=txn.category,
        date=txn.date,
        is_taxable=bool(txn.is_taxable),
        comment=txn.comment,
    )


def _not_found(exc: TransactionNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_transaction(
    db: DbSession,
    repo: Transactions,
    user_id: UserId,
    payload: TransactionCreate,
) -> TransactionResponse:
    """Record a new income or expense."""
    txn = await repo.add(
        user_id,
        NewTransaction(
            amount=payload.amount,
            type=payload.type,
            category=payload.category,
            date=payload.date,
            is_taxable=payload.is_taxable,
            comment=payload.comment,
        ),
    )
    await db.commit()
    return _to_response(txn)


@router.get(
    "",
    response_model=TransactionListResponse,
    responses={400: {"model": ErrorResponse}},
)
async def list_transactions(
    repo: Transactions,
    user_id: UserId,
    type_filter: Annotated[
        Literal["all", "income", "expense"], Query(alias="type")
    ] = "all",
    category: str | None = None,
    taxable_only: bool = False,
    start: datetime.date | None = None,
    end: datetime.date | None = None,
    exclude_future: bool = False,
) -> TransactionListResponse:
    """List a user's transactions, newest first, with totals."""
    date_range = None
    if start is not None or end is not None:
        date_range = DateRange(start or datetime.date.min, end or datetime.date.max)

    txns = await repo.list_transactions(
        user_id,
        TransactionFilter(
            type=type_filter,
            category=category,
            taxable_only=taxable_only,
            date_range=date_range,
            exclude_future=exclude_future,
        ),
    )
    totals = summarize_transactions(txns)
    return TransactionListResponse(
        items=[_to_response(txn) for txn in txns],
        total=len(txns),
        balance=totals.balance,
        total_income=totals.total_income,
        total_expense=totals.total_expense,
        taxable_income=totals.taxable_income,
    )


@router.get(
    "/{transaction_id}",
    response_model=TransactionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_transaction(
    repo: Transactions,
    user_id: UserId,
    transaction_id: Annotated[str, Path()],
) -> TransactionResponse:
    """Get a single transaction."""
    try:
        txn = await repo.get(user_id, transaction_id)
    except TransactionNotFoundError as e:
        raise _not_found(e)
    return _to_response(txn)


@router.patch(
    "/{transaction_id}",
    response_model=TransactionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_transaction(
    db: DbSession,
    repo: Transactions,
    user_id: UserId,
    transaction_id: Annotated[str, Path()],
    payload: TransactionUpdate,
) -> TransactionResponse:
    """Update the fields present in the payload."""
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    try:
        txn = await repo.update(user_id, transaction_id, changes)
    except TransactionNotFoundError as e:
        raise _not_found(e)
    await db.commit()
    return _to_response(txn)


@router.delete(
    "/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_transaction(
    db: DbSession,
    repo: Transactions,
    user_id: UserId,
    transaction_id: Annotated[str, Path()],
) -> None:
    """Delete a transaction."""
    try:
        await repo.delete(user_id, transaction_id)
    except TransactionNotFoundError as e:
        raise _not_found(e)
    await db.commit()
