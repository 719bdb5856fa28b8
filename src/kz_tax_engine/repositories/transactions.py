"""SQLAlchemy-backed transaction store."""

from __future__ import annotations

import datetime
import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kz_tax_engine.calculators.types import Transaction, TransactionType
from kz_tax_engine.models import TransactionRecord
from kz_tax_engine.repositories.base import (
    NewTransaction,
    TransactionFilter,
    TransactionNotFoundError,
)

logger = logging.getLogger(__name__)

# API field name -> ORM attribute
_UPDATABLE_FIELDS = {
    "amount": "amount",
    "type": "type",
    "category": "category",
    "date": "occurred_on",
    "is_taxable": "is_taxable",
    "comment": "comment",
}


class SqlTransactionRepository:
    """Transaction store on an AsyncSession.

    The repository flushes but never commits; the caller owns the
    transaction boundary.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, user_id: str, data: NewTransaction) -> Transaction:
        record = TransactionRecord(
            user_id=user_id,
            amount=data.amount,
            type=TransactionType(data.type).value,
            category=data.category,
            occurred_on=data.date,
            is_taxable=data.is_taxable,
            comment=data.comment,
        )
        self.session.add(record)
        await self.session.flush()
        logger.info(
            "Added %s transaction %s for user %s",
            record.type,
            record.transaction_id,
            user_id,
        )
        return record.to_domain()

    async def get(self, user_id: str, transaction_id: str) -> Transaction:
        record = await self._get_record(user_id, transaction_id)
        return record.to_domain()

    async def list_transactions(
        self, user_id: str, filters: TransactionFilter | None = None
    ) -> list[Transaction]:
        filters = filters or TransactionFilter()
        query = select(TransactionRecord).where(TransactionRecord.user_id == user_id)

        if filters.type != "all":
            query = query.where(TransactionRecord.type == TransactionType(filters.type).value)
        if filters.category:
            query = query.where(TransactionRecord.category == filters.category)
        if filters.taxable_only:
            query = query.where(TransactionRecord.is_taxable.is_(True))
        if filters.date_range is not None:
            query = query.where(
                TransactionRecord.occurred_on >= filters.date_range.start,
                TransactionRecord.occurred_on <= filters.date_range.end,
            )
        if filters.exclude_future:
            today = filters.today or datetime.date.today()
            query = query.where(TransactionRecord.occurred_on <= today)

        query = query.order_by(
            TransactionRecord.occurred_on.desc(),
            TransactionRecord.created_at.desc(),
        )
        result = await self.session.execute(query)
        return [record.to_domain() for record in result.scalars().all()]

    async def update(
        self, user_id: str, transaction_id: str, changes: dict[str, Any]
    ) -> Transaction:
        record = await self._get_record(user_id, transaction_id)
        for name, value in changes.items():
            if name not in _UPDATABLE_FIELDS:
                raise ValueError(f"Field '{name}' cannot be updated")
            if name == "type":
                value = TransactionType(value).value
            setattr(record, _UPDATABLE_FIELDS[name], value)
        await self.session.flush()
        return record.to_domain()

    async def delete(self, user_id: str, transaction_id: str) -> None:
        record = await self._get_record(user_id, transaction_id)
        await self.session.delete(record)
        await self.session.flush()
        logger.info("Deleted transaction %s for user %s", transaction_id, user_id)

    async def _get_record(self, user_id: str, transaction_id: str) -> TransactionRecord:
        try:
            key = UUID(str(transaction_id))
        except ValueError:
            raise TransactionNotFoundError(transaction_id) from None

        result = await self.session.execute(
            select(TransactionRecord).where(
                TransactionRecord.transaction_id == key,
                TransactionRecord.user_id == user_id,
            )
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise TransactionNotFoundError(transaction_id)
        return record
