"""Transaction records owned by the transaction store."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import Boolean, CheckConstraint, Date, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kz_tax_engine.calculators.types import Transaction, TransactionType
from kz_tax_engine.models.base import Base, TimestampMixin


class TransactionRecord(Base, TimestampMixin):
    """An income or expense entry of one user."""

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transaction_amount_positive"),
        CheckConstraint("type IN ('income', 'expense')", name="ck_transaction_type"),
        Index("ix_transactions_user_date", "user_id", "date"),
    )

    transaction_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    occurred_on: Mapped[date] = mapped_column("date", Date, nullable=False)
    is_taxable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def to_domain(self) -> Transaction:
        """Convert to the value object the calculators consume."""
        return Transaction(
            id=str(self.transaction_id),
            amount=self.amount,
            type=TransactionType(self.type),
            category=self.category,
            date=self.occurred_on,
            is_taxable=self.is_taxable,
            comment=self.comment,
        )
