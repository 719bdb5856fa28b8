"""Protocols and types for the transaction and profile stores.

The service layer depends on these protocols only; the calculators never
touch a store and take plain value objects instead.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, Protocol

from kz_tax_engine.calculators.types import MonthlyCalculationInput, Transaction


class TransactionNotFoundError(Exception):
    """Raised when a transaction does not exist for the user."""

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction {transaction_id} not found")


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range."""

    start: datetime.date
    end: datetime.date

    @classmethod
    def for_month(cls, year: int, month: int) -> DateRange:
        first = datetime.date(year, month, 1)
        if month == 12:
            next_first = datetime.date(year + 1, 1, 1)
        else:
            next_first = datetime.date(year, month + 1, 1)
        return cls(first, next_first - datetime.timedelta(days=1))

    @classmethod
    def for_year(cls, year: int) -> DateRange:
        return cls(datetime.date(year, 1, 1), datetime.date(year, 12, 31))


@dataclass(frozen=True)
class TransactionFilter:
    """Query options for listing transactions.

    ``type`` is "all", "income" or "expense". ``taxable_only`` narrows to
    taxable entries when set; unset means no taxable filter at all.
    """

    type: str = "all"
    category: str | None = None
    taxable_only: bool = False
    date_range: DateRange | None = None
    exclude_future: bool = False
    today: datetime.date | None = None


@dataclass(frozen=True)
class NewTransaction:
    """Fields of a transaction being created."""

    amount: Decimal
    type: str
    category: str
    date: datetime.date
    is_taxable: bool = False
    comment: str = ""


@dataclass(frozen=True)
class UserProfile:
    """Profile settings merged over defaults."""

    tax_rate: Decimal = Decimal("4")
    is_business_mode: bool = False
    onboarding_complete: bool = False
    born_after_1975: bool = True
    is_pensioner: bool = False
    is_disabled: bool = False
    has_employees: bool = False
    employee_count: int = 0
    total_employee_salary: Decimal = Decimal("0")

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def to_calculation_input(self, monthly_income: Decimal) -> MonthlyCalculationInput:
        """Build the calculator input for one month of business income."""
        return MonthlyCalculationInput(
            monthly_income=monthly_income,
            custom_tax_rate=self.tax_rate,
            is_pensioner=self.is_pensioner,
            is_disabled=self.is_disabled,
            born_after_1975=self.born_after_1975,
            has_employees=self.has_employees,
            total_employee_salary=self.total_employee_salary,
        )

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.field_names()}


DEFAULT_PROFILE = UserProfile()


class TransactionRepository(Protocol):
    """Protocol for the transaction store."""

    async def add(self, user_id: str, data: NewTransaction) -> Transaction:
        """Persist a new transaction and return it with its id."""
        ...

    async def get(self, user_id: str, transaction_id: str) -> Transaction:
        """Fetch one transaction.

        Raises:
            TransactionNotFoundError: If it does not exist for the user
        """
        ...

    async def list_transactions(
        self, user_id: str, filters: TransactionFilter | None = None
    ) -> list[Transaction]:
        """List transactions, newest first."""
        ...

    async def update(
        self, user_id: str, transaction_id: str, changes: dict[str, Any]
    ) -> Transaction:
        """Apply field changes and return the updated transaction."""
        ...

    async def delete(self, user_id: str, transaction_id: str) -> None:
        """Delete a transaction."""
        ...


class ProfileRepository(Protocol):
    """Protocol for the user-profile store."""

    async def get(self, user_id: str) -> UserProfile:
        """Stored values merged over DEFAULT_PROFILE."""
        ...

    async def update(self, user_id: str, changes: dict[str, Any]) -> UserProfile:
        """Upsert the given fields and return the merged profile."""
        ...
