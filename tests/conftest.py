"""Pytest fixtures for tax engine tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from kz_tax_engine.calculators.constants import TAX_CONSTANTS_2026, TaxConstants
from kz_tax_engine.calculators.deadlines import FixedClock
from kz_tax_engine.calculators.types import Transaction, TransactionType


@pytest.fixture
def constants() -> TaxConstants:
    """2026 tax constants."""
    return TAX_CONSTANTS_2026


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to 10 March 2026 (Q1 active, no deadline close)."""
    return FixedClock.on(date(2026, 3, 10))


def income(amount: str, day: date, taxable: bool = True, category: str = "Зарплата") -> Transaction:
    """Build an income transaction."""
    return Transaction(
        amount=Decimal(amount),
        type=TransactionType.INCOME,
        category=category,
        date=day,
        is_taxable=taxable,
    )


def expense(amount: str, day: date, category: str = "Продукты") -> Transaction:
    """Build an expense transaction."""
    return Transaction(
        amount=Decimal(amount),
        type=TransactionType.EXPENSE,
        category=category,
        date=day,
        is_taxable=False,
    )


@pytest.fixture
def transactions_2026() -> list[Transaction]:
    """A year of mixed transactions."""
    return [
        income("100000", date(2026, 1, 15)),
        income("200000", date(2026, 3, 31)),
        income("300000", date(2026, 6, 30)),
        income("400000", date(2026, 7, 1)),
        income("500000", date(2026, 12, 31)),
        income("999999", date(2026, 5, 5), taxable=False),
        expense("50000", date(2026, 2, 1)),
        income("700000", date(2025, 12, 31)),
        income("800000", date(2027, 1, 1)),
    ]
