"""Running totals over a transaction list."""

from __future__ import annotations

from typing import Iterable

from kz_tax_engine.calculators.line_builder import PaymentLineBuilder
from kz_tax_engine.calculators.types import (
    ZERO,
    Transaction,
    TransactionTotals,
    TransactionType,
)


def summarize_transactions(transactions: Iterable[Transaction] | None) -> TransactionTotals:
    """Balance, income, expense and taxable income of ``transactions``.

    Balance = income - expense. Taxable income counts income flagged
    taxable only.
    """
    total_income = ZERO
    total_expense = ZERO
    taxable_income = ZERO

    for txn in transactions or ():
        if txn.type is TransactionType.INCOME:
            total_income += txn.amount
            if txn.counts_for_tax:
                taxable_income += txn.amount
        else:
            total_expense += txn.amount

    round_ = PaymentLineBuilder.round_to_tiyn
    return TransactionTotals(
        balance=round_(total_income - total_expense),
        total_income=round_(total_income),
        total_expense=round_(total_expense),
        taxable_income=round_(taxable_income),
    )
