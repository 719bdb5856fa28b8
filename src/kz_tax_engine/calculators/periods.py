"""Quarter, half-year and year tax buckets."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Iterable

from kz_tax_engine.calculators.deadlines import (
    Clock,
    MonthRange,
    SystemClock,
    container_class,
    evaluate_deadlines,
    h1_deadlines,
    h2_deadlines,
    worst_urgency,
)
from kz_tax_engine.calculators.line_builder import PaymentLineBuilder
from kz_tax_engine.calculators.types import ZERO, PeriodStats, TaxStats, Transaction, to_decimal

QUARTERS: dict[str, MonthRange] = {
    "q1": MonthRange(1, 3),
    "q2": MonthRange(4, 6),
    "q3": MonthRange(7, 9),
    "q4": MonthRange(10, 12),
}

HALVES: dict[str, MonthRange] = {
    "h1": MonthRange(1, 6),
    "h2": MonthRange(7, 12),
}

DEFAULT_STATUSES: dict[str, str] = {
    "q1": "Накопление",
    "q2": "Ожидание",
    "q3": "Ожидание",
    "q4": "Ожидание",
    "h1": "В процессе",
    "h2": "Ожидание",
    "year": "Всего",
}

# Product-specific labels for particular years, applied after aggregation
STATUS_OVERRIDES: dict[int, dict[str, str]] = {
    2026: {
        "q1": "Текущий квартал",
        "h1": "В процессе накопления",
    },
}


def _bucket_key(month: int, ranges: dict[str, MonthRange]) -> str:
    for key, months in ranges.items():
        if months.contains(month):
            return key
    raise ValueError(f"Month out of range: {month}")


def period_statuses(year: int) -> dict[str, str]:
    """Status labels for every bucket of ``year``."""
    return {**DEFAULT_STATUSES, **STATUS_OVERRIDES.get(year, {})}


def get_tax_stats(
    transactions: Iterable[Transaction] | None,
    year: int = 2026,
    tax_rate: Decimal | int | float | str = 4,
    *,
    clock: Clock | None = None,
) -> TaxStats:
    """Bucket taxable income of ``year`` and compute tax per bucket.

    Only taxable income counts. Each transaction lands in exactly one
    quarter, one half-year and the year total. Half-years also carry their
    filing deadlines, evaluated against ``clock``.

    Args:
        transactions: Transactions from the store; None is treated as empty
        year: Calendar year to aggregate
        tax_rate: Tax rate in percent, e.g. 4
        clock: Source of "now" for deadline urgency (defaults to wall clock)

    Returns:
        Fresh TaxStats; no state is kept between calls
    """
    rate_multiplier = to_decimal(tax_rate) / 100
    now = (clock or SystemClock()).now()

    income: dict[str, Decimal] = {key: ZERO for key in DEFAULT_STATUSES}
    tax: dict[str, Decimal] = {key: ZERO for key in DEFAULT_STATUSES}

    for txn in transactions or ():
        if txn.date is None or not txn.counts_for_tax or txn.date.year != year:
            continue

        txn_tax = txn.amount * rate_multiplier
        month = txn.date.month
        for key in ("year", _bucket_key(month, QUARTERS), _bucket_key(month, HALVES)):
            income[key] += txn.amount
            tax[key] += txn_tax

    statuses = period_statuses(year)
    buckets = {
        key: PeriodStats(
            income=PaymentLineBuilder.round_to_tiyn(income[key]),
            tax=PaymentLineBuilder.round_to_tiyn(tax[key]),
            status=statuses[key],
        )
        for key in DEFAULT_STATUSES
    }

    for key, months in QUARTERS.items():
        buckets[key] = replace(
            buckets[key], container_class=container_class(year, months, now)
        )

    half_deadlines = {"h1": h1_deadlines(year), "h2": h2_deadlines(year)}
    for key, months in HALVES.items():
        deadlines = evaluate_deadlines(half_deadlines[key], now)
        buckets[key] = replace(
            buckets[key],
            deadlines=deadlines,
            container_class=container_class(year, months, now, worst_urgency(deadlines)),
        )

    return TaxStats(**buckets)
