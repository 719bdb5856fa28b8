"""Dashboard service - combines the stores with the tax calculators."""

from __future__ import annotations

import logging
from decimal import Decimal

from kz_tax_engine.calculators.balances import summarize_transactions
from kz_tax_engine.calculators.constants import get_tax_constants
from kz_tax_engine.calculators.deadlines import Clock, SystemClock
from kz_tax_engine.calculators.monitor import build_tax_monitor
from kz_tax_engine.calculators.obligations import calculate_monthly_obligations
from kz_tax_engine.calculators.periods import get_tax_stats
from kz_tax_engine.calculators.types import (
    MonthlyCalculationResult,
    TaxMonitorResult,
    TaxStats,
    TransactionTotals,
)
from kz_tax_engine.repositories.base import (
    DateRange,
    ProfileRepository,
    TransactionFilter,
    TransactionRepository,
)

logger = logging.getLogger(__name__)


class DashboardService:
    """Read-side views over a user's transactions and profile.

    Operations:
    - get_tax_stats: quarter / half-year / year buckets with deadlines
    - get_monthly_obligations: the five payments for one month's income
    - get_transaction_totals: balance, income, expense and taxable income
    - get_tax_monitor: business payments plus IPN on other income

    The calculators never see a store; this class reads once per call and
    hands plain values over.
    """

    def __init__(
        self,
        transactions: TransactionRepository,
        profiles: ProfileRepository,
        clock: Clock | None = None,
    ):
        self.transactions = transactions
        self.profiles = profiles
        self.clock = clock or SystemClock()

    async def get_tax_stats(self, user_id: str, year: int) -> TaxStats:
        profile = await self.profiles.get(user_id)
        txns = await self.transactions.list_transactions(
            user_id,
            TransactionFilter(type="income", date_range=DateRange.for_year(year)),
        )
        logger.debug("Aggregating %d transactions for user %s, year %d", len(txns), user_id, year)
        return get_tax_stats(txns, year, profile.tax_rate, clock=self.clock)

    async def get_monthly_obligations(
        self, user_id: str, year: int, month: int
    ) -> MonthlyCalculationResult:
        """Obligations for the taxable income booked in ``year``/``month``.

        Raises:
            TaxConstantsNotFoundError: If no constants exist for ``year``
            ValueError: If ``month`` is not 1..12
        """
        constants = get_tax_constants(year)
        profile = await self.profiles.get(user_id)
        income = await self._taxable_income(user_id, DateRange.for_month(year, month))
        return calculate_monthly_obligations(
            profile.to_calculation_input(income), constants
        )

    async def get_transaction_totals(
        self, user_id: str, filters: TransactionFilter | None = None
    ) -> TransactionTotals:
        txns = await self.transactions.list_transactions(user_id, filters)
        return summarize_transactions(txns)

    async def get_tax_monitor(
        self,
        user_id: str,
        year: int,
        month: int,
        other_taxable_income: Decimal | int = 0,
    ) -> TaxMonitorResult | None:
        """Monitor for one month.

        In business mode the month's taxable income is business income;
        otherwise it is counted as other taxable income (IPN only).
        """
        constants = get_tax_constants(year)
        profile = await self.profiles.get(user_id)
        income = await self._taxable_income(user_id, DateRange.for_month(year, month))
        if profile.is_business_mode:
            business, other = income, Decimal(other_taxable_income)
        else:
            business, other = Decimal(0), income + Decimal(other_taxable_income)
        return build_tax_monitor(business, other, profile.tax_rate, constants)

    async def _taxable_income(self, user_id: str, date_range: DateRange) -> Decimal:
        txns = await self.transactions.list_transactions(
            user_id,
            TransactionFilter(type="income", taxable_only=True, date_range=date_range),
        )
        return summarize_transactions(txns).taxable_income
