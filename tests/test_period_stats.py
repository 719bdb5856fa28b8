"""Tests for the period tax aggregator."""

from datetime import date, datetime
from decimal import Decimal

from kz_tax_engine.calculators.deadlines import (
    ACTIVE_CONTAINER,
    COMPLETED_CONTAINER,
    CRITICAL_CONTAINER,
    DEFAULT_CONTAINER,
    WARNING_CONTAINER,
    FixedClock,
)
from kz_tax_engine.calculators.periods import get_tax_stats, period_statuses
from kz_tax_engine.calculators.types import Transaction

from tests.conftest import expense, income


class TestBucketing:
    """Test quarter / half-year / year accumulation."""

    def test_buckets(self, transactions_2026, clock):
        stats = get_tax_stats(transactions_2026, 2026, 4, clock=clock)

        assert stats.q1.income == Decimal("300000.00")
        assert stats.q2.income == Decimal("300000.00")
        assert stats.q3.income == Decimal("400000.00")
        assert stats.q4.income == Decimal("500000.00")
        assert stats.h1.income == Decimal("600000.00")
        assert stats.h2.income == Decimal("900000.00")
        assert stats.year.income == Decimal("1500000.00")

        assert stats.q1.tax == Decimal("12000.00")
        assert stats.h2.tax == Decimal("36000.00")
        assert stats.year.tax == Decimal("60000.00")

    def test_sums_match_year(self, transactions_2026, clock):
        stats = get_tax_stats(transactions_2026, 2026, 3, clock=clock)
        assert sum(q.income for q in stats.quarters) == stats.year.income
        assert sum(h.income for h in stats.halves) == stats.year.income

    def test_june_30_and_july_1_split(self, clock):
        """30 June is H1 only, 1 July is H2 only."""
        june = get_tax_stats([income("1000", date(2026, 6, 30))], 2026, 4, clock=clock)
        assert june.h1.income == Decimal("1000.00")
        assert june.h2.income == 0
        assert june.q2.income == Decimal("1000.00")
        assert june.q3.income == 0

        july = get_tax_stats([income("1000", date(2026, 7, 1))], 2026, 4, clock=clock)
        assert july.h1.income == 0
        assert july.h2.income == Decimal("1000.00")
        assert july.q3.income == Decimal("1000.00")

    def test_expense_and_non_taxable_ignored(self, clock):
        txns = [
            expense("1000", date(2026, 2, 1)),
            income("2000", date(2026, 2, 1), taxable=False),
            Transaction(amount=Decimal("3000"), type="income", date=date(2026, 2, 1)),
        ]
        stats = get_tax_stats(txns, 2026, 4, clock=clock)
        assert stats.year.income == 0
        assert stats.year.tax == 0

    def test_other_years_ignored(self, clock):
        txns = [income("1000", date(2025, 12, 31)), income("1000", date(2027, 1, 1))]
        assert get_tax_stats(txns, 2026, 4, clock=clock).year.income == 0

    def test_undated_transaction_ignored(self, clock):
        txns = [Transaction(amount=Decimal("1000"), type="income", is_taxable=True)]
        assert get_tax_stats(txns, 2026, 4, clock=clock).year.income == 0

    def test_empty_and_none(self, clock):
        for txns in ([], None):
            stats = get_tax_stats(txns, 2026, 4, clock=clock)
            assert all(p.income == 0 and p.tax == 0 for p in (*stats.quarters, *stats.halves, stats.year))

    def test_rounding_at_the_end(self, clock):
        """Bucket tax is rounded once after accumulation."""
        txns = [income("16.75", date(2026, 1, day)) for day in (1, 2, 3)]
        stats = get_tax_stats(txns, 2026, 3, clock=clock)
        assert stats.q1.income == Decimal("50.25")
        # 3 x 0.5025 = 1.5075, not 3 x 0.50
        assert stats.q1.tax == Decimal("1.51")

    def test_sub_tiyn_amounts_keep_buckets_consistent(self, clock):
        """Half-tiyn incomes in two quarters still add up to the year."""
        txns = [income("0.005", date(2026, 1, 1)), income("0.005", date(2026, 4, 1))]
        stats = get_tax_stats(txns, 2026, 4, clock=clock)
        assert stats.q1.income + stats.q2.income == stats.year.income == Decimal("0.02")
        assert stats.h1.income + stats.h2.income == stats.year.income


class TestStatuses:
    """Test status labels."""

    def test_2026_overrides(self, clock):
        stats = get_tax_stats([], 2026, 4, clock=clock)
        assert stats.q1.status == "Текущий квартал"
        assert stats.h1.status == "В процессе накопления"
        assert stats.q2.status == "Ожидание"
        assert stats.year.status == "Всего"

    def test_default_statuses_other_years(self, clock):
        stats = get_tax_stats([], 2025, 4, clock=clock)
        assert stats.q1.status == "Накопление"
        assert stats.h1.status == "В процессе"

    def test_period_statuses_table(self):
        assert period_statuses(2026)["q1"] == "Текущий квартал"
        assert period_statuses(2030)["q1"] == "Накопление"


class TestStyling:
    """Test deadlines and container classes on buckets."""

    def test_containers_early_in_year(self, clock):
        stats = get_tax_stats([], 2026, 4, clock=clock)
        assert stats.q1.container_class == ACTIVE_CONTAINER
        assert stats.q2.container_class == DEFAULT_CONTAINER
        assert stats.h1.container_class == ACTIVE_CONTAINER
        assert stats.h2.container_class == DEFAULT_CONTAINER
        assert stats.year.container_class is None

    def test_h1_critical_before_august_deadline(self):
        stats = get_tax_stats([], 2026, 4, clock=FixedClock.on(date(2026, 8, 10)))
        assert stats.h1.deadlines.status.value == "critical"
        assert stats.h1.container_class == CRITICAL_CONTAINER
        assert stats.q1.container_class == COMPLETED_CONTAINER
        assert stats.q3.container_class == ACTIVE_CONTAINER

    def test_h1_warning_in_july(self):
        stats = get_tax_stats([], 2026, 4, clock=FixedClock(datetime(2026, 7, 20, 12, 0)))
        assert stats.h1.deadlines.status.value == "normal"
        assert stats.h1.container_class == WARNING_CONTAINER

    def test_previous_year_h2_deadline(self):
        """H2 of 2025 is due in February 2026."""
        stats = get_tax_stats([], 2025, 4, clock=FixedClock.on(date(2026, 2, 10)))
        assert stats.h2.container_class == CRITICAL_CONTAINER
        assert stats.h1.container_class == CRITICAL_CONTAINER  # overdue since August 2025

    def test_to_dict_shape(self, transactions_2026, clock):
        data = get_tax_stats(transactions_2026, 2026, 4, clock=clock).to_dict()
        assert set(data) == {"q1", "q2", "q3", "q4", "h1", "h2", "year"}
        assert set(data["q1"]) == {"income", "tax", "status", "containerClass"}
        assert set(data["h1"]) == {"income", "tax", "status", "containerClass", "deadlines"}
        assert set(data["year"]) == {"income", "tax", "status"}
        assert data["h1"]["deadlines"]["submission"] == "15.08.2026"
        assert set(data["h1"]["deadlines"]["ui"]) == {"submission", "payment"}

    def test_deterministic_with_fixed_clock(self, transactions_2026, clock):
        first = get_tax_stats(transactions_2026, 2026, 4, clock=clock).to_dict()
        second = get_tax_stats(transactions_2026, 2026, 4, clock=clock).to_dict()
        assert first == second
