"""Tests for transaction totals."""

from datetime import date
from decimal import Decimal

from kz_tax_engine.calculators.balances import summarize_transactions

from tests.conftest import expense, income


class TestSummarizeTransactions:
    """Test balance, income, expense and taxable income."""

    def test_totals(self):
        txns = [
            income("100000", date(2026, 1, 1)),
            income("50000.50", date(2026, 1, 2), taxable=False),
            expense("30000.25", date(2026, 1, 3)),
        ]
        totals = summarize_transactions(txns)

        assert totals.total_income == Decimal("150000.50")
        assert totals.total_expense == Decimal("30000.25")
        assert totals.balance == Decimal("120000.25")
        assert totals.taxable_income == Decimal("100000.00")

    def test_empty(self):
        for txns in ([], None):
            totals = summarize_transactions(txns)
            assert totals.balance == 0
            assert totals.taxable_income == 0

    def test_negative_balance(self):
        totals = summarize_transactions([expense("10", date(2026, 1, 1))])
        assert totals.balance == Decimal("-10.00")

    def test_to_dict(self):
        data = summarize_transactions([income("10", date(2026, 1, 1))]).to_dict()
        assert data == {
            "balance": Decimal("10.00"),
            "totalIncome": Decimal("10.00"),
            "totalExpense": Decimal("0.00"),
            "taxableIncome": Decimal("10.00"),
        }
