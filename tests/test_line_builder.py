"""Tests for payment line builder."""

from decimal import Decimal

from kz_tax_engine.calculators.line_builder import PaymentLineBuilder


class TestRounding:
    """Test tiyn rounding and sums."""

    def test_round_to_tiyn(self):
        """Test rounding to 2 decimal places."""
        assert PaymentLineBuilder.round_to_tiyn(Decimal("10.124")) == Decimal("10.12")
        assert PaymentLineBuilder.round_to_tiyn(Decimal("10.125")) == Decimal("10.13")
        assert PaymentLineBuilder.round_to_tiyn(Decimal("10.135")) == Decimal("10.14")
        assert PaymentLineBuilder.round_to_tiyn(Decimal("-0.005")) == Decimal("-0.01")

    def test_sum_amounts_is_sum_of_rounded(self):
        """Sum is taken over the given (already rounded) amounts."""
        total = PaymentLineBuilder.sum_amounts([Decimal("0.10"), Decimal("0.20"), Decimal("0.30")])
        assert total == Decimal("0.60")

    def test_sum_amounts_empty(self):
        """Empty sum is zero."""
        assert PaymentLineBuilder.sum_amounts([]) == Decimal("0.00")

    def test_create_line_rounds_and_floors_at_zero(self):
        """Line amounts are rounded and never negative."""
        line = PaymentLineBuilder.create_line(Decimal("12.345"), "L", "T", "B")
        assert line.amount == Decimal("12.35")

        negative = PaymentLineBuilder.create_line(Decimal("-5"), "L", "T", "B")
        assert negative.amount == Decimal("0.00")

    def test_create_rate_line(self):
        """Rate line multiplies base by rate."""
        line = PaymentLineBuilder.create_rate_line(
            Decimal("500000"), Decimal("0.035"), label="ОПВР", tooltip="t", base="b"
        )
        assert line.amount == Decimal("17500.00")
        assert line.label == "ОПВР"
        assert line.base == "b"


class TestFormatting:
    """Test ru-KZ number formatting."""

    def test_format_number_groups_thousands(self):
        """Thousands are grouped with a no-break space."""
        assert PaymentLineBuilder.format_number(Decimal("4250000")) == "4\u00a0250\u00a0000"
        assert PaymentLineBuilder.format_number(Decimal("850")) == "850"

    def test_format_number_decimal_comma(self):
        """Fractions use a comma and drop trailing zeros."""
        assert PaymentLineBuilder.format_number(Decimal("12.50")) == "12,5"
        assert PaymentLineBuilder.format_number(Decimal("1234.56")) == "1\u00a0234,56"

    def test_format_tenge(self):
        """Tenge amounts carry the currency sign."""
        assert PaymentLineBuilder.format_tenge(Decimal("5950")) == "5\u00a0950 ₸"

    def test_format_percent(self):
        """Fractional rates render as percents."""
        assert PaymentLineBuilder.format_percent(Decimal("0.035")) == "3.5%"
        assert PaymentLineBuilder.format_percent(Decimal("0.10")) == "10%"
        assert PaymentLineBuilder.format_percent(Decimal("0.02")) == "2%"

    def test_format_plain(self):
        """Plain format strips insignificant zeros."""
        assert PaymentLineBuilder.format_plain(Decimal("10.00")) == "10"
        assert PaymentLineBuilder.format_plain(Decimal("1.40")) == "1.4"
        assert PaymentLineBuilder.format_plain(Decimal("50")) == "50"
