"""Payment line builder with tiyn rounding and ru-KZ formatting."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from kz_tax_engine.calculators.types import ZERO, PaymentLine

# ru-KZ groups thousands with a no-break space
GROUP_SEPARATOR = "\u00a0"
CURRENCY_SIGN = "₸"


class PaymentLineBuilder:
    """Builds payment lines and formats the numbers shown in them.

    Rounding:
    - KZT to 2 decimals (tiyn), half-up
    - Every line amount is rounded when the line is created
    - Totals are sums of already-rounded lines, rounded again
    """

    OUTPUT_PRECISION = Decimal("0.01")

    @staticmethod
    def round_to_tiyn(amount: Decimal) -> Decimal:
        """Round amount to 2 decimal places (tiyn)."""
        return amount.quantize(PaymentLineBuilder.OUTPUT_PRECISION, rounding=ROUND_HALF_UP)

    @staticmethod
    def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
        """Sum already-rounded amounts and round the total."""
        return PaymentLineBuilder.round_to_tiyn(sum(amounts, ZERO))

    @staticmethod
    def sum_lines(lines: Iterable[PaymentLine]) -> Decimal:
        return PaymentLineBuilder.sum_amounts(line.amount for line in lines)

    @staticmethod
    def create_line(amount: Decimal, label: str, tooltip: str, base: str) -> PaymentLine:
        """Create a payment line (non-negative, rounded amount)."""
        return PaymentLine(
            amount=PaymentLineBuilder.round_to_tiyn(max(amount, ZERO)),
            label=label,
            tooltip=tooltip,
            base=base,
        )

    @staticmethod
    def create_rate_line(
        base_amount: Decimal,
        rate: Decimal,
        label: str,
        tooltip: str,
        base: str,
    ) -> PaymentLine:
        """Create a line for ``base_amount * rate``."""
        return PaymentLineBuilder.create_line(base_amount * rate, label, tooltip, base)

    @staticmethod
    def format_number(value: Decimal) -> str:
        """Format like ``toLocaleString('ru-KZ')``: 4 250 000, 12,5."""
        rounded = PaymentLineBuilder.round_to_tiyn(value)
        if rounded == rounded.to_integral_value():
            text = f"{int(rounded):,}"
        else:
            text = f"{rounded:,.2f}".rstrip("0")
        return text.replace(",", GROUP_SEPARATOR).replace(".", ",")

    @staticmethod
    def format_tenge(value: Decimal) -> str:
        return f"{PaymentLineBuilder.format_number(value)} {CURRENCY_SIGN}"

    @staticmethod
    def format_percent(rate: Decimal) -> str:
        """Format a fractional rate as a percent string: 0.035 -> '3.5%'."""
        return f"{PaymentLineBuilder.format_plain(rate * 100)}%"

    @staticmethod
    def format_plain(value: Decimal) -> str:
        """Shortest plain representation: Decimal('10.00') -> '10'."""
        normalized = value.normalize()
        if normalized == normalized.to_integral_value():
            return str(int(normalized))
        return f"{normalized:f}"
