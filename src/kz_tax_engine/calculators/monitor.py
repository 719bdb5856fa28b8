"""Tax monitor combining business income with other taxable income."""

from __future__ import annotations

from decimal import Decimal

from kz_tax_engine.calculators.constants import TAX_CONSTANTS_2026, TaxConstants
from kz_tax_engine.calculators.line_builder import PaymentLineBuilder
from kz_tax_engine.calculators.obligations import calculate_monthly_obligations
from kz_tax_engine.calculators.types import (
    ZERO,
    MonthlyCalculationInput,
    PaymentLine,
    TaxMonitorResult,
    to_decimal,
)

# Freelance and investment income pays ИПН at a flat rate
OTHER_INCOME_IPN_RATE = Decimal("0.10")


def build_tax_monitor(
    business_income: Decimal | int | float | str,
    other_taxable_income: Decimal | int | float | str = 0,
    tax_rate: Decimal | int | float | str = 4,
    constants: TaxConstants = TAX_CONSTANTS_2026,
) -> TaxMonitorResult | None:
    """Combine the five business payments with ИПН on other income.

    Business income pays ОПВ, ОПВР, ВОСМС, СО and ИПН at the user's rate.
    Other taxable income adds a single ИПН line at 10%. Returns None when
    there is no income of either kind.
    """
    business = to_decimal(business_income)
    other = to_decimal(other_taxable_income)
    has_business_income = business > 0
    has_other_income = other > 0

    if not has_business_income and not has_other_income:
        return None

    business_result = None
    payments: list[PaymentLine] = []
    if has_business_income:
        business_result = calculate_monthly_obligations(
            MonthlyCalculationInput(monthly_income=business, custom_tax_rate=tax_rate),
            constants,
        )
        payments.extend(business_result.all_payments)

    other_ipn = ZERO
    if has_other_income:
        rate_text = PaymentLineBuilder.format_percent(OTHER_INCOME_IPN_RATE)
        other_line = PaymentLineBuilder.create_rate_line(
            other,
            OTHER_INCOME_IPN_RATE,
            label=f"ИПН {rate_text} (фриланс/инвест.)",
            tooltip=(
                "Доход от инвестиций, фриланса и другого облагается ИПН "
                f"по ставке {rate_text}."
            ),
            base=f"{rate_text} от прочего дохода",
        )
        other_ipn = other_line.amount
        payments.append(other_line)

    total_tax = business_result.tax.total_tax if business_result else ZERO
    total_monthly = business_result.monthly.total_monthly if business_result else ZERO
    gross_income = PaymentLineBuilder.round_to_tiyn(
        max(business, ZERO) + max(other, ZERO)
    )

    return TaxMonitorResult(
        all_payments=tuple(payments),
        gross_income=gross_income,
        tax_reserve=PaymentLineBuilder.sum_lines(payments),
        net_income=PaymentLineBuilder.round_to_tiyn(
            gross_income - total_monthly - total_tax - other_ipn
        ),
        has_business_income=has_business_income,
        has_other_income=has_other_income,
        other_ipn=other_ipn,
        business=business_result,
    )
