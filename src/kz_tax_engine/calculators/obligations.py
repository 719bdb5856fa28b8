"""Monthly obligations of a sole proprietor (ИП) under the 2026 rules.

Personal payments ("за себя"):
- ОПВ: 10% of income, capped at 50 МЗП, no floor; exempt for pensioners
  and disabled persons
- СО: 5% of income clamped to [1 МЗП, 7 МЗП]; exempt for disabled persons
- ВОСМС: 5% of 1.4 МЗП, fixed
- ОПВР: 3.5% of 1 МЗП, fixed, only for those born after 01.01.1975
- ИПН: income * user rate; at rates <= 3% the tax splits 50/50 into ИПН
  and social tax, the social half reduced by СО

Employer obligations on the payroll total (no caps, no floors):
ИПН 10%, ОПВ 10%, ОПВР 3.5%, СО 5%, ОСМС 3%, ВОСМС 2%.
"""

from __future__ import annotations

from decimal import Decimal

from kz_tax_engine.calculators.constants import TAX_CONSTANTS_2026, TaxConstants
from kz_tax_engine.calculators.line_builder import PaymentLineBuilder
from kz_tax_engine.calculators.types import (
    ZERO,
    CalculationSummary,
    EmployeeObligations,
    MonthlyCalculationInput,
    MonthlyCalculationResult,
    MonthlyPayments,
    PaymentLine,
    TaxBreakdown,
)

SIMPLIFIED_RATE_LIMIT = Decimal("3")
SIMPLIFIED_IPN_SHARE = Decimal("0.5")

_round = PaymentLineBuilder.round_to_tiyn
_pct = PaymentLineBuilder.format_percent
_tenge = PaymentLineBuilder.format_tenge
_plain = PaymentLineBuilder.format_plain


def calculate_employee_obligations(
    total_salary: Decimal,
    constants: TaxConstants = TAX_CONSTANTS_2026,
) -> EmployeeObligations:
    """Employer-side obligations on the aggregate payroll (ФОТ)."""
    c = constants
    salary = max(total_salary, ZERO)
    build = PaymentLineBuilder.create_rate_line

    ipn = build(
        salary,
        c.EMPLOYEE_IPN_RATE,
        label=f"ИПН за работников ({_pct(c.EMPLOYEE_IPN_RATE)})",
        tooltip=(
            "Индивидуальный подоходный налог за работников: "
            f"{_pct(c.EMPLOYEE_IPN_RATE)} от ФОТ."
        ),
        base=f"{_pct(c.EMPLOYEE_IPN_RATE)} от {_tenge(salary)}",
    )
    opv = build(
        salary,
        c.OPV_RATE,
        label=f"ОПВ за работников ({_pct(c.OPV_RATE)})",
        tooltip=f"Обязательные пенсионные взносы за работников: {_pct(c.OPV_RATE)} от ФОТ.",
        base=f"{_pct(c.OPV_RATE)} от ФОТ",
    )
    opvr = build(
        salary,
        c.OPVR_RATE,
        label=f"ОПВР за работников ({_pct(c.OPVR_RATE)})",
        tooltip=(
            "Обязательные профессиональные пенсионные взносы за работников: "
            f"{_pct(c.OPVR_RATE)} от ФОТ."
        ),
        base=f"{_pct(c.OPVR_RATE)} от ФОТ",
    )
    so = build(
        salary,
        c.SO_RATE,
        label=f"СО за работников ({_pct(c.SO_RATE)})",
        tooltip=f"Социальные отчисления за работников: {_pct(c.SO_RATE)} от ФОТ.",
        base=f"{_pct(c.SO_RATE)} от ФОТ",
    )
    osms = build(
        salary,
        c.EMPLOYEE_OSMS_RATE,
        label=f"ОСМС за работников ({_pct(c.EMPLOYEE_OSMS_RATE)})",
        tooltip=(
            "Обязательное социальное медицинское страхование за работников: "
            f"{_pct(c.EMPLOYEE_OSMS_RATE)} от ФОТ."
        ),
        base=f"{_pct(c.EMPLOYEE_OSMS_RATE)} от ФОТ",
    )
    vosms = build(
        salary,
        c.EMPLOYEE_VOSMS_RATE,
        label=f"ВОСМС за работников ({_pct(c.EMPLOYEE_VOSMS_RATE)})",
        tooltip=(
            "Взносы на обязательное социальное медицинское страхование за работников: "
            f"{_pct(c.EMPLOYEE_VOSMS_RATE)} от ФОТ."
        ),
        base=f"{_pct(c.EMPLOYEE_VOSMS_RATE)} от ФОТ",
    )

    return EmployeeObligations(
        ipn=ipn,
        opv=opv,
        opvr=opvr,
        so=so,
        osms=osms,
        vosms=vosms,
        total_employee_obligations=PaymentLineBuilder.sum_lines(
            (ipn, opv, opvr, so, osms, vosms)
        ),
    )


def _opv_amount(income: Decimal, data: MonthlyCalculationInput, c: TaxConstants) -> Decimal:
    if data.is_pensioner or data.is_disabled or income <= 0:
        return ZERO
    return _round(min(income, c.opv_ceiling) * c.OPV_RATE)


def _so_amount(income: Decimal, data: MonthlyCalculationInput, c: TaxConstants) -> Decimal:
    if data.is_disabled:
        return ZERO
    so_base = min(max(income, c.MZP), c.so_ceiling)
    return _round(so_base * c.SO_RATE)


def _opv_base_text(income: Decimal, data: MonthlyCalculationInput, c: TaxConstants) -> str:
    if data.is_disabled:
        return "Освобождён (инвалидность)"
    if data.is_pensioner:
        return "Освобождён (пенсионер)"
    if income <= 0:
        return "—"
    if income > c.opv_ceiling:
        return f"{_pct(c.OPV_RATE)} от {_tenge(c.opv_ceiling)} (макс. {_plain(c.OPV_MAX_MZP)} МЗП)"
    return f"{_pct(c.OPV_RATE)} от дохода"


def _so_base_text(data: MonthlyCalculationInput, c: TaxConstants) -> str:
    if data.is_disabled:
        return "Освобождён (инвалидность)"
    return f"{_pct(c.SO_RATE)} от дохода (мин. 1 МЗП, макс. {_plain(c.SO_MAX_MZP)} МЗП)"


def calculate_monthly_obligations(
    data: MonthlyCalculationInput,
    constants: TaxConstants = TAX_CONSTANTS_2026,
) -> MonthlyCalculationResult:
    """Calculate one month of mandatory payments and income tax.

    Every amount is rounded to tiyn as soon as it is computed, so the totals
    in the summary always equal the sum of the displayed lines.

    Args:
        data: Income, tax rate and personal-status flags
        constants: Rates and bases of the tax year

    Returns:
        A fresh result; nothing is cached between calls
    """
    c = constants
    income = max(data.monthly_income, ZERO)
    rate = max(data.custom_tax_rate, ZERO)
    rate_text = _plain(rate)

    # Fixed and income-based payments
    opv_amount = _opv_amount(income, data, c)
    so_amount = _so_amount(income, data, c)
    vosms_amount = _round(c.vosms_base * c.VOSMS_RATE)
    opvr_amount = _round(c.MZP * c.OPVR_RATE) if data.born_after_1975 else ZERO

    total_monthly = PaymentLineBuilder.sum_amounts(
        (opv_amount, so_amount, vosms_amount, opvr_amount)
    )

    # Income tax
    is_simplified = rate <= SIMPLIFIED_RATE_LIMIT
    total_tax = _round(income * rate / 100)

    if is_simplified:
        half_tax = total_tax * SIMPLIFIED_IPN_SHARE
        ipn_amount = _round(half_tax)
        social_tax_amount = _round(max(half_tax - so_amount, ZERO))
    else:
        # Retail and other regimes: the whole tax is ИПН
        ipn_amount = total_tax
        social_tax_amount = ZERO

    employee_obligations = None
    if data.has_employees and data.total_employee_salary > 0:
        employee_obligations = calculate_employee_obligations(data.total_employee_salary, c)

    # Summary
    gross_income = income
    tax_reserve = PaymentLineBuilder.sum_amounts(
        (opv_amount, opvr_amount, vosms_amount, so_amount, ipn_amount)
    )
    employee_total = (
        employee_obligations.total_employee_obligations if employee_obligations else ZERO
    )
    total_to_pay = PaymentLineBuilder.sum_amounts((tax_reserve, employee_total))
    total_deductions = PaymentLineBuilder.sum_amounts((total_monthly, total_tax))
    net_income = _round(gross_income - total_deductions)

    tooltips = (
        f"ОПВ — это ваша будущая пенсия. {_pct(c.OPV_RATE)} от дохода "
        f"(макс. {_tenge(c.opv_ceiling)}).",
        f"СО — социальное страхование: больничные, декрет. {_pct(c.SO_RATE)} от дохода "
        f"(мин. 1 МЗП, макс. {_plain(c.SO_MAX_MZP)} МЗП).",
        f"ВОСМС — медицинская страховка. Фиксированная сумма {_tenge(vosms_amount)}/мес.",
        (
            f"ОПВР — профессиональные пенсионные взносы. {_pct(c.OPVR_RATE)} от 1 МЗП "
            f"= {_tenge(opvr_amount)}."
            if data.born_after_1975
            else "ОПВР — не рассчитывается (рождён до 01.01.1975)."
        ),
        "Итого на руки — это ваш реальный доход после всех обязательных платежей и налогов.",
    )

    opv_line = PaymentLine(
        amount=opv_amount,
        label="ОПВ (пенсионные)",
        tooltip=tooltips[0],
        base=_opv_base_text(income, data, c),
    )
    so_line = PaymentLine(
        amount=so_amount,
        label="СО (соц. отчисления)",
        tooltip=tooltips[1],
        base=_so_base_text(data, c),
    )
    vosms_line = PaymentLine(
        amount=vosms_amount,
        label="ВОСМС (мед. страховка)",
        tooltip=tooltips[2],
        base=f"{_pct(c.VOSMS_RATE)} от {_plain(c.VOSMS_BASE_MULTIPLIER)} МЗП",
    )
    opvr_line = PaymentLine(
        amount=opvr_amount,
        label="ОПВР (проф. взносы)",
        tooltip=tooltips[3],
        base=f"{_pct(c.OPVR_RATE)} от 1 МЗП" if data.born_after_1975 else "Не применимо",
    )

    if is_simplified:
        ipn_line = PaymentLine(
            amount=ipn_amount,
            label="ИПН (50% от налога)",
            tooltip=(
                f"При упрощённой декларации общий налог {rate_text}% делится пополам: "
                "половина — ИПН."
            ),
            base="50% от общего налога",
        )
        social_tax_line = PaymentLine(
            amount=social_tax_amount,
            label="Соц. налог (50% − СО)",
            tooltip=(
                "Вторая половина налога — социальный налог, уменьшенный на сумму СО "
                f"({_tenge(so_amount)})."
            ),
            base="50% налога − СО",
        )
    else:
        ipn_line = PaymentLine(
            amount=ipn_amount,
            label=f"ИПН ({rate_text}%)",
            tooltip=f"Индивидуальный подоходный налог по ставке {rate_text}%.",
            base=f"{rate_text}% от дохода",
        )
        social_tax_line = PaymentLine(
            amount=social_tax_amount,
            label="Соц. налог",
            tooltip="Социальный налог не начисляется при данном режиме налогообложения.",
            base="—",
        )

    return MonthlyCalculationResult(
        input=MonthlyCalculationInput(
            monthly_income=income,
            custom_tax_rate=rate,
            is_pensioner=data.is_pensioner,
            is_disabled=data.is_disabled,
            born_after_1975=data.born_after_1975,
            has_employees=data.has_employees,
            total_employee_salary=data.total_employee_salary,
        ),
        monthly=MonthlyPayments(
            opv=opv_line,
            so=so_line,
            vosms=vosms_line,
            opvr=opvr_line,
            total_monthly=total_monthly,
        ),
        tax=TaxBreakdown(
            total_tax=total_tax,
            ipn=ipn_line,
            social_tax=social_tax_line,
            is_simplified=is_simplified,
        ),
        summary=CalculationSummary(
            gross_income=gross_income,
            total_deductions=total_deductions,
            net_income=net_income,
            tax_reserve=tax_reserve,
            total_to_pay=total_to_pay,
        ),
        all_payments=(opv_line, opvr_line, vosms_line, so_line, ipn_line),
        tooltips=tooltips,
        employee_obligations=employee_obligations,
    )
