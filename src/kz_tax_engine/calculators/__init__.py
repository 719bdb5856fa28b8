"""Tax obligation calculation engine."""

from kz_tax_engine.calculators.balances import summarize_transactions
from kz_tax_engine.calculators.constants import (
    TAX_CONSTANTS_2026,
    TAX_CONSTANTS_BY_YEAR,
    TaxConstants,
    TaxConstantsNotFoundError,
    get_tax_constants,
)
from kz_tax_engine.calculators.deadlines import Clock, FixedClock, SystemClock
from kz_tax_engine.calculators.line_builder import PaymentLineBuilder
from kz_tax_engine.calculators.monitor import build_tax_monitor
from kz_tax_engine.calculators.obligations import (
    calculate_employee_obligations,
    calculate_monthly_obligations,
)
from kz_tax_engine.calculators.periods import get_tax_stats

__all__ = [
    "TAX_CONSTANTS_2026",
    "TAX_CONSTANTS_BY_YEAR",
    "TaxConstants",
    "TaxConstantsNotFoundError",
    "get_tax_constants",
    "Clock",
    "FixedClock",
    "SystemClock",
    "PaymentLineBuilder",
    "build_tax_monitor",
    "calculate_employee_obligations",
    "calculate_monthly_obligations",
    "get_tax_stats",
    "summarize_transactions",
]
