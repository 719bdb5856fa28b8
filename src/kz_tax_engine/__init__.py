"""Tax obligations and filing deadlines for Kazakhstan sole proprietors."""

from kz_tax_engine.calculators import (
    TAX_CONSTANTS_2026,
    FixedClock,
    PaymentLineBuilder,
    SystemClock,
    TaxConstants,
    TaxConstantsNotFoundError,
    build_tax_monitor,
    calculate_employee_obligations,
    calculate_monthly_obligations,
    get_tax_constants,
    get_tax_stats,
    summarize_transactions,
)
from kz_tax_engine.calculators.types import (
    MonthlyCalculationInput,
    MonthlyCalculationResult,
    PaymentLine,
    TaxStats,
    Transaction,
    TransactionType,
)

__version__ = "1.0.0"

__all__ = [
    "TAX_CONSTANTS_2026",
    "FixedClock",
    "MonthlyCalculationInput",
    "MonthlyCalculationResult",
    "PaymentLine",
    "PaymentLineBuilder",
    "SystemClock",
    "TaxConstants",
    "TaxConstantsNotFoundError",
    "TaxStats",
    "Transaction",
    "TransactionType",
    "build_tax_monitor",
    "calculate_employee_obligations",
    "calculate_monthly_obligations",
    "get_tax_constants",
    "get_tax_stats",
    "summarize_transactions",
]
