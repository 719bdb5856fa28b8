"""Type definitions for the obligation and period calculators."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Mapping

ZERO = Decimal("0")
TIYN = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Coerce a numeric input to Decimal.

    Floats go through ``str`` so 0.1 stays 0.1. None and non-finite values
    become zero; the calculators clamp rather than reject.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        result = Decimal(value)
    if not result.is_finite():
        return ZERO
    return result


def format_date(value: date) -> str:
    """Format a date as DD.MM.YYYY."""
    return value.strftime("%d.%m.%Y")


class TransactionType(str, Enum):
    """Transaction direction."""

    INCOME = "income"
    EXPENSE = "expense"


class UrgencyLevel(str, Enum):
    """Deadline urgency levels."""

    CRITICAL = "critical"
    WARNING = "warning"
    NORMAL = "normal"


# ============================================================================
# Monthly obligations
# ============================================================================


@dataclass(frozen=True)
class PaymentLine:
    """A single obligation line with its human-readable basis."""

    amount: Decimal
    label: str
    tooltip: str
    base: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": self.amount,
            "label": self.label,
            "tooltip": self.tooltip,
            "base": self.base,
        }


@dataclass(frozen=True)
class MonthlyCalculationInput:
    """Inputs for one month of obligations.

    Numeric fields accept int, float, str or Decimal and are normalized to
    Decimal. Negative income is kept as given here; the calculator clamps it.
    """

    monthly_income: Decimal
    custom_tax_rate: Decimal
    is_pensioner: bool = False
    is_disabled: bool = False
    born_after_1975: bool = True
    has_employees: bool = False
    total_employee_salary: Decimal = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "monthly_income", to_decimal(self.monthly_income))
        object.__setattr__(self, "custom_tax_rate", to_decimal(self.custom_tax_rate))
        object.__setattr__(
            self, "total_employee_salary", to_decimal(self.total_employee_salary)
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "monthlyIncome": self.monthly_income,
            "customTaxRate": self.custom_tax_rate,
            "isPensioner": self.is_pensioner,
            "isDisabled": self.is_disabled,
            "bornAfter1975": self.born_after_1975,
            "hasEmployees": self.has_employees,
            "totalEmployeeSalary": self.total_employee_salary,
        }


@dataclass(frozen=True)
class MonthlyPayments:
    """Mandatory monthly payments made for oneself."""

    opv: PaymentLine
    so: PaymentLine
    vosms: PaymentLine
    opvr: PaymentLine
    total_monthly: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "opv": self.opv.to_dict(),
            "so": self.so.to_dict(),
            "vosms": self.vosms.to_dict(),
            "opvr": self.opvr.to_dict(),
            "totalMonthly": self.total_monthly,
        }


@dataclass(frozen=True)
class TaxBreakdown:
    """Income tax for the period and its IPN / social tax split."""

    total_tax: Decimal
    ipn: PaymentLine
    social_tax: PaymentLine
    is_simplified: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalTax": self.total_tax,
            "ipn": self.ipn.to_dict(),
            "socialTax": self.social_tax.to_dict(),
            "isSimplified": self.is_simplified,
        }


@dataclass(frozen=True)
class EmployeeObligations:
    """Employer-side obligations on the total staff payroll."""

    ipn: PaymentLine
    opv: PaymentLine
    opvr: PaymentLine
    so: PaymentLine
    osms: PaymentLine
    vosms: PaymentLine
    total_employee_obligations: Decimal

    @property
    def all_payments(self) -> tuple[PaymentLine, ...]:
        return (self.ipn, self.opv, self.opvr, self.so, self.osms, self.vosms)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ipn": self.ipn.to_dict(),
            "opv": self.opv.to_dict(),
            "opvr": self.opvr.to_dict(),
            "so": self.so.to_dict(),
            "osms": self.osms.to_dict(),
            "vosms": self.vosms.to_dict(),
            "totalEmployeeObligations": self.total_employee_obligations,
            "allPayments": [line.to_dict() for line in self.all_payments],
        }


@dataclass(frozen=True)
class CalculationSummary:
    """Totals derived from the payment lines."""

    gross_income: Decimal
    total_deductions: Decimal
    net_income: Decimal
    tax_reserve: Decimal
    total_to_pay: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "grossIncome": self.gross_income,
            "totalDeductions": self.total_deductions,
            "netIncome": self.net_income,
            "taxReserve": self.tax_reserve,
            "totalToPay": self.total_to_pay,
        }


@dataclass(frozen=True)
class MonthlyCalculationResult:
    """Full breakdown of one month's obligations."""

    input: MonthlyCalculationInput
    monthly: MonthlyPayments
    tax: TaxBreakdown
    summary: CalculationSummary
    all_payments: tuple[PaymentLine, ...]
    tooltips: tuple[str, ...]
    employee_obligations: EmployeeObligations | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the result with the camelCase keys consumers destructure."""
        data: dict[str, Any] = {
            "input": self.input.to_dict(),
            "monthly": self.monthly.to_dict(),
            "tax": self.tax.to_dict(),
            "summary": self.summary.to_dict(),
            "allPayments": [line.to_dict() for line in self.all_payments],
            "tooltips": list(self.tooltips),
        }
        if self.employee_obligations is not None:
            data["employeeObligations"] = self.employee_obligations.to_dict()
        return data


# ============================================================================
# Transactions and period statistics
# ============================================================================


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()


@dataclass(frozen=True)
class Transaction:
    """A transaction record as supplied by the transaction store."""

    amount: Decimal
    type: TransactionType
    category: str = ""
    date: date | None = None
    is_taxable: bool | None = None
    comment: str = ""
    id: str | None = None

    def __post_init__(self) -> None:
        # Stored as Numeric(14, 2); keep in-memory amounts on the same grid
        amount = to_decimal(self.amount).quantize(TIYN, rounding=ROUND_HALF_UP)
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "type", TransactionType(self.type))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Transaction:
        """Build from a mapping with camelCase or snake_case keys."""
        is_taxable = data.get("isTaxable", data.get("is_taxable"))
        raw_id = data.get("id")
        return cls(
            id=str(raw_id) if raw_id is not None else None,
            amount=data.get("amount"),
            type=data["type"],
            category=data.get("category") or "",
            date=_parse_date(data.get("date")),
            is_taxable=is_taxable,
            comment=data.get("comment") or data.get("description") or "",
        )

    @property
    def counts_for_tax(self) -> bool:
        return self.type is TransactionType.INCOME and self.is_taxable is True


@dataclass(frozen=True)
class UrgencyInfo:
    """Urgency of one deadline relative to the clock."""

    level: UrgencyLevel
    color: str
    icon: str
    days_left: int

    @property
    def is_urgent(self) -> bool:
        return self.level is UrgencyLevel.CRITICAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.value,
            "color": self.color,
            "icon": self.icon,
            "isUrgent": self.is_urgent,
            "daysLeft": self.days_left,
        }


@dataclass(frozen=True)
class DeadlineInfo:
    """Submission and payment deadlines for a filing half-year."""

    submission: date
    payment: date
    label: str
    status: UrgencyLevel | None = None
    submission_urgency: UrgencyInfo | None = None
    payment_urgency: UrgencyInfo | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "submission": format_date(self.submission),
            "payment": format_date(self.payment),
            "label": self.label,
        }
        if self.status is not None:
            data["status"] = self.status.value
        if self.submission_urgency is not None and self.payment_urgency is not None:
            data["ui"] = {
                "submission": self.submission_urgency.to_dict(),
                "payment": self.payment_urgency.to_dict(),
            }
        return data


@dataclass(frozen=True)
class PeriodStats:
    """Aggregated income and tax for one bucket."""

    income: Decimal = ZERO
    tax: Decimal = ZERO
    status: str = ""
    container_class: str | None = None
    deadlines: DeadlineInfo | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "income": self.income,
            "tax": self.tax,
            "status": self.status,
        }
        if self.container_class is not None:
            data["containerClass"] = self.container_class
        if self.deadlines is not None:
            data["deadlines"] = self.deadlines.to_dict()
        return data


@dataclass(frozen=True)
class TaxStats:
    """Quarter, half-year and year buckets for one tax year."""

    q1: PeriodStats
    q2: PeriodStats
    q3: PeriodStats
    q4: PeriodStats
    h1: PeriodStats
    h2: PeriodStats
    year: PeriodStats

    @property
    def quarters(self) -> tuple[PeriodStats, ...]:
        return (self.q1, self.q2, self.q3, self.q4)

    @property
    def halves(self) -> tuple[PeriodStats, ...]:
        return (self.h1, self.h2)

    def to_dict(self) -> dict[str, Any]:
        return {
            "q1": self.q1.to_dict(),
            "q2": self.q2.to_dict(),
            "q3": self.q3.to_dict(),
            "q4": self.q4.to_dict(),
            "h1": self.h1.to_dict(),
            "h2": self.h2.to_dict(),
            "year": self.year.to_dict(),
        }


@dataclass(frozen=True)
class TransactionTotals:
    """Running totals over a list of transactions."""

    balance: Decimal = ZERO
    total_income: Decimal = ZERO
    total_expense: Decimal = ZERO
    taxable_income: Decimal = ZERO

    def to_dict(self) -> dict[str, Any]:
        return {
            "balance": self.balance,
            "totalIncome": self.total_income,
            "totalExpense": self.total_expense,
            "taxableIncome": self.taxable_income,
        }


@dataclass(frozen=True)
class TaxMonitorResult:
    """Combined view of business and other taxable income."""

    all_payments: tuple[PaymentLine, ...]
    gross_income: Decimal
    tax_reserve: Decimal
    net_income: Decimal
    has_business_income: bool
    has_other_income: bool
    other_ipn: Decimal
    business: MonthlyCalculationResult | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "allPayments": [line.to_dict() for line in self.all_payments],
            "summary": {
                "grossIncome": self.gross_income,
                "taxReserve": self.tax_reserve,
                "netIncome": self.net_income,
            },
            "hasBusinessIncome": self.has_business_income,
            "hasOtherIncome": self.has_other_income,
            "otherIpn": self.other_ipn,
        }
