"""Pydantic schemas for API request/response models."""

import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from kz_tax_engine.calculators.types import MonthlyCalculationInput
from kz_tax_engine.config import settings


# ============================================================================
# Obligation schemas
# ============================================================================


class MonthlyCalculationRequest(BaseModel):
    """Schema for a stateless obligation calculation."""

    monthly_income: Decimal = Field(default=Decimal("0"))
    custom_tax_rate: Decimal = Field(default=settings.default_tax_rate)
    is_pensioner: bool = False
    is_disabled: bool = False
    born_after_1975: bool = True
    has_employees: bool = False
    total_employee_salary: Decimal = Field(default=Decimal("0"))
    year: int = settings.default_tax_year

    def to_input(self) -> MonthlyCalculationInput:
        return MonthlyCalculationInput(
            monthly_income=self.monthly_income,
            custom_tax_rate=self.custom_tax_rate,
            is_pensioner=self.is_pensioner,
            is_disabled=self.is_disabled,
            born_after_1975=self.born_after_1975,
            has_employees=self.has_employees,
            total_employee_salary=self.total_employee_salary,
        )


# ============================================================================
# Transaction schemas
# ============================================================================


class TransactionCreate(BaseModel):
    """Schema for creating a transaction."""

    amount: Decimal = Field(gt=0, max_digits=14, decimal_places=2)
    type: Literal["income", "expense"]
    category: str = Field(default="", max_length=64)
    date: datetime.date
    is_taxable: bool = False
    comment: str = ""


class TransactionUpdate(BaseModel):
    """Schema for a partial transaction update; unset fields are kept."""

    amount: Decimal | None = Field(default=None, gt=0, max_digits=14, decimal_places=2)
    type: Literal["income", "expense"] | None = None
    category: str | None = Field(default=None, max_length=64)
    date: datetime.date | None = None
    is_taxable: bool | None = None
    comment: str | None = None


class TransactionResponse(BaseModel):
    """Schema for transaction response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    amount: Decimal
    type: str
    category: str
    date: datetime.date
    is_taxable: bool
    comment: str


class TransactionListResponse(BaseModel):
    """Schema for listing transactions with their totals."""

    items: list[TransactionResponse]
    total: int
    balance: Decimal
    total_income: Decimal
    total_expense: Decimal
    taxable_income: Decimal


# ============================================================================
# Profile schemas
# ============================================================================


class ProfileResponse(BaseModel):
    """Schema for profile response (stored values merged over defaults)."""

    model_config = ConfigDict(from_attributes=True)

    tax_rate: Decimal
    is_business_mode: bool
    onboarding_complete: bool
    born_after_1975: bool
    is_pensioner: bool
    is_disabled: bool
    has_employees: bool
    employee_count: int
    total_employee_salary: Decimal


class ProfileUpdate(BaseModel):
    """Schema for a partial profile update."""

    tax_rate: Decimal | None = Field(default=None, ge=0, le=100)
    is_business_mode: bool | None = None
    onboarding_complete: bool | None = None
    born_after_1975: bool | None = None
    is_pensioner: bool | None = None
    is_disabled: bool | None = None
    has_employees: bool | None = None
    employee_count: int | None = Field(default=None, ge=0)
    total_employee_salary: Decimal | None = Field(default=None, ge=0)


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
