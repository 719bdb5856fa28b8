"""User profile settings that feed the obligation calculator."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Boolean, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from kz_tax_engine.models.base import Base, TimestampMixin


class UserProfileRecord(Base, TimestampMixin):
    """Stored profile values; columns left NULL fall back to defaults."""

    __tablename__ = "user_profile"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    tax_rate: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    is_business_mode: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    onboarding_complete: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    born_after_1975: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    is_pensioner: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    is_disabled: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    has_employees: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    employee_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    total_employee_salary: Mapped[Decimal | None] = mapped_column(
        Numeric(14, 2), nullable=True
    )
