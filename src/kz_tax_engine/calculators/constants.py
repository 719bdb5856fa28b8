"""Statutory constants by tax year."""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any

_RATE_FIELDS = (
    "OPV_RATE",
    "SO_RATE",
    "VOSMS_RATE",
    "OPVR_RATE",
    "EMPLOYEE_IPN_RATE",
    "EMPLOYEE_OSMS_RATE",
    "EMPLOYEE_VOSMS_RATE",
)

_MULTIPLIER_FIELDS = ("VOSMS_BASE_MULTIPLIER", "OPV_MAX_MZP", "SO_MAX_MZP")


class TaxConstantsNotFoundError(Exception):
    """Raised when no constants are registered for a tax year."""

    def __init__(self, year: int):
        self.year = year
        super().__init__(f"No tax constants registered for year {year}")


@dataclass(frozen=True)
class TaxConstants:
    """Rates and bases for one tax year.

    Rates are fractions in (0, 1]. OPV_MAX_MZP and SO_MAX_MZP are ceilings
    expressed as multiples of MZP. MRP is declared for completeness; no
    formula uses it.
    """

    year: int
    MZP: Decimal
    MRP: Decimal
    OPV_RATE: Decimal
    SO_RATE: Decimal
    VOSMS_RATE: Decimal
    VOSMS_BASE_MULTIPLIER: Decimal
    OPVR_RATE: Decimal
    OPV_MAX_MZP: Decimal
    SO_MAX_MZP: Decimal
    EMPLOYEE_IPN_RATE: Decimal
    EMPLOYEE_OSMS_RATE: Decimal
    EMPLOYEE_VOSMS_RATE: Decimal

    def __post_init__(self) -> None:
        if self.MZP <= 0:
            raise ValueError(f"MZP must be positive, got {self.MZP}")
        for name in _RATE_FIELDS:
            value = getattr(self, name)
            if not Decimal("0") < value <= Decimal("1"):
                raise ValueError(f"{name} must be in (0, 1], got {value}")
        for name in _MULTIPLIER_FIELDS:
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

    @property
    def opv_ceiling(self) -> Decimal:
        """Maximum monthly OPV base."""
        return self.OPV_MAX_MZP * self.MZP

    @property
    def so_ceiling(self) -> Decimal:
        """Maximum monthly SO base."""
        return self.SO_MAX_MZP * self.MZP

    @property
    def vosms_base(self) -> Decimal:
        return self.VOSMS_BASE_MULTIPLIER * self.MZP

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


TAX_CONSTANTS_2026 = TaxConstants(
    year=2026,
    MZP=Decimal("85000"),
    MRP=Decimal("4325"),
    OPV_RATE=Decimal("0.10"),
    SO_RATE=Decimal("0.05"),
    VOSMS_RATE=Decimal("0.05"),
    VOSMS_BASE_MULTIPLIER=Decimal("1.4"),
    OPVR_RATE=Decimal("0.035"),
    OPV_MAX_MZP=Decimal("50"),
    SO_MAX_MZP=Decimal("7"),
    EMPLOYEE_IPN_RATE=Decimal("0.10"),
    EMPLOYEE_OSMS_RATE=Decimal("0.03"),
    EMPLOYEE_VOSMS_RATE=Decimal("0.02"),
)

TAX_CONSTANTS_BY_YEAR: dict[int, TaxConstants] = {
    TAX_CONSTANTS_2026.year: TAX_CONSTANTS_2026,
}


def get_tax_constants(year: int) -> TaxConstants:
    """Look up the constants for a tax year.

    Raises:
        TaxConstantsNotFoundError: If the year has no registered constants
    """
    try:
        return TAX_CONSTANTS_BY_YEAR[year]
    except KeyError:
        raise TaxConstantsNotFoundError(year) from None
