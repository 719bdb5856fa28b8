"""Monthly obligation endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, HTTPException, Query, status

from kz_tax_engine.api.dependencies import Dashboard, UserId
from kz_tax_engine.api.schemas import ErrorResponse, MonthlyCalculationRequest
from kz_tax_engine.calculators.constants import TaxConstantsNotFoundError, get_tax_constants
from kz_tax_engine.calculators.obligations import calculate_monthly_obligations
from kz_tax_engine.config import settings

router = APIRouter(prefix="/obligations", tags=["obligations"])


def _constants_not_found(exc: TaxConstantsNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.post(
    "/calculate",
    response_model=None,
    responses={404: {"model": ErrorResponse}},
)
async def calculate(payload: MonthlyCalculationRequest) -> dict[str, Any]:
    """Calculate one month of obligations without touching the store."""
    try:
        constants = get_tax_constants(payload.year)
    except TaxConstantsNotFoundError as e:
        raise _constants_not_found(e)
    return calculate_monthly_obligations(payload.to_input(), constants).to_dict()


@router.get(
    "",
    response_model=None,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_monthly_obligations(
    dashboard: Dashboard,
    user_id: UserId,
    month: Annotated[int, Query(ge=1, le=12)],
    year: Annotated[int, Query(ge=1900, le=2100)] = settings.default_tax_year,
) -> dict[str, Any]:
    """Obligations for the taxable income a user booked in one month."""
    try:
        result = await dashboard.get_monthly_obligations(user_id, year, month)
    except TaxConstantsNotFoundError as e:
        raise _constants_not_found(e)
    return result.to_dict()


@router.get(
    "/monitor",
    response_model=None,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_tax_monitor(
    dashboard: Dashboard,
    user_id: UserId,
    month: Annotated[int, Query(ge=1, le=12)],
    year: Annotated[int, Query(ge=1900, le=2100)] = settings.default_tax_year,
) -> dict[str, Any] | None:
    """Business payments plus IPN on other taxable income for one month."""
    try:
        result = await dashboard.get_tax_monitor(user_id, year, month)
    except TaxConstantsNotFoundError as e:
        raise _constants_not_found(e)
    return result.to_dict() if result is not None else None
