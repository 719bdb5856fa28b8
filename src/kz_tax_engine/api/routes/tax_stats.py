"""Period tax statistics endpoint."""

from typing import Annotated, Any

from fastapi import APIRouter, Query

from kz_tax_engine.api.dependencies import Dashboard, UserId
from kz_tax_engine.api.schemas import ErrorResponse
from kz_tax_engine.config import settings

router = APIRouter(prefix="/tax-stats", tags=["tax-stats"])


@router.get("", response_model=None, responses={400: {"model": ErrorResponse}})
async def get_tax_stats(
    dashboard: Dashboard,
    user_id: UserId,
    year: Annotated[int, Query(ge=1900, le=2100)] = settings.default_tax_year,
) -> dict[str, Any]:
    """Quarter, half-year and year buckets with filing deadlines."""
    stats = await dashboard.get_tax_stats(user_id, year)
    return stats.to_dict()
