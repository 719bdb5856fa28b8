"""API routes."""

from kz_tax_engine.api.routes.health import router as health_router
from kz_tax_engine.api.routes.obligations import router as obligations_router
from kz_tax_engine.api.routes.profile import router as profile_router
from kz_tax_engine.api.routes.tax_stats import router as tax_stats_router
from kz_tax_engine.api.routes.transactions import router as transactions_router

__all__ = [
    "health_router",
    "obligations_router",
    "profile_router",
    "tax_stats_router",
    "transactions_router",
]
