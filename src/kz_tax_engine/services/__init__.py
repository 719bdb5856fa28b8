"""Service layer."""

from kz_tax_engine.services.dashboard_service import DashboardService

__all__ = ["DashboardService"]
