"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from kz_tax_engine.calculators.deadlines import Clock, SystemClock
from kz_tax_engine.database import init_db
from kz_tax_engine.repositories import SqlProfileRepository, SqlTransactionRepository
from kz_tax_engine.services import DashboardService


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    _, factory = init_db()
    async with factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def get_user_id(
    x_user_id: Annotated[str | None, Header()] = None
) -> str:
    """Extract user ID from header."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-User-ID header is required",
        )
    return x_user_id.strip()


def get_clock() -> Clock:
    """Clock used for deadline urgency."""
    return SystemClock()


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
UserId = Annotated[str, Depends(get_user_id)]


def get_transaction_repository(db: DbSession) -> SqlTransactionRepository:
    return SqlTransactionRepository(db)


def get_profile_repository(db: DbSession) -> SqlProfileRepository:
    return SqlProfileRepository(db)


Transactions = Annotated[SqlTransactionRepository, Depends(get_transaction_repository)]
Profiles = Annotated[SqlProfileRepository, Depends(get_profile_repository)]


def get_dashboard_service(
    transactions: Transactions,
    profiles: Profiles,
    clock: Annotated[Clock, Depends(get_clock)],
) -> DashboardService:
    return DashboardService(transactions, profiles, clock)


Dashboard = Annotated[DashboardService, Depends(get_dashboard_service)]
