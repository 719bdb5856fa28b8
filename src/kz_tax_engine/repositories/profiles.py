"""SQLAlchemy-backed user-profile store."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from kz_tax_engine.models import UserProfileRecord
from kz_tax_engine.repositories.base import DEFAULT_PROFILE, UserProfile

logger = logging.getLogger(__name__)


class SqlProfileRepository:
    """Profile store on an AsyncSession.

    A missing row or a NULL column means "use the default"; reading never
    creates a row.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: str) -> UserProfile:
        record = await self.session.get(UserProfileRecord, user_id)
        if record is None:
            return DEFAULT_PROFILE
        stored = {
            name: getattr(record, name)
            for name in UserProfile.field_names()
            if getattr(record, name) is not None
        }
        return replace(DEFAULT_PROFILE, **stored)

    async def update(self, user_id: str, changes: dict[str, Any]) -> UserProfile:
        unknown = set(changes) - set(UserProfile.field_names())
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

        record = await self.session.get(UserProfileRecord, user_id)
        if record is None:
            record = UserProfileRecord(user_id=user_id)
            self.session.add(record)
        for name, value in changes.items():
            setattr(record, name, value)
        await self.session.flush()
        logger.info("Updated profile of user %s: %s", user_id, ", ".join(sorted(changes)))
        return await self.get(user_id)
