"""SQLAlchemy ORM models."""

from kz_tax_engine.models.base import Base, TimestampMixin
from kz_tax_engine.models.profile import UserProfileRecord
from kz_tax_engine.models.transaction import TransactionRecord

__all__ = [
    "Base",
    "TimestampMixin",
    "TransactionRecord",
    "UserProfileRecord",
]
