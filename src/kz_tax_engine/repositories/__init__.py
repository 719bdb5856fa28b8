"""Transaction and profile stores."""

from kz_tax_engine.repositories.base import (
    DEFAULT_PROFILE,
    DateRange,
    NewTransaction,
    ProfileRepository,
    TransactionFilter,
    TransactionNotFoundError,
    TransactionRepository,
    UserProfile,
)
from kz_tax_engine.repositories.profiles import SqlProfileRepository
from kz_tax_engine.repositories.transactions import SqlTransactionRepository

__all__ = [
    "DEFAULT_PROFILE",
    "DateRange",
    "NewTransaction",
    "ProfileRepository",
    "SqlProfileRepository",
    "SqlTransactionRepository",
    "TransactionFilter",
    "TransactionNotFoundError",
    "TransactionRepository",
    "UserProfile",
]
