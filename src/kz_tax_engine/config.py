"""Settings for the KZ tax engine API and CLI.

Values come from the process environment, with a local ``.env`` file
loaded first. Unset keys fall back to a single-user SQLite setup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Attributes:
        database_url: Async SQLAlchemy URL (``DATABASE_URL``)
        engine_version: Reported by ``/health`` (``ENGINE_VERSION``)
        host: Bind address for ``kz-tax-api`` (``HOST``)
        port: Bind port for ``kz-tax-api`` (``PORT``)
        debug: Uvicorn reload and verbose errors (``DEBUG``)
        log_level: Root log level for API and CLI (``LOG_LEVEL``)
        default_tax_rate: Percent used when a profile has none (``DEFAULT_TAX_RATE``)
        default_tax_year: Year for the CLI and API when none is given (``DEFAULT_TAX_YEAR``)
    """

    database_url: str
    engine_version: str
    host: str
    port: int
    debug: bool
    log_level: str
    default_tax_rate: Decimal
    default_tax_year: int

    @property
    def HOST(self) -> str:
        return self.host

    @property
    def PORT(self) -> int:
        return self.port

    @property
    def DEBUG(self) -> bool:
        return self.debug

    @classmethod
    def from_env(cls) -> Settings:
        """Read settings from ``.env`` and the environment.

        Raises:
            ValueError: If ``DEFAULT_TAX_RATE`` is not a number
        """
        load_dotenv()

        raw_rate = os.getenv("DEFAULT_TAX_RATE", "4")
        try:
            default_tax_rate = Decimal(raw_rate)
        except InvalidOperation:
            raise ValueError(f"DEFAULT_TAX_RATE must be a number, got {raw_rate!r}")

        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./kz_tax.db"),
            engine_version=os.getenv("ENGINE_VERSION", "1.0.0"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            default_tax_rate=default_tax_rate,
            default_tax_year=int(os.getenv("DEFAULT_TAX_YEAR", "2026")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings read once per process."""
    return Settings.from_env()


settings = get_settings()
