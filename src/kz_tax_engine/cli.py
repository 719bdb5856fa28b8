"""Tax engine command line interface.

Provides offline tools for:
- Monthly obligations for an income
- Period statistics from a JSON transaction export
- Filing deadline urgency
- Tax constants of a year

Usage:
    kz-tax obligations --income 500000 --rate 3
    kz-tax stats transactions.json --year 2026 --today 2026-08-10
    kz-tax deadlines --year 2026 --today 2026-08-10
    kz-tax constants --year 2026
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable

from kz_tax_engine.calculators.constants import TaxConstantsNotFoundError, get_tax_constants
from kz_tax_engine.calculators.deadlines import (
    Clock,
    FixedClock,
    SystemClock,
    evaluate_deadlines,
    h1_deadlines,
    h2_deadlines,
)
from kz_tax_engine.calculators.obligations import calculate_monthly_obligations
from kz_tax_engine.calculators.periods import get_tax_stats
from kz_tax_engine.calculators.types import MonthlyCalculationInput, Transaction
from kz_tax_engine.config import settings

logger = logging.getLogger(__name__)


def parse_date(s: str) -> date:
    """Parse ISO date string."""
    try:
        return date.fromisoformat(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date: {s!r} (expected YYYY-MM-DD)")


def parse_decimal(s: str) -> Decimal:
    """Parse a decimal amount; a comma is accepted as decimal separator."""
    try:
        value = Decimal(s.replace(",", ".").replace(" ", ""))
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {s!r}")
    if not value.is_finite():
        raise argparse.ArgumentTypeError(f"invalid amount: {s!r}")
    return value


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def load_transactions(path: Path) -> list[Transaction]:
    """Read transactions from a JSON file.

    Accepts a list of records or an object with a "transactions" list.
    Records use camelCase or snake_case keys.
    """
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("transactions", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of transactions")
    return [Transaction.from_dict(item) for item in data]


class TaxCli:
    """Tax engine Command Line Interface."""

    def __init__(self, stdout: Any = None) -> None:
        self.parser = self._build_parser()
        self.stdout = stdout or sys.stdout

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="kz-tax",
            description="Kazakhstan sole proprietor tax tools",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # obligations command
        obligations = subparsers.add_parser(
            "obligations",
            help="Calculate monthly payments for an income",
        )
        obligations.add_argument(
            "--income",
            type=parse_decimal,
            required=True,
            help="Monthly business income in tenge",
        )
        obligations.add_argument(
            "--rate",
            type=parse_decimal,
            default=settings.default_tax_rate,
            help="Tax rate in percent (default: %(default)s)",
        )
        obligations.add_argument(
            "--pensioner",
            action="store_true",
            help="Exempt from ОПВ",
        )
        obligations.add_argument(
            "--disabled",
            action="store_true",
            help="Exempt from ОПВ and СО",
        )
        obligations.add_argument(
            "--born-before-1976",
            dest="born_after_1975",
            action="store_false",
            help="Born in 1975 or earlier (no ОПВР)",
        )
        obligations.add_argument(
            "--employee-salary",
            type=parse_decimal,
            default=Decimal("0"),
            help="Total monthly salary of employees",
        )
        obligations.add_argument(
            "--year",
            type=int,
            default=settings.default_tax_year,
            help="Tax year of the constants (default: %(default)s)",
        )

        # stats command
        stats = subparsers.add_parser(
            "stats",
            help="Quarter / half-year / year tax from a transaction file",
        )
        stats.add_argument(
            "file",
            type=Path,
            help="JSON file with transactions",
        )
        stats.add_argument(
            "--year",
            type=int,
            default=settings.default_tax_year,
            help="Year to aggregate (default: %(default)s)",
        )
        stats.add_argument(
            "--rate",
            type=parse_decimal,
            default=settings.default_tax_rate,
            help="Tax rate in percent (default: %(default)s)",
        )
        stats.add_argument(
            "--today",
            type=parse_date,
            help="Evaluate deadlines as of this date (YYYY-MM-DD)",
        )

        # deadlines command
        deadlines = subparsers.add_parser(
            "deadlines",
            help="Filing deadlines and their urgency",
        )
        deadlines.add_argument(
            "--year",
            type=int,
            default=settings.default_tax_year,
            help="Tax year (default: %(default)s)",
        )
        deadlines.add_argument(
            "--today",
            type=parse_date,
            help="Evaluate deadlines as of this date (YYYY-MM-DD)",
        )

        # constants command
        constants = subparsers.add_parser(
            "constants",
            help="Print the tax constants of a year",
        )
        constants.add_argument(
            "--year",
            type=int,
            default=settings.default_tax_year,
            help="Tax year (default: %(default)s)",
        )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        handlers: dict[str, Callable[[argparse.Namespace], int]] = {
            "obligations": self._cmd_obligations,
            "stats": self._cmd_stats,
            "deadlines": self._cmd_deadlines,
            "constants": self._cmd_constants,
        }

        handler = handlers[parsed.command]
        try:
            return handler(parsed)
        except TaxConstantsNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except (OSError, ValueError, KeyError) as e:
            logger.debug("Command %s failed", parsed.command, exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            return 1

    def _emit(self, payload: Any) -> None:
        json.dump(payload, self.stdout, ensure_ascii=False, indent=2, default=_json_default)
        self.stdout.write("\n")

    @staticmethod
    def _clock(today: date | None) -> Clock:
        return FixedClock.on(today) if today is not None else SystemClock()

    def _cmd_obligations(self, args: argparse.Namespace) -> int:
        """Calculate monthly obligations."""
        constants = get_tax_constants(args.year)
        data = MonthlyCalculationInput(
            monthly_income=args.income,
            custom_tax_rate=args.rate,
            is_pensioner=args.pensioner,
            is_disabled=args.disabled,
            born_after_1975=args.born_after_1975,
            has_employees=args.employee_salary > 0,
            total_employee_salary=args.employee_salary,
        )
        self._emit(calculate_monthly_obligations(data, constants).to_dict())
        return 0

    def _cmd_stats(self, args: argparse.Namespace) -> int:
        """Aggregate a transaction file."""
        transactions = load_transactions(args.file)
        logger.info("Loaded %d transactions from %s", len(transactions), args.file)
        stats = get_tax_stats(
            transactions, args.year, args.rate, clock=self._clock(args.today)
        )
        self._emit(stats.to_dict())
        return 0

    def _cmd_deadlines(self, args: argparse.Namespace) -> int:
        """Show filing deadlines with urgency."""
        now = self._clock(args.today).now()
        self._emit({
            "h1": evaluate_deadlines(h1_deadlines(args.year), now).to_dict(),
            "h2": evaluate_deadlines(h2_deadlines(args.year), now).to_dict(),
        })
        return 0

    def _cmd_constants(self, args: argparse.Namespace) -> int:
        """Print tax constants."""
        self._emit(get_tax_constants(args.year).to_dict())
        return 0


def main() -> int:
    """CLI entry point."""
    logging.basicConfig(level=settings.log_level, stream=sys.stderr)
    cli = TaxCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
