"""Filing deadlines, urgency classification and period styling."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Protocol

from kz_tax_engine.calculators.types import (
    DeadlineInfo,
    UrgencyInfo,
    UrgencyLevel,
    format_date,
)

CRITICAL_DAYS = 7
WARNING_DAYS = 30

# Deadlines close at the end of the day
DEADLINE_CUTOFF = time(23, 59, 59)

SUBMISSION_DAY = 15
PAYMENT_DAY = 25

# Container classes, highest priority first
CRITICAL_CONTAINER = "border-red-500 bg-red-50 dark:bg-red-900/10 shadow-md"
WARNING_CONTAINER = "border-orange-400 bg-orange-50 dark:bg-orange-900/10 shadow-md"
ACTIVE_CONTAINER = (
    "border-emerald-500 bg-emerald-50/50 dark:bg-emerald-900/10 shadow-md ring-1 ring-emerald-500"
)
COMPLETED_CONTAINER = "border-gray-200 bg-gray-50 dark:bg-gray-800 dark:border-gray-700 opacity-75"
DEFAULT_CONTAINER = "border-blue-100 bg-white dark:bg-gray-700/30"


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall-clock time (naive local)."""

    def now(self) -> datetime:
        return datetime.now()


@dataclass(frozen=True)
class FixedClock:
    """Clock pinned to one moment."""

    moment: datetime

    @classmethod
    def on(cls, day: date) -> FixedClock:
        """Clock pinned to midnight of ``day``."""
        return cls(datetime.combine(day, time.min))

    def now(self) -> datetime:
        return self.moment


@dataclass(frozen=True)
class MonthRange:
    """Inclusive range of calendar months (1-12)."""

    start: int
    end: int

    def contains(self, month: int) -> bool:
        return self.start <= month <= self.end


def h1_deadlines(year: int) -> DeadlineInfo:
    """Declaration for January-June: submit by 15 Aug, pay by 25 Aug."""
    return _half_year_deadlines(date(year, 8, SUBMISSION_DAY), date(year, 8, PAYMENT_DAY))


def h2_deadlines(year: int) -> DeadlineInfo:
    """Declaration for July-December: submit by 15 Feb, pay by 25 Feb next year."""
    return _half_year_deadlines(
        date(year + 1, 2, SUBMISSION_DAY), date(year + 1, 2, PAYMENT_DAY)
    )


def _half_year_deadlines(submission: date, payment: date) -> DeadlineInfo:
    return DeadlineInfo(
        submission=submission,
        payment=payment,
        label=f"Сдача до {format_date(submission)}, Оплата до {format_date(payment)}",
    )


def to_local(now: datetime) -> datetime:
    """Naive local time; deadlines are local calendar days."""
    if now.tzinfo is None:
        return now
    return now.astimezone().replace(tzinfo=None)


def days_until(deadline: date, now: datetime) -> int:
    """Whole days left until the end of ``deadline``, rounded up.

    Negative once the deadline has passed. An aware ``now`` is read in
    local time.
    """
    cutoff = datetime.combine(deadline, DEADLINE_CUTOFF)
    remaining = (cutoff - to_local(now)) / timedelta(days=1)
    return math.ceil(remaining)


def classify_deadline(deadline: date, now: datetime) -> UrgencyInfo:
    """Classify one deadline.

    Overdue or <= 7 days left is critical, <= 30 days is a warning,
    anything further out is normal.
    """
    days_left = days_until(deadline, now)

    if days_left < 0:
        return UrgencyInfo(UrgencyLevel.CRITICAL, "text-red-700 font-bold", "🚨", days_left)
    if days_left <= CRITICAL_DAYS:
        return UrgencyInfo(UrgencyLevel.CRITICAL, "text-red-600 font-bold", "🚨", days_left)
    if days_left <= WARNING_DAYS:
        return UrgencyInfo(UrgencyLevel.WARNING, "text-orange-600 font-medium", "⏳", days_left)
    return UrgencyInfo(UrgencyLevel.NORMAL, "text-gray-500", "📅", days_left)


def evaluate_deadlines(info: DeadlineInfo, now: datetime) -> DeadlineInfo:
    """Return a copy of ``info`` with urgency for both deadlines.

    The overall status is critical if either deadline is critical.
    """
    submission = classify_deadline(info.submission, now)
    payment = classify_deadline(info.payment, now)
    status = (
        UrgencyLevel.CRITICAL
        if submission.is_urgent or payment.is_urgent
        else UrgencyLevel.NORMAL
    )
    return DeadlineInfo(
        submission=info.submission,
        payment=info.payment,
        label=info.label,
        status=status,
        submission_urgency=submission,
        payment_urgency=payment,
    )


def worst_urgency(info: DeadlineInfo | None) -> UrgencyLevel | None:
    """Most severe urgency across the deadlines of a period."""
    if info is None or info.submission_urgency is None or info.payment_urgency is None:
        return None
    levels = (info.submission_urgency.level, info.payment_urgency.level)
    if UrgencyLevel.CRITICAL in levels:
        return UrgencyLevel.CRITICAL
    if UrgencyLevel.WARNING in levels:
        return UrgencyLevel.WARNING
    return UrgencyLevel.NORMAL


def container_class(
    year: int,
    months: MonthRange,
    now: datetime,
    urgency: UrgencyLevel | None = None,
) -> str:
    """Pick the container style of a period.

    Priority: critical deadline, warning deadline, active period,
    completed period, default.
    """
    if urgency is UrgencyLevel.CRITICAL:
        return CRITICAL_CONTAINER
    if urgency is UrgencyLevel.WARNING:
        return WARNING_CONTAINER

    now = to_local(now)
    if year == now.year and months.contains(now.month):
        return ACTIVE_CONTAINER
    if year < now.year or (year == now.year and now.month > months.end):
        return COMPLETED_CONTAINER
    return DEFAULT_CONTAINER
