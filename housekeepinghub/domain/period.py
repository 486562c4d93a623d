"""
Calendar periods used for preferred intervals and deferments.

A period keeps years, months and days apart so that "2 months" after
January 30th lands on March 30th instead of a fixed number of days later.
Weeks are folded into days when a period is built.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

import pendulum
from pendulum import Date

from .exceptions import InvalidFormatError


MAX_DATE: Date = pendulum.date(9999, 12, 31)

UNITS = ("days", "weeks", "months", "years")

_ISO_PATTERN = re.compile(r"P(?!$)(?:(\d+)Y)?(?:(\d+)M)?(?:(\d+)W)?(?:(\d+)D)?")
_USER_PATTERN = re.compile(r"(\d+)\s+(days|weeks|months|years)")


def as_pendulum_date(value: date) -> Date:
    """Return ``value`` as a pendulum Date (plain dates are converted)."""
    if isinstance(value, Date):
        return value
    return pendulum.date(value.year, value.month, value.day)


def parse_calendar_date(text: str, message: str) -> Date:
    """
    Parse a ``YYYY-MM-DD`` string into a Date.

    Args:
        text: Date string, already checked for the ``YYYY-MM-DD`` shape
        message: Error message to raise with when the date does not exist

    Raises:
        InvalidFormatError: If the text is not a real calendar date
    """
    try:
        return pendulum.from_format(text, "YYYY-MM-DD").date()
    except ValueError as exc:
        raise InvalidFormatError(message) from exc


@dataclass(frozen=True)
class Period:
    """
    Immutable calendar period.

    Equality is component-wise: ``P1M`` and ``P30D`` are different periods.
    """
    years: int = 0
    months: int = 0
    days: int = 0

    MESSAGE_CONSTRAINTS = (
        "Periods should be in the format: P?Y?M?W?D? where P is the period designator, "
        "Y is years, M is months, W is weeks and D is days. YMWD must be in that order."
    )
    MESSAGE_NEGATIVE = "Periods cannot be negative."

    def __post_init__(self):
        if self.years < 0 or self.months < 0 or self.days < 0:
            raise InvalidFormatError(self.MESSAGE_NEGATIVE)

    @classmethod
    def of(cls, quantity: int, unit: str) -> "Period":
        """Build a single-unit period from a quantity and a unit word."""
        if unit == "days":
            return cls(days=quantity)
        if unit == "weeks":
            return cls(days=quantity * 7)
        if unit == "months":
            return cls(months=quantity)
        if unit == "years":
            return cls(years=quantity)
        raise InvalidFormatError(f"Unknown period unit '{unit}', expected one of {', '.join(UNITS)}")

    @classmethod
    def from_user_text(cls, text: str) -> "Period":
        """
        Parse a typed period such as ``2 weeks``.

        Raises:
            InvalidFormatError: If the text is not ``n (days|weeks|months|years)``
        """
        match = _USER_PATTERN.fullmatch(text.strip())
        if not match:
            raise InvalidFormatError(
                "Periods should be in the format: n (days|weeks|months|years) "
                "where n is an integer quantity."
            )
        return cls.of(int(match.group(1)), match.group(2))

    @classmethod
    def parse(cls, text: str) -> "Period":
        """
        Parse the ISO-8601 designator form, e.g. ``P2M`` or ``P1Y2W``.

        Raises:
            InvalidFormatError: If the text is not a period designator
        """
        match = _ISO_PATTERN.fullmatch(text)
        if not match:
            raise InvalidFormatError(cls.MESSAGE_CONSTRAINTS)

        years, months, weeks, days = (int(group or 0) for group in match.groups())
        return cls(years=years, months=months, days=weeks * 7 + days)

    def is_zero(self) -> bool:
        return self.years == 0 and self.months == 0 and self.days == 0

    def plus(self, other: "Period") -> "Period":
        """Add two periods component by component."""
        return Period(
            years=self.years + other.years,
            months=self.months + other.months,
            days=self.days + other.days,
        )

    __add__ = plus

    def add_to(self, start: date) -> Date:
        """
        Move a date forward by this period.

        Years and months are applied first (clamping to the last day of a
        shorter month), then days. Results past the calendar end are capped
        at ``MAX_DATE``.
        """
        start = as_pendulum_date(start)
        year = start.year + self.years + (start.month - 1 + self.months) // 12
        if year > MAX_DATE.year:
            return MAX_DATE

        shifted = start.add(years=self.years, months=self.months)
        if self.days > shifted.diff(MAX_DATE).in_days():
            return MAX_DATE
        return shifted.add(days=self.days)

    def isoformat(self) -> str:
        """Return the canonical designator form, ``P0D`` for the zero period."""
        if self.is_zero():
            return "P0D"

        text = "P"
        if self.years:
            text += f"{self.years}Y"
        if self.months:
            text += f"{self.months}M"
        if self.days:
            text += f"{self.days}D"
        return text

    def describe(self) -> str:
        """Readable form such as ``2 months`` or ``1 years 3 days``."""
        if self.is_zero():
            return "0 days"

        parts = []
        if self.years:
            parts.append(f"{self.years} years")
        if self.months:
            parts.append(f"{self.months} months")
        if self.days:
            parts.append(f"{self.days} days")
        return " ".join(parts)

    def __str__(self) -> str:
        return self.isoformat()


Period.ZERO = Period()
