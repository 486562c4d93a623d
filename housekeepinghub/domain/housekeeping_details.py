"""
Recurring housekeeping state of a client and the next-due-date prediction.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from pendulum import Date

from .booking import Booking
from .exceptions import CorruptedStorageError, InvalidFormatError
from .period import MAX_DATE, Period, as_pendulum_date, parse_calendar_date


NO_DETAILS_PROVIDED = "No housekeeping details provided"

_USER_FORMAT = re.compile(r"(\d{4}-\d{2}-\d{2}) (\d+) (days|weeks|months|years)")

_PERIOD = r"P(?=\d)(?:\d+Y)?(?:\d+M)?(?:\d+W)?(?:\d+D)?"
_STORAGE_FORMAT = re.compile(
    r"(\d{4}-\d{2}-\d{2}) "             # last housekeeping date
    rf"({_PERIOD}) "                    # preferred interval
    r"(null|\d{4}-\d{2}-\d{2} (?:am|pm)) "  # booking
    rf"({_PERIOD})"                     # deferment
)


@dataclass(frozen=True)
class HousekeepingDetails:
    """
    When a client was last serviced, how often they want service, how long
    calls to them are deferred and their single upcoming booking.

    The all-``None`` value is the ``EMPTY`` sentinel ("no recurrence
    configured"). Real details always carry a deferment, starting at zero.
    Values are immutable: the ``set_*``/``clear_*``/``add_*`` methods return
    new details.
    """
    last_housekeeping_date: Optional[Date] = None
    preferred_interval: Optional[Period] = None
    booking: Optional[Booking] = None
    deferment: Optional[Period] = None

    MESSAGE_CONSTRAINTS = (
        "Housekeeping details should be in the format: yyyy-mm-dd n (days|weeks|months|years) "
        "where n is an integer quantity of days, weeks, months or years."
    )
    MESSAGE_CONSTRAINTS_STORAGE = (
        "Housekeeping details should be stored as 'null' or "
        "'yyyy-mm-dd P?Y?M?W?D? (null|yyyy-mm-dd (am|pm)) P?Y?M?W?D?' where P is the period "
        "designator, Y is years, M is months, W is weeks and D is days."
    )

    def __post_init__(self):
        if self.last_housekeeping_date is not None:
            object.__setattr__(
                self, "last_housekeeping_date", as_pendulum_date(self.last_housekeeping_date)
            )

    @classmethod
    def empty(cls) -> "HousekeepingDetails":
        return EMPTY

    @classmethod
    def create(cls, last_housekeeping_date: date, preferred_interval: Period) -> "HousekeepingDetails":
        """Details with no deferment and no booking yet."""
        return cls(
            last_housekeeping_date=last_housekeeping_date,
            preferred_interval=preferred_interval,
            booking=None,
            deferment=Period.ZERO,
        )

    @staticmethod
    def is_valid_user_text(text: str) -> bool:
        return _USER_FORMAT.fullmatch(text) is not None

    @staticmethod
    def is_valid_storage_text(text: str) -> bool:
        return text == "null" or _STORAGE_FORMAT.fullmatch(text) is not None

    @classmethod
    def from_user_text(cls, text: str) -> "HousekeepingDetails":
        """
        Parse details typed by a user, e.g. ``2024-01-30 2 months``.

        Raises:
            InvalidFormatError: If the text is not ``yyyy-mm-dd n unit``
        """
        match = _USER_FORMAT.fullmatch(text.strip())
        if not match:
            raise InvalidFormatError(cls.MESSAGE_CONSTRAINTS)

        last_date = parse_calendar_date(match.group(1), cls.MESSAGE_CONSTRAINTS)
        interval = Period.of(int(match.group(2)), match.group(3))
        return cls.create(last_date, interval)

    @classmethod
    def from_storage_text(cls, text: str) -> "HousekeepingDetails":
        """
        Decode the persisted form produced by ``to_storage_text``.

        Raises:
            CorruptedStorageError: If the text does not decode to valid details
        """
        if not isinstance(text, str):
            raise CorruptedStorageError(
                f"Invalid stored housekeeping details {text!r}. {cls.MESSAGE_CONSTRAINTS_STORAGE}"
            )
        if text == "null":
            return EMPTY

        match = _STORAGE_FORMAT.fullmatch(text)
        if not match:
            raise CorruptedStorageError(
                f"Invalid stored housekeeping details '{text}'. {cls.MESSAGE_CONSTRAINTS_STORAGE}"
            )

        last_text, interval_text, booking_text, deferment_text = match.groups()
        try:
            return cls(
                last_housekeeping_date=parse_calendar_date(last_text, cls.MESSAGE_CONSTRAINTS_STORAGE),
                preferred_interval=Period.parse(interval_text),
                booking=None if booking_text == "null" else Booking.parse(booking_text),
                deferment=Period.parse(deferment_text),
            )
        except InvalidFormatError as exc:
            raise CorruptedStorageError(
                f"Invalid stored housekeeping details '{text}'. {exc}"
            ) from exc

    def to_storage_text(self) -> str:
        """Encode as ``null`` or ``<date> <period> (null|<booking>) <period>``."""
        if self.is_empty():
            return "null"

        booking_text = "null" if self.booking is None else self.booking.format()
        return (
            f"{self._date_text()} {self._period_text(self.preferred_interval)} "
            f"{booking_text} {self._period_text(self.deferment)}"
        )

    def is_empty(self) -> bool:
        return self == EMPTY

    def has_details(self) -> bool:
        return not self.is_empty()

    def next_due_date(self) -> Date:
        """
        Predict the next service date.

        Returns ``MAX_DATE`` ("never due") when the last date, the interval or
        the deferment is missing.
        """
        if (
            self.last_housekeeping_date is None
            or self.preferred_interval is None
            or self.deferment is None
        ):
            return MAX_DATE

        due = self.preferred_interval.add_to(self.last_housekeeping_date)
        return self.deferment.add_to(due)

    def has_active_booking(self, today: date) -> bool:
        """A booking counts only when it is strictly after ``today``."""
        return self.booking is not None and self.booking.date > as_pendulum_date(today)

    def set_booking(self, booking: Booking) -> "HousekeepingDetails":
        return replace(self, booking=booking)

    def clear_booking(self) -> "HousekeepingDetails":
        return replace(self, booking=None)

    def add_deferment(self, period: Period) -> "HousekeepingDetails":
        """Return details whose deferment is the current one plus ``period``."""
        current = self.deferment or Period.ZERO
        return replace(self, deferment=current + period)

    def with_changes(
        self,
        *,
        last_housekeeping_date: Optional[date] = None,
        preferred_interval: Optional[Period] = None,
        booking: Optional[Booking] = None,
    ) -> "HousekeepingDetails":
        """
        Re-derive details from these ones plus the given changes.

        Fields left as ``None`` keep their current value; the accumulated
        deferment carries over.
        """
        if last_housekeeping_date is None:
            last_housekeeping_date = self.last_housekeeping_date
        if preferred_interval is None:
            preferred_interval = self.preferred_interval
        if booking is None:
            booking = self.booking

        updated = HousekeepingDetails.create(last_housekeeping_date, preferred_interval)
        updated = updated.add_deferment(self.deferment or Period.ZERO)
        return updated.set_booking(booking)

    def deferment_description(self) -> str:
        return self.deferment.describe() if self.deferment is not None else "0 days"

    def describe(self) -> str:
        """Multi-line readable form without the deferment."""
        if self.is_empty():
            return NO_DETAILS_PROVIDED
        return (
            f"Last housekeeping: {self._date_text()}\n"
            f"Preferred interval: {self._period_description(self.preferred_interval)}\n"
            f"Booking date: {self._booking_description()}"
        )

    def describe_with_deferment(self) -> str:
        """Single-line readable form including the deferment."""
        if self.is_empty():
            return NO_DETAILS_PROVIDED
        return (
            f"Last housekeeping: {self._date_text()}, "
            f"Preferred interval: {self._period_description(self.preferred_interval)}, "
            f"Booking date: {self._booking_description()}, "
            f"Deferment: {self.deferment_description()}"
        )

    # Ordering follows the predicted date, equality stays structural.
    def __lt__(self, other: "HousekeepingDetails") -> bool:
        return self.next_due_date() < other.next_due_date()

    def __le__(self, other: "HousekeepingDetails") -> bool:
        return self.next_due_date() <= other.next_due_date()

    def __gt__(self, other: "HousekeepingDetails") -> bool:
        return self.next_due_date() > other.next_due_date()

    def __ge__(self, other: "HousekeepingDetails") -> bool:
        return self.next_due_date() >= other.next_due_date()

    def __str__(self) -> str:
        return self.to_storage_text()

    def _date_text(self) -> str:
        if self.last_housekeeping_date is None:
            return "null"
        return self.last_housekeeping_date.isoformat()

    def _booking_description(self) -> str:
        return "No booking" if self.booking is None else self.booking.format()

    @staticmethod
    def _period_text(period: Optional[Period]) -> str:
        return "null" if period is None else period.isoformat()

    @staticmethod
    def _period_description(period: Optional[Period]) -> str:
        return "not set" if period is None else period.describe()


EMPTY = HousekeepingDetails()
HousekeepingDetails.EMPTY = EMPTY
