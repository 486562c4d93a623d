"""
Bookings (one reserved half-day visit) and the per-housekeeper booking list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List

from pendulum import Date

from .exceptions import DuplicateBookingError, InvalidFormatError, InvalidIndexError
from .period import as_pendulum_date, parse_calendar_date


class TimeOfDay(str, Enum):
    """Coarse half of a booked day."""
    AM = "am"
    PM = "pm"


@dataclass(frozen=True, order=True)
class Booking:
    """
    A single reserved visit: a calendar date plus an AM/PM slot.

    Bookings order by date first, then slot (``am`` before ``pm``).
    """
    date: Date
    slot: TimeOfDay

    MESSAGE_CONSTRAINTS = (
        "Booked date and time should be in the format: yyyy-mm-dd (am|pm). "
        "Both date and time fields must be filled. Time field can only take values {am, pm}."
    )
    PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2}) (am|pm)")

    @classmethod
    def is_valid(cls, text: str) -> bool:
        """Check the text has the ``yyyy-mm-dd am|pm`` shape."""
        return cls.PATTERN.fullmatch(text) is not None

    @classmethod
    def parse(cls, text: str) -> "Booking":
        """
        Build a booking from its text form, e.g. ``2024-05-12 am``.

        Raises:
            InvalidFormatError: If the text is not exactly ``yyyy-mm-dd am|pm``
        """
        match = cls.PATTERN.fullmatch(text)
        if not match:
            raise InvalidFormatError(cls.MESSAGE_CONSTRAINTS)

        booked_date = parse_calendar_date(match.group(1), cls.MESSAGE_CONSTRAINTS)
        return cls(date=booked_date, slot=TimeOfDay(match.group(2)))

    def __post_init__(self):
        object.__setattr__(self, "date", as_pendulum_date(self.date))
        object.__setattr__(self, "slot", TimeOfDay(self.slot))

    def format(self) -> str:
        """Return the canonical ``yyyy-mm-dd am|pm`` text."""
        return f"{self.date.isoformat()} {self.slot.value}"

    def __str__(self) -> str:
        return self.format()


class BookingList:
    """
    Ordered bookings of one housekeeper.

    Insertion order is kept; ``list_all`` renders a date-sorted view without
    reordering the stored entries, and positions given to ``delete`` refer to
    that view. No two entries share the same date and slot.
    """

    MESSAGE_DUPLICATE = (
        "is unavailable at the specified date and time. Please input a different date and time."
    )
    MESSAGE_INVALID_DELETE = "The booking index provided is invalid."
    MESSAGE_SUCCESS_ADD = "This booking has successfully been added: {}."
    MESSAGE_SUCCESS_DELETE = "This booking has successfully been deleted: {}."
    MESSAGE_SUCCESS_LIST = "Bookings:{}"

    def __init__(self, bookings: Iterable[Booking] = ()):
        self._bookings: List[Booking] = list(bookings)

    @classmethod
    def from_texts(cls, texts: Iterable[str]) -> "BookingList":
        """
        Build a list from booking texts, keeping their order.

        Raises:
            InvalidFormatError: If a text is malformed
            DuplicateBookingError: If two texts name the same slot
        """
        bookings = cls()
        for text in texts:
            bookings.add(text)
        return bookings

    @staticmethod
    def create(text: str) -> Booking:
        """Parse booking text; malformed text raises InvalidFormatError."""
        return Booking.parse(text)

    def has_conflict(self, text: str) -> bool:
        """
        Check whether the slot described by ``text`` is already taken.

        Only the same date AND the same slot conflict; an ``am`` and a ``pm``
        booking on one day can coexist.
        """
        return self.create(text) in self._bookings

    def add(self, text: str) -> str:
        """
        Append a booking and return a confirmation message.

        Raises:
            InvalidFormatError: If the text is malformed
            DuplicateBookingError: If the slot is already booked
        """
        booking = self.create(text)
        if booking in self._bookings:
            raise DuplicateBookingError(f"{booking} {self.MESSAGE_DUPLICATE}")

        self._bookings.append(booking)
        return self.MESSAGE_SUCCESS_ADD.format(booking)

    def is_valid_position(self, index: int) -> bool:
        """True iff ``index`` is a 1-based position in the list."""
        return 1 <= index <= len(self._bookings)

    def delete(self, index: int) -> str:
        """
        Remove the booking shown at 1-based ``index`` by ``list_all`` and
        return a confirmation message.

        Raises:
            InvalidIndexError: If the position does not exist
        """
        if not self.is_valid_position(index):
            raise InvalidIndexError(self.MESSAGE_INVALID_DELETE)

        removed = self.sorted()[index - 1]
        self._bookings.remove(removed)
        return self.MESSAGE_SUCCESS_DELETE.format(removed)

    def sorted(self) -> List[Booking]:
        """Return the bookings in date order without touching the stored order."""
        return sorted(self._bookings)

    def list_all(self) -> str:
        """Render a numbered, date-sorted listing."""
        lines = "".join(
            f"\n{position}. {booking}"
            for position, booking in enumerate(self.sorted(), 1)
        )
        return self.MESSAGE_SUCCESS_LIST.format(lines)

    def storage_list(self) -> List[str]:
        """Booking texts in insertion order, as written to storage."""
        return [booking.format() for booking in self._bookings]

    def copy(self) -> "BookingList":
        return BookingList(self._bookings)

    def __iter__(self) -> Iterator[Booking]:
        return iter(self._bookings)

    def __len__(self) -> int:
        return len(self._bookings)

    def __getitem__(self, position: int) -> Booking:
        return self._bookings[position]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BookingList):
            return NotImplemented
        return self._bookings == other._bookings

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BookingList({self._bookings!r})"

    def __str__(self) -> str:
        if not self._bookings:
            return "No bookings available"
        return ", ".join(str(booking) for booking in self._bookings)
