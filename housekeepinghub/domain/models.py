"""
Domain models for the people in the roster.
"""

from dataclasses import dataclass, field, replace
from datetime import date

from pendulum import Date

from .booking import BookingList
from .housekeeping_details import EMPTY, HousekeepingDetails


@dataclass(frozen=True)
class Person:
    """
    Contact fields shared by clients and housekeepers.

    Identity is the name, compared case-insensitively; two entries with the
    same name cannot live in one roster.
    """
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    area: str = ""

    def is_same(self, other: "Person") -> bool:
        """Check whether ``other`` has the same identity (name)."""
        return other is not None and self.name.lower() == other.name.lower()


@dataclass(frozen=True)
class Client(Person):
    """
    A client receiving periodic housekeeping.
    """
    details: HousekeepingDetails = EMPTY

    def has_details(self) -> bool:
        return self.details.has_details()

    def next_due_date(self) -> Date:
        return self.details.next_due_date()

    def has_active_booking(self, today: date) -> bool:
        return self.details.has_active_booking(today)

    def with_details(self, details: HousekeepingDetails) -> "Client":
        """Return a copy of this client carrying ``details``."""
        return replace(self, details=details)


@dataclass(frozen=True)
class Housekeeper(Person):
    """
    A housekeeper with bookable half-day visits.

    The booking list belongs to this housekeeper only; edits build a new
    housekeeper around a copied list.
    """
    bookings: BookingList = field(default_factory=BookingList)

    def has_conflict(self, booking_text: str) -> bool:
        return self.bookings.has_conflict(booking_text)

    def serves_area(self, area: str) -> bool:
        """Case-insensitive whole-word match of ``area`` against this housekeeper's area."""
        wanted = area.strip().lower()
        return bool(wanted) and wanted in self.area.lower().split()

    def list_bookings(self) -> str:
        return self.describe_action(self.bookings.list_all())

    def describe_action(self, message: str) -> str:
        """Prefix a booking message with this housekeeper's name."""
        return f"Housekeeper: [ {self.name} ]\n\n{message}"

    def with_bookings(self, bookings: BookingList) -> "Housekeeper":
        """Return a copy of this housekeeper carrying ``bookings``."""
        return replace(self, bookings=bookings)
