"""
Application service for booking and recurrence edits.

Every edit follows the same steps: resolve the entity by its displayed
position, compute a new value from the old one, and swap the whole entity
in the roster. Nothing is mutated in place, so a failed check leaves the
roster untouched.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Protocol, Sequence

from ..domain.booking import Booking
from ..domain.exceptions import (
    DuplicateBookingError,
    EntityNotFoundError,
    InvalidIndexError,
    MissingDetailsError,
    NothingToEditError,
)
from ..domain.housekeeping_details import EMPTY, HousekeepingDetails
from ..domain.leads import select_leads
from ..domain.models import Client, Housekeeper, Person
from ..domain.period import Period


logger = logging.getLogger(__name__)

MESSAGE_INVALID_CLIENT_INDEX = "The client index provided is invalid"
MESSAGE_INVALID_HOUSEKEEPER_INDEX = "The housekeeper index provided is invalid"
MESSAGE_NO_DETAILS = (
    "If client does not have housekeeping details, "
    "please set housekeeping details first using 'set'."
)
MESSAGE_NOT_EDITED = "At least one field to edit must be provided."
MESSAGE_EDIT_CLIENT_SUCCESS = "Edited Client: {name}; {details}"
MESSAGE_DEFER_SUCCESS = "Deferment Success: Now the deferment value is {}"


class EntityCollection(Protocol):
    """Protocol describing the roster behaviour needed by the service."""

    def clients(self) -> Sequence[Client]:
        """Return clients in display order."""

    def housekeepers(self) -> Sequence[Housekeeper]:
        """Return housekeepers in display order."""

    def get_client(self, index: int) -> Client:
        """Return the client at a 1-based position or raise EntityNotFoundError."""

    def get_housekeeper(self, index: int) -> Housekeeper:
        """Return the housekeeper at a 1-based position or raise EntityNotFoundError."""

    def contains(self, person: Person) -> bool:
        """Check whether an entity with the same identity exists."""

    def replace(self, old: Person, new: Person) -> None:
        """Swap ``old`` for ``new``."""


class RosterService:
    """
    Orchestrates housekeeper bookings, client recurrence edits and leads.

    ``today`` is fixed when the service is built so every temporal check in
    one run agrees on the date.
    """

    def __init__(self, roster: EntityCollection, today: date) -> None:
        self._roster = roster
        self._today = today

    @property
    def today(self) -> date:
        return self._today

    # Housekeepers

    def add_housekeeper_booking(self, index: int, booking_text: str) -> str:
        """
        Book the housekeeper at ``index`` for ``booking_text``.

        Raises:
            InvalidIndexError: If there is no housekeeper at ``index``
            InvalidFormatError: If the booking text is malformed
            DuplicateBookingError: If the housekeeper is already booked for that slot
        """
        housekeeper = self._housekeeper_at(index)

        if housekeeper.has_conflict(booking_text):
            raise DuplicateBookingError(
                f"{housekeeper.name} {housekeeper.bookings.MESSAGE_DUPLICATE}"
            )

        bookings = housekeeper.bookings.copy()
        message = bookings.add(booking_text)

        self._replace(housekeeper, housekeeper.with_bookings(bookings))
        return housekeeper.describe_action(message)

    def delete_housekeeper_booking(self, index: int, booking_index: int) -> str:
        """
        Remove the booking at 1-based ``booking_index`` from a housekeeper.

        Raises:
            InvalidIndexError: If the housekeeper or the booking position does not exist
        """
        housekeeper = self._housekeeper_at(index)

        bookings = housekeeper.bookings.copy()
        message = bookings.delete(booking_index)

        self._replace(housekeeper, housekeeper.with_bookings(bookings))
        return housekeeper.describe_action(message)

    def list_housekeeper_bookings(self, index: int) -> str:
        return self._housekeeper_at(index).list_bookings()

    def search_available_housekeepers(self, area: str, booking_text: str) -> List[Housekeeper]:
        """
        Find housekeepers serving ``area`` who are free at ``booking_text``.

        Raises:
            InvalidFormatError: If the booking text is malformed
        """
        Booking.parse(booking_text)
        return [
            housekeeper
            for housekeeper in self._roster.housekeepers()
            if housekeeper.serves_area(area) and not housekeeper.has_conflict(booking_text)
        ]

    # Clients

    def set_client_details(self, index: int, details: HousekeepingDetails) -> Client:
        client = self._client_at(index)
        return self._replace_client(client, details)

    def remove_client_details(self, index: int) -> Client:
        client = self._client_at(index)
        return self._replace_client(client, EMPTY)

    def add_client_booking(self, index: int, booking_text: str) -> Client:
        """
        Give the client at ``index`` an upcoming booking.

        Raises:
            InvalidIndexError: If there is no client at ``index``
            InvalidFormatError: If the booking text is malformed
            MissingDetailsError: If the client has no housekeeping details
        """
        booking = Booking.parse(booking_text)
        client = self._client_with_details(index)
        return self._replace_client(client, client.details.set_booking(booking))

    def delete_client_booking(self, index: int) -> Client:
        client = self._client_with_details(index)
        return self._replace_client(client, client.details.clear_booking())

    def edit_client_details(
        self,
        index: int,
        *,
        last_housekeeping_date: Optional[date] = None,
        preferred_interval: Optional[Period] = None,
        booking: Optional[Booking] = None,
    ) -> Client:
        """
        Change any of the last date, preferred interval or booking of a client.

        Raises:
            NothingToEditError: If no field is given
            MissingDetailsError: If the client has no housekeeping details
        """
        if last_housekeeping_date is None and preferred_interval is None and booking is None:
            raise NothingToEditError(MESSAGE_NOT_EDITED)

        client = self._client_with_details(index)
        details = client.details.with_changes(
            last_housekeeping_date=last_housekeeping_date,
            preferred_interval=preferred_interval,
            booking=booking,
        )
        return self._replace_client(client, details)

    def defer_client(self, index: int, period: Period) -> str:
        """Push the client's next due date back by ``period`` on top of earlier deferments."""
        client = self._client_with_details(index)
        edited = self._replace_client(client, client.details.add_deferment(period))
        return MESSAGE_DEFER_SUCCESS.format(edited.details.deferment_description())

    def leads(self) -> List[Client]:
        """Clients due for a call today, soonest due first."""
        leads = select_leads(self._roster.clients(), self._today)
        logger.info("Found %d lead(s) for %s", len(leads), self._today)
        return leads

    @staticmethod
    def describe_client(client: Client) -> str:
        return MESSAGE_EDIT_CLIENT_SUCCESS.format(
            name=client.name, details=client.details.describe_with_deferment()
        )

    # Helpers

    def _housekeeper_at(self, index: int) -> Housekeeper:
        try:
            return self._roster.get_housekeeper(index)
        except EntityNotFoundError as exc:
            raise InvalidIndexError(MESSAGE_INVALID_HOUSEKEEPER_INDEX) from exc

    def _client_at(self, index: int) -> Client:
        try:
            return self._roster.get_client(index)
        except EntityNotFoundError as exc:
            raise InvalidIndexError(MESSAGE_INVALID_CLIENT_INDEX) from exc

    def _client_with_details(self, index: int) -> Client:
        client = self._client_at(index)
        if not client.has_details():
            raise MissingDetailsError(MESSAGE_NO_DETAILS)
        return client

    def _replace_client(self, client: Client, details: HousekeepingDetails) -> Client:
        edited = client.with_details(details)
        self._replace(client, edited)
        return edited

    def _replace(self, old: Person, new: Person) -> None:
        self._roster.replace(old, new)
        logger.info("Updated %s %s", type(new).__name__.lower(), new.name)
