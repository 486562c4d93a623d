"""
Tests for the RosterService orchestration layer.
"""

import pendulum
import pytest

from housekeepinghub.adapters.memory_roster import InMemoryRoster
from housekeepinghub.domain.booking import Booking, BookingList
from housekeepinghub.domain.exceptions import (
    DuplicateBookingError,
    InvalidFormatError,
    InvalidIndexError,
    MissingDetailsError,
    NothingToEditError,
)
from housekeepinghub.domain.housekeeping_details import EMPTY, HousekeepingDetails
from housekeepinghub.domain.models import Client, Housekeeper
from housekeepinghub.domain.period import Period
from housekeepinghub.services.roster_service import RosterService


TODAY = pendulum.date(2024, 6, 1)


def _build_service() -> RosterService:
    roster = InMemoryRoster(
        clients=[
            Client(name="Bernice", details=HousekeepingDetails.from_user_text("2024-04-01 1 months")),
            Client(name="Charlotte"),
            Client(name="David", details=HousekeepingDetails.from_user_text("2024-01-01 2 weeks")),
        ],
        housekeepers=[
            Housekeeper(
                name="Alice",
                area="west",
                bookings=BookingList.from_texts(["2024-05-12 am"]),
            ),
            Housekeeper(name="Irfan", area="east"),
        ],
    )
    return RosterService(roster, today=TODAY)


def _roster(service: RosterService) -> InMemoryRoster:
    return service._roster


class TestHousekeeperBookings:
    """Tests for housekeeper booking commands."""

    def test_add_booking_replaces_housekeeper(self):
        """The housekeeper is swapped for a copy carrying the new booking."""
        service = _build_service()
        before = _roster(service).get_housekeeper(1)

        message = service.add_housekeeper_booking(1, "2024-05-12 pm")

        after = _roster(service).get_housekeeper(1)
        assert message == (
            "Housekeeper: [ Alice ]\n\n"
            "This booking has successfully been added: 2024-05-12 pm."
        )
        assert after.bookings.storage_list() == ["2024-05-12 am", "2024-05-12 pm"]
        assert before.bookings.storage_list() == ["2024-05-12 am"]

    def test_add_duplicate_booking_names_housekeeper(self):
        service = _build_service()

        with pytest.raises(DuplicateBookingError, match="Alice is unavailable"):
            service.add_housekeeper_booking(1, "2024-05-12 am")

        assert len(_roster(service).get_housekeeper(1).bookings) == 1

    def test_add_malformed_booking(self):
        service = _build_service()

        with pytest.raises(InvalidFormatError):
            service.add_housekeeper_booking(1, "2024-05-12")

    @pytest.mark.parametrize("index", [0, 3, -1])
    def test_add_booking_invalid_housekeeper_index(self, index):
        service = _build_service()

        with pytest.raises(InvalidIndexError, match="housekeeper index provided is invalid"):
            service.add_housekeeper_booking(index, "2024-05-12 pm")

    def test_delete_booking(self):
        service = _build_service()

        message = service.delete_housekeeper_booking(1, 1)

        assert message.endswith("This booking has successfully been deleted: 2024-05-12 am.")
        assert len(_roster(service).get_housekeeper(1).bookings) == 0

    @pytest.mark.parametrize("booking_index", [0, 2])
    def test_delete_booking_invalid_position(self, booking_index):
        """Position 0 and positions past the end are both rejected."""
        service = _build_service()

        with pytest.raises(InvalidIndexError, match="booking index provided is invalid"):
            service.delete_housekeeper_booking(1, booking_index)

        assert len(_roster(service).get_housekeeper(1).bookings) == 1

    def test_list_bookings(self):
        service = _build_service()
        service.add_housekeeper_booking(1, "2024-05-01 pm")

        assert service.list_housekeeper_bookings(1) == (
            "Housekeeper: [ Alice ]\n\nBookings:\n1. 2024-05-01 pm\n2. 2024-05-12 am"
        )

    def test_search_available_housekeepers(self):
        """Only housekeepers in the area who are free at that slot are returned."""
        service = _build_service()

        assert service.search_available_housekeepers("west", "2024-05-12 am") == []
        assert [h.name for h in service.search_available_housekeepers("West", "2024-05-12 pm")] == [
            "Alice"
        ]
        assert [h.name for h in service.search_available_housekeepers("east", "2024-05-12 am")] == [
            "Irfan"
        ]

    def test_search_rejects_malformed_booking(self):
        with pytest.raises(InvalidFormatError):
            _build_service().search_available_housekeepers("west", "someday")


class TestClientDetails:
    """Tests for client recurrence commands."""

    def test_set_details(self):
        service = _build_service()
        details = HousekeepingDetails.from_user_text("2024-05-01 2 weeks")

        client = service.set_client_details(2, details)

        assert client.details == details
        assert _roster(service).get_client(2) == client

    def test_remove_details(self):
        service = _build_service()

        client = service.remove_client_details(1)

        assert client.details is EMPTY
        assert not _roster(service).get_client(1).has_details()

    def test_invalid_client_index(self):
        with pytest.raises(InvalidIndexError, match="client index provided is invalid"):
            _build_service().remove_client_details(4)

    def test_add_client_booking(self):
        service = _build_service()

        client = service.add_client_booking(1, "2024-06-15 am")

        assert client.details.booking == Booking.parse("2024-06-15 am")
        assert client.has_active_booking(TODAY)

    def test_add_client_booking_requires_details(self):
        service = _build_service()

        with pytest.raises(MissingDetailsError):
            service.add_client_booking(2, "2024-06-15 am")

    def test_delete_client_booking(self):
        service = _build_service()
        service.add_client_booking(1, "2024-06-15 am")

        client = service.delete_client_booking(1)

        assert client.details.booking is None

    def test_edit_details_keeps_deferment(self):
        service = _build_service()
        service.defer_client(1, Period(days=5))

        client = service.edit_client_details(1, preferred_interval=Period(months=2))

        assert client.details.preferred_interval == Period(months=2)
        assert client.details.deferment == Period(days=5)
        assert client.next_due_date() == pendulum.date(2024, 6, 6)

    def test_edit_without_fields(self):
        with pytest.raises(NothingToEditError):
            _build_service().edit_client_details(1)

    def test_edit_requires_details(self):
        with pytest.raises(MissingDetailsError):
            _build_service().edit_client_details(2, preferred_interval=Period(days=1))

    def test_defer_accumulates(self):
        service = _build_service()

        service.defer_client(3, Period.of(1, "weeks"))
        message = service.defer_client(3, Period.of(1, "weeks"))

        assert message == "Deferment Success: Now the deferment value is 14 days"
        assert _roster(service).get_client(3).details.deferment == Period(days=14)

    def test_defer_refuses_negative_period(self):
        service = _build_service()
        service.defer_client(3, Period.of(1, "weeks"))

        with pytest.raises(InvalidFormatError):
            service.defer_client(3, Period.of(-3, "days"))

        assert _roster(service).get_client(3).details.deferment == Period(days=7)

    def test_describe_client(self):
        client = _build_service().set_client_details(
            2, HousekeepingDetails.from_user_text("2024-05-01 2 weeks")
        )

        assert RosterService.describe_client(client).startswith("Edited Client: Charlotte; ")


class TestLeads:
    """Tests for lead generation through the service."""

    def test_leads(self):
        """David (due mid January) comes before Bernice (due May 1st); Charlotte has no details."""
        leads = _build_service().leads()

        assert [client.name for client in leads] == ["David", "Bernice"]

    def test_far_future_client_is_never_a_lead(self):
        """A due date past the calendar end is capped and the other leads still show."""
        service = _build_service()
        service.set_client_details(2, HousekeepingDetails.from_user_text("9999-06-01 12 months"))

        assert [client.name for client in service.leads()] == ["David", "Bernice"]

    def test_booked_client_drops_out_of_leads(self):
        service = _build_service()
        service.add_client_booking(3, "2024-06-10 pm")

        assert [client.name for client in service.leads()] == ["Bernice"]

    def test_deferred_client_drops_out_of_leads(self):
        service = _build_service()
        service.defer_client(1, Period(days=45))

        assert [client.name for client in service.leads()] == ["David"]
