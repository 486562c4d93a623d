"""
Tests for lead selection.
"""

import pendulum
import pytest

from housekeepinghub.domain.booking import Booking
from housekeepinghub.domain.housekeeping_details import EMPTY, HousekeepingDetails
from housekeepinghub.domain.leads import is_lead, select_leads
from housekeepinghub.domain.models import Client


TODAY = pendulum.date(2024, 6, 1)


def _client(name: str, details_text: str = None, booking: str = None) -> Client:
    details = HousekeepingDetails.from_user_text(details_text) if details_text else EMPTY
    if booking:
        details = details.set_booking(Booking.parse(booking))
    return Client(name=name, phone="91234567", details=details)


class TestIsLead:
    """Tests for the lead predicate."""

    def test_overdue_client_is_lead(self):
        assert is_lead(_client("Alex", "2024-01-01 1 months"), TODAY)

    def test_client_due_today_is_lead(self):
        """Test that the due date itself counts."""
        assert is_lead(_client("Alex", "2024-05-01 1 months"), TODAY)

    def test_client_due_tomorrow_is_not_lead(self):
        assert not is_lead(_client("Alex", "2024-05-02 1 months"), TODAY)

    def test_future_booking_suppresses_lead(self):
        """An overdue client already booked for later is not called."""
        client = _client("Alex", "2024-01-30 2 months", booking="2099-01-01 am")

        assert client.next_due_date() < TODAY
        assert not is_lead(client, TODAY)

    @pytest.mark.parametrize("booking", ["2024-06-01 pm", "2024-05-20 am"])
    def test_past_or_same_day_booking_does_not_suppress_lead(self, booking):
        """A booking that already happened does not count as booked."""
        assert is_lead(_client("Alex", "2024-01-01 1 months", booking=booking), TODAY)

    @pytest.mark.parametrize(
        "today", [pendulum.date(1970, 1, 1), TODAY, pendulum.date(9999, 12, 31)]
    )
    def test_client_without_details_is_never_lead(self, today):
        assert not is_lead(_client("Alex"), today)

    def test_accepts_standard_library_date(self):
        from datetime import date

        assert is_lead(_client("Alex", "2024-01-01 1 months"), date(2024, 6, 1))


class TestSelectLeads:
    """Tests for selecting and ordering leads."""

    def test_leads_sorted_soonest_due_first(self):
        clients = [
            _client("Late", "2024-04-01 1 months"),
            _client("NoDetails"),
            _client("Early", "2024-01-01 1 weeks"),
            _client("Booked", "2024-01-01 1 days", booking="2024-07-01 am"),
            _client("Future", "2024-06-01 1 years"),
        ]

        leads = select_leads(clients, TODAY)

        assert [client.name for client in leads] == ["Early", "Late"]

    def test_ties_keep_roster_order(self):
        clients = [
            _client("First", "2024-01-01 1 months"),
            _client("Second", "2024-01-01 1 months"),
        ]

        assert [client.name for client in select_leads(clients, TODAY)] == ["First", "Second"]

    def test_input_is_not_modified(self):
        clients = [_client("B", "2024-03-01 1 months"), _client("A", "2024-01-01 1 months")]
        snapshot = list(clients)

        select_leads(clients, TODAY)

        assert clients == snapshot

    def test_no_clients(self):
        assert select_leads([], TODAY) == []
