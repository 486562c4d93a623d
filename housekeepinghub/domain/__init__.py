"""
Domain layer - Pure business logic without external dependencies.
"""

from .booking import Booking, BookingList, TimeOfDay
from .housekeeping_details import EMPTY, HousekeepingDetails
from .leads import is_lead, select_leads
from .models import Client, Housekeeper, Person
from .period import MAX_DATE, Period

__all__ = [
    "Booking",
    "BookingList",
    "TimeOfDay",
    "EMPTY",
    "HousekeepingDetails",
    "is_lead",
    "select_leads",
    "Client",
    "Housekeeper",
    "Person",
    "MAX_DATE",
    "Period",
]
