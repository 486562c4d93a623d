"""
Lead selection: clients who are due for a call.

A client is a lead when they have housekeeping details, no booking after
today, and a predicted next date on or before today.
"""

from datetime import date
from typing import Iterable, List

from .models import Client
from .period import as_pendulum_date


def is_lead(client: Client, today: date) -> bool:
    """Check whether ``client`` should be called on ``today``."""
    return (
        client.has_details()
        and not client.has_active_booking(today)
        and client.next_due_date() <= as_pendulum_date(today)
    )


def select_leads(clients: Iterable[Client], today: date) -> List[Client]:
    """
    Return the leads among ``clients``, soonest due first.

    The sort is stable, so clients due on the same day keep their roster
    order. Clients without details never qualify.
    """
    leads = [client for client in clients if is_lead(client, today)]
    return sorted(leads, key=lambda client: client.next_due_date())
