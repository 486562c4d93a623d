"""
Adapters layer - Roster storage.
"""

from .json_storage import JsonRosterStorage
from .memory_roster import InMemoryRoster

__all__ = ["JsonRosterStorage", "InMemoryRoster"]
