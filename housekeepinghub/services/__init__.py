"""
Service layer helpers that orchestrate the roster and domain logic.
"""

from .roster_service import EntityCollection, RosterService

__all__ = ["EntityCollection", "RosterService"]
