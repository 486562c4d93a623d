"""
In-memory roster of clients and housekeepers.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, TypeVar

from ..domain.exceptions import DuplicateEntityError, EntityNotFoundError
from ..domain.models import Client, Housekeeper, Person


logger = logging.getLogger(__name__)

PersonT = TypeVar("PersonT", bound=Person)


class InMemoryRoster:
    """
    Holds clients and housekeepers in display order.

    Names are unique per list (case-insensitive). Entities are never edited
    in place: ``replace`` swaps a whole entity for its edited copy.
    """

    def __init__(
        self,
        clients: Iterable[Client] = (),
        housekeepers: Iterable[Housekeeper] = (),
    ):
        self._clients: List[Client] = []
        self._housekeepers: List[Housekeeper] = []
        for client in clients:
            self.add(client)
        for housekeeper in housekeepers:
            self.add(housekeeper)

    def clients(self) -> Sequence[Client]:
        return tuple(self._clients)

    def housekeepers(self) -> Sequence[Housekeeper]:
        return tuple(self._housekeepers)

    def get_client(self, index: int) -> Client:
        """Return the client at 1-based ``index``."""
        return self._get(self._clients, index)

    def get_housekeeper(self, index: int) -> Housekeeper:
        """Return the housekeeper at 1-based ``index``."""
        return self._get(self._housekeepers, index)

    def contains(self, person: Person) -> bool:
        return any(existing.is_same(person) for existing in self._entries_for(person))

    def add(self, person: Person) -> None:
        """
        Append a client or housekeeper.

        Raises:
            DuplicateEntityError: If an entity with the same name exists
        """
        if self.contains(person):
            raise DuplicateEntityError(f"{person.name} already exists in the roster.")
        self._entries_for(person).append(person)

    def replace(self, old: PersonT, new: PersonT) -> None:
        """
        Swap ``old`` for ``new`` at the same position.

        Raises:
            EntityNotFoundError: If ``old`` is not in the roster
            DuplicateEntityError: If ``new`` renames onto another entity
        """
        entries = self._entries_for(old)
        position = self._position_of(entries, old)

        if not old.is_same(new) and self.contains(new):
            raise DuplicateEntityError(f"{new.name} already exists in the roster.")

        entries[position] = new
        logger.debug("Replaced %s at position %d", old.name, position + 1)

    def _entries_for(self, person: Person) -> list:
        if isinstance(person, Client):
            return self._clients
        if isinstance(person, Housekeeper):
            return self._housekeepers
        raise TypeError(f"Unsupported roster entry: {type(person).__name__}")

    @staticmethod
    def _position_of(entries: list, person: Person) -> int:
        for position, existing in enumerate(entries):
            if existing.is_same(person):
                return position
        raise EntityNotFoundError(f"{person.name} is not in the roster.")

    @staticmethod
    def _get(entries: list, index: int):
        if not 1 <= index <= len(entries):
            raise EntityNotFoundError(f"No entry at position {index}.")
        return entries[index - 1]
