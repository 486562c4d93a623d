"""
JSON roster file.

Layout::

    {
      "clients": [{"name": ..., "phone": ..., "email": ..., "address": ...,
                   "area": ..., "details": "<storage text>"}],
      "housekeepers": [{"name": ..., ..., "bookings": ["2024-05-12 am"]}]
    }
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from ..domain.booking import BookingList
from ..domain.exceptions import CorruptedStorageError, HubError
from ..domain.housekeeping_details import HousekeepingDetails
from ..domain.models import Client, Housekeeper
from .memory_roster import InMemoryRoster


logger = logging.getLogger(__name__)

CONTACT_FIELDS = ("name", "phone", "email", "address", "area")


class JsonRosterStorage:
    """
    Reads and writes the roster file.

    Housekeeping details are kept in their compact storage text so the file
    stays readable and round-trips exactly.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> InMemoryRoster:
        """
        Load the roster, or an empty one when the file does not exist yet.

        Raises:
            CorruptedStorageError: If the file or any entry cannot be decoded
        """
        if not self.path.exists():
            logger.info("No roster file at %s, starting with an empty roster", self.path)
            return InMemoryRoster()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise CorruptedStorageError(f"Invalid JSON in {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise CorruptedStorageError("Roster file must contain a mapping at the root level.")
        for key in ("clients", "housekeepers"):
            if not isinstance(data.get(key, []), list):
                raise CorruptedStorageError(f"Roster file entry '{key}' must be a list.")

        try:
            roster = InMemoryRoster(
                clients=[self._client_from_dict(entry) for entry in data.get("clients", [])],
                housekeepers=[
                    self._housekeeper_from_dict(entry) for entry in data.get("housekeepers", [])
                ],
            )
        except HubError as exc:
            logger.warning("Roster file %s is corrupted: %s", self.path, exc)
            if isinstance(exc, CorruptedStorageError):
                raise
            raise CorruptedStorageError(f"Invalid roster entry in {self.path}: {exc}") from exc

        logger.info(
            "Loaded %d client(s) and %d housekeeper(s) from %s",
            len(roster.clients()),
            len(roster.housekeepers()),
            self.path,
        )
        return roster

    def save(self, roster: InMemoryRoster) -> None:
        """Write the roster, creating parent directories as needed."""
        data = {
            "clients": [self._client_to_dict(client) for client in roster.clients()],
            "housekeepers": [
                self._housekeeper_to_dict(housekeeper) for housekeeper in roster.housekeepers()
            ],
        }

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

        logger.info("Saved roster to %s", self.path)

    @staticmethod
    def _contact_fields(entry: Dict[str, Any]) -> Dict[str, str]:
        if not isinstance(entry, dict) or not entry.get("name"):
            raise CorruptedStorageError(f"Roster entry without a name: {entry!r}")
        return {key: str(entry.get(key, "")) for key in CONTACT_FIELDS}

    def _client_from_dict(self, entry: Dict[str, Any]) -> Client:
        contact = self._contact_fields(entry)
        details = HousekeepingDetails.from_storage_text(entry.get("details", "null"))
        return Client(**contact, details=details)

    def _housekeeper_from_dict(self, entry: Dict[str, Any]) -> Housekeeper:
        contact = self._contact_fields(entry)
        texts = entry.get("bookings", [])
        if not isinstance(texts, list) or not all(isinstance(text, str) for text in texts):
            raise CorruptedStorageError(f"Bookings of {contact['name']} must be a list of texts")
        return Housekeeper(**contact, bookings=BookingList.from_texts(texts))

    @staticmethod
    def _client_to_dict(client: Client) -> Dict[str, Any]:
        data = {key: getattr(client, key) for key in CONTACT_FIELDS}
        data["details"] = client.details.to_storage_text()
        return data

    @staticmethod
    def _housekeeper_to_dict(housekeeper: Housekeeper) -> Dict[str, Any]:
        data = {key: getattr(housekeeper, key) for key in CONTACT_FIELDS}
        data["bookings"] = housekeeper.bookings.storage_list()
        return data
