"""
Domain-specific exception hierarchy for the housekeeping hub.
"""


class HubError(Exception):
    """Base class for all application-level errors."""


class InvalidFormatError(HubError, ValueError):
    """Raised when booking, period or housekeeping details text is malformed."""


class DuplicateBookingError(HubError):
    """Raised when a housekeeper already holds a booking for the requested slot."""


class InvalidIndexError(HubError, IndexError):
    """Raised when a displayed list position does not exist."""


class MissingDetailsError(HubError):
    """Raised when a client operation needs housekeeping details that are not set."""


class NothingToEditError(HubError):
    """Raised when an edit request carries no field to change."""


class CorruptedStorageError(HubError):
    """Raised when stored roster data cannot be decoded."""


class EntityNotFoundError(HubError):
    """Raised when a client or housekeeper is not in the roster."""


class DuplicateEntityError(HubError):
    """Raised when a roster change would introduce a second entity with the same name."""
