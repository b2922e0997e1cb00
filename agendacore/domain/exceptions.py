"""
Domain-specific exception hierarchy for agendacore.
"""


class AgendaError(Exception):
    """Base class for all application-level errors."""


class ScheduleFormatError(AgendaError):
    """Raised when a stored weekly schedule does not have the expected shape."""


class StorageError(AgendaError):
    """Raised when schedule data cannot be read from or written to storage."""
