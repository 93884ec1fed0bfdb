"""Error taxonomy for ledger operations."""

from datetime import date


class LedgerError(Exception):
    """Base class for errors raised by the ledger engine."""


class ValidationError(LedgerError):
    """Raised when user input is rejected before any state changes."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class NotFoundError(LedgerError):
    """Raised when a meal id is not present on the requested day."""

    def __init__(self, meal_id: str, day: date) -> None:
        super().__init__(f"Meal {meal_id} not found on {day.isoformat()}")
        self.meal_id = meal_id
        self.day = day


class StorageError(LedgerError):
    """Raised when the key-value store fails or times out."""
