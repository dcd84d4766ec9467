class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or a required field is missing."""


class NotFoundError(DomainError):
    """Raised when a referenced employee does not exist or is inactive."""


class ComputationAnomaly(DomainError):
    """Raised when derived worked-hours are implausible (negative or above a day)."""

    def __init__(self, message: str, *, hours: float):
        super().__init__(message)
        self.hours = hours


class SinkFailure(DomainError):
    """Raised when a report could not be handed to its delivery sink."""
