from __future__ import annotations

from typing import Optional


class ArduinoManagerError(Exception):
    """Base error for the Arduino code manager."""


class ValidationError(ArduinoManagerError):
    """Raised when user input is invalid."""


class AccessDeniedError(ArduinoManagerError):
    """Raised when an operation tries to access data outside allowed scope."""


class ConfigurationError(ArduinoManagerError):
    """Raised when the repository owner/name cannot be determined."""


class ExternalServiceError(ArduinoManagerError):
    """Raised when an external service (GitHub, the static site) fails."""


class NotFoundError(ArduinoManagerError):
    """Raised when a requested resource is not found."""


class StorageError(ArduinoManagerError):
    """Raised when the local key-value store cannot be written."""


class ListingUnavailableError(ExternalServiceError):
    """Raised when neither manifest, cache nor network produced a file listing."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
