"""Custom exceptions for the Coinbase REST client.

Transport failures (requests.RequestException) and response decoding
failures (pydantic.ValidationError) are not wrapped; they reach the
caller as raised by those libraries.
"""

from http import HTTPStatus
from typing import Any

LIBRARY_NAME = "cbpro"


class CbproError(Exception):
    """Base exception for all client errors."""


class ConfigurationError(CbproError):
    """Raised when client settings cannot be turned into working credentials."""


class OrderValidationError(CbproError):
    """Raised when an order request fails a normalization rule.

    Always raised before any network call is attempted.
    """

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        super().__init__(f"{LIBRARY_NAME}: {message}")
        self.field = field
        self.value = value


class APIError(CbproError):
    """Raised when the exchange answers with a status code above 299."""

    def __init__(self, status_code: int, message: str = "") -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(str(self))

    @property
    def status_text(self) -> str:
        try:
            return HTTPStatus(self.status_code).phrase
        except ValueError:
            return ""

    def __str__(self) -> str:
        return f"{LIBRARY_NAME}: {self.status_text} - {self.message}"
