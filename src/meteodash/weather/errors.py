"""Exception classes for weather API interactions.

This module defines a hierarchy of exception classes for handling
various error conditions when talking to the Open-Meteo services.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class WeatherAPIError(Exception):
    """Error during an Open-Meteo request or response parsing.

    Raised when a request fails due to network issues, a non-success
    status, an empty geocoding result or a malformed response body.
    Includes the underlying response details when available.
    """

    def __init__(
        self, code: int, message: str, response: Optional[Dict[str, Any]] = None
    ) -> None:
        """Initialize the exception.

        Args:
            code: HTTP status code or 0 for non-HTTP failures
            message: Human-readable error message
            response: Optional raw API response for debugging
        """
        super().__init__(f"[{code}] {message}")
        self.code: int = code
        self.message: str = message
        self.response: Optional[Dict[str, Any]] = response

    @property
    def is_client_error(self) -> bool:
        """Check if this is a client-side error (4xx)."""
        return 400 <= self.code < 500

    @property
    def is_server_error(self) -> bool:
        """Check if this is a server-side error (5xx)."""
        return self.code >= 500

    @classmethod
    def from_response(
        cls, response: Dict[str, Any], status_code: int = 0
    ) -> WeatherAPIError:
        """Create an error from an API error body.

        Open-Meteo reports failures as ``{"error": true, "reason": "..."}``.

        Args:
            response: Decoded error body (may be empty)
            status_code: HTTP status code

        Returns:
            Appropriate WeatherAPIError subclass
        """
        reason = response.get("reason") or response.get("message")
        if 400 <= status_code < 500:
            if status_code == 404:
                return NotFoundError(status_code, reason or "Resource not found", response)
            if status_code == 429:
                return RateLimitError(status_code, reason or "Rate limit exceeded", response)
            return ClientError(status_code, reason or "Client error", response)
        elif status_code >= 500:
            return ServerError(status_code, reason or "Server error", response)

        return cls(status_code, reason or "Unknown error", response)


class NetworkError(WeatherAPIError):
    """Raised when a transport issue prevents API communication."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with network error details.

        Args:
            message: Description of the network error
            original_error: The original exception that was caught
        """
        super().__init__(0, message)
        self.original_error = original_error


class NotFoundError(WeatherAPIError):
    """Raised when a lookup has no match (e.g. a city that doesn't exist)."""

    pass


class RateLimitError(WeatherAPIError):
    """Raised when rate limits are exceeded."""

    pass


class ClientError(WeatherAPIError):
    """Raised for general 4xx client errors."""

    pass


class ServerError(WeatherAPIError):
    """Raised for 5xx server errors."""

    pass


class ParseError(WeatherAPIError):
    """Raised when a response body is not the JSON shape we expect."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with parsing error details.

        Args:
            message: Description of the parsing error
            original_error: The original exception that was caught
        """
        super().__init__(0, message)
        self.original_error = original_error
