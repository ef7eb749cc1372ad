"""Common exceptions for the weather server."""

from typing import Optional


class WeatherServiceError(RuntimeError):
    """Base error for everything raised by the weather server."""


class ConfigError(WeatherServiceError):
    """Config file missing, unreadable or invalid. Fatal at startup."""


class SigningError(WeatherServiceError):
    """Private key cannot be parsed or a token cannot be signed. Fatal."""


class UpstreamError(WeatherServiceError):
    """Base class for failures talking to the weather provider."""


class TransportError(UpstreamError):
    """Network, DNS or timeout failure before a response arrived."""


class HTTPStatusError(UpstreamError):
    """Provider answered with a status other than 200."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BodyReadError(UpstreamError):
    """Response body could not be read completely."""


class DecodeError(WeatherServiceError):
    """Response body is not the JSON structure the provider documents."""


class NotFoundError(WeatherServiceError):
    """Provider reported a non-success code or returned no candidates."""
