"""
Triage Engine Errors

Defines the exception hierarchy raised by the triage engine. Simulated
classification never raises; these errors cover configuration problems,
the live gateway and the static scenario library.
"""

from typing import Optional


class TriageError(Exception):
    """Base class for all triage engine errors."""


class ConfigurationError(TriageError):
    """Live mode was requested without an endpoint or API key."""


class UpstreamError(TriageError):
    """
    The live endpoint answered with a non-success status or an unusable body.

    Attributes:
        status_code: HTTP status returned by the endpoint
        status_text: Reason phrase returned by the endpoint
    """

    def __init__(self, status_code: int, status_text: str, message: Optional[str] = None):
        self.status_code = status_code
        self.status_text = status_text
        super().__init__(message or f"Agent API error: {status_code} {status_text}")


class NetworkError(TriageError):
    """The live endpoint could not be reached."""

    DEFAULT_MESSAGE = "Failed to connect to agent. Please check your endpoint and API key."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.DEFAULT_MESSAGE)


class DataError(TriageError):
    """The scenario library is missing, malformed or inconsistent."""
