"""
Error types for Netlify DDNS.

Every failure that should end a run with a non-zero exit code is raised as
a subclass of `DDNSError`.
"""

from __future__ import annotations


class DDNSError(Exception):
    """Base exception for all Netlify DDNS errors."""


class ConfigValidationError(DDNSError):
    """
    Exception raised when configuration validation fails.

    Raised at startup when a required environment variable is missing or
    empty, or when a value has the wrong type.
    """


class IPDiscoveryError(DDNSError):
    """The public IPv4 lookup failed, timed out or returned garbage."""


class APIError(DDNSError):
    """
    A Netlify DNS API call failed.

    Attributes
    ----------
    status_code : int | None
        HTTP status of the final response, or None for transport failures.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """
        Initialize APIError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        status_code : int | None, optional
            HTTP status code of the failed response.
        """
        self.status_code = status_code
        super().__init__(message)
