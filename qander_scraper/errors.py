"""Custom exceptions for the qander_scraper package.

Single source of truth for scraper-specific exception types.
"""

from __future__ import annotations

from typing import Optional


class QanderError(RuntimeError):
    """Base class for every fatal condition raised during a run."""


class ExtractionFailure(QanderError):
    """Raised when a required pattern is absent from fetched markup."""

    def __init__(self, field: str, url: Optional[str] = None) -> None:
        details = [f"Unable to find '{field}'"]
        if url is not None:
            details.append(f"URL: {url}")
        super().__init__("\n".join(details))
        self.field = field
        self.url = url


class TransportFailure(QanderError):
    """Raised when an HTTP exchange with the portal fails."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        details = [message]
        if url is not None:
            details.append(f"URL: {url}")
        if status_code is not None:
            details.append(f"Status: {status_code}")
        super().__init__("\n".join(details))
        self.url = url
        self.status_code = status_code


class AddressFormatFailure(QanderError):
    """Raised when the SMTP target is malformed beyond a missing port."""

    def __init__(self, address: str, reason: str) -> None:
        super().__init__(f"malformed address {address!r}: {reason}")
        self.address = address
        self.reason = reason


class NotificationFailure(QanderError):
    """Raised when the SMTP relay refuses or drops the message."""


__all__ = [
    "QanderError",
    "ExtractionFailure",
    "TransportFailure",
    "AddressFormatFailure",
    "NotificationFailure",
]
