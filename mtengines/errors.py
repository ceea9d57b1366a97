"""Exceptions raised by translation engines."""
from typing import Optional


class MTError(Exception):
    """Base class for all engine failures"""


class InvalidStateError(MTError):
    """Raised when languages or model are not configured before a call"""


class TransportError(MTError):
    """Raised when a vendor request fails (HTTP error status or network failure)"""

    def __init__(self, status_code: Optional[int], message: str):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(MTError):
    """Raised when a vendor response cannot be turned into the expected result"""


class NotSupportedError(MTError, NotImplementedError):
    """Raised when an optional operation is called on an engine that lacks it"""
