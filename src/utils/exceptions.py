"""Custom exception classes."""
from typing import Optional


class FileWriteError(Exception):
    """Raised when unable to write to JSON file."""
    pass


class GatewayError(Exception):
    """Base class for failures reported by the remote roster store."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class BusinessError(GatewayError):
    """Raised when the remote store rejects the data itself (e.g. duplicate email)."""
    pass


class ServerError(GatewayError):
    """Raised when the remote store answers with an operational fault (5xx)."""
    pass


class TransportError(GatewayError):
    """Raised when no response reached us at all."""
    pass
