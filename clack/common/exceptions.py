"""
Custom exceptions for Clack.
"""

from typing import Optional


class ClackException(Exception):
    """Base exception for Clack errors."""
    pass


class InvalidConfiguration(ClackException, ValueError):
    """Cipher key or alphabet is unusable."""
    pass


class FileUnavailable(ClackException):
    """A file could not be read or written."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class MalformedCommand(ClackException):
    """User input matched a keyword but not its syntax."""
    pass


class ProtocolViolation(ClackException):
    """Message tag or wire data not understood."""
    pass
