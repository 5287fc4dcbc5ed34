# chainreg/errors.py
"""
Exception types raised by the registry client and path cache.

Absence (a chain, asset list or path that does not exist) is never an
exception: lookups return None or an empty list. Only transport problems
and an internally inconsistent registry raise.
"""

from typing import Optional


class RegistryError(Exception):
    """Base class for all chain registry errors."""


class RetrievalError(RegistryError):
    """
    A document or directory listing could not be retrieved or decoded.

    Attributes:
        path: Repository-relative path that was requested
        status: HTTP status code, if the failure came from a response
    """

    def __init__(self, path: str, message: str, status: Optional[int] = None):
        self.path = path
        self.status = status
        if status is not None:
            message = f"HTTP {status}: {message}"
        super().__init__(f"{path}: {message}")


class DataInconsistency(RegistryError):
    """A path listed by the registry could not be fetched."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Path {identifier!r} is listed but could not be fetched")
