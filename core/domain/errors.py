"""
Domain errors.
Repositories capture all of these into Error results; nothing here crosses the repository boundary.
"""

from typing import Optional


class KaiqiuError(Exception):
    """Base class for client errors"""


class NetworkError(KaiqiuError):
    """Transport failure: connection, timeout, HTTP status, undecodable body"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiError(KaiqiuError):
    """Server answered with code != 1, or with a payload we cannot use"""

    def __init__(self, message: str, code: int):
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"ApiError(message={self.message!r}, code={self.code})"


class StorageError(KaiqiuError):
    """Local preference storage could not be written"""


class ValidationError(KaiqiuError):
    """Caller supplied invalid input; raised before any remote call"""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
