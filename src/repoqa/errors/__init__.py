"""
Error handling and formatting for repoqa.
"""

from .categories import ErrorKind, categorize_error
from .exceptions import (
    NavigationError,
    PathNotFoundError,
    NotAFileError,
    FileTooLargeError,
    FetchError
)
from .formatter import ErrorFormatter

__all__ = [
    "ErrorKind",
    "categorize_error",
    "NavigationError",
    "PathNotFoundError",
    "NotAFileError",
    "FileTooLargeError",
    "FetchError",
    "ErrorFormatter",
]
