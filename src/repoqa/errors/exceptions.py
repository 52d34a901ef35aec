"""
Hard-failure exceptions raised by the repository cache and navigation tools.
"""

from typing import List, Optional, Sequence

from .categories import ErrorKind


class NavigationError(Exception):
    """Base class for hard failures. Every subclass carries an ErrorKind."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path


class PathNotFoundError(NavigationError):
    """Raised when an explicitly requested file does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: str, suggestions: Sequence[str] = ()):
        self.suggestions: List[str] = list(suggestions)
        message = f"File not found: {path}"
        if self.suggestions:
            message += "\n\nDid you mean one of these?\n" + "\n".join(self.suggestions)
        super().__init__(message, path=path)


class NotAFileError(NavigationError):
    """Raised when a read targets a directory."""

    kind = ErrorKind.NOT_A_FILE

    def __init__(self, path: str):
        super().__init__(f"Path is a directory, not a file: {path}", path=path)


class FileTooLargeError(NavigationError):
    """Raised when a file exceeds the read size ceiling."""

    kind = ErrorKind.TOO_LARGE

    def __init__(self, path: str, size_bytes: int, max_bytes: int):
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes
        size_mb = round(size_bytes / 1024 / 1024)
        max_mb = round(max_bytes / 1024 / 1024)
        super().__init__(
            f"File is too large ({size_mb}MB). Max size: {max_mb}MB",
            path=path
        )


class FetchError(NavigationError):
    """Raised when a repository clone fails."""

    kind = ErrorKind.FETCH_FAILED

    def __init__(self, url: str, diagnostic: str, path: Optional[str] = None):
        self.url = url
        self.diagnostic = diagnostic.strip()
        super().__init__(
            f"Failed to clone repository {url}: {self.diagnostic or 'unknown error'}",
            path=path
        )
