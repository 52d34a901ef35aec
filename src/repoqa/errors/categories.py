"""
Error kinds for hard navigation failures.
"""

from enum import Enum
from typing import Tuple


class ErrorKind(Enum):
    """Kinds of hard failures a navigation operation can raise"""
    NOT_FOUND = "not_found"
    NOT_A_FILE = "not_a_file"
    TOO_LARGE = "too_large"
    FETCH_FAILED = "fetch_failed"
    INVALID_INPUT = "invalid_input"
    INTERNAL = "internal"


def categorize_error(error: Exception) -> Tuple[ErrorKind, str]:
    """
    Categorize an error and provide a short explanation.

    Navigation errors carry their own kind; anything else is classified
    from its type.

    Args:
        error: The exception to categorize

    Returns:
        Tuple of (ErrorKind, explanation)
    """
    kind = getattr(error, "kind", None)
    if isinstance(kind, ErrorKind):
        return kind, EXPLANATIONS[kind]

    if isinstance(error, FileNotFoundError):
        return ErrorKind.NOT_FOUND, EXPLANATIONS[ErrorKind.NOT_FOUND]

    if isinstance(error, IsADirectoryError):
        return ErrorKind.NOT_A_FILE, EXPLANATIONS[ErrorKind.NOT_A_FILE]

    if isinstance(error, ValueError):
        return ErrorKind.INVALID_INPUT, EXPLANATIONS[ErrorKind.INVALID_INPUT]

    return ErrorKind.INTERNAL, EXPLANATIONS[ErrorKind.INTERNAL]


EXPLANATIONS = {
    ErrorKind.NOT_FOUND: "The requested path does not exist",
    ErrorKind.NOT_A_FILE: "The requested path is a directory, not a file",
    ErrorKind.TOO_LARGE: "The file exceeds the maximum readable size",
    ErrorKind.FETCH_FAILED: "The repository could not be fetched",
    ErrorKind.INVALID_INPUT: "The tool input was rejected",
    ErrorKind.INTERNAL: "An unexpected error occurred",
}
