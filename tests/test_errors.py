"""Tests for error categorization and agent-facing formatting."""

from repoqa.errors import (
    ErrorFormatter,
    ErrorKind,
    FetchError,
    FileTooLargeError,
    PathNotFoundError,
    categorize_error,
)


def test_navigation_errors_carry_their_kind():
    kind, explanation = categorize_error(FetchError("https://x/y", "fatal: not found\n"))

    assert kind == ErrorKind.FETCH_FAILED
    assert explanation == "The repository could not be fetched"


def test_builtin_errors_are_classified():
    assert categorize_error(FileNotFoundError("x"))[0] == ErrorKind.NOT_FOUND
    assert categorize_error(ValueError("bad"))[0] == ErrorKind.INVALID_INPUT
    assert categorize_error(RuntimeError("boom"))[0] == ErrorKind.INTERNAL


def test_fetch_error_strips_diagnostic():
    error = FetchError("https://x/y", "  fatal: Remote branch nope not found\n")

    assert error.diagnostic == "fatal: Remote branch nope not found"
    assert str(error) == "Failed to clone repository https://x/y: fatal: Remote branch nope not found"


def test_too_large_message_in_megabytes():
    error = FileTooLargeError("/a.bin", 20 * 1024 * 1024, 10 * 1024 * 1024)

    assert str(error) == "File is too large (20MB). Max size: 10MB"


def test_format_for_agent_includes_hints():
    message = ErrorFormatter.format_for_agent(PathNotFoundError("/r/a.py", ["/r/ab.py"]))

    assert message.startswith("Error (not_found): The requested path does not exist")
    assert "/r/ab.py" in message
    assert "Hints:" in message
    assert "Traceback" not in message


def test_format_with_traceback():
    try:
        raise PathNotFoundError("/r/a.py")
    except PathNotFoundError as e:
        message = ErrorFormatter.format_for_agent(e, include_traceback=True)

    assert "Traceback" in message
