"""
Error message formatting for the calling agent.
"""

import traceback

from .categories import ErrorKind, categorize_error


class ErrorFormatter:
    """
    Formats errors into messages an agent can act on without retrying blindly.
    """

    # Hints for each error kind
    HINTS = {
        ErrorKind.NOT_FOUND: [
            "Check the path for typos or use one of the suggested paths",
            "Use the glob tool to locate the file by name",
        ],
        ErrorKind.NOT_A_FILE: [
            "Use the list tool to see the files inside this directory",
        ],
        ErrorKind.TOO_LARGE: [
            "Use grep to find the relevant lines first",
            "Read narrower windows with the offset and limit parameters",
        ],
        ErrorKind.FETCH_FAILED: [
            "Verify the repository URL is public and spelled correctly",
            "Verify the requested branch exists",
        ],
        ErrorKind.INVALID_INPUT: [
            "Check the tool input against its schema",
        ],
        ErrorKind.INTERNAL: [
            "Check the server logs for more details",
        ],
    }

    @staticmethod
    def format_for_agent(error: Exception, include_traceback: bool = False) -> str:
        """
        Format an error as plain text for a tool response.

        Args:
            error: The exception to format
            include_traceback: Whether to append the traceback

        Returns:
            Formatted message
        """
        kind, explanation = categorize_error(error)

        lines = [f"Error ({kind.value}): {explanation}", "", str(error)]

        hints = ErrorFormatter.HINTS.get(kind, [])
        if hints:
            lines.append("")
            lines.append("Hints:")
            for hint in hints:
                lines.append(f"  - {hint}")

        if include_traceback:
            lines.append("")
            lines.append("".join(traceback.format_exception(type(error), error, error.__traceback__)))

        return "\n".join(lines)
