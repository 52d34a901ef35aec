"""
Windowed file reading with line numbers.
"""

import logging
import os
from pathlib import Path
from typing import List, Union

from ..errors import FileTooLargeError, NotAFileError, PathNotFoundError
from .result_types import FileWindow

logger = logging.getLogger(__name__)

DEFAULT_READ_LIMIT = 2000
MAX_LINE_LENGTH = 2000
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
MAX_SUGGESTIONS = 3
LINE_NUMBER_WIDTH = 5


class FileReader:
    """
    Reads a window of lines from one file.

    Output lines look like "00042| content". The block is wrapped in
    <file>...</file> and ends with either the next offset to read from or an
    end-of-file note.
    """

    def __init__(
        self,
        working_dir: Union[str, Path, None] = None,
        max_file_size: int = MAX_FILE_SIZE
    ):
        """
        Args:
            working_dir: Base for relative paths (default: process cwd at read time)
            max_file_size: Size ceiling in bytes
        """
        self.working_dir = Path(working_dir) if working_dir else None
        self.max_file_size = max_file_size

    def resolve(self, file_path: Union[str, Path]) -> Path:
        path = Path(file_path).expanduser()
        if not path.is_absolute():
            path = (self.working_dir or Path(os.getcwd())) / path
        return path

    def read(
        self,
        file_path: Union[str, Path],
        offset: int = 0,
        limit: int = DEFAULT_READ_LIMIT
    ) -> FileWindow:
        """
        Read lines [offset, offset + limit) of a file.

        Args:
            file_path: Absolute path, or relative to the working directory
            offset: 0-based first line
            limit: Maximum number of lines

        Returns:
            FileWindow

        Raises:
            PathNotFoundError: File does not exist (with suggestions)
            NotAFileError: Path is a directory
            FileTooLargeError: File exceeds the size ceiling
        """
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

        path = self.resolve(file_path)

        if not path.exists():
            raise PathNotFoundError(str(path), self._suggest(path))

        if path.is_dir():
            raise NotAFileError(str(path))

        size = path.stat().st_size
        if size > self.max_file_size:
            raise FileTooLargeError(str(path), size, self.max_file_size)

        text = path.read_bytes().decode("utf-8", errors="replace")
        lines = split_lines(text)
        total_lines = len(lines)

        selected = [
            line[:MAX_LINE_LENGTH] + "..." if len(line) > MAX_LINE_LENGTH else line
            for line in lines[offset:offset + limit]
        ]

        numbered = "\n".join(
            f"{str(offset + index + 1).zfill(LINE_NUMBER_WIDTH)}| {line}"
            for index, line in enumerate(selected)
        )

        last_read_line = offset + len(selected)
        has_more = total_lines > last_read_line

        output = "<file>\n" + numbered
        if has_more:
            output += f"\n\n(File has more lines. Use 'offset' parameter to read beyond line {last_read_line})"
        else:
            output += f"\n\n(End of file - total {total_lines} lines)"
        output += "\n</file>"

        logger.debug(f"Read {len(selected)} lines from {path} (offset={offset}, total={total_lines})")

        return FileWindow(
            content=output,
            total_lines=total_lines,
            has_more=has_more,
            path=str(path)
        )

    @staticmethod
    def _suggest(path: Path) -> List[str]:
        """Siblings whose name contains the requested name, or vice versa."""
        directory = path.parent
        base = path.name.lower()

        if not base or not directory.is_dir():
            return []

        try:
            entries = sorted(os.listdir(directory))
        except OSError:
            return []

        suggestions = []
        for entry in entries:
            lower = entry.lower()
            if base in lower or lower in base:
                suggestions.append(str(directory / entry))
            if len(suggestions) >= MAX_SUGGESTIONS:
                break
        return suggestions


def split_lines(text: str) -> List[str]:
    """
    Split on newlines; a single trailing newline does not start a new line.
    A CR before the newline (CRLF files) is dropped.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
