"""
Search backends for file discovery and content search.

Each concern has a preferred backend (ripgrep) and a generic fallback
(find / grep). Engines try them in order through `run_with_fallback`; a
backend signals that it cannot answer by raising BackendError.
"""

import base64
import json
import logging
import os
import re
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from ..config import DEFAULT_SEARCH_TIMEOUT
from .ignore import IgnoreRules
from .result_types import ContentMatch

logger = logging.getLogger(__name__)

R = TypeVar("R")

_BRACE_GROUP = re.compile(r"\{([^{}]*)\}")


class BackendError(Exception):
    """A backend could not produce an answer."""
    pass


class BackendUnavailableError(BackendError):
    """The backend binary is missing or timed out."""
    pass


class BackendFailedError(BackendError):
    """The backend ran but exited with an unexpected status."""
    pass


@dataclass
class CommandResult:
    """Completed external command"""
    returncode: int
    stdout: str
    stderr: str


class CommandRunner:
    """
    Runs external commands with a timeout.

    Missing binaries and timeouts are reported as BackendUnavailableError
    so callers can move on to the next backend.
    """

    def __init__(self, timeout: int = DEFAULT_SEARCH_TIMEOUT):
        self.timeout = timeout

    def run(self, cmd: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        try:
            completed = subprocess.run(
                list(cmd),
                cwd=str(cwd) if cwd else None,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout
            )
        except FileNotFoundError:
            raise BackendUnavailableError(f"{cmd[0]} is not installed or not in PATH")
        except subprocess.TimeoutExpired:
            raise BackendUnavailableError(f"{cmd[0]} timed out after {self.timeout} seconds")
        except (OSError, ValueError) as e:
            # e.g. an embedded NUL byte or an unreadable cwd
            raise BackendUnavailableError(f"{cmd[0]} could not be started: {e}")

        return CommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or ""
        )


def mtime_or_zero(path: str) -> float:
    """Modification time of a path, 0 if it cannot be stat'ed."""
    try:
        return os.stat(path).st_mtime
    except (OSError, ValueError):
        return 0.0


def expand_braces(pattern: str) -> List[str]:
    """Expand `{a,b}` groups: "*.{ts,tsx}" -> ["*.ts", "*.tsx"]."""
    match = _BRACE_GROUP.search(pattern)
    if not match:
        return [pattern]

    head, tail = pattern[:match.start()], pattern[match.end():]
    expanded = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


def glob_to_find_names(pattern: str) -> List[str]:
    """
    Best-effort translation of a glob into `find -name` patterns.

    Only the last path segment survives; directory parts and `**` are
    dropped, so "src/**/*.ts" matches every *.ts file in the tree.
    """
    last_segment = pattern.rstrip("/").split("/")[-1].replace("**", "*")
    return expand_braces(last_segment or "*")


def run_with_fallback(
    backends: Sequence[R],
    call: Callable[[R], List],
    operation: str
) -> Tuple[List, R, bool]:
    """
    Try each backend in order and return the first answer.

    Returns:
        (items, backend that answered, whether a fallback was used)

    Raises:
        BackendError: If every backend failed
    """
    last_error: Optional[BackendError] = None

    for index, backend in enumerate(backends):
        try:
            return call(backend), backend, index > 0
        except BackendError as e:
            last_error = e
            logger.warning(
                f"{operation}: backend {getattr(backend, 'name', backend)} failed ({e}), trying fallback",
                extra={"backend": getattr(backend, "name", None)}
            )

    raise BackendFailedError(f"{operation}: all backends failed. Last error: {last_error}")


class FileListBackend(ABC):
    """Lists files under a directory matching a glob"""

    name: str = "file-list"

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()

    @abstractmethod
    def list_files(self, pattern: str, directory: Path) -> List[str]:
        """Return absolute paths of matching files."""
        pass


class RipgrepFileBackend(FileListBackend):
    """`rg --files --glob` (honours .gitignore, skips hidden files)"""

    name = "rg"

    def list_files(self, pattern: str, directory: Path) -> List[str]:
        result = self.runner.run(["rg", "--files", "--glob", pattern], cwd=directory)

        # Exit status 1 means no files matched
        if result.returncode == 1 and not result.stdout.strip():
            return []
        if result.returncode != 0:
            raise BackendFailedError(f"rg exited with {result.returncode}: {result.stderr.strip()}")

        return [
            str(directory / line)
            for line in result.stdout.splitlines()
            if line.strip()
        ]


class FindFileBackend(FileListBackend):
    """`find -type f -name ...` with a degraded glob translation"""

    name = "find"

    def list_files(self, pattern: str, directory: Path) -> List[str]:
        name_args: List[str] = []
        for name in glob_to_find_names(pattern):
            if name_args:
                name_args.append("-o")
            name_args.extend(["-name", name])

        result = self.runner.run(["find", str(directory), "-type", "f", "("] + name_args + [")"])

        # find exits 1 on unreadable subdirectories but still prints the rest
        if result.returncode != 0 and not result.stdout.strip():
            raise BackendFailedError(f"find exited with {result.returncode}: {result.stderr.strip()}")

        return [line for line in result.stdout.splitlines() if line.strip()]


class ContentSearchBackend(ABC):
    """Regex search over file contents"""

    name: str = "content-search"

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()

    @abstractmethod
    def search(self, pattern: str, directory: Path, include: Optional[str] = None) -> List[ContentMatch]:
        """Return matches in backend-native order."""
        pass


def _rg_text(field: dict) -> str:
    """ripgrep encodes non-UTF-8 data as {"bytes": base64} instead of {"text": ...}"""
    if "text" in field:
        return field["text"]
    if "bytes" in field:
        return base64.b64decode(field["bytes"]).decode("utf-8", errors="replace")
    return ""


class RipgrepContentBackend(ContentSearchBackend):
    """`rg --json` with the ignore rules converted to exclusion globs"""

    name = "rg"

    def __init__(self, ignore_rules: Optional[IgnoreRules] = None, runner: Optional[CommandRunner] = None):
        super().__init__(runner)
        self.ignore_rules = ignore_rules or IgnoreRules.default()

    def build_command(self, pattern: str, directory: Path, include: Optional[str] = None) -> List[str]:
        cmd = ["rg", "--json", "--regexp", pattern]

        if include:
            cmd.extend(["--glob", include])

        for exclusion in self.ignore_rules.exclusion_globs():
            cmd.extend(["--glob", exclusion])

        cmd.append(str(directory))
        return cmd

    def search(self, pattern: str, directory: Path, include: Optional[str] = None) -> List[ContentMatch]:
        result = self.runner.run(self.build_command(pattern, directory, include))

        # Exit status 1 means no matches, which is a valid answer
        if result.returncode == 1:
            return []
        if result.returncode != 0:
            raise BackendFailedError(f"rg exited with {result.returncode}: {result.stderr.strip()}")

        return self.parse_output(result.stdout)

    @staticmethod
    def parse_output(output: str) -> List[ContentMatch]:
        """Parse ripgrep JSON lines, keeping only match messages"""
        matches = []

        for line in output.splitlines():
            if not line:
                continue

            try:
                data = json.loads(line)
            except json.JSONDecodeError:
                continue

            if data.get("type") != "match":
                continue

            match_data = data.get("data", {})
            matches.append(ContentMatch(
                file=_rg_text(match_data.get("path", {})),
                line=match_data.get("line_number") or 0,
                content=_rg_text(match_data.get("lines", {})).rstrip("\r\n")
            ))

        return matches


class GrepContentBackend(ContentSearchBackend):
    """`grep -rnE`; ignore rules are not applied here"""

    name = "grep"

    def build_command(self, pattern: str, directory: Path, include: Optional[str] = None) -> List[str]:
        cmd = ["grep", "-rnIE"]
        # grep does not expand braces itself
        if include:
            for name in expand_braces(include):
                cmd.extend(["--include", name])
        cmd.extend(["-e", pattern, str(directory)])
        return cmd

    def search(self, pattern: str, directory: Path, include: Optional[str] = None) -> List[ContentMatch]:
        result = self.runner.run(self.build_command(pattern, directory, include))

        if result.returncode == 1:
            return []
        # Status 2 with output means some files were unreadable
        if result.returncode != 0 and not result.stdout.strip():
            raise BackendFailedError(f"grep exited with {result.returncode}: {result.stderr.strip()}")

        return self.parse_output(result.stdout)

    @staticmethod
    def parse_output(output: str) -> List[ContentMatch]:
        """Parse `file:line:content` lines"""
        matches = []

        for line in output.splitlines():
            parts = line.split(":", 2)
            if len(parts) < 3:
                continue
            file_path, line_num, content = parts
            try:
                number = int(line_num)
            except ValueError:
                continue
            matches.append(ContentMatch(file=file_path, line=number, content=content))

        return matches
