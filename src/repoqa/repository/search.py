"""
Regex content search using ripgrep, with a grep fallback.

Provides fast content search returning file, line number and line text
for each match.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from ..config import DEFAULT_SEARCH_TIMEOUT
from .backends import (
    BackendError,
    CommandRunner,
    ContentSearchBackend,
    GrepContentBackend,
    RipgrepContentBackend,
    mtime_or_zero,
    run_with_fallback
)
from .ignore import IgnoreRules
from .result_types import ContentMatch, SearchResult

logger = logging.getLogger(__name__)

RESULT_LIMIT = 100
MAX_LINE_LENGTH = 2000


class ContentSearchEngine:
    """
    Searches file contents with regular expressions.

    On the ripgrep path results are filtered by the ignore rules and
    ordered by the modification time of their file. The grep fallback keeps
    its own order and does not apply the ignore rules.
    """

    def __init__(
        self,
        ignore_rules: Optional[IgnoreRules] = None,
        backends: Optional[Sequence[ContentSearchBackend]] = None,
        limit: int = RESULT_LIMIT,
        timeout: int = DEFAULT_SEARCH_TIMEOUT
    ):
        """
        Args:
            ignore_rules: Fragments excluded on the primary path
            backends: Backends in preference order (default: rg, then grep)
            limit: Maximum number of matches returned
            timeout: Per-backend timeout in seconds
        """
        self.ignore_rules = ignore_rules or IgnoreRules.default()
        if backends is None:
            runner = CommandRunner(timeout=timeout)
            backends = [
                RipgrepContentBackend(self.ignore_rules, runner),
                GrepContentBackend(runner)
            ]
        self.backends = list(backends)
        self.limit = limit

    def search(
        self,
        pattern: str,
        directory: Union[str, Path, None] = None,
        include: Optional[str] = None
    ) -> SearchResult[ContentMatch]:
        """
        Search file contents for a regex.

        Args:
            pattern: Regular expression
            directory: Directory to search (default: current working directory)
            include: Optional file-name glob, e.g. "*.py" or "*.{ts,tsx}"

        Returns:
            SearchResult of ContentMatch
        """
        try:
            search_dir = Path(directory or os.getcwd()).resolve()
        except (OSError, ValueError) as e:
            return SearchResult.soft_failure(f"Invalid directory {directory!r}: {e}")

        if not search_dir.is_dir():
            return SearchResult.soft_failure(f"Directory not found: {search_dir}")

        try:
            matches, backend, degraded = run_with_fallback(
                self.backends,
                lambda b: b.search(pattern, search_dir, include),
                operation="grep"
            )
        except BackendError as e:
            logger.warning(f"grep '{pattern}' in {search_dir} failed: {e}")
            return SearchResult.soft_failure(str(e))

        for match in matches:
            match.content = match.content[:MAX_LINE_LENGTH]

        if not degraded:
            matches = [m for m in matches if not self.ignore_rules.is_ignored(m.file, search_dir)]
            matches = self._sort_by_file_mtime(matches)

        result = SearchResult.capped(matches, self.limit, backend=backend.name, degraded=degraded)
        logger.debug(
            f"grep '{pattern}' in {search_dir}: {len(matches)} matches via {backend.name}, "
            f"returning {result.count}"
        )
        return result

    @staticmethod
    def _sort_by_file_mtime(matches: List[ContentMatch]) -> List[ContentMatch]:
        mtimes: Dict[str, float] = {}
        for match in matches:
            if match.file not in mtimes:
                mtimes[match.file] = mtime_or_zero(match.file)
        # Stable: lines of one file keep their order
        return sorted(matches, key=lambda m: mtimes[m.file], reverse=True)
