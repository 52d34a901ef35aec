"""
Pattern-based file discovery.

Finds files matching glob patterns like "**/*.ts" or "src/**/*.tsx",
most recently modified first.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..config import DEFAULT_SEARCH_TIMEOUT
from .backends import (
    BackendError,
    CommandRunner,
    FileListBackend,
    FindFileBackend,
    RipgrepFileBackend,
    mtime_or_zero,
    run_with_fallback
)
from .ignore import IgnoreRules
from .result_types import SearchResult

logger = logging.getLogger(__name__)

RESULT_LIMIT = 100


def sort_by_mtime(paths: List[str]) -> List[str]:
    """Newest first; unreadable paths sort last."""
    return sorted(paths, key=mtime_or_zero, reverse=True)


class FileSearchEngine:
    """
    Glob file search with a find fallback.

    Failures never propagate: an empty result with outcome FAILED is
    returned instead.
    """

    def __init__(
        self,
        ignore_rules: Optional[IgnoreRules] = None,
        backends: Optional[Sequence[FileListBackend]] = None,
        limit: int = RESULT_LIMIT,
        timeout: int = DEFAULT_SEARCH_TIMEOUT
    ):
        """
        Args:
            ignore_rules: Fragments to drop from results
            backends: Backends in preference order (default: rg, then find)
            limit: Maximum number of paths returned
            timeout: Per-backend timeout in seconds
        """
        self.ignore_rules = ignore_rules or IgnoreRules.default()
        if backends is None:
            runner = CommandRunner(timeout=timeout)
            backends = [RipgrepFileBackend(runner), FindFileBackend(runner)]
        self.backends = list(backends)
        self.limit = limit

    def find(self, pattern: str, directory: Union[str, Path, None] = None) -> SearchResult[str]:
        """
        Find files matching a glob pattern.

        Args:
            pattern: Glob pattern
            directory: Directory to search (default: current working directory)

        Returns:
            SearchResult of absolute paths
        """
        try:
            search_dir = Path(directory or os.getcwd()).resolve()
        except (OSError, ValueError) as e:
            return SearchResult.soft_failure(f"Invalid directory {directory!r}: {e}")

        if not search_dir.is_dir():
            return SearchResult.soft_failure(f"Directory not found: {search_dir}")

        try:
            files, backend, degraded = run_with_fallback(
                self.backends,
                lambda b: b.list_files(pattern, search_dir),
                operation="glob"
            )
        except BackendError as e:
            logger.warning(f"glob '{pattern}' in {search_dir} failed: {e}")
            return SearchResult.soft_failure(str(e))

        files = self.ignore_rules.filter(files, search_dir)
        files = sort_by_mtime(files)

        result = SearchResult.capped(files, self.limit, backend=backend.name, degraded=degraded)
        logger.debug(
            f"glob '{pattern}' in {search_dir}: {len(files)} candidates via {backend.name}, "
            f"returning {result.count}"
        )
        return result
