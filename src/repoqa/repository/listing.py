"""
Tree-style directory listing.
"""

import fnmatch
import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from .ignore import IgnoreRules
from .result_types import DirectoryListing
from .tree import build_tree, render_tree

logger = logging.getLogger(__name__)

FILE_LIMIT = 100


def _matches_any(rel_path: str, name: str, patterns: Sequence[str]) -> bool:
    for pattern in patterns:
        bare = pattern.rstrip("/")
        if not bare:
            continue
        if fnmatch.fnmatch(name, bare) or fnmatch.fnmatch(rel_path, bare):
            return True
    return False


class DirectoryLister:
    """
    Lists up to `limit` files under a directory as an indented tree.

    Errors are reported inside the tree text, never raised.
    """

    def __init__(
        self,
        ignore_rules: Optional[IgnoreRules] = None,
        limit: int = FILE_LIMIT,
        working_dir: Union[str, Path, None] = None
    ):
        self.ignore_rules = ignore_rules or IgnoreRules.default()
        self.limit = limit
        self.working_dir = Path(working_dir) if working_dir else None

    def list(
        self,
        directory: Union[str, Path, None] = None,
        extra_ignore: Sequence[str] = ()
    ) -> DirectoryListing:
        """
        Render the directory tree.

        Args:
            directory: Directory to list (default: working directory)
            extra_ignore: Additional glob patterns to skip

        Returns:
            DirectoryListing
        """
        try:
            base = self.working_dir or Path(os.getcwd())
            search_dir = (base / (directory or ".")).resolve()
            files, truncated = self._collect(search_dir, list(extra_ignore))
        except (OSError, ValueError) as e:
            logger.warning(f"Listing {directory or '.'} failed: {e}")
            return DirectoryListing(tree=f"Error listing directory: {e}", file_count=0, truncated=False)

        tree = f"{search_dir}/\n" + render_tree(build_tree(files), depth=1)
        return DirectoryListing(tree=tree, file_count=len(files), truncated=truncated)

    def _collect(self, root: Path, extra_ignore: List[str]) -> Tuple[List[str], bool]:
        """Walk in sorted order; stop once one file past the limit is seen."""
        if not root.exists():
            raise FileNotFoundError(f"No such directory: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")
        # Surface an unreadable root instead of an empty tree
        with os.scandir(root):
            pass

        files: List[str] = []

        def on_walk_error(error: OSError) -> None:
            logger.debug(f"Skipping unreadable directory: {error}")

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_walk_error):
            rel_dir = os.path.relpath(dirpath, root)

            def rel(name: str) -> str:
                return name if rel_dir == "." else os.path.join(rel_dir, name)

            dirnames[:] = sorted(
                d for d in dirnames
                if not self.ignore_rules.is_ignored_name(d)
                and not _matches_any(rel(d), d, extra_ignore)
            )

            for name in sorted(filenames):
                if self.ignore_rules.is_ignored_name(name) or _matches_any(rel(name), name, extra_ignore):
                    continue
                if len(files) >= self.limit:
                    return files, True
                files.append(rel(name))

        return files, False
