"""
Path fragments excluded from every traversal.

The same IgnoreRules instance is handed to the file search, content search
and directory listing so their results agree with each other.
"""

import os
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import FrozenSet, Iterable, List, Tuple, Union

DEFAULT_IGNORE_PATTERNS: Tuple[str, ...] = (
    "node_modules/",
    "__pycache__/",
    ".git/",
    "dist/",
    "build/",
    "target/",
    "vendor/",
    "bin/",
    "obj/",
    ".idea/",
    ".vscode/",
    ".zig-cache/",
    "zig-out",
    ".coverage",
    "coverage/",
    "tmp/",
    "temp/",
    ".cache/",
    "cache/",
    "logs/",
    ".venv/",
    "venv/",
    "env/",
)


@dataclass(frozen=True)
class IgnoreRules:
    """
    Immutable set of ignored path fragments.

    A path is ignored when any of its segments, taken relative to the
    search root, equals a fragment name ("node_modules/" matches the
    segment "node_modules" at any depth).
    """
    patterns: Tuple[str, ...] = DEFAULT_IGNORE_PATTERNS
    names: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        names = frozenset(p.strip("/") for p in self.patterns if p.strip("/"))
        object.__setattr__(self, "names", names)

    @classmethod
    def default(cls) -> "IgnoreRules":
        return cls()

    def extend(self, extra: Iterable[str]) -> "IgnoreRules":
        """Return new rules with extra fragments appended."""
        return IgnoreRules(self.patterns + tuple(extra))

    def is_ignored_name(self, name: str) -> bool:
        """Check a single path segment."""
        return name in self.names

    def is_ignored(self, path: Union[str, PurePath], root: Union[str, PurePath, None] = None) -> bool:
        """
        Check whether a path falls under an ignored fragment.

        Args:
            path: Absolute or relative path
            root: Search root; when given, only the part below it is tested

        Returns:
            True if the path should be excluded
        """
        path_str = str(path)
        if root is not None:
            try:
                path_str = os.path.relpath(path_str, str(root))
            except ValueError:
                # Different drive on Windows; test the full path
                pass

        parts = PurePath(path_str).parts
        return any(part in self.names for part in parts)

    def filter(self, paths: Iterable[str], root: Union[str, PurePath, None] = None) -> List[str]:
        """Drop ignored paths, preserving order."""
        return [p for p in paths if not self.is_ignored(p, root)]

    def exclusion_globs(self) -> List[str]:
        """Negated glob per fragment, in the form ripgrep's --glob expects."""
        return [f"!{name}" for name in sorted(self.names)]
