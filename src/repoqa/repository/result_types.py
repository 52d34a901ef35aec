"""
Result types shared by the navigation operations.

Soft failures are represented as values here instead of exceptions: a
SearchResult always comes back, and its `outcome` says whether it is a
normal result, a legitimately empty one, a degraded (fallback) one, or a
swallowed backend failure.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class Outcome(Enum):
    """How a search result was produced"""
    OK = "ok"
    EMPTY = "empty"
    DEGRADED = "degraded"  # fallback backend answered
    FAILED = "failed"  # soft failure, items are empty


@dataclass
class SearchResult(Generic[T]):
    """Capped, ordered search result"""
    items: List[T] = field(default_factory=list)
    truncated: bool = False
    outcome: Outcome = Outcome.OK
    backend: Optional[str] = None
    error: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def failed(self) -> bool:
        return self.outcome == Outcome.FAILED

    @classmethod
    def soft_failure(cls, error: str, backend: Optional[str] = None) -> "SearchResult[T]":
        return cls(items=[], truncated=False, outcome=Outcome.FAILED, backend=backend, error=error)

    @classmethod
    def capped(
        cls,
        candidates: List[T],
        limit: int,
        backend: Optional[str] = None,
        degraded: bool = False
    ) -> "SearchResult[T]":
        """Keep the first `limit` candidates and flag truncation."""
        items = candidates[:limit]
        if not items:
            outcome = Outcome.EMPTY
        elif degraded:
            outcome = Outcome.DEGRADED
        else:
            outcome = Outcome.OK
        return cls(
            items=items,
            truncated=len(candidates) > limit,
            outcome=outcome,
            backend=backend
        )


@dataclass
class ContentMatch:
    """One matching line from a content search"""
    file: str
    line: int
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"file": self.file, "line": self.line, "content": self.content}


@dataclass
class FileWindow:
    """A window of lines read from a file"""
    content: str
    total_lines: int
    has_more: bool
    path: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "total_lines": self.total_lines,
            "has_more": self.has_more,
        }


@dataclass
class DirectoryListing:
    """Rendered directory tree"""
    tree: str
    file_count: int
    truncated: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"tree": self.tree, "file_count": self.file_count, "truncated": self.truncated}
