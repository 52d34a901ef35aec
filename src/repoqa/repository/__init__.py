"""
Repository cache and navigation module.

Provides the local clone cache plus bounded operations for finding,
searching, reading and listing files and documentation.
"""

from .ignore import IgnoreRules, DEFAULT_IGNORE_PATTERNS
from .identity import RepositoryIdentity
from .local import RepoCacheManager, GitBackend
from .result_types import (
    SearchResult,
    Outcome,
    ContentMatch,
    FileWindow,
    DirectoryListing
)
from .backends import (
    BackendError,
    BackendUnavailableError,
    BackendFailedError,
    CommandRunner,
    FileListBackend,
    RipgrepFileBackend,
    FindFileBackend,
    ContentSearchBackend,
    RipgrepContentBackend,
    GrepContentBackend
)
from .discovery import FileSearchEngine
from .search import ContentSearchEngine
from .reader import FileReader
from .listing import DirectoryLister
from .docs import (
    DocumentationIndex,
    DocEntry,
    DocsListing,
    DocContent,
    DocSearchHit,
    DocSearchResult
)

__all__ = [
    # Ignore rules
    "IgnoreRules",
    "DEFAULT_IGNORE_PATTERNS",
    # Local clone cache
    "RepositoryIdentity",
    "RepoCacheManager",
    "GitBackend",
    # Results
    "SearchResult",
    "Outcome",
    "ContentMatch",
    "FileWindow",
    "DirectoryListing",
    # Backends
    "BackendError",
    "BackendUnavailableError",
    "BackendFailedError",
    "CommandRunner",
    "FileListBackend",
    "RipgrepFileBackend",
    "FindFileBackend",
    "ContentSearchBackend",
    "RipgrepContentBackend",
    "GrepContentBackend",
    # Navigation
    "FileSearchEngine",
    "ContentSearchEngine",
    "FileReader",
    "DirectoryLister",
    # Documentation
    "DocumentationIndex",
    "DocEntry",
    "DocsListing",
    "DocContent",
    "DocSearchHit",
    "DocSearchResult",
]
