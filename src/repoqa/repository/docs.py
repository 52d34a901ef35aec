"""
Documentation discovery and keyword search.

Looks for a conventional docs folder at the repository root and works
with the markdown files inside it.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .tree import build_tree, render_tree

logger = logging.getLogger(__name__)

DOCS_DIR_CANDIDATES = ("docs", "documentation", "doc")
MARKDOWN_EXTENSIONS = (".md", ".mdx", ".markdown")
SKIPPED_DIRS = {"node_modules", "vendor"}

MAX_SUGGESTIONS = 5
MAX_MATCHES_PER_FILE = 5
SNIPPET_LENGTH = 200
DEFAULT_MAX_RESULTS = 10


@dataclass
class DocEntry:
    """A markdown file under the docs root"""
    path: str
    relative_path: str


@dataclass
class DocsListing:
    docs_path: Optional[str]
    tree: str
    file_count: int
    files: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "docs_path": self.docs_path,
            "tree": self.tree,
            "file_count": self.file_count,
            "files": self.files,
        }


@dataclass
class DocContent:
    content: str
    full_path: str
    exists: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"content": self.content, "full_path": self.full_path, "exists": self.exists}


@dataclass
class DocLineMatch:
    line: int
    content: str


@dataclass
class DocSearchHit:
    """Matches in one file; score counts every matching line, not just those kept"""
    file: str
    matches: List[DocLineMatch]
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "matches": [{"line": m.line, "content": m.content} for m in self.matches],
            "score": self.score,
        }


@dataclass
class DocSearchResult:
    results: List[DocSearchHit]
    total_matches: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "total_matches": self.total_matches,
        }


class DocumentationIndex:
    """
    Lists, reads and searches markdown documentation of a repository.

    Every operation fails softly: a missing docs folder or file is reported
    in the returned value.
    """

    def find_docs_root(self, repo_path: Union[str, Path]) -> Optional[Path]:
        """First existing directory among docs/, documentation/, doc/."""
        for name in DOCS_DIR_CANDIDATES:
            candidate = Path(repo_path) / name
            if candidate.is_dir():
                return candidate
        return None

    def collect(self, docs_root: Path) -> List[DocEntry]:
        """Markdown files under docs_root, skipping hidden and dependency directories."""
        entries: List[DocEntry] = []

        for dirpath, dirnames, filenames in os.walk(docs_root):
            dirnames[:] = sorted(
                d for d in dirnames
                if not d.startswith(".") and d not in SKIPPED_DIRS
            )
            for name in sorted(filenames):
                if not name.lower().endswith(MARKDOWN_EXTENSIONS):
                    continue
                full_path = os.path.join(dirpath, name)
                entries.append(DocEntry(
                    path=full_path,
                    relative_path=os.path.relpath(full_path, docs_root)
                ))

        return entries

    def list_docs(self, repo_path: Union[str, Path]) -> DocsListing:
        docs_root = self.find_docs_root(repo_path)

        if docs_root is None:
            return DocsListing(
                docs_path=None,
                tree="No docs folder found in repository",
                file_count=0,
                files=[]
            )

        entries = self.collect(docs_root)
        tree = render_tree(build_tree(e.relative_path for e in entries))

        return DocsListing(
            docs_path=str(docs_root),
            tree=f"{docs_root}/\n{tree}",
            file_count=len(entries),
            files=[e.relative_path for e in entries]
        )

    def read_doc(self, repo_path: Union[str, Path], doc_path: str) -> DocContent:
        """
        Read one documentation file.

        Args:
            repo_path: Repository root
            doc_path: Path relative to the docs folder, e.g. "guides/install.md"

        Returns:
            DocContent; `exists` is False with an explanation in `content`
            when the file cannot be read
        """
        docs_root = self.find_docs_root(repo_path)

        if docs_root is None:
            return DocContent(
                content="Error: No docs folder found in repository",
                full_path="",
                exists=False
            )

        full_path = docs_root / doc_path
        try:
            resolved_root = docs_root.resolve()
            resolved = full_path.resolve()
        except (OSError, ValueError) as e:
            return DocContent(content=f"Error: invalid doc path {doc_path!r}: {e}", full_path="", exists=False)

        if resolved != resolved_root and resolved_root not in resolved.parents:
            return DocContent(
                content=f"Error: {doc_path} is outside the docs folder",
                full_path=str(full_path),
                exists=False
            )

        if not full_path.is_file():
            suggestions = self._suggest(docs_root, doc_path)
            message = f"File not found: {doc_path}"
            if suggestions:
                message += "\n\nDid you mean one of these?\n" + "\n".join(f"  - {s}" for s in suggestions)
            return DocContent(content=message, full_path=str(full_path), exists=False)

        try:
            content = full_path.read_bytes().decode("utf-8", errors="replace")
        except OSError as e:
            logger.warning(f"Reading doc {full_path} failed: {e}")
            return DocContent(content=f"Error reading {doc_path}: {e}", full_path=str(full_path), exists=False)
        return DocContent(content=content, full_path=str(full_path), exists=True)

    def _suggest(self, docs_root: Path, doc_path: str) -> List[str]:
        """Doc files whose path contains the request, or whose stem the request contains."""
        search_term = doc_path.lower()
        suggestions = []

        for entry in self.collect(docs_root):
            relative = entry.relative_path.lower()
            stem = Path(relative).stem
            if search_term in relative or (stem and stem in search_term):
                suggestions.append(entry.relative_path)
            if len(suggestions) >= MAX_SUGGESTIONS:
                break

        return suggestions

    def search_docs(
        self,
        repo_path: Union[str, Path],
        query: str,
        max_results: int = DEFAULT_MAX_RESULTS
    ) -> DocSearchResult:
        """
        Keyword search across documentation files.

        A line matches when it contains any whitespace-separated query term
        (case-insensitive). Files are ranked by their number of matching
        lines; `total_matches` sums that count over every matching file,
        including those beyond `max_results`.
        """
        docs_root = self.find_docs_root(repo_path)
        terms = query.lower().split()

        if docs_root is None or not terms:
            return DocSearchResult(results=[], total_matches=0)

        hits: List[DocSearchHit] = []

        for entry in self.collect(docs_root):
            try:
                text = Path(entry.path).read_bytes().decode("utf-8", errors="replace")
            except OSError as e:
                logger.warning(f"Skipping unreadable doc {entry.path}: {e}")
                continue

            matches = [
                DocLineMatch(line=number, content=line[:SNIPPET_LENGTH])
                for number, line in enumerate(text.split("\n"), 1)
                if any(term in line.lower() for term in terms)
            ]

            if matches:
                hits.append(DocSearchHit(
                    file=entry.relative_path,
                    matches=matches[:MAX_MATCHES_PER_FILE],
                    score=len(matches)
                ))

        hits.sort(key=lambda h: h.score, reverse=True)
        total_matches = sum(h.score for h in hits)

        return DocSearchResult(results=hits[:max_results], total_matches=total_matches)
