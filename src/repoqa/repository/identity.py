"""
Stable local identities for remote repositories.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

_SEPARATORS = re.compile(r"[/:]")
_UNSAFE_SEGMENTS = {".", ".."}


def _safe_segment(segment: str) -> str:
    return "_" if segment in _UNSAFE_SEGMENTS else segment


def sanitize_branch(branch: str) -> str:
    """Make a branch name usable as part of a single directory name."""
    return _safe_segment(branch.replace("/", "-"))


@dataclass(frozen=True)
class RepositoryIdentity:
    """
    Owner, name and optional branch of a remote repository.

    Handles https://github.com/user/repo.git, git@github.com:user/repo.git,
    file:///srv/git/user/repo and similar forms.
    """
    owner: Optional[str]
    name: str
    branch: Optional[str] = None

    @classmethod
    def from_url(cls, url: str, branch: Optional[str] = None) -> "RepositoryIdentity":
        """
        Derive an identity from a source URL.

        Args:
            url: Repository URL
            branch: Optional branch

        Returns:
            RepositoryIdentity
        """
        clean_url = url.strip().rstrip("/")
        if clean_url.endswith(".git"):
            clean_url = clean_url[:-len(".git")]

        parts = [p for p in _SEPARATORS.split(clean_url) if p]

        if len(parts) >= 2:
            owner, name = _safe_segment(parts[-2]), _safe_segment(parts[-1])
        elif parts:
            owner, name = None, _safe_segment(parts[-1])
        else:
            owner, name = None, "repo"

        return cls(owner=owner, name=name, branch=branch or None)

    @property
    def slug(self) -> str:
        """owner/name (or just name when there is no owner)"""
        return f"{self.owner}/{self.name}" if self.owner else self.name

    def relative_path(self) -> Path:
        """Path of the working copy relative to the cache root."""
        leaf = self.name
        if self.branch:
            leaf = f"{self.name}@{sanitize_branch(self.branch)}"
        if self.owner:
            return Path(self.owner) / leaf
        return Path(leaf)

    def local_path(self, root: Path) -> Path:
        return Path(root) / self.relative_path()

    def __str__(self) -> str:
        return f"{self.slug}@{self.branch}" if self.branch else self.slug
