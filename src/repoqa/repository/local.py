"""
Local repository cache management.

Maps a repository URL (and optional branch) to a deterministic working copy
under a cache root, reusing an existing copy when it is valid and otherwise
replacing it with a fresh shallow clone.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional, Union

from git import Git, Repo
from git.exc import CommandError, InvalidGitRepositoryError, NoSuchPathError

from ..config import DEFAULT_CLONE_TIMEOUT
from ..errors import FetchError
from .identity import RepositoryIdentity

logger = logging.getLogger(__name__)

GIT_MARKER = ".git"

PathLike = Union[str, Path]


class GitBackend:
    """
    Thin GitPython wrapper for the two git operations the cache needs.
    """

    def __init__(self, clone_timeout: int = DEFAULT_CLONE_TIMEOUT):
        """
        Args:
            clone_timeout: Seconds before a clone is killed
        """
        self.clone_timeout = clone_timeout

    def shallow_clone(self, url: str, destination: PathLike, branch: Optional[str] = None) -> None:
        """
        Clone `url` into `destination` with history depth 1.

        Raises:
            FetchError: If git exits non-zero, times out or is missing
        """
        if url.startswith("-"):
            raise FetchError(url, "Refusing URL that looks like a command-line option")

        clone_kwargs = {
            "depth": 1,
            "branch": branch,
            "single_branch": True,
        }
        # Remove None values
        clone_kwargs = {k: v for k, v in clone_kwargs.items() if v is not None}

        try:
            Git().clone(
                "--",
                url,
                str(destination),
                kill_after_timeout=self.clone_timeout,
                # Public sources only: never block on a credential prompt
                env={"GIT_TERMINAL_PROMPT": "0"},
                **clone_kwargs,
            )
        except CommandError as e:
            diagnostic = e.stderr or str(e)
            raise FetchError(url, diagnostic, path=str(destination)) from e

    def current_branch(self, path: PathLike) -> Optional[str]:
        """Name of the checked-out branch, or None if unknown or detached."""
        try:
            repo = Repo(str(path))
        except (InvalidGitRepositoryError, NoSuchPathError):
            return None

        try:
            if repo.head.is_detached:
                return None
            return repo.active_branch.name
        except (TypeError, ValueError):
            return None
        finally:
            repo.close()

    def is_at_tag(self, path: PathLike, tag: str) -> bool:
        """Whether a detached HEAD points at the commit of `tag`."""
        try:
            repo = Repo(str(path))
        except (InvalidGitRepositoryError, NoSuchPathError):
            return False

        try:
            if not repo.head.is_detached:
                return False
            head_sha = repo.head.commit.hexsha
            return any(t.name == tag and t.commit.hexsha == head_sha for t in repo.tags)
        except (TypeError, ValueError):
            return False
        finally:
            repo.close()


class RepoCacheManager:
    """
    Resolves repository URLs to reusable local working copies.

    Example:
        manager = RepoCacheManager(".repos")
        repo_path = manager.resolve("https://github.com/org/project", branch="main")

    Concurrent resolutions of the same identity are not coordinated; callers
    must keep at most one in flight per identity.
    """

    def __init__(
        self,
        repos_dir: PathLike,
        git_backend: Optional[GitBackend] = None,
        clone_timeout: int = DEFAULT_CLONE_TIMEOUT,
    ):
        """
        Args:
            repos_dir: Cache root holding all working copies
            git_backend: Git operations (default: GitBackend)
            clone_timeout: Clone timeout when the default backend is used
        """
        self.repos_dir = Path(repos_dir)
        self.git = git_backend or GitBackend(clone_timeout=clone_timeout)

    def identity_for(self, url: str, branch: Optional[str] = None) -> RepositoryIdentity:
        return RepositoryIdentity.from_url(url, branch)

    def path_for(self, url: str, branch: Optional[str] = None) -> Path:
        """Local path a resolution of (url, branch) would use."""
        return self.identity_for(url, branch).local_path(self.repos_dir)

    def is_valid(self, path: PathLike, branch: Optional[str] = None) -> bool:
        """
        Check whether a working copy can be reused.

        Valid means the git marker exists and, when a branch is requested,
        that exact branch (or a tag of that name) is checked out.
        """
        path = Path(path)
        if not (path / GIT_MARKER).exists():
            return False

        if not branch:
            return True

        current = self.git.current_branch(path)
        if current is not None:
            return current == branch

        return self.git.is_at_tag(path, branch)

    def resolve(self, url: str, branch: Optional[str] = None) -> str:
        """
        Return a valid local working copy of `url`, fetching only if needed.

        Args:
            url: Repository URL
            branch: Branch (or tag) to check out (default: remote default branch)

        Returns:
            Absolute path of the working copy

        Raises:
            FetchError: If the clone fails; the path must not be used
        """
        identity = self.identity_for(url, branch)
        repo_path = identity.local_path(self.repos_dir).resolve()

        if self.is_valid(repo_path, branch):
            logger.info(f"Reusing cached clone of {identity} at {repo_path}")
            return str(repo_path)

        if repo_path.exists():
            logger.info(f"Replacing stale cache entry at {repo_path}")
            shutil.rmtree(repo_path)

        repo_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Cloning {url} (branch={branch or 'default'}, depth=1) into {repo_path}")
        try:
            self.git.shallow_clone(url, repo_path, branch)
        except FetchError:
            # Cleanup failed clone attempt
            if repo_path.exists():
                shutil.rmtree(repo_path, ignore_errors=True)
            raise

        logger.info(f"Successfully cloned {identity}")
        return str(repo_path)

    def __repr__(self) -> str:
        return f"RepoCacheManager(repos_dir={self.repos_dir})"
