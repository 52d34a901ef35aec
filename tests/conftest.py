"""Pytest configuration for tests.

Shared fixtures: a small repository tree on disk, fake search backends and
a fake git backend that never touches the network.
"""

import os
import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Make src/ importable without installing the package
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from repoqa.errors import FetchError
from repoqa.repository import (
    BackendUnavailableError,
    ContentMatch,
    ContentSearchBackend,
    FileListBackend,
)


def write(path: Path, content: str = "", mtime: Optional[float] = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def sample_repo(tmp_path: Path) -> Path:
    """
    Layout:
        repo/
          README.md
          src/app.py, src/util.py, src/web/index.ts
          node_modules/lib/index.js   (ignored)
          build/out.py                (ignored)
    """
    root = tmp_path / "repo"
    write(root / "README.md", "# Sample\n", mtime=1_000)
    write(root / "src" / "app.py", "import util\n\ndef main():\n    return util.helper()\n", mtime=3_000)
    write(root / "src" / "util.py", "def helper():\n    return 42\n", mtime=2_000)
    write(root / "src" / "web" / "index.ts", "export const helper = () => 42;\n", mtime=4_000)
    write(root / "node_modules" / "lib" / "index.js", "module.exports = 'helper';\n", mtime=5_000)
    write(root / "build" / "out.py", "def helper(): pass\n", mtime=6_000)
    return root


@pytest.fixture
def docs_repo(tmp_path: Path) -> Path:
    root = tmp_path / "docs-repo"
    write(
        root / "docs" / "concepts" / "memory.md",
        "# Agent memory\n\nThe agent stores memory in a vector store.\n"
        "Unrelated line.\nMemory is pruned nightly.\n"
    )
    write(root / "docs" / "intro.md", "# Intro\n\nAn agent answers questions.\n")
    write(root / "docs" / "guides" / "install.mdx", "# Install\n\npip install repoqa\n")
    write(root / "docs" / "notes.txt", "agent memory agent memory\n")
    write(root / "docs" / ".hidden" / "secret.md", "agent memory\n")
    return root


class FakeFileBackend(FileListBackend):
    """Returns a fixed list of paths, or raises when `error` is set."""

    def __init__(self, name: str, paths: Optional[List[str]] = None, error: Optional[Exception] = None):
        super().__init__()
        self.name = name
        self.paths = paths or []
        self.error = error
        self.calls = 0

    def list_files(self, pattern, directory):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.paths)


class FakeContentBackend(ContentSearchBackend):
    def __init__(self, name: str, matches: Optional[List[ContentMatch]] = None, error: Optional[Exception] = None):
        super().__init__()
        self.name = name
        self.matches = matches or []
        self.error = error
        self.calls = 0

    def search(self, pattern, directory, include=None):
        self.calls += 1
        if self.error:
            raise self.error
        return [ContentMatch(m.file, m.line, m.content) for m in self.matches]


def unavailable(name: str) -> BackendUnavailableError:
    return BackendUnavailableError(f"{name} is not installed or not in PATH")


class FakeGitBackend:
    """
    Records clones and fakes a checkout by creating the .git marker.

    `branches` maps a local path to its checked-out branch.
    """

    def __init__(self, fail_with: Optional[str] = None, default_branch: str = "main"):
        self.fail_with = fail_with
        self.default_branch = default_branch
        self.clones: List[tuple] = []
        self.branches = {}

    def shallow_clone(self, url, destination, branch=None):
        destination = Path(destination)
        self.clones.append((url, str(destination), branch))
        destination.mkdir(parents=True, exist_ok=True)
        (destination / "README.md").write_text("partial")
        if self.fail_with:
            raise FetchError(url, self.fail_with, path=str(destination))
        (destination / ".git").mkdir()
        self.branches[str(destination)] = branch or self.default_branch

    def current_branch(self, path):
        return self.branches.get(str(Path(path)))

    def is_at_tag(self, path, tag):
        return False


@pytest.fixture
def fake_git() -> FakeGitBackend:
    return FakeGitBackend()
