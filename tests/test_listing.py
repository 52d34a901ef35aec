"""Tests for the tree directory listing."""

from conftest import write
from repoqa.repository import DirectoryLister
from repoqa.repository.tree import build_tree, render_tree


def test_tree_format(sample_repo):
    listing = DirectoryLister().list(sample_repo)

    assert listing.file_count == 4
    assert listing.truncated is False
    assert listing.tree == (
        f"{sample_repo}/\n"
        "  src/\n"
        "    web/\n"
        "      index.ts\n"
        "    app.py\n"
        "    util.py\n"
        "  README.md\n"
    )


def test_relative_directory_uses_working_dir(sample_repo):
    listing = DirectoryLister(working_dir=sample_repo).list("src")

    assert listing.tree.startswith(f"{sample_repo / 'src'}/\n")
    assert listing.file_count == 3


def test_extra_ignore_patterns(sample_repo):
    listing = DirectoryLister().list(sample_repo, extra_ignore=["*.md", "web/"])

    assert "README.md" not in listing.tree
    assert "index.ts" not in listing.tree
    assert listing.file_count == 2


def test_caps_at_limit(tmp_path):
    for i in range(150):
        write(tmp_path / "many" / f"f{i:03}.txt")

    listing = DirectoryLister().list(tmp_path / "many")

    assert listing.file_count == 100
    assert listing.truncated is True
    assert "f099.txt" in listing.tree
    assert "f100.txt" not in listing.tree


def test_missing_directory_reported_in_tree(tmp_path):
    listing = DirectoryLister().list(tmp_path / "nope")

    assert listing.tree.startswith("Error listing directory:")
    assert listing.file_count == 0
    assert listing.truncated is False


def test_render_tree_orders_dirs_before_files():
    tree = build_tree(["b.txt", "a/z.txt", "a/b/c.txt", "0.txt"])

    assert render_tree(tree) == "a/\n  b/\n    c.txt\n  z.txt\n0.txt\nb.txt\n"


def test_nul_byte_in_directory_reported_in_tree(tmp_path):
    listing = DirectoryLister(working_dir=tmp_path).list("a\x00b")

    assert listing.tree.startswith("Error listing directory:")
    assert listing.file_count == 0
