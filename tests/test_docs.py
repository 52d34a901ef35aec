"""Tests for documentation listing, reading and search."""

from conftest import write
from repoqa.repository import DocumentationIndex


def test_list_docs(docs_repo):
    listing = DocumentationIndex().list_docs(docs_repo)

    assert listing.docs_path == str(docs_repo / "docs")
    assert listing.file_count == 3
    assert listing.files == ["intro.md", "concepts/memory.md", "guides/install.mdx"]
    assert listing.tree == (
        f"{docs_repo / 'docs'}/\n"
        "concepts/\n"
        "  memory.md\n"
        "guides/\n"
        "  install.mdx\n"
        "intro.md\n"
    )


def test_alternate_docs_folder(tmp_path):
    write(tmp_path / "documentation" / "index.md", "# Index\n")

    listing = DocumentationIndex().list_docs(tmp_path)

    assert listing.docs_path == str(tmp_path / "documentation")
    assert listing.files == ["index.md"]


def test_no_docs_folder(tmp_path):
    index = DocumentationIndex()

    listing = index.list_docs(tmp_path)
    assert listing.docs_path is None
    assert listing.tree == "No docs folder found in repository"

    doc = index.read_doc(tmp_path, "intro.md")
    assert doc.exists is False
    assert doc.content == "Error: No docs folder found in repository"

    assert index.search_docs(tmp_path, "agent").results == []


def test_read_doc(docs_repo):
    doc = DocumentationIndex().read_doc(docs_repo, "guides/install.mdx")

    assert doc.exists is True
    assert doc.content.startswith("# Install")
    assert doc.full_path == str(docs_repo / "docs" / "guides" / "install.mdx")


def test_read_missing_doc_suggests_similar(docs_repo):
    doc = DocumentationIndex().read_doc(docs_repo, "memory-management.md")

    assert doc.exists is False
    assert doc.content.startswith("File not found: memory-management.md")
    assert "  - concepts/memory.md" in doc.content


def test_read_doc_outside_docs_folder(docs_repo):
    write(docs_repo / "secret.md", "no")

    doc = DocumentationIndex().read_doc(docs_repo, "../secret.md")

    assert doc.exists is False
    assert "outside the docs folder" in doc.content


def test_search_ranks_by_matching_lines(docs_repo):
    found = DocumentationIndex().search_docs(docs_repo, "agent memory")

    assert [hit.file for hit in found.results] == ["concepts/memory.md", "intro.md"]
    assert [hit.score for hit in found.results] == [3, 1]
    assert found.total_matches == 4
    assert found.results[0].matches[0].line == 1
    assert found.results[0].matches[0].content == "# Agent memory"


def test_search_max_results_keeps_total(docs_repo):
    found = DocumentationIndex().search_docs(docs_repo, "agent memory", max_results=1)

    assert len(found.results) == 1
    assert found.total_matches == 4


def test_search_blank_query(docs_repo):
    found = DocumentationIndex().search_docs(docs_repo, "   ")

    assert found.results == []
    assert found.total_matches == 0


def test_read_doc_with_nul_byte_is_soft(docs_repo):
    doc = DocumentationIndex().read_doc(docs_repo, "intro\x00.md")

    assert doc.exists is False
    assert doc.content
