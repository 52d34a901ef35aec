"""
Documentation tool handlers.

These tools find, read and search the markdown files in a repository's
docs folder.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseToolHandler, ToolCategory, ToolContext, ToolResponse
from ..repository import DocumentationIndex
from ..repository.docs import DEFAULT_MAX_RESULTS

REPO_PATH_DESCRIPTION = "Path to the cloned repository"


class ListDocsInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    repo_path: str = Field(..., min_length=1, description=REPO_PATH_DESCRIPTION)


class ListDocsOutput(BaseModel):
    docs_path: Optional[str] = Field(description="Path to the docs folder, or null if not found")
    tree: str = Field(description="Tree structure of documentation files")
    file_count: int = Field(description="Total number of documentation files")
    files: List[str] = Field(description="All doc file paths (relative to the docs folder)")


class ReadDocInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    repo_path: str = Field(..., min_length=1, description=REPO_PATH_DESCRIPTION)
    doc_path: str = Field(
        ..., min_length=1,
        description="Relative path to the doc file (e.g., 'getting-started/installation.mdx')"
    )


class ReadDocOutput(BaseModel):
    content: str = Field(description="Content of the documentation file")
    full_path: str = Field(description="Full path to the file")
    exists: bool = Field(description="Whether the file exists")


class SearchDocsInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    repo_path: str = Field(..., min_length=1, description=REPO_PATH_DESCRIPTION)
    query: str = Field(..., min_length=1, description="Search query - keyword or phrase to search for")
    max_results: int = Field(
        DEFAULT_MAX_RESULTS, ge=1, description="Maximum number of results to return (default: 10)"
    )


class DocMatch(BaseModel):
    line: int = Field(description="Line number")
    content: str = Field(description="Line content with match")


class DocHit(BaseModel):
    file: str = Field(description="Relative path to the file")
    matches: List[DocMatch]
    score: int = Field(description="Relevance score (number of matching lines)")


class SearchDocsOutput(BaseModel):
    results: List[DocHit]
    total_matches: int = Field(description="Total number of matching lines across all files")


class ListDocsHandler(BaseToolHandler):
    """Tool to list documentation files"""

    input_model = ListDocsInput
    output_model = ListDocsOutput

    @property
    def name(self) -> str:
        return "list_docs"

    @property
    def category(self) -> ToolCategory:
        return ToolCategory.DOCS

    @property
    def description(self) -> str:
        return (
            "Lists all documentation files (markdown) in the repository's docs folder. "
            "Use this to discover what documentation is available before reading specific files."
        )

    async def execute(self, params: ListDocsInput, context: ToolContext) -> ToolResponse:
        """Execute: List docs"""
        index = DocumentationIndex()
        listing = await self._run_blocking(index.list_docs, context.resolve_dir(params.repo_path))
        return self._success_response(ListDocsOutput(**listing.to_dict()))


class ReadDocHandler(BaseToolHandler):
    """Tool to read one documentation file"""

    input_model = ReadDocInput
    output_model = ReadDocOutput

    @property
    def name(self) -> str:
        return "read_doc"

    @property
    def category(self) -> ToolCategory:
        return ToolCategory.DOCS

    @property
    def description(self) -> str:
        return (
            "Reads a specific documentation file from the repository. "
            "Provide the path relative to the docs folder. "
            "Suggests similar files when the path does not exist."
        )

    async def execute(self, params: ReadDocInput, context: ToolContext) -> ToolResponse:
        """Execute: Read doc"""
        index = DocumentationIndex()
        doc = await self._run_blocking(index.read_doc, context.resolve_dir(params.repo_path), params.doc_path)
        return self._success_response(ReadDocOutput(**doc.to_dict()))


class SearchDocsHandler(BaseToolHandler):
    """Tool to keyword-search documentation"""

    input_model = SearchDocsInput
    output_model = SearchDocsOutput

    @property
    def name(self) -> str:
        return "search_docs"

    @property
    def category(self) -> ToolCategory:
        return ToolCategory.DOCS

    @property
    def description(self) -> str:
        return (
            "Searches documentation files for a keyword or phrase. "
            "Returns matching files ranked by number of matching lines, with snippets."
        )

    async def execute(self, params: SearchDocsInput, context: ToolContext) -> ToolResponse:
        """Execute: Search docs"""
        index = DocumentationIndex()
        found = await self._run_blocking(
            index.search_docs, context.resolve_dir(params.repo_path), params.query, params.max_results
        )
        return self._success_response(
            SearchDocsOutput(**found.to_dict()),
            metadata={"query": params.query}
        )
