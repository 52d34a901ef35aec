"""
File discovery and content search tool handlers.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseToolHandler, ToolCategory, ToolContext, ToolResponse
from ..repository import ContentSearchEngine, FileSearchEngine


class GlobInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pattern: str = Field(
        ..., min_length=1,
        description="The glob pattern to match files against (e.g., '**/*.ts', 'src/**/*.tsx')"
    )
    directory: Optional[str] = Field(
        None, description="The directory to search in. Defaults to the current working directory."
    )


class GlobOutput(BaseModel):
    files: List[str] = Field(description="Matching file paths, most recently modified first")
    count: int = Field(description="Number of files returned")
    truncated: bool = Field(description="Whether more files matched than were returned")


class GrepInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pattern: str = Field(..., min_length=1, description="The regex pattern to search for in file contents")
    directory: Optional[str] = Field(
        None, description="The directory to search in. Defaults to the current working directory."
    )
    include: Optional[str] = Field(
        None, description='File pattern to include in the search (e.g., "*.js", "*.{ts,tsx}")'
    )


class GrepMatch(BaseModel):
    file: str
    line: int
    content: str


class GrepOutput(BaseModel):
    matches: List[GrepMatch]
    count: int
    truncated: bool


class GlobHandler(BaseToolHandler):
    """Tool to find files by name pattern"""

    input_model = GlobInput
    output_model = GlobOutput

    @property
    def name(self) -> str:
        return "glob"

    @property
    def category(self) -> ToolCategory:
        return ToolCategory.CODE_ANALYSIS

    @property
    def description(self) -> str:
        return (
            "Fast file pattern matching tool for finding files by name patterns. "
            'Supports glob patterns like "**/*.js", "src/**/*.ts", "*.{ts,tsx}". '
            "Returns matching file paths sorted by modification time (newest first), at most 100."
        )

    async def execute(self, params: GlobInput, context: ToolContext) -> ToolResponse:
        """Execute: Find files"""
        engine = FileSearchEngine(context.ignore_rules, timeout=context.search_timeout)
        result = await self._run_blocking(engine.find, params.pattern, context.resolve_dir(params.directory))

        return self._success_response(
            GlobOutput(files=result.items, count=result.count, truncated=result.truncated),
            metadata={
                "pattern": params.pattern,
                "outcome": result.outcome.value,
                "backend": result.backend,
                "soft_error": result.error,
            }
        )


class GrepHandler(BaseToolHandler):
    """Tool for regex search within file contents"""

    input_model = GrepInput
    output_model = GrepOutput

    @property
    def name(self) -> str:
        return "grep"

    @property
    def category(self) -> ToolCategory:
        return ToolCategory.CODE_ANALYSIS

    @property
    def description(self) -> str:
        return (
            "Fast content search tool that searches file contents using regular expressions. "
            'Supports full regex syntax (e.g., "log.*Error", "function\\s+\\w+"). '
            'Filter files by pattern with the include parameter (e.g., "*.js", "*.{ts,tsx}"). '
            "Returns file paths and line numbers with matches sorted by modification time, at most 100."
        )

    async def execute(self, params: GrepInput, context: ToolContext) -> ToolResponse:
        """Execute: Grep pattern"""
        engine = ContentSearchEngine(context.ignore_rules, timeout=context.search_timeout)
        result = await self._run_blocking(
            engine.search, params.pattern, context.resolve_dir(params.directory), params.include
        )

        return self._success_response(
            GrepOutput(
                matches=[GrepMatch(**m.to_dict()) for m in result.items],
                count=result.count,
                truncated=result.truncated
            ),
            metadata={
                "pattern": params.pattern,
                "outcome": result.outcome.value,
                "backend": result.backend,
                "soft_error": result.error,
            }
        )
