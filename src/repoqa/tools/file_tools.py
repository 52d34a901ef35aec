"""
File operation tool handlers.

These tools let the agent read files and see directory structure.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseToolHandler, ToolCategory, ToolContext, ToolResponse
from ..errors import NavigationError
from ..repository import DirectoryLister, FileReader
from ..repository.reader import DEFAULT_READ_LIMIT


class ReadInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    file_path: str = Field(..., min_length=1, description="The path to the file to read (absolute or relative)")
    offset: int = Field(0, ge=0, description="The line number to start reading from (0-based). Default: 0")
    limit: int = Field(DEFAULT_READ_LIMIT, ge=1, description="The number of lines to read. Default: 2000")


class ReadOutput(BaseModel):
    content: str = Field(description="File content with line numbers")
    total_lines: int = Field(description="Total number of lines in the file")
    has_more: bool = Field(description="Whether there are more lines after the read portion")


class ListInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    directory: Optional[str] = Field(
        None, description="The directory path to list. Defaults to the current working directory."
    )
    ignore: List[str] = Field(default_factory=list, description="Additional glob patterns to ignore")


class ListOutput(BaseModel):
    tree: str = Field(description="Tree-like representation of directory contents")
    file_count: int = Field(description="Number of files found")
    truncated: bool = Field(description="Whether results were truncated")


class ReadHandler(BaseToolHandler):
    """Tool to read a window of a file"""

    input_model = ReadInput
    output_model = ReadOutput

    @property
    def name(self) -> str:
        return "read"

    @property
    def category(self) -> ToolCategory:
        return ToolCategory.FILE

    @property
    def description(self) -> str:
        return (
            "Reads a file from the filesystem with line numbers. "
            "By default reads up to 2000 lines from the beginning. "
            "Use offset and limit to read specific portions of large files. "
            "Lines longer than 2000 characters are truncated. "
            'Returns file contents with line numbers in "XXXXX| content" format.'
        )

    async def execute(self, params: ReadInput, context: ToolContext) -> ToolResponse:
        """Execute: Read a file"""
        reader = FileReader(working_dir=context.working_dir)

        try:
            window = await self._run_blocking(reader.read, params.file_path, params.offset, params.limit)
        except NavigationError as e:
            return self._error_response(e)

        return self._success_response(
            ReadOutput(**window.to_dict()),
            metadata={"path": window.path, "offset": params.offset}
        )


class ListHandler(BaseToolHandler):
    """Tool to list a directory as a tree"""

    input_model = ListInput
    output_model = ListOutput

    @property
    def name(self) -> str:
        return "list"

    @property
    def category(self) -> ToolCategory:
        return ToolCategory.FILE

    @property
    def description(self) -> str:
        return (
            "Lists files and directories in a given path in a tree-like structure. "
            "Automatically ignores common non-essential directories like node_modules, .git, etc. "
            "Limited to 100 files to prevent overwhelming output."
        )

    async def execute(self, params: ListInput, context: ToolContext) -> ToolResponse:
        """Execute: List directory"""
        lister = DirectoryLister(context.ignore_rules, working_dir=context.working_dir)
        listing = await self._run_blocking(lister.list, params.directory, params.ignore)

        return self._success_response(ListOutput(**listing.to_dict()))
