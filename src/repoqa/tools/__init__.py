"""
Tools module - Provides all tool handlers for the agent.
"""

from .base import (
    IToolHandler,
    BaseToolHandler,
    ToolDefinition,
    ToolResponse,
    ToolCategory,
    ToolCall,
    ToolContext
)
from .executor import ToolExecutor, UnknownToolError, InvalidToolInputError
from .repo_tools import CloneRepoHandler
from .search_tools import GlobHandler, GrepHandler
from .file_tools import ReadHandler, ListHandler
from .docs_tools import ListDocsHandler, ReadDocHandler, SearchDocsHandler


def create_default_tool_executor() -> ToolExecutor:
    """
    Create a ToolExecutor with all default tools registered.

    Returns:
        ToolExecutor with all standard tools
    """
    executor = ToolExecutor()

    # Repository cache
    executor.register(CloneRepoHandler())

    # Code navigation
    executor.register(GlobHandler())
    executor.register(GrepHandler())
    executor.register(ReadHandler())
    executor.register(ListHandler())

    # Documentation
    executor.register(ListDocsHandler())
    executor.register(ReadDocHandler())
    executor.register(SearchDocsHandler())

    return executor


__all__ = [
    # Base classes
    "IToolHandler",
    "BaseToolHandler",
    "ToolDefinition",
    "ToolResponse",
    "ToolCategory",
    "ToolCall",
    "ToolContext",
    # Executor
    "ToolExecutor",
    "UnknownToolError",
    "InvalidToolInputError",
    "create_default_tool_executor",
    # Handlers
    "CloneRepoHandler",
    "GlobHandler",
    "GrepHandler",
    "ReadHandler",
    "ListHandler",
    "ListDocsHandler",
    "ReadDocHandler",
    "SearchDocsHandler",
]
