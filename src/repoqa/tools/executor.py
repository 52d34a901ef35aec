"""
ToolExecutor - Coordinates tool execution using the coordinator pattern.

This module manages tool registration, lookup, input validation and
execution.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .base import IToolHandler, ToolCall, ToolCategory, ToolContext, ToolDefinition, ToolResponse

logger = logging.getLogger(__name__)


class UnknownToolError(ValueError):
    """Raised when a call names a tool that is not registered."""
    pass


class InvalidToolInputError(ValueError):
    """Raised when a call's input does not match the tool's input model."""

    def __init__(self, tool_name: str, errors: List[Dict[str, Any]]):
        self.tool_name = tool_name
        self.errors = errors
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ())) or 'input'}: {err.get('msg')}"
            for err in errors
        )
        super().__init__(f"Invalid input for tool '{tool_name}': {details}")


class ToolExecutor:
    """
    Coordinates tool execution for the agent.

    Responsibilities:
    1. Register tool handlers
    2. Provide tool definitions to the agent
    3. Reject invalid input before a handler runs
    4. Route tool calls to the appropriate handler
    """

    def __init__(self):
        self._handlers: Dict[str, IToolHandler] = {}
        self._handlers_by_category: Dict[ToolCategory, List[IToolHandler]] = {
            category: [] for category in ToolCategory
        }

    def register(self, handler: IToolHandler) -> None:
        """
        Register a tool handler.

        Raises:
            ValueError if a handler with the same name already exists
        """
        if handler.name in self._handlers:
            raise ValueError(f"Tool handler '{handler.name}' is already registered")

        self._handlers[handler.name] = handler
        self._handlers_by_category[handler.category].append(handler)
        logger.debug(f"Registered tool: {handler.name} (category: {handler.category.value})")

    def get_tool_definitions(self, categories: Optional[List[ToolCategory]] = None) -> List[ToolDefinition]:
        """
        Get tool definitions.

        Args:
            categories: Optional filter by categories. If None, returns all tools.
        """
        if categories is None:
            return [handler.get_definition() for handler in self._handlers.values()]

        definitions = []
        for category in categories:
            for handler in self._handlers_by_category.get(category, []):
                definitions.append(handler.get_definition())

        return definitions

    async def execute(self, tool_call: ToolCall, context: ToolContext) -> ToolResponse:
        """
        Execute a tool call.

        Raises:
            UnknownToolError: If the tool is not registered
            InvalidToolInputError: If the input fails validation
        """
        tool_name = tool_call.name

        logger.debug(f"Executing tool: {tool_name}", extra={"tool": tool_name})
        logger.debug(f"Tool input: {tool_call.input}")

        handler = self._handlers.get(tool_name)
        if not handler:
            logger.error(f"Tool not found: {tool_name}")
            raise UnknownToolError(
                f"Unknown tool: {tool_name}. Available tools: {list(self._handlers.keys())}"
            )

        try:
            params = handler.validate_input(tool_call.input or {})
        except ValidationError as e:
            logger.warning(f"Tool input validation failed for {tool_name}: {e}")
            raise InvalidToolInputError(tool_name, e.errors()) from e

        try:
            result = await handler.execute(params, context)
        except Exception as e:
            logger.error(f"Tool {tool_name} execution failed: {e}", exc_info=True)
            raise

        if result.is_error:
            logger.warning(f"Tool {tool_name} completed with error: {result.content}")
        else:
            content_str = result.to_string()
            content_preview = content_str[:200] + "..." if len(content_str) > 200 else content_str
            logger.debug(f"Tool {tool_name} completed successfully. Result preview: {content_preview}")

        return result

    def has_tool(self, tool_name: str) -> bool:
        """Check if a tool is registered"""
        return tool_name in self._handlers

    def get_tool_names(self) -> List[str]:
        """Get list of all registered tool names"""
        return list(self._handlers.keys())
