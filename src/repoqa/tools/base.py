"""
Base classes and interfaces for the tool system.

Each navigation operation is exposed to the agent as a named tool with a
pydantic input model (its JSON schema is what the agent sees) and a pydantic
output model describing the result shape.
"""

import asyncio
import json
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from pydantic import BaseModel

from ..config import DEFAULT_SEARCH_TIMEOUT, Settings
from ..errors import ErrorFormatter, categorize_error
from ..repository import IgnoreRules, RepoCacheManager

T = TypeVar("T")


class ToolCategory(Enum):
    """Categories of tools available to the agent"""
    REPOSITORY = "repository"  # Clone cache
    FILE = "file"  # Reading and listing files
    CODE_ANALYSIS = "code_analysis"  # File and content search
    DOCS = "docs"  # Documentation lookup


@dataclass
class ToolResponse:
    """Response from a tool execution"""
    content: Any  # The actual result content
    metadata: Optional[Dict[str, Any]] = None  # Additional metadata

    @property
    def is_error(self) -> bool:
        return bool(self.metadata and self.metadata.get("error"))

    def to_string(self) -> str:
        """Convert response to string format"""
        if isinstance(self.content, str):
            return self.content
        return json.dumps(self.content, indent=2)


@dataclass
class ToolDefinition:
    """Definition of a tool for the agent"""
    name: str
    description: str
    input_schema: Dict[str, Any]  # JSON schema for tool inputs
    output_schema: Dict[str, Any]  # JSON schema for tool outputs
    category: ToolCategory


@dataclass
class ToolCall:
    """A tool invocation requested by the agent"""
    name: str
    input: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolContext:
    """
    Execution context shared by tool calls in one session.

    `working_dir` is where relative paths resolve; it is usually the root of
    the repository the cache manager materialized.
    """
    working_dir: Path = field(default_factory=Path.cwd)
    ignore_rules: IgnoreRules = field(default_factory=IgnoreRules.default)
    search_timeout: int = DEFAULT_SEARCH_TIMEOUT
    cache_manager: Optional[RepoCacheManager] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ToolContext":
        return cls(
            working_dir=settings.working_dir,
            search_timeout=settings.search_timeout,
            cache_manager=RepoCacheManager(settings.repos_dir, clone_timeout=settings.clone_timeout)
        )

    def resolve_dir(self, directory: Optional[str]) -> Path:
        """Resolve an optional directory argument against the working directory."""
        if not directory:
            return self.working_dir
        path = Path(os.path.expanduser(directory))
        return path if path.is_absolute() else self.working_dir / path


class IToolHandler(ABC):
    """
    Base interface for all tool handlers.

    Each tool handler implements:
    1. Tool definition (name, description, input and output models)
    2. Execution logic on validated input
    """

    input_model: Type[BaseModel]
    output_model: Type[BaseModel]

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique tool name"""
        pass

    @property
    @abstractmethod
    def category(self) -> ToolCategory:
        """Tool category"""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Description shown to the agent"""
        pass

    def get_definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            input_schema=self.input_model.model_json_schema(),
            output_schema=self.output_model.model_json_schema(),
            category=self.category
        )

    def validate_input(self, input_data: Dict[str, Any]) -> BaseModel:
        """
        Validate tool input before execution.

        Raises:
            pydantic.ValidationError (a ValueError) if validation fails
        """
        return self.input_model.model_validate(input_data)

    @abstractmethod
    async def execute(self, params: Any, context: ToolContext) -> ToolResponse:
        """
        Execute the tool with validated input.

        Args:
            params: Instance of input_model
            context: Execution context

        Returns:
            ToolResponse with results
        """
        pass


class BaseToolHandler(IToolHandler):
    """
    Base implementation of IToolHandler with common functionality.
    """

    async def _run_blocking(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a blocking operation in the default thread pool."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args, **kwargs))

    def _success_response(self, result: BaseModel, metadata: Optional[Dict] = None) -> ToolResponse:
        """Create a successful tool response from an output model"""
        return ToolResponse(content=result.model_dump(), metadata=metadata)

    def _error_response(self, error: Exception) -> ToolResponse:
        """Create an error tool response for a hard failure"""
        kind, _ = categorize_error(error)
        metadata: Dict[str, Any] = {"error": True, "kind": kind.value}
        suggestions = getattr(error, "suggestions", None)
        if suggestions:
            metadata["suggestions"] = list(suggestions)
        return ToolResponse(
            content=ErrorFormatter.format_for_agent(error),
            metadata=metadata
        )
