"""
HTTP entry point for repoqa.

Exposes the navigation tools over FastAPI so an agent loop running in
another process can call them.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from . import __version__
from .config import get_settings
from .errors import ErrorFormatter, FetchError
from .tools import (
    InvalidToolInputError,
    ToolCall,
    ToolContext,
    ToolExecutor,
    UnknownToolError,
    create_default_tool_executor
)

logger = logging.getLogger(__name__)


app = FastAPI(title="repoqa - Repository Navigation Tools", version=__version__)

# Globals, created on first use
_tool_executor: Optional[ToolExecutor] = None
_tool_context: Optional[ToolContext] = None


class ToolRequest(BaseModel):
    input: Dict[str, Any] = Field(default_factory=dict)
    working_dir: Optional[str] = None


class RepoRequest(BaseModel):
    url: str = Field(..., min_length=1)
    branch: Optional[str] = None


def get_tool_executor() -> ToolExecutor:
    """Get or create the tool executor."""
    global _tool_executor

    if _tool_executor is None:
        _tool_executor = create_default_tool_executor()

    return _tool_executor


def get_tool_context() -> ToolContext:
    """Get or create the shared tool context from settings."""
    global _tool_context

    if _tool_context is None:
        _tool_context = ToolContext.from_settings(get_settings())

    return _tool_context


def reset_state() -> None:
    """Drop the cached executor and context (tests change settings between runs)."""
    global _tool_executor, _tool_context
    _tool_executor = None
    _tool_context = None


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "repoqa"
    }


@app.get("/")
async def root():
    """Root endpoint with service info"""
    return {
        "name": "repoqa",
        "description": "Repository cache and navigation tools for question-answering agents",
        "version": __version__,
        "tools": get_tool_executor().get_tool_names()
    }


@app.get("/tools")
async def list_tools():
    """Definitions of every registered tool"""
    return {
        "tools": [
            {
                "name": definition.name,
                "description": definition.description,
                "category": definition.category.value,
                "input_schema": definition.input_schema,
                "output_schema": definition.output_schema
            }
            for definition in get_tool_executor().get_tool_definitions()
        ]
    }


@app.post("/tools/{name}")
async def execute_tool(name: str, request: ToolRequest):
    """
    Execute one tool.

    Returns the tool's content and metadata. Hard failures inside the tool
    come back with `is_error` set; unknown tools and invalid input are HTTP
    errors.
    """
    context = get_tool_context()
    if request.working_dir:
        context = dataclasses.replace(context, working_dir=Path(request.working_dir).expanduser())

    try:
        response = await get_tool_executor().execute(ToolCall(name=name, input=request.input), context)
    except UnknownToolError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidToolInputError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {
        "tool": name,
        "is_error": response.is_error,
        "content": response.content,
        "metadata": response.metadata or {}
    }


@app.post("/repos")
def resolve_repository(request: RepoRequest):
    """
    Clone a repository into the local cache, or reuse the cached copy.

    Runs in FastAPI's thread pool since the clone blocks.
    """
    context = get_tool_context()
    if context.cache_manager is None:
        raise HTTPException(status_code=500, detail="No repository cache configured")

    try:
        repo_path = context.cache_manager.resolve(request.url, request.branch)
    except FetchError as e:
        logger.error(f"Fetch failed for {request.url}: {e.diagnostic}", extra={"repo": request.url})
        raise HTTPException(status_code=502, detail=ErrorFormatter.format_for_agent(e))

    return {"repo_path": repo_path, "branch": request.branch}
