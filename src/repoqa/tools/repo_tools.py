"""
Repository cache tool handler.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseToolHandler, ToolCategory, ToolContext, ToolResponse
from ..errors import FetchError


class CloneRepoInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    repo_url: str = Field(..., min_length=1, description="The git repository URL to clone")
    branch: Optional[str] = Field(
        None, description="The branch to clone (default: repository's default branch)"
    )


class CloneRepoOutput(BaseModel):
    repo_path: str = Field(description="Local path to the cloned repository")
    branch: Optional[str] = Field(None, description="The branch that was cloned")


class CloneRepoHandler(BaseToolHandler):
    """Tool to materialize a repository in the local cache"""

    input_model = CloneRepoInput
    output_model = CloneRepoOutput

    @property
    def name(self) -> str:
        return "clone_repo"

    @property
    def category(self) -> ToolCategory:
        return ToolCategory.REPOSITORY

    @property
    def description(self) -> str:
        return (
            "Clones a public git repository (shallow) into the local cache, or reuses the cached "
            "copy if it is already there on the requested branch. Returns the local path to use "
            "with the other tools."
        )

    async def execute(self, params: CloneRepoInput, context: ToolContext) -> ToolResponse:
        """Execute: Clone or reuse repository"""
        if context.cache_manager is None:
            raise RuntimeError("No repository cache is configured for this context")

        try:
            repo_path = await self._run_blocking(context.cache_manager.resolve, params.repo_url, params.branch)
        except FetchError as e:
            return self._error_response(e)

        return self._success_response(
            CloneRepoOutput(repo_path=repo_path, branch=params.branch),
            metadata={"repo_url": params.repo_url}
        )
