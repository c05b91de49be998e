"""Data models for parsed git repository state."""

from pydantic import BaseModel, ConfigDict


class RepoStatus(BaseModel):
    """Branch and worktree state parsed from git status --porcelain=v2."""

    model_config = ConfigDict(frozen=True)

    head: str
    detached: bool = False
    dirty: bool = False
    upstream: str | None = None
    # None when the branch.ab header is absent (no upstream configured)
    ahead: int | None = None
    behind: int | None = None

    @property
    def has_upstream(self) -> bool:
        return self.ahead is not None and self.behind is not None
