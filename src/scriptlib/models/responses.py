"""Result models for scriptlib editing primitives.

All models use Pydantic v2 BaseModel with frozen=True for immutability.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Outcome(StrEnum):
    """Whether a transformation modified its target."""

    CHANGED = "changed"
    UNCHANGED = "unchanged"


class DiffSummary(BaseModel):
    """Summary statistics for a diff."""

    model_config = ConfigDict(frozen=True)

    lines_added: int = Field(..., description="Number of lines added")
    lines_removed: int = Field(..., description="Number of lines removed")
    lines_modified: int = Field(..., description="Number of lines modified")
    regions_changed: int = Field(..., description="Number of change regions")


class UnifiedDiff(BaseModel):
    """Unified diff between a file and its transformed candidate."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Unified diff content")
    summary: DiffSummary = Field(..., description="Diff summary")


class EditResult(BaseModel):
    """Outcome of a transformation primitive."""

    model_config = ConfigDict(frozen=True)

    outcome: Outcome = Field(..., description="Changed or unchanged")
    path: str = Field(..., description="File the primitive operated on")
    previous_hash: str = Field(..., description="Hash before the call (format: sha256:...)")
    hash: str = Field(..., description="Hash after the call (format: sha256:...)")
    diff: UnifiedDiff | None = Field(default=None, description="What changed, if anything")
    timestamp: str = Field(..., description="Operation timestamp (ISO 8601)")

    @property
    def changed(self) -> bool:
        return self.outcome == Outcome.CHANGED

    def __bool__(self) -> bool:
        return self.changed
