"""Data models for distance-ranked, budgeted context selection."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Candidate(BaseModel):
    """A file related to the target, pending selection."""

    path: str  # Normalized; unique key
    distance: int = Field(default=0, ge=0)  # Query depth at which it first appeared
    line_count: int = Field(default=0, ge=0)  # Filled in when the file is read
    exists: bool = True
    pinned: bool = False  # Target or always-include file


class QueryResult(BaseModel):
    """Paths returned by each depth-bounded query; index = depth."""

    package: str
    layers: list[list[str]] = Field(default_factory=list)


class Budget(BaseModel):
    """Line budget shared across one selection pass."""

    limit: int | None = Field(default=None, ge=0)  # None = unlimited
    consumed: int = 0

    @property
    def is_unlimited(self) -> bool:
        return self.limit is None

    @property
    def remaining(self) -> int | None:
        if self.limit is None:
            return None
        return max(0, self.limit - self.consumed)

    def fits(self, cost: int) -> bool:
        return self.is_unlimited or self.consumed + cost <= self.limit

    def charge(self, cost: int) -> None:
        self.consumed += cost


class SelectedFile(BaseModel):
    """One entry of the selection, together with the single read of its file."""

    candidate: Candidate
    content: str | None = None
    error: str | None = None  # Inline warning when the file could not be read

    @property
    def readable(self) -> bool:
        return self.error is None


class ContextBundle(BaseModel):
    """Summary of one context run, returned after rendering."""

    target: str
    package: str
    candidates_available: int = 0
    files_included: int = 0
    files_missing: int = 0
    lines_included: int = 0
    limit: int | None = None
    truncated: bool = False  # Budget stopped the walk before the end
    elapsed_ms: float = 0.0
