"""Configuration management for bazctx."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

# Hops from the target's package covered by the dependency query.
QUERY_DEPTH = 2

WORKSPACE_MARKERS = ("MODULE.bazel", "WORKSPACE.bazel", "WORKSPACE")


class ContextConfig(BaseModel):
    """Settings for a single context run, built from command-line flags."""

    limit: int | None = Field(default=None, ge=0)  # None = unlimited
    file_types: list[str] = Field(default_factory=list)  # empty = no filter
    always_include: list[str] = Field(default_factory=list)
    bazel_binary: str = "bazel"
    query_timeout: float | None = None

    @field_validator("file_types")
    @classmethod
    def _strip_dots(cls, value: list[str]) -> list[str]:
        return [ext.strip().lstrip(".") for ext in value if ext.strip().lstrip(".")]


def find_workspace_root(start: Path | None = None) -> Path | None:
    """Walk up from `start` looking for a Bazel workspace marker file."""
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    while True:
        if any((current / marker).is_file() for marker in WORKSPACE_MARKERS):
            return current
        if current == current.parent:
            return None
        current = current.parent


def normalize_path(path: str | Path, root: Path) -> str:
    """Return `path` relative to the workspace root, or absolute if outside it.

    Relative inputs are taken to be relative to the workspace root. Paths that
    reach the workspace through a symlink are matched after resolving.
    """
    root = root.resolve()
    p = Path(path)
    if not p.is_absolute():
        p = root / p
    p = Path(os.path.normpath(p))
    for candidate in (p, p.resolve()):
        try:
            return candidate.relative_to(root).as_posix()
        except ValueError:
            continue
    return str(p)


def split_csv(values: tuple[str, ...] | list[str] | None) -> list[str]:
    """Flatten repeated and comma-separated option values, dropping blanks."""
    items: list[str] = []
    for value in values or ():
        items.extend(part.strip() for part in value.split(",") if part.strip())
    return items
