"""Budgeted selection over the distance-ranked candidates.

Walks candidates in rank order and keeps the longest prefix whose total line
count fits the budget. The walk stops at the first file that does not fit;
it never skips ahead looking for a smaller one, so the selection is always a
prefix of the ranking.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from bazctx.context.models import Budget, Candidate, SelectedFile

logger = logging.getLogger("bazctx.context")

Reader = Callable[[str], str]


def make_reader(root: Path) -> Reader:
    """Reader that resolves normalized paths against the workspace root."""

    def read(path: str) -> str:
        return (root / path).read_text(encoding="utf-8")

    return read


def count_lines(content: str) -> int:
    return len(content.splitlines())


def _load(candidate: Candidate, reader: Reader) -> SelectedFile:
    """Read a candidate once, recording a warning instead of raising."""
    try:
        content = reader(candidate.path)
    except FileNotFoundError:
        candidate.exists = False
        candidate.line_count = 0
        logger.warning(f"File {candidate.path} does not exist")
        return SelectedFile(
            candidate=candidate,
            error=f"Warning: File {candidate.path} does not exist.",
        )
    except (OSError, UnicodeDecodeError) as e:
        candidate.exists = True
        candidate.line_count = 0
        logger.warning(f"Failed to read {candidate.path}: {e}")
        return SelectedFile(
            candidate=candidate,
            error=f"Warning: Failed to read file {candidate.path}: {e}",
        )

    candidate.exists = True
    candidate.line_count = count_lines(content)
    return SelectedFile(candidate=candidate, content=content)


def select_candidates(
    ranked: Iterable[Candidate],
    budget: Budget,
    reader: Reader,
) -> Iterator[SelectedFile]:
    """Yield the selected files in rank order, charging each to `budget`.

    The first candidate is the target and is always included, even when it
    alone exceeds the limit. Unreadable files cost nothing and are still
    yielded so the renderer can warn about them.
    """
    for index, candidate in enumerate(ranked):
        selected = _load(candidate, reader)
        cost = candidate.line_count

        if index > 0 and selected.readable and not budget.fits(cost):
            logger.info(
                f"Budget reached at {candidate.path} "
                f"({cost} lines, {budget.remaining} of {budget.limit} left)"
            )
            return

        budget.charge(cost)
        yield selected
