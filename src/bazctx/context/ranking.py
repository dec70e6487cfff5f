"""Distance ranking of query candidates.

Distance is not computed by walking the graph here. The query engine is
asked once per depth, and a path's distance is the first depth whose query
returned it. Ranking is then a stable sort on that distance, so equal
distances keep the order the query engine reported them in.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from bazctx.context.models import Candidate, QueryResult


def _suffix(path: str) -> str:
    return PurePosixPath(path.replace("\\", "/")).suffix.lstrip(".")


def assign_distances(result: QueryResult) -> dict[str, int]:
    """Map each path to the smallest depth it appeared at, in discovery order."""
    distances: dict[str, int] = {}
    for depth, layer in enumerate(result.layers):
        for path in layer:
            distances.setdefault(path, depth)
    return distances


def rank_candidates(
    result: QueryResult,
    target: str,
    pinned: list[str] | None = None,
    file_types: list[str] | None = None,
) -> list[Candidate]:
    """Produce the total order consumed by the budget selector.

    The target always comes first, then pinned files in the given order,
    then everything else by ascending distance with discovery order
    breaking ties. With `file_types`, unpinned candidates are kept only if
    their extension is listed or matches the target's.
    """
    ranked = [Candidate(path=target, distance=0, pinned=True)]
    seen = {target}

    for path in pinned or []:
        if path not in seen:
            seen.add(path)
            ranked.append(Candidate(path=path, distance=0, pinned=True))

    allowed: set[str] | None = None
    if file_types:
        allowed = set(file_types)
        if _suffix(target):
            allowed.add(_suffix(target))

    rest = [
        Candidate(path=path, distance=distance)
        for path, distance in assign_distances(result).items()
        if path not in seen and (allowed is None or _suffix(path) in allowed)
    ]
    # sorted() is stable: ties keep discovery order.
    rest = sorted(rest, key=lambda c: c.distance)
    return ranked + rest
