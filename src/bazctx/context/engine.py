"""Context assembly for a single target file.

Pipeline:
  1. Resolve the package that owns the target
  2. Query source files within 0..QUERY_DEPTH hops of that package
     (one query per depth, so each path's distance is the first depth
     that returned it)
  3. Parse location output into distinct, normalized paths
  4. Rank by distance, target first, ties in discovery order
  5. Select the longest prefix that fits the line budget
  6. Stream the selection as `==> path <==` entries

Steps 1 and 2 are fatal on failure and finish before anything is written,
so a failed run never produces partial output. Everything after that
degrades to warnings.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

from bazctx.bazel.client import GraphSource
from bazctx.bazel.locations import parse_locations, unique_paths
from bazctx.config import QUERY_DEPTH, ContextConfig, normalize_path
from bazctx.context.budget import Reader, make_reader, select_candidates
from bazctx.context.models import Budget, Candidate, ContextBundle, QueryResult, SelectedFile
from bazctx.context.ranking import rank_candidates
from bazctx.context.render import render_selection

logger = logging.getLogger("bazctx.context")


class ContextAssembler:
    """Builds a distance-ranked, line-budgeted bundle of related files.

    Usage:
        assembler = ContextAssembler(root, BazelClient(root, config), config)
        bundle = assembler.assemble("foo/bar.cc", sys.stdout)
    """

    def __init__(
        self,
        root: Path,
        source: GraphSource,
        config: ContextConfig | None = None,
        reader: Reader | None = None,
    ) -> None:
        self.root = root
        self.source = source
        self.config = config or ContextConfig()
        self.reader = reader or make_reader(root)

    def query(self, target: str) -> QueryResult:
        """Resolve the target's package and collect paths per query depth."""
        package = self.source.resolve_package(target)
        logger.debug(f"{target} belongs to //{package}")

        layers: list[list[str]] = []
        for depth in range(QUERY_DEPTH + 1):
            raw = self.source.query_dependencies(package, depth)
            paths = [
                normalize_path(path, self.root)
                for path in unique_paths(parse_locations(raw))
            ]
            logger.debug(f"depth {depth}: {len(paths)} source files")
            layers.append(paths)
        return QueryResult(package=package, layers=layers)

    def rank(self, target: str, result: QueryResult) -> list[Candidate]:
        pinned = [normalize_path(p, self.root) for p in self.config.always_include]
        return rank_candidates(
            result,
            target,
            pinned=pinned,
            file_types=self.config.file_types,
        )

    def assemble(self, target: str | Path, stream: TextIO) -> ContextBundle:
        """Run the whole pipeline for `target`, writing the bundle to `stream`."""
        start = time.time()
        target = normalize_path(target, self.root)

        result = self.query(target)
        ranked = self.rank(target, result)

        budget = Budget(limit=self.config.limit)
        bundle = ContextBundle(
            target=target,
            package=result.package,
            candidates_available=len(ranked),
            limit=self.config.limit,
        )

        def tally(entries: Iterator[SelectedFile]) -> Iterator[SelectedFile]:
            for entry in entries:
                if not entry.readable:
                    bundle.files_missing += 1
                yield entry

        written = render_selection(
            tally(select_candidates(ranked, budget, self.reader)), stream
        )

        bundle.files_included = written
        bundle.lines_included = budget.consumed
        bundle.truncated = written < len(ranked)
        bundle.elapsed_ms = round((time.time() - start) * 1000, 1)
        return bundle
