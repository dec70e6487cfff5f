"""Distance-ranked, line-budgeted context selection.

Ranks the source files Bazel reports around a target file by dependency
distance, keeps the longest prefix that fits a line budget, and streams it
as `==> path <==` entries.

Usage:
    from bazctx.context import ContextAssembler

    assembler = ContextAssembler(root, BazelClient(root))
    bundle = assembler.assemble("foo/bar.cc", sys.stdout)
    print(bundle.files_included, bundle.lines_included)
"""

from bazctx.context.engine import ContextAssembler
from bazctx.context.models import Budget, Candidate, ContextBundle, QueryResult, SelectedFile

__all__ = [
    "Budget",
    "Candidate",
    "ContextAssembler",
    "ContextBundle",
    "QueryResult",
    "SelectedFile",
]
