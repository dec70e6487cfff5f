"""Command-line interface for bazctx."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from bazctx import __version__
from bazctx.config import ContextConfig, find_workspace_root, split_csv
from bazctx.exceptions import BazctxError, GraphQueryError, WorkspaceError
from bazctx.ui.console import Console

console = Console()


def _get_workspace_root(workspace: str | None, source_file: str) -> Path:
    """Find the Bazel workspace root or raise."""
    if workspace:
        root = Path(workspace).resolve()
        if not root.is_dir():
            raise WorkspaceError(f"Workspace does not exist: {workspace}")
        return root

    candidate = Path(source_file)
    if not candidate.is_absolute():
        candidate = Path.cwd() / candidate
    root = find_workspace_root(candidate.parent) or find_workspace_root()
    if root is None:
        raise WorkspaceError(
            "No Bazel workspace found (looked for MODULE.bazel, WORKSPACE.bazel, "
            "WORKSPACE). Run inside a workspace or pass --workspace."
        )
    return root


def _cli_path(value: str) -> str:
    """Resolve a path argument: absolute and cwd-relative paths are resolved,
    anything else is left for the workspace root to anchor."""
    path = Path(value)
    if path.is_absolute():
        return str(path.resolve())
    from_cwd = Path.cwd() / path
    if from_cwd.exists():
        return str(from_cwd.resolve())
    return value


@click.command()
@click.argument("source_file")
@click.option(
    "--limit", "-l", type=click.IntRange(min=0), default=None,
    help="Maximum number of lines to print (default: unlimited).",
)
@click.option(
    "--file-types", "-t", multiple=True,
    help="Only include these extensions (comma-separated), plus the target's own.",
)
@click.option(
    "--always-include", "-a", multiple=True,
    help="Files to include right after the target (comma-separated; cwd- or workspace-relative).",
)
@click.option("--workspace", "-w", default=None, help="Path to the Bazel workspace root.")
@click.option("--bazel", "bazel_binary", default="bazel", help="Bazel executable to run.")
@click.option(
    "--timeout", type=float, default=None,
    help="Seconds to wait for each bazel query (default: no timeout).",
)
@click.option("--stats", is_flag=True, help="Print a run summary to stderr.")
@click.option("--verbose", "-v", is_flag=True, help="Log bazel invocations and ranking details.")
@click.version_option(version=__version__, prog_name="bazctx")
def main(
    source_file: str, limit: int | None, file_types: tuple[str, ...],
    always_include: tuple[str, ...], workspace: str | None, bazel_binary: str,
    timeout: float | None, stats: bool, verbose: bool,
):
    """Print SOURCE_FILE followed by the source files Bazel relates to it.

    Files are ordered by dependency distance from the target's package and
    printed as `==> path <==` entries until the line budget runs out. The
    target itself is always printed first.

    Examples:

        bazctx src/server/handler.cc

        bazctx src/server/handler.cc --limit 2000 --file-types h,cc
    """
    console.setup_logging(verbose)

    from bazctx.bazel.client import BazelClient
    from bazctx.context.engine import ContextAssembler

    try:
        root = _get_workspace_root(workspace, source_file)
        config = ContextConfig(
            limit=limit,
            file_types=split_csv(file_types),
            always_include=[_cli_path(p) for p in split_csv(always_include)],
            bazel_binary=bazel_binary,
            query_timeout=timeout,
        )
        if verbose:
            console.info(f"Workspace: {root}")
        assembler = ContextAssembler(root, BazelClient(root, config), config)
        bundle = assembler.assemble(_cli_path(source_file), sys.stdout)
    except GraphQueryError as e:
        console.error(f"{e.step} failed: {e}")
        if e.stderr:
            console.detail(e.stderr)
        sys.exit(1)
    except BazctxError as e:
        console.error(str(e))
        sys.exit(1)

    if bundle.files_missing:
        console.warning(f"{bundle.files_missing} file(s) could not be read")
    if stats:
        console.show_bundle(bundle)
