"""Bazel query engine binding.

The context engine only needs two questions answered by the build graph:
which package owns a file, and which source files sit within N hops of a
package's dependencies. `GraphSource` is that narrow interface;
`BazelClient` answers it by running `bazel query` as a subprocess.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path
from typing import Protocol

from bazctx.config import ContextConfig
from bazctx.exceptions import (
    PackageResolutionError,
    QueryEngineUnavailableError,
    QueryError,
)

logger = logging.getLogger("bazctx.bazel")


class GraphSource(Protocol):
    """Anything that can resolve packages and run dependency queries."""

    def resolve_package(self, path: str) -> str:
        ...

    def query_dependencies(self, package: str, depth: int) -> str:
        ...


def dependency_query(package: str, depth: int) -> str:
    """Build the query for source files within `depth` hops of `package`."""
    label = package if package.startswith("//") or package.startswith("@") else f"//{package}"
    return f'kind("source file", deps({label}:*, {depth}))'


class BazelClient:
    """Runs `bazel query` inside a workspace."""

    def __init__(self, workspace: Path, config: ContextConfig | None = None) -> None:
        self.workspace = workspace
        self.config = config or ContextConfig()
        self._executable: str | None = None

    @property
    def executable(self) -> str:
        if self._executable is None:
            found = shutil.which(self.config.bazel_binary)
            if found is None:
                raise QueryEngineUnavailableError(
                    f"Could not find '{self.config.bazel_binary}' on PATH"
                )
            self._executable = found
        return self._executable

    def _run(self, args: list[str]) -> subprocess.CompletedProcess[str]:
        argv = [self.executable, *args]
        logger.debug(f"Running: {' '.join(argv)}")
        start = time.time()
        try:
            result = subprocess.run(
                argv,
                cwd=self.workspace,
                capture_output=True,
                text=True,
                timeout=self.config.query_timeout,
            )
        except FileNotFoundError as e:
            raise QueryEngineUnavailableError(f"Failed to execute {argv[0]}: {e}") from e
        except UnicodeDecodeError as e:
            raise QueryEngineUnavailableError(f"bazel printed output that is not valid UTF-8: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise QueryEngineUnavailableError(
                f"bazel query did not finish within {self.config.query_timeout}s"
            ) from e
        logger.debug(
            f"bazel exited {result.returncode} in {(time.time() - start) * 1000:.0f}ms"
        )
        return result

    def resolve_package(self, path: str) -> str:
        """Return the package owning `path` (workspace-relative or absolute)."""
        result = self._run(["query", path, "--output=package"])
        if result.returncode != 0:
            raise PackageResolutionError(
                f"Could not resolve the Bazel package for {path}",
                stderr=result.stderr,
            )
        # The root package prints as an empty line.
        lines = result.stdout.strip().splitlines()
        return lines[0].strip() if lines else ""

    def query_dependencies(self, package: str, depth: int) -> str:
        """Return raw `--output=location` text for the dependency query."""
        query = dependency_query(package, depth)
        result = self._run(["query", query, "--output=location"])
        if result.returncode != 0:
            raise QueryError(
                f"Dependency query failed for package {package} (depth {depth})",
                stderr=result.stderr,
            )
        return result.stdout
