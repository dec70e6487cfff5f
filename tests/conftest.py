"""Shared test fixtures for bazctx."""

from __future__ import annotations

from pathlib import Path

import pytest

from bazctx.exceptions import PackageResolutionError, QueryError


class FakeGraph:
    """In-memory stand-in for the Bazel query engine.

    `layers` maps a query depth to the raw `--output=location` text bazel
    would print for it.
    """

    def __init__(
        self,
        package: str = "app",
        layers: dict[int, str] | None = None,
        fail_resolve: bool = False,
        fail_query: bool = False,
    ) -> None:
        self.package = package
        self.layers = layers or {}
        self.fail_resolve = fail_resolve
        self.fail_query = fail_query
        self.calls: list[tuple] = []

    def resolve_package(self, path: str) -> str:
        self.calls.append(("resolve", path))
        if self.fail_resolve:
            raise PackageResolutionError(f"no package owns {path}", stderr="ERROR: no such target")
        return self.package

    def query_dependencies(self, package: str, depth: int) -> str:
        self.calls.append(("query", package, depth))
        if self.fail_query:
            raise QueryError(f"query failed for {package}", stderr="ERROR: bad query")
        return self.layers.get(depth, "")


def location(path: Path | str, label: str = "//app:file") -> str:
    """One `--output=location` line for a source file."""
    return f"{path}:1:1: source file {label}"


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A small Bazel workspace with an app package depending on a lib package."""
    (tmp_path / "MODULE.bazel").write_text('module(name = "demo")\n')

    app = tmp_path / "app"
    app.mkdir()
    (app / "BUILD.bazel").write_text(
        'cc_binary(name = "main", srcs = ["main.cc", "util.h"], deps = ["//lib"])\n'
    )
    (app / "main.cc").write_text(
        '#include "app/util.h"\n'
        '#include "lib/lib.h"\n'
        "\n"
        "int main() { return helper(); }\n"
    )
    (app / "util.h").write_text("#pragma once\nint util();\n")

    lib = tmp_path / "lib"
    lib.mkdir()
    (lib / "BUILD.bazel").write_text(
        'cc_library(name = "lib", srcs = ["lib.cc"], hdrs = ["lib.h"], visibility = ["//visibility:public"])\n'
    )
    (lib / "lib.h").write_text("#pragma once\nint helper();\n")
    (lib / "lib.cc").write_text(
        '#include "lib/lib.h"\n'
        "\n"
        "int helper() {\n"
        "  return 0;\n"
        "}\n"
    )
    return tmp_path


@pytest.fixture
def workspace_graph(workspace: Path) -> FakeGraph:
    """Query output matching the `workspace` fixture, with absolute paths."""
    depth0 = "\n".join([
        location(workspace / "app" / "BUILD.bazel", "//app:BUILD.bazel"),
        location(workspace / "app" / "main.cc", "//app:main.cc"),
        location(workspace / "app" / "util.h", "//app:util.h"),
    ])
    depth1 = depth0
    depth2 = "\n".join([
        depth0,
        location(workspace / "lib" / "lib.cc", "//lib:lib.cc"),
        location(workspace / "lib" / "lib.h", "//lib:lib.h"),
    ])
    return FakeGraph(package="app", layers={0: depth0, 1: depth1, 2: depth2})


@pytest.fixture
def make_graph():
    """Factory for `FakeGraph` instances."""
    return FakeGraph


@pytest.fixture
def loc():
    """Helper that formats one location line."""
    return location
