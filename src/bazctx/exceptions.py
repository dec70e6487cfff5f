"""Custom exceptions for bazctx."""


class BazctxError(Exception):
    """Base exception for all bazctx errors."""


class WorkspaceError(BazctxError):
    """No Bazel workspace root could be located."""


class GraphQueryError(BazctxError):
    """A call into the Bazel query engine failed."""

    step = "bazel query"

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr


class PackageResolutionError(GraphQueryError):
    """The target file is not owned by any Bazel package."""

    step = "package resolution"


class QueryError(GraphQueryError):
    """The dependency query exited with a non-zero status."""

    step = "dependency query"


class QueryEngineUnavailableError(GraphQueryError):
    """The bazel executable is missing or did not finish in time."""

    step = "query engine"
