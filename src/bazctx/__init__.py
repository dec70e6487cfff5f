"""bazctx - relevance-ordered source context for a file in a Bazel workspace."""

__version__ = "0.1.0"
