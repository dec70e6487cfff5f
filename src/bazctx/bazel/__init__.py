"""Bazel query engine binding and location-output parsing."""

from bazctx.bazel.client import BazelClient, GraphSource
from bazctx.bazel.locations import LocationRecord, parse_locations, unique_paths

__all__ = ["BazelClient", "GraphSource", "LocationRecord", "parse_locations", "unique_paths"]
