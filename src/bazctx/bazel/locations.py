"""Parser for `bazel query --output=location` text.

Each location line looks like::

    /abs/path/to/file.cc:1:1: source file //pkg:file.cc

The query engine may interleave informational lines, so parsing is tolerant:
anything that does not look like a location is skipped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePath

# Shortest path prefix followed by an optional ":line[:col]" marker and ": ".
# A colon inside the path survives unless it is followed by that marker.
_LOCATION_RE = re.compile(
    r"^(?P<path>\S.*?)"
    r"(?::(?P<line>\d+)(?::(?P<column>\d+))?)?"
    r":(?:\s+(?P<info>.*))?$"
)


@dataclass
class LocationRecord:
    """One parsed location line."""
    path: str
    line: int | None = None
    column: int | None = None
    info: str = ""


def _is_plausible_path(path: str) -> bool:
    """Reject tokens like 'INFO' or 'Loading' that are not file paths."""
    if "/" in path or "\\" in path:
        return True
    return bool(PurePath(path).suffix)


def parse_location_line(line: str) -> LocationRecord | None:
    """Parse one line, or return None if it is not a location line."""
    line = line.strip()
    if not line:
        return None
    match = _LOCATION_RE.match(line)
    if not match:
        return None
    path = match.group("path").strip()
    if not path or not _is_plausible_path(path):
        return None
    return LocationRecord(
        path=path,
        line=int(match.group("line")) if match.group("line") else None,
        column=int(match.group("column")) if match.group("column") else None,
        info=(match.group("info") or "").strip(),
    )


def parse_locations(text: str) -> list[LocationRecord]:
    """Parse every location line in `text`, in output order."""
    records: list[LocationRecord] = []
    for line in text.splitlines():
        record = parse_location_line(line)
        if record is not None:
            records.append(record)
    return records


def unique_paths(records: list[LocationRecord]) -> list[str]:
    """Distinct paths in first-seen order."""
    seen: set[str] = set()
    paths: list[str] = []
    for record in records:
        if record.path not in seen:
            seen.add(record.path)
            paths.append(record.path)
    return paths
