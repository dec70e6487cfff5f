"""Streaming renderer for the selected files.

Output format, one entry per selected file::

    ==> path/to/file.cc <==
    <file content>

Entries are separated by a blank line. An unreadable file keeps its header
and gets a single warning line in place of its content.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from bazctx.context.models import SelectedFile


def header(path: str) -> str:
    return f"==> {path} <=="


def render_entry(entry: SelectedFile) -> str:
    """Render one entry as text ending in a newline."""
    body = entry.content if entry.readable else entry.error
    body = body or ""
    if body and not body.endswith("\n"):
        body += "\n"
    return f"{header(entry.candidate.path)}\n{body}"


def render_selection(entries: Iterable[SelectedFile], stream: TextIO) -> int:
    """Write entries to `stream` as they arrive; return how many were written."""
    written = 0
    for entry in entries:
        if written:
            stream.write("\n")
        stream.write(render_entry(entry))
        stream.flush()
        written += 1
    return written
