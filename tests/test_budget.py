"""Tests for budgeted selection."""

from __future__ import annotations

from pathlib import Path

import pytest

from bazctx.context.budget import count_lines, make_reader, select_candidates
from bazctx.context.models import Budget, Candidate


def _lines(n: int) -> str:
    return "".join(f"line {i}\n" for i in range(n))


@pytest.fixture
def files() -> dict[str, str]:
    return {
        "target.cc": _lines(10),
        "a.cc": _lines(20),
        "b.cc": _lines(30),
        "c.cc": _lines(5),
    }


@pytest.fixture
def reader(files: dict[str, str]):
    def read(path: str) -> str:
        if path not in files:
            raise FileNotFoundError(path)
        return files[path]

    return read


def _ranked(*paths: str) -> list[Candidate]:
    return [
        Candidate(path=p, distance=0 if i == 0 else 1, pinned=i == 0)
        for i, p in enumerate(paths)
    ]


def _select(ranked, budget, reader) -> list[str]:
    return [s.candidate.path for s in select_candidates(ranked, budget, reader)]


class TestBudget:
    def test_unlimited(self):
        budget = Budget()
        assert budget.is_unlimited
        assert budget.fits(10**9)
        assert budget.remaining is None

    def test_fits_and_charge(self):
        budget = Budget(limit=100)
        assert budget.fits(100)
        budget.charge(60)
        assert budget.remaining == 40
        assert budget.fits(40)
        assert not budget.fits(41)

    def test_negative_limit_rejected(self):
        with pytest.raises(ValueError):
            Budget(limit=-1)


class TestCountLines:
    def test_counts(self):
        assert count_lines("") == 0
        assert count_lines("one") == 1
        assert count_lines("one\ntwo\n") == 2
        assert count_lines("one\ntwo") == 2


class TestSelectCandidates:
    def test_no_limit_passes_everything(self, reader):
        ranked = _ranked("target.cc", "a.cc", "b.cc", "c.cc")
        budget = Budget()
        assert _select(ranked, budget, reader) == ["target.cc", "a.cc", "b.cc", "c.cc"]
        assert budget.consumed == 65

    def test_stops_at_first_over_budget(self, reader):
        ranked = _ranked("target.cc", "a.cc", "b.cc", "c.cc")
        budget = Budget(limit=40)
        # b.cc does not fit; c.cc would, but the walk stops at b.cc.
        assert _select(ranked, budget, reader) == ["target.cc", "a.cc"]
        assert budget.consumed == 30

    def test_exact_fit(self, reader):
        budget = Budget(limit=60)
        assert _select(_ranked("target.cc", "a.cc", "b.cc"), budget, reader) == [
            "target.cc", "a.cc", "b.cc",
        ]
        assert budget.consumed == 60

    def test_target_included_when_over_budget(self, files, reader):
        files["target.cc"] = _lines(150)
        budget = Budget(limit=100)
        assert _select(_ranked("target.cc", "c.cc"), budget, reader) == ["target.cc"]
        assert budget.consumed == 150

    def test_zero_limit_keeps_target(self, reader):
        budget = Budget(limit=0)
        assert _select(_ranked("target.cc", "a.cc"), budget, reader) == ["target.cc"]

    def test_missing_file_costs_nothing(self, reader):
        ranked = _ranked("target.cc", "a.cc", "deleted.cc", "c.cc")
        budget = Budget(limit=35)
        selected = list(select_candidates(ranked, budget, reader))
        assert [s.candidate.path for s in selected] == ["target.cc", "a.cc", "deleted.cc", "c.cc"]
        assert budget.consumed == 35
        missing = selected[2]
        assert not missing.readable
        assert not missing.candidate.exists
        assert missing.candidate.line_count == 0
        assert missing.error == "Warning: File deleted.cc does not exist."

    def test_missing_target_still_first(self, reader):
        selected = list(select_candidates(_ranked("gone.cc", "a.cc"), Budget(), reader))
        assert selected[0].candidate.path == "gone.cc"
        assert selected[0].error is not None
        assert selected[1].readable

    def test_read_error_becomes_warning(self, reader):
        def broken(path: str) -> str:
            if path == "a.cc":
                raise PermissionError("denied")
            return reader(path)

        selected = list(select_candidates(_ranked("target.cc", "a.cc"), Budget(), broken))
        assert selected[1].error.startswith("Warning: Failed to read file a.cc")
        assert selected[1].candidate.exists

    def test_sets_line_counts(self, reader):
        selected = list(select_candidates(_ranked("target.cc", "b.cc"), Budget(), reader))
        assert [s.candidate.line_count for s in selected] == [10, 30]

    def test_selection_is_prefix(self, reader):
        ranked = _ranked("target.cc", "a.cc", "b.cc", "c.cc")
        paths = [c.path for c in ranked]
        for limit in range(0, 80, 5):
            selected = _select(_ranked(*paths), Budget(limit=limit), reader)
            assert selected == paths[: len(selected)]

    def test_consumed_never_exceeds_limit(self, reader):
        for limit in range(10, 80, 5):
            budget = Budget(limit=limit)
            list(select_candidates(_ranked("target.cc", "a.cc", "b.cc", "c.cc"), budget, reader))
            assert budget.consumed <= limit

    def test_empty_ranking(self, reader):
        assert _select([], Budget(limit=10), reader) == []


class TestMakeReader:
    def test_reads_relative_to_root(self, tmp_path: Path):
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / "a.cc").write_text("int a;\n")
        read = make_reader(tmp_path)
        assert read("pkg/a.cc") == "int a;\n"
        assert read(str(tmp_path / "pkg" / "a.cc")) == "int a;\n"

    def test_missing_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            make_reader(tmp_path)("nope.cc")
