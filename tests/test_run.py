import copy
import sys
import tempfile
from pathlib import Path

from run import _backfill, bank_to_records, build_bank, main
from src.queens.config import BankBuildConfig
from src.queens.loader import load_bank_records
from src.queens.model import Puzzle, RatedPuzzle
from src.utils.trace import Tracer

from conftest import BANK_REGIONS, BANK_SOLUTION

DEGENERATE_REGIONS = [[0, 0, 0, 0], [1, 1, 2, 2], [1, 3, 3, 2], [3, 3, 3, 2]]


def build_demo_puzzle(seed, regularity, grid_size, **kwargs):
    return Puzzle(regions=copy.deepcopy(BANK_REGIONS), solution=list(BANK_SOLUTION))


def _make_config(**overrides):
    values = dict(target_per_difficulty=1, max_attempts=3, max_duration_sec=60.0)
    values.update(overrides)
    return BankBuildConfig(**values)


def test_build_bank_rates_and_files_puzzles(monkeypatch):
    monkeypatch.setattr("run.generate_candidate", build_demo_puzzle)
    tracer = Tracer()
    bank = build_bank(_make_config(), tracer)

    assert len(bank["easy"]) == 1
    assert bank["medium"] == [] and bank["hard"] == [] and bank["expert"] == []
    record = bank["easy"][0]
    assert record.step_count == 9
    assert record.max_technique == 1
    assert tracer.summary()["action_counts"]["bank_add"] == 1


def test_build_bank_stops_at_attempt_cap(monkeypatch):
    calls = []

    def _never(seed, regularity, grid_size, **kwargs):
        calls.append((seed, regularity, grid_size))
        return None

    monkeypatch.setattr("run.generate_candidate", _never)
    bank = build_bank(_make_config(max_attempts=5, start_seed=10))

    assert len(calls) == 5
    assert [c[0] for c in calls] == [10, 11, 12, 13, 14]
    assert {c[2] for c in calls} == {9, 10}
    assert all(not tier for tier in bank.values())


def test_build_bank_skips_degenerate_boards(monkeypatch):
    def _degenerate(seed, regularity, grid_size, **kwargs):
        solution = [(0, 1), (1, 3), (2, 0), (3, 2)]
        return Puzzle(regions=copy.deepcopy(DEGENERATE_REGIONS), solution=solution)

    monkeypatch.setattr("run.generate_candidate", _degenerate)
    tracer = Tracer()
    bank = build_bank(_make_config(), tracer)

    assert all(not tier for tier in bank.values())
    reasons = [s.reason for s in tracer.steps if s.action_type == "rating"]
    assert reasons == ["single_region_row"] * 3


def test_backfill_relabels_copies():
    record = RatedPuzzle(
        puzzle=Puzzle(regions=BANK_REGIONS, solution=BANK_SOLUTION),
        difficulty="medium",
        max_technique=3,
        step_count=12,
    )
    bank = {"easy": [], "medium": [record], "hard": [], "expert": []}
    _backfill(bank, target=30)

    assert [r.difficulty for r in bank["hard"]] == ["hard"]
    assert [r.difficulty for r in bank["expert"]] == ["expert"]
    assert bank["medium"][0].difficulty == "medium"
    assert [r["difficulty"] for r in bank_to_records(bank)] == ["medium", "hard", "expert"]


def test_main_writes_bank_and_trace(monkeypatch):
    monkeypatch.setattr("run.generate_candidate", build_demo_puzzle)
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "bank.json"
        trace_path = Path(tmpdir) / "trace.csv"
        sys.argv = [
            "run.py",
            "--output", str(output_path),
            "--per-difficulty", "1",
            "--max-attempts", "2",
            "--trace", str(trace_path),
        ]
        main()

        records = load_bank_records(str(output_path))
        assert len(records) == 1
        assert records[0]["difficulty"] == "easy"
        assert records[0]["gridSize"] == 9
        assert "action_type" in trace_path.read_text()


def test_main_jsonl_output(monkeypatch):
    monkeypatch.setattr("run.generate_candidate", build_demo_puzzle)
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "bank.jsonl"
        main(["--output", str(output_path), "--per-difficulty", "2", "--max-attempts", "1", "--grid-sizes", "9"])
        lines = output_path.read_text().strip().splitlines()
        assert len(lines) == 1
