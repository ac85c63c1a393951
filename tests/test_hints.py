"""Tests for the hint analyzer."""

from src.queens.hints import analyze_for_hint, general_tip, region_name
from src.queens.model import Position, Queen


def _queen(qid, row, col):
    return Queen(id=qid, position=Position(row, col))


def test_empty_board_gives_general_tip(block_regions):
    hint = analyze_for_hint([], [], [], block_regions)
    assert hint is not None
    assert hint.type == "general_tip"
    assert hint.position is None
    assert hint.highlight_cells == []
    assert hint.highlight_queens == []
    assert hint.explanation == (
        "Look for rows, columns, or regions with the fewest valid cells - they're easiest to solve!"
    )
    assert not hint.can_apply


def test_row_conflict_is_reported_first(row_regions_4x4):
    queens = [_queen("a", 0, 0), _queen("b", 0, 3)]
    hint = analyze_for_hint(queens, [], [], row_regions_4x4)
    assert hint.type == "conflict"
    assert hint.explanation == "Row 1 has 2 queens. Each row can only have one queen."
    assert hint.highlight_cells == [Position(0, 0), Position(0, 3)]
    assert sorted(hint.highlight_queens) == ["a", "b"]


def test_adjacent_conflict(block_regions):
    queens = [_queen("a", 2, 2), _queen("b", 3, 3)]
    hint = analyze_for_hint(queens, [], [], block_regions)
    assert hint.type == "conflict"
    assert "adjacent" in hint.explanation
    assert hint.highlight_cells == [Position(2, 2), Position(3, 3)]


def test_region_conflict_names_region_colour(block_regions):
    queens = [_queen("a", 0, 0), _queen("b", 2, 2)]
    hint = analyze_for_hint(queens, [], [], block_regions)
    assert hint.type == "conflict"
    assert hint.explanation.startswith("The blue region has 2 queens")


def test_naked_single_in_row(row_regions_4x4):
    hint = analyze_for_hint([_queen("a", 0, 1)], [], [], row_regions_4x4)
    assert hint.type == "naked_single_row"
    assert hint.position == Position(1, 3)
    assert hint.can_apply
    assert hint.highlight_cells == [Position(1, c) for c in range(4)]


def test_naked_single_in_region(bank_regions):
    hint = analyze_for_hint([], [], [], bank_regions)
    assert hint.type == "naked_single_region"
    assert hint.position == Position(0, 3)
    assert hint.explanation == "The blue region has only one valid cell remaining. Place a queen here!"


def test_elimination_hint(row_regions_4x4):
    hint = analyze_for_hint([_queen("a", 0, 0)], [], [], row_regions_4x4)
    assert hint.type == "elimination"
    assert hint.position == Position(1, 2)
    assert hint.explanation == (
        "This cell at row 2, column 3 is a strong candidate. Row has 2 options, column has 3 options."
    )


def test_marks_do_not_change_hint(row_regions_4x4):
    plain = analyze_for_hint([_queen("a", 0, 1)], [], [], row_regions_4x4)
    marked = analyze_for_hint([_queen("a", 0, 1)], [Position(1, 3)], [], row_regions_4x4)
    assert plain == marked


def test_tip_rotates_with_queen_count(block_regions):
    hint = analyze_for_hint([_queen("a", 0, 0)], [], [], block_regions)
    assert hint.type == "general_tip"
    assert hint.explanation.startswith("Remember: queens block all 8 adjacent cells")


def test_general_tip_never_empty():
    for count in range(12):
        assert general_tip(count).explanation


def test_region_names():
    assert region_name(0) == "blue"
    assert region_name(8) == "gray"
    assert region_name(9) == "region 10"
