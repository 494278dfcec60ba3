"""
Tests for the deadlock resolver.

The resolver is exercised directly on boards and on a minimal stand-in
board, since a real Board cannot be built with a single row.
"""

import random
from collections import Counter

import pytest

from match2.game.color import BLUE, GREEN, PINK, PURPLE, RED, YELLOW
from match2.game.deadlock_resolver import resolve, shuffle
from match2.game.errors import Unresolvable
from match2.game.group_finder import has_any_move
from .conftest import TEST_LAYOUTS, make_board


class FlatBoard:
    """Read-only stand-in exposing the board interface the resolver needs."""

    def __init__(self, rows):
        self.height = len(rows)
        self.width = len(rows[0])
        self.colors = {
            (x, self.height - 1 - i): color
            for i, row in enumerate(rows)
            for x, color in enumerate(row)
        }

    def occupant(self, x, y):
        return self.colors.get((x, y))


class TestShuffle:
    """Test the Fisher-Yates shuffle"""

    def test_is_permutation(self):
        colors = [RED, RED, BLUE, GREEN, YELLOW, BLUE, RED]
        result = shuffle(colors, random.Random(3))
        assert Counter(result) == Counter(colors)
        assert len(result) == len(colors)

    def test_does_not_modify_input(self):
        colors = [RED, BLUE, GREEN]
        shuffle(colors, random.Random(0))
        assert colors == [RED, BLUE, GREEN]

    def test_seeded_shuffle_is_reproducible(self):
        colors = list(range(20))
        assert shuffle(colors, random.Random(9)) == shuffle(colors, random.Random(9))

    def test_reaches_every_permutation(self):
        seen = {tuple(shuffle([1, 2, 3], random.Random(seed))) for seed in range(200)}
        assert len(seen) == 6

    def test_short_sequences(self):
        assert shuffle([], random.Random(0)) == []
        assert shuffle([RED], random.Random(0)) == [RED]


class TestResolve:
    """Test producing a playable arrangement"""

    @pytest.mark.parametrize("seed", range(10))
    def test_result_always_playable(self, seed):
        board = make_board(TEST_LAYOUTS["checkerboard_3x3"], colors=(RED, GREEN))
        report = resolve(board, random.Random(seed))

        view = FlatBoard([[None] * 3 for _ in range(3)])
        view.colors = dict(report.arrangement)
        assert has_any_move(view)

    @pytest.mark.parametrize("seed", range(10))
    def test_unpatched_result_keeps_multiset(self, seed):
        board = make_board(TEST_LAYOUTS["checkerboard_3x3"], colors=(RED, GREEN))
        before = Counter(c for column in board.get_colors() for c in column)

        report = resolve(board, random.Random(seed))

        after = Counter(report.arrangement.values())
        if report.patched:
            assert sum((after - before).values()) == 1
        else:
            assert after == before

    def test_distinct_colors_need_patch(self):
        board = make_board(TEST_LAYOUTS["distinct_2x2"])
        report = resolve(board, random.Random(0))

        assert report.patched
        assert report.arrangement[(0, 1)] == report.arrangement[(0, 0)]

    def test_does_not_touch_board(self):
        board = make_board(TEST_LAYOUTS["distinct_2x2"])
        before = board.get_colors()

        resolve(board, random.Random(0))

        assert board.get_colors() == before

    def test_single_row_unresolvable(self):
        board = FlatBoard([[RED, BLUE, GREEN, YELLOW]])
        with pytest.raises(Unresolvable):
            resolve(board, random.Random(0))

    def test_single_row_with_pair_is_fine(self):
        # two reds out of three cells: some shuffles pair them, some don't
        outcomes = set()
        for seed in range(30):
            board = FlatBoard([[RED, BLUE, RED]])
            try:
                resolve(board, random.Random(seed))
                outcomes.add("ok")
            except Unresolvable:
                outcomes.add("unresolvable")
        assert outcomes == {"ok", "unresolvable"}

    def test_patch_needs_first_column(self):
        board = FlatBoard([[None, PINK], [PURPLE, BLUE]])
        with pytest.raises(Unresolvable):
            resolve(board, random.Random(0))
