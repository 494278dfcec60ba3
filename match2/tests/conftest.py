"""
Shared test utilities for match2 tests.

Boards are written as strings, one per row, top row first. Each letter
is the initial of a palette color (K for pink, since purple takes P).
"""

import random

from match2.game.board import Board
from match2.game.color import BLUE, GREEN, PINK, PURPLE, RED, YELLOW, PALETTE
from match2.game.events import BoardListener
from match2.game.game_config import BoardFactory

LETTERS = {"R": RED, "G": GREEN, "B": BLUE, "Y": YELLOW, "P": PURPLE, "K": PINK}

TEST_LAYOUTS = {
    "distinct_2x2": ["RG",
                     "BY"],
    "red_column_3x3": ["RBB",
                       "RBB",
                       "RBB"],
    "checkerboard_3x3": ["RGR",
                         "GRG",
                         "RGR"],
    "mixed_4x4": ["RRGB",
                  "RGGB",
                  "GGBB",
                  "BRRG"],
}


def parse_rows(rows: list[str]):
    return [[LETTERS[ch] for ch in row] for row in rows]


def make_board(rows: list[str], colors=PALETTE, seed: int = 0, listener=None,
               tier_a: int = 4, tier_b: int = 6, tier_c: int = 8, rng=None):
    """Build a board of the layout's size and load the layout into it."""
    config = BoardFactory.custom(
        width=len(rows[0]),
        height=len(rows),
        colors=colors,
        tier_a=tier_a,
        tier_b=tier_b,
        tier_c=tier_c,
    )
    board = Board(config, rng=rng or random.Random(seed), listener=listener)
    board.set_colors(parse_rows(rows))
    return board


class RecordingListener(BoardListener):
    """Keeps every notification the board sends."""

    def __init__(self):
        self.batches = []
        self.resolved = 0
        self.unresolvable = 0

    def on_cells_changed(self, changes):
        self.batches.append(changes)

    def on_deadlock_resolved(self):
        self.resolved += 1

    def on_unresolvable(self):
        self.unresolvable += 1

    def clear(self):
        self.batches.clear()
        self.resolved = 0
        self.unresolvable = 0


class ScriptedRandom(random.Random):
    """Random source whose choice() returns scripted values first."""

    def __init__(self, seed: int = 0):
        super().__init__(seed)
        self.script = []

    def choice(self, seq):
        if self.script:
            return self.script.pop(0)
        return super().choice(seq)


def assert_full_board(board: Board):
    """Assert that every cell is occupied and sits at its own coordinates"""
    for x, column in enumerate(board.cells):
        for y, cell in enumerate(column):
            assert cell.coord == (x, y), f"Cell at slot {(x, y)} reports {cell.coord}"
            assert not cell.empty, f"Cell {(x, y)} is empty"
    assert board.occupied_count() == board.width * board.height


def is_connected(group) -> bool:
    cells = set(group)
    if not cells:
        return True
    start = next(iter(cells))
    seen = {start}
    stack = [start]
    while stack:
        x, y = stack.pop()
        for nb in [(x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)]:
            if nb in cells and nb not in seen:
                seen.add(nb)
                stack.append(nb)
    return seen == cells
