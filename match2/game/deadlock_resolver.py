"""
Deadlock recovery by reshuffling the colors already on the board.

The resolver never mutates the board itself. It returns the arrangement
the board should take, and the Board writes it back through its own
mutation path.
"""

import logging
import random
from dataclasses import dataclass

from match2.game.cell import Coord
from match2.game.color import ColorToken
from match2.game.errors import Unresolvable
from match2.game.group_finder import has_any_move

logger = logging.getLogger(__name__)


@dataclass
class ResolveReport:
    arrangement: dict[Coord, ColorToken]
    patched: bool = False


class _Arrangement:
    """Read-only board view over a coordinate -> color mapping."""

    def __init__(self, width: int, height: int, colors: dict[Coord, ColorToken]):
        self.width = width
        self.height = height
        self.colors = colors

    def occupant(self, x: int, y: int) -> ColorToken | None:
        return self.colors.get((x, y))


def shuffle(colors: list, rng: random.Random) -> list:
    """Fisher-Yates shuffle into a new list."""
    result = list(colors)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def resolve(board, rng: random.Random) -> ResolveReport:
    """
    Produce a playable arrangement of the board's current colors.

    Shuffles once. If the shuffle is still deadlocked, the color at (0, 0)
    is copied onto (0, 1), which always creates a vertical pair. This is
    sufficient for any board at least two rows tall but is not a general
    search for a playable permutation.

    Raises:
        Unresolvable: if the board has fewer than two rows, or no move
            exists even after the patch
    """
    # column-major scan: x first, then y
    positions = [
        (x, y)
        for x in range(board.width)
        for y in range(board.height)
        if board.occupant(x, y) is not None
    ]
    colors = [board.occupant(x, y) for x, y in positions]

    shuffled = shuffle(colors, rng)
    view = _Arrangement(board.width, board.height, dict(zip(positions, shuffled)))

    if has_any_move(view):
        logger.debug("Shuffle produced a playable board")
        return ResolveReport(arrangement=view.colors)

    if board.height < 2:
        logger.error("Board with %d row(s) cannot be repaired", board.height)
        raise Unresolvable(
            f"Board of size {board.width}x{board.height} has no move after "
            f"shuffling and is too short to patch"
        )

    base = view.colors.get((0, 0))
    if base is None or (0, 1) not in view.colors:
        logger.error("Cells (0, 0) and (0, 1) are not both occupied")
        raise Unresolvable("Cannot patch a board whose first column is empty")

    logger.warning("Shuffle left the board deadlocked, copying %s onto (0, 1)", base)
    view.colors[(0, 1)] = base

    if not has_any_move(view):
        logger.error("Board still has no move after patching")
        raise Unresolvable("No move could be created on the board")

    return ResolveReport(arrangement=view.colors, patched=True)
