import logging
import random

import numpy as np

from match2.game.cell import Cell, Coord
from match2.game.color import ColorToken
from match2.game.deadlock_resolver import ResolveReport, resolve
from match2.game.errors import InvalidCoordinate, InvalidState, Unresolvable
from match2.game.events import (
    BoardListener,
    CellChange,
    CellMove,
    NullListener,
    Outcome,
    OutcomeKind,
)
from match2.game.game_config import BoardConfig
from match2.game.group_finder import find_group, has_any_move, in_bounds
from match2.game.tiers import Tier, compute_tiers

logger = logging.getLogger(__name__)


class Board:
    """
    Owns the grid of cells for one session.

    Cells are indexed as cells[x][y] with row 0 at the bottom; gravity pulls
    toward lower y. Cells never move: compaction moves occupants between
    cells, so a cell's coordinates always match its slot in the grid.

    Every mutation is reported to the listener as a list of CellChange.
    Between public operations the board is always completely filled.
    """

    def __init__(
        self,
        config: BoardConfig,
        rng: random.Random | None = None,
        listener: BoardListener | None = None,
    ):
        config.validate()
        # a single row cannot be patched; only one color on 2+ cells never deadlocks
        if config.height < 2 and (config.num_colors > 1 or config.total_cells < 2):
            raise Unresolvable(
                f"Board of size {config.width}x{config.height} with "
                f"{config.num_colors} color(s) cannot guarantee a move"
            )

        self.config = config
        self.width = config.width
        self.height = config.height
        self.rng = rng if rng is not None else random.Random()
        self.listener = listener if listener is not None else NullListener()
        self.cells = self.create_cells()

        if self.has_any_move():
            self._emit(self.refresh())
        else:
            logger.info("New board has no move, reshuffling before play")
            self.resolve_deadlock()

    def create_cells(self) -> list[list[Cell]]:
        return [[Cell(x, y, self._spawn_color())
                 for y in range(self.height)]
                for x in range(self.width)]

    def _spawn_color(self) -> ColorToken:
        return self.rng.choice(self.config.available_colors)

    def _put(self, x: int, y: int, color: ColorToken | None):
        self.cells[x][y]._occupant = color

    def _emit(self, changes: list[CellChange]):
        if changes:
            self.listener.on_cells_changed(changes)

    def _check(self, coord: Coord):
        if not in_bounds(self, coord[0], coord[1]):
            raise InvalidCoordinate(coord, self.width, self.height)

    # --- queries ---

    def cell(self, coord: Coord) -> Cell:
        self._check(coord)
        return self.cells[coord[0]][coord[1]]

    def occupant(self, x: int, y: int) -> ColorToken | None:
        self._check((x, y))
        return self.cells[x][y].occupant

    def occupied_count(self) -> int:
        return sum(1 for column in self.cells for cell in column if not cell.empty)

    def get_group(self, coord: Coord) -> list[Coord]:
        """Connected group at `coord`, in discovery order."""
        return find_group(self, coord)

    def has_any_move(self) -> bool:
        return has_any_move(self)

    def tiers(self) -> dict[Coord, Tier]:
        return compute_tiers(self)

    def get_colors(self) -> list[list[ColorToken | None]]:
        """Copy of the occupants as a list of columns, bottom row first."""
        return [[cell.occupant for cell in column] for column in self.cells]

    def set_colors(self, rows: list[list[ColorToken]]):
        """
        Load a layout given as rows, top row first.

        Intended for setting up known positions. The layout is taken as is;
        a deadlocked layout is not reshuffled.
        """
        if len(rows) != self.height:
            raise ValueError(
                f"Board row count {len(rows)} does not match expected {self.height}"
            )
        if any(len(row) != self.width for row in rows):
            raise ValueError("All board rows must match expected number of columns.")

        for row in rows:
            for color in row:
                if color not in self.config.available_colors:
                    raise ValueError(
                        f"Invalid color {color!r}, must be one of "
                        f"{[c.name for c in self.config.available_colors]}"
                    )

        for i, row in enumerate(rows):
            y = self.height - 1 - i
            for x, color in enumerate(row):
                self._put(x, y, color)

        self._emit(self.refresh())

    def refresh(self, moves: list[CellMove] = ()) -> list[CellChange]:
        """Full visual update: color, tier and origin row of every cell."""
        tiers = self.tiers()
        sources = {(move.x, move.to_y): move.from_y for move in moves}
        return [
            CellChange(
                coord=cell.coord,
                color=cell.occupant,
                tier=tiers.get(cell.coord),
                source_y=sources.get(cell.coord),
            )
            for column in self.cells
            for cell in column
        ]

    # --- mutations ---

    def remove_group(self, coords):
        """
        Empty every listed cell. Does not compact or spawn. The listener gets
        a full refresh, since removing part of a group changes the tier of
        what is left.

        Raises:
            InvalidState: if any coordinate is off the board or already empty;
                nothing is cleared in that case
        """
        coords = list(dict.fromkeys(coords))
        for coord in coords:
            if not in_bounds(self, coord[0], coord[1]):
                raise InvalidState(f"Cannot remove {coord}: outside the board")
            if self.cells[coord[0]][coord[1]].empty:
                raise InvalidState(f"Cannot remove {coord}: cell is already empty")

        for x, y in coords:
            self._put(x, y, None)

        logger.debug("Removed %d cells", len(coords))
        self._emit(self.refresh())

    def compact_column(self, x: int) -> list[CellMove]:
        """
        Drop the occupants of column `x` to the bottom, keeping their order,
        and fill the rows above with new random colors.

        Spawned cells report an entry row of height + k, k counting the
        spawns in this column from zero, so they arrive in row order.
        """
        if not 0 <= x < self.width:
            raise InvalidCoordinate((x, 0), self.width, self.height)

        moves = self._compact_column(x)
        if moves:
            self._emit(self.refresh(moves))
        return moves

    def _compact_column(self, x: int) -> list[CellMove]:
        column = self.cells[x]
        moves = []
        write_y = 0

        for y in range(self.height):
            color = column[y].occupant
            if color is None:
                continue
            if y != write_y:
                self._put(x, write_y, color)
                self._put(x, y, None)
                moves.append(CellMove(x=x, from_y=y, to_y=write_y, color=color))
            write_y += 1

        for k, y in enumerate(range(write_y, self.height)):
            color = self._spawn_color()
            self._put(x, y, color)
            moves.append(CellMove(x=x, from_y=self.height + k, to_y=y,
                                  color=color, spawned=True))

        return moves

    def compact_all(self) -> list[CellMove]:
        moves = []
        for x in range(self.width):
            moves.extend(self._compact_column(x))

        spawned = sum(1 for move in moves if move.spawned)
        logger.debug("Compacted board: %d moved, %d spawned", len(moves) - spawned, spawned)
        self._emit(self.refresh(moves))
        return moves

    def resolve_deadlock(self) -> ResolveReport:
        """
        Reshuffle the board into a playable arrangement.

        Raises:
            Unresolvable: the board is left untouched and the listener is
                told before the error propagates
        """
        try:
            report = resolve(self, self.rng)
        except Unresolvable:
            self.listener.on_unresolvable()
            raise

        for (x, y), color in report.arrangement.items():
            self._put(x, y, color)

        logger.info("Deadlock resolved%s", " with patch" if report.patched else "")
        self._emit(self.refresh())
        self.listener.on_deadlock_resolved()
        return report

    def click_cell(self, coord: Coord) -> Outcome:
        """Remove the group at `coord` if it has at least two cells."""
        if not in_bounds(self, coord[0], coord[1]):
            return Outcome(OutcomeKind.INVALID_COORDINATE)
        if self.cells[coord[0]][coord[1]].empty:
            return Outcome(OutcomeKind.NO_OP)

        group = self.get_group(coord)
        if len(group) < 2:
            return Outcome(OutcomeKind.NO_MATCH)

        self.remove_group(group)
        moves = self.compact_all()

        resolved = False
        if not self.has_any_move():
            logger.info("Deadlock detected after removing %d cells, reshuffling", len(group))
            self.resolve_deadlock()
            resolved = True

        return Outcome(OutcomeKind.MATCHED, removed=group, moves=moves, resolved=resolved)

    # --- views ---

    def to_array(self) -> np.ndarray:
        """Color indices as a (height, width) matrix, top row first, -1 for empty."""
        index = {color: i for i, color in enumerate(self.config.available_colors)}
        array = np.full((self.height, self.width), -1, dtype=int)
        for x, column in enumerate(self.cells):
            for y, cell in enumerate(column):
                if not cell.empty:
                    array[self.height - 1 - y, x] = index[cell.occupant]
        return array

    def __str__(self) -> str:
        return "\n".join(
            " ".join(str(v) if v != -1 else "." for v in row)
            for row in self.to_array()
        )
