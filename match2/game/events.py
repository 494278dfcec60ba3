"""
Output types the engine hands to its presentation layer.

A BoardListener is passed to the Board explicitly; there is no global
event bus. Every mutating operation reports the cells it touched as
CellChange records.
"""

from dataclasses import dataclass, field
from enum import Enum

from match2.game.cell import Coord
from match2.game.color import ColorToken
from match2.game.tiers import Tier


@dataclass(frozen=True)
class CellChange:
    """New contents of one cell.

    source_y is the row the occupant came from when it moved during
    compaction, or its entry row above the board when it was spawned.
    It is None when the occupant did not move.
    """

    coord: Coord
    color: ColorToken | None
    tier: Tier | None
    source_y: int | None = None


@dataclass(frozen=True)
class CellMove:
    x: int
    from_y: int
    to_y: int
    color: ColorToken
    spawned: bool = False


class OutcomeKind(Enum):
    INVALID_COORDINATE = "invalid_coordinate"
    NO_OP = "no_op"
    NO_MATCH = "no_match"
    MATCHED = "matched"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    removed: list[Coord] = field(default_factory=list)
    moves: list[CellMove] = field(default_factory=list)
    resolved: bool = False

    @property
    def matched(self) -> bool:
        return self.kind is OutcomeKind.MATCHED


class BoardListener:
    """Receives board updates. Subclasses override what they need."""

    def on_cells_changed(self, changes: list[CellChange]) -> None:
        pass

    def on_deadlock_resolved(self) -> None:
        pass

    def on_unresolvable(self) -> None:
        pass


class NullListener(BoardListener):
    pass
