from match2.game.color import ColorToken

Coord = tuple[int, int]


class Cell:
    """A grid slot. Coordinates are fixed at creation; only the Board
    changes the occupant."""

    __slots__ = ("_x", "_y", "_occupant")

    def __init__(self, x: int, y: int, occupant: ColorToken | None = None):
        self._x = x
        self._y = y
        self._occupant = occupant

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    @property
    def coord(self) -> Coord:
        return (self._x, self._y)

    @property
    def occupant(self) -> ColorToken | None:
        return self._occupant

    @property
    def empty(self) -> bool:
        return self._occupant is None

    def __repr__(self) -> str:
        return f"Cell({self._x}, {self._y}, {self._occupant})"
