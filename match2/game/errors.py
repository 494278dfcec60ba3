"""Error types raised by the board engine."""


class Match2Error(Exception):
    pass


class InvalidCoordinate(Match2Error, IndexError):
    """A coordinate outside the board was passed in."""

    def __init__(self, coord, width: int, height: int):
        self.coord = coord
        super().__init__(
            f"Coordinate {coord} outside board of size {width}x{height}"
        )


class InvalidState(Match2Error, RuntimeError):
    """An operation's precondition on the board contents does not hold."""


class Unresolvable(Match2Error):
    """The board is too small for a deadlock to ever be repaired."""
