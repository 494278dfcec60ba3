"""
Connected-group search over a board.

Pure functions working on anything exposing `width`, `height` and
`occupant(x, y)`. Adjacency is the four orthogonal neighbours only.
"""

from match2.game.cell import Coord
from match2.game.errors import InvalidCoordinate

# left, right, down, up
DIRECTIONS = [(-1, 0), (1, 0), (0, -1), (0, 1)]


def in_bounds(board, x: int, y: int) -> bool:
    return 0 <= x < board.width and 0 <= y < board.height


def find_group(board, start: Coord) -> list[Coord]:
    """
    Find the maximal same-colored 4-connected region containing `start`.

    Cells are returned in the order they are popped from the stack seeded
    with `start`, so `start` always comes first. An empty start cell gives
    an empty list.

    Raises:
        InvalidCoordinate: if `start` lies outside the board
    """
    x, y = start
    if not in_bounds(board, x, y):
        raise InvalidCoordinate(start, board.width, board.height)

    color = board.occupant(x, y)
    if color is None:
        return []

    group = []
    visited = {(x, y)}
    stack = [(x, y)]

    while stack:
        cx, cy = stack.pop()
        group.append((cx, cy))

        for dx, dy in DIRECTIONS:
            nx, ny = cx + dx, cy + dy
            if ((nx, ny) not in visited
                    and in_bounds(board, nx, ny)
                    and board.occupant(nx, ny) == color):
                visited.add((nx, ny))
                stack.append((nx, ny))

    return group


def find_groups(board) -> list[list[Coord]]:
    """Partition every occupied cell into groups, scanning x then y."""
    seen = set()
    groups = []

    for x in range(board.width):
        for y in range(board.height):
            if (x, y) in seen or board.occupant(x, y) is None:
                continue
            group = find_group(board, (x, y))
            seen.update(group)
            groups.append(group)

    return groups


def has_any_move(board) -> bool:
    """
    Check whether any two orthogonally adjacent cells share a color.

    Only the right and upward neighbours are compared; the left and
    downward pairs are covered when their other cell is scanned.
    """
    for x in range(board.width):
        for y in range(board.height):
            color = board.occupant(x, y)
            if color is None:
                continue

            if x < board.width - 1 and board.occupant(x + 1, y) == color:
                return True

            if y < board.height - 1 and board.occupant(x, y + 1) == color:
                return True

    return False
