"""
Match-2 board engine.

Connected-group removal, gravity compaction with respawn and
deadlock recovery for a tile puzzle board.
"""

from .game.board import Board
from .game.game import Game
from .game.game_config import BoardConfig, BoardFactory

__all__ = [
    'Board',
    'BoardConfig',
    'BoardFactory',
    'Game',
]
