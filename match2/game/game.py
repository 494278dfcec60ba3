import logging
import random
from collections import deque

import numpy as np

from match2.game.board import Board
from match2.game.events import BoardListener, Outcome, OutcomeKind
from match2.game.game_config import BoardConfig, BoardFactory

logger = logging.getLogger(__name__)


class Game:
    """
    One play session: samples the session colors, owns the random source
    and forwards clicks to the board.

    Clicks arrive either directly through on_cell_clicked or through the
    queue (queue_click / process_pending), which applies them strictly in
    arrival order.
    """

    def __init__(
        self,
        config: BoardConfig | None = None,
        seed: int | None = None,
        listener: BoardListener | None = None,
    ):
        if config is None:
            config = BoardFactory.default()

        self.config = config
        self.rng = random.Random(seed)
        self.session_config = config.for_session(self.rng)
        self.board = Board(self.session_config, rng=self.rng, listener=listener)

        self.moves = 0
        self.cleared = 0
        self.reshuffles = 0
        self._pending: deque[tuple[int, int]] = deque()

    @property
    def colors(self):
        return self.session_config.available_colors

    def get_board(self):
        """Copy of the occupants as a list of columns, bottom row first."""
        return self.board.get_colors()

    def on_cell_clicked(self, x: int, y: int) -> Outcome:
        outcome = self.board.click_cell((x, y))

        if outcome.kind is OutcomeKind.INVALID_COORDINATE:
            logger.debug("Ignoring click outside the board at (%d, %d)", x, y)
        elif outcome.matched:
            self.moves += 1
            self.cleared += len(outcome.removed)
            if outcome.resolved:
                self.reshuffles += 1

        return outcome

    def queue_click(self, x: int, y: int):
        self._pending.append((x, y))

    def process_pending(self) -> list[Outcome]:
        outcomes = []
        while self._pending:
            x, y = self._pending.popleft()
            outcomes.append(self.on_cell_clicked(x, y))
        return outcomes

    def observation(self) -> np.ndarray:
        """One-hot color layers of shape (num_colors, height, width), top row first."""
        array = self.board.to_array()
        layers = [(array == i) for i in range(len(self.colors))]
        return np.array(layers, dtype=np.float32)
