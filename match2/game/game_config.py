"""Board configuration system for match2 sessions."""

import os
import random
from dataclasses import dataclass, field, replace

from dotenv import load_dotenv

from match2.game.color import PALETTE, ColorPool, ColorToken


@dataclass(frozen=True)
class BoardConfig:
    """tier_a, tier_b and tier_c are the group sizes at which a group is shown
    with its A, B or C icon. color_count is how many of the available colors a
    session plays with; None keeps all of them."""

    width: int = 8
    height: int = 8
    tier_a: int = 4
    tier_b: int = 6
    tier_c: int = 8
    available_colors: tuple[ColorToken, ...] = field(default=PALETTE[:4])
    color_count: int | None = None

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def num_colors(self) -> int:
        return len(self.available_colors)

    def validate(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Board dimensions must be positive")
        if not 1 <= self.tier_a <= self.tier_b <= self.tier_c:
            raise ValueError(
                f"Tier thresholds must satisfy 1 <= A <= B <= C, got "
                f"A={self.tier_a}, B={self.tier_b}, C={self.tier_c}"
            )
        if not self.available_colors:
            raise ValueError("At least one color must be available")
        if len(set(self.available_colors)) != len(self.available_colors):
            raise ValueError("Available colors must be distinct")
        if self.color_count is not None and not (
            1 <= self.color_count <= len(self.available_colors)
        ):
            raise ValueError(
                f"color_count {self.color_count} must be in range 1 to "
                f"{len(self.available_colors)}"
            )

    def for_session(self, rng: random.Random) -> "BoardConfig":
        """Return the config a single session plays with, colors sampled."""
        if self.color_count is None:
            return self
        colors = ColorPool(self.available_colors).sample(self.color_count, rng)
        return replace(self, available_colors=colors, color_count=None)

    @classmethod
    def from_env(cls) -> "BoardConfig":
        """Create config from environment variables or .env file."""
        load_dotenv()
        defaults = BoardFactory.medium()
        pool = ColorPool.default()

        names = os.getenv("MATCH2_COLORS")
        if names:
            colors = tuple(pool.by_name(n.strip()) for n in names.split(",") if n.strip())
        else:
            colors = defaults.available_colors

        count = os.getenv("MATCH2_COLOR_COUNT")
        config = cls(
            width=int(os.getenv("MATCH2_WIDTH", str(defaults.width))),
            height=int(os.getenv("MATCH2_HEIGHT", str(defaults.height))),
            tier_a=int(os.getenv("MATCH2_TIER_A", str(defaults.tier_a))),
            tier_b=int(os.getenv("MATCH2_TIER_B", str(defaults.tier_b))),
            tier_c=int(os.getenv("MATCH2_TIER_C", str(defaults.tier_c))),
            available_colors=colors,
            color_count=int(count) if count else None,
        )
        config.validate()
        return config


class BoardFactory:

    @staticmethod
    def small() -> BoardConfig:
        config = BoardConfig(width=5, height=5, tier_a=3, tier_b=5, tier_c=7,
                             available_colors=PALETTE[:3])
        config.validate()
        return config

    @staticmethod
    def medium() -> BoardConfig:
        config = BoardConfig(width=8, height=8, tier_a=4, tier_b=6, tier_c=8,
                             available_colors=PALETTE[:4])
        config.validate()
        return config

    @staticmethod
    def large() -> BoardConfig:
        config = BoardConfig(width=10, height=12, tier_a=5, tier_b=8, tier_c=10,
                             available_colors=PALETTE, color_count=5)
        config.validate()
        return config

    @staticmethod
    def default() -> BoardConfig:
        return BoardFactory.medium()

    @staticmethod
    def custom(
        width: int,
        height: int,
        colors: tuple[ColorToken, ...],
        tier_a: int = 4,
        tier_b: int = 6,
        tier_c: int = 8,
        color_count: int | None = None,
    ) -> BoardConfig:
        config = BoardConfig(width=width, height=height, tier_a=tier_a,
                             tier_b=tier_b, tier_c=tier_c,
                             available_colors=tuple(colors),
                             color_count=color_count)
        config.validate()
        return config
