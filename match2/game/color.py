"""Color tokens and the pool sessions draw their colors from."""

import random
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ColorToken:
    """Identifies a color category. Only the name takes part in equality."""

    name: str
    rgb: tuple[int, int, int] = field(default=(0, 0, 0), compare=False)

    def __str__(self) -> str:
        return self.name


RED = ColorToken("red", (252, 15, 15))
GREEN = ColorToken("green", (17, 181, 11))
BLUE = ColorToken("blue", (11, 51, 181))
YELLOW = ColorToken("yellow", (252, 197, 15))
PURPLE = ColorToken("purple", (122, 11, 181))
PINK = ColorToken("pink", (240, 110, 190))

PALETTE = (RED, GREEN, BLUE, YELLOW, PURPLE, PINK)


class ColorPool:
    """Ordered collection of colors a session samples from."""

    def __init__(self, colors):
        self.colors = tuple(colors)
        if not self.colors:
            raise ValueError("Color pool must not be empty")
        if len(set(self.colors)) != len(self.colors):
            raise ValueError("Color pool contains duplicate colors")

    @staticmethod
    def default() -> "ColorPool":
        return ColorPool(PALETTE)

    def __len__(self) -> int:
        return len(self.colors)

    def __contains__(self, color) -> bool:
        return color in self.colors

    def by_name(self, name: str) -> ColorToken:
        for color in self.colors:
            if color.name == name:
                return color
        raise ValueError(
            f"Unknown color {name!r}, available: {[c.name for c in self.colors]}"
        )

    def sample(self, count: int, rng: random.Random) -> tuple[ColorToken, ...]:
        """Draw `count` distinct colors, keeping the pool's order."""
        if not 1 <= count <= len(self.colors):
            raise ValueError(
                f"Cannot sample {count} colors from a pool of {len(self.colors)}"
            )
        picked = set(rng.sample(range(len(self.colors)), count))
        return tuple(c for i, c in enumerate(self.colors) if i in picked)
