from enum import Enum

from match2.game.cell import Coord
from match2.game.group_finder import find_groups


class Tier(Enum):
    BASE = 0
    A = 1
    B = 2
    C = 3


def tier_for_size(group_size: int, config) -> Tier:
    """Highest tier whose threshold does not exceed the group size."""
    if group_size >= config.tier_c:
        return Tier.C
    if group_size >= config.tier_b:
        return Tier.B
    if group_size >= config.tier_a:
        return Tier.A
    return Tier.BASE


def compute_tiers(board) -> dict[Coord, Tier]:
    tiers = {}
    for group in find_groups(board):
        tier = tier_for_size(len(group), board.config)
        for coord in group:
            tiers[coord] = tier
    return tiers
