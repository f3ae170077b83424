# -*- coding: utf-8 -*-
"""
Helpers around the engine: reward tiers looked up from the highest tile, and snapshot diffs.
"""

from .diff import TileChanges, tile_changes
from .rewards import REWARD_TIERS, RewardTier, reward_tier

__all__ = ["REWARD_TIERS", "RewardTier", "reward_tier", "TileChanges", "tile_changes"]
