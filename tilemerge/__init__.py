"""Sliding tile merge game engine (2048) with seedable spawns and reward tiers."""

from tilemerge.config import GameConfig
from tilemerge.core import Direction, Grid, Tile, highest_tile, initialize, is_game_over, move, spawn_tile
from tilemerge.envs import GameSession
from tilemerge.errors import InvalidConfiguration
from tilemerge.utils import reward_tier, tile_changes

__all__ = [
    "Direction",
    "GameConfig",
    "GameSession",
    "Grid",
    "InvalidConfiguration",
    "Tile",
    "highest_tile",
    "initialize",
    "is_game_over",
    "move",
    "reward_tier",
    "spawn_tile",
    "tile_changes",
]
