# -*- coding: utf-8 -*-
"""
Grid merge engine: immutable grid state, directional moves that slide and merge equal tiles,
seedable tile spawning and terminal state detection.
"""

from .gameboard import (
    Grid,
    MoveResult,
    Tile,
    highest_tile,
    initialize,
    is_game_over,
    move,
    spawn_tile,
)
from .gamemove import Direction, can_move, illegal_actions, legal_actions, legal_actions_mask

__all__ = [
    "Direction",
    "Grid",
    "MoveResult",
    "Tile",
    "initialize",
    "spawn_tile",
    "move",
    "is_game_over",
    "highest_tile",
    "legal_actions",
    "illegal_actions",
    "legal_actions_mask",
    "can_move",
]
