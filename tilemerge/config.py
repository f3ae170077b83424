"""
Configuration for a tile merge game session.
"""

from dataclasses import dataclass

from tilemerge.errors import InvalidConfiguration

# ##>: Tile spawn probabilities (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}


@dataclass
class GameConfig:
    """
    Configuration for a game session.

    Attributes
    ----------
    size : int
        Side of the square grid, must be greater than 1.
    win_threshold : int
        Tile value that flags the session as won.
    initial_tiles : int
        Number of tiles spawned when the grid is created.
    two_probability : float
        Probability that a spawned tile is a 2 rather than a 4.
    seed : int, optional
        Seed of the random generator built by the session.
    """

    size: int = 4
    win_threshold: int = 2048
    initial_tiles: int = 2
    two_probability: float = TILE_SPAWN_PROBS[2]
    seed: int | None = None

    def __post_init__(self):
        if self.size <= 1:
            raise InvalidConfiguration(f'Grid size must be greater than 1, got {self.size}')
        if not 0.0 <= self.two_probability <= 1.0:
            raise InvalidConfiguration(f'two_probability must be within [0, 1], got {self.two_probability}')
        if self.win_threshold < 2 or self.win_threshold & (self.win_threshold - 1):
            raise InvalidConfiguration(f'win_threshold must be a power of two, got {self.win_threshold}')
        if not 0 <= self.initial_tiles <= self.size**2:
            raise InvalidConfiguration(f'initial_tiles must be within [0, {self.size ** 2}], got {self.initial_tiles}')
