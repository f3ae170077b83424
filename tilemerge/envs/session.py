"""Game session wrapping the merge engine with score, win and game over tracking."""

import logging
from typing import NamedTuple

from numpy.random import Generator, default_rng

from tilemerge.config import GameConfig
from tilemerge.core.gameboard import Grid, highest_tile, initialize, is_game_over, move, spawn_tile
from tilemerge.core.gamemove import Direction
from tilemerge.utils.rewards import RewardTier, reward_tier

logger = logging.getLogger(__name__)


class StepResult(NamedTuple):
    """Outcome of one player input."""

    grid: Grid
    reward: int
    changed: bool


class SessionOutcome(NamedTuple):
    """Plain values handed to the reward application when a session ends."""

    score: int
    highest_tile: int
    moves: int
    tier: RewardTier


class GameSession:
    """
    One game of the merge engine.

    The session owns its grid exclusively. It is frozen once no move is possible; reaching the win
    threshold only raises ``has_won`` and play may go on.
    """

    # ##: All Actions.
    ACTIONS = {'left': Direction.LEFT, 'up': Direction.UP, 'right': Direction.RIGHT, 'down': Direction.DOWN}

    def __init__(self, config: GameConfig | None = None, rng: Generator | None = None):
        """
        Initialize the session and spawn the first tiles.

        Parameters
        ----------
        config : GameConfig, optional
            Grid size, win threshold and spawn settings (defaults to a 4x4 grid won at 2048).
        rng : Generator, optional
            Random source for spawns. When omitted, one is built from ``config.seed``.
        """
        self.config = config or GameConfig()
        self._rng = rng if rng is not None else default_rng(self.config.seed)

        self._grid: Grid | None = None
        self.score = 0
        self.highest_tile = 0
        self.moves = 0
        self.has_won = False
        self.is_over = False
        self.keep_playing = False

        self.reset()

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def is_ended(self) -> bool:
        """True when the game is over, or won without the player choosing to keep playing."""
        return self.is_over or (self.has_won and not self.keep_playing)

    def reset(self, seed: int | None = None) -> Grid:
        """
        Start a new game on an empty grid with the initial tiles.

        Parameters
        ----------
        seed : int, optional
            Reseed the random source so the game can be replayed exactly.

        Returns
        -------
        Grid
            The new grid.
        """
        if seed is not None:
            self._rng = default_rng(seed)

        self._grid = initialize(rng=self._rng, config=self.config)
        self.score = 0
        self.moves = 0
        self.highest_tile = highest_tile(self._grid)
        self.has_won = self.highest_tile >= self.config.win_threshold
        self.is_over = is_game_over(self._grid)
        self.keep_playing = False

        logger.info('New %dx%d game started', self.size, self.size)
        return self._grid

    def step(self, direction: Direction) -> StepResult:
        """
        Apply the player's move.

        Parameters
        ----------
        direction : Direction
            Direction of the move.

        Returns
        -------
        StepResult
            The grid after the move and spawn, the score gained, and whether the move was accepted.

        Notes
        -----
        - A move that neither slides nor merges anything spawns no tile and does not count as a turn.
        - Once the game is over every move is ignored.
        """
        direction = Direction(direction)
        if self.is_over:
            logger.debug('Ignored %s: the game is over', direction.name)
            return StepResult(grid=self._grid, reward=0, changed=False)

        result = move(self._grid, direction)
        if not result.changed:
            logger.debug('Ignored %s: nothing can slide or merge', direction.name)
            return StepResult(grid=self._grid, reward=0, changed=False)

        self._grid, _ = spawn_tile(result.grid, rng=self._rng, config=self.config)
        self.score += result.score
        self.moves += 1
        self.highest_tile = max(self.highest_tile, highest_tile(self._grid))

        if not self.has_won and self.highest_tile >= self.config.win_threshold:
            self.has_won = True
            logger.info('Reached %d after %d moves, score %d', self.highest_tile, self.moves, self.score)

        self.is_over = is_game_over(self._grid)
        if self.is_over:
            logger.info('Game over after %d moves, score %d, highest tile %d', self.moves, self.score, self.highest_tile)

        return StepResult(grid=self._grid, reward=result.score, changed=True)

    def continue_after_win(self) -> None:
        """Keep the session open after the win threshold has been reached."""
        self.keep_playing = True

    def outcome(self) -> SessionOutcome:
        """Final values of the session, with the reward tier they grant."""
        return SessionOutcome(
            score=self.score,
            highest_tile=self.highest_tile,
            moves=self.moves,
            tier=reward_tier(self.highest_tile),
        )

    def render(self) -> str:
        """Render the grid as text, one row per line, dots for empty cells."""
        width = max(4, len(str(self.highest_tile)))
        rows = []
        for row in self._grid.to_array().tolist():
            rows.append(' '.join(f'{value if value else ".":>{width}}' for value in row))
        return '\n'.join(rows)
