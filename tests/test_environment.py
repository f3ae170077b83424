"""
Tests for the game session.

Tests cover session state, seeded reproducibility, accepted and ignored moves, win and game over
flags, and the outcome handed to the reward application.
"""

from unittest import TestCase, main

import numpy as np

from tilemerge.config import GameConfig
from tilemerge.core.gameboard import Grid, move
from tilemerge.core.gamemove import Direction, legal_actions
from tilemerge.envs.session import GameSession
from tilemerge.errors import InvalidConfiguration


class FixedGenerator:
    """Random source always picking the first empty cell and spawning a 2."""

    def integers(self, high):
        return 0

    def random(self):
        return 0.0


class TestSessionInterface(TestCase):
    """Test GameSession API and state management."""

    def setUp(self):
        """Initialize fresh session before each test."""
        self.env = GameSession(GameConfig(seed=42))

    def test_reset_state_initialization(self):
        """Reset initializes grid with exactly 2 tiles and zero score."""
        grid = self.env.reset()

        # ##>: Exactly 2 tiles after reset.
        self.assertEqual(len(grid.tiles), 2)

        # ##>: Tiles are only 2 or 4.
        self.assertTrue(all(tile.value in (2, 4) for tile in grid.tiles))

        # ##>: Counters reset, highest tile tracks the grid.
        self.assertEqual(self.env.score, 0)
        self.assertEqual(self.env.moves, 0)
        self.assertEqual(self.env.highest_tile, max(tile.value for tile in grid.tiles))

        # ##>: Game not finished after reset.
        self.assertFalse(self.env.is_over)
        self.assertFalse(self.env.has_won)

    def test_reset_seed_reproducibility(self):
        """Same seed produces identical initial grid."""
        grid1 = self.env.reset(seed=42)
        grid2 = self.env.reset(seed=42)
        self.assertEqual(grid1, grid2)

    def test_replay_same_seed(self):
        """Same seed and same moves produce the same game."""
        first = GameSession(GameConfig(seed=9))
        second = GameSession(GameConfig(seed=9))
        for direction in [Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN] * 10:
            first.step(direction)
            second.step(direction)
        self.assertEqual(first.grid, second.grid)
        self.assertEqual(first.score, second.score)
        self.assertEqual(first.moves, second.moves)

    def test_step_return_signature(self):
        """Step returns tuple of (grid, reward, changed)."""
        grid, reward, changed = self.env.step(Direction.LEFT)
        self.assertIsInstance(grid, Grid)
        self.assertIsInstance(reward, int)
        self.assertIsInstance(changed, bool)

    def test_render(self):
        """Render shows values and dots for empty cells."""
        self.env._grid = Grid.from_array([[2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 16]])
        lines = self.env.render().splitlines()
        self.assertEqual(len(lines), 4)
        self.assertEqual(lines[0].split(), ['2', '.', '.', '.'])
        self.assertEqual(lines[3].split(), ['.', '.', '.', '16'])

    def test_invalid_config(self):
        """Grids of side 1 are rejected at construction."""
        with self.assertRaises(InvalidConfiguration):
            GameSession(GameConfig(size=1))


class TestMoveValidation(TestCase):
    """Test accepted and ignored moves."""

    def setUp(self):
        self.env = GameSession(rng=FixedGenerator())

    def test_invalid_move_no_state_change(self):
        """Ineffective move leaves grid unchanged, spawns no tile and is not counted."""
        self.env._grid = Grid.from_array([[2, 0, 0, 0], [4, 0, 0, 0], [8, 0, 0, 0], [16, 0, 0, 0]])
        original = self.env.grid

        grid, reward, changed = self.env.step(Direction.LEFT)

        self.assertFalse(changed)
        self.assertEqual(reward, 0)
        self.assertIs(grid, original)
        self.assertEqual(self.env.moves, 0)

    def test_valid_move_spawns_exactly_one_tile(self):
        """Valid move merges then spawns exactly one tile."""
        self.env._grid = Grid.from_array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])

        grid, reward, changed = self.env.step(Direction.LEFT)

        self.assertTrue(changed)
        self.assertEqual(reward, 4)
        self.assertEqual(self.env.score, 4)
        self.assertEqual(self.env.moves, 1)

        # ##>: Merged 4 stays at the edge, the spawn takes the first empty cell.
        np.testing.assert_array_equal(grid.to_array()[0], [4, 2, 0, 0])
        self.assertEqual(len(grid.tiles), 2)

    def test_tile_count_grows_by_one(self):
        """Each accepted move adds exactly one tile to the grid produced by the move."""
        env = GameSession(GameConfig(seed=3))
        for _ in range(200):
            if env.is_over:
                break
            direction = legal_actions(env.grid)[0]
            moved = move(env.grid, direction).grid
            grid, _, changed = env.step(direction)
            self.assertTrue(changed)
            self.assertEqual(len(grid.tiles), len(moved.tiles) + 1)

    def test_score_and_highest_never_decrease(self):
        """Score and highest tile are monotonic over a game."""
        env = GameSession(GameConfig(seed=21))
        generator = np.random.default_rng(21)
        score, highest = env.score, env.highest_tile
        for _ in range(300):
            env.step(Direction(int(generator.integers(4))))
            self.assertGreaterEqual(env.score, score)
            self.assertGreaterEqual(env.highest_tile, highest)
            self.assertEqual(env.highest_tile, max(highest, max(tile.value for tile in env.grid.tiles)))
            score, highest = env.score, env.highest_tile


class TestTerminalFlags(TestCase):
    """Test win and game over handling."""

    def test_win_does_not_freeze(self):
        """Reaching the threshold flags a win and play continues."""
        env = GameSession(GameConfig(win_threshold=8), rng=FixedGenerator())
        env._grid = Grid.from_array([[4, 4, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])

        env.step(Direction.LEFT)

        self.assertTrue(env.has_won)
        self.assertFalse(env.is_over)
        self.assertTrue(env.is_ended)

        env.continue_after_win()
        self.assertFalse(env.is_ended)

        _, _, changed = env.step(Direction.RIGHT)
        self.assertTrue(changed)
        self.assertTrue(env.has_won)

    def test_game_over_freezes(self):
        """A move filling the grid with no pairs ends the game, later moves are ignored."""
        env = GameSession(rng=FixedGenerator())
        env._grid = Grid.from_array([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [0, 8, 16, 32]])

        grid, _, changed = env.step(Direction.LEFT)

        self.assertTrue(changed)
        np.testing.assert_array_equal(grid.to_array()[3], [8, 16, 32, 2])
        self.assertTrue(env.is_over)
        self.assertTrue(env.is_ended)

        moves = env.moves
        for direction in Direction:
            _, reward, changed = env.step(direction)
            self.assertFalse(changed)
            self.assertEqual(reward, 0)
        self.assertEqual(env.moves, moves)

    def test_win_and_game_over_on_same_move(self):
        """A move reaching the threshold and leaving no legal move raises both flags."""
        env = GameSession(GameConfig(win_threshold=64), rng=FixedGenerator())
        env._grid = Grid.from_array([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [8, 32, 32, 16]])

        grid, reward, changed = env.step(Direction.LEFT)

        # ##>: 32 + 32 merge into 64, the spawn fills the freed cell with a 2.
        self.assertTrue(changed)
        self.assertEqual(reward, 64)
        np.testing.assert_array_equal(grid.to_array()[3], [8, 64, 16, 2])
        self.assertTrue(grid.is_full)

        self.assertTrue(env.has_won)
        self.assertTrue(env.is_over)
        self.assertEqual(env.highest_tile, 64)

        # ##>: Keeping on playing does not reopen a finished game.
        env.continue_after_win()
        self.assertTrue(env.is_ended)

    def test_outcome(self):
        """Outcome carries plain values and the reward tier."""
        env = GameSession(rng=FixedGenerator())
        env._grid = Grid.from_array([[512, 512, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        env.step(Direction.LEFT)

        outcome = env.outcome()
        self.assertEqual(outcome.score, 1024)
        self.assertEqual(outcome.highest_tile, 1024)
        self.assertEqual(outcome.moves, 1)
        self.assertEqual(outcome.tier.name, 'Strategic Genius')


if __name__ == '__main__':
    main()
