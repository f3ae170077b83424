"""
Core functionality of the tile merge engine: grid state, directional moves, tile spawning and
terminal state detection.
"""

from dataclasses import dataclass, replace
from typing import NamedTuple

from numpy import asarray, int64, ndarray, zeros
from numpy.random import PCG64DXSM, Generator, default_rng

from tilemerge.config import TILE_SPAWN_PROBS, GameConfig
from tilemerge.core.gamemove import Direction, can_move
from tilemerge.errors import InvalidConfiguration

# ##>: Module-level generator used when the caller does not inject one.
_GENERATOR = default_rng(PCG64DXSM())


@dataclass(frozen=True)
class Tile:
    """
    A positioned value on the grid.

    The ``id`` is owned by the grid: it survives slides, and the absorbing tile of a merge
    keeps its own ``id`` while the absorbed one disappears.
    """

    id: int
    value: int
    row: int
    col: int

    @property
    def position(self) -> tuple[int, int]:
        return self.row, self.col


@dataclass(frozen=True, eq=False)
class Grid:
    """
    Immutable N×N grid of tiles.

    Two grids are equal when they share size, ``next_id`` and the same set of tiles, whatever the
    order of ``tiles``: ``move`` regroups tiles line by line.

    Parameters
    ----------
    size : int
        Side of the grid, must be greater than 1.
    tiles : tuple[Tile, ...]
        Tiles currently on the grid, at most one per cell.
    next_id : int
        Identifier handed to the next spawned tile.
    """

    size: int = 4
    tiles: tuple[Tile, ...] = ()
    next_id: int = 0

    def __post_init__(self):
        if self.size <= 1:
            raise InvalidConfiguration(f'Grid size must be greater than 1, got {self.size}')

        positions = set()
        ids = set()
        for tile in self.tiles:
            if not (0 <= tile.row < self.size and 0 <= tile.col < self.size):
                raise InvalidConfiguration(f'Tile {tile.id} is outside a {self.size}x{self.size} grid')
            if tile.position in positions:
                raise InvalidConfiguration(f'Two tiles share the cell {tile.position}')
            if tile.value < 2 or tile.value & (tile.value - 1):
                raise InvalidConfiguration(f'Tile {tile.id} has value {tile.value}, expected a power of two >= 2')
            if tile.id in ids:
                raise InvalidConfiguration(f'Two tiles share the id {tile.id}')
            if tile.id >= self.next_id:
                raise InvalidConfiguration(f'Tile id {tile.id} is not below next_id {self.next_id}')
            positions.add(tile.position)
            ids.add(tile.id)

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.size, self.next_id, frozenset(self.tiles)) == (other.size, other.next_id, frozenset(other.tiles))

    def __hash__(self):
        return hash((self.size, self.next_id, frozenset(self.tiles)))

    @classmethod
    def from_array(cls, values) -> 'Grid':
        """
        Build a grid from a square matrix of values, 0 meaning empty.

        Identifiers are assigned in row-major order. Non-zero values go through the same checks as
        any other grid, so a 3 or a negative value raises ``InvalidConfiguration``.
        """
        board = asarray(values, dtype=int64)
        if board.ndim != 2 or board.shape[0] != board.shape[1]:
            raise InvalidConfiguration(f'Expected a square matrix, got shape {board.shape}')

        tiles = []
        for row, col in zip(*board.nonzero()):
            tiles.append(Tile(id=len(tiles), value=int(board[row, col]), row=int(row), col=int(col)))
        return cls(size=board.shape[0], tiles=tuple(tiles), next_id=len(tiles))

    @property
    def is_full(self) -> bool:
        return len(self.tiles) == self.size**2

    def tile_at(self, row: int, col: int) -> Tile | None:
        for tile in self.tiles:
            if tile.row == row and tile.col == col:
                return tile
        return None

    def empty_cells(self) -> list[tuple[int, int]]:
        """Empty cells in row-major order."""
        occupied = {tile.position for tile in self.tiles}
        return [(row, col) for row in range(self.size) for col in range(self.size) if (row, col) not in occupied]

    def to_array(self) -> ndarray:
        """Snapshot of the values as an N×N array, 0 for empty cells."""
        board = zeros((self.size, self.size), dtype=int64)
        for tile in self.tiles:
            board[tile.row, tile.col] = tile.value
        return board


class MoveResult(NamedTuple):
    """Outcome of a directional move, before any spawn."""

    grid: Grid
    score: int
    changed: bool


def initialize(size: int = 4, rng: Generator | None = None, config: GameConfig | None = None) -> Grid:
    """
    Create an empty grid and spawn the initial tiles.

    Parameters
    ----------
    size : int, optional
        Side of the grid (default is 4). Ignored when ``config`` is given.
    rng : Generator, optional
        Random source for the spawns.
    config : GameConfig, optional
        Session configuration providing the size, tile count and spawn probability.

    Returns
    -------
    Grid
        A grid holding ``config.initial_tiles`` tiles (two by default).

    Raises
    ------
    InvalidConfiguration
        If the size is lower than 2.
    """
    config = config or GameConfig(size=size)
    grid = Grid(size=config.size)
    for _ in range(config.initial_tiles):
        grid, _ = spawn_tile(grid, rng=rng, config=config)
    return grid


def spawn_tile(grid: Grid, rng: Generator | None = None, config: GameConfig | None = None) -> tuple[Grid, Tile | None]:
    """
    Insert a new tile in a uniformly chosen empty cell.

    Parameters
    ----------
    grid : Grid
        The current grid.
    rng : Generator, optional
        Random source. The module-level generator is used when omitted.
    config : GameConfig, optional
        Provides the probability of spawning a 2.

    Returns
    -------
    tuple[Grid, Tile | None]
        The new grid and the spawned tile. On a full grid the same grid is returned with ``None``.

    Notes
    -----
    - A spawned tile is a 2 with probability 0.9 and a 4 otherwise.
    """
    empty_cells = grid.empty_cells()
    if not empty_cells:
        return grid, None

    rng = rng if rng is not None else _GENERATOR
    two_probability = config.two_probability if config is not None else TILE_SPAWN_PROBS[2]

    # ##: Pick the cell first, then the value.
    row, col = empty_cells[int(rng.integers(len(empty_cells)))]
    value = 2 if rng.random() < two_probability else 4

    tile = Tile(id=grid.next_id, value=value, row=row, col=col)
    return Grid(size=grid.size, tiles=grid.tiles + (tile,), next_id=grid.next_id + 1), tile


def _resolve_line(line: list[Tile], size: int, direction: Direction) -> tuple[list[Tile], int, bool]:
    """
    Slide and merge the tiles of one row or column toward the edge of the direction.

    Parameters
    ----------
    line : list[Tile]
        Tiles sharing the same row (horizontal move) or column (vertical move).
    size : int
        Side of the grid.
    direction : Direction
        The move direction.

    Returns
    -------
    placed : list[Tile]
        The surviving tiles with their new positions and values.
    score : int
        Sum of the values produced by merges.
    changed : bool
        Whether any tile slid or merged.

    Notes
    -----
    - Tiles are walked from the target edge to the far edge.
    - A tile produced by a merge cannot merge again in the same move, so ``[2, 2, 2, 2]`` gives
      ``[4, 4]`` and ``[2, 2, 2]`` gives ``[4, 2]``.
    """
    horizontal = direction.is_horizontal
    toward_high = direction.toward_high_edge

    def position(tile: Tile) -> int:
        return tile.col if horizontal else tile.row

    ordered = sorted(line, key=position, reverse=toward_high)
    next_position = size - 1 if toward_high else 0
    step = -1 if toward_high else 1

    placed: list[Tile] = []
    merged: set[int] = set()
    score = 0
    changed = False

    for tile in ordered:
        last = placed[-1] if placed else None
        if last is not None and last.id not in merged and last.value == tile.value:
            # ##: Absorb the current tile into the last placed one.
            placed[-1] = replace(last, value=last.value * 2)
            merged.add(last.id)
            score += last.value * 2
            changed = True
            continue

        if position(tile) != next_position:
            tile = replace(tile, col=next_position) if horizontal else replace(tile, row=next_position)
            changed = True
        placed.append(tile)
        next_position += step

    return placed, score, changed


def move(grid: Grid, direction: Direction) -> MoveResult:
    """
    Apply a directional move: slide every tile toward the edge and merge equal neighbours.

    Parameters
    ----------
    grid : Grid
        The current grid. It is not modified.
    direction : Direction
        One of left, up, right, down.

    Returns
    -------
    MoveResult
        The new grid, the score gained and whether anything slid or merged.

    Notes
    -----
    - No tile is spawned here, see ``spawn_tile``.
    - When ``changed`` is False the returned grid is the input grid.
    """
    direction = Direction(direction)

    lines: list[list[Tile]] = [[] for _ in range(grid.size)]
    for tile in grid.tiles:
        lines[tile.row if direction.is_horizontal else tile.col].append(tile)

    tiles: list[Tile] = []
    score = 0
    changed = False
    for line in lines:
        placed, line_score, line_changed = _resolve_line(line, grid.size, direction)
        tiles.extend(placed)
        score += line_score
        changed = changed or line_changed

    if not changed:
        return MoveResult(grid=grid, score=0, changed=False)
    return MoveResult(grid=Grid(size=grid.size, tiles=tuple(tiles), next_id=grid.next_id), score=score, changed=True)


def is_game_over(grid: Grid) -> bool:
    """
    Check if no move can change the grid anymore.

    Notes
    -----
    The game is over when there are no empty cells AND no orthogonally adjacent tiles share a value.
    On a full grid nothing can slide, so the second condition is exactly "no direction is legal".
    """
    return grid.is_full and not can_move(grid)


def highest_tile(grid: Grid) -> int:
    """Highest value on the grid, 0 when it is empty."""
    return max((tile.value for tile in grid.tiles), default=0)
