"""
Move directions and legal move detection for the tile merge engine.
"""

from enum import IntEnum

from numpy import asarray, ndarray


class Direction(IntEnum):
    """Closed set of directions a move can be applied in."""

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @property
    def toward_high_edge(self) -> bool:
        """True when tiles travel toward the last row or column."""
        return self in (Direction.RIGHT, Direction.DOWN)

    @classmethod
    def from_name(cls, name: str) -> 'Direction':
        return cls[name.strip().upper()]


def _as_board(state) -> ndarray:
    # ##>: Imported here, gameboard depends on this module.
    from tilemerge.core.gameboard import Grid

    if isinstance(state, Grid):
        return state.to_array()
    return asarray(state)


def legal_actions_mask(state) -> tuple[bool, bool, bool, bool]:
    """
    Get a boolean mask for all four directions in a single pass.

    Parameters
    ----------
    state : Grid or ndarray
        The grid, or its value snapshot with 0 for empty cells.

    Returns
    -------
    tuple[bool, bool, bool, bool]
        Mask for (left, up, right, down) where True means the move changes the grid.
    """
    board = _as_board(state)

    # ##>: Compute horizontal adjacency once for left/right.
    left_cols, right_cols = board[:, :-1], board[:, 1:]
    h_can_merge = (left_cols != 0) & (left_cols == right_cols)

    # ##>: Compute vertical adjacency once for up/down.
    top_rows, bottom_rows = board[:-1, :], board[1:, :]
    v_can_merge = (top_rows != 0) & (top_rows == bottom_rows)

    # ##>: A tile slides when the neighbouring cell in the move direction is empty.
    left = (left_cols == 0) & (right_cols != 0)
    right = (right_cols == 0) & (left_cols != 0)
    up = (top_rows == 0) & (bottom_rows != 0)
    down = (bottom_rows == 0) & (top_rows != 0)

    return (
        bool(left.any() or h_can_merge.any()),
        bool(up.any() or v_can_merge.any()),
        bool(right.any() or h_can_merge.any()),
        bool(down.any() or v_can_merge.any()),
    )


def legal_actions(state) -> list[Direction]:
    """
    Determine the directions that would change the grid.

    Parameters
    ----------
    state : Grid or ndarray
        The current grid.

    Returns
    -------
    list[Direction]
        Legal directions, in enumeration order.
    """
    mask = legal_actions_mask(state)
    return [direction for direction in Direction if mask[direction]]


def illegal_actions(state) -> list[Direction]:
    """
    Determine the directions that would leave the grid untouched.

    Parameters
    ----------
    state : Grid or ndarray
        The current grid.

    Returns
    -------
    list[Direction]
        Illegal directions, in enumeration order.
    """
    mask = legal_actions_mask(state)
    return [direction for direction in Direction if not mask[direction]]


def can_move(state) -> bool:
    """Check if at least one direction changes the grid."""
    return any(legal_actions_mask(state))
