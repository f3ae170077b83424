"""Derive per-tile changes between two grid snapshots, for callers that animate moves."""

from typing import NamedTuple

from tilemerge.core.gameboard import Grid


class TileChanges(NamedTuple):
    """Tile identifiers grouped by what happened to them between two snapshots."""

    new: frozenset[int]
    merged: frozenset[int]
    moved: frozenset[int]
    removed: frozenset[int]


def tile_changes(previous: Grid, current: Grid) -> TileChanges:
    """
    Compare two snapshots of the same session.

    Parameters
    ----------
    previous : Grid
        Grid before the move (and spawn).
    current : Grid
        Grid after the move (and spawn).

    Returns
    -------
    TileChanges
        - ``new``: tiles only present in ``current`` (spawned).
        - ``merged``: tiles present in both whose value grew (they absorbed another tile).
        - ``moved``: tiles present in both whose cell changed.
        - ``removed``: tiles only present in ``previous`` (absorbed by a merge).
    """
    before = {tile.id: tile for tile in previous.tiles}
    after = {tile.id: tile for tile in current.tiles}

    kept = before.keys() & after.keys()
    return TileChanges(
        new=frozenset(after.keys() - before.keys()),
        merged=frozenset(tile_id for tile_id in kept if after[tile_id].value > before[tile_id].value),
        moved=frozenset(tile_id for tile_id in kept if after[tile_id].position != before[tile_id].position),
        removed=frozenset(before.keys() - after.keys()),
    )
