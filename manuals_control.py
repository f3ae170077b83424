# -*- coding: utf-8 -*-
"""
Play the merge game in a terminal.
"""
import argparse
import logging

from tilemerge.config import GameConfig
from tilemerge.envs import GameSession
from tilemerge.utils.diff import tile_changes

KEYS = {'a': 'left', 'w': 'up', 'd': 'right', 's': 'down'}


def redraw(envs: GameSession):
    """
    Redraw the game board.

    Parameters
    ----------
    envs: GameSession
        The game session to draw
    """
    print(envs.render())
    print(f'score={envs.score} highest={envs.highest_tile} moves={envs.moves}')


def step(envs: GameSession, action: str):
    """
    Applied action into the game.

    Parameters
    ----------
    envs: GameSession
        The game session

    action: str
        Name of the direction to apply
    """
    previous = envs.grid
    grid, reward, changed = envs.step(envs.ACTIONS[action])
    if not changed:
        print('Nothing moved, try another direction.')
        return

    changes = tile_changes(previous, grid)
    print(f'reward={reward} merged={len(changes.merged)}')
    redraw(envs)

    if envs.has_won and not envs.keep_playing:
        answer = input('You reached the goal! Keep playing? [y/N] ').strip().lower()
        if answer == 'y':
            envs.continue_after_win()


def report(envs: GameSession):
    """
    Print the final values handed to the reward application.

    Parameters
    ----------
    envs: GameSession
        The finished game session
    """
    outcome = envs.outcome()
    print(f'\nFinal score: {outcome.score}, highest tile: {outcome.highest_tile}, moves: {outcome.moves}')
    print(f'{outcome.tier.name}: +{outcome.tier.gold} gold, loot {outcome.tier.loot}, +{outcome.tier.wisdom_bonus} wisdom')


def play(envs: GameSession):
    """
    Read commands until the game ends or the player quits, then print the outcome.

    Parameters
    ----------
    envs: GameSession
        The game session to play
    """
    print('Commands: w (up), a (left), s (down), d (right), r (restart), q (quit)')
    redraw(envs)

    try:
        while not envs.is_ended:
            command = input('\nEnter move: ').strip().lower()
            if command == 'q':
                break
            if command == 'r':
                envs.reset()
                redraw(envs)
            elif command in KEYS:
                step(envs, KEYS[command])
            else:
                print('Invalid command! Use w/a/s/d to move, r to restart or q to quit.')
    except (EOFError, KeyboardInterrupt):
        print()

    report(envs)


def main():
    parser = argparse.ArgumentParser(description='Play the merge game in a terminal.')
    parser.add_argument('--size', type=int, default=4, help='Side of the grid')
    parser.add_argument('--seed', type=int, default=None, help='Seed of the tile spawns')
    parser.add_argument('--win', type=int, default=2048, help='Tile value that wins the game')
    parser.add_argument('--verbose', action='store_true', help='Log engine events')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    play(GameSession(GameConfig(size=args.size, win_threshold=args.win, seed=args.seed)))


if __name__ == '__main__':
    main()
