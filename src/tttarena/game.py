"""
Game loop: alternate two agents on one board until the game ends.

An illegal move (out of range or onto an occupied cell) is not an error:
the mover forfeits and the other side wins.
"""

import logging
import operator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

from .agents import Agent
from .board import Board

logger = logging.getLogger(__name__)


class Outcome(IntEnum):
    DRAW = 0
    X_WINS = 1
    O_WINS = 2


@dataclass
class GameResult:
    """Finished game."""
    outcome: Outcome
    board: Board
    moves: List[int] = field(default_factory=list)  # Accepted moves in order
    forfeit: bool = False


def play_game(player_x: Agent, player_o: Agent, board: Optional[Board] = None) -> GameResult:
    """
    Play one game to completion.

    Args:
        player_x: Agent moving for X
        player_o: Agent moving for O
        board: Starting board (fresh board with X to move if None)

    Returns:
        GameResult with the outcome, accepted moves and final board
    """
    if board is None:
        board = Board()
    moves: List[int] = []

    while True:
        mover = player_x if board.turn_is_x else player_o
        move = mover.get_move(board)
        cell = _as_cell(move)

        if cell is None or not board.is_valid(cell):
            outcome = Outcome.O_WINS if board.turn_is_x else Outcome.X_WINS
            logger.debug(
                "%s forfeits with illegal move %r after %d moves",
                "X" if board.turn_is_x else "O", move, len(moves),
            )
            return GameResult(outcome, board, moves, forfeit=True)

        board.make_move(cell)
        moves.append(cell)

        # Check order is fixed: O, then X, then draw
        if board.has_o_won():
            outcome = Outcome.O_WINS
        elif board.has_x_won():
            outcome = Outcome.X_WINS
        elif board.is_draw():
            outcome = Outcome.DRAW
        else:
            board.switch_turn()
            continue

        logger.debug("Game over: %s in %d moves\n%s", outcome.name, len(moves), board.render())
        return GameResult(outcome, board, moves)


def play_until_win(player_x: Agent, player_o: Agent) -> Outcome:
    """Play a fresh game and return only its outcome."""
    return play_game(player_x, player_o).outcome


def _as_cell(move) -> Optional[int]:
    """Return move as a cell index in 0..8, or None."""
    # bool is an int subclass but never a cell index
    if isinstance(move, bool):
        return None
    try:
        move = operator.index(move)
    except TypeError:
        return None
    return move if 0 <= move < 9 else None
