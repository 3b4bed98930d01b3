"""
Players.

Every agent exposes get_move(board) -> cell index (0..8) and keeps no
reference to the board between calls.
"""

from typing import Optional, Protocol, Union

import numpy as np

from .board import Board
from .oracle import Oracle


class Agent(Protocol):
    """Move-producing capability used by the game loop."""

    def get_move(self, board: Board) -> int:
        ...


class RandomAgent:
    """
    Uniformly random legal mover.

    Picks a random start offset and scans forward (wrapping) to the first
    empty cell. get_move is safe to call concurrently: the only shared
    state is the generator, and numpy serializes its draws.
    """

    def __init__(self, seed: Union[int, np.random.Generator, None] = None):
        if isinstance(seed, np.random.Generator):
            self.rng = seed
        else:
            self.rng = np.random.default_rng(seed)

    def get_move(self, board: Board) -> int:
        count = int(self.rng.integers(0, 9))
        while True:
            move = count % 9
            if board.is_valid(move):
                return move
            count += 1


def _completes_line(board: Board, pos: int) -> bool:
    """Play pos for the side to move, test for any win, take it back."""
    board.make_move(pos)
    won = board.has_x_won() or board.has_o_won()
    board.unmake_move(pos)
    return won


class HeuristicAgent:
    """
    Tiered one-ply heuristic ("optimal" player).

    In priority order:
    1. Opening book: corner on an empty board, center (else corner)
       as the first reply.
    2. Take an immediate win.
    3. Block a cell that would give the opponent an immediate win.
       Only the opponent's next ply is considered.
    4. Otherwise play the cell whose aftermath has the most winning
       follow-up cells, counting a line completed by either mark.

    Ties always go to the lowest cell index. All probing is done with
    make/unmake pairs, so the board is left exactly as it was given.
    """

    def get_move(self, board: Board) -> int:
        occupied = board.occupied_count()
        if occupied == 0:
            return 0
        if occupied == 1:
            return 4 if board.is_valid(4) else 0

        for pos in range(9):
            if board.is_valid(pos) and _completes_line(board, pos):
                return pos

        # Pretend it is the opponent's turn
        board.switch_turn()
        try:
            for pos in range(9):
                if board.is_valid(pos) and _completes_line(board, pos):
                    return pos
        finally:
            board.switch_turn()

        best_move = 0
        best_score = -1
        for pos in range(9):
            if not board.is_valid(pos):
                continue
            board.make_move(pos)
            score = 0
            for reply in range(9):
                if board.is_valid(reply) and _completes_line(board, reply):
                    score += 1
            board.unmake_move(pos)

            if score > best_score:
                best_score = score
                best_move = pos

        return best_move


class OracleAgent:
    """
    Plays the valid cell an oracle scores highest.

    Features are written from this agent's side (own marks +1, opponent
    marks -1). Equal scores keep the lowest cell index.
    """

    def __init__(self, oracle: Oracle, is_player_x: bool = True):
        self.oracle = oracle
        self.is_player_x = is_player_x

    def get_move(self, board: Board) -> int:
        self.oracle.reset_state()
        scores = self.oracle.activate(board.features(self.is_player_x))
        if len(scores) != 9:
            raise ValueError(f"Oracle returned {len(scores)} scores, expected 9")

        best_move: Optional[int] = None
        best_score = 0.0
        for pos in range(9):
            if not board.is_valid(pos):
                continue
            score = float(scores[pos])
            if best_move is None or score > best_score:
                best_move = pos
                best_score = score

        # No empty cell: an out-of-range move, which the game loop forfeits
        return 9 if best_move is None else best_move
