"""
Bit-packed TicTacToe board.

Cell layout (row-major, bit i = cell i):
    0 | 1 | 2
    3 | 4 | 5
    6 | 7 | 8

Each side owns a 9-bit occupancy mask. Moves are applied and reverted in
place so lookahead never allocates a new board.
"""

from typing import List

import numpy as np

# Winning lines as 9-bit masks
WIN_MASKS = (
    0b000000111, 0b000111000, 0b111000000,  # rows
    0b001001001, 0b010010010, 0b100100100,  # columns
    0b100010001, 0b001010100,               # diagonals
)

FULL_MASK = 0b111111111


class Board:
    """
    Mutable game state: two disjoint occupancy masks, a move counter
    and the side to move (X moves first).

    Positions are not range-checked. Callers must check is_valid()
    before make_move() and only unmake the move they just made.
    """

    __slots__ = ("x_mask", "o_mask", "moves_remaining", "turn_is_x")

    def __init__(self):
        self.x_mask = 0
        self.o_mask = 0
        self.moves_remaining = 9
        self.turn_is_x = True

    def make_move(self, pos: int):
        """Place the side-to-move's mark on pos."""
        if self.turn_is_x:
            self.x_mask |= 1 << pos
        else:
            self.o_mask |= 1 << pos
        self.moves_remaining -= 1

    def unmake_move(self, pos: int):
        """Revert make_move(pos) made with the current turn flag."""
        if self.turn_is_x:
            self.x_mask &= ~(1 << pos)
        else:
            self.o_mask &= ~(1 << pos)
        self.moves_remaining += 1

    def switch_turn(self):
        self.turn_is_x = not self.turn_is_x

    def is_valid(self, pos: int) -> bool:
        """True if pos is empty."""
        return ((self.x_mask | self.o_mask) >> pos) & 1 == 0

    def get_square_value(self, pos: int, perspective_is_x: bool) -> int:
        """
        Cell value from one side's perspective.

        Returns:
            +1 for own mark, -1 for opponent mark, 0 for empty
        """
        bit = 1 << pos
        if self.x_mask & bit:
            return 1 if perspective_is_x else -1
        if self.o_mask & bit:
            return -1 if perspective_is_x else 1
        return 0

    def has_x_won(self) -> bool:
        # No line can be complete before the third mark
        return self.moves_remaining <= 6 and _has_line(self.x_mask)

    def has_o_won(self) -> bool:
        return self.moves_remaining <= 6 and _has_line(self.o_mask)

    def is_draw(self) -> bool:
        return self.moves_remaining == 0 and not (self.has_x_won() or self.has_o_won())

    def occupied_count(self) -> int:
        return 9 - self.moves_remaining

    def valid_moves(self) -> List[int]:
        """Return empty cells in ascending order."""
        free = FULL_MASK & ~(self.x_mask | self.o_mask)
        return [i for i in range(9) if (free >> i) & 1]

    def features(self, perspective_is_x: bool) -> np.ndarray:
        """[9] float32 vector of get_square_value() for every cell."""
        return np.array(
            [self.get_square_value(i, perspective_is_x) for i in range(9)],
            dtype=np.float32,
        )

    def copy(self) -> "Board":
        other = Board()
        other.x_mask = self.x_mask
        other.o_mask = self.o_mask
        other.moves_remaining = self.moves_remaining
        other.turn_is_x = self.turn_is_x
        return other

    def render(self) -> str:
        """Three text rows using X, O and '.' for empty."""
        rows = []
        for r in range(3):
            row = ""
            for c in range(3):
                bit = 1 << (r * 3 + c)
                row += "X" if self.x_mask & bit else "O" if self.o_mask & bit else "."
            rows.append(row)
        return "\n".join(rows)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.x_mask == other.x_mask
            and self.o_mask == other.o_mask
            and self.moves_remaining == other.moves_remaining
            and self.turn_is_x == other.turn_is_x
        )

    def __repr__(self) -> str:
        return (
            f"Board(x_mask={self.x_mask:#011b}, o_mask={self.o_mask:#011b}, "
            f"moves_remaining={self.moves_remaining}, turn_is_x={self.turn_is_x})"
        )


def _has_line(mask: int) -> bool:
    for line in WIN_MASKS:
        if mask & line == line:
            return True
    return False
