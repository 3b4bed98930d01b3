"""
Board tests: bit layout, make/unmake reversibility, win and draw detection.
"""

import numpy as np
import pytest

from tttarena import Board, WIN_MASKS

from tests.helpers import board_from_moves, iter_reachable_boards, snapshot


# ════════════════════════════════════════════════════════════════════════════
#  BASICS
# ════════════════════════════════════════════════════════════════════════════

class TestBoardBasics:
    def test_fresh_board(self):
        b = Board()
        assert snapshot(b) == (0, 0, 9, True)
        assert b.valid_moves() == list(range(9))

    def test_win_masks(self):
        assert WIN_MASKS == (7, 56, 448, 73, 146, 292, 273, 84)

    def test_make_move_sets_side_to_move_bit(self):
        b = Board()
        b.make_move(4)
        assert b.x_mask == 1 << 4
        assert b.o_mask == 0
        assert b.moves_remaining == 8
        # make_move does not flip the turn
        assert b.turn_is_x is True

    def test_o_move_after_switch(self):
        b = Board()
        b.make_move(0)
        b.switch_turn()
        b.make_move(8)
        assert b.x_mask == 1
        assert b.o_mask == 1 << 8
        assert b.turn_is_x is False

    def test_is_valid(self):
        b = board_from_moves(0, 4)
        assert not b.is_valid(0)
        assert not b.is_valid(4)
        assert all(b.is_valid(p) for p in (1, 2, 3, 5, 6, 7, 8))

    def test_get_square_value(self):
        b = board_from_moves(0, 4)
        assert b.get_square_value(0, True) == 1
        assert b.get_square_value(0, False) == -1
        assert b.get_square_value(4, True) == -1
        assert b.get_square_value(4, False) == 1
        assert b.get_square_value(8, True) == 0
        assert b.get_square_value(8, False) == 0

    def test_features(self):
        b = board_from_moves(0, 4, 8)
        f = b.features(False)
        assert f.dtype == np.float32
        assert f.tolist() == [-1, 0, 0, 0, 1, 0, 0, 0, -1]

    def test_copy_is_independent(self):
        b = board_from_moves(0, 4)
        c = b.copy()
        assert c == b
        c.make_move(8)
        assert c != b

    def test_render(self):
        b = board_from_moves(0, 4, 8)
        assert b.render() == "X..\n.O.\n..X"


# ════════════════════════════════════════════════════════════════════════════
#  TERMINAL STATES
# ════════════════════════════════════════════════════════════════════════════

class TestTerminal:
    def test_x_row_win(self):
        b = board_from_moves(0, 3, 1, 4, 2)
        assert b.has_x_won()
        assert not b.has_o_won()
        assert not b.is_draw()

    def test_o_diagonal_win(self):
        b = board_from_moves(0, 2, 1, 4, 8, 6)
        assert b.has_o_won()
        assert not b.has_x_won()

    @pytest.mark.parametrize("line", WIN_MASKS)
    def test_every_line_detected(self, line):
        b = Board()
        b.x_mask = line
        b.moves_remaining = 6
        assert b.has_x_won()

    def test_no_win_while_more_than_six_moves_remain(self):
        b = Board()
        b.x_mask = 0b111
        b.moves_remaining = 7
        assert not b.has_x_won()

    def test_full_board_draw(self):
        b = board_from_moves(0, 1, 2, 4, 3, 5, 7, 6, 8)
        assert b.moves_remaining == 0
        assert not b.has_x_won()
        assert not b.has_o_won()
        assert b.is_draw()

    def test_full_board_with_win_is_not_draw(self):
        # X completes the left column on the last move
        b = board_from_moves(0, 1, 3, 2, 5, 4, 7, 8, 6)
        assert b.moves_remaining == 0
        assert b.has_x_won()
        assert not b.is_draw()

    def test_partial_board_is_not_draw(self):
        assert not board_from_moves(0, 4, 8).is_draw()


# ════════════════════════════════════════════════════════════════════════════
#  INVARIANTS OVER ALL REACHABLE STATES
# ════════════════════════════════════════════════════════════════════════════

class TestInvariants:
    def test_reachable_state_count(self):
        assert sum(1 for _ in iter_reachable_boards()) == 5478

    def test_masks_disjoint_and_counter_consistent(self):
        for b in iter_reachable_boards():
            assert b.x_mask & b.o_mask == 0
            assert b.moves_remaining == 9 - bin(b.x_mask | b.o_mask).count("1")

    def test_never_both_won(self):
        for b in iter_reachable_boards():
            assert not (b.has_x_won() and b.has_o_won())

    def test_make_unmake_restores_state(self):
        for b in iter_reachable_boards():
            before = snapshot(b)
            for pos in b.valid_moves():
                b.make_move(pos)
                assert b.x_mask & b.o_mask == 0
                b.unmake_move(pos)
                assert snapshot(b) == before

    def test_make_unmake_on_opponent_turn(self):
        b = board_from_moves(0, 4)
        before = snapshot(b)
        b.switch_turn()
        b.make_move(8)
        assert b.o_mask & (1 << 8)
        b.unmake_move(8)
        b.switch_turn()
        assert snapshot(b) == before
