from tttarena import Board


class ScriptedAgent:
    """Replays a fixed list of moves."""

    def __init__(self, moves):
        self.moves = list(moves)
        self.calls = 0

    def get_move(self, board):
        move = self.moves[self.calls]
        self.calls += 1
        return move


def board_from_moves(*moves):
    """Alternate X and O from a fresh board, like the game loop does."""
    board = Board()
    for pos in moves:
        board.make_move(pos)
        board.switch_turn()
    return board


def snapshot(board):
    return (board.x_mask, board.o_mask, board.moves_remaining, board.turn_is_x)


def iter_reachable_boards():
    """Yield every position reachable through alternating legal moves."""
    stack = [Board()]
    seen = set()
    while stack:
        board = stack.pop()
        key = (board.x_mask, board.o_mask)
        if key in seen:
            continue
        seen.add(key)
        yield board
        if board.has_x_won() or board.has_o_won() or board.moves_remaining == 0:
            continue
        for pos in board.valid_moves():
            child = board.copy()
            child.make_move(pos)
            child.switch_turn()
            stack.append(child)
