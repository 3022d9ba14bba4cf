"""
Tests for the minimax search.
"""
import random

import pytest

from othello.config import SearchConfig
from othello.game import Board, DARK
from othello.game.codec import decode
from othello.search import MinimaxSearch
from othello.search.minimax import UPDATE_PER

# Dark to move with exactly two moves, (2, 2) and (5, 2), mirror images of each other
TWO_MOVES_TEXT = """*
--------
--------
--_--_--
--O--O--
--*--*--
--------
--------
--------
"""


def plain_minimax(board, depth, colour):
    """Reference minimax without pruning."""
    moves = board.legal_moves()
    if depth == 0 or not moves:
        return board.evaluate() if board.turn == colour else -board.evaluate()
    scores = [plain_minimax(board.apply_move(*m), depth - 1, colour) for m in moves]
    return max(scores) if board.turn == colour else min(scores)


def sample_boards():
    """A few positions from a seeded random game."""
    rng = random.Random(42)
    board = Board()
    boards = [board]
    for _ in range(20):
        if not board.can_move():
            break
        board = board.apply_move(*rng.choice(board.legal_moves()))
        boards.append(board)
    return boards[::5]


def test_find_move_returns_legal_move():
    board = Board()
    move = MinimaxSearch().find_move(board, 0)
    assert move in board.legal_moves()


def test_find_move_without_legal_moves():
    board = decode("*\n" + "\n".join(["O*------"] + ["--------"] * 7))
    assert not board.can_move()
    search = MinimaxSearch()
    assert search.find_move(board, 3) is None


def test_tie_break_prefers_later_move():
    """Among equally scored moves the last one in enumeration order wins."""
    board = decode(TWO_MOVES_TEXT)
    assert board.legal_moves() == [(2, 2), (5, 2)]

    first = -board.apply_move(2, 2).evaluate()
    second = -board.apply_move(5, 2).evaluate()
    assert first == second

    for depth in (0, 1, 2, 3):
        assert MinimaxSearch().find_move(board, depth) == (5, 2)


def test_tie_break_on_start_board():
    # All four opening moves are symmetric
    assert MinimaxSearch().find_move(Board(), 0) == (4, 5)


def test_depth_zero_picks_best_child():
    """With no look-ahead the move with the best child evaluation is chosen, last on ties."""
    for board in sample_boards():
        if not board.can_move():
            continue
        moves = board.legal_moves()
        scores = [-board.apply_move(*m).evaluate() for m in moves]
        best = max(scores)
        expected = [m for m, s in zip(moves, scores) if s == best][-1]
        assert MinimaxSearch().find_move(board, 0) == expected


@pytest.mark.parametrize("depth", [0, 1, 2])
def test_best_score_matches_plain_minimax(depth):
    for board in sample_boards():
        if not board.can_move():
            continue
        search = MinimaxSearch()
        move = search.find_move(board, depth)
        assert move in board.legal_moves()

        expected = max(plain_minimax(board.apply_move(*m), depth, board.turn)
                       for m in board.legal_moves())
        assert search.best_score == expected


def test_search_does_not_modify_board():
    board = Board().apply_move(3, 2)
    before = board.serialized()
    MinimaxSearch().find_move(board, 2)
    assert board.serialized() == before


def test_finds_winning_corner():
    # Taking the corner at (0, 0) flips the whole top row
    board = decode("""*
-OOOOOO*
--------
--------
---O*---
---*O---
--------
--------
--------
""")
    assert board.is_legal_move(0, 0)
    assert MinimaxSearch().find_move(board, 1) == (0, 0)


def test_progress_called_every_update():
    calls = []
    search = MinimaxSearch(progress=lambda: calls.append(1), update_every=1)
    search.find_move(Board(), 2)
    # The root counts as the first board and is not reported
    assert len(calls) == search.nodes - 1

    calls.clear()
    search = MinimaxSearch(progress=lambda: calls.append(1))
    assert search.update_every == UPDATE_PER
    search.find_move(Board(), 3)
    assert len(calls) == search.nodes // UPDATE_PER


def test_progress_not_called_for_small_search():
    calls = []
    search = MinimaxSearch(progress=lambda: calls.append(1), update_every=1000)
    search.find_move(Board(), 0)
    assert search.nodes == 5  # root plus one board per opening move
    assert calls == []


def test_from_config():
    search = MinimaxSearch.from_config(SearchConfig(depth=2, update_every=50))
    assert search.update_every == 50
    assert search.progress is None


def test_invalid_arguments():
    with pytest.raises(ValueError):
        MinimaxSearch(update_every=0)
    with pytest.raises(ValueError):
        MinimaxSearch().find_move(Board(), -1)


def test_search_result_is_deterministic():
    board = Board().apply_move(3, 2).apply_move(2, 2)
    moves = {MinimaxSearch().find_move(board, 2) for _ in range(3)}
    assert len(moves) == 1
    assert board.turn == DARK


if __name__ == "__main__":
    print("Running Othello search tests...\n")

    test_find_move_returns_legal_move()
    test_tie_break_prefers_later_move()
    test_tie_break_on_start_board()
    test_depth_zero_picks_best_child()
    test_progress_called_every_update()

    print("\nAll tests passed successfully!")
