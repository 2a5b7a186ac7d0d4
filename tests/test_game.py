"""Unit tests for board, move validation, win detection and turn control."""

import itertools

import pytest

from tictactoe.game import (
    EMPTY,
    IN_PROGRESS,
    WINNING_LINES,
    Board,
    Outcome,
    TurnController,
    invalid_reason,
    is_draw,
    is_valid,
    outcome,
    winner,
    winning_line,
)

_ = " "


def test_new_board_is_empty():
    board = Board()
    assert board.all_cells() == (EMPTY,) * 9
    assert len(board.empty_cells()) == 9
    assert not board.is_full()


def test_set_and_get_are_row_major():
    board = Board()
    board.set(1, 2, "X")
    assert board.get(1, 2) == "X"
    assert board.cells[5] == "X"
    assert board.empty_cells()[0] == (0, 0)
    assert (1, 2) not in board.empty_cells()


def test_from_rows_rejects_bad_shapes_and_symbols():
    with pytest.raises(ValueError):
        Board.from_rows([["X", _, _], [_, _, _]])
    with pytest.raises(ValueError):
        Board.from_rows([["Q", _, _], [_, _, _], [_, _, _]])


def test_validator_rejects_off_board_coordinates():
    board = Board()
    for row, col in [(-1, 0), (0, -1), (3, 0), (0, 3), (-1, -1), (5, 5)]:
        assert not is_valid(board, row, col)
        assert "off the board" in invalid_reason(board, row, col)


def test_validator_rejects_occupied_cells_on_every_board():
    board = Board.from_rows([["X", "O", _], [_, "X", _], [_, _, "O"]])
    for row, col in itertools.product(range(3), range(3)):
        assert is_valid(board, row, col) == (board.get(row, col) == EMPTY)


def test_winner_detects_each_line():
    for line in WINNING_LINES:
        for player in ("X", "O"):
            board = Board()
            for index in line:
                board.cells[index] = player
            assert winner(board) == player
            assert winning_line(board) == line


def test_no_winner_on_mixed_lines():
    board = Board.from_rows([["X", "O", "X"], ["X", "O", "O"], ["O", "X", "X"]])
    assert winner(board) is None
    assert is_draw(board)
    assert outcome(board) == Outcome(drawn=True)


def test_win_takes_precedence_on_full_board():
    board = Board.from_rows([["X", "X", "X"], ["O", "O", "X"], ["X", "O", "O"]])
    assert board.is_full()
    assert not is_draw(board)
    assert outcome(board) == Outcome(winner="X")


def test_partial_board_is_in_progress():
    board = Board.from_rows([["X", _, _], [_, "O", _], [_, _, _]])
    assert outcome(board) is IN_PROGRESS
    with pytest.raises(ValueError):
        IN_PROGRESS.announcement()


def test_announcements():
    assert Outcome(winner="O").announcement() == "O wins!"
    assert Outcome(drawn=True).announcement() == "It's a draw."


def test_controller_starts_with_x_and_alternates():
    game = TurnController()
    assert game.state == ("awaiting", "X")
    game.play_move(1, 1)
    assert game.state == ("awaiting", "O")
    assert game.board.get(1, 1) == "X"
    game.play_move(0, 0)
    assert game.current_player == "X"
    assert game.turns_played == 2


def test_invalid_move_leaves_state_untouched():
    game = TurnController()
    game.play_move(0, 0)
    before = game.board.all_cells()

    with pytest.raises(ValueError):
        game.play_move(0, 0)
    with pytest.raises(ValueError):
        game.play_move(3, 1)

    assert game.board.all_cells() == before
    assert game.current_player == "O"


def test_controller_reaches_terminal_win():
    game = TurnController()
    for move in [(0, 0), (1, 0), (0, 1), (1, 1)]:
        assert game.play_move(*move) is IN_PROGRESS
    result = game.play_move(0, 2)

    assert result == Outcome(winner="X")
    assert game.state == ("terminal", result)
    # The winner stays the current player once the game is over.
    assert game.current_player == "X"
    with pytest.raises(ValueError, match="already finished"):
        game.play_move(2, 2)


def test_controller_reaches_draw():
    game = TurnController()
    moves = [(0, 0), (0, 1), (0, 2), (1, 1), (1, 0), (1, 2), (2, 1), (2, 0), (2, 2)]
    for move in moves[:-1]:
        game.play_move(*move)
    assert game.play_move(*moves[-1]) == Outcome(drawn=True)
    assert game.turns_played == 9
