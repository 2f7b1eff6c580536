"""Unit tests for tic-tac-toe rules and move history."""

import pytest

from tictactoe.game import (
    EMPTY,
    WINNING_LINES,
    Board,
    TicTacToeGame,
    evaluate,
    is_draw,
    is_part_of_winning_line,
)


def _board(*rows):
    """Build a board from three 3-char strings, space for an empty cell."""
    board = Board.empty()
    for r, cells in enumerate(rows):
        for c, mark in enumerate(cells):
            if mark != " ":
                board = board.place(r, c, mark)
    return board


def _play(game, *moves):
    for row, col in moves:
        assert game.apply_move(row, col)


def test_every_winning_line_is_detected():
    for mark in ("X", "O"):
        for line in WINNING_LINES:
            board = Board.empty()
            for row, col in line:
                board = board.place(row, col, mark)
            result = evaluate(board)
            assert result is not None
            assert result.mark == mark
            assert result.line == line


def test_no_winner_on_empty_or_open_board():
    assert evaluate(Board.empty()) is None
    board = _board("XO ", " X ", "O  ")
    assert evaluate(board) is None


def test_mixed_line_is_not_a_win():
    board = _board("XXO", "   ", "   ")
    assert evaluate(board) is None


def test_rows_win_before_columns_and_diagonals():
    board = _board("XXX", "X  ", "X  ")
    result = evaluate(board)
    assert result.line == ((0, 0), (0, 1), (0, 2))


def test_is_part_of_winning_line():
    board = _board("X O", " XO", "  X")
    assert is_part_of_winning_line(board, 0, 0)
    assert is_part_of_winning_line(board, 1, 1)
    assert is_part_of_winning_line(board, 2, 2)
    assert not is_part_of_winning_line(board, 0, 2)
    assert not is_part_of_winning_line(Board.empty(), 1, 1)


def test_place_returns_new_board():
    board = Board.empty()
    after = board.place(1, 1, "X")
    assert board.cell(1, 1) == EMPTY
    assert after.cell(1, 1) == "X"


def test_occupied_cell_is_a_no_op():
    game = TicTacToeGame()
    _play(game, (0, 0))
    before = list(game.history)
    assert game.apply_move(0, 0) is False
    assert game.history == before
    assert game.current_move == 1
    assert game.current_player == "O"


def test_move_after_win_is_a_no_op():
    game = TicTacToeGame()
    _play(game, (0, 0), (1, 1), (0, 1), (2, 2), (0, 2))
    assert game.apply_move(2, 0) is False
    assert len(game.history) == 6
    assert game.current_move == 5


def test_winning_game_scenario():
    game = TicTacToeGame()
    _play(game, (0, 0), (1, 1), (0, 1), (2, 2), (0, 2))
    result = evaluate(game.current_snapshot())
    assert result.mark == "X"
    assert list(result.line) == [(0, 0), (0, 1), (0, 2)]
    assert game.status() == "Winner is: X"
    assert game.winning_cells() == [(0, 0), (0, 1), (0, 2)]


def test_jump_then_move_discards_later_history():
    game = TicTacToeGame()
    _play(game, (0, 0), (1, 1), (0, 1), (2, 2), (0, 2))
    game.jump_to(2)
    assert len(game.history) == 6
    assert game.apply_move(2, 0)
    assert len(game.history) == 4
    assert game.current_move == 3
    assert game.current_snapshot().cell(2, 0) == "X"
    assert game.current_snapshot().cell(2, 2) == EMPTY
    assert game.status() == "Next turn: O"


def test_jump_can_leave_a_won_board():
    game = TicTacToeGame()
    _play(game, (0, 0), (1, 1), (0, 1), (2, 2), (0, 2))
    game.jump_to(4)
    assert game.status() == "Next turn: X"
    assert game.winning_cells() == []
    game.jump_to(5)
    assert game.status() == "Winner is: X"


def test_player_parity_follows_current_move():
    game = TicTacToeGame()
    _play(game, (0, 0), (1, 1), (0, 1))
    for move in (0, 1, 2, 3):
        game.jump_to(move)
        assert game.current_player == ("X" if move % 2 == 0 else "O")


def test_jump_to_current_move_keeps_state():
    game = TicTacToeGame()
    _play(game, (0, 0))
    game.jump_to(1)
    assert game.current_move == 1
    assert len(game.history) == 2


def test_out_of_range_input_raises():
    game = TicTacToeGame()
    with pytest.raises(ValueError):
        game.apply_move(3, 0)
    with pytest.raises(ValueError):
        game.jump_to(1)
    with pytest.raises(ValueError):
        game.jump_to(-1)


def test_draw_is_reported():
    game = TicTacToeGame()
    # X O X / X O O / O X X
    _play(game, (0, 0), (0, 1), (0, 2), (1, 1), (1, 0), (1, 2), (2, 1), (2, 0), (2, 2))
    assert evaluate(game.current_snapshot()) is None
    assert is_draw(game.current_snapshot())
    assert game.drawn()
    assert game.status() == "Draw: no moves left"


def test_history_labels():
    game = TicTacToeGame()
    assert [e.label for e in game.history_entries()] == ["You're at game start"]
    _play(game, (0, 0), (1, 1))
    labels = [e.label for e in game.history_entries()]
    assert labels == ["Go to game start", "Go to move #1", "You're at move #2"]
    game.jump_to(0)
    entries = game.history_entries()
    assert entries[0].label == "You're at game start"
    assert entries[0].is_current
    assert entries[2].label == "Go to move #2"


def test_listeners_see_changes():
    game = TicTacToeGame()
    seen = []
    unsubscribe = game.subscribe(lambda g: seen.append(g.current_move))
    _play(game, (0, 0))
    game.apply_move(0, 0)  # no-op, no notification
    game.jump_to(0)
    unsubscribe()
    _play(game, (2, 2))
    assert seen == [1, 0]


def test_constructed_game_at_odd_move_gives_o_the_turn():
    empty = Board.empty()
    game = TicTacToeGame(history=[empty, empty.place(0, 0, "X")], current_move=1)
    assert game.current_player == "O"
    assert game.status() == "Next turn: O"
    assert game.apply_move(1, 1)
    assert game.current_snapshot().cell(1, 1) == "O"


def test_non_integer_coordinates_raise_value_error():
    game = TicTacToeGame()
    with pytest.raises(ValueError):
        game.apply_move(1.5, 0)
    with pytest.raises(ValueError):
        Board.empty().cell(0, "1")
    assert len(game.history) == 1
