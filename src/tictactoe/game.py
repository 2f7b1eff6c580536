"""Core rules, win detection and move history for tic-tac-toe."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

Mark = str  # "X", "O", or EMPTY
Coord = Tuple[int, int]

EMPTY: Mark = " "
SIZE = 3

WINNING_LINES: Tuple[Tuple[Coord, Coord, Coord], ...] = (
    # rows
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    # columns
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    # diagonals
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)


def _check_coord(row: int, col: int) -> None:
    if not isinstance(row, int) or not isinstance(col, int):
        raise ValueError(f"Cell coordinates must be integers, got ({row!r}, {col!r})")
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise ValueError(f"Cell ({row}, {col}) is outside the board")


# ---------- Board snapshot ----------


@dataclass(frozen=True)
class Board:
    cells: Tuple[Tuple[Mark, ...], ...] = field(
        default_factory=lambda: tuple((EMPTY,) * SIZE for _ in range(SIZE))
    )

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    def cell(self, row: int, col: int) -> Mark:
        _check_coord(row, col)
        return self.cells[row][col]

    def is_empty_at(self, row: int, col: int) -> bool:
        return self.cell(row, col) == EMPTY

    def is_full(self) -> bool:
        return all(c != EMPTY for row in self.cells for c in row)

    def place(self, row: int, col: int, mark: Mark) -> "Board":
        """Return a copy of the board with ``mark`` at (row, col)."""
        _check_coord(row, col)
        rows = [list(r) for r in self.cells]
        rows[row][col] = mark
        return Board(cells=tuple(tuple(r) for r in rows))


# ---------- Win evaluation ----------


@dataclass(frozen=True)
class WinResult:
    mark: Mark
    line: Tuple[Coord, Coord, Coord]


def evaluate(board: Board) -> Optional[WinResult]:
    """First completed line in WINNING_LINES order, or None."""
    for line in WINNING_LINES:
        (ar, ac), (br, bc), (cr, cc) = line
        v = board.cells[ar][ac]
        if v != EMPTY and v == board.cells[br][bc] == board.cells[cr][cc]:
            return WinResult(mark=v, line=line)
    return None


def is_part_of_winning_line(board: Board, row: int, col: int) -> bool:
    result = evaluate(board)
    if result is None:
        return False
    return (row, col) in result.line


def is_draw(board: Board) -> bool:
    return board.is_full() and evaluate(board) is None


# ---------- History entries ----------


@dataclass(frozen=True)
class HistoryEntry:
    move: int
    label: str
    is_current: bool


def history_label(move: int, is_current: bool) -> str:
    if is_current:
        return "You're at game start" if move == 0 else f"You're at move #{move}"
    return "Go to game start" if move == 0 else f"Go to move #{move}"


# ---------- Game ----------


Listener = Callable[["TicTacToeGame"], None]


@dataclass
class TicTacToeGame:
    history: List[Board] = field(default_factory=lambda: [Board.empty()])
    current_move: int = 0
    current_player: Mark = field(default="X", init=False)

    _listeners: List[Listener] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.history:
            raise ValueError("History needs at least the initial board")
        if not 0 <= self.current_move < len(self.history):
            raise ValueError("Current move is outside the history")
        self.current_player = "X" if self.current_move % 2 == 0 else "O"

    # ---- API used by UI ----

    def current_snapshot(self) -> Board:
        return self.history[self.current_move]

    def winner(self) -> Optional[Mark]:
        result = evaluate(self.current_snapshot())
        return result.mark if result else None

    def drawn(self) -> bool:
        return is_draw(self.current_snapshot())

    def status(self) -> str:
        board = self.current_snapshot()
        result = evaluate(board)
        if result:
            return f"Winner is: {result.mark}"
        if board.is_full():
            return "Draw: no moves left"
        return f"Next turn: {self.current_player}"

    def winning_cells(self) -> List[Coord]:
        result = evaluate(self.current_snapshot())
        return list(result.line) if result else []

    def history_entries(self) -> List[HistoryEntry]:
        return [
            HistoryEntry(
                move=move,
                label=history_label(move, move == self.current_move),
                is_current=move == self.current_move,
            )
            for move in range(len(self.history))
        ]

    def apply_move(self, row: int, col: int) -> bool:
        """
        Play the active player's mark at (row, col) on the viewed board.

        Returns False without touching state when the cell is taken or the
        board already has a winner. Any history after the viewed board is
        discarded before the new board is appended.
        """
        _check_coord(row, col)
        board = self.current_snapshot()
        if evaluate(board) is not None:
            logger.debug("Ignoring move (%d, %d): board already won", row, col)
            return False
        if not board.is_empty_at(row, col):
            logger.debug("Ignoring move (%d, %d): cell occupied", row, col)
            return False

        dropped = len(self.history) - (self.current_move + 1)
        if dropped:
            logger.debug("Branching at move %d, dropping %d later boards",
                         self.current_move, dropped)
        self.history = self.history[: self.current_move + 1]
        self.history.append(board.place(row, col, self.current_player))
        self.current_move = len(self.history) - 1
        self.current_player = "O" if self.current_player == "X" else "X"
        self._notify()
        return True

    def jump_to(self, move: int) -> None:
        if not 0 <= move < len(self.history):
            raise ValueError(
                f"Move {move} is outside the history (0..{len(self.history) - 1})"
            )
        self.current_move = move
        self.current_player = "X" if move % 2 == 0 else "O"
        self._notify()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every state change; returns an unsubscriber."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---- helpers ----

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
