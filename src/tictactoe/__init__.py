"""Tic-tac-toe package exposing game logic and the web application."""

from .game import Board, TicTacToeGame, WinResult, evaluate, is_part_of_winning_line
from .ui import app

__all__ = [
    "Board",
    "TicTacToeGame",
    "WinResult",
    "app",
    "evaluate",
    "is_part_of_winning_line",
]
