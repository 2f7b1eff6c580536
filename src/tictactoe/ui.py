"""FastAPI-powered web UI for playing tic-tac-toe in the browser."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from .game import EMPTY, TicTacToeGame

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for an active game and the render revision counter."""

    game: TicTacToeGame
    revision: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        self.game.subscribe(self._on_change)

    def _on_change(self, game: TicTacToeGame) -> None:
        self.revision += 1


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="Tic-Tac-Toe", description="Tic-tac-toe with a move history browser")


class MoveRequest(BaseModel):
    """Request payload for a cell click."""

    row: int = Field(ge=0, le=2)
    col: int = Field(ge=0, le=2)


class JumpRequest(BaseModel):
    """Request payload for a history item click."""

    move: int = Field(ge=0)


def _create_session() -> Tuple[str, GameSession]:
    session = GameSession(game=TicTacToeGame())
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("Created game %s", session_id)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        game = session.game
        board = game.current_snapshot()
        cells: List[List[str]] = [
            [c if c != EMPTY else "" for c in row] for row in board.cells
        ]
        return {
            "id": game_id,
            "cells": cells,
            "status": game.status(),
            "winner": game.winner(),
            "drawn": game.drawn(),
            "currentPlayer": game.current_player,
            "currentMove": game.current_move,
            "winningCells": [[r, c] for r, c in game.winning_cells()],
            "history": [
                {"move": e.move, "label": e.label, "isCurrent": e.is_current}
                for e in game.history_entries()
            ],
            "revision": session.revision,
        }


@app.post("/api/game")
def create_game() -> Dict[str, object]:
    game_id, session = _create_session()
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        try:
            session.game.apply_move(request.row, request.col)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/jump")
def jump_to(game_id: str, request: JumpRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        try:
            session.game.jump_to(request.move)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Tic-Tac-Toe</title>
    <style>
      :root {
        color-scheme: light;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
      }
      body {
        margin: 0;
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem;
        background: #f2f5ff;
        color: #13203a;
      }
      .game {
        display: flex;
        flex-wrap: wrap;
        gap: 2rem;
      }
      .status {
        margin-bottom: 0.75rem;
        font-weight: 600;
      }
      .board-row {
        display: flex;
      }
      .square,
      .square-winning {
        width: 3.5rem;
        height: 3.5rem;
        margin: -1px -1px 0 0;
        font-size: 1.8rem;
        font-weight: 700;
        border: 1px solid #999;
        background: white;
        cursor: pointer;
      }
      .square-winning {
        background: #ffe28a;
      }
      .game-info ul {
        margin: 0;
        padding-left: 1.25rem;
      }
      .game-info li {
        margin-bottom: 0.35rem;
      }
    </style>
  </head>
  <body>
    <div class=\"game\">
      <div class=\"game-board\">
        <div class=\"status\" id=\"status\"></div>
        <div id=\"board\"></div>
      </div>
      <div class=\"game-info\">
        <ul id=\"moves\"></ul>
      </div>
    </div>
    <script>
      let gameId = null;

      async function post(path, body) {
        const response = await fetch(path, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: body ? JSON.stringify(body) : undefined,
        });
        if (!response.ok) {
          const error = await response.json().catch(() => ({}));
          throw new Error(error.detail || response.statusText);
        }
        return response.json();
      }

      function isWinning(state, row, col) {
        return state.winningCells.some(([r, c]) => r === row && c === col);
      }

      function render(state) {
        gameId = state.id;
        document.getElementById('status').textContent = state.status;

        const board = document.getElementById('board');
        board.innerHTML = '';
        state.cells.forEach((cells, row) => {
          const rowEl = document.createElement('div');
          rowEl.className = 'board-row';
          cells.forEach((value, col) => {
            const button = document.createElement('button');
            button.className = isWinning(state, row, col) ? 'square-winning' : 'square';
            button.textContent = value;
            button.addEventListener('click', () => play(row, col));
            rowEl.appendChild(button);
          });
          board.appendChild(rowEl);
        });

        const moves = document.getElementById('moves');
        moves.innerHTML = '';
        state.history.forEach((entry) => {
          const li = document.createElement('li');
          if (entry.isCurrent) {
            li.textContent = entry.label;
          } else {
            const button = document.createElement('button');
            button.textContent = entry.label;
            button.addEventListener('click', () => jump(entry.move));
            li.appendChild(button);
          }
          moves.appendChild(li);
        });
      }

      async function play(row, col) {
        render(await post(`/api/game/${gameId}/move`, { row, col }));
      }

      async function jump(move) {
        render(await post(`/api/game/${gameId}/jump`, { move }));
      }

      post('/api/game').then(render);
    </script>
  </body>
</html>
"""
