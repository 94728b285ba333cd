"""Read-only board projection handed to presentation layers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional, Tuple

from .game.board import BOARD_SIZE, Color, GameState


@dataclass(frozen=True)
class GamePiece:
    id: uuid.UUID
    color: Color


Row = Tuple[Optional[GamePiece], ...]


@dataclass(frozen=True)
class GameViewState:
    pieces: Tuple[Row, ...]
    winner: Optional[Color] = None

    def piece_at(self, row: int, col: int) -> Optional[GamePiece]:
        return self.pieces[row][col]

    def occupied(self) -> int:
        return sum(1 for row in self.pieces for cell in row if cell is not None)


def project(state: GameState) -> GameViewState:
    grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    for player in state.players.values():
        for piece in player.pieces:
            pos = piece.position
            # Off-board pieces can only come from unchecked moves; they are not drawn
            if pos.on_board():
                grid[pos.row][pos.col] = GamePiece(id=piece.id, color=piece.color)
    return GameViewState(
        pieces=tuple(tuple(row) for row in grid),
        winner=state.winner,
    )
