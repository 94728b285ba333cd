from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple


BOARD_SIZE = 8


class Color(Enum):
    RED = "red"
    BLACK = "black"

    @property
    def opposing(self) -> "Color":
        return Color.BLACK if self is Color.RED else Color.RED

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    def on_board(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


@dataclass
class Piece:
    color: Color
    position: Position
    # Presentation identity only, never compared
    id: uuid.UUID = field(default_factory=uuid.uuid4, compare=False)


@dataclass
class Player:
    pieces: List[Piece] = field(default_factory=list)

    def piece_at(self, position: Position) -> Optional[Piece]:
        return next((piece for piece in self.pieces if piece.position == position), None)

    def has_piece_at(self, position: Position) -> bool:
        return self.piece_at(position) is not None

    def positions(self) -> List[Position]:
        return [piece.position for piece in self.pieces]

    def is_empty(self) -> bool:
        return not self.pieces


@dataclass(frozen=True)
class PlayerMove:
    from_position: Position
    to_position: Position

    @property
    def delta(self) -> Tuple[int, int]:
        return (
            self.to_position.row - self.from_position.row,
            self.to_position.col - self.from_position.col,
        )

    def __str__(self) -> str:
        return f"{self.from_position}->{self.to_position}"


# Standard opening rows; columns alternate per row
_STARTING_ROWS: Dict[Color, Tuple[int, int]] = {
    Color.RED: (0, 1),
    Color.BLACK: (6, 7),
}


def _starting_pieces(color: Color) -> List[Piece]:
    pieces: List[Piece] = []
    for row in _STARTING_ROWS[color]:
        for col in range(row % 2, BOARD_SIZE, 2):
            pieces.append(Piece(color=color, position=Position(row, col)))
    return pieces


@dataclass
class GameState:
    players: Dict[Color, Player] = field(default_factory=dict)
    current_player: Color = Color.BLACK
    winner: Optional[Color] = None

    def __post_init__(self) -> None:
        # Both sides always have an entry, even when it holds no pieces;
        # the caller's dict is copied, not filled in
        self.players = dict(self.players)
        for color in Color:
            self.players.setdefault(color, Player())

    @classmethod
    def new_game(cls) -> "GameState":
        return cls(players={color: Player(_starting_pieces(color)) for color in Color})

    @classmethod
    def from_positions(
        cls,
        red: Iterable[Position] = (),
        black: Iterable[Position] = (),
        current_player: Color = Color.BLACK,
    ) -> "GameState":
        players = {
            Color.RED: Player([Piece(Color.RED, pos) for pos in red]),
            Color.BLACK: Player([Piece(Color.BLACK, pos) for pos in black]),
        }
        return cls(players=players, current_player=current_player)

    @property
    def red_player(self) -> Player:
        return self.players[Color.RED]

    @property
    def black_player(self) -> Player:
        return self.players[Color.BLACK]

    @property
    def all_pieces(self) -> List[Piece]:
        return self.black_player.pieces + self.red_player.pieces

    def piece_at(self, position: Position) -> Optional[Piece]:
        return next((piece for piece in self.all_pieces if piece.position == position), None)

    def is_occupied(self, position: Position) -> bool:
        return self.piece_at(position) is not None

    def toggle_turn(self) -> None:
        self.current_player = self.current_player.opposing
