"""Move application built on top of :mod:`beckers.game.board`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from .board import Color, GameState, PlayerMove, Position


LOG = logging.getLogger("beckers.rules")


class InvalidCaptureError(RuntimeError):
    """A jump landed over a cell with no opposing piece.

    Only a move source that skipped validation can produce this, so it is
    treated as a programming error and never recovered from.
    """


@dataclass
class MoveResult:
    applied: bool
    captured: Optional[Position] = None
    error: Optional[str] = None


def is_jump(move: PlayerMove) -> bool:
    row_jump, col_jump = move.delta
    return abs(row_jump) == 2 and abs(col_jump) == 2


def jumped_position(move: PlayerMove) -> Position:
    row_jump, col_jump = move.delta
    return Position(
        row=move.from_position.row + row_jump // 2,
        col=move.from_position.col + col_jump // 2,
    )


class MovePolicy(Protocol):
    def check(self, state: GameState, move: PlayerMove, color: Color) -> Optional[str]:
        """Return a rejection reason, or None when the move may be applied."""
        ...


class PermissivePolicy:
    """Trusts the move source completely; only the jump geometry is inspected."""

    def check(self, state: GameState, move: PlayerMove, color: Color) -> Optional[str]:
        return None


class StrictPolicy:
    """Single diagonal steps onto empty cells, or diagonal jumps over an opponent.

    There are no kings, so pieces may step in either row direction.
    """

    def check(self, state: GameState, move: PlayerMove, color: Color) -> Optional[str]:
        target = move.to_position
        if not target.on_board():
            return "off_board"
        if state.is_occupied(target):
            return "target_occupied"

        row_jump, col_jump = move.delta
        if abs(row_jump) == 1 and abs(col_jump) == 1:
            return None
        if is_jump(move):
            if state.players[color.opposing].has_piece_at(jumped_position(move)):
                return None
            return "nothing_to_capture"
        return "not_diagonal"


DEFAULT_POLICY: MovePolicy = PermissivePolicy()


def apply_move(
    state: GameState,
    move: PlayerMove,
    color: Color,
    policy: Optional[MovePolicy] = None,
) -> MoveResult:
    LOG.info("Player %s made move %s", color, move)

    player = state.players[color]
    piece = player.piece_at(move.from_position)
    if piece is None:
        LOG.warning("Improper move by %s: no piece at %s", color, move.from_position)
        return MoveResult(applied=False, error="no_piece_at_origin")

    reason = (policy or DEFAULT_POLICY).check(state, move, color)
    if reason is not None:
        LOG.warning("Improper move by %s: %s (%s)", color, move, reason)
        return MoveResult(applied=False, error=reason)

    if not is_jump(move):
        piece.position = move.to_position
        return MoveResult(applied=True)

    # Resolve the jumped piece before touching the board
    captured_at = jumped_position(move)
    opponent = state.players[color.opposing]
    jumped = opponent.piece_at(captured_at)
    if jumped is None:
        raise InvalidCaptureError(f"{color} jumped a nonexistent piece at {captured_at} with {move}")

    piece.position = move.to_position
    opponent.pieces.remove(jumped)
    LOG.info("%s captured %s piece at %s", color, color.opposing, captured_at)
    return MoveResult(applied=True, captured=captured_at)
