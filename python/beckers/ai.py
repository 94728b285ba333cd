from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional

from .game.board import GameState, PlayerMove, Position


LOG = logging.getLogger("beckers.ai")

MoveSource = Callable[[GameState], Awaitable[PlayerMove]]


class RandomAgent:
    """Stand-in opponent: pauses, then moves a random piece of its own to ``target``.

    The destination is fixed and never checked for legality. Only the origin
    is guaranteed to be one of the acting color's live pieces.
    """

    def __init__(
        self,
        delay: float = 2.0,
        seed: Optional[int] = None,
        target: Position = Position(0, 0),
    ) -> None:
        self.delay = delay
        self.target = target
        self.rng = random.Random(seed)

    async def __call__(self, state: GameState) -> PlayerMove:
        # Simulated thinking time; always yields to the loop, even with no delay
        await asyncio.sleep(self.delay)

        color = state.current_player
        pieces = state.players[color].pieces
        if not pieces:
            raise ValueError(f"{color} has no pieces left to move")

        piece = self.rng.choice(pieces)
        move = PlayerMove(from_position=piece.position, to_position=self.target)
        LOG.debug("%s chose %s", self.description, move)
        return move

    @property
    def description(self) -> str:
        return f"Random(delay={self.delay})"
