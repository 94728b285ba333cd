"""Move source driven by board taps."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, TypeVar

from .game.board import GameState, PlayerMove, Position
from .relay import TapRelay


LOG = logging.getLogger("beckers.human")

T = TypeVar("T")


async def next_value(fetch: Callable[[], Awaitable[T]], predicate: Callable[[T], bool]) -> T:
    # Keep waiting until a fetched value passes
    while True:
        value = await fetch()
        if predicate(value):
            return value
        LOG.debug("Ignoring %s", value)


class HumanInput:
    """Builds a move from two taps: one of the mover's pieces, then an empty cell."""

    def __init__(self, relay: TapRelay) -> None:
        self.relay = relay

    async def __call__(self, state: GameState) -> PlayerMove:
        color = state.current_player

        def own_piece(position: Position) -> bool:
            return state.players[color].has_piece_at(position)

        def empty_cell(position: Position) -> bool:
            # Step distance is left to the rules policy
            return not state.is_occupied(position)

        from_position = await next_value(self.relay.next_tap, own_piece)
        LOG.debug("%s selected piece at %s", color, from_position)
        to_position = await next_value(self.relay.next_tap, empty_cell)
        return PlayerMove(from_position=from_position, to_position=to_position)

    @property
    def description(self) -> str:
        return "Human"
