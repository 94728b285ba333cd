"""
Shared fixtures and helpers for the engine tests.
Scripted move sources stand in for humans and agents so game loops stay deterministic.
"""

import asyncio
from typing import Iterable, List

import pytest

from beckers.game.board import GameState, PlayerMove, Position


def move(from_rc, to_rc) -> PlayerMove:
    return PlayerMove(Position(*from_rc), Position(*to_rc))


class ScriptedSource:
    """Replays a fixed list of moves and records the states it was asked about."""

    def __init__(self, moves: Iterable[PlayerMove]) -> None:
        self.moves: List[PlayerMove] = list(moves)
        self.calls = 0
        self.seen_players = []

    async def __call__(self, state: GameState) -> PlayerMove:
        # Yield like a real source would; a cancelled call is not recorded
        await asyncio.sleep(0)
        self.calls += 1
        self.seen_players.append(state.current_player)
        if not self.moves:
            raise AssertionError("scripted source ran out of moves")
        return self.moves.pop(0)


@pytest.fixture
def new_game() -> GameState:
    return GameState.new_game()
