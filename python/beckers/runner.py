"""Asyncio turn loop that asks move sources for moves and applies them."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional

from .ai import MoveSource, RandomAgent
from .game.board import Color, GameState, PlayerMove, Position
from .game.rules import InvalidCaptureError, MovePolicy, apply_move
from .human import HumanInput
from .relay import TapRelay
from .view import GameViewState, project


LOG = logging.getLogger("beckers.runner")

Observer = Callable[[GameViewState], None]


class RunnerStatus(Enum):
    IDLE = auto()
    PLAYING = auto()
    FINISHED = auto()
    STOPPED = auto()
    FAILED = auto()


@dataclass
class GameEnvironment:
    red_move: MoveSource
    black_move: MoveSource

    def source_for(self, color: Color) -> MoveSource:
        return self.red_move if color is Color.RED else self.black_move

    @classmethod
    def mock(cls, delay: float = 2.0, seed: Optional[int] = None) -> "GameEnvironment":
        agent = RandomAgent(delay=delay, seed=seed)
        return cls(red_move=agent, black_move=agent)

    @classmethod
    def human_vs_human(cls, relay: TapRelay) -> "GameEnvironment":
        human = HumanInput(relay)
        return cls(red_move=human, black_move=human)

    @classmethod
    def human_vs_ai(
        cls,
        relay: TapRelay,
        human: Color = Color.BLACK,
        delay: float = 2.0,
        seed: Optional[int] = None,
    ) -> "GameEnvironment":
        sources = {human: HumanInput(relay), human.opposing: RandomAgent(delay=delay, seed=seed)}
        return cls(red_move=sources[Color.RED], black_move=sources[Color.BLACK])


class GameRunner:
    def __init__(
        self,
        state: GameState,
        environment: GameEnvironment,
        *,
        relay: Optional[TapRelay] = None,
        policy: Optional[MovePolicy] = None,
        rejected_move_consumes_turn: bool = True,
    ) -> None:
        self.state = state
        self.environment = environment
        self.relay = relay or TapRelay()
        self.policy = policy
        self.rejected_move_consumes_turn = rejected_move_consumes_turn

        self.status = RunnerStatus.IDLE
        self.turn_count = 0
        self.moves_requested = 0
        self._view_state = project(state)
        self._observers: List[Observer] = []
        self._task: Optional[asyncio.Task] = None

    @property
    def view_state(self) -> GameViewState:
        return self._view_state

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def start(self) -> asyncio.Task:
        if self.status is not RunnerStatus.IDLE:
            raise RuntimeError(f"cannot start a runner that is {self.status.name.lower()}")
        self.status = RunnerStatus.PLAYING
        self._task = asyncio.create_task(self.run())
        return self._task

    def stop(self) -> None:
        if self.status in (RunnerStatus.FINISHED, RunnerStatus.FAILED, RunnerStatus.STOPPED):
            return
        self.status = RunnerStatus.STOPPED
        if self._task is not None and not self._task.done():
            self._task.cancel()
        LOG.info("Game stopped after %d turns", self.turn_count)

    async def wait(self) -> None:
        if self._task is None:
            raise RuntimeError("runner was never started")
        await asyncio.wait({self._task})
        if not self._task.cancelled():
            # Surfaces InvalidCaptureError from the loop
            self._task.result()

    def notify_tap(self, row: int, col: int) -> None:
        self.relay.publish_threadsafe(Position(row, col))

    async def next_move(self) -> PlayerMove:
        source = self.environment.source_for(self.state.current_player)
        self.moves_requested += 1
        return await source(self.state)

    async def run(self) -> None:
        self.status = RunnerStatus.PLAYING
        LOG.info("Game started, %s to move", self.state.current_player)
        try:
            while self.state.winner is None:
                color = self.state.current_player
                move = await self.next_move()

                try:
                    result = apply_move(self.state, move, color, self.policy)
                except InvalidCaptureError:
                    self.status = RunnerStatus.FAILED
                    LOG.critical("Aborting game after invalid capture by %s: %s", color, move)
                    raise

                self._check_winner()

                if result.applied or self.rejected_move_consumes_turn:
                    self.state.toggle_turn()
                self.turn_count += 1
                self._publish()
        except asyncio.CancelledError:
            self.status = RunnerStatus.STOPPED
            raise

        self.status = RunnerStatus.FINISHED
        LOG.info("Game finished after %d turns, %s wins", self.turn_count, self.state.winner)

    def _check_winner(self) -> None:
        # Black is checked for emptiness first, so Red takes a simultaneous wipe-out
        if self.state.black_player.is_empty():
            self.state.winner = Color.RED
        elif self.state.red_player.is_empty():
            self.state.winner = Color.BLACK

    def _publish(self) -> None:
        self._view_state = project(self.state)
        for observer in list(self._observers):
            try:
                observer(self._view_state)
            except Exception:  # pragma: no cover - observer bug
                LOG.exception("Observer %r failed", observer)
