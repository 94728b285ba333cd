"""Console front end: prints the board and reads taps as ``row col`` lines."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import threading
from typing import Optional, TextIO

from .config import ConfigError, Settings
from .game.board import BOARD_SIZE, Color, GameState
from .game.rules import InvalidCaptureError, StrictPolicy
from .relay import TapRelay
from .runner import GameEnvironment, GameRunner
from .view import GameViewState


LOG = logging.getLogger("beckers.cli")

MODES = ("ai-vs-ai", "human-vs-ai", "human-vs-human")
_SYMBOLS = {None: ".", Color.RED: "R", Color.BLACK: "B"}


def render_board(view: GameViewState, out: Optional[TextIO] = None) -> None:
    lines = ["   " + " ".join(str(col) for col in range(BOARD_SIZE))]
    for row in range(BOARD_SIZE):
        cells = []
        for col in range(BOARD_SIZE):
            piece = view.piece_at(row, col)
            cells.append(_SYMBOLS[piece.color if piece else None])
        lines.append(f"{row}  " + " ".join(cells))
    if view.winner is not None:
        lines.append(f"{view.winner} wins!")
    print("\n".join(lines) + "\n", file=out or sys.stdout, flush=True)


def parse_tap(line: str) -> Optional[tuple[int, int]]:
    parts = line.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        row, col = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
        return None
    return row, col


def _read_taps(runner: GameRunner, loop: asyncio.AbstractEventLoop, stream: TextIO) -> None:
    # Runs on a daemon thread; every hand-off goes through the loop
    for line in stream:
        text = line.strip().lower()
        if text in {"q", "quit", "exit"}:
            break
        tap = parse_tap(text)
        if tap is None:
            print("Enter a cell as 'row col' (0-7), or q to quit.", flush=True)
            continue
        runner.notify_tap(*tap)
    if not loop.is_closed():
        loop.call_soon_threadsafe(runner.stop)


def build_environment(mode: str, relay: TapRelay, settings: Settings, human: Color) -> GameEnvironment:
    if mode == "human-vs-human":
        return GameEnvironment.human_vs_human(relay)
    if mode == "human-vs-ai":
        return GameEnvironment.human_vs_ai(relay, human=human, delay=settings.ai_delay, seed=settings.ai_seed)
    return GameEnvironment.mock(delay=settings.ai_delay, seed=settings.ai_seed)


def build_runner(mode: str, settings: Settings, human: Color = Color.BLACK) -> GameRunner:
    relay = TapRelay()
    return GameRunner(
        GameState.new_game(),
        build_environment(mode, relay, settings, human),
        relay=relay,
        policy=StrictPolicy() if settings.strict_rules else None,
        rejected_move_consumes_turn=settings.rejected_move_consumes_turn,
    )


async def amain(args: argparse.Namespace, settings: Settings) -> int:
    runner = build_runner(args.mode, settings, Color(args.human_color))
    runner.subscribe(render_board)

    if args.max_turns:
        def limit(_: GameViewState) -> None:
            if runner.turn_count >= args.max_turns:
                LOG.info("Turn limit of %d reached", args.max_turns)
                runner.stop()

        runner.subscribe(limit)

    render_board(runner.view_state)
    if args.mode != "ai-vs-ai":
        print("Tap a cell by typing 'row col'. Enter q to quit.", flush=True)
        reader = threading.Thread(
            target=_read_taps,
            args=(runner, asyncio.get_running_loop(), sys.stdin),
            daemon=True,
        )
        reader.start()

    runner.start()
    await runner.wait()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Beckers console game")
    parser.add_argument("--mode", choices=MODES, default="human-vs-ai")
    parser.add_argument("--human-color", choices=[c.value for c in Color], default=Color.BLACK.value)
    parser.add_argument("--delay", type=float, help="AI thinking delay in seconds")
    parser.add_argument("--seed", type=int, help="seed for the random agent")
    parser.add_argument("--strict", action="store_true", default=None, help="enforce diagonal steps and jumps")
    parser.add_argument("--max-turns", type=int, default=0)
    parser.add_argument("--log-level")
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        parser.error(str(exc))

    if args.delay is not None:
        settings.ai_delay = max(0.0, args.delay)
    if args.seed is not None:
        settings.ai_seed = args.seed
    if args.strict is not None:
        settings.strict_rules = args.strict
    if args.log_level:
        settings.log_level = args.log_level.upper()

    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    try:
        return asyncio.run(amain(args, settings))
    except KeyboardInterrupt:
        LOG.info("Game interrupted")
        return 0
    except InvalidCaptureError as exc:
        LOG.critical("Game aborted: %s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    sys.exit(main())
