#!/usr/bin/env python3
"""
Example Battlesnake: run a server whose snake picks a random safe move.

"Safe" only means the next square is on the board and not occupied by any
snake's body; there is no look-ahead. The point of this script is to show
how an embedding program wires a move function into BattlesnakeServer.

Usage:
    python3 tools/serve.py                      # port from $PORT or 8000
    python3 tools/serve.py --port 8080 --debug  # log every request body
"""

import argparse
import os
import random
import sys

# ---------------------------------------------------------------------------
# Path setup: make 'snakeserver' importable when this script is run directly
# from a checkout without installing the package.
# ---------------------------------------------------------------------------
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from snakeserver import (  # noqa: E402
    BattlesnakeServer,
    Direction,
    GameState,
    InfoResponse,
    Logger,
    LogLevel,
    MoveResponse,
    ServerConfig,
)

_STEPS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, 1),
    Direction.DOWN: (0, -1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


def safe_moves(state: GameState) -> list[Direction]:
    """Return the directions whose target square is on the board and free."""
    board = state.board
    occupied = {(seg.x, seg.y) for snake in board.snakes for seg in snake.body}
    head = state.you.head

    safe = []
    for direction, (dx, dy) in _STEPS.items():
        x, y = head.x + dx, head.y + dy
        if 0 <= x < board.width and 0 <= y < board.height and (x, y) not in occupied:
            safe.append(direction)
    return safe


def random_safe_move(state: GameState, logger: Logger) -> MoveResponse:
    """Move function: a random safe direction, or "down" when boxed in."""
    safe = safe_moves(state)
    if not safe:
        logger.warn("Game ID %s [Turn %d] no safe moves, going down", state.game.id, state.turn)
        return MoveResponse(move=Direction.DOWN.value)
    return MoveResponse(move=random.choice(safe).value)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run an example Battlesnake server.")
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")))
    parser.add_argument("--host", default="")
    parser.add_argument("--debug", action="store_true", help="log raw request bodies")
    parser.add_argument("--author", default="")
    parser.add_argument("--color", default="#888888")
    parser.add_argument("--head", default="default")
    parser.add_argument("--tail", default="default")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    levels = LogLevel.DEFAULT | LogLevel.DEBUG if args.debug else LogLevel.DEFAULT
    info = InfoResponse(
        author=args.author,
        color=args.color,
        head=args.head,
        tail=args.tail,
        version="0.0.1",
    )
    server = BattlesnakeServer(
        ServerConfig(info=info, port=args.port, log_levels=levels, host=args.host),
        random_safe_move,
    )
    server.start()


if __name__ == "__main__":
    main()
