#!/usr/bin/env python3
"""
Benchmark: measure /move request throughput of the server.

Sends the same recorded game state to /move many times through an in-process
test client (no sockets) with a move function that answers immediately, so
the figure reflects decode, dispatch, encode and logging overhead only.
Run before and after changes to the request path to spot regressions.

Usage: python3 tools/bench.py [--requests N] [--debug]
"""
import argparse
import io
import os
import sys
import time
from pathlib import Path

_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from fastapi.testclient import TestClient  # noqa: E402

from snakeserver import (  # noqa: E402
    BattlesnakeServer,
    InfoResponse,
    LogLevel,
    MoveResponse,
    ServerConfig,
    new_line_logger,
)

FIXTURE = Path(_REPO_ROOT) / "tests" / "fixtures" / "move_test.json"


def run_bench(requests: int, levels: int) -> dict:
    """Time `requests` POST /move calls and return the metrics.

    Log output goes to an in-memory buffer so terminal speed does not skew
    the timing.

    Args:
        requests: Number of requests to send.
        levels:   LogLevel mask for the server under test.

    Returns:
        Dict with keys: requests, seconds, rps, us_per_request.
    """
    info = InfoResponse(author="bench", color="#000000", head="default", tail="default", version="9.9")
    server = BattlesnakeServer(
        ServerConfig(info=info, port=0, log_levels=levels),
        lambda state, logger: MoveResponse(move="up", shout="Hi!"),
        logger=new_line_logger(io.StringIO(), name="snakeserver.bench"),
    )
    body = FIXTURE.read_bytes()
    headers = {"content-type": "application/json"}

    with TestClient(server) as client:
        start = time.perf_counter()
        for _ in range(requests):
            resp = client.post("/move", content=body, headers=headers)
            if resp.status_code != 200:
                raise RuntimeError(f"/move returned {resp.status_code}, want 200")
        elapsed = time.perf_counter() - start

    return {
        "requests": requests,
        "seconds": elapsed,
        "rps": requests / elapsed if elapsed else 0.0,
        "us_per_request": elapsed / requests * 1_000_000 if requests else 0.0,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark the /move handler.")
    parser.add_argument("--requests", type=int, default=2_000)
    parser.add_argument("--debug", action="store_true", help="enable debug request logging")
    args = parser.parse_args()

    levels = LogLevel.DEFAULT | LogLevel.DEBUG if args.debug else LogLevel.DEFAULT
    print(f"Battlesnake server benchmark: {sys.executable}")
    print(f"Fixture: {FIXTURE}")
    print()

    r = run_bench(args.requests, levels)
    print(f"{'Requests':<10} {'Time(s)':>9} {'Req/s':>10} {'us/req':>9}")
    print("-" * 41)
    print(f"{r['requests']:<10,} {r['seconds']:>9.3f} {r['rps']:>10,.0f} {r['us_per_request']:>9,.1f}")


if __name__ == "__main__":
    main()
