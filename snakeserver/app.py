"""
FastAPI application for a Battlesnake server.

Exposes the four routes the Battlesnake game engine calls:

    /        info: who we are and how the snake looks
    /start   a game has started
    /move    choose the next move; answered by the caller's move function
    /end     a game has ended

Architecture notes:
- Path-only dispatch: routes are registered without a method list, so every
  route accepts any HTTP method. Any path that is not registered falls
  through to the index handler, which answers 404 unless the path is
  exactly "/".
- Stateless per request: each request carries the full game state; nothing
  is kept between requests. The only shared objects are the immutable
  configuration and the Logger.
- The move function is ordinary blocking code. It runs in Starlette's worker
  thread pool so that concurrent games never wait on each other, which means
  it must be safe to call from several threads at once.
- Decoding is done by hand rather than through FastAPI body parameters so
  that bad payloads are answered with 400 (not FastAPI's 422) and logged with
  the name of the route that received them.
"""

import functools
import logging
import socket
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping

import uvicorn
from fastapi import FastAPI, Request, Response
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect

from snakeserver.constants import API_VERSION, DEFAULT_HOST, DEFAULT_PORT, JSON_MEDIA_TYPE, LogLevel
from snakeserver.logger import Logger, new_line_logger
from snakeserver.models import GameState, InfoResponse, MoveResponse, decode_game_state

MoveFunc = Callable[[GameState, Logger], MoveResponse | Mapping[str, Any]]
Handler = Callable[[Request], Awaitable[Response]]


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ServerConfig:
    """
    Everything the server needs to know up front.

    Fields:
        info:       Identity and appearance reported at GET /. Its api_version
                    is replaced by API_VERSION when the server is built.
        port:       TCP port to listen on. 0 picks a free port.
        log_levels: Bitmask of enabled LogLevel flags, e.g.
                    ``LogLevel.DEFAULT | LogLevel.DEBUG``.
        host:       Interface to bind. Empty string means all interfaces.
    """

    info: InfoResponse
    port: int = DEFAULT_PORT
    log_levels: int = LogLevel.DEFAULT
    host: str = DEFAULT_HOST


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


class BattlesnakeServer:
    """
    A Battlesnake server instance.

    The instance is itself an ASGI application, so it can be handed to any
    ASGI server or test client; start() serves it with uvicorn.

    Attributes:
        config:    The configuration the server was built with.
        info:      Copy of config.info with api_version forced to API_VERSION.
        logger:    Leveled logger shared with the move function. Its sink
                   should accept DEBUG records; see Logger.
        move_func: Callable (GameState, Logger) -> MoveResponse. It may also
                   return a mapping such as ``{"move": "up"}``.
        app:       The underlying FastAPI application.

    Example:
        >>> info = InfoResponse(author="me", color="#888888", head="default",
        ...                     tail="default", version="0.0.1")
        >>> def move(state, logger):
        ...     return MoveResponse(move="up")
        >>> server = BattlesnakeServer(ServerConfig(info=info, port=8080), move)
        >>> server.start()  # doctest: +SKIP
    """

    def __init__(
        self,
        config: ServerConfig,
        move_func: MoveFunc,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config
        self.info = config.info.model_copy(update={"api_version": API_VERSION})
        self.logger = Logger(logger if logger is not None else new_line_logger(), config.log_levels)
        self.move_func = move_func

        app = FastAPI(title="Battlesnake", docs_url=None, redoc_url=None, openapi_url=None)
        app.add_route("/", self.with_request_logging(self.index))
        app.add_route("/start", self.with_request_logging(self.start_game))
        app.add_route("/end", self.with_request_logging(self.end_game))
        app.add_route("/move", self.with_request_logging(self.move))
        # Catch-all, registered last: unknown paths reach the index handler.
        app.add_route("/{path:path}", self.with_request_logging(self.index))
        self.app = app

    async def __call__(self, scope, receive, send) -> None:
        await self.app(scope, receive, send)

    def start(self) -> None:
        """
        Bind the listening socket and serve until the process is stopped.

        The socket is bound before uvicorn starts so that a bind failure
        reaches the caller as an exception instead of a uvicorn exit.

        Raises:
            OSError: The port could not be bound (in use, no permission, ...).
        """
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((self.config.host, self.config.port))
        except OSError:
            sock.close()
            raise

        host, port = sock.getsockname()[:2]
        self.logger.printf("START server running at %s:%d...", host, port)
        self.logger.debug("request debug logging enabled")

        server = uvicorn.Server(uvicorn.Config(self.app, log_level="warning", access_log=False))
        try:
            server.run(sockets=[sock])
        finally:
            sock.close()

    # -----------------------------------------------------------------------
    # Route handlers
    # -----------------------------------------------------------------------

    async def index(self, request: Request) -> Response:
        """Serve the info response at "/", 404 anywhere else."""
        if request.url.path != "/":
            return Response(status_code=404)
        try:
            content = self.info.model_dump_json(by_alias=True)
        except ValueError as exc:
            self.logger.err("Failed to encode index response: %s", exc)
            return Response(status_code=500)
        return Response(content=content, media_type=JSON_MEDIA_TYPE)

    async def start_game(self, request: Request) -> Response:
        state = await self._decode_state(request, "start")
        if state is None:
            return Response(status_code=400)
        self.logger.info("Game ID %s [Turn %d] Snake ID %s - Start", state.game.id, state.turn, state.you.id)
        return Response(status_code=200)

    async def end_game(self, request: Request) -> Response:
        state = await self._decode_state(request, "end")
        if state is None:
            return Response(status_code=400)
        self.logger.info("Game ID %s [Turn %d] Snake ID %s - End", state.game.id, state.turn, state.you.id)
        return Response(status_code=200)

    async def move(self, request: Request) -> Response:
        """
        Decode the game state, ask the move function for a move, and return it.

        Returns:
            200 with the MoveResponse JSON, 400 if the body is not a valid
            game state, 500 if the move function fails or returns something
            that is not a MoveResponse.
        """
        state = await self._decode_state(request, "move")
        if state is None:
            return Response(status_code=400)

        try:
            result = await run_in_threadpool(self.move_func, state, self.logger)
        except Exception as exc:
            self.logger.err("Move function failed: %s", exc)
            return Response(status_code=500)

        try:
            resp = MoveResponse.model_validate(result)
            content = resp.model_dump_json(by_alias=True)
        except ValueError as exc:
            self.logger.err("Failed to encode move response, %s", exc)
            return Response(status_code=500)

        self.logger.info(
            "Game ID %s [Turn %d] Snake ID %s - Move: %s",
            state.game.id,
            state.turn,
            state.you.id,
            resp.move,
        )
        return Response(content=content, media_type=JSON_MEDIA_TYPE)

    async def _decode_state(self, request: Request, event: str) -> GameState | None:
        """Decode the request body as a GameState; log and return None on failure."""
        try:
            body = await request.body()
        except ClientDisconnect as exc:
            self.logger.err("Failed to read %s request body: %s", event, exc)
            return None
        try:
            return decode_game_state(body)
        except ValidationError as exc:
            self.logger.err("Failed to decode %s request body: %s", event, exc)
            return None

    # -----------------------------------------------------------------------
    # Request logging
    # -----------------------------------------------------------------------

    def with_request_logging(self, handler: Handler) -> Handler:
        """
        Wrap `handler` so every request body is logged at debug level.

        Whether debug logging is on is decided once, here: with DEBUG off the
        handler is returned unchanged and bodies are never read early.

        With DEBUG on, the wrapper reads the whole body before the handler
        runs. Starlette keeps the bytes on the Request, so the handler's own
        read sees exactly the same body. A failed read (the client went away)
        is answered with 400 and the handler is not called.
        """
        if not self.logger.enabled(LogLevel.DEBUG):
            return handler

        @functools.wraps(handler)
        async def logged(request: Request) -> Response:
            try:
                body = await request.body()
            except ClientDisconnect as exc:
                self.logger.err("Failed to read request body: %s", exc)
                return Response(status_code=400)
            self.logger.debug(
                "%s %s %s",
                request.method,
                request.url.path,
                body.decode("utf-8", errors="replace"),
            )
            return await handler(request)

        return logged
