"""
Battlesnake server package.

This package implements the HTTP side of a Battlesnake: it receives game
events from the game engine, hands each move request to a move function
supplied by the embedding program, and returns the chosen move as JSON.

Modules:
    constants  API version, default port, and log level flags
    logger     Leveled logger gated by a bitmask of enabled levels
    models     Pydantic records for the Battlesnake JSON schema
    app        FastAPI application, request logging, and server start-up
"""

from snakeserver.app import BattlesnakeServer, MoveFunc, ServerConfig
from snakeserver.constants import API_VERSION, LogLevel
from snakeserver.logger import Logger, new_line_logger
from snakeserver.models import (
    Battlesnake,
    Board,
    Coord,
    Customizations,
    Direction,
    Game,
    GameState,
    InfoResponse,
    MoveResponse,
    RoyaleSettings,
    Ruleset,
    RulesetSettings,
    SquadSettings,
    decode_game_state,
)

__all__ = [
    "API_VERSION",
    "Battlesnake",
    "BattlesnakeServer",
    "Board",
    "Coord",
    "Customizations",
    "Direction",
    "Game",
    "GameState",
    "InfoResponse",
    "LogLevel",
    "Logger",
    "MoveFunc",
    "MoveResponse",
    "RoyaleSettings",
    "Ruleset",
    "RulesetSettings",
    "ServerConfig",
    "SquadSettings",
    "decode_game_state",
    "new_line_logger",
]
