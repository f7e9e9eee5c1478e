"""
Request and response records for the Battlesnake API.

These mirror the public Battlesnake JSON schema (https://docs.battlesnake.com/api).
They carry no behaviour: the server decodes a GameState from every start, move
and end request, passes it to the move function, and forgets it once the
response is written.

Conventions:
- Python attributes are snake_case; the wire names (camelCase, or the odd
  all-lowercase "apiversion") are field aliases. Either form is accepted when
  decoding, and encoding always produces the wire names.
- Request bodies are decoded with decode_game_state(), which is strict
  about JSON types. Records built from Python values use pydantic's
  default (lax) validation.
- Every field has a zero-value default, so a partial payload, or even ``{}``,
  decodes to a usable GameState. Unknown keys are ignored, which keeps the
  server working when the game engine adds new fields.
"""

import enum

from pydantic import BaseModel, ConfigDict, Field

from snakeserver.constants import API_VERSION


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Direction(str, enum.Enum):
    """The four moves the game engine understands."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# ---------------------------------------------------------------------------
# Board contents
# ---------------------------------------------------------------------------


class Coord(_Record):
    """A square on the board. (0, 0) is the bottom-left corner."""

    x: int = 0
    y: int = 0


class Customizations(_Record):
    """Display colour and head/tail graphics of a snake."""

    color: str = ""
    head: str = ""
    tail: str = ""


class Battlesnake(_Record):
    """
    A snake on the board.

    Fields:
        body:    Segments from head to tail; ``body[0] == head``.
        latency: Response time of the snake's last move in milliseconds, as
                 a string ("0" on the first turn).
        squad:   Squad ID in squad games, empty otherwise.
    """

    id: str = ""
    name: str = ""
    health: int = 0
    body: list[Coord] = Field(default_factory=list)
    head: Coord = Field(default_factory=Coord)
    length: int = 0
    latency: str = ""
    shout: str = ""
    squad: str = ""
    customizations: Customizations = Field(default_factory=Customizations)


class Board(_Record):
    height: int = 0
    width: int = 0
    food: list[Coord] = Field(default_factory=list)
    hazards: list[Coord] = Field(default_factory=list)
    snakes: list[Battlesnake] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Game and ruleset
# ---------------------------------------------------------------------------


class RoyaleSettings(_Record):
    shrink_every_n_turns: int = Field(default=0, alias="shrinkEveryNTurns")


class SquadSettings(_Record):
    allow_body_collisions: bool = Field(default=False, alias="allowBodyCollisions")
    shared_elimination: bool = Field(default=False, alias="sharedElimination")
    shared_health: bool = Field(default=False, alias="sharedHealth")
    shared_length: bool = Field(default=False, alias="sharedLength")


class RulesetSettings(_Record):
    """All settings of a game's rule set, including the mode-specific ones."""

    food_spawn_chance: int = Field(default=0, alias="foodSpawnChance")
    minimum_food: int = Field(default=0, alias="minimumFood")
    hazard_damage_per_turn: int = Field(default=0, alias="hazardDamagePerTurn")
    hazard_map: str = Field(default="", alias="hazardMap")
    hazard_map_author: str = Field(default="", alias="hazardMapAuthor")
    royale: RoyaleSettings = Field(default_factory=RoyaleSettings)
    squad: SquadSettings = Field(default_factory=SquadSettings)


class Ruleset(_Record):
    name: str = ""
    version: str = ""
    settings: RulesetSettings = Field(default_factory=RulesetSettings)


class Game(_Record):
    """
    A Battlesnake game.

    Fields:
        map:     Name of the map used to populate the board.
        source:  Where the game was created ("league", "custom", ...).
        timeout: Milliseconds the snake has to answer each request.
    """

    id: str = ""
    ruleset: Ruleset = Field(default_factory=Ruleset)
    map: str = ""
    source: str = ""
    timeout: int = 0


class GameState(_Record):
    """
    State of a game at a given turn, sent with every start, move and end
    request. `you` is the snake this server plays.
    """

    game: Game = Field(default_factory=Game)
    turn: int = 0
    board: Board = Field(default_factory=Board)
    you: Battlesnake = Field(default_factory=Battlesnake)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class InfoResponse(_Record):
    """
    Body of the response to info requests (GET /).

    The server always reports API_VERSION in `api_version`, whatever value
    the embedding program supplies.
    """

    api_version: str = Field(default=API_VERSION, alias="apiversion")
    author: str = ""
    color: str = ""
    head: str = ""
    tail: str = ""
    version: str = ""


class MoveResponse(_Record):
    """
    Body of the response to move requests.

    Fields:
        move:  One of "up", "down", "left", "right". Passed through unchecked.
        shout: Optional message shown to the other players.
    """

    move: str
    shout: str = ""


def decode_game_state(data: bytes | str) -> GameState:
    """
    Decode a request body into a GameState.

    Validation is strict: a value of the wrong JSON type (a string or a
    boolean where a number belongs, a number where a string belongs) is an
    error rather than being coerced.

    Raises:
        pydantic.ValidationError: The body is not valid JSON, not an object,
            or has a field of the wrong type.
    """
    return GameState.model_validate_json(data, strict=True)
