from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import (BINGO_BONUS, BLANK, LETTER_SCORES, MAX_AI_CANDIDATES,
                        MAX_CONSECUTIVE_SCORELESS_TURNS, RACK_SIZE)

Coord = Tuple[int, int]


class Direction(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def step(self) -> Coord:
        """(row delta, col delta) for one cell along this direction."""
        return (0, 1) if self is Direction.HORIZONTAL else (1, 0)

    @property
    def cross(self) -> 'Direction':
        return Direction.VERTICAL if self is Direction.HORIZONTAL else Direction.HORIZONTAL


class Premium(str, Enum):
    DL = "DL"
    TL = "TL"
    DW = "DW"
    TW = "TW"


class PlayerKind(str, Enum):
    HUMAN = "human"
    COMPUTER = "computer"


class Tile(BaseModel):
    """A single letter tile.

    A blank sitting in a rack or the bag has ``letter == '?'``. Once played it
    keeps ``blank=True`` and carries the letter it stands for, still worth zero.
    """
    letter: str = Field(..., min_length=1, max_length=1)
    points: int = 0
    blank: bool = False
    selected_for_swap: bool = False

    @field_validator('letter')
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def make(cls, letter: str) -> 'Tile':
        letter = letter.upper()
        return cls(letter=letter, points=LETTER_SCORES.get(letter, 0), blank=letter == BLANK)

    @classmethod
    def blank_as(cls, letter: str) -> 'Tile':
        return cls(letter=letter.upper(), points=0, blank=True)

    @property
    def rack_key(self) -> str:
        """Letter under which this tile is held in a rack ('?' for any blank)."""
        return BLANK if self.blank else self.letter

    def __str__(self) -> str:
        return self.letter.lower() if self.blank and self.letter != BLANK else self.letter


class GameConfig(BaseModel):
    rack_size: int = Field(RACK_SIZE, ge=1)
    bingo_bonus: int = Field(BINGO_BONUS, ge=0)
    max_consecutive_scoreless_turns: int = Field(MAX_CONSECUTIVE_SCORELESS_TURNS, ge=1)
    max_ai_candidates: int = Field(MAX_AI_CANDIDATES, ge=1)


class Participant(BaseModel):
    player_id: str = Field(..., min_length=1)
    name: Optional[str] = None
    kind: PlayerKind = PlayerKind.HUMAN


class Player(BaseModel):
    player_id: str
    name: str
    kind: PlayerKind = PlayerKind.HUMAN
    rack: List[Tile] = Field(default_factory=list)
    score: int = 0
    my_turn: bool = False
    resigned: bool = False

    @property
    def is_computer(self) -> bool:
        return self.kind is PlayerKind.COMPUTER

    def rack_value(self) -> int:
        return sum(tile.points for tile in self.rack)

    def rack_letters(self) -> str:
        return "".join(tile.rack_key for tile in self.rack)


# ── Actions ─────────────────────────────────────────────────────────────


class PlaceWord(BaseModel):
    """Lay ``tiles`` on the successive empty cells from ``origin`` along ``direction``."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["place_word"] = "place_word"
    player_id: str
    origin: Coord
    direction: Direction
    tiles: List[Tile] = Field(..., min_length=1)

    @model_validator(mode='after')
    def _blanks_need_a_letter(self) -> 'PlaceWord':
        for tile in self.tiles:
            if tile.letter == BLANK:
                raise ValueError("A blank tile must be assigned a letter before it is placed.")
            if not tile.letter.isalpha():
                raise ValueError(f"'{tile.letter}' is not a letter.")
        return self


class Exchange(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["exchange"] = "exchange"
    player_id: str
    tiles: List[Tile] = Field(..., min_length=1)


class Pass(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["pass"] = "pass"
    player_id: str


class Resign(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["resign"] = "resign"
    player_id: str


Action = Annotated[Union[PlaceWord, Exchange, Pass, Resign], Field(discriminator="kind")]


# ── Results ─────────────────────────────────────────────────────────────


class PlacedTile(BaseModel):
    model_config = ConfigDict(frozen=True)

    row: int
    col: int
    tile: Tile


class WordScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    word: str
    score: int


class PlacementOutcome(BaseModel):
    """What a legal placement would do to the board, before dictionary checks."""
    model_config = ConfigDict(frozen=True)

    main_word: str
    words: List[WordScore] = Field(default_factory=list)
    placed: List[PlacedTile] = Field(default_factory=list)
    bonus: int = 0

    @property
    def score(self) -> int:
        return sum(word.score for word in self.words) + self.bonus


class MoveResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    player_id: str
    action: str
    score_delta: int = 0
    words: List[str] = Field(default_factory=list)
    tiles_placed: int = 0
    game_over: bool = False
    next_player_index: int
    summary: str = ""


class WinType(str, Enum):
    WIN = "win"
    TIE = "tie"


class EndReason(str, Enum):
    OUT_OF_TILES = "out_of_tiles"
    RESIGNATION = "resignation"
    CONSECUTIVE_PASSES = "consecutive_passes"


class GameStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    win_type: WinType
    reason: EndReason
    winner_id: Optional[str] = None
    tied_player_ids: List[str] = Field(default_factory=list)
    final_scores: Dict[str, int] = Field(default_factory=dict)
