from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from scrabble_engine.models import (Direction, GameConfig, GameStatus,
                                    Participant, Tile)


class NewGameRequest(BaseModel):
    participants: List[Participant] = Field(..., min_length=2)
    seed: Optional[int] = None
    config: Optional[GameConfig] = None


class PlayerRequest(BaseModel):
    player_id: str


class MoveRequest(BaseModel):
    """Tiles in the order they are laid; a lowercase letter plays a blank as that letter."""
    player_id: str
    row: int
    col: int
    direction: Direction
    tiles: List[str] = Field(..., min_length=1)


class ExchangeRequest(BaseModel):
    """The player's whole rack, with the tiles to swap flagged ``selected_for_swap``."""
    player_id: str
    rack: List[Tile]


class PlayerState(BaseModel):
    player_id: str
    name: str
    kind: str
    score: int
    my_turn: bool
    resigned: bool
    rack: List[str]


class GameStateResponse(BaseModel):
    game_id: str
    board: List[List[Optional[str]]]
    scores: Dict[str, int]
    players: List[PlayerState]
    current_player: str
    game_over: bool
    message: Optional[str] = None
    first_move: bool
    tiles_in_bag: int
    last_move: Optional[str] = None
    status: Optional[GameStatus] = None
