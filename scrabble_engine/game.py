import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, PrivateAttr, model_validator

from .board import Board
from .constants import TOTAL_TILES
from .dictionary import Dictionary, get_default_dictionary
from .errors import UnknownPlayer
from .models import GameConfig, GameStatus, MoveResult, Player
from .tile_bag import TileBag

logger = logging.getLogger(__name__)


class Game(BaseModel):
    """Aggregate root of one game: board, bag, seated players, history and final status.

    The word dictionary is attached out of band; it is shared, never
    serialized, and must be re-attached when a snapshot is loaded.
    """

    game_id: str = Field(default_factory=lambda: uuid4().hex)
    board: Board = Field(default_factory=Board)
    bag: TileBag = Field(default_factory=TileBag)
    players: List[Player]
    current_player_index: int = 0
    consecutive_scoreless_turns: int = 0
    history: List[MoveResult] = Field(default_factory=list)
    status: Optional[GameStatus] = None
    config: GameConfig = Field(default_factory=GameConfig)
    initial_tile_count: int = TOTAL_TILES

    _dictionary: Optional[Dictionary] = PrivateAttr(default=None)

    @model_validator(mode='after')
    def _check_turn_invariant(self) -> 'Game':
        if not self.players:
            raise ValueError("A game needs at least one player.")
        if not 0 <= self.current_player_index < len(self.players):
            raise ValueError(f"Current player index {self.current_player_index} is out of range.")
        ids = [p.player_id for p in self.players]
        if len(set(ids)) != len(ids):
            raise ValueError("Player ids must be unique.")
        on_turn = [i for i, p in enumerate(self.players) if p.my_turn]
        if self.status is None and on_turn != [self.current_player_index]:
            raise ValueError("Exactly the current player must hold the turn.")
        return self

    @property
    def dictionary(self) -> Dictionary:
        """The attached dictionary, or the process-wide default. Reading it never changes the game."""
        if self._dictionary is None:
            return get_default_dictionary()
        return self._dictionary

    def attach_dictionary(self, dictionary: Dictionary) -> 'Game':
        self._dictionary = dictionary
        return self

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def is_over(self) -> bool:
        return self.status is not None

    @property
    def first_move(self) -> bool:
        return self.board.is_board_empty()

    @property
    def last_move_summary(self) -> Optional[str]:
        return self.history[-1].summary if self.history else None

    def player_index(self, player_id: str) -> int:
        for index, player in enumerate(self.players):
            if player.player_id == player_id:
                return index
        raise UnknownPlayer(f"No player '{player_id}' in this game.")

    def player(self, player_id: str) -> Player:
        return self.players[self.player_index(player_id)]

    def scores(self) -> Dict[str, int]:
        return {p.player_id: p.score for p in self.players}

    def tile_count(self) -> int:
        """Tiles in the bag, on every rack and on the board."""
        return len(self.bag) + sum(len(p.rack) for p in self.players) + self.board.count_tiles()

    def to_snapshot(self) -> Dict[str, Any]:
        return self.model_dump(mode='json')

    @classmethod
    def from_snapshot(cls, data: Dict[str, Any], dictionary: Optional[Dictionary] = None) -> 'Game':
        game = cls.model_validate(data)
        if dictionary is None:
            logger.info(f"Game {game.game_id} loaded without a dictionary, using the default one.")
            dictionary = get_default_dictionary()
        return game.attach_dictionary(dictionary)
