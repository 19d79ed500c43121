import asyncio
import logging
from typing import Dict, List, Optional, Tuple

from fastapi import Depends, FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from models import (ExchangeRequest, GameStateResponse, MoveRequest,
                    NewGameRequest, PlayerRequest, PlayerState)
from scrabble_engine.ai_player import choose_action
from scrabble_engine.dictionary import Dictionary, get_default_dictionary
from scrabble_engine.engine import apply_action, new_game
from scrabble_engine.errors import ActionError
from scrabble_engine.game import Game
from scrabble_engine.models import (Action, Exchange, Pass, PlaceWord, Resign,
                                    Tile)

logging.basicConfig(level=logging.INFO,
                    format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = FastAPI(title="Scrabble Rules Engine Host")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"]
)

# In-memory only.
games: Dict[str, Game] = {}
game_locks: Dict[str, asyncio.Lock] = {}


def get_dictionary() -> Dictionary:
    return get_default_dictionary()


def _state_response(game: Game, message: Optional[str] = None) -> GameStateResponse:
    players = [
        PlayerState(
            player_id=p.player_id, name=p.name, kind=p.kind.value, score=p.score,
            my_turn=p.my_turn, resigned=p.resigned, rack=[t.rack_key for t in p.rack],
        )
        for p in game.players
    ]
    board = [[str(cell.tile) if cell.tile else None for cell in row] for row in game.board.cells]
    return GameStateResponse(
        game_id=game.game_id, board=board, scores=game.scores(), players=players,
        current_player=game.current_player.player_id, game_over=game.is_over,
        message=message, first_move=game.first_move, tiles_in_bag=len(game.bag),
        last_move=game.last_move_summary, status=game.status,
    )


def _tile_from_request(letter: str) -> Tile:
    if len(letter) != 1 or not letter.isalpha():
        raise HTTPException(status_code=400, detail=f"'{letter}' is not a letter.")
    return Tile.blank_as(letter) if letter.islower() else Tile.make(letter)


async def _run_computer_turns(game: Game) -> Tuple[Game, List[str]]:
    """Lets computer players move until a human is up or the game ends."""
    messages = []
    while not game.is_over and game.current_player.is_computer:
        player = game.current_player
        logger.info(f"AI turn starting for {player.name}.")
        action = await run_in_threadpool(choose_action, game, player.player_id)
        try:
            game, result = apply_action(game, action)
        except ActionError as e:
            logger.warning(f"AI Error ({e.message}). AI Passes.")
            game, result = apply_action(game, Pass(player_id=player.player_id))
        messages.append(result.summary)
    return game, messages


async def _play(game_id: str, action: Action) -> GameStateResponse:
    if game_id not in games:
        raise HTTPException(status_code=404, detail="Game not found.")
    async with game_locks[game_id]:
        game = games[game_id]
        try:
            game, result = apply_action(game, action)
        except ActionError as e:
            raise HTTPException(status_code=400, detail=e.message)
        game, ai_messages = await _run_computer_turns(game)
        games[game_id] = game
    return _state_response(game, " || ".join([result.summary] + ai_messages))


@app.post("/api/games", response_model=GameStateResponse, tags=["Game Flow"])
async def create_game(request: NewGameRequest, dictionary: Dictionary = Depends(get_dictionary)):
    try:
        game = new_game(request.participants, dictionary, config=request.config, seed=request.seed)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    game_locks[game.game_id] = asyncio.Lock()
    async with game_locks[game.game_id]:
        game, ai_messages = await _run_computer_turns(game)
        games[game.game_id] = game
    message = " || ".join(["New game started."] + ai_messages)
    return _state_response(game, message)


@app.get("/api/games/{game_id}", response_model=GameStateResponse, tags=["Game Info"])
async def get_game_state(game_id: str):
    if game_id not in games:
        raise HTTPException(status_code=404, detail="Game not found.")
    return _state_response(games[game_id], "Current game state retrieved.")


@app.post("/api/games/{game_id}/move", response_model=GameStateResponse, tags=["Game Actions"])
async def player_move(game_id: str, move: MoveRequest):
    tiles = [_tile_from_request(letter) for letter in move.tiles]
    action = PlaceWord(player_id=move.player_id, origin=(move.row, move.col),
                       direction=move.direction, tiles=tiles)
    return await _play(game_id, action)


@app.post("/api/games/{game_id}/exchange", response_model=GameStateResponse, tags=["Game Actions"])
async def player_exchange(game_id: str, request: ExchangeRequest):
    swapping = [tile for tile in request.rack if tile.selected_for_swap]
    if not swapping:
        raise HTTPException(status_code=400, detail="No tiles selected for exchange.")
    return await _play(game_id, Exchange(player_id=request.player_id, tiles=swapping))


@app.post("/api/games/{game_id}/pass", response_model=GameStateResponse, tags=["Game Actions"])
async def player_pass(game_id: str, request: PlayerRequest):
    return await _play(game_id, Pass(player_id=request.player_id))


@app.post("/api/games/{game_id}/resign", response_model=GameStateResponse, tags=["Game Actions"])
async def player_resign(game_id: str, request: PlayerRequest):
    return await _play(game_id, Resign(player_id=request.player_id))


if __name__ == "__main__":
    import uvicorn
    logger.info("Starting Scrabble rules engine host...")
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
