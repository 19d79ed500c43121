"""Turn engine: the only way a game changes.

``apply_action`` takes a game and an action and returns a new game plus a
``MoveResult``. The game passed in is never modified; a rejected action raises
an ``ActionError`` and the caller keeps its original game.
"""
import logging
from typing import Iterable, List, Optional, Tuple, Union

from .board import Board
from .constants import MAX_PLAYERS, MIN_PLAYERS
from .dictionary import Dictionary
from .errors import (GameOver, InsufficientBagForExchange, InvalidWord,
                     NotPlayersTurn)
from .game import Game
from .models import (Action, EndReason, Exchange, GameConfig, GameStatus,
                     MoveResult, Participant, Pass, PlacementOutcome,
                     PlaceWord, Player, Resign, WinType)
from .tile_bag import TileBag
from .utils import take_from_rack

logger = logging.getLogger(__name__)


def new_game(participants: Iterable[Union[Participant, dict]], dictionary: Dictionary,
             config: Optional[GameConfig] = None, seed: Optional[int] = None) -> Game:
    """Seats the participants in the given order and deals a full rack to each."""
    config = config or GameConfig()
    seated = [p if isinstance(p, Participant) else Participant.model_validate(p)
              for p in participants]
    if not MIN_PLAYERS <= len(seated) <= MAX_PLAYERS:
        raise ValueError(f"A game needs {MIN_PLAYERS} to {MAX_PLAYERS} players, got {len(seated)}.")

    bag = TileBag.full(seed)
    if len(bag) < config.rack_size * len(seated):
        raise ValueError("Not enough tiles to deal every player a full rack.")

    players = [
        Player(player_id=p.player_id, name=p.name or p.player_id, kind=p.kind, my_turn=(i == 0))
        for i, p in enumerate(seated)
    ]
    game = Game(board=Board(), bag=bag, players=players, config=config,
                initial_tile_count=len(bag))
    game.attach_dictionary(dictionary)
    for player in game.players:
        player.rack = game.bag.draw(config.rack_size)

    logger.info(
        f"New game {game.game_id} (seed {bag.seed}) with {', '.join(p.name for p in players)}.")
    return game


def evaluate_placement(game: Game, action: PlaceWord) -> PlacementOutcome:
    """
    Validates and scores a placement without changing anything.

    Checks the player's rack, the board rules and every formed word against the
    dictionary, and adds the bingo bonus when a whole rack is played.
    """
    player = game.player(action.player_id)
    taken, _ = take_from_rack(player.rack, action.tiles)
    outcome = game.board.place(taken, action.origin, action.direction)

    if not outcome.words:
        raise InvalidWord(outcome.main_word)
    for word in outcome.words:
        if not game.dictionary.is_valid_word(word.word):
            raise InvalidWord(word.word)

    if len(taken) == game.config.rack_size:
        outcome = outcome.model_copy(update={"bonus": game.config.bingo_bonus})
    return outcome


def apply_action(game: Game, action: Action) -> Tuple[Game, MoveResult]:
    if game.is_over:
        raise GameOver("The game is already over.")
    index = game.player_index(action.player_id)
    if index != game.current_player_index:
        raise NotPlayersTurn(
            f"It is {game.current_player.name}'s turn, not {game.players[index].name}'s.")
    if isinstance(action, (PlaceWord, Exchange)):
        take_from_rack(game.players[index].rack, action.tiles)

    state = game.model_copy(deep=True)
    player = state.players[index]
    words: List[str] = []
    tiles_placed = 0
    score_delta = 0

    if isinstance(action, PlaceWord):
        outcome = evaluate_placement(state, action)
        state.board.commit(outcome)
        _, player.rack = take_from_rack(player.rack, action.tiles)
        refill_rack(state, player)
        player.score += outcome.score
        state.consecutive_scoreless_turns = 0
        words = [w.word for w in outcome.words]
        tiles_placed = len(outcome.placed)
        score_delta = outcome.score
        summary = f"{player.name} played '{outcome.main_word}' for {score_delta} pts. Words: {', '.join(words)}."
        if outcome.bonus:
            summary += f" Bingo (+{outcome.bonus})!"
    elif isinstance(action, Exchange):
        if len(state.bag) < state.config.rack_size:
            raise InsufficientBagForExchange(
                f"Only {len(state.bag)} tiles left in the bag; exchanging needs {state.config.rack_size}.")
        taken, remaining = take_from_rack(player.rack, action.tiles)
        # Draw before returning so the player cannot get the same tiles back.
        drawn = state.bag.draw(len(taken))
        state.bag.return_and_reshuffle(taken)
        player.rack = remaining + drawn
        state.consecutive_scoreless_turns += 1
        summary = f"{player.name} exchanged {len(taken)} tile(s)."
    elif isinstance(action, Pass):
        state.consecutive_scoreless_turns += 1
        summary = f"{player.name} passed."
    elif isinstance(action, Resign):
        player.resigned = True
        summary = f"{player.name} resigned."
    else:
        raise TypeError(f"Unsupported action type: {type(action).__name__}")

    status = _evaluate_end_of_game(state, index)
    next_index = _next_player_index(state, index)
    state.current_player_index = next_index
    for i, p in enumerate(state.players):
        p.my_turn = status is None and i == next_index
    if status is not None:
        state.status = status
        summary += f" {describe_status(state)}"

    result = MoveResult(
        player_id=player.player_id, action=action.kind, score_delta=score_delta,
        words=words, tiles_placed=tiles_placed, game_over=status is not None,
        next_player_index=next_index, summary=summary,
    )
    state.history.append(result)

    assert state.tile_count() == state.initial_tile_count, \
        f"tile count {state.tile_count()} != {state.initial_tile_count} after {action.kind}"
    logger.info(f"Game {state.game_id}: {summary}")
    return state, result


def refill_rack(game: Game, player: Player) -> None:
    """Refills a player's rack to full from the bag, if possible."""
    needed = game.config.rack_size - len(player.rack)
    if needed > 0:
        player.rack.extend(game.bag.draw(needed))


def _evaluate_end_of_game(game: Game, index: int) -> Optional[GameStatus]:
    player = game.players[index]

    if not player.rack and game.bag.is_empty:
        bonus = 0
        for other in game.players:
            if other is player:
                continue
            value = other.rack_value()
            other.score -= value
            bonus += value
        player.score += bonus
        return _final_status(game, EndReason.OUT_OF_TILES)

    still_playing = [p for p in game.players if not p.resigned]
    if len(still_playing) < 2:
        return GameStatus(win_type=WinType.WIN, reason=EndReason.RESIGNATION,
                          winner_id=still_playing[0].player_id if still_playing else None,
                          final_scores=game.scores())

    if game.consecutive_scoreless_turns >= game.config.max_consecutive_scoreless_turns:
        return _final_status(game, EndReason.CONSECUTIVE_PASSES)
    return None


def _final_status(game: Game, reason: EndReason) -> GameStatus:
    """Highest score among players who have not resigned wins; equal top scores are a tie."""
    contenders = [p for p in game.players if not p.resigned]
    top = max(p.score for p in contenders)
    leaders = [p.player_id for p in contenders if p.score == top]
    if len(leaders) == 1:
        return GameStatus(win_type=WinType.WIN, reason=reason, winner_id=leaders[0],
                          final_scores=game.scores())
    return GameStatus(win_type=WinType.TIE, reason=reason, tied_player_ids=leaders,
                      final_scores=game.scores())


def _next_player_index(game: Game, index: int) -> int:
    """Next seat after ``index`` in seat order. Only resigned seats are skipped; with no
    resignations this is always ``(index + 1) % len(players)``."""
    count = len(game.players)
    for step in range(1, count + 1):
        candidate = (index + step) % count
        if not game.players[candidate].resigned:
            return candidate
    return index


def describe_status(game: Game) -> str:
    status = game.status
    if status is None:
        return "Game in progress."
    names = {p.player_id: p.name for p in game.players}
    if status.win_type is WinType.TIE:
        tied = ", ".join(names[pid] for pid in status.tied_player_ids)
        return f"GAME OVER ({status.reason.value}): tie between {tied}."
    winner = names.get(status.winner_id, status.winner_id)
    return f"GAME OVER ({status.reason.value}): {winner} wins with {status.final_scores.get(status.winner_id, 0)} pts."
