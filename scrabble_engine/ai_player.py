import logging
import time
from collections import Counter
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .constants import ALPHABET, BLANK
from .dictionary import TrieNode
from .engine import evaluate_placement
from .errors import ActionError
from .game import Game
from .models import (Action, Coord, Direction, Exchange, Pass,
                     PlacementOutcome, PlaceWord, Player, Tile)
from .utils import find_anchor_squares

logger = logging.getLogger(__name__)


class MoveGenerator:
    """Enumerates candidate placements for one rack on one board.

    Walks every line from each possible start cell, filling empty cells with
    rack letters while following the dictionary trie, so only strings that can
    still become words are explored. Empty cells whose perpendicular neighbours
    admit no letter at all are rejected before any rack letter is tried.
    Candidates are only checked against the main word here; the caller runs the
    full rule and dictionary validation on each one.
    """

    def __init__(self, game: Game, player: Player):
        self.board = game.board
        self.dictionary = game.dictionary
        self.player_id = player.player_id
        self.rack = Counter(tile.rack_key for tile in player.rack)
        self.rack_size = len(player.rack)
        self.anchors: Set[Coord] = set(find_anchor_squares(self.board))
        self._cross_checks: Dict[Tuple[int, int, Direction], Optional[Set[str]]] = {}

    def candidates(self) -> Iterator[PlaceWord]:
        if not self.rack_size:
            return
        for direction in (Direction.HORIZONTAL, Direction.VERTICAL):
            dr, dc = direction.step
            for r in range(self.board.size):
                for c in range(self.board.size):
                    if self.board.is_occupied(r - dr, c - dc):
                        continue
                    if not self._reaches_anchor(r, c, direction):
                        continue
                    yield from self._extend(r, c, direction, self.dictionary.trie.root,
                                            [], None, False, 0)

    def _reaches_anchor(self, r: int, c: int, direction: Direction) -> bool:
        """True if a word starting at (r, c) could touch an anchor using the rack."""
        dr, dc = direction.step
        empties = 0
        while self.board.in_bounds(r, c):
            if self.board.is_occupied(r, c) or (r, c) in self.anchors:
                return True
            empties += 1
            if empties >= self.rack_size:
                return False
            r, c = r + dr, c + dc
        return False

    def _extend(self, r: int, c: int, direction: Direction, node: TrieNode,
                placed: List[Tile], origin: Optional[Coord], touched: bool,
                length: int) -> Iterator[PlaceWord]:
        dr, dc = direction.step
        if not self.board.in_bounds(r, c) or not self.board.is_occupied(r, c):
            # The word ends here: an edge or an empty cell follows it.
            if node.is_terminal and placed and touched and length >= 2:
                yield PlaceWord(player_id=self.player_id, origin=origin,
                                direction=direction, tiles=list(placed))
            if not self.board.in_bounds(r, c):
                return

        letter = self.board.letter_at(r, c)
        if letter is not None:
            child = node.children.get(letter)
            if child is not None:
                yield from self._extend(r + dr, c + dc, direction, child, placed,
                                        origin, True, length + 1)
            return

        allowed = self._cross_check(r, c, direction)
        if allowed is not None and not allowed:
            return
        touched = touched or (r, c) in self.anchors
        here = origin or (r, c)

        for rack_letter in sorted(k for k in self.rack if k != BLANK and self.rack[k] > 0):
            child = node.children.get(rack_letter)
            if child is None or (allowed is not None and rack_letter not in allowed):
                continue
            self.rack[rack_letter] -= 1
            placed.append(Tile.make(rack_letter))
            yield from self._extend(r + dr, c + dc, direction, child, placed, here,
                                    touched, length + 1)
            placed.pop()
            self.rack[rack_letter] += 1

        if self.rack[BLANK] > 0:
            for blank_letter, child in sorted(node.children.items()):
                if allowed is not None and blank_letter not in allowed:
                    continue
                self.rack[BLANK] -= 1
                placed.append(Tile.blank_as(blank_letter))
                yield from self._extend(r + dr, c + dc, direction, child, placed, here,
                                        touched, length + 1)
                placed.pop()
                self.rack[BLANK] += 1

    def _cross_check(self, r: int, c: int, direction: Direction) -> Optional[Set[str]]:
        """Letters that form a valid perpendicular word at (r, c); None when unconstrained."""
        key = (r, c, direction)
        if key in self._cross_checks:
            return self._cross_checks[key]

        dr, dc = direction.cross.step
        before = []
        rr, cc = r - dr, c - dc
        while self.board.is_occupied(rr, cc):
            before.append(self.board.letter_at(rr, cc))
            rr, cc = rr - dr, cc - dc
        after = []
        rr, cc = r + dr, c + dc
        while self.board.is_occupied(rr, cc):
            after.append(self.board.letter_at(rr, cc))
            rr, cc = rr + dr, cc + dc

        if not before and not after:
            allowed = None
        else:
            prefix = "".join(reversed(before))
            suffix = "".join(after)
            allowed = {ch for ch in ALPHABET
                       if self.dictionary.is_valid_word(prefix + ch + suffix)}
        self._cross_checks[key] = allowed
        return allowed


def find_best_placement(game: Game, player: Player) -> Optional[Tuple[PlaceWord, PlacementOutcome]]:
    """Highest scoring legal placement for ``player``, the first one found on equal scores."""
    best: Optional[Tuple[PlaceWord, PlacementOutcome]] = None
    evaluated = 0
    limit = game.config.max_ai_candidates
    for candidate in MoveGenerator(game, player).candidates():
        if evaluated >= limit:
            logger.warning(f"AI candidate limit of {limit} reached. Using best found.")
            break
        evaluated += 1
        try:
            outcome = evaluate_placement(game, candidate)
        except ActionError:
            continue
        if best is None or outcome.score > best[1].score:
            best = (candidate, outcome)
    logger.info(f"AI evaluated {evaluated} candidate placements for {player.name}.")
    return best


def choose_action(game: Game, player_id: str) -> Action:
    """
    Picks the move a computer player makes.

    The best scoring placement if there is one, otherwise an exchange of every
    non-blank tile when the bag allows it, otherwise a pass.
    """
    turn_start_time = time.time()
    player = game.player(player_id)
    logger.info(f"AI ({player.name}) thinking. Rack: [{', '.join(player.rack_letters())}]")

    best = find_best_placement(game, player)
    elapsed = time.time() - turn_start_time
    if best is not None:
        action, outcome = best
        logger.info(
            f"AI Chose: '{outcome.main_word}' at {action.origin} Dir:{action.direction.value}. "
            f"Score:{outcome.score}. ({elapsed:.3f}s)")
        return action

    if player.rack and len(game.bag) >= game.config.rack_size:
        tiles = [t for t in player.rack if not t.blank] or list(player.rack)
        logger.info(f"AI found no valid moves. Exchanging {len(tiles)} tiles. ({elapsed:.3f}s)")
        return Exchange(player_id=player_id, tiles=tiles)

    logger.info(f"AI found no valid moves. Passing. ({elapsed:.3f}s)")
    return Pass(player_id=player_id)
