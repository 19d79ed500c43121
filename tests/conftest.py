import pytest

from scrabble_engine.dictionary import Dictionary
from scrabble_engine.engine import new_game
from scrabble_engine.models import Participant, PlayerKind

WORDS = [
    "AT", "TA", "AX", "XI", "ZA", "QI", "AA", "AS",
    "CAT", "CATS", "ACT", "TAX", "SCAT", "BAT", "TAB",
    "DOG", "GOD", "CRATERS",
]


@pytest.fixture
def dictionary():
    return Dictionary.from_words(WORDS)


@pytest.fixture
def game(dictionary):
    return new_game(
        [Participant(player_id="alice", name="Alice"),
         Participant(player_id="bob", name="Bob")],
        dictionary, seed=7,
    )


@pytest.fixture
def give_rack():
    """Swaps a player's rack for the given letters, taking them from the bag."""
    def _give(game, player_id, letters):
        player = game.player(player_id)
        game.bag.tiles.extend(player.rack)
        player.rack = []
        for letter in letters:
            index = next((i for i, t in enumerate(game.bag.tiles) if t.rack_key == letter), None)
            if index is not None:
                player.rack.append(game.bag.tiles.pop(index))
                continue
            # Every copy is on another rack: trade it for a tile from the bag.
            holder = next(p for p in game.players
                          if p is not player and any(t.rack_key == letter for t in p.rack))
            held = next(i for i, t in enumerate(holder.rack) if t.rack_key == letter)
            player.rack.append(holder.rack.pop(held))
            holder.rack.append(game.bag.tiles.pop())
        return player
    return _give


@pytest.fixture
def shrink_bag():
    """Leaves only ``remaining`` tiles in the bag and rebases the tile total."""
    def _shrink(game, remaining):
        game.bag.tiles = game.bag.tiles[:remaining]
        game.initial_tile_count = game.tile_count()
        return game
    return _shrink


@pytest.fixture
def computer_game(dictionary):
    return new_game(
        [Participant(player_id="alice", name="Alice"),
         Participant(player_id="hal", name="HAL", kind=PlayerKind.COMPUTER)],
        dictionary, seed=11,
    )
