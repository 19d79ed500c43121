from scrabble_engine.constants import TOTAL_TILES
from scrabble_engine.models import Tile
from scrabble_engine.tile_bag import TileBag


class TestTileBag:

    def test_full_bag(self):
        bag = TileBag.full(seed=1)
        assert len(bag) == TOTAL_TILES == 100
        assert sum(1 for t in bag.tiles if t.blank) == 2
        assert all(t.points == 0 for t in bag.tiles if t.blank)

    def test_draw_removes_tiles(self):
        bag = TileBag.full(seed=1)
        drawn = bag.draw(7)
        assert len(drawn) == 7
        assert len(bag) == 93

    def test_draw_more_than_left_is_not_an_error(self):
        bag = TileBag(tiles=[Tile.make("A"), Tile.make("B")], seed=3)
        assert len(bag.draw(7)) == 2
        assert bag.is_empty
        assert bag.draw(3) == []

    def test_same_seed_same_order(self):
        assert TileBag.full(seed=42).tiles == TileBag.full(seed=42).tiles

    def test_different_seed_different_order(self):
        assert TileBag.full(seed=42).tiles != TileBag.full(seed=43).tiles

    def test_return_and_reshuffle(self):
        bag = TileBag.full(seed=5)
        drawn = bag.draw(3)
        shuffles = bag.shuffles
        bag.return_and_reshuffle([t.model_copy(update={"selected_for_swap": True}) for t in drawn])
        assert len(bag) == TOTAL_TILES
        assert bag.shuffles == shuffles + 1
        assert not any(t.selected_for_swap for t in bag.tiles)

    def test_reshuffle_is_reproducible(self):
        first, second = TileBag.full(seed=9), TileBag.full(seed=9)
        for bag in (first, second):
            bag.return_and_reshuffle(bag.draw(4))
        assert first.tiles == second.tiles
