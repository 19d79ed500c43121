import random
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .constants import TILE_DISTRIBUTION
from .models import Tile


class TileBag(BaseModel):
    """The undrawn tiles.

    Tiles are kept shuffled and drawn from the end. Every shuffle is seeded from
    ``(seed, shuffles)`` so a restored snapshot draws exactly what the original
    would have.
    """

    tiles: List[Tile] = Field(default_factory=list)
    seed: int = 0
    shuffles: int = 0

    @classmethod
    def full(cls, seed: Optional[int] = None,
             distribution: Optional[Dict[str, int]] = None) -> 'TileBag':
        """Creates and shuffles a bag holding the whole letter distribution."""
        if seed is None:
            seed = random.randrange(2 ** 32)
        distribution = distribution or TILE_DISTRIBUTION
        tiles = [Tile.make(letter) for letter, count in distribution.items()
                 for _ in range(count)]
        bag = cls(tiles=tiles, seed=seed)
        bag.shuffle()
        return bag

    def __len__(self) -> int:
        return len(self.tiles)

    @property
    def is_empty(self) -> bool:
        return not self.tiles

    def shuffle(self) -> None:
        rng = random.Random(self.seed * 1_000_003 + self.shuffles)
        rng.shuffle(self.tiles)
        self.shuffles += 1

    def draw(self, count: int) -> List[Tile]:
        """Draws up to ``count`` tiles; an exhausted bag simply yields fewer."""
        drawn = []
        for _ in range(count):
            if not self.tiles:
                break
            drawn.append(self.tiles.pop())
        return drawn

    def return_and_reshuffle(self, tiles: List[Tile]) -> None:
        for tile in tiles:
            self.tiles.append(tile.model_copy(update={"selected_for_swap": False}))
        self.shuffle()
