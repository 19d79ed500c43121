from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .constants import (BOARD_SIZE, CENTER, DL_COORDS, DW_COORDS,
                        LETTER_MULTIPLIERS, TL_COORDS, TW_COORDS,
                        WORD_MULTIPLIERS)
from .errors import (Disconnected, FirstMoveMustCoverCenter, OutOfBounds,
                     Overlap)
from .models import (Coord, Direction, PlacedTile, PlacementOutcome, Premium,
                     Tile, WordScore)


class Cell(BaseModel):
    row: int
    col: int
    premium: Optional[Premium] = None
    tile: Optional[Tile] = None


def initialize_premium_squares(size: int = BOARD_SIZE) -> Dict[Coord, Premium]:
    """Sets up the mapping of board coordinates to premium square types (TW, DW, TL, DL)."""
    premiums = {}
    center = size // 2
    all_coords = set((r, c) for r in range(size) for c in range(size))

    def mirror_and_add(base_coords, p_type):
        for r_orig, c_orig in base_coords:
            mirrored_points = [
                (r_orig, c_orig), (r_orig, size - 1 - c_orig),
                (size - 1 - r_orig, c_orig), (size - 1 - r_orig, size - 1 - c_orig)
            ]
            for mr, mc in mirrored_points:
                if (mr, mc) in all_coords:
                    premiums[(mr, mc)] = p_type

    mirror_and_add(TW_COORDS, Premium.TW)
    mirror_and_add(DW_COORDS, Premium.DW)
    mirror_and_add(TL_COORDS, Premium.TL)
    mirror_and_add(DL_COORDS, Premium.DL)

    premiums[(center, center)] = Premium.DW
    return premiums


def _fresh_cells() -> List[List[Cell]]:
    premiums = initialize_premium_squares(BOARD_SIZE)
    return [[Cell(row=r, col=c, premium=premiums.get((r, c))) for c in range(BOARD_SIZE)]
            for r in range(BOARD_SIZE)]


class Board(BaseModel):
    """The 15x15 grid. Premiums are fixed at creation; placed tiles are never removed."""

    size: int = BOARD_SIZE
    cells: List[List[Cell]] = Field(default_factory=_fresh_cells)

    @property
    def center(self) -> Coord:
        return (CENTER, CENTER)

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.size and 0 <= c < self.size

    def tile_at(self, r: int, c: int) -> Optional[Tile]:
        if self.in_bounds(r, c):
            return self.cells[r][c].tile
        return None

    def letter_at(self, r: int, c: int) -> Optional[str]:
        tile = self.tile_at(r, c)
        return tile.letter if tile else None

    def premium_at(self, r: int, c: int) -> Optional[Premium]:
        return self.cells[r][c].premium

    def is_occupied(self, r: int, c: int) -> bool:
        return self.tile_at(r, c) is not None

    def is_board_empty(self) -> bool:
        return not any(cell.tile for row in self.cells for cell in row)

    def count_tiles(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.tile)

    def has_occupied_neighbor(self, r: int, c: int) -> bool:
        return any(self.is_occupied(r + dr, c + dc) for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)))

    def place(self, tiles: List[Tile], origin: Coord, direction: Direction) -> PlacementOutcome:
        """
        Works out what laying ``tiles`` from ``origin`` would do, without touching the board.

        Tiles go, in order, onto the successive empty cells walking from ``origin``;
        occupied cells along the way become part of the main word. Returns the main
        word and every perpendicular word of two or more letters, each with its
        multiplier-adjusted points. Dictionary checks are left to the caller.
        """
        row, col = origin
        dr, dc = direction.step
        if not self.in_bounds(row, col):
            raise OutOfBounds(f"Placement starts off the board at ({row},{col}).")
        if self.is_occupied(row, col):
            raise Overlap(f"Cell ({row},{col}) is already occupied.")

        pending: Dict[Coord, Tile] = {}
        r, c = row, col
        for tile in tiles:
            while self.is_occupied(r, c):
                r, c = r + dr, c + dc
            if not self.in_bounds(r, c):
                raise OutOfBounds("Placement runs off the board.")
            pending[(r, c)] = tile
            r, c = r + dr, c + dc

        if self.is_board_empty():
            if self.center not in pending:
                raise FirstMoveMustCoverCenter("First move must cover the center square.")
        elif not any(self.has_occupied_neighbor(pr, pc) for pr, pc in pending):
            raise Disconnected("Move must connect to existing tiles.")

        main_line = self._line_through(row, col, direction, pending)
        main_word = "".join(tile.letter for _, _, tile in main_line)

        words = []
        if len(main_line) >= 2:
            words.append(WordScore(word=main_word, score=self._score_line(main_line, pending)))
        for pr, pc in pending:
            cross_line = self._line_through(pr, pc, direction.cross, pending)
            if len(cross_line) >= 2:
                cross_word = "".join(tile.letter for _, _, tile in cross_line)
                words.append(WordScore(word=cross_word, score=self._score_line(cross_line, pending)))

        placed = [PlacedTile(row=pr, col=pc, tile=tile) for (pr, pc), tile in pending.items()]
        return PlacementOutcome(main_word=main_word, words=words, placed=placed)

    def commit(self, outcome: PlacementOutcome) -> None:
        """Writes the tiles of a validated placement onto the board."""
        for placed in outcome.placed:
            cell = self.cells[placed.row][placed.col]
            assert cell.tile is None, f"cell ({placed.row},{placed.col}) is already occupied"
            cell.tile = placed.tile.model_copy(update={"selected_for_swap": False})

    def _line_through(self, r: int, c: int, direction: Direction,
                      pending: Dict[Coord, Tile]) -> List[Tuple[int, int, Tile]]:
        """The contiguous run of tiles (board plus pending) through (r, c) along ``direction``."""
        dr, dc = direction.step

        def tile(rr, cc):
            return pending.get((rr, cc)) or self.tile_at(rr, cc)

        while self.in_bounds(r - dr, c - dc) and tile(r - dr, c - dc):
            r, c = r - dr, c - dc
        line = []
        while self.in_bounds(r, c) and tile(r, c):
            line.append((r, c, tile(r, c)))
            r, c = r + dr, c + dc
        return line

    def _score_line(self, line: List[Tuple[int, int, Tile]], pending: Dict[Coord, Tile]) -> int:
        # Premiums only count under tiles laid this turn.
        score = 0
        word_multiplier = 1
        for r, c, tile in line:
            letter_value = tile.points
            if (r, c) in pending:
                premium = self.premium_at(r, c)
                if premium is not None:
                    letter_value *= LETTER_MULTIPLIERS.get(premium.value, 1)
                    word_multiplier *= WORD_MULTIPLIERS.get(premium.value, 1)
            score += letter_value
        return score * word_multiplier

    def __str__(self) -> str:
        header = "    " + " ".join(f"{c:>2}" for c in range(self.size))
        lines = [header, "   " + "---" * self.size]
        for r in range(self.size):
            parts = [f"{r:>2} |"]
            for c in range(self.size):
                cell = self.cells[r][c]
                if cell.tile:
                    parts.append(f" {cell.tile} ")
                elif cell.premium:
                    parts.append(f"{cell.premium.value:>3}")
                else:
                    parts.append(" . ")
            lines.append("".join(parts))
        return "\n".join(lines)
