from typing import TYPE_CHECKING, List, Tuple

from .errors import TilesNotInRack
from .models import Tile

if TYPE_CHECKING:  # Avoid circular import for type hinting
    from .board import Board


def find_anchor_squares(board: 'Board') -> List[Tuple[int, int]]:
    """Empty squares next to an existing tile; just the center on an empty board."""
    if board.is_board_empty():
        return [board.center]

    anchors = []
    for r in range(board.size):
        for c in range(board.size):
            if not board.is_occupied(r, c) and board.has_occupied_neighbor(r, c):
                anchors.append((r, c))
    return anchors


def take_from_rack(rack: List[Tile], wanted: List[Tile]) -> Tuple[List[Tile], List[Tile]]:
    """
    Splits ``rack`` into the tiles matching ``wanted`` and what is left over.

    A wanted blank (``blank=True``) is matched by any rack blank and comes back
    carrying the wanted letter. Raises TilesNotInRack when the rack cannot
    supply every wanted tile.
    """
    remaining = list(rack)
    taken = []
    for tile in wanted:
        key = tile.rack_key
        match = next((i for i, held in enumerate(remaining) if held.rack_key == key), None)
        if match is None:
            shown = "blank" if tile.blank else f"'{tile.letter}'"
            raise TilesNotInRack(f"Tile {shown} not in rack.")
        held = remaining.pop(match)
        if held.blank:
            held = held.model_copy(update={"letter": tile.letter, "selected_for_swap": False})
        taken.append(held)
    return taken, remaining
