"""Validation failures raised by the turn engine.

Every error here is local and recoverable: when one is raised the game passed
to the engine is left untouched and the caller may retry with another action.
"""


class ActionError(Exception):
    """Base class for a rejected action."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class GameOver(ActionError):
    pass


class UnknownPlayer(ActionError):
    pass


class NotPlayersTurn(ActionError):
    pass


class TilesNotInRack(ActionError):
    pass


class InvalidWord(ActionError):
    def __init__(self, word: str):
        super().__init__(f"'{word}' is not a valid word.")
        self.word = word


class InsufficientBagForExchange(ActionError):
    pass


class PlacementError(ActionError):
    """The tiles cannot legally go where the action puts them."""


class Overlap(PlacementError):
    pass


class Disconnected(PlacementError):
    pass


class OutOfBounds(PlacementError):
    pass


class FirstMoveMustCoverCenter(PlacementError):
    pass
