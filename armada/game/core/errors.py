"""Game error taxonomy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from armada.game.core.models import Coord
    from armada.game.core.ship import Ship


class GameError(Exception):
    """Base class for recoverable game-rule errors."""


class OutOfBoundsError(GameError):
    """A coordinate or ship extent falls outside the grid."""

    def __init__(self, message: str, coord: Coord | None = None) -> None:
        super().__init__(message)
        self.coord = coord


class OverlapError(GameError):
    """A placement targets a cell that is not empty."""

    def __init__(self, message: str, coord: Coord, occupant: Ship | None = None) -> None:
        super().__init__(message)
        self.coord = coord
        self.occupant = occupant


class AlreadyShotError(GameError):
    """A shot targets a cell that was already fired upon."""

    def __init__(self, message: str, coord: Coord) -> None:
        super().__init__(message)
        self.coord = coord


class InvalidPlacementError(GameError):
    """Ship type not pending, ship not on board, or inconsistent placement."""


class PersistenceError(GameError):
    """Save/load failure: I/O, missing file, malformed record."""
