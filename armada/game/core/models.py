"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from armada.game.core.ship import Ship

BOARD_SIZE = 10


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class ShipType(StrEnum):
    """Fleet ship types."""

    CARRIER = "CARRIER"
    SUBMARINE = "SUBMARINE"
    DESTROYER = "DESTROYER"
    FRIGATE = "FRIGATE"

    @property
    def size(self) -> int:
        return SHIP_LENGTHS[self]


SHIP_LENGTHS: dict[ShipType, int] = {
    ShipType.CARRIER: 4,
    ShipType.SUBMARINE: 3,
    ShipType.DESTROYER: 2,
    ShipType.FRIGATE: 1,
}

FLEET_COMPOSITION: dict[ShipType, int] = {
    ShipType.CARRIER: 1,
    ShipType.SUBMARINE: 2,
    ShipType.DESTROYER: 3,
    ShipType.FRIGATE: 4,
}

DEFAULT_FLEET: tuple[ShipType, ...] = tuple(
    ship_type for ship_type, count in FLEET_COMPOSITION.items() for _ in range(count)
)

FLEET_CELL_COUNT = sum(ship_type.size for ship_type in DEFAULT_FLEET)


class CellState(StrEnum):
    """State of a single board cell."""

    EMPTY = "EMPTY"
    SHIP = "SHIP"
    HIT = "HIT"
    MISS = "MISS"
    SUNK_PART = "SUNK_PART"

    @property
    def was_shot(self) -> bool:
        return self in _SHOT_STATES


_SHOT_STATES = frozenset({CellState.HIT, CellState.MISS, CellState.SUNK_PART})


class ShotResult(StrEnum):
    """Result of a single shot."""

    WATER = "WATER"
    TOUCHED = "TOUCHED"
    SUNK = "SUNK"
    ALREADY_SHOT = "ALREADY_SHOT"


class GamePhase(StrEnum):
    """Game lifecycle phase."""

    INITIAL = "INITIAL"
    PLACEMENT = "PLACEMENT"
    FIRING = "FIRING"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    row: int
    col: int

    @property
    def x(self) -> int:
        return self.col

    @property
    def y(self) -> int:
        return self.row

    @property
    def notation(self) -> str:
        """Board notation: column letter followed by 1-based row, e.g. ``A1``."""
        return f"{chr(ord('A') + self.col)}{self.row + 1}"

    def __str__(self) -> str:
        return self.notation


@dataclass(frozen=True, slots=True)
class ShotOutcome:
    """Outcome of a resolved shot."""

    coord: Coord
    result: ShotResult
    sunk_ship: Ship | None = None


def cells_for(origin: Coord, size: int, orientation: Orientation) -> list[Coord]:
    """Compute occupied cells in scan order from ``origin``."""
    result: list[Coord] = []
    for i in range(size):
        if orientation is Orientation.HORIZONTAL:
            result.append(Coord(origin.row, origin.col + i))
        else:
            result.append(Coord(origin.row + i, origin.col))
    return result
