"""Ship entity and factory."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from armada.game.core.models import Coord, Orientation, ShipType


@dataclass(slots=True, eq=False)
class Ship:
    """A placed (or placeable) ship.

    Ships compare by identity: two destroyers are different ships even when
    their fields match.
    """

    ship_type: ShipType
    orientation: Orientation = Orientation.HORIZONTAL
    coordinates: list[Coord] = field(default_factory=list)
    hit_count: int = 0

    def __post_init__(self) -> None:
        self.orient(self.orientation)

    @property
    def size(self) -> int:
        return self.ship_type.size

    @property
    def is_sunk(self) -> bool:
        return self.hit_count >= self.size

    @property
    def origin(self) -> Coord | None:
        return self.coordinates[0] if self.coordinates else None

    def orient(self, orientation: Orientation) -> None:
        """Set orientation; single-cell ships stay horizontal."""
        self.orientation = Orientation.HORIZONTAL if self.size == 1 else Orientation(orientation)

    def register_hit(self) -> None:
        if self.hit_count < self.size:
            self.hit_count += 1

    def occupies(self, row: int, col: int) -> bool:
        return any(coord.row == row and coord.col == col for coord in self.coordinates)

    def restore_coordinates(self, coordinates: Iterable[Coord]) -> None:
        """Replace occupied coordinates without validation."""
        self.coordinates = list(coordinates)

    def __repr__(self) -> str:
        cells = ";".join(coord.notation for coord in self.coordinates)
        return (
            f"Ship({self.ship_type.value}, {self.orientation.value}, "
            f"cells=[{cells}], hits={self.hit_count})"
        )


def create_ship(ship_type: ShipType) -> Ship:
    """Build a fresh ship of the given type: default orientation, no cells, no hits."""
    return Ship(ship_type=ShipType(ship_type))
