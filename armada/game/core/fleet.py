"""Fleet composition helpers and validation."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from armada.game.core.board import Board
from armada.game.core.models import DEFAULT_FLEET, FLEET_CELL_COUNT, FLEET_COMPOSITION, ShipType


def fleet_ship_types() -> list[ShipType]:
    """Full fleet as a list of ship types, in fixed placement order."""
    return list(DEFAULT_FLEET)


def count_types(ship_types: Iterable[ShipType]) -> dict[ShipType, int]:
    """Count ship types, keeping fleet order and zero entries."""
    counts = Counter(ship_types)
    return {ship_type: counts.get(ship_type, 0) for ship_type in FLEET_COMPOSITION}


def validate_fleet(board: Board) -> tuple[bool, str]:
    """Validate whether a board holds exactly the canonical fleet."""
    counts = count_types(ship.ship_type for ship in board.ships)
    for ship_type, expected in FLEET_COMPOSITION.items():
        actual = counts[ship_type]
        if actual != expected:
            return False, f"Expected {expected} {ship_type.value} ship(s), found {actual}."

    for ship in board.ships:
        if len(ship.coordinates) != ship.size:
            return False, f"{ship.ship_type.value} occupies {len(ship.coordinates)} cells."

    occupied = board.occupied_cell_count()
    if occupied != FLEET_CELL_COUNT:
        return False, f"Fleet must occupy {FLEET_CELL_COUNT} cells, board has {occupied}."
    return True, ""
