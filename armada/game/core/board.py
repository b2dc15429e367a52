"""Board state representation and mutation helpers."""

from __future__ import annotations

import logging

import numpy as np

from armada.game.core.errors import AlreadyShotError, OutOfBoundsError, OverlapError
from armada.game.core.models import (
    BOARD_SIZE,
    CellState,
    Coord,
    Orientation,
    ShipType,
    ShotOutcome,
    ShotResult,
    cells_for,
)
from armada.game.core.ship import Ship

logger = logging.getLogger(__name__)

_CELL_BY_CODE: tuple[CellState, ...] = tuple(CellState)
_CODE_BY_CELL: dict[CellState, int] = {state: code for code, state in enumerate(_CELL_BY_CODE)}
_EMPTY = _CODE_BY_CELL[CellState.EMPTY]
_SHIP = _CODE_BY_CELL[CellState.SHIP]


class Board:
    """Numpy-backed square grid of cell states plus the ships placed on it."""

    def __init__(self, size: int = BOARD_SIZE) -> None:
        if size <= 0:
            raise ValueError("Board size must be positive.")
        self._size = size
        self._cells = np.full((size, size), _EMPTY, dtype=np.int8)
        self._ships: list[Ship] = []

    @property
    def size(self) -> int:
        return self._size

    @property
    def ships(self) -> list[Ship]:
        """Placed ships, in placement order (copy)."""
        return list(self._ships)

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return 0 <= coord.row < self._size and 0 <= coord.col < self._size

    def cell_state(self, row: int, col: int) -> CellState:
        coord = Coord(row, col)
        self._require_in_bounds(coord)
        return _CELL_BY_CODE[int(self._cells[row, col])]

    def was_shot(self, coord: Coord) -> bool:
        """Return whether this cell was previously targeted."""
        return self.cell_state(coord.row, coord.col).was_shot

    def can_place(self, ship_type: ShipType, origin: Coord, orientation: Orientation) -> bool:
        """Return whether a placement is in bounds and non-overlapping."""
        for cell in cells_for(origin, ship_type.size, orientation):
            if not self.in_bounds(cell) or self._cells[cell.row, cell.col] != _EMPTY:
                return False
        return True

    def place_ship(self, ship: Ship, origin: Coord, *, index: int | None = None) -> None:
        """Validate the whole extent, then mark cells and record them on the ship.

        ``index`` keeps a re-placed ship at its old slot in ``ships``.
        """
        cells = cells_for(origin, ship.size, ship.orientation)
        for cell in cells:
            if not self.in_bounds(cell):
                raise OutOfBoundsError(
                    f"{ship.ship_type.value} at {origin.notation} ({ship.orientation.value}) "
                    f"leaves the board at ({cell.row}, {cell.col}).",
                    cell,
                )
        for cell in cells:
            if self._cells[cell.row, cell.col] != _EMPTY:
                occupant = self.ship_at(cell.row, cell.col)
                occupant_label = occupant.ship_type.value if occupant is not None else "a shot cell"
                raise OverlapError(
                    f"Cell {cell.notation} is already occupied by {occupant_label}.",
                    cell,
                    occupant,
                )

        for cell in cells:
            self._cells[cell.row, cell.col] = _SHIP
        ship.restore_coordinates(cells)
        self._record(ship, index)

    def remove_ship(self, ship: Ship) -> bool:
        """Remove a ship and empty its cells; return whether it was on the board."""
        for index, placed in enumerate(self._ships):
            if placed is ship:
                del self._ships[index]
                for cell in ship.coordinates:
                    self._cells[cell.row, cell.col] = _EMPTY
                return True
        return False

    def receive_shot(self, coord: Coord) -> ShotOutcome:
        """Resolve a shot at ``coord``."""
        self._require_in_bounds(coord)
        state = _CELL_BY_CODE[int(self._cells[coord.row, coord.col])]

        if state is CellState.EMPTY:
            self._set(coord, CellState.MISS)
            return ShotOutcome(coord, ShotResult.WATER)

        if state is CellState.SHIP:
            ship = self.ship_at(coord.row, coord.col)
            if ship is None:
                logger.warning("board_ship_cell_without_owner cell=%s", coord.notation)
                self._set(coord, CellState.HIT)
                return ShotOutcome(coord, ShotResult.TOUCHED)
            ship.register_hit()
            if ship.is_sunk:
                for cell in ship.coordinates:
                    self._set(cell, CellState.SUNK_PART)
                return ShotOutcome(coord, ShotResult.SUNK, ship)
            self._set(coord, CellState.HIT)
            return ShotOutcome(coord, ShotResult.TOUCHED)

        raise AlreadyShotError(f"Cell {coord.notation} was already fired upon.", coord)

    def all_ships_sunk(self) -> bool:
        """Return whether every ship has been sunk; an empty board is never sunk."""
        if not self._ships:
            return False
        return all(ship.is_sunk for ship in self._ships)

    def sunk_ship_count(self) -> int:
        return sum(1 for ship in self._ships if ship.is_sunk)

    def ship_at(self, row: int, col: int) -> Ship | None:
        """Return the ship occupying ``(row, col)``, if any."""
        for ship in self._ships:
            if ship.occupies(row, col):
                return ship
        return None

    def occupied_cell_count(self) -> int:
        """Count cells that hold a ship part (afloat, hit or sunk)."""
        occupied = [_CODE_BY_CELL[s] for s in (CellState.SHIP, CellState.HIT, CellState.SUNK_PART)]
        return int(np.isin(self._cells, occupied).sum())

    def count_cells(self, state: CellState) -> int:
        return int((self._cells == _CODE_BY_CELL[state]).sum())

    def snapshot(self) -> tuple[tuple[CellState, ...], ...]:
        """Immutable copy of the grid as cell states, row-major."""
        return tuple(
            tuple(_CELL_BY_CODE[int(code)] for code in row) for row in self._cells
        )

    def reset(self) -> None:
        """Empty every cell and drop all ships."""
        self._cells.fill(_EMPTY)
        self._ships.clear()

    def clear_ships_only(self) -> None:
        """Drop all ships, leaving cell states untouched."""
        self._ships.clear()

    def restore_cell(self, row: int, col: int, state: CellState) -> None:
        """Overwrite a cell without transition checks (trusted restore path)."""
        coord = Coord(row, col)
        self._require_in_bounds(coord)
        self._set(coord, CellState(state))

    def attach_ship(self, ship: Ship, *, index: int | None = None) -> None:
        """Attach a ship with pre-validated coordinates (trusted restore path)."""
        self._record(ship, index)

    def _record(self, ship: Ship, index: int | None) -> None:
        if index is None:
            self._ships.append(ship)
        else:
            self._ships.insert(index, ship)

    def _set(self, coord: Coord, state: CellState) -> None:
        self._cells[coord.row, coord.col] = _CODE_BY_CELL[state]

    def _require_in_bounds(self, coord: Coord) -> None:
        if not self.in_bounds(coord):
            raise OutOfBoundsError(
                f"Coordinate ({coord.row}, {coord.col}) is outside the "
                f"{self._size}x{self._size} board.",
                coord,
            )
