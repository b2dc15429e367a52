"""Plain-text record codecs for board cells and ship collections."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from armada.game.core.errors import PersistenceError
from armada.game.core.models import CellState, Coord, Orientation, ShipType
from armada.game.core.ship import Ship, create_ship

SHIP_SEPARATOR = "---"

CellRecord = tuple[int, int, CellState]
CellGrid = Sequence[Sequence[CellState]]


def board_to_lines(grid: CellGrid) -> list[str]:
    """One ``row,col,STATE`` line per cell, row-major."""
    return [
        f"{row},{col},{state.value}"
        for row, states in enumerate(grid)
        for col, state in enumerate(states)
    ]


def lines_to_cells(lines: Iterable[str], size: int) -> list[CellRecord]:
    """Parse a board-state file; every cell of a ``size`` x ``size`` grid must appear once."""
    records: list[CellRecord] = []
    seen: set[tuple[int, int]] = set()
    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue
        parts = line.split(",")
        if len(parts) != 3:
            raise PersistenceError(f"Malformed cell record: {raw_line!r}.")
        try:
            row, col = int(parts[0]), int(parts[1])
            state = CellState(parts[2].strip())
        except ValueError as exc:
            raise PersistenceError(f"Malformed cell record: {raw_line!r}.") from exc
        if not (0 <= row < size and 0 <= col < size):
            raise PersistenceError(f"Cell record outside the board: {raw_line!r}.")
        if (row, col) in seen:
            raise PersistenceError(f"Duplicate cell record: {raw_line!r}.")
        seen.add((row, col))
        records.append((row, col, state))
    if len(seen) != size * size:
        raise PersistenceError(f"Board file holds {len(seen)} cells, expected {size * size}.")
    return records


def ships_to_lines(ships: Iterable[Ship]) -> list[str]:
    lines: list[str] = []
    for ship in ships:
        lines.extend(
            [
                f"TYPE:{ship.ship_type.value}",
                f"ORIENTATION:{ship.orientation.value}",
                f"SUNK:{str(ship.is_sunk).lower()}",
                f"HITS:{ship.hit_count}",
                "COORDS:" + ";".join(f"{coord.row},{coord.col}" for coord in ship.coordinates),
                SHIP_SEPARATOR,
            ]
        )
    return lines


def lines_to_ships(lines: Iterable[str]) -> list[Ship]:
    """Rebuild ships via the factory, replaying hits and attaching coordinates as-is."""
    ships: list[Ship] = []
    fields: dict[str, str] = {}
    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue
        if line == SHIP_SEPARATOR:
            ships.append(_ship_from_fields(fields))
            fields = {}
            continue
        key, sep, value = line.partition(":")
        if not sep:
            raise PersistenceError(f"Malformed ship record line: {raw_line!r}.")
        fields[key.strip()] = value.strip()
    if fields:
        raise PersistenceError("Ship record is not terminated by a separator line.")
    return ships


def _ship_from_fields(fields: dict[str, str]) -> Ship:
    try:
        ship_type = ShipType(fields["TYPE"])
        orientation = Orientation(fields["ORIENTATION"])
        hits = int(fields["HITS"])
        sunk_flag = fields["SUNK"].lower()
        coords = _parse_coords(fields["COORDS"])
    except KeyError as exc:
        raise PersistenceError(f"Ship record is missing {exc.args[0]}.") from exc
    except ValueError as exc:
        raise PersistenceError(f"Malformed ship record: {exc}") from exc

    if sunk_flag not in {"true", "false"}:
        raise PersistenceError(f"Malformed sunk flag: {fields['SUNK']!r}.")
    if not 0 <= hits <= ship_type.size:
        raise PersistenceError(f"{ship_type.value} cannot have {hits} hits.")
    if len(coords) != ship_type.size:
        raise PersistenceError(f"{ship_type.value} record lists {len(coords)} cells.")

    ship = create_ship(ship_type)
    ship.orient(orientation)
    for _ in range(hits):
        ship.register_hit()
    if ship.is_sunk != (sunk_flag == "true"):
        raise PersistenceError(f"{ship_type.value} sunk flag disagrees with its hit count.")
    ship.restore_coordinates(coords)
    return ship


def _parse_coords(raw: str) -> list[Coord]:
    coords: list[Coord] = []
    for chunk in raw.split(";"):
        if not chunk.strip():
            continue
        row, col = chunk.split(",")
        coords.append(Coord(int(row), int(col)))
    return coords
