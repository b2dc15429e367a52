from armada.game.core.board import Board
from armada.game.core.fleet import count_types, fleet_ship_types, validate_fleet
from armada.game.core.models import Coord, ShipType
from armada.game.core.ship import create_ship


def test_fleet_ship_types_order_and_copy() -> None:
    types = fleet_ship_types()
    assert types[0] is ShipType.CARRIER
    assert types[-1] is ShipType.FRIGATE
    types.clear()
    assert len(fleet_ship_types()) == 10


def test_count_types_keeps_zero_entries() -> None:
    counts = count_types([ShipType.FRIGATE, ShipType.FRIGATE])
    assert counts == {
        ShipType.CARRIER: 0,
        ShipType.SUBMARINE: 0,
        ShipType.DESTROYER: 0,
        ShipType.FRIGATE: 2,
    }


def test_validate_fleet_accepts_canonical_layout(placed_state) -> None:
    assert validate_fleet(placed_state.human_board) == (True, "")
    assert placed_state.human_board.occupied_cell_count() == 20


def test_validate_fleet_reports_missing_ships() -> None:
    board = Board()
    board.place_ship(create_ship(ShipType.CARRIER), Coord(0, 0))
    ok, reason = validate_fleet(board)
    assert not ok
    assert "SUBMARINE" in reason
