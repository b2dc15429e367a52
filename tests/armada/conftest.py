from __future__ import annotations

import random
from collections.abc import Sequence

import pytest

from armada.game.ai.strategy import AIStrategy
from armada.game.core.board import Board
from armada.game.core.models import Coord, Orientation, ShipType
from armada.game.core.rules import GameState
from armada.game.core.ship import create_ship
from armada.game.persistence.repository import SaveRepository
from armada.game.persistence.service import PersistenceService

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL

Layout = Sequence[tuple[ShipType, int, int, Orientation]]

FLEET_LAYOUT: Layout = (
    (ShipType.CARRIER, 0, 0, H),
    (ShipType.SUBMARINE, 2, 0, H),
    (ShipType.SUBMARINE, 4, 0, H),
    (ShipType.DESTROYER, 6, 0, H),
    (ShipType.DESTROYER, 8, 0, H),
    (ShipType.DESTROYER, 0, 6, H),
    (ShipType.FRIGATE, 9, 9, H),
    (ShipType.FRIGATE, 9, 7, H),
    (ShipType.FRIGATE, 7, 9, H),
    (ShipType.FRIGATE, 5, 9, H),
)


class ScriptedStrategy(AIStrategy):
    """Places a fixed layout and fires at a fixed list of cells."""

    def __init__(self, layout: Layout = FLEET_LAYOUT, targets: Sequence[Coord] = ()) -> None:
        self.layout = list(layout)
        self.targets = list(targets)
        self.place_calls = 0
        self.fail_placement = False

    def place_fleet(self, board: Board) -> bool:
        self.place_calls += 1
        board.reset()
        if self.fail_placement:
            return False
        for ship_type, row, col, orientation in self.layout:
            ship = create_ship(ship_type)
            ship.orient(orientation)
            board.place_ship(ship, Coord(row, col))
        return True

    def choose_target(self, board: Board) -> Coord:
        if self.targets:
            return self.targets.pop(0)
        for row in range(board.size):
            for col in range(board.size):
                if not board.was_shot(Coord(row, col)):
                    return Coord(row, col)
        return Coord(0, 0)


def place_layout(state: GameState, layout: Layout = FLEET_LAYOUT) -> None:
    for ship_type, row, col, orientation in layout:
        state.place_human_ship(ship_type, row, col, orientation)


def layout_cells(layout: Layout = FLEET_LAYOUT) -> list[Coord]:
    cells: list[Coord] = []
    for ship_type, row, col, orientation in layout:
        for i in range(ship_type.size):
            cells.append(Coord(row, col + i) if orientation is H else Coord(row + i, col))
    return cells


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def scripted_strategy() -> ScriptedStrategy:
    return ScriptedStrategy()


@pytest.fixture
def fleet_cells() -> list[Coord]:
    return layout_cells()


@pytest.fixture
def placing_state(scripted_strategy: ScriptedStrategy) -> GameState:
    state = GameState(strategy=scripted_strategy)
    state.start_new_game("Alice")
    return state


@pytest.fixture
def placed_state(placing_state: GameState) -> GameState:
    """Both fleets on the canonical layout, firing phase, human to move."""
    place_layout(placing_state)
    assert placing_state.finalize_placement()
    return placing_state


@pytest.fixture
def save_repository(tmp_path) -> SaveRepository:
    return SaveRepository(tmp_path / "saves")


@pytest.fixture
def persistence_service(save_repository: SaveRepository) -> PersistenceService:
    return PersistenceService(save_repository)


@pytest.fixture
def fleet_layout() -> Layout:
    return FLEET_LAYOUT


@pytest.fixture
def place_human_fleet():
    return place_layout


@pytest.fixture
def strategy_factory():
    return ScriptedStrategy
