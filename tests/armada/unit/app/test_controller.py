import pytest

from armada.game.app.controller import GameController, build_controller
from armada.game.app.opponent_turn import OpponentTurnScheduler
from armada.game.core.models import CellState, Coord, GamePhase, Orientation, ShipType
from armada.game.core.rules import GameState
from armada.game.infra.config import GameConfig


@pytest.fixture
def make_controller(strategy_factory, persistence_service):
    def _make(targets=()) -> tuple[GameController, OpponentTurnScheduler]:
        turns = OpponentTurnScheduler(1.0)
        state = GameState(strategy=strategy_factory(targets=list(targets)))
        return GameController(state, persistence_service, turns), turns

    return _make


@pytest.fixture
def firing_controller(make_controller, fleet_layout):
    def _make(targets=()) -> tuple[GameController, OpponentTurnScheduler]:
        controller, turns = make_controller(targets)
        assert controller.start_new_game("Alice")
        for ship_type, row, col, orientation in fleet_layout:
            assert controller.place_ship(ship_type, row, col, orientation) is not None
        assert controller.finalize_placement()
        return controller, turns

    return _make


def test_start_new_game_requires_nickname(make_controller) -> None:
    controller, _ = make_controller()
    assert controller.phase is GamePhase.INITIAL
    assert not controller.start_new_game("   ")
    assert controller.phase is GamePhase.INITIAL
    assert controller.start_new_game("Alice")
    assert controller.phase is GamePhase.PLACEMENT
    assert "Alice" in controller.status


def test_placement_errors_become_status(make_controller) -> None:
    controller, _ = make_controller()
    controller.start_new_game("Alice")
    assert controller.place_ship(ShipType.CARRIER, 0, 8, Orientation.HORIZONTAL) is None
    assert "leaves the board" in controller.status
    assert not controller.finalize_placement()
    assert "10 remaining" in controller.status


def test_move_ship_through_controller(make_controller) -> None:
    controller, _ = make_controller()
    controller.start_new_game("Alice")
    frigate = controller.place_ship(ShipType.FRIGATE, 0, 0, Orientation.HORIZONTAL)
    assert controller.move_ship(frigate, 4, 4)
    assert controller.status == "FRIGATE moved to E5."
    assert not controller.move_ship(frigate, 4, 10)
    assert frigate.origin == Coord(4, 4)


def test_random_placement_then_finalize(make_controller) -> None:
    controller, _ = make_controller()
    controller.start_new_game("Alice")
    assert controller.place_ships_randomly()
    assert controller.finalize_placement()
    assert controller.phase is GamePhase.FIRING
    assert not controller.finalize_placement()


def test_miss_schedules_delayed_opponent_turn(firing_controller) -> None:
    controller, _ = firing_controller(targets=[Coord(3, 3)])
    result = controller.shoot(3, 3)
    assert result.accepted
    assert controller.opponent_turn_pending
    assert not controller.state.is_human_turn()

    assert controller.advance(0.5) == []
    replies = controller.advance(0.5)
    assert len(replies) == 1
    assert replies[0].outcome.coord == Coord(3, 3)
    assert controller.state.human_board.cell_state(3, 3) is CellState.MISS
    assert controller.state.is_human_turn()
    assert not controller.opponent_turn_pending


def test_opponent_hit_chains_another_delayed_turn(firing_controller) -> None:
    controller, _ = firing_controller(targets=[Coord(0, 0), Coord(3, 3)])
    controller.shoot(3, 3)
    first = controller.advance(1.0)
    assert first[0].turn_kept
    assert controller.opponent_turn_pending
    second = controller.advance(1.0)
    assert second[0].outcome.coord == Coord(3, 3)
    assert controller.state.is_human_turn()


def test_hit_does_not_schedule_opponent(firing_controller) -> None:
    controller, _ = firing_controller()
    assert controller.shoot(0, 0).turn_kept
    assert not controller.opponent_turn_pending


def test_new_game_cancels_pending_opponent_turn(firing_controller) -> None:
    controller, turns = firing_controller(targets=[Coord(3, 3)])
    controller.shoot(3, 3)
    assert controller.opponent_turn_pending
    controller.start_new_game("Bob")
    assert not controller.opponent_turn_pending
    assert controller.advance(5.0) == []
    assert controller.state.human_board.count_cells(CellState.MISS) == 0


def test_stale_generation_commands_are_dropped(firing_controller) -> None:
    controller, turns = firing_controller()
    controller.start_new_game("Bob")
    turns.schedule(0)
    assert controller.advance(1.0) == []


def test_switch_turn_schedules_opponent(firing_controller) -> None:
    controller, _ = firing_controller()
    controller.switch_turn()
    assert controller.active_player == controller.state.opponent
    assert controller.opponent_turn_pending


def test_run_opponent_turn_bypasses_delay(firing_controller) -> None:
    controller, _ = firing_controller(targets=[Coord(3, 3)])
    controller.state.switch_turn()
    result = controller.run_opponent_turn()
    assert result.accepted
    assert controller.state.is_human_turn()


def test_save_load_and_list(firing_controller, make_controller) -> None:
    controller, _ = firing_controller()
    controller.shoot(0, 0)
    assert controller.save()
    assert controller.status == "Game saved."
    assert [info.nickname for info in controller.list_saves("Alice")] == ["Alice"]
    assert [info.nickname for info in controller.list_saves()] == ["Alice"]

    other, _ = make_controller()
    assert not other.save()
    assert not other.load("Nobody")
    assert other.load("Alice")
    assert other.phase is GamePhase.FIRING
    assert other.state.territory.cell_state(0, 0) is CellState.HIT
    assert other.winner is None


def test_load_cancels_pending_opponent_turn(firing_controller) -> None:
    controller, _ = firing_controller(targets=[Coord(3, 3)])
    assert controller.save()
    controller.shoot(3, 3)
    assert controller.opponent_turn_pending
    assert controller.load("Alice")
    assert not controller.opponent_turn_pending
    assert controller.state.is_human_turn()


def test_build_controller_from_config(tmp_path) -> None:
    controller = build_controller(GameConfig(think_delay_seconds=0.0, rng_seed=7), tmp_path)
    assert controller.start_new_game("Eve")
    assert controller.place_ships_randomly()
    assert controller.finalize_placement()
    assert controller.phase is GamePhase.FIRING
