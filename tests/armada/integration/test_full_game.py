from armada.game.app.controller import build_controller
from armada.game.core.models import CellState, GamePhase
from armada.game.infra.config import GameConfig


def test_seeded_game_runs_to_completion(tmp_path) -> None:
    config = GameConfig(think_delay_seconds=0.5, rng_seed=2024)
    controller = build_controller(config, tmp_path / "saves")
    assert controller.start_new_game("Alice")
    assert controller.place_ships_randomly()
    assert controller.finalize_placement()

    state = controller.state
    cells = [(row, col) for row in range(10) for col in range(10)]
    while controller.phase is GamePhase.FIRING:
        while controller.phase is GamePhase.FIRING and not state.is_human_turn():
            controller.advance(config.think_delay_seconds)
        if controller.phase is not GamePhase.FIRING:
            break
        row, col = cells.pop(0)
        assert controller.shoot(row, col).accepted

    assert controller.phase is GamePhase.GAME_OVER
    winner = controller.winner
    assert winner is not None
    loser_board = state.human_board if winner is state.opponent else state.opponent_board
    assert loser_board.all_ships_sunk()
    assert loser_board.count_cells(CellState.SUNK_PART) == 20
    assert loser_board.count_cells(CellState.SHIP) == 0
    assert not controller.opponent_turn_pending
