"""Battle turn orchestration: shot resolution plus the turn-continuation rule."""

from __future__ import annotations

from dataclasses import dataclass

from armada.game.core.errors import AlreadyShotError, OutOfBoundsError
from armada.game.core.models import GamePhase, ShotOutcome, ShotResult
from armada.game.core.players import Player
from armada.game.core.rules import GameState
from armada.game.core.shot_resolution import keeps_turn


@dataclass(frozen=True, slots=True)
class TurnResult:
    """Outcome of one shooter action, ready for a collaborator to render."""

    accepted: bool
    status: str
    outcome: ShotOutcome | None = None
    turn_kept: bool = False
    winner: Player | None = None


def resolve_human_shot(state: GameState, row: int, col: int) -> TurnResult:
    """Apply a human shot; rejected input leaves the turn with the human."""
    if state.phase is not GamePhase.FIRING:
        return TurnResult(accepted=False, status="The battle has not started.")
    if not state.is_human_turn():
        return TurnResult(accepted=False, status="Wait for the opponent to fire.")
    try:
        outcome = state.handle_human_shot(row, col)
    except (OutOfBoundsError, AlreadyShotError) as exc:
        return TurnResult(accepted=False, status=f"{exc} Choose another cell.")
    return _apply_turn_policy(state, outcome, shooter="You")


def resolve_opponent_turn(state: GameState) -> TurnResult:
    """Let the opponent fire once and apply the turn-continuation rule."""
    if state.phase is not GamePhase.FIRING:
        return TurnResult(accepted=False, status="The battle has not started.")
    if state.is_human_turn():
        return TurnResult(accepted=False, status="It is not the opponent's turn.")
    outcome = state.handle_opponent_turn()
    if outcome.result is ShotResult.ALREADY_SHOT:
        # Targeting gave up; hand the turn back rather than stall the game.
        state.switch_turn()
        return TurnResult(
            accepted=True, status="The opponent holds fire. Your turn.", outcome=outcome
        )
    return _apply_turn_policy(state, outcome, shooter="Opponent")


def _apply_turn_policy(state: GameState, outcome: ShotOutcome, *, shooter: str) -> TurnResult:
    status = f"{shooter} fired at {outcome.coord.notation}: {_describe(outcome)}."
    if state.phase is GamePhase.GAME_OVER:
        winner = state.winner()
        verdict = "You win." if winner is not None and winner.is_human else "The opponent wins."
        return TurnResult(
            accepted=True,
            status=f"{status} {verdict}",
            outcome=outcome,
            turn_kept=True,
            winner=winner,
        )
    if keeps_turn(outcome.result):
        return TurnResult(
            accepted=True, status=f"{status} {shooter} fire again.", outcome=outcome, turn_kept=True
        )
    state.switch_turn()
    return TurnResult(accepted=True, status=status, outcome=outcome)


def _describe(outcome: ShotOutcome) -> str:
    if outcome.result is ShotResult.SUNK and outcome.sunk_ship is not None:
        return f"sunk {outcome.sunk_ship.ship_type.value}"
    if outcome.result is ShotResult.TOUCHED:
        return "hit"
    return "miss"
