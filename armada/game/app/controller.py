"""Application controller: the command surface a UI or CLI drives."""

from __future__ import annotations

import logging
import random
from pathlib import Path

from armada.game.ai.random_opponent import RandomOpponent
from armada.game.app.battle import TurnResult, resolve_human_shot, resolve_opponent_turn
from armada.game.app.opponent_turn import OpponentTurnScheduler
from armada.game.core.errors import GameError
from armada.game.core.models import GamePhase, Orientation, ShipType
from armada.game.core.players import Player
from armada.game.core.rules import GameState
from armada.game.core.ship import Ship
from armada.game.infra.config import GameConfig
from armada.game.persistence.repository import SaveRepository
from armada.game.persistence.service import PersistenceService, SavedGameInfo

logger = logging.getLogger(__name__)


class GameController:
    """Routes commands to the game state and owns the opponent turn timer."""

    def __init__(
        self,
        state: GameState,
        persistence: PersistenceService,
        turns: OpponentTurnScheduler,
    ) -> None:
        self._state = state
        self._persistence = persistence
        self._turns = turns
        self._generation = 0
        self._status = "Enter a nickname to start."

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    @property
    def status(self) -> str:
        return self._status

    @property
    def active_player(self) -> Player | None:
        return self._state.active_player

    @property
    def winner(self) -> Player | None:
        return self._state.winner()

    @property
    def opponent_turn_pending(self) -> bool:
        return self._turns.has_pending

    # -- session -------------------------------------------------------------------

    def start_new_game(self, nickname: str) -> bool:
        """Abandon any running game and begin placement for ``nickname``."""
        try:
            self._state.start_new_game(nickname)
        except ValueError as exc:
            self._status = str(exc)
            return False
        self._invalidate_pending_turns()
        self._status = f"Welcome, {self._state.human_nickname}. Place your fleet."
        return True

    # -- placement -----------------------------------------------------------------

    def place_ship(
        self, ship_type: ShipType, row: int, col: int, orientation: Orientation
    ) -> Ship | None:
        try:
            ship = self._state.place_human_ship(ship_type, row, col, orientation)
        except GameError as exc:
            self._status = str(exc)
            return None
        remaining = len(self._state.pending_ship_types)
        self._status = (
            f"{ship.ship_type.value} placed. {remaining} ship(s) left."
            if remaining
            else "Fleet ready. Confirm to start the battle."
        )
        return ship

    def place_ships_randomly(self) -> bool:
        try:
            placed = self._state.place_human_ships_randomly()
        except GameError as exc:
            self._status = str(exc)
            return False
        self._status = (
            "Fleet placed at random." if placed else "Random placement failed. Try again."
        )
        return placed

    def move_ship(self, ship: Ship, row: int, col: int) -> bool:
        try:
            self._state.move_human_ship(ship, row, col)
        except GameError as exc:
            self._status = str(exc)
            return False
        self._status = f"{ship.ship_type.value} moved to {ship.origin.notation}."
        return True

    def finalize_placement(self) -> bool:
        if self._state.phase is not GamePhase.PLACEMENT:
            self._status = "Placement is already over."
            return False
        remaining = len(self._state.pending_ship_types)
        if remaining:
            self._status = f"Place all ships first ({remaining} remaining)."
            return False
        if not self._state.finalize_placement():
            self._status = "The opponent could not deploy its fleet. Try again."
            return False
        self._status = "Battle started. Fire at will."
        return True

    # -- firing --------------------------------------------------------------------

    def shoot(self, row: int, col: int) -> TurnResult:
        """Fire at the opponent; schedules its reply when the turn passes."""
        result = resolve_human_shot(self._state, row, col)
        self._status = result.status
        self._schedule_if_opponent_turn()
        return result

    def run_opponent_turn(self) -> TurnResult:
        """Let the opponent fire now, bypassing the thinking delay."""
        result = resolve_opponent_turn(self._state)
        self._status = result.status
        self._schedule_if_opponent_turn()
        return result

    def switch_turn(self) -> None:
        self._state.switch_turn()
        self._schedule_if_opponent_turn()

    def advance(self, delta_seconds: float) -> list[TurnResult]:
        """Advance the turn clock and execute opponent turns that became due."""
        results: list[TurnResult] = []
        for command in self._turns.advance(delta_seconds):
            if command.generation != self._generation:
                logger.debug(
                    "opponent_turn_dropped generation=%d current=%d",
                    command.generation,
                    self._generation,
                )
                continue
            results.append(self.run_opponent_turn())
        return results

    # -- persistence ---------------------------------------------------------------

    def save(self) -> bool:
        if self._state.phase is GamePhase.INITIAL:
            self._status = "Nothing to save yet."
            return False
        saved = self._persistence.save_game(self._state)
        self._status = "Game saved." if saved else "Saving failed."
        return saved

    def load(self, nickname: str) -> bool:
        """Replace the current game with the save for ``nickname``."""
        if not self._persistence.load_game(self._state, nickname):
            self._status = f"No usable save for {nickname}."
            return False
        self._invalidate_pending_turns()
        self._status = f"Welcome back, {self._state.human_nickname}."
        return True

    def list_saves(self, nickname: str | None = None) -> list[SavedGameInfo]:
        if nickname is None:
            return self._persistence.list_all_saves()
        return self._persistence.list_saves(nickname)

    def _invalidate_pending_turns(self) -> None:
        self._generation += 1
        dropped = self._turns.cancel_pending()
        if dropped:
            logger.debug("opponent_turns_cancelled count=%d", dropped)

    def _schedule_if_opponent_turn(self) -> None:
        if self._state.phase is not GamePhase.FIRING or self._state.is_human_turn():
            return
        if self._turns.has_pending:
            return
        self._turns.schedule(self._generation)


def build_controller(config: GameConfig, saves_dir: Path) -> GameController:
    """Wire a controller from configuration."""
    rng = random.Random(config.rng_seed)
    strategy = RandomOpponent(
        rng,
        placement_trials=config.placement_trials,
        targeting_trials=config.targeting_trials,
    )
    state = GameState(strategy=strategy)
    persistence = PersistenceService(SaveRepository(saves_dir))
    turns = OpponentTurnScheduler(config.think_delay_seconds)
    return GameController(state, persistence, turns)
