"""Game state machine: placement, firing, turn ownership and phase."""

from __future__ import annotations

import logging
import random
from datetime import datetime

from armada.game.ai.random_opponent import RandomOpponent
from armada.game.ai.strategy import AIStrategy
from armada.game.core.board import Board
from armada.game.core.errors import GameError, InvalidPlacementError
from armada.game.core.fleet import count_types, fleet_ship_types
from armada.game.core.models import (
    BOARD_SIZE,
    CellState,
    Coord,
    GamePhase,
    Orientation,
    ShipType,
    ShotOutcome,
    ShotResult,
)
from armada.game.core.players import Player, human_player, opponent_player
from armada.game.core.ship import Ship, create_ship
from armada.game.core.territory import TerritoryView
from armada.game.persistence.memento import GameMemento
from armada.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable

logger = logging.getLogger(__name__)


class GameState:
    """Owns both boards, the players and the phase; all mutation goes through here."""

    def __init__(
        self,
        *,
        strategy: AIStrategy | None = None,
        rng: random.Random | None = None,
        size: int = BOARD_SIZE,
    ) -> None:
        self._strategy = strategy or RandomOpponent(rng or random.Random())
        self._human_board = Board(size)
        self._opponent_board = Board(size)
        self._territory = TerritoryView(self._opponent_board)
        self._human: Player | None = None
        self._opponent = opponent_player()
        self._active_player: Player | None = None
        self._phase = GamePhase.INITIAL
        self._pending: list[ShipType] = []

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def human_board(self) -> Board:
        return self._human_board

    @property
    def opponent_board(self) -> Board:
        return self._opponent_board

    @property
    def territory(self) -> TerritoryView:
        """Human's view of the opponent's waters."""
        return self._territory

    @property
    def human(self) -> Player | None:
        return self._human

    @property
    def opponent(self) -> Player:
        return self._opponent

    @property
    def active_player(self) -> Player | None:
        return self._active_player

    @property
    def human_nickname(self) -> str | None:
        return self._human.name if self._human is not None else None

    @property
    def pending_ship_types(self) -> list[ShipType]:
        return list(self._pending)

    def pending_counts(self) -> dict[ShipType, int]:
        return count_types(self._pending)

    def is_human_turn(self) -> bool:
        return self._active_player is not None and self._active_player.is_human

    # -- placement -----------------------------------------------------------------

    def start_new_game(self, human: Player | str) -> None:
        """Reset boards and enter the placement phase with the full fleet pending."""
        self._human = human_player(human) if isinstance(human, str) else human
        self._human_board.reset()
        self._opponent_board.reset()
        self._phase = GamePhase.PLACEMENT
        self._active_player = self._human
        self._pending = fleet_ship_types()
        logger.info("game_started nickname=%s", self._human.name)

    def place_human_ship(
        self, ship_type: ShipType, row: int, col: int, orientation: Orientation
    ) -> Ship:
        """Place one pending ship on the human board."""
        if self._phase is not GamePhase.PLACEMENT:
            raise InvalidPlacementError(
                f"Ships can only be placed during placement, not {self._phase.value}."
            )
        if ship_type not in self._pending:
            raise InvalidPlacementError(f"No {ShipType(ship_type).value} left to place.")

        ship = create_ship(ship_type)
        ship.orient(orientation)
        self._human_board.place_ship(ship, Coord(row, col))
        if len(ship.coordinates) != ship.size:
            self._human_board.remove_ship(ship)
            raise InvalidPlacementError(
                f"{ship.ship_type.value} placement recorded {len(ship.coordinates)} cells."
            )
        self._pending.remove(ship_type)
        logger.debug(
            "human_ship_placed type=%s origin=%s orientation=%s",
            ship.ship_type.value,
            ship.coordinates[0].notation,
            ship.orientation.value,
        )
        return ship

    def place_human_ships_randomly(self) -> bool:
        """Auto-place the whole human fleet, replacing any ships already placed."""
        if self._phase is not GamePhase.PLACEMENT:
            raise InvalidPlacementError("Ships can only be placed during placement.")
        if not self._strategy.place_fleet(self._human_board):
            self._pending = fleet_ship_types()
            return False
        self._pending.clear()
        return True

    def move_human_ship(self, ship: Ship, new_row: int, new_col: int) -> None:
        """Move a placed human ship; on failure it stays exactly where it was."""
        if self._phase is not GamePhase.PLACEMENT:
            raise InvalidPlacementError("Ships can only be moved during placement.")
        original = list(ship.coordinates)
        slot = next(
            (i for i, placed in enumerate(self._human_board.ships) if placed is ship), None
        )
        if slot is None or not self._human_board.remove_ship(ship):
            raise InvalidPlacementError("The ship to move is not on the board.")
        ship.restore_coordinates([])
        try:
            self._human_board.place_ship(ship, Coord(new_row, new_col), index=slot)
        except GameError:
            ship.restore_coordinates(original)
            self._human_board.attach_ship(ship, index=slot)
            for cell in original:
                self._human_board.restore_cell(cell.row, cell.col, CellState.SHIP)
            raise

    def finalize_placement(self) -> bool:
        """Place the opponent fleet and open fire; return whether firing began."""
        if self._phase is not GamePhase.PLACEMENT or self._pending:
            return False
        if not self._strategy.place_fleet(self._opponent_board):
            logger.warning("opponent_fleet_placement_failed")
            return False
        self._phase = GamePhase.FIRING
        self._active_player = self._human
        logger.info("firing_phase_started nickname=%s", self.human_nickname)
        return True

    # -- firing --------------------------------------------------------------------

    def handle_human_shot(self, row: int, col: int) -> ShotOutcome:
        """Fire at the opponent board; raises on out-of-bounds or repeated cells."""
        outcome = self._opponent_board.receive_shot(Coord(row, col))
        self.conclude_if_over()
        return outcome

    def handle_opponent_turn(self) -> ShotOutcome:
        """Let the opponent fire at the human board; never raises."""
        coord = Coord(0, 0)
        try:
            coord = self._strategy.choose_target(self._human_board)
            if self._human_board.was_shot(coord):
                return ShotOutcome(coord, ShotResult.ALREADY_SHOT)
            outcome = self._human_board.receive_shot(coord)
        except (GameError, *RECOVERABLE_RUNTIME_ERRORS):
            log_recoverable(logger, "opponent_turn_fault cell=%s", coord.notation)
            return ShotOutcome(coord, ShotResult.WATER)
        # The shot already landed; a strategy bookkeeping fault must not mask it.
        try:
            self._strategy.notify_result(outcome)
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(logger, "opponent_notify_fault cell=%s", coord.notation)
        self.conclude_if_over()
        return outcome

    def switch_turn(self) -> None:
        self._active_player = self._opponent if self.is_human_turn() else self._human

    def is_game_over(self) -> bool:
        """Return whether either side has lost its whole fleet."""
        return self._human_board.all_ships_sunk() or self._opponent_board.all_ships_sunk()

    def conclude_if_over(self) -> bool:
        """Transition to ``GAME_OVER`` when a side is fully sunk."""
        if self._phase is GamePhase.GAME_OVER:
            return True
        if not self.is_game_over():
            return False
        self._phase = GamePhase.GAME_OVER
        winner = self.winner()
        logger.info("game_over winner=%s", winner.name if winner is not None else None)
        return True

    def winner(self) -> Player | None:
        if self._opponent_board.all_ships_sunk():
            return self._human
        if self._human_board.all_ships_sunk():
            return self._opponent
        return None

    # -- snapshots -----------------------------------------------------------------

    def create_memento(self, now: datetime | None = None) -> GameMemento:
        return GameMemento(
            nickname=self.human_nickname or "Unknown",
            human_sunk_ships=self._human_board.sunk_ship_count(),
            opponent_sunk_ships=self._opponent_board.sunk_ship_count(),
            phase=self._phase,
            saved_at=(now or datetime.now()).replace(microsecond=0),
        )

    def restore_from_memento(self, memento: GameMemento) -> None:
        """Restore identity and phase; boards are restored separately."""
        if self._human is None or self._human.name != memento.nickname:
            self._human = human_player(memento.nickname)
        self._phase = memento.phase
        # Whose turn it was is not saved: the human always resumes.
        self._active_player = self._human
        self._pending = []

    def resync_pending(self) -> None:
        """Recompute pending ship types from the human board during placement."""
        if self._phase is not GamePhase.PLACEMENT:
            self._pending = []
            return
        pending = fleet_ship_types()
        for ship in self._human_board.ships:
            if ship.ship_type in pending:
                pending.remove(ship.ship_type)
        self._pending = pending
