"""Uniform random placement and targeting."""

from __future__ import annotations

import logging
import random

from armada.game.ai.strategy import AIStrategy
from armada.game.core.board import Board
from armada.game.core.errors import OutOfBoundsError, OverlapError
from armada.game.core.fleet import fleet_ship_types
from armada.game.core.models import Coord, Orientation
from armada.game.core.ship import create_ship

logger = logging.getLogger(__name__)

DEFAULT_PLACEMENT_TRIALS = 100
DEFAULT_TARGETING_TRIALS = 100


class RandomOpponent(AIStrategy):
    """Random legal fleet placement and random untried-cell targeting."""

    def __init__(
        self,
        rng: random.Random,
        *,
        placement_trials: int = DEFAULT_PLACEMENT_TRIALS,
        targeting_trials: int = DEFAULT_TARGETING_TRIALS,
    ) -> None:
        if placement_trials <= 0 or targeting_trials <= 0:
            raise ValueError("trial caps must be > 0")
        self._rng = rng
        self._placement_trials = placement_trials
        self._targeting_trials = targeting_trials

    def place_fleet(self, board: Board) -> bool:
        board.reset()
        for ship_type in fleet_ship_types():
            ship = create_ship(ship_type)
            placed = False
            for _ in range(self._placement_trials):
                ship.orient(self._rng.choice((Orientation.HORIZONTAL, Orientation.VERTICAL)))
                origin = Coord(self._rng.randrange(board.size), self._rng.randrange(board.size))
                try:
                    board.place_ship(ship, origin)
                except (OutOfBoundsError, OverlapError):
                    continue
                placed = True
                break
            if not placed:
                logger.warning(
                    "fleet_placement_exhausted ship_type=%s trials=%d",
                    ship_type.value,
                    self._placement_trials,
                )
                board.reset()
                return False
        return True

    def choose_target(self, board: Board) -> Coord:
        candidate = self._sample(board)
        for _ in range(self._targeting_trials):
            if not board.was_shot(candidate):
                return candidate
            candidate = self._sample(board)
        logger.warning("targeting_exhausted trials=%d", self._targeting_trials)
        return candidate

    def _sample(self, board: Board) -> Coord:
        return Coord(self._rng.randrange(board.size), self._rng.randrange(board.size))
