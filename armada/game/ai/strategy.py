"""Opponent strategy contract."""

from __future__ import annotations

from abc import ABC, abstractmethod

from armada.game.core.board import Board
from armada.game.core.models import Coord, ShotOutcome


class AIStrategy(ABC):
    """Placement and targeting decisions for the automated opponent."""

    @abstractmethod
    def place_fleet(self, board: Board) -> bool:
        """Place the full fleet on ``board``; on failure leave it empty and return False."""

    @abstractmethod
    def choose_target(self, board: Board) -> Coord:
        """Return the next coordinate to fire at on ``board``.

        The result may point at an already-shot cell only when the strategy
        gave up searching; callers must check before firing.
        """

    def notify_result(self, outcome: ShotOutcome) -> None:
        """Update strategy state with a resolved shot."""
