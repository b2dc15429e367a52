"""Shot outcome evaluation and the turn-continuation rule."""

from __future__ import annotations

from armada.game.core.board import Board
from armada.game.core.models import Coord, ShotOutcome, ShotResult


def resolve_shot(board: Board, coord: Coord) -> ShotOutcome:
    """Resolve a shot against a board."""
    return board.receive_shot(coord)


def keeps_turn(result: ShotResult) -> bool:
    """Return whether the shooter fires again after ``result``.

    A hit or a sink keeps the turn, water passes it. ``ALREADY_SHOT`` is not a
    turn event at all and is rejected here.
    """
    if result is ShotResult.ALREADY_SHOT:
        raise ValueError("ALREADY_SHOT does not advance or keep a turn.")
    return result in (ShotResult.TOUCHED, ShotResult.SUNK)
