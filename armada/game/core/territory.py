"""Read-only projection of the opponent board as seen by the human."""

from __future__ import annotations

from armada.game.core.board import Board
from armada.game.core.models import CellState


def visible_state(state: CellState) -> CellState:
    """Hide afloat ship parts; everything that was shot is visible."""
    return CellState.EMPTY if state is CellState.SHIP else state


class TerritoryView:
    """Projection over a board; computed on demand, never stored."""

    def __init__(self, board: Board) -> None:
        self._board = board

    @property
    def size(self) -> int:
        return self._board.size

    def cell_state(self, row: int, col: int) -> CellState:
        return visible_state(self._board.cell_state(row, col))

    def snapshot(self) -> tuple[tuple[CellState, ...], ...]:
        return tuple(tuple(visible_state(state) for state in row) for row in self._board.snapshot())
