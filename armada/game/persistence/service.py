"""Save/load use cases over the save repository."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from armada.game.core.board import Board
from armada.game.core.errors import PersistenceError
from armada.game.core.models import CellState, GamePhase
from armada.game.core.rules import GameState
from armada.game.core.ship import Ship
from armada.game.core.territory import visible_state
from armada.game.persistence.memento import GameMemento
from armada.game.persistence.repository import GAME_INFO_FILE, SaveRepository
from armada.game.persistence.schema import (
    CellRecord,
    board_to_lines,
    lines_to_cells,
    lines_to_ships,
    ships_to_lines,
)

logger = logging.getLogger(__name__)

HUMAN_BOARD = "human"
OPPONENT_BOARD = "opponent"
TERRITORY_BOARD = "opponent_territory"


def board_file(name: str) -> str:
    return f"{name}_board_state.txt"


def ships_file(name: str) -> str:
    return f"{name}_ships_state.txt"


@dataclass(frozen=True, slots=True)
class SavedGameInfo:
    """Lobby-facing summary of a save, read without loading full state."""

    nickname: str
    phase: GamePhase
    saved_at: datetime
    human_sunk_ships: int
    opponent_sunk_ships: int
    directory: Path


@dataclass(frozen=True, slots=True)
class _StagedSave:
    memento: GameMemento
    human_cells: list[CellRecord]
    opponent_cells: list[CellRecord]
    human_ships: list[Ship]
    opponent_ships: list[Ship]


class PersistenceService:
    """Writes and restores complete game snapshots keyed by nickname."""

    def __init__(self, repository: SaveRepository) -> None:
        self._repository = repository

    def save_game(self, state: GameState) -> bool:
        """Persist metadata, three board files and two ship files; return success."""
        nickname = state.human_nickname
        if not nickname or not nickname.strip():
            logger.error("save_rejected reason=missing_nickname")
            return False
        repo = self._repository
        # Metadata first, then boards, then ships.
        files: list[tuple[str, list[str]]] = [
            (GAME_INFO_FILE, state.create_memento().to_lines()),
            (board_file(HUMAN_BOARD), board_to_lines(state.human_board.snapshot())),
            (board_file(OPPONENT_BOARD), board_to_lines(state.opponent_board.snapshot())),
            (board_file(TERRITORY_BOARD), board_to_lines(state.territory.snapshot())),
            (ships_file(HUMAN_BOARD), ships_to_lines(state.human_board.ships)),
            (ships_file(OPPONENT_BOARD), ships_to_lines(state.opponent_board.ships)),
        ]
        try:
            for filename, lines in files:
                repo.write_lines(nickname, filename, lines)
        except PersistenceError as exc:
            logger.error("save_failed nickname=%s error=%s", nickname, exc)
            return False
        logger.info("game_saved nickname=%s directory=%s", nickname, repo.directory_for(nickname))
        return True

    def load_game(self, state: GameState, nickname: str) -> bool:
        """Restore a save into ``state``; on any failure ``state`` is left untouched."""
        try:
            staged = self._stage(nickname, state.human_board.size)
        except PersistenceError as exc:
            logger.error("load_failed nickname=%s error=%s", nickname, exc)
            return False

        state.restore_from_memento(staged.memento)
        _restore_board(state.human_board, staged.human_cells, staged.human_ships)
        _restore_board(state.opponent_board, staged.opponent_cells, staged.opponent_ships)
        state.resync_pending()
        logger.info("game_loaded nickname=%s phase=%s", staged.memento.nickname, state.phase.value)
        return True

    def list_saves(self, nickname: str) -> list[SavedGameInfo]:
        """Return the save for ``nickname``, if any (at most one entry)."""
        if not self.has_saved_game(nickname):
            return []
        try:
            memento = GameMemento.from_lines(self._repository.read_lines(nickname, GAME_INFO_FILE))
        except PersistenceError as exc:
            logger.warning("save_metadata_unreadable nickname=%s error=%s", nickname, exc)
            return []
        return [
            SavedGameInfo(
                nickname=memento.nickname,
                phase=memento.phase,
                saved_at=memento.saved_at,
                human_sunk_ships=memento.human_sunk_ships,
                opponent_sunk_ships=memento.opponent_sunk_ships,
                directory=self._repository.directory_for(nickname),
            )
        ]

    def list_all_saves(self) -> list[SavedGameInfo]:
        saves: list[SavedGameInfo] = []
        for nickname in self._repository.list_nicknames():
            saves.extend(self.list_saves(nickname))
        return saves

    def has_saved_game(self, nickname: str) -> bool:
        try:
            return self._repository.exists(nickname)
        except PersistenceError:
            return False

    def delete_saved_game(self, nickname: str) -> bool:
        try:
            deleted = self._repository.delete(nickname)
        except PersistenceError as exc:
            logger.error("delete_failed nickname=%s error=%s", nickname, exc)
            return False
        if deleted:
            logger.info("save_deleted nickname=%s", nickname)
        return deleted

    def _stage(self, nickname: str, size: int) -> _StagedSave:
        repo = self._repository
        memento = GameMemento.from_lines(repo.read_lines(nickname, GAME_INFO_FILE))
        human_cells = lines_to_cells(repo.read_lines(nickname, board_file(HUMAN_BOARD)), size)
        opponent_cells = lines_to_cells(repo.read_lines(nickname, board_file(OPPONENT_BOARD)), size)
        territory_lines = repo.read_lines(nickname, board_file(TERRITORY_BOARD))
        territory_cells = lines_to_cells(territory_lines, size)
        human_ships = lines_to_ships(repo.read_lines(nickname, ships_file(HUMAN_BOARD)))
        opponent_ships = lines_to_ships(repo.read_lines(nickname, ships_file(OPPONENT_BOARD)))

        _check_ships_in_bounds(human_ships, size)
        _check_ships_in_bounds(opponent_ships, size)
        _check_territory_matches(opponent_cells, territory_cells)
        return _StagedSave(
            memento=memento,
            human_cells=human_cells,
            opponent_cells=opponent_cells,
            human_ships=human_ships,
            opponent_ships=opponent_ships,
        )


def _restore_board(board: Board, cells: list[CellRecord], ships: list[Ship]) -> None:
    # Cells come from the file: drop ships only, never reset the grid.
    board.clear_ships_only()
    for row, col, cell_state in cells:
        board.restore_cell(row, col, cell_state)
    for ship in ships:
        board.attach_ship(ship)


def _check_ships_in_bounds(ships: list[Ship], size: int) -> None:
    for ship in ships:
        for coord in ship.coordinates:
            if not (0 <= coord.row < size and 0 <= coord.col < size):
                raise PersistenceError(
                    f"{ship.ship_type.value} record lies outside the board "
                    f"at ({coord.row}, {coord.col})."
                )


def _check_territory_matches(opponent: list[CellRecord], territory: list[CellRecord]) -> None:
    expected: dict[tuple[int, int], CellState] = {
        (row, col): visible_state(state) for row, col, state in opponent
    }
    for row, col, state in territory:
        if expected.get((row, col)) is not state:
            raise PersistenceError(
                f"Territory view disagrees with the opponent board at ({row}, {col})."
            )
