"""Session metadata snapshot and its ``game_info.txt`` codec."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from armada.game.core.errors import PersistenceError
from armada.game.core.models import GamePhase

SAVE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_REQUIRED_KEYS = (
    "NICKNAME",
    "HUMAN_SUNK_SHIPS",
    "OPPONENT_SUNK_SHIPS",
    "GAME_PHASE",
    "SAVE_DATE",
)


@dataclass(frozen=True, slots=True)
class GameMemento:
    """Minimal session metadata, independent of full board state."""

    nickname: str
    human_sunk_ships: int
    opponent_sunk_ships: int
    phase: GamePhase
    saved_at: datetime

    def to_lines(self) -> list[str]:
        return [
            f"NICKNAME:{self.nickname}",
            f"HUMAN_SUNK_SHIPS:{self.human_sunk_ships}",
            f"OPPONENT_SUNK_SHIPS:{self.opponent_sunk_ships}",
            f"GAME_PHASE:{self.phase.value}",
            f"SAVE_DATE:{self.saved_at.strftime(SAVE_DATE_FORMAT)}",
        ]

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> GameMemento:
        """Parse ``KEY:value`` lines; unknown keys are ignored."""
        values: dict[str, str] = {}
        for raw_line in lines:
            line = raw_line.strip()
            if not line:
                continue
            key, sep, value = line.partition(":")
            if not sep:
                raise PersistenceError(f"Malformed metadata line: {raw_line!r}.")
            values[key.strip()] = value.strip()

        missing = [key for key in _REQUIRED_KEYS if key not in values]
        if missing:
            raise PersistenceError(f"Metadata is missing keys: {', '.join(missing)}.")
        nickname = values["NICKNAME"]
        if not nickname:
            raise PersistenceError("Metadata nickname is empty.")
        try:
            return cls(
                nickname=nickname,
                human_sunk_ships=int(values["HUMAN_SUNK_SHIPS"]),
                opponent_sunk_ships=int(values["OPPONENT_SUNK_SHIPS"]),
                phase=GamePhase(values["GAME_PHASE"]),
                saved_at=datetime.strptime(values["SAVE_DATE"], SAVE_DATE_FORMAT),
            )
        except ValueError as exc:
            raise PersistenceError(f"Malformed metadata value: {exc}") from exc
