"""Player identities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

OPPONENT_NAME = "Computer"


class PlayerKind(StrEnum):
    """Which side a player controls."""

    HUMAN = "HUMAN"
    OPPONENT = "OPPONENT"


@dataclass(frozen=True, slots=True)
class Player:
    """A named participant."""

    name: str
    kind: PlayerKind

    @property
    def is_human(self) -> bool:
        return self.kind is PlayerKind.HUMAN


def human_player(nickname: str) -> Player:
    cleaned = nickname.strip()
    if not cleaned:
        raise ValueError("Nickname cannot be empty.")
    return Player(name=cleaned, kind=PlayerKind.HUMAN)


def opponent_player() -> Player:
    return Player(name=OPPONENT_NAME, kind=PlayerKind.OPPONENT)
