"""File-system repository: one save directory per player nickname."""

from __future__ import annotations

import hashlib
import shutil
from collections.abc import Iterable
from pathlib import Path

from armada.game.core.errors import PersistenceError

GAME_INFO_FILE = "game_info.txt"


class SaveRepository:
    """Plain-text files grouped under a directory keyed by nickname."""

    def __init__(self, root: Path) -> None:
        self._root = root
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def directory_for(self, nickname: str) -> Path:
        return self._root / _normalize_for_dirname(_validate_nickname(nickname))

    def exists(self, nickname: str) -> bool:
        """Return whether a save with metadata exists for ``nickname``."""
        return (self.directory_for(nickname) / GAME_INFO_FILE).is_file()

    def write_lines(self, nickname: str, filename: str, lines: Iterable[str]) -> Path:
        """Write lines to a file in the nickname's directory, overwriting in place."""
        directory = self.directory_for(nickname)
        path = directory / filename
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="\n") as handle:
                for line in lines:
                    handle.write(line)
                    handle.write("\n")
        except OSError as exc:
            raise PersistenceError(f"Cannot write {path}: {exc}") from exc
        return path

    def read_lines(self, nickname: str, filename: str) -> list[str]:
        path = self.directory_for(nickname) / filename
        if not path.is_file():
            raise PersistenceError(f"Save file {path} not found.")
        try:
            with path.open("r", encoding="utf-8") as handle:
                return handle.read().splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Cannot read {path}: {exc}") from exc

    def list_nicknames(self) -> list[str]:
        """List nicknames that have a metadata file, as recorded inside it."""
        names: list[str] = []
        for path in self._root.glob(f"*/{GAME_INFO_FILE}"):
            names.append(self._read_nickname(path) or path.parent.name)
        return sorted(names, key=str.lower)

    def delete(self, nickname: str) -> bool:
        """Delete the nickname's save directory; return whether it existed."""
        directory = self.directory_for(nickname)
        if not directory.is_dir():
            return False
        try:
            shutil.rmtree(directory)
        except OSError as exc:
            raise PersistenceError(f"Cannot delete {directory}: {exc}") from exc
        return True

    @staticmethod
    def _read_nickname(path: Path) -> str | None:
        try:
            with path.open("r", encoding="utf-8") as handle:
                for line in handle:
                    key, sep, value = line.partition(":")
                    if sep and key.strip() == "NICKNAME":
                        return value.strip() or None
        except (OSError, UnicodeDecodeError):
            return None
        return None


def _validate_nickname(nickname: str) -> str:
    cleaned = nickname.strip()
    if not cleaned:
        raise PersistenceError("Nickname cannot be empty.")
    return cleaned


def _normalize_for_dirname(name: str) -> str:
    """Filesystem-safe directory name, unique per exact nickname.

    Names that are already safe are used as-is. Anything else gets a digest
    suffix after a dot, which never occurs in a safe name.
    """
    chars: list[str] = []
    for char in name:
        if char.isalnum() or char in {"-", "_"}:
            chars.append(char)
        else:
            chars.append("_")
    normalized = "".join(chars).strip("_")
    if normalized == name:
        return normalized
    digest = hashlib.sha1(name.encode("utf-8")).hexdigest()[:8]
    return f"{normalized or 'player'}.{digest}"
