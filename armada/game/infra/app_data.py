"""App-data locations: one root holding ``logs`` and ``saves``."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppDataPaths:
    root: Path
    logs: Path
    saves: Path

    def ensure(self) -> AppDataPaths:
        for path in (self.root, self.logs, self.saves):
            path.mkdir(parents=True, exist_ok=True)
        return self


def resolve_game_root() -> Path:
    """Directory next to the frozen executable, or the package parent in a source tree."""
    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            return Path(executable).resolve().parent
    return Path(__file__).resolve().parents[2]


def resolve_app_data_root() -> Path:
    """``ARMADA_APP_DATA_DIR`` (relative values anchor at the game root), else ``appdata``."""
    return _from_env("ARMADA_APP_DATA_DIR", resolve_game_root(), "appdata")


def resolve_logs_dir() -> Path:
    return _from_env("ARMADA_LOG_DIR", resolve_app_data_root(), "logs")


def resolve_saves_dir() -> Path:
    return _from_env("ARMADA_SAVES_DIR", resolve_app_data_root(), "saves")


def ensure_app_data_dirs() -> AppDataPaths:
    """Create the app-data directories and return them."""
    return AppDataPaths(
        root=resolve_app_data_root(),
        logs=resolve_logs_dir(),
        saves=resolve_saves_dir(),
    ).ensure()


def apply_runtime_path_defaults() -> AppDataPaths:
    """Create app-data dirs and pin ``ARMADA_LOG_DIR``/``ARMADA_SAVES_DIR`` to absolute paths."""
    paths = ensure_app_data_dirs()
    os.environ["ARMADA_LOG_DIR"] = str(paths.logs)
    os.environ["ARMADA_SAVES_DIR"] = str(paths.saves)
    return paths


def _from_env(var_name: str, anchor: Path, default_name: str) -> Path:
    raw = os.getenv(var_name, "").strip()
    if not raw:
        return anchor / default_name
    candidate = Path(raw)
    return candidate if candidate.is_absolute() else anchor / candidate
