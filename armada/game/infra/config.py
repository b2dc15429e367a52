"""Application configuration and env loading."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from armada.game.ai.random_opponent import DEFAULT_PLACEMENT_TRIALS, DEFAULT_TARGETING_TRIALS
from armada.game.infra.app_data import resolve_game_root

DEFAULT_THINK_DELAY_SECONDS = 1.0


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Immutable game tuning sourced from environment."""

    think_delay_seconds: float = DEFAULT_THINK_DELAY_SECONDS
    placement_trials: int = DEFAULT_PLACEMENT_TRIALS
    targeting_trials: int = DEFAULT_TARGETING_TRIALS
    rng_seed: int | None = None


def load_game_config() -> GameConfig:
    """Read ``ARMADA_*`` tuning variables; malformed values raise ``ValueError``."""
    think_delay = _float("ARMADA_THINK_DELAY_SECONDS", DEFAULT_THINK_DELAY_SECONDS)
    if think_delay < 0.0:
        raise ValueError("ARMADA_THINK_DELAY_SECONDS must be >= 0")
    placement_trials = _int("ARMADA_PLACEMENT_TRIALS", DEFAULT_PLACEMENT_TRIALS)
    targeting_trials = _int("ARMADA_TARGETING_TRIALS", DEFAULT_TARGETING_TRIALS)
    if placement_trials <= 0:
        raise ValueError("ARMADA_PLACEMENT_TRIALS must be > 0")
    if targeting_trials <= 0:
        raise ValueError("ARMADA_TARGETING_TRIALS must be > 0")
    raw_seed = os.getenv("ARMADA_RNG_SEED", "").strip()
    return GameConfig(
        think_delay_seconds=think_delay,
        placement_trials=placement_trials,
        targeting_trials=targeting_trials,
        rng_seed=_int("ARMADA_RNG_SEED", 0) if raw_seed else None,
    )


DEFAULT_ENV_FILES = (
    "appdata/config/.env.app",
    "appdata/config/.env.app.local",
    ".env.app",
    ".env.app.local",
)


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Copy ``KEY=VALUE`` lines from ``path`` into ``os.environ``.

    Missing files are ignored. File values replace existing variables unless
    ``override_existing`` is false.
    """
    env_path = _locate_env_file(path)
    if env_path is None:
        return
    for key, value in _parse_env_lines(env_path.read_text(encoding="utf-8")):
        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load ``paths`` (default ``DEFAULT_ENV_FILES``) in order; later files win."""
    for path in DEFAULT_ENV_FILES if paths is None else paths:
        load_env_file(path, override_existing=override_existing)


def _float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _parse_env_lines(text: str) -> Iterator[tuple[str, str]]:
    for line in text.splitlines():
        line = line.strip()
        if line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key, value = key.strip(), value.strip()
        if not sep or not key:
            continue
        if len(value) >= 2 and value[0] in "'\"" and value[-1] == value[0]:
            value = value[1:-1]
        yield key, value


def _locate_env_file(path: str) -> Path | None:
    # cwd first, then next to the executable or source checkout
    candidates = [Path(path), resolve_game_root() / path]
    if not getattr(sys, "frozen", False):
        candidates.append(resolve_game_root().parent / path)
    return next((candidate for candidate in candidates if candidate.is_file()), None)

