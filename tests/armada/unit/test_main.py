import logging

import pytest

from armada.game.app.controller import GameController
from armada.game.core.models import GamePhase
from armada.main import create_controller, main
from armada.runtime.logging import shutdown_logging


@pytest.fixture
def app_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ARMADA_APP_DATA_DIR", str(tmp_path / "appdata"))
    monkeypatch.setenv("ARMADA_LOG_DIR", "logs")
    monkeypatch.setenv("ARMADA_SAVES_DIR", "saves")
    monkeypatch.setenv("ARMADA_THINK_DELAY_SECONDS", "0")
    monkeypatch.setenv("ARMADA_LOG_LEVEL", "INFO")
    yield tmp_path / "appdata"
    shutdown_logging()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.WARNING)


def test_create_controller_is_ready_for_a_new_game(app_env) -> None:
    controller = create_controller()
    assert isinstance(controller, GameController)
    assert controller.phase is GamePhase.INITIAL
    assert (app_env / "saves").is_dir()
    assert controller.start_new_game("Alice")


def test_console_entry_exits_cleanly(app_env) -> None:
    assert main() is None
    assert any((app_env / "logs").glob("armada_run_*.jsonl"))
