"""Application entry point."""

from armada.game.app.controller import GameController, build_controller
from armada.game.infra.app_data import AppDataPaths, apply_runtime_path_defaults
from armada.game.infra.config import load_default_env_files, load_game_config
from armada.game.infra.logging import setup_logging
from armada.runtime.logging import get_logger, shutdown_logging

logger = get_logger(__name__)


def bootstrap() -> AppDataPaths:
    """Load env files, pin app-data paths and configure logging."""
    load_default_env_files()
    paths = apply_runtime_path_defaults()
    setup_logging()
    logger.info(
        "app_data_paths root=%s logs=%s saves=%s",
        paths.root,
        paths.logs,
        paths.saves,
    )
    return paths


def create_controller() -> GameController:
    """Bootstrap the process and return a controller ready for a front end."""
    paths = bootstrap()
    config = load_game_config()
    logger.info(
        "game_config think_delay=%.2f placement_trials=%d targeting_trials=%d seeded=%s",
        config.think_delay_seconds,
        config.placement_trials,
        config.targeting_trials,
        config.rng_seed is not None,
    )
    return build_controller(config, paths.saves)


def main() -> None:
    """Console entry point: verify the engine boots, then release logging."""
    controller = create_controller()
    logger.info("engine_ready phase=%s", controller.phase.value)
    shutdown_logging()


if __name__ == "__main__":
    main()
