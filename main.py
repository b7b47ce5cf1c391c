# Main.py
import sys
from pathlib import Path
from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QGuiApplication
from PyQt6.QtQml import QQmlApplicationEngine

from app.core.constants import APP_NAME, APP_VERSION, ORG_NAME, QML_ENTRY_PATH
from app.models import GameListModel
from app.services import ConfigStore, ConfigStoreError, GameService
from app.utils import SystemUtils
from app.utils.logger_utils import logger, reconfigure_logger
from app.viewmodels import ConfigBridgeViewModel


def build_bridge(config_dir: Path) -> ConfigBridgeViewModel:
    """
    Composition root: creates the store, the registry and the UI bridge.
    Raises ConfigStoreError if the store cannot be initialized.
    """
    config_store = ConfigStore(config_dir)
    config_store.load()

    game_model = GameListModel()
    game_service = GameService(config_store=config_store, game_model=game_model)
    game_service.load_games()

    return ConfigBridgeViewModel(game_service=game_service, game_model=game_model)


def main():
    """The main entry point for the application."""

    # --- 1. Qt Application Setup ---
    app = QGuiApplication(sys.argv)
    app.setOrganizationName(ORG_NAME)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)

    # errors.log lives next to config.json, so logging is configured from
    # the same directory.
    config_dir = SystemUtils.get_config_dir()
    reconfigure_logger(config_dir)
    logger.info(f"Application starting with config directory '{config_dir}'...")

    # ---2. Composition Root: Create and Wire All Dependencies ---
    try:
        config_bridge = build_bridge(config_dir)
        logger.info("Core services initialized.")
    except ConfigStoreError as e:
        logger.critical(f"Failed to initialize the config store: {e}", exc_info=True)
        return 1

    # ---3. Load the UI ---
    engine = QQmlApplicationEngine()
    engine.rootContext().setContextProperty("config", config_bridge)
    engine.load(QUrl.fromLocalFile(str(Path(QML_ENTRY_PATH).resolve())))
    if not engine.rootObjects():
        logger.critical(f"Failed to load the QML interface from '{QML_ENTRY_PATH}'.")
        return 1

    # Start Application Event Loop
    logger.info("Entering event loop...")
    exit_code = app.exec()
    logger.info(f"Application exiting with code {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
