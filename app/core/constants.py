# app/core/constants.py

# --- Application Info ---
APP_NAME: str = "Slashdiablo Launcher"
ORG_NAME: str = "slashdiablo"
APP_VERSION: str = "0.4.2"

# --- File & Directory Names ---
CONFIG_FILE_NAME: str = "config.json"
ERROR_LOG_FILE_NAME: str = "errors.log"
DEBUG_LOG_FILE_NAME: str = "launcher.log"
QML_ENTRY_PATH: str = "app/qml/main.qml"

# Directory permissions for the configuration directory (rwxr-xr-x).
DIR_PERMISSIONS: int = 0o755

# Environment variable that overrides the configuration directory.
CONFIG_DIR_ENV_VAR: str = "LAUNCHER_CONFIG_DIR"

# --- Diagnostics ---
ERROR_LOG_LINE_COUNT: int = 25

# --- Game Defaults ---
DEFAULT_GAME_INSTANCES: int = 1
