# app/services/config_store.py
import contextlib
import json
import threading
from pathlib import Path

from app.core.constants import CONFIG_FILE_NAME, DIR_PERMISSIONS, ERROR_LOG_FILE_NAME
from app.models.config_model import Config
from app.models.game_model import GameValidationError
from app.utils.logger_utils import logger


class ConfigStoreError(IOError):
    pass


class ConfigNotFoundError(ConfigStoreError):
    pass


class ErrorLogNotFoundError(ConfigStoreError):
    pass


class ConfigParseError(ConfigStoreError):
    pass


class ConfigSaveError(ConfigStoreError):
    pass


class StoreNotLoadedError(ConfigStoreError):
    pass


class ConfigStore:
    """
    Owns config.json and errors.log inside a single configuration directory.

    load() must be called once before read(), write() or get_errors().
    Writes are serialized by a per-instance lock; reads are not.
    """

    def __init__(self, config_dir: Path):
        # --- Store Setup ---
        self.config_dir = Path(config_dir)
        self._write_lock = threading.Lock()
        self._loaded = False

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    @property
    def error_log_path(self) -> Path:
        return self.config_dir / ERROR_LOG_FILE_NAME

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def _ensure_loaded(self):
        if not self._loaded:
            raise StoreNotLoadedError(
                f"Config store at '{self.config_dir}' has not been loaded yet."
            )

    # --- Public API ---

    def load(self):
        """
        Creates the configuration directory and a default config.json if they
        don't exist. An existing config.json is left untouched and not validated.
        """
        try:
            self.config_dir.mkdir(mode=DIR_PERMISSIONS, parents=True, exist_ok=True)
            config_exists = self.config_path.exists()
        except OSError as e:
            logger.error(f"Config directory '{self.config_dir}' is not accessible: {e}")
            raise ConfigStoreError(f"Config directory is not accessible: {e}") from e

        if not config_exists:
            logger.info(f"No config found at '{self.config_path}'. Writing default config.")
            self._write(Config(games=[]))

        self._loaded = True
        logger.info(f"Config store ready at '{self.config_dir}'.")

    def read(self) -> Config:
        """Reads and parses config.json from disk. Nothing is cached."""
        self._ensure_loaded()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigNotFoundError(f"Config file not found at: {self.config_path}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigParseError(f"Failed to parse {CONFIG_FILE_NAME}: {e}") from e
        except OSError as e:
            raise ConfigStoreError(f"Failed to read {CONFIG_FILE_NAME}: {e}") from e

        try:
            return Config.from_dict(data)
        except GameValidationError as e:
            raise ConfigParseError(f"{CONFIG_FILE_NAME} does not match the game schema: {e}") from e

    def write(self, config: Config):
        """Replaces the full contents of config.json with the given config."""
        self._ensure_loaded()
        self._write(config)

    def get_errors(self, line_count: int) -> list[str]:
        """
        Returns the last `line_count` lines of errors.log, oldest first.
        A log shorter than `line_count` is returned whole.
        """
        self._ensure_loaded()
        if line_count < 0:
            raise ValueError(f"line_count cannot be negative: {line_count}")

        try:
            with open(self.error_log_path, "r", encoding="utf-8", errors="replace") as f:
                lines = [line.rstrip("\r\n") for line in f]
        except FileNotFoundError as e:
            raise ErrorLogNotFoundError(f"Error log not found at: {self.error_log_path}") from e
        except OSError as e:
            raise ConfigStoreError(f"Failed to read {ERROR_LOG_FILE_NAME}: {e}") from e

        # Clamp at zero; a plain lines[-line_count:] would return everything for 0.
        start = max(len(lines) - line_count, 0)
        return lines[start:]

    # --- Private Helpers ---

    def _write(self, config: Config):
        with self._write_lock:
            try:
                body = json.dumps(config.to_dict(), indent=4)
            except (TypeError, ValueError) as e:
                logger.error(f"TypeError during JSON serialization: {e}", exc_info=True)
                raise ConfigSaveError(f"A data type could not be saved to JSON: {e}") from e

            tmp_path = self.config_path.with_suffix(".tmp")
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    f.write(body)
                tmp_path.replace(self.config_path)
            except OSError as e:
                with contextlib.suppress(OSError):
                    tmp_path.unlink(missing_ok=True)
                logger.error(f"IOError while saving config: {e}", exc_info=True)
                raise ConfigSaveError(f"Failed to write to config file: {e}") from e

        logger.debug(f"Saved {len(config.games)} game(s) to {self.config_path}.")
