# app/utils/system_utils.py
import os
from pathlib import Path
from PyQt6.QtCore import QStandardPaths

from app.core.constants import CONFIG_DIR_ENV_VAR


class SystemUtils:
    """A collection of static utility functions for OS-level interactions."""

    @staticmethod
    def get_config_dir() -> Path:
        """
        Returns the directory holding config.json and errors.log.
        The LAUNCHER_CONFIG_DIR environment variable takes precedence over
        the platform's application config location.
        """
        override = os.environ.get(CONFIG_DIR_ENV_VAR)
        if override:
            return Path(override).expanduser()

        location = QStandardPaths.writableLocation(
            QStandardPaths.StandardLocation.AppConfigLocation
        )
        if not location:
            # No writable location on this platform; fall back to the working dir.
            return Path(".")
        return Path(location)
