from .config_store import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigSaveError,
    ConfigStore,
    ConfigStoreError,
    ErrorLogNotFoundError,
    StoreNotLoadedError,
)
from .game_service import GameService, RegistryService
