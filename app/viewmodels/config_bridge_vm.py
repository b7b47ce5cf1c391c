# app/viewmodels/config_bridge_vm.py

from PyQt6.QtCore import QObject, QThreadPool, pyqtProperty, pyqtSignal, pyqtSlot

from app.core.constants import APP_VERSION, ERROR_LOG_LINE_COUNT
from app.models.game_list_model import GameListModel
from app.models.game_model import GameValidationError, UpdateGameRequest
from app.services.game_service import RegistryService
from app.utils.async_utils import Worker
from app.utils.logger_utils import logger


class ConfigBridgeViewModel(QObject):
    """
    Connects the UI to the games registry.

    Every slot runs on the caller's (UI) thread except get_error_log, which
    hands the disk read to a worker and publishes the result later.
    """

    # ---Signals for UI ---

    error_log_changed = pyqtSignal(str)
    errors_loading_changed = pyqtSignal(bool)

    def __init__(
        self,
        game_service: RegistryService,
        game_model: GameListModel,
        thread_pool: QThreadPool | None = None,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        # ---Injected Services ---

        self.game_service = game_service
        self._game_model = game_model
        self.thread_pool = thread_pool or QThreadPool.globalInstance()

        # ---Observable State ---

        self._error_log = ""
        self._pending_log_fetches = 0

    # ---Properties (exposed to QML) ---

    def _get_games(self) -> GameListModel:
        return self._game_model

    def _get_build_version(self) -> str:
        return APP_VERSION

    def _get_error_log(self) -> str:
        return self._error_log

    def _get_errors_loading(self) -> bool:
        return self._pending_log_fetches > 0

    games = pyqtProperty(QObject, fget=_get_games, constant=True)
    buildVersion = pyqtProperty(str, fget=_get_build_version, constant=True)
    errorLog = pyqtProperty(str, fget=_get_error_log, notify=error_log_changed)
    errorsLoading = pyqtProperty(bool, fget=_get_errors_loading, notify=errors_loading_changed)

    # ---Public Slots (API for the View) ---

    @pyqtSlot(name="addGame")
    def add_game(self):
        """Adds a blank game to the games list."""
        try:
            self.game_service.add_game()
        except Exception as e:
            logger.error(f"Failed to add a new game: {e}", exc_info=True)

    @pyqtSlot(str, name="upsertGame", result=bool)
    def upsert_game(self, body: str) -> bool:
        """
        Inserts or updates a game from a JSON request body.
        Returns True only when the game was stored successfully.
        """
        try:
            request = UpdateGameRequest.from_json(body)
        except GameValidationError as e:
            logger.error(f"Rejected malformed game update: {e}")
            return False

        try:
            self.game_service.upsert_game(request)
        except Exception as e:
            logger.error(f"Failed to upsert game '{request.id}': {e}", exc_info=True)
            return False

        return True

    @pyqtSlot(str, name="deleteGame")
    def delete_game(self, game_id: str):
        try:
            self.game_service.delete_game(game_id)
        except Exception as e:
            logger.error(f"Failed to delete game '{game_id}': {e}", exc_info=True)

    @pyqtSlot(name="persistGameModel", result=bool)
    def persist_game_model(self) -> bool:
        """Writes the current games list, in display order, to disk."""
        try:
            self.game_service.persist_game_model()
        except Exception as e:
            logger.error(f"Failed to persist the game model: {e}", exc_info=True)
            return False
        return True

    @pyqtSlot(name="getErrorLog")
    def get_error_log(self):
        """
        Starts loading the tail of errors.log in the background and returns
        immediately. errorLog is updated once the worker has finished.
        """
        logger.debug("Queueing error log fetch...")
        worker = Worker(self.game_service.get_error_log, ERROR_LOG_LINE_COUNT)
        worker.signals.result.connect(self._on_error_log_loaded)
        worker.signals.error.connect(self._on_error_log_failed)
        worker.signals.finished.connect(self._on_error_log_finished)

        self._pending_log_fetches += 1
        if self._pending_log_fetches == 1:
            self.errors_loading_changed.emit(True)

        self.thread_pool.start(worker)

    # ---Private Slots for Async Results ---

    @pyqtSlot(object)
    def _on_error_log_loaded(self, lines: list):
        self._set_error_log("".join(f"{line}\n" for line in lines))

    @pyqtSlot(tuple)
    def _on_error_log_failed(self, error_info: tuple):
        _, value, _ = error_info
        logger.warning(f"Could not load the error log: {value}")

    @pyqtSlot()
    def _on_error_log_finished(self):
        self._pending_log_fetches -= 1
        if self._pending_log_fetches == 0:
            self.errors_loading_changed.emit(False)

    def _set_error_log(self, text: str):
        self._error_log = text
        self.error_log_changed.emit(text)
