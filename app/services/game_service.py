# app/services/game_service.py
from typing import Protocol

from app.models.config_model import Config
from app.models.game_list_model import GameListModel
from app.models.game_model import Game, UpdateGameRequest
from app.services.config_store import ConfigStore
from app.utils.logger_utils import logger


class RegistryService(Protocol):
    """The registry operations the UI bridge relies on."""

    def add_game(self) -> None: ...

    def upsert_game(self, request: UpdateGameRequest) -> None: ...

    def delete_game(self, game_id: str) -> None: ...

    def persist_game_model(self) -> None: ...

    def get_error_log(self, line_count: int) -> list[str]: ...


class GameService:
    """
    Business rules for the games registry.

    Keeps the live GameListModel and config.json in step. Store errors are
    propagated to the caller untouched.
    """

    def __init__(self, config_store: ConfigStore, game_model: GameListModel):
        # --- Injected Dependencies ---
        self.config_store = config_store
        self.game_model = game_model

    def load_games(self):
        """Fills the live model from the persisted config."""
        config = self.config_store.read()
        self.game_model.set_games(config.games)
        logger.info(f"Loaded {len(config.games)} game(s) from config.")

    def add_game(self):
        """Adds a blank game to the live model. It is persisted by a later upsert."""
        game = Game()
        self.game_model.append_game(game)
        logger.info(f"Added blank game '{game.id}' to the game model.")

    def upsert_game(self, request: UpdateGameRequest):
        """Inserts or updates a game on disk first, then in the live model."""
        game = request.to_game()
        config = self.config_store.read()

        games = list(config.games)
        index = next((i for i, g in enumerate(games) if g.id == game.id), None)
        if index is None:
            games.insert(self._disk_position(games, game.id), game)
            logger.info(f"Inserting game '{game.id}' at '{game.location}'.")
        else:
            games[index] = game
            logger.info(f"Updating game '{game.id}' at '{game.location}'.")

        self.config_store.write(Config(games=games))
        self.game_model.upsert_game(game)

    def delete_game(self, game_id: str):
        """Removes a game from disk and the live model. Unknown ids are ignored."""
        config = self.config_store.read()
        games = [g for g in config.games if g.id != game_id]

        if len(games) != len(config.games):
            self.config_store.write(Config(games=games))
            logger.info(f"Deleted game '{game_id}' from config.")
        else:
            logger.debug(f"Game '{game_id}' not found in config. Nothing to delete.")

        self.game_model.remove_game(game_id)

    def persist_game_model(self):
        """Writes the live model, in its current order, to disk."""
        games = self.game_model.games()
        self.config_store.write(Config(games=games))
        logger.info(f"Persisted {len(games)} game(s) from the game model.")

    def get_error_log(self, line_count: int) -> list[str]:
        return self.config_store.get_errors(line_count)

    def _disk_position(self, games: list[Game], game_id: str) -> int:
        """
        Index at which a game that is new on disk goes so the persisted order
        follows the live model: before the first stored game shown after it.
        """
        model_ids = [g.id for g in self.game_model.games()]
        if game_id not in model_ids:
            return len(games)

        shown_after = set(model_ids[model_ids.index(game_id) + 1 :])
        return next((i for i, g in enumerate(games) if g.id in shown_after), len(games))
