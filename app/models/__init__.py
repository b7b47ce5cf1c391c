from .config_model import Config
from .game_list_model import GameListModel
from .game_model import Game, GameValidationError, UpdateGameRequest
