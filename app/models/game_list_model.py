# app/models/game_list_model.py
from PyQt6.QtCore import QAbstractListModel, QByteArray, QModelIndex, Qt

from app.models.game_model import Game


class GameListModel(QAbstractListModel):
    """The live, ordered list of games shown by the UI."""

    IdRole = Qt.ItemDataRole.UserRole + 1
    LocationRole = Qt.ItemDataRole.UserRole + 2
    InstancesRole = Qt.ItemDataRole.UserRole + 3
    MaphackRole = Qt.ItemDataRole.UserRole + 4
    OverrideBhCfgRole = Qt.ItemDataRole.UserRole + 5
    HdRole = Qt.ItemDataRole.UserRole + 6
    FlagsRole = Qt.ItemDataRole.UserRole + 7

    _ROLE_FIELDS = {
        IdRole: "id",
        LocationRole: "location",
        InstancesRole: "instances",
        MaphackRole: "maphack",
        OverrideBhCfgRole: "override_bh_cfg",
        HdRole: "hd",
        FlagsRole: "flags",
    }

    def __init__(self, parent=None):
        super().__init__(parent)
        self._games: list[Game] = []

    # --- Qt Model Interface ---

    def rowCount(self, parent=QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._games)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):
        if not index.isValid() or not 0 <= index.row() < len(self._games):
            return None

        game = self._games[index.row()]
        if role == Qt.ItemDataRole.DisplayRole:
            return game.location or game.id

        field_name = self._ROLE_FIELDS.get(role)
        if field_name is None:
            return None
        value = getattr(game, field_name)
        return list(value) if field_name == "flags" else value

    def roleNames(self) -> dict[int, QByteArray]:
        return {
            self.IdRole: QByteArray(b"id"),
            self.LocationRole: QByteArray(b"location"),
            self.InstancesRole: QByteArray(b"instances"),
            self.MaphackRole: QByteArray(b"maphack"),
            self.OverrideBhCfgRole: QByteArray(b"overrideBhCfg"),
            self.HdRole: QByteArray(b"hd"),
            self.FlagsRole: QByteArray(b"flags"),
        }

    # --- Public Methods ---

    def games(self) -> list[Game]:
        """Returns a copy of the games in display order."""
        return list(self._games)

    def set_games(self, games: list[Game]):
        self.beginResetModel()
        self._games = list(games)
        self.endResetModel()

    def append_game(self, game: Game):
        row = len(self._games)
        self.beginInsertRows(QModelIndex(), row, row)
        self._games.append(game)
        self.endInsertRows()

    def upsert_game(self, game: Game):
        """Replaces the game with the same id in place, or appends it."""
        row = self._row_of(game.id)
        if row is None:
            self.append_game(game)
            return

        self._games[row] = game
        model_index = self.index(row, 0)
        self.dataChanged.emit(model_index, model_index)

    def remove_game(self, game_id: str) -> bool:
        row = self._row_of(game_id)
        if row is None:
            return False

        self.beginRemoveRows(QModelIndex(), row, row)
        del self._games[row]
        self.endRemoveRows()
        return True

    def move_game(self, source_row: int, destination_row: int) -> bool:
        """Moves a game to a new position. The change is not persisted here."""
        count = len(self._games)
        if not (0 <= source_row < count and 0 <= destination_row < count):
            return False
        if source_row == destination_row:
            return True

        # Qt expects the destination as the row *before* which to insert.
        qt_destination = destination_row + 1 if destination_row > source_row else destination_row
        self.beginMoveRows(QModelIndex(), source_row, source_row, QModelIndex(), qt_destination)
        game = self._games.pop(source_row)
        self._games.insert(destination_row, game)
        self.endMoveRows()
        return True

    def _row_of(self, game_id: str) -> int | None:
        return next(
            (row for row, game in enumerate(self._games) if game.id == game_id), None
        )
