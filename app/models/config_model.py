# app/models/config_model.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .game_model import Game, GameValidationError


@dataclass(frozen=True)
class Config:
    """Holds the persisted launcher configuration. Immutable."""

    # Display order of the games list.
    games: list[Game] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        """
        Builds a Config from a decoded config.json document.
        Raises GameValidationError if the document does not match the schema.
        """
        if not isinstance(data, dict):
            raise GameValidationError("Config document must be a JSON object")

        games_data = data.get("games")
        if not isinstance(games_data, list):
            raise GameValidationError("Config document must contain a 'games' array")

        return cls(games=[Game.from_dict(game_dict) for game_dict in games_data])

    def to_dict(self) -> dict[str, Any]:
        return {"games": [game.to_dict() for game in self.games]}
