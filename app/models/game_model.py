# app/models/game_model.py
from __future__ import annotations
from dataclasses import asdict, dataclass, field
import json
import uuid
from typing import Any

from app.core.constants import DEFAULT_GAME_INSTANCES


class GameValidationError(ValueError):
    """Raised when a game payload cannot be turned into a Game."""


# Field name -> accepted JSON type.
_FIELD_TYPES: dict[str, type] = {
    "id": str,
    "location": str,
    "instances": int,
    "maphack": bool,
    "override_bh_cfg": bool,
    "hd": bool,
    "flags": list,
}


def _check_fields(data: Any, source: str) -> dict[str, Any]:
    """Validates a raw mapping against the game schema and returns a clean copy."""
    if not isinstance(data, dict):
        raise GameValidationError(f"{source} must be a JSON object, got {type(data).__name__}")

    clean: dict[str, Any] = {}
    for key, expected in _FIELD_TYPES.items():
        if key not in data:
            continue
        value = data[key]
        # bool is a subclass of int
        if expected is int and isinstance(value, bool):
            raise GameValidationError(f"{source} field '{key}' must be an integer")
        if not isinstance(value, expected):
            raise GameValidationError(
                f"{source} field '{key}' must be of type {expected.__name__}, "
                f"got {type(value).__name__}"
            )
        clean[key] = value

    if "flags" in clean and not all(isinstance(f, str) for f in clean["flags"]):
        raise GameValidationError(f"{source} field 'flags' must only contain strings")
    if clean.get("instances", DEFAULT_GAME_INSTANCES) < 0:
        raise GameValidationError(f"{source} field 'instances' cannot be negative")
    if not clean.get("id"):
        raise GameValidationError(f"{source} is missing a non-empty 'id'")

    return clean


@dataclass(frozen=True)
class Game:
    """Represents a single game installation entry. Immutable."""

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    location: str = ""
    instances: int = DEFAULT_GAME_INSTANCES
    maphack: bool = False
    override_bh_cfg: bool = False
    hd: bool = False
    flags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Game:
        clean = _check_fields(data, "Game")
        if "flags" in clean:
            clean["flags"] = list(clean["flags"])
        return cls(**clean)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class UpdateGameRequest:
    """A request from the UI to insert or update a single game."""

    id: str
    location: str = ""
    instances: int = DEFAULT_GAME_INSTANCES
    maphack: bool = False
    override_bh_cfg: bool = False
    hd: bool = False
    flags: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, body: str) -> UpdateGameRequest:
        """
        Parses a JSON request body coming from the UI.
        Raises GameValidationError for malformed JSON or schema mismatches.
        """
        try:
            data = json.loads(body)
        except (TypeError, ValueError, RecursionError) as e:
            raise GameValidationError(f"Request body is not valid JSON: {e}") from e

        clean = _check_fields(data, "UpdateGameRequest")
        if "flags" in clean:
            clean["flags"] = list(clean["flags"])
        return cls(**clean)

    def to_game(self) -> Game:
        return Game(
            id=self.id,
            location=self.location,
            instances=self.instances,
            maphack=self.maphack,
            override_bh_cfg=self.override_bh_cfg,
            hd=self.hd,
            flags=list(self.flags),
        )
