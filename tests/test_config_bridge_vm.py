import json
import threading

import pytest
from PyQt6.QtCore import QThreadPool

from app.core.constants import APP_VERSION
from app.models.config_model import Config
from app.models.game_list_model import GameListModel
from app.models.game_model import Game
from app.services.config_store import ConfigSaveError, ErrorLogNotFoundError
from app.services.game_service import GameService
from app.viewmodels.config_bridge_vm import ConfigBridgeViewModel
from conftest import wait_until, write_log
from main import build_bridge


class FakeRegistryService:
    """Registry double that records calls and fails on demand."""

    def __init__(self, error=None, log_lines=None):
        self.error = error
        self.log_lines = log_lines or []
        self.release_log = threading.Event()
        self.release_log.set()
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if self.error:
            raise self.error

    def add_game(self):
        self._record("add_game")

    def upsert_game(self, request):
        self._record("upsert_game", request)

    def delete_game(self, game_id):
        self._record("delete_game", game_id)

    def persist_game_model(self):
        self._record("persist_game_model")

    def get_error_log(self, line_count):
        self.release_log.wait(5)
        self._record("get_error_log", line_count)
        return self.log_lines[-line_count:]


@pytest.fixture
def thread_pool(qapp):
    pool = QThreadPool()
    yield pool
    pool.waitForDone(5000)


@pytest.fixture
def bridge(store, thread_pool):
    store.write(Config(games=[Game(id="a", location="/a")]))
    game_model = GameListModel()
    game_service = GameService(config_store=store, game_model=game_model)
    game_service.load_games()
    return ConfigBridgeViewModel(game_service, game_model, thread_pool=thread_pool)


def make_fake_bridge(service, thread_pool):
    return ConfigBridgeViewModel(service, GameListModel(), thread_pool=thread_pool)


def test_upsert_game_persists_and_returns_true(bridge, store):
    body = json.dumps({"id": "a", "location": "/games/d2", "instances": 2, "flags": ["-w"]})

    assert bridge.upsert_game(body) is True

    assert store.read().games == [Game(id="a", location="/games/d2", instances=2, flags=["-w"])]


def test_malformed_upsert_is_rejected_without_touching_disk(bridge, store):
    before = store.config_path.read_bytes()

    assert bridge.upsert_game("not json") is False
    assert bridge.upsert_game('{"location": "/no/id"}') is False
    assert bridge.upsert_game('{"id": "a", "instances": ' + "1" * 5000 + "}") is False
    assert bridge.upsert_game("[" * 200000 + "]" * 200000) is False

    assert store.config_path.read_bytes() == before


def test_upsert_returns_false_on_service_failure(thread_pool):
    service = FakeRegistryService(error=ConfigSaveError("disk full"))
    bridge = make_fake_bridge(service, thread_pool)

    assert bridge.upsert_game('{"id": "a"}') is False
    assert service.calls[0][0] == "upsert_game"


def test_add_and_delete_swallow_failures(thread_pool):
    service = FakeRegistryService(error=ConfigSaveError("permission denied"))
    bridge = make_fake_bridge(service, thread_pool)

    bridge.add_game()
    bridge.delete_game("a")

    assert service.calls == [("add_game",), ("delete_game", "a")]


def test_add_game_appends_to_model(bridge):
    bridge.add_game()

    assert bridge.games.rowCount() == 2


def test_delete_game_is_idempotent(bridge, store):
    bridge.delete_game("a")
    bridge.delete_game("a")

    assert store.read().games == []
    assert bridge.games.rowCount() == 0


def test_persist_game_model(bridge, store):
    bridge.add_game()
    bridge.games.move_game(1, 0)

    assert bridge.persist_game_model() is True

    stored = [g.id for g in store.read().games]
    assert stored == [g.id for g in bridge.games.games()]
    assert stored[1] == "a"


def test_persist_game_model_returns_false_on_failure(thread_pool):
    bridge = make_fake_bridge(FakeRegistryService(error=ConfigSaveError("disk full")), thread_pool)

    assert bridge.persist_game_model() is False


def test_get_error_log_returns_before_fetch_completes(thread_pool):
    service = FakeRegistryService(log_lines=["one", "two"])
    service.release_log.clear()
    bridge = make_fake_bridge(service, thread_pool)
    published = []
    bridge.error_log_changed.connect(published.append)

    bridge.get_error_log()

    assert bridge.errorLog == ""
    assert bridge.errorsLoading is True

    service.release_log.set()
    assert wait_until(lambda: not bridge.errorsLoading)
    assert bridge.errorLog == "one\ntwo\n"
    assert published == ["one\ntwo\n"]


def test_get_error_log_publishes_last_25_lines(bridge, store):
    lines = [f"2024-01-01 00:00:{i:02d} | ERROR | boom {i}" for i in range(40)]
    write_log(store, lines)

    bridge.get_error_log()

    assert wait_until(lambda: bridge.errorLog != "")
    assert bridge.errorLog == "".join(f"{line}\n" for line in lines[-25:])


def test_get_error_log_short_file(bridge, store):
    write_log(store, ["only line"])

    bridge.get_error_log()

    assert wait_until(lambda: bridge.errorLog == "only line\n")


def test_get_error_log_failure_skips_publish(thread_pool):
    service = FakeRegistryService(error=ErrorLogNotFoundError("missing"))
    bridge = make_fake_bridge(service, thread_pool)
    published = []
    bridge.error_log_changed.connect(published.append)

    bridge.get_error_log()

    assert wait_until(lambda: not bridge.errorsLoading)
    assert bridge.errorLog == ""
    assert published == []


def test_get_error_log_keeps_previous_value_on_failure(bridge, store):
    write_log(store, ["old"])
    bridge.get_error_log()
    assert wait_until(lambda: bridge.errorLog == "old\n")

    store.error_log_path.unlink()
    bridge.get_error_log()

    assert wait_until(lambda: not bridge.errorsLoading)
    assert bridge.errorLog == "old\n"


def test_build_version(bridge):
    assert bridge.buildVersion == APP_VERSION


def test_build_bridge_initializes_empty_directory(qapp, tmp_path):
    config_dir = tmp_path / "fresh"

    bridge = build_bridge(config_dir)

    assert (config_dir / "config.json").is_file()
    assert bridge.games.rowCount() == 0
    assert bridge.upsert_game('{"id": "new", "location": "/d2"}') is True
    assert bridge.games.rowCount() == 1
