import time

import pytest
from PyQt6.QtCore import QCoreApplication
from PyQt6.QtTest import QTest

from app.services.config_store import ConfigStore
from app.utils import logger_utils


@pytest.fixture(scope="session", autouse=True)
def log_dir(tmp_path_factory):
    # keep test runs from writing into app/logs
    path = tmp_path_factory.mktemp("logs")
    logger_utils.reconfigure_logger(path)
    return path


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def config_dir(tmp_path):
    return tmp_path / "launcher"


@pytest.fixture
def store(config_dir):
    config_store = ConfigStore(config_dir)
    config_store.load()
    return config_store


def write_log(store: ConfigStore, lines: list[str]):
    store.error_log_path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")


def wait_until(predicate, timeout: float = 5.0) -> bool:
    """Processes Qt events until predicate() is true or the timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        QTest.qWait(10)
    return predicate()
