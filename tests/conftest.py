import os
import sys
from functools import total_ordering

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config import Config
from main import create_app


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    LOG_LEVEL = 'WARNING'
    LOG_FILE = None
    DEFAULT_SIZE = 8


@pytest.fixture
def app(tmp_path):
    config = type('TmpStoreConfig', (TestConfig,), {
        'SESSION_STORE_PATH': str(tmp_path / 'instance' / 'session_store.json'),
    })
    app = create_app(config)
    yield app
    app.extensions['workspaces'].close_all()
    app.extensions['session_store'].teardown()


@pytest.fixture
def client(app):
    return app.test_client()


class FakeClock:
    """Stands in for time.monotonic; moved by hand in milliseconds."""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms / 1000.0


@pytest.fixture
def clock():
    return FakeClock()


@total_ordering
class Keyed:
    """Sortable by `key` only; `tag` tells equal keys apart for stability checks."""

    def __init__(self, key, tag):
        self.key = key
        self.tag = tag

    def __eq__(self, other):
        return self.key == other.key

    def __lt__(self, other):
        return self.key < other.key

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        return f"{self.key}{self.tag}"
