import os
import tempfile

# Logs go to a scratch directory; must be set before focail is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='focail-logs-'))

import pytest

from focail import create_app
from focail.config import TestingConfig
from focail.services import game_service as game_service_module


@pytest.fixture
def first_word(monkeypatch):
    """Make word selection deterministic: always the first word of the list."""
    monkeypatch.setattr(game_service_module.random, 'choice', lambda seq: seq[0])


@pytest.fixture
def service(first_word):
    return game_service_module.initialize_game_service()


@pytest.fixture
def app(service):
    app, _ = create_app(TestingConfig)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socket_client(app):
    return app.socketio.test_client(app)

