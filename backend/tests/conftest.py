import os
import random
import sys
import pytest

# Ensure the backend root (containing the `pong_server` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from pong_server import create_app, socketio
from pong_server.services.pong import get_registry, get_ticker
from pong_server.services.pong.room import Room


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = []
    LOG_LEVEL = 'DEBUG'
    DEFAULT_ROOM = 'main'
    TICK_HZ = 60
    WIN_SCORE = 10
    BALL_SERVE_SPEED = 360.0
    AUTO_START_MATCH = True
    RANDOM_SEED = 1234


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def registry(flask_app):
    return get_registry(flask_app)


@pytest.fixture()
def ticker(flask_app):
    return get_ticker(flask_app)


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients; all are disconnected at teardown."""
    clients = []

    def _connect(query_string=None):
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            query_string=query_string,
        )
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def room():
    return Room('test', rng=random.Random(7))


@pytest.fixture()
def full_room(room):
    """A room with both sides seated and a match under way."""
    room.join('sid-a')
    room.join('sid-b')
    room.start_match()
    return room
