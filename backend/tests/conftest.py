import os
import sys
import pytest

# Ensure the backend root (containing the `xo_arena` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from xo_arena import create_app, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = 'test-secret'
    CORS_ALLOWED_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    PLAYER_NAME_MAX_LENGTH = 24
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def router(flask_app):
    return flask_app.extensions['xo_arena']


@pytest.fixture()
def sio_factory(flask_app):
    """Build Socket.IO test clients; all are disconnected at teardown."""
    created = []

    def make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        created.append(test_client)
        return test_client

    yield make
    for test_client in created:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


def events(test_client, name=None):
    """Drain received packets, optionally keeping only one event name."""
    received = test_client.get_received()
    if name is None:
        return received
    return [pkt for pkt in received if pkt['name'] == name]
