import os
import random
import sys
import pytest

# Ensure the project root (containing the `flapduel` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from flapduel import create_app, socketio
from flapduel.services.matchmaking import Coordinator, RelayRouter


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CLEANUP_GRACE_SEC = 0.2
    SEED_MAX = 1000000
    SOCKETIO_NAMESPACE = '/'
    CORS_ORIGINS = '*'
    PING_TIMEOUT = 60
    PING_INTERVAL = 25


class RecordingChannel:
    """In-memory channel: records deliveries per sid and holds timers until fired."""

    def __init__(self):
        self.rooms = {}
        self.sent = []
        self.timers = []

    def emit(self, event, payload=None, to=None):
        members = self.rooms.get(to)
        targets = sorted(members) if members is not None else [to]
        for sid in targets:
            self.sent.append((sid, event, payload))

    def join(self, sid, room):
        self.rooms.setdefault(room, set()).add(sid)

    def leave(self, sid, room):
        members = self.rooms.get(room, set())
        members.discard(sid)
        if not members:
            self.rooms.pop(room, None)

    def schedule(self, delay, callback, *args):
        self.timers.append((delay, callback, args))

    def fire_timers(self):
        pending, self.timers = self.timers, []
        for _, callback, args in pending:
            callback(*args)
        return len(pending)

    def received(self, sid, event=None):
        return [(name, payload) for target, name, payload in self.sent
                if target == sid and (event is None or name == event)]

    def clear(self):
        self.sent = []


@pytest.fixture()
def channel():
    return RecordingChannel()


@pytest.fixture()
def coordinator(channel):
    return Coordinator(channel, grace_sec=5.0, seed_max=1000, rng=random.Random(7))


@pytest.fixture()
def router(coordinator):
    return RelayRouter(coordinator)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _connect():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace='/'
        )
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected('/'):
                test_client.disconnect(namespace='/')
        except Exception:
            pass
