import os
import sys
import random
import pytest

# Ensure the backend root (containing the `pong` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from pong import create_app, socketio, NAMESPACE
from pong.services.match import Match, MatchSettings


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:3000']
    WINNING_SCORE = 3


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def scheduler(flask_app):
    return flask_app.extensions['pong']['scheduler']


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace=NAMESPACE
    )
    yield test_client
    try:
        test_client.disconnect(namespace=NAMESPACE)
    except Exception:
        pass


@pytest.fixture()
def settings():
    return MatchSettings()


@pytest.fixture()
def match(settings):
    return Match(settings, rng=random.Random(1234))


@pytest.fixture()
def playing_match(match):
    """A match with sessions 'a' (slot 0) and 'b' (slot 1) mid-play at t=0."""
    match.connect('a')
    match.connect('b')
    match.set_ready('a')
    match.set_ready('b')
    match.pump(0.0)
    assert match.state.phase == 'playing'
    return match
