import os
import sys
import pytest
from flask import g

# Ensure the backend root (containing the `gamevote` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from gamevote import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = 'DEBUG'
    GAME_NAME_POLICY = 'aggressive'
    GAME_PREFIX_MATCHING = False
    MAX_GAME_NAME_LENGTH = 100
    STATS_INCLUDE_EMPTY = True
    DISCORD_CLIENT_ID = 'client-id'
    DISCORD_CLIENT_SECRET = 'client-secret'
    DISCORD_REDIRECT_URI = 'http://localhost/auth/discord/callback'
    DISCORD_API_BASE = 'https://discord.test/api'
    DISCORD_CDN_BASE = 'https://cdn.discord.test'
    DISCORD_HTTP_TIMEOUT_SEC = 1
    FRONTEND_URL = 'http://localhost:5173/'
    CORS_ORIGINS = []


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)

    # Requests reuse the app context pushed below, so Flask-Login's cached
    # user on ``g`` would otherwise leak from one test client to the next
    @application.before_request
    def reset_login_cache():
        g.pop('_login_user', None)

    with application.app_context():
        # Ensure models are imported so tables are created
        import gamevote.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def login(flask_app):
    """Return a helper that logs a test client in as a freshly upserted user."""
    from gamevote.services.users import add_or_update_user

    def _login(test_client, user_id='1001', username='alice'):
        add_or_update_user(user_id, username, 'abc123')
        with test_client.session_transaction() as sess:
            sess['_user_id'] = user_id
            sess['_fresh'] = True
        return test_client

    return _login


@pytest.fixture()
def auth_client(client, login):
    return login(client)


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
