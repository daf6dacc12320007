import os
import sys
from pathlib import Path


def _ensure_repo_root_on_path():
    """Allow tests to import project modules without installation."""
    repo_root = Path(__file__).resolve().parent.parent
    repo_str = str(repo_root)
    if repo_str not in sys.path:
        sys.path.insert(0, repo_str)


def _configure_test_environment():
    """Config is read at import time, so this must run before any sinceonearth import."""
    os.environ['DATABASE_URL'] = 'sqlite://'
    os.environ['SESSION_SECRET'] = 'test-secret-for-the-sinceonearth-suite'
    os.environ['BCRYPT_ROUNDS'] = '4'
    os.environ['AIRPORTS_DATA_PATH'] = ''
    os.environ['FLASK_DEBUG'] = '0'


_ensure_repo_root_on_path()
_configure_test_environment()

import pytest  # noqa: E402

from sinceonearth.app import create_app  # noqa: E402
from sinceonearth.models import drop_db  # noqa: E402
from tests.helpers import auth_headers, register_user  # noqa: E402


@pytest.fixture
def app():
    drop_db()
    application = create_app(load_reference_data=False)
    application.config['TESTING'] = True
    yield application
    drop_db()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user(client):
    return register_user(client)


@pytest.fixture
def headers(user):
    return auth_headers(user['token'])
