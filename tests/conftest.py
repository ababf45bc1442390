from datetime import datetime, timezone

import pytest

from powertrack import create_app
from powertrack.db import get_db, init_db

# a Monday
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
USER = {"X-User-Id": "user-1"}
OTHER_USER = {"X-User-Id": "user-2"}


@pytest.fixture
def app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "DATABASE": str(tmp_path / "powertrack.db"),
            "CLOCK": lambda: NOW,
        }
    )
    with app.app_context():
        init_db()
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def db(app):
    with app.app_context():
        yield get_db()
