"""
Pytest fixtures and configuration for StudyOlle tests
"""
import pytest
from flask import template_rendered
from flask_login import FlaskLoginClient

from studyolle.app import create_app
from studyolle.db import db
from studyolle.services.account_service import create_or_update_account
from studyolle.settings import load_settings

NICKNAME = "gicheol"
EMAIL = "gicheol@a.com"
PASSWORD = "12345678"


@pytest.fixture(autouse=True)
def settings_file(tmp_path):
    """Load settings from a throwaway file so tests never touch the package config"""
    path = tmp_path / "settings.yaml"
    load_settings(force=True, config_file=str(path))
    return path


@pytest.fixture
def app_config(settings_file):
    """App configuration for tests"""
    return {
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SETTINGS_FILE': str(settings_file),
        'RATELIMIT_ENABLED': False,
    }


@pytest.fixture
def app(app_config):
    _app = create_app(app_config)
    _app.test_client_class = FlaskLoginClient

    with _app.app_context():
        yield _app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def account(app):
    """Signed-up account, the equivalent of a completed sign-up"""
    return create_or_update_account(NICKNAME, EMAIL, PASSWORD)


@pytest.fixture
def client(app, account):
    """Test client logged in as ``account``"""
    with app.test_client(user=account) as client:
        yield client


@pytest.fixture
def anonymous_client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def captured_templates(app):
    """Record (template, context) for every template rendered during the test"""
    recorded = []

    def record(sender, template, context, **extra):
        recorded.append((template, context))

    template_rendered.connect(record, app)
    yield recorded
    template_rendered.disconnect(record, app)


@pytest.fixture
def flashes(client):
    """Callable returning the flash messages waiting in the client session"""

    def _flashes():
        with client.session_transaction() as session:
            return list(session.get("_flashes", []))

    return _flashes
