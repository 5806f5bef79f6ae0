"""Tests for web.app configuration."""

import pytest
from web.app import create_app, database_url


class TestDatabaseUrl:
    """Tests for DATABASE_URL handling."""

    def test_postgres_url_uses_psycopg3(self, monkeypatch):
        monkeypatch.setenv('DATABASE_URL', 'postgresql://user:pw@host/db')
        assert database_url() == 'postgresql+psycopg://user:pw@host/db'

    def test_default_when_unset(self, monkeypatch):
        monkeypatch.delenv('DATABASE_URL', raising=False)
        assert database_url() == 'sqlite:///repertoire.db'

    def test_other_urls_unchanged(self, monkeypatch):
        monkeypatch.setenv('DATABASE_URL', 'sqlite:///tmp/x.db')
        assert database_url() == 'sqlite:///tmp/x.db'


class TestCreateApp:
    """Tests for the application factory."""

    def test_config_overrides(self, app):
        assert app.config['SQLALCHEMY_DATABASE_URI'] == 'sqlite://'
        assert app.config['TESTING'] is True

    def test_repository_registered(self, app):
        assert 'opening_repository' in app.extensions
