"""Shared fixtures: an app on a fresh in-memory SQLite database per test."""

import pytest

from web.app import create_app
from web.database import db


SICILIAN = {
    'name': 'Sicilian Defense',
    'moves': ['e4', 'c5', 'Nf3', 'Nc6', 'Bb5', 'a6', 'Ba4', 'Nf6'],
    'variations': [
        {'name': 'French Defense', 'startMove': 1, 'moves': ['e6', 'd4', 'Nf6']},
    ],
}


@pytest.fixture
def app():
    app = create_app({'SQLALCHEMY_DATABASE_URI': 'sqlite://', 'TESTING': True})
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def repository(app):
    with app.app_context():
        yield app.extensions['opening_repository']


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sicilian():
    return {
        **SICILIAN,
        'moves': list(SICILIAN['moves']),
        'variations': [dict(v, moves=list(v['moves'])) for v in SICILIAN['variations']],
    }
