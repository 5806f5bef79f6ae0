"""Tests for repertoire.constants module."""

import pytest
from repertoire.constants import (
    DEFAULT_DESCRIPTION,
    DEFAULT_CATEGORY,
    MAX_NAME_LENGTH,
    MAX_CATEGORY_LENGTH,
    DEFAULT_DATABASE_URL,
    DEFAULT_REQUEST_TIMEOUT,
)
from web.models import Opening


class TestFieldDefaults:
    """Tests for record default values."""

    def test_default_description(self):
        assert DEFAULT_DESCRIPTION == 'No description provided'

    def test_default_category(self):
        assert DEFAULT_CATEGORY == 'Uncategorized'


class TestLimits:
    """Limits must agree with the column sizes."""

    def test_name_limit_matches_column(self):
        assert Opening.__table__.c.name.type.length == MAX_NAME_LENGTH

    def test_category_limit_matches_column(self):
        assert Opening.__table__.c.category.type.length == MAX_CATEGORY_LENGTH


class TestConfigDefaults:
    """Tests for configuration defaults."""

    def test_default_database_is_sqlite(self):
        assert DEFAULT_DATABASE_URL.startswith('sqlite:///')

    def test_request_timeout_is_positive(self):
        assert DEFAULT_REQUEST_TIMEOUT > 0
