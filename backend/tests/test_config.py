"""
FlowRouter Backend - Settings Tests
===================================

What:  Validation and derived values of the pydantic-settings `Settings`.
How:   Settings are built with explicit keyword values, so the test
       environment set up in conftest.py does not matter.
"""

import pytest
from pydantic import ValidationError

from flowrouter.config import Settings


class TestLogLevel:
    def test_level_is_normalised_to_upper_case(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError, match="Invalid log_level 'verbose'"):
            Settings(log_level="verbose")


class TestDerivedValues:
    def test_cors_origins_are_split_and_trimmed(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_sqlite_detection(self):
        assert Settings(database_url="sqlite+aiosqlite:///./x.db").is_sqlite
        assert not Settings(database_url="postgresql+asyncpg://u:p@h/db").is_sqlite

    def test_port_range_is_validated(self):
        with pytest.raises(ValidationError):
            Settings(backend_port=80)
