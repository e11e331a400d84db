"""
Pytest configuration and fixtures
"""

import sqlite3

import pytest
from unittest.mock import MagicMock

from core.config import get_settings
from tests.fixtures.mock_data import MOCK_USERS_DDL, MOCK_USERS_ROWS


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Drop cached settings so each test sees its own OSM_* environment"""
    for name in ("OSM_LOG_LEVEL", "OSM_DATE_FORMAT", "OSM_DATETIME_FORMAT", "OSM_STRICT_COLUMNS"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sqlite_conn():
    """In-memory database with a populated users table"""
    conn = sqlite3.connect(":memory:")
    conn.execute(MOCK_USERS_DDL)
    conn.executemany("INSERT INTO users VALUES (?, ?, ?, ?, ?, ?, ?)", MOCK_USERS_ROWS)
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def mock_cursor():
    """Mock DB-API cursor; set fetchone.return_value / side_effect per test"""
    cursor = MagicMock()
    cursor.fetchone.return_value = None
    return cursor


@pytest.fixture
def mock_converter():
    """Value converter that records calls and assigns nothing"""
    return MagicMock(return_value=None)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (real sqlite database)"
    )
