"""
Unit Test Fixtures.

Fixtures for unit tests - external dependencies are mocked.
Service tests that need real SQL use the in-memory db_session from the
root conftest instead of these mocks.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_repository(mock_db_session: AsyncMock):
            repo = NoteRepository(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.expunge = MagicMock()
    session.get = AsyncMock()
    return session


# =============================================================================
# Event Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_publisher() -> AsyncMock:
    """
    Mock search-index publisher.

    Usage:
        service = NoteService(db_session, publisher=mock_publisher)
        mock_publisher.note_indexed.assert_awaited_once()
    """
    publisher = AsyncMock()
    publisher.note_indexed = AsyncMock()
    publisher.notes_removed = AsyncMock()
    return publisher


# =============================================================================
# Config Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_app_config() -> MagicMock:
    """
    Mock YAML application configuration.

    Usage:
        def test_with_config(mock_app_config):
            with patch("module.get_app_config", return_value=mock_app_config):
                ...
    """
    config = MagicMock()
    config.features.events_enabled = False
    config.features.events_publish_enabled = True
    config.features.api_detailed_errors = True
    config.features.api_request_logging = False
    config.events.source = "note-service"
    config.events.streams.note_indexed = "notes:note-indexed"
    config.events.streams.note_removed = "notes:note-removed"
    config.events.streams.default_maxlen = 1000
    return config
