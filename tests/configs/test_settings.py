"""
Test suite for settings loading.

System role: Verification of configuration defaults and validation
"""

import pytest

from knowledge_chat.configs import get_settings
from knowledge_chat.configs.pipeline import PipelineSettings
from knowledge_chat.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestPipelineSettings:
    """Test suite for PipelineSettings defaults and overrides."""

    def test_defaults_should_match_provider_limits(self) -> None:
        # Act
        settings = PipelineSettings()

        # Assert
        assert settings.chunk_size == 1500
        assert settings.chunk_overlap == 300
        assert settings.max_batch_size == 96
        assert settings.top_k == 5
        assert settings.similarity_threshold == 0.3
        assert settings.history_limit == 10
        assert settings.max_tokens == 500
        assert settings.temperature == 0.4

    def test_env_should_override_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        # Arrange
        monkeypatch.setenv("RAG_TOP_K", "3")
        monkeypatch.setenv("RAG_SIMILARITY_THRESHOLD", "0.5")

        # Act
        settings = PipelineSettings()

        # Assert
        assert settings.top_k == 3
        assert settings.similarity_threshold == 0.5


class TestGetSettings:
    """Test suite for get_settings()."""

    def test_get_settings_should_be_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_get_settings_should_reject_excessive_overlap(self, monkeypatch: pytest.MonkeyPatch) -> None:
        # Arrange
        monkeypatch.setenv("RAG_CHUNK_SIZE", "1000")
        monkeypatch.setenv("RAG_CHUNK_OVERLAP", "250")

        # Act / Assert
        with pytest.raises(ConfigurationError):
            get_settings()

    def test_database_url_override_should_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        # Arrange
        monkeypatch.setenv("POSTGRES_URL", "sqlite+aiosqlite:///:memory:")

        # Act
        settings = get_settings()

        # Assert
        assert settings.database.async_database_url == "sqlite+aiosqlite:///:memory:"
        assert settings.database.is_sqlite is True


class TestServiceSettings:
    """Test suite for shared service settings."""

    def test_log_level_should_be_normalized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        # Arrange
        monkeypatch.setenv("LOG_LEVEL", "debug")

        # Act
        settings = get_settings()

        # Assert
        assert settings.log_level == "DEBUG"

    def test_unknown_log_level_should_be_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        # Arrange
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        # Act / Assert
        with pytest.raises(ConfigurationError):
            get_settings()

    def test_cors_origins_should_parse_json_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        # Arrange
        monkeypatch.setenv("CORS_ORIGINS", '["https://erp.example.com"]')
        monkeypatch.setenv("APP_TITLE", "Support KB")

        # Act
        settings = get_settings()

        # Assert
        assert settings.cors_origins == ["https://erp.example.com"]
        assert settings.app_title == "Support KB"
