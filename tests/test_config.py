"""
Tests for configuration management and validation.
"""

import pytest

from textknn.config import TextKNNConfig
from textknn.exceptions import ConfigurationError


class TestTextKNNConfig:
    """Test configuration validation."""

    def test_default_config(self) -> None:
        """Test that defaults pass validation."""
        config = TextKNNConfig()

        assert config.database_url == "sqlite:///:memory:"
        assert config.k == 10
        assert config.min_doc_freq == 0
        assert config.min_term_freq == 0
        assert config.max_query_terms == 25
        assert config.use_stopwords is True

    def test_valid_config(self) -> None:
        """Test that valid configuration passes validation."""
        config = TextKNNConfig(
            database_url="sqlite:///index.db", k=3, min_doc_freq=1, min_term_freq=2
        )
        assert config.database_url == "sqlite:///index.db"
        assert config.k == 3

    def test_k_validation(self) -> None:
        """Test neighbour count validation."""
        with pytest.raises(ConfigurationError) as exc_info:
            TextKNNConfig(k=0)
        assert "k" in str(exc_info.value)
        assert exc_info.value.parameter == "k"

        with pytest.raises(ConfigurationError):
            TextKNNConfig(k=-5)

        with pytest.raises(ConfigurationError) as exc_info:
            TextKNNConfig(k=True)
        assert exc_info.value.parameter == "k"

    def test_frequency_threshold_validation(self) -> None:
        """Test min_doc_freq / min_term_freq validation."""
        with pytest.raises(ConfigurationError) as exc_info:
            TextKNNConfig(min_doc_freq=-1)
        assert "min_doc_freq" in str(exc_info.value)

        with pytest.raises(ConfigurationError) as exc_info:
            TextKNNConfig(min_term_freq=-1)
        assert "min_term_freq" in str(exc_info.value)

    def test_max_query_terms_validation(self) -> None:
        """Test similarity query size validation."""
        with pytest.raises(ConfigurationError) as exc_info:
            TextKNNConfig(max_query_terms=0)
        assert "max_query_terms" in str(exc_info.value)

    def test_database_url_validation(self) -> None:
        """Test database URL validation."""
        with pytest.raises(ConfigurationError) as exc_info:
            TextKNNConfig(database_url="")
        assert "database_url" in str(exc_info.value)

        with pytest.raises(ConfigurationError) as exc_info:
            TextKNNConfig(database_url="mongodb://localhost")
        assert "not supported" in str(exc_info.value)

    def test_environment_variables(self, monkeypatch) -> None:
        """Test loading configuration from environment variables."""
        monkeypatch.setenv("TEXTKNN_K", "7")
        monkeypatch.setenv("TEXTKNN_MIN_TERM_FREQ", "1")

        config = TextKNNConfig()

        assert config.k == 7
        assert config.min_term_freq == 1

    def test_invalid_environment_variable(self, monkeypatch) -> None:
        """Test invalid environment variable values."""
        monkeypatch.setenv("TEXTKNN_K", "seven")

        with pytest.raises(ConfigurationError) as exc_info:
            TextKNNConfig()
        assert "TEXTKNN_K" in str(exc_info.value)

    def test_environment_values_are_revalidated(self, monkeypatch) -> None:
        """Test that environment overrides go through validation too."""
        monkeypatch.setenv("TEXTKNN_K", "0")

        with pytest.raises(ConfigurationError):
            TextKNNConfig()
