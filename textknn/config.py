"""Configuration management and validation for TextKNN."""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class TextKNNConfig:
    """Configuration class with comprehensive validation."""

    # Database settings
    database_url: str = "sqlite:///:memory:"

    # Classifier settings
    k: int = 10
    min_doc_freq: int = 0
    min_term_freq: int = 0

    # Similarity query settings
    max_query_terms: int = 25
    use_stopwords: bool = True

    # Additional settings
    extra_config: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate configuration parameters after initialization."""
        self._validate_all_parameters()
        self._load_environment_variables()

    def _validate_all_parameters(self):
        """Run all validation checks."""
        self._validate_database_url()
        self._validate_neighbor_count()
        self._validate_frequency_thresholds()
        self._validate_max_query_terms()

    def _validate_database_url(self):
        """Validate database URL format."""
        if not self.database_url:
            raise ConfigurationError(
                "database_url cannot be empty",
                parameter="database_url",
                suggested_fix="Provide a valid database URL (e.g., 'sqlite:///:memory:')",
            )

        supported_schemes = ["sqlite", "postgresql", "mysql"]
        is_supported_scheme = any(
            self.database_url.startswith(f"{scheme}") for scheme in supported_schemes
        )
        if not is_supported_scheme:
            raise ConfigurationError(
                f"database_url scheme not supported. Supported schemes: {supported_schemes}",
                parameter="database_url",
                suggested_fix="Use sqlite:, postgresql:, or mysql: URL scheme",
            )

    def _validate_neighbor_count(self):
        """Validate the number of neighbours."""
        if isinstance(self.k, bool) or not isinstance(self.k, int) or self.k < 1:
            raise ConfigurationError(
                f"k ({self.k}) must be a positive integer",
                parameter="k",
                suggested_fix="Set k to 1 or more",
            )

    def _validate_frequency_thresholds(self):
        """Validate similarity query frequency thresholds."""
        # Zero means "use the query builder's own default"
        for name in ("min_doc_freq", "min_term_freq"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ConfigurationError(
                    f"{name} ({value}) must be a non-negative integer",
                    parameter=name,
                    suggested_fix=f"Set {name} to 0 to keep the default threshold",
                )

    def _validate_max_query_terms(self):
        """Validate the similarity query size."""
        if not isinstance(self.max_query_terms, int) or self.max_query_terms < 1:
            raise ConfigurationError(
                f"max_query_terms ({self.max_query_terms}) must be a positive integer",
                parameter="max_query_terms",
                suggested_fix="Set max_query_terms to 1 or more (default 25)",
            )

    def _load_environment_variables(self):
        """Load configuration from environment variables."""
        env_mappings = {
            "TEXTKNN_DATABASE_URL": "database_url",
            "TEXTKNN_K": ("k", int),
            "TEXTKNN_MIN_DOC_FREQ": ("min_doc_freq", int),
            "TEXTKNN_MIN_TERM_FREQ": ("min_term_freq", int),
            "TEXTKNN_MAX_QUERY_TERMS": ("max_query_terms", int),
        }

        for env_var, config_attr in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value:
                if isinstance(config_attr, tuple):
                    attr_name, attr_type = config_attr
                    try:
                        setattr(self, attr_name, attr_type(env_value))
                    except ValueError:
                        raise ConfigurationError(
                            f"Invalid value for {env_var}: {env_value}",
                            parameter=attr_name,
                            suggested_fix=f"Provide a valid {attr_type.__name__} value",
                        )
                else:
                    setattr(self, config_attr, env_value)
                logger.debug(f"Configuration value {env_var} loaded from environment")

        # Re-validate after loading environment variables
        self._validate_all_parameters()
