"""
Configuration management for CipherLink.

Settings come from environment variables so that services embedding the
library can choose a cipher suite and log level without code changes:

- CIPHERLINK_SUITE: cipher suite name (default X25519-AES256-GCM)
- CIPHERLINK_LOG_LEVEL: package log level (default WARNING)
- CIPHERLINK_POOL_MAX_PER_CLASS: idle buffers kept per pool size class

Keys are never read from or written to configuration.
"""

import logging
import os
from typing import Mapping, Optional

from .crypto.suite import CipherSuite, DEFAULT_SUITE, SUPPORTED_SUITES, create_cipher_suite
from .utils.bytespool import BytesPool, DEFAULT_MAX_PER_CLASS

ENV_SUITE = "CIPHERLINK_SUITE"
ENV_LOG_LEVEL = "CIPHERLINK_LOG_LEVEL"
ENV_POOL_MAX_PER_CLASS = "CIPHERLINK_POOL_MAX_PER_CLASS"

DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when configuration values are invalid."""
    pass


class CipherLinkConfig:
    """
    Validated CipherLink settings.
    """

    def __init__(self, suite_name: str = DEFAULT_SUITE, log_level: str = DEFAULT_LOG_LEVEL,
                 pool_max_per_class: int = DEFAULT_MAX_PER_CLASS):
        """
        Initialize configuration.

        Args:
            suite_name: Name of a supported cipher suite
            log_level: Logging level name for the ``cipherlink`` logger
            pool_max_per_class: Idle buffer limit per pool size class

        Raises:
            ConfigError: If any value is invalid
        """
        suite_name = suite_name.strip().upper()
        if suite_name not in SUPPORTED_SUITES:
            supported = ", ".join(sorted(SUPPORTED_SUITES))
            raise ConfigError(f"Unknown cipher suite {suite_name!r}; supported: {supported}")

        log_level = log_level.strip().upper()
        if log_level not in _LOG_LEVELS:
            raise ConfigError(f"Invalid log level {log_level!r}")

        if isinstance(pool_max_per_class, bool) or not isinstance(pool_max_per_class, int) \
                or pool_max_per_class < 0:
            raise ConfigError("Pool size limit must be a non-negative integer")

        self.suite_name = suite_name
        self.log_level = log_level
        self.pool_max_per_class = pool_max_per_class

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'CipherLinkConfig':
        """
        Load configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests)

        Returns:
            CipherLinkConfig

        Raises:
            ConfigError: If a variable holds an invalid value
        """
        if environ is None:
            environ = os.environ

        raw_pool = environ.get(ENV_POOL_MAX_PER_CLASS, str(DEFAULT_MAX_PER_CLASS))
        try:
            pool_max_per_class = int(raw_pool)
        except ValueError:
            raise ConfigError(f"{ENV_POOL_MAX_PER_CLASS} must be an integer, got {raw_pool!r}")

        return cls(
            suite_name=environ.get(ENV_SUITE, DEFAULT_SUITE),
            log_level=environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
            pool_max_per_class=pool_max_per_class,
        )

    def create_suite(self) -> CipherSuite:
        """Build the configured cipher suite."""
        return create_cipher_suite(self.suite_name)

    def create_pool(self) -> BytesPool:
        """Build a buffer pool with the configured limit."""
        return BytesPool(max_per_class=self.pool_max_per_class)

    def configure_logging(self) -> logging.Logger:
        """Apply the configured level to the package logger."""
        logger = logging.getLogger("cipherlink")
        logger.setLevel(self.log_level)
        return logger

    def to_dict(self) -> dict:
        return {
            'suite_name': self.suite_name,
            'log_level': self.log_level,
            'pool_max_per_class': self.pool_max_per_class,
        }

    def __repr__(self) -> str:
        return (f"CipherLinkConfig(suite_name={self.suite_name!r}, "
                f"log_level={self.log_level!r}, pool_max_per_class={self.pool_max_per_class})")


def load_config(environ: Optional[Mapping[str, str]] = None) -> CipherLinkConfig:
    """Load configuration from the environment and apply its log level."""
    config = CipherLinkConfig.from_env(environ)
    config.configure_logging()
    return config
