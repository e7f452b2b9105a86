"""
System Constants

Base units shared by the other constant modules.
"""

BASE_SECOND = 1


class Application:
    """Application metadata."""

    NAME = "placekit"
    VERSION = "0.1.0"


class CacheDefaults:
    """In-memory lookup cache defaults."""

    MAX_SIZE = 1000
    KEY_PREFIX = "lookup"


class BatchDefaults:
    """Batch processing defaults."""

    BATCH_SIZE = 100
    PROGRESS_LOG_INTERVAL = 10


class Logging:
    """Logging defaults."""

    DEFAULT_LEVEL = "WARNING"


class FileSystem:
    """Configuration file locations."""

    HOME_DIR = ".placekit"
    CONFIG_FILE = "config.toml"
    ENV_FILE = ".env"
