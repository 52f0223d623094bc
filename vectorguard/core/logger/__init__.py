"""
Project logger: rotating JSON file + console.

Usage:
    from vectorguard.core.logger import configure, LoggerConfig

    configure(LoggerConfig(level="DEBUG", log_dir="/var/log/vectorguard"))
    # or from env: LOG_LEVEL, LOG_DIR, LOG_FILE_BASENAME, LOG_MAX_BYTES, ...
    configure()

Modules log through logging.getLogger(__name__); names under vectorguard.*
inherit the handlers configure() attaches to the root.
"""
from vectorguard.core.logger.config import LoggerConfig
from vectorguard.core.logger.formatters import JsonFormatter, PlainConsoleFormatter
from vectorguard.core.logger.setup import configure

__all__ = [
    "LoggerConfig",
    "JsonFormatter",
    "PlainConsoleFormatter",
    "configure",
]
