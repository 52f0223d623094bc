"""
Logger configuration. Build explicitly or from env via LoggerConfig.from_env().
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

_TRUTHY = ("1", "true", "yes")
_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class LoggerConfig:
    """
    Configuration for the vectorguard logger.

    Diagnostics from the parser and normalizer are chatty at DEBUG; production
    deployments normally run at INFO and ship the JSON file to aggregation.
    """

    level: str = "INFO"
    # Log directory for the rotating JSON file (if None, file handler is skipped)
    log_dir: Optional[str] = None
    log_file_basename: str = "vectorguard"
    max_bytes: int = 5 * 1024 * 1024  # 5 MB
    backup_count: int = 5
    # Root logger name; module loggers under vectorguard.* inherit its handlers
    root_name: str = "vectorguard"
    console: bool = True
    file_rotating: bool = True

    def __post_init__(self) -> None:
        if self.level.upper() not in _LEVELS:
            raise ValueError(f"level must be one of {sorted(_LEVELS)}, got {self.level!r}")
        if self.max_bytes < 1:
            raise ValueError(f"max_bytes must be positive, got {self.max_bytes!r}")
        if self.backup_count < 0:
            raise ValueError(f"backup_count must be >= 0, got {self.backup_count!r}")

    @classmethod
    def from_env(cls) -> "LoggerConfig":
        """Build config from LOG_* environment variables."""
        return cls(
            level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            log_dir=os.environ.get("LOG_DIR") or None,
            log_file_basename=os.environ.get("LOG_FILE_BASENAME", "vectorguard"),
            max_bytes=int(os.environ.get("LOG_MAX_BYTES", "5242880")),
            backup_count=int(os.environ.get("LOG_BACKUP_COUNT", "5")),
            root_name=os.environ.get("LOG_ROOT_NAME", "vectorguard"),
            console=os.environ.get("LOG_CONSOLE", "true").lower() in _TRUTHY,
            file_rotating=os.environ.get("LOG_FILE_ROTATING", "true").lower() in _TRUTHY,
        )
