"""
Engine configuration and logging setup.

EngineConfig is a plain dataclass; the CLI builds one from the environment
and lets its own flags override individual values.

Environment
───────────
DATLENS_LOG_LEVEL              — root log level name (default INFO)
DATLENS_LARGE_RANGE_WARNING    — entry count above which a range listing
                                 is logged as large (default 20000)
"""

import logging
import os
from dataclasses import dataclass, field

__all__ = ["EngineConfig", "configure_logging", "DEFAULT_LOOKUP_SOURCES"]

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_SOURCES = ("skills", "spells", "components", "starting-areas")


@dataclass
class EngineConfig:
    """Runtime configuration for RecordResolver and the CLI."""
    large_range_warning: int             = 20000
    lookup_sources:      tuple[str, ...] = field(default=DEFAULT_LOOKUP_SOURCES)
    log_level:           str             = "INFO"
    log_format:          str             = "[%(levelname)s] %(message)s"

    @classmethod
    def from_env(cls, environ=None) -> "EngineConfig":
        """Build a config from ``DATLENS_*`` variables, ignoring bad values."""
        env = os.environ if environ is None else environ
        config = cls()

        level = env.get("DATLENS_LOG_LEVEL", "").strip().upper()
        if level:
            if isinstance(logging.getLevelName(level), int):
                config.log_level = level
            else:
                logger.warning("Ignoring unknown DATLENS_LOG_LEVEL %r", level)

        threshold = env.get("DATLENS_LARGE_RANGE_WARNING", "").strip()
        if threshold:
            try:
                config.large_range_warning = int(threshold)
            except ValueError:
                logger.warning("Ignoring non-integer DATLENS_LARGE_RANGE_WARNING %r", threshold)

        return config


def configure_logging(config: EngineConfig, debug: bool = False) -> None:
    """Install the root handler. ``debug`` forces DEBUG regardless of config."""
    level = logging.DEBUG if debug else getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(level=level, format=config.log_format)
