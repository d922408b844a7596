from __future__ import annotations

import logging
from typing import Optional

from .config import ObservabilityConfig, get_config
from .domain.errors import ConfigurationError


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Apply the observability settings to the root logger."""
    config = config or get_config().observability

    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level {config.level!r}",
            setting_name="ITR_LOG_LEVEL",
            expected_type="DEBUG|INFO|WARNING|ERROR|CRITICAL",
        )

    logging.basicConfig(level=level, format=config.format, force=True)
