"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- ITR_REPORT_OUTPUT_DIR=/var/reports
- ITR_REPORT_PAGE_SIZE=LETTER
- ITR_REPORT_UNICODE_FONT_PATH=/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf
- ITR_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReportConfig(BaseSettings):
    """PDF report configuration.

    Environment variables prefixed with ITR_REPORT_.
    """

    model_config = SettingsConfigDict(env_prefix="ITR_REPORT_")

    output_dir: Path = Path("./output")
    page_size: Literal["A4", "LETTER"] = "A4"
    left_margin_mm: float = 10.0
    top_margin_mm: float = 10.0
    bottom_margin_mm: float = 15.0  # auto page break threshold
    activity_indent_mm: float = 20.0
    unicode_font_path: Optional[Path] = None


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with ITR_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="ITR_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.report.output_dir)

    Environment variables prefixed with ITR_.
    """

    model_config = SettingsConfigDict(env_prefix="ITR_")

    report: ReportConfig = Field(default_factory=ReportConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
