"""Tests for settings and logging setup."""

import logging
from pathlib import Path

import pydantic
import pytest

from itinerary_report.config import ObservabilityConfig, ReportConfig, get_config, reset_config
from itinerary_report.domain.errors import ConfigurationError
from itinerary_report.logging_config import configure_logging


def test_defaults():
    config = get_config()
    assert config.report.output_dir == Path("./output")
    assert config.report.page_size == "A4"
    assert config.report.unicode_font_path is None
    assert config.observability.level == "INFO"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("ITR_REPORT_OUTPUT_DIR", str(tmp_path))
    monkeypatch.setenv("ITR_REPORT_PAGE_SIZE", "LETTER")
    monkeypatch.setenv("ITR_REPORT_LEFT_MARGIN_MM", "12.5")
    monkeypatch.setenv("ITR_LOG_LEVEL", "DEBUG")
    reset_config()

    config = get_config()

    assert config.report.output_dir == tmp_path
    assert config.report.page_size == "LETTER"
    assert config.report.left_margin_mm == 12.5
    assert config.observability.level == "DEBUG"


def test_config_is_cached():
    assert get_config() is get_config()


def test_bad_page_size_rejected():
    with pytest.raises(pydantic.ValidationError):
        ReportConfig(page_size="A3")


def test_configure_logging_sets_level():
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging(ObservabilityConfig(level="warning"))
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)


def test_unknown_log_level():
    with pytest.raises(ConfigurationError) as exc:
        configure_logging(ObservabilityConfig(level="LOUD"))
    assert exc.value.setting_name == "ITR_LOG_LEVEL"
