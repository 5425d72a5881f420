"""Console logging setup tests."""

from __future__ import annotations

import logging

import pytest
from schema_form_converter.configuration import LoggingSettings, configure_logging
from schema_form_converter.configuration.logging_setup import LOGGER_NAME, build_logging_config


@pytest.fixture(autouse=True)
def _restore_package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_logging_config_routes_package_logger_to_stderr() -> None:
    config = build_logging_config("INFO")

    assert config["handlers"]["console"]["stream"] == "ext://sys.stderr"
    assert config["loggers"][LOGGER_NAME]["level"] == "INFO"
    assert config["formatters"]["default"]["format"] == (
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
    )


def test_configured_level_applies_to_the_package_logger() -> None:
    configure_logging(LoggingSettings(level="ERROR"))

    assert logging.getLogger(LOGGER_NAME).level == logging.ERROR


def test_verbose_forces_debug_level() -> None:
    configure_logging(LoggingSettings(level="ERROR"), verbose=True)

    logger = logging.getLogger(LOGGER_NAME)
    assert logger.level == logging.DEBUG
    assert logging.getLogger(f"{LOGGER_NAME}.conversion").isEnabledFor(logging.DEBUG)
