"""Unit tests for logging setup."""

import io
import json
import logging

import pytest

from bridgeconf.utils.logging import (
    ROOT_LOGGER,
    HumanFormatter,
    JSONFormatter,
    LogMode,
    VerboseFormatter,
    configure_from_cli,
    get_logger,
    setup_logging,
)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_human_mode(self) -> None:
        stream = io.StringIO()
        setup_logging(LogMode.HUMAN, logging.INFO, stream)

        get_logger("bridgeconf.templates").info("Rendered")

        assert stream.getvalue() == "[INFO] Rendered\n"

    def test_json_mode(self) -> None:
        stream = io.StringIO()
        setup_logging(LogMode.JSON, logging.INFO, stream)

        get_logger("bridgeconf.cli").warning("careful")

        entry = json.loads(stream.getvalue())
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "bridgeconf.cli"
        assert entry["msg"] == "careful"
        assert "ts" in entry

    def test_level_filters_messages(self) -> None:
        stream = io.StringIO()
        setup_logging(LogMode.HUMAN, logging.WARNING, stream)

        get_logger().info("hidden")

        assert stream.getvalue() == ""

    def test_verbose_formatter_includes_logger_name(self) -> None:
        record = logging.LogRecord("bridgeconf.config", logging.DEBUG, "", 0, "loaded", (), None)

        assert "bridgeconf.config: loaded" in VerboseFormatter().format(record)
        assert HumanFormatter().format(record) == "[DEBUG] loaded"
        assert json.loads(JSONFormatter().format(record))["msg"] == "loaded"


class TestConfigureFromCli:
    """Tests for CLI flag handling."""

    @pytest.mark.parametrize(
        ("flags", "level"),
        [
            ({}, logging.INFO),
            ({"verbose": True}, logging.DEBUG),
            ({"quiet": True}, logging.WARNING),
            ({"ci": True}, logging.INFO),
        ],
    )
    def test_levels(self, flags: dict[str, bool], level: int) -> None:
        configure_from_cli(**flags)

        assert logging.getLogger(ROOT_LOGGER).level == level

    def test_ci_uses_json(self) -> None:
        configure_from_cli(ci=True)

        handler = logging.getLogger(ROOT_LOGGER).handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)
