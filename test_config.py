#!/usr/bin/env python3
"""Test configuration and logging setup."""

import logging

from smbios_tables.config import ConfigManager
from smbios_tables.logs import LogManager


def test_config_values(tmp_path):
    path = tmp_path / "smbios_tables.ini"
    path.write_text(
        "[source]\ntable_path = /tmp/DMI\n\n"
        "[logging]\nlog_level = DEBUG\nretries = 3\nverbose = yes\n"
    )
    config = ConfigManager(path)
    config.load()

    assert config.get("source", "table_path") == "/tmp/DMI"
    assert config.get("logging", "log_level", "WARNING") == "DEBUG"
    assert config.getint("logging", "retries") == 3
    assert config.getbool("logging", "verbose") is True


def test_config_fallbacks(tmp_path):
    path = tmp_path / "smbios_tables.ini"
    path.write_text("[logging]\nretries = many\n")
    config = ConfigManager(path)
    config.load()

    assert config.get("source", "table_path") is None
    assert config.get("output", "format", "table") == "table"
    assert config.getint("logging", "retries", 5) == 5
    assert config.getbool("logging", "verbose") is False


def test_missing_config_file(tmp_path):
    config = ConfigManager(tmp_path / "missing.ini")
    config.load()
    assert config.get("output", "format", "table") == "table"


def test_log_manager(tmp_path):
    logger = LogManager("smbios_tables_test", tmp_path / "logs", "debug").get_logger()
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logger.debug("structure walk complete")
    for handler in logger.handlers:
        handler.flush()
    assert "structure walk complete" in (tmp_path / "logs" / "smbios_tables_test.log").read_text()

    # Reconfiguring replaces handlers instead of stacking them
    logger = LogManager("smbios_tables_test", None, "bogus").get_logger()
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
