"""Tests for logging setup."""

import logging

import pytest

from envbind.utils.logger import _parse_size, get_logger, setup_logging


@pytest.mark.parametrize("size, expected", [
    ("10MB", 10 * 1024 * 1024),
    ("1kb", 1024),
    ("2GB", 2 * 1024 ** 3),
    ("512", 512),
])
def test_parse_size(size, expected):
    assert _parse_size(size) == expected


def test_setup_logging_with_file(tmp_path):
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    log_file = tmp_path / "logs" / "envbind.log"

    try:
        logger = setup_logging(log_level="DEBUG", log_file=str(log_file))
        get_logger("envbind.test").debug("hello from test")
        for handler in root.handlers:
            handler.flush()

        assert logger.name == "envbind"
        assert root.level == logging.DEBUG
        assert "hello from test" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
