import logging
from logging.handlers import RotatingFileHandler

import pytest

from cmsclient.infrastructure.config.settings import set_config_for_testing
from cmsclient.infrastructure.monitoring.logger_setup import (
    DEFAULT_LOG_LEVEL,
    configure_logging,
    resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_logging():
    """Puts the root and http library loggers back the way pytest left them."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    library_levels = {name: logging.getLogger(name).level for name in ("httpx", "httpcore")}
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    for name, library_level in library_levels.items():
        logging.getLogger(name).setLevel(library_level)


@pytest.mark.parametrize("value, expected", [
    (None, DEFAULT_LOG_LEVEL),
    (logging.INFO, logging.INFO),
    ("debug", logging.DEBUG),
    ("ERROR", logging.ERROR),
    ("chatty", DEFAULT_LOG_LEVEL),
])
def test_resolve_level(value, expected):
    assert resolve_level(value) == expected


def test_configure_logging_follows_settings():
    set_config_for_testing({"logging.level": "INFO", "logging.format": "%(levelname)s %(message)s", "logging.file": None})

    assert configure_logging() == logging.INFO

    root = logging.getLogger()
    assert root.level == logging.INFO
    assert [h.formatter._fmt for h in root.handlers] == ["%(levelname)s %(message)s"]
    assert logging.getLogger("httpx").level == logging.WARNING


def test_verbose_forces_debug_including_http_libraries():
    set_config_for_testing({"logging.level": "ERROR", "logging.format": None, "logging.file": None})

    assert configure_logging(verbose=True) == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.DEBUG
    assert logging.getLogger("httpcore").level == logging.DEBUG


def test_log_file_is_rotating(tmp_path):
    log_file = tmp_path / "cmsclient.log"

    setup_logging("WARNING", log_file=str(log_file))
    logging.getLogger("cmsclient.test").warning("written to file")

    file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    file_handlers[0].flush()
    assert "written to file" in log_file.read_text(encoding="utf-8")


def test_setup_replaces_existing_handlers():
    setup_logging("INFO")
    setup_logging("INFO")
    assert len(logging.getLogger().handlers) == 1
