import logging

import pytest
from rich.logging import RichHandler

from netscope.utils.logging_config import PROBE_LOGGERS, level_for_verbosity, setup_logging


def _read(path):
    for handler in logging.getLogger().handlers:
        handler.flush()
    return path.read_text()


@pytest.mark.parametrize(
    "verbose, level",
    [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
)
def test_level_for_verbosity(verbose, level):
    assert level_for_verbosity(verbose) == level


def test_console_only(monkeypatch):
    monkeypatch.delenv("NETSCOPE_LOG_FILE", raising=False)
    assert setup_logging(1) == logging.INFO
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert isinstance(handler, RichHandler)
    assert handler.console.stderr


def test_probe_loggers_quiet_below_vv(monkeypatch):
    monkeypatch.delenv("NETSCOPE_LOG_FILE", raising=False)
    setup_logging(1)
    assert all(logging.getLogger(n).level == logging.INFO for n in PROBE_LOGGERS)
    setup_logging(2)
    assert all(logging.getLogger(n).level == logging.NOTSET for n in PROBE_LOGGERS)
    assert logging.getLogger("netscope.scan.ports").isEnabledFor(logging.DEBUG)


def test_file_keeps_debug_but_not_probe_lines(monkeypatch, tmp_path):
    log_file = tmp_path / "netscope.log"
    monkeypatch.setenv("NETSCOPE_LOG_FILE", str(log_file))
    setup_logging(0)
    console = next(h for h in logging.getLogger().handlers if isinstance(h, RichHandler))
    assert console.level == logging.WARNING
    logging.getLogger("netscope.config.manager").debug("settings loaded")
    logging.getLogger("netscope.scan.ports").debug("Port 10.0.0.1:22 closed")
    logging.getLogger("netscope.scan.ports").info("Scanning 10.0.0.1 ports 1-100")
    text = _read(log_file)
    assert "settings loaded" in text
    assert "Scanning 10.0.0.1" in text
    assert "closed" not in text


def test_file_gets_probe_lines_with_vv(tmp_path):
    log_file = tmp_path / "netscope.log"
    setup_logging(2, str(log_file))
    logging.getLogger("netscope.scan.hosts").debug("Ping of 10.0.0.9 timed out")
    assert "timed out" in _read(log_file)
