import asyncio
import inspect
import logging
import socketserver
import threading
from logging.handlers import RotatingFileHandler

import pytest
from rich.logging import RichHandler

from netscope.config import Config, ConfigPaths
from netscope.utils.logging_config import PROBE_LOGGERS


def pytest_pyfunc_call(pyfuncitem):
    if inspect.iscoroutinefunction(pyfuncitem.obj):
        sig = inspect.signature(pyfuncitem.obj)
        kwargs = {
            name: pyfuncitem.funcargs[name]
            for name in sig.parameters
            if name in pyfuncitem.funcargs
        }
        asyncio.run(pyfuncitem.obj(**kwargs))
        return True
    return None


class _Handler(socketserver.BaseRequestHandler):
    def handle(self):
        self.request.recv(1)


@pytest.fixture
def tcp_listener():
    """Yield the port of a TCP server accepting connections on 127.0.0.1."""

    with socketserver.ThreadingTCPServer(("127.0.0.1", 0), _Handler) as server:
        server.daemon_threads = True
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        try:
            yield server.server_address[1]
        finally:
            server.shutdown()
            thread.join()


@pytest.fixture
def config(tmp_path):
    return Config(paths=ConfigPaths.create(tmp_path / "netscope"))


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo ``setup_logging`` calls made by CLI and logging tests."""

    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, (RichHandler, RotatingFileHandler)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(logging.WARNING)
    for name in PROBE_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)
