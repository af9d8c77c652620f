"""Shared fixtures for netpath tests."""

import logging
import socket
import threading
import time
from collections import namedtuple
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests

from netpath.utils.logger import Logger

snicaddr = namedtuple("snicaddr", ["family", "address", "netmask", "broadcast", "ptp"])
snicstats = namedtuple("snicstats", ["isup", "duplex", "speed", "mtu", "flags"])
snetio = namedtuple("snetio", ["bytes_sent", "bytes_recv"])

DOWNLOAD_BYTES = 1024 * 1024
DRIP_BYTES = 20
DRIP_DELAY = 0.2


def ipv4(address):
    return snicaddr(socket.AF_INET, address, "255.255.255.0", None, None)


def ipv6(address):
    return snicaddr(socket.AF_INET6, address, "ffff:ffff:ffff:ffff::", None, None)


@pytest.fixture(autouse=True)
def reset_logger():
    """Leave the netpath logger unconfigured between tests."""
    yield
    logger = logging.getLogger("netpath")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(logging.NullHandler())
    logger.propagate = True
    Logger._configured = False


class FakeResponse:
    """Minimal stand-in for requests.Response used as a context manager."""

    def __init__(self, status_code=200, body=b""):
        self.status_code = status_code
        self._body = body
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error", response=self)

    @property
    def content(self):
        return self._body

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self._body), chunk_size):
            yield self._body[start : start + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


class FakeSession:
    """Session that serves canned responses (or raises) per HTTP method."""

    def __init__(self, get=None, post=None):
        self._get = get
        self._post = post
        self.calls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        return self._reply(self._get)

    def post(self, url, data=None, **kwargs):
        self.calls.append(("POST", url, dict(kwargs, data=data)))
        return self._reply(self._post)

    @staticmethod
    def _reply(reply):
        if isinstance(reply, BaseException):
            raise reply
        return reply if reply is not None else FakeResponse()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


@pytest.fixture
def session_factory():
    """Build a factory returning one FakeSession and remembering it."""
    created = []

    def make(get=None, post=None):
        def factory():
            session = FakeSession(get=get, post=post)
            created.append(session)
            return session

        factory.created = created
        return factory

    return make


class _ProbeHandler(BaseHTTPRequestHandler):
    """Serves /ping, /download, /status/<code> and POST /echo."""

    def log_message(self, format, *args):
        pass

    def do_GET(self):
        if self.path == "/ping":
            self._reply(200, b"ok")
        elif self.path == "/download":
            self._reply(200, bytes(DOWNLOAD_BYTES))
        elif self.path == "/drip":
            self._drip()
        elif self.path.startswith("/status/"):
            self._reply(int(self.path.rsplit("/", 1)[1]), b"")
        else:
            self._reply(404, b"")

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        received = self.rfile.read(length)
        if self.path == "/echo":
            self._reply(200, f'{{"received": {len(received)}}}'.encode())
        else:
            self._reply(404, b"")

    def _drip(self):
        """Promise DRIP_BYTES but send one byte every DRIP_DELAY seconds."""
        self.send_response(200)
        self.send_header("Content-Length", str(DRIP_BYTES))
        self.end_headers()
        try:
            for _ in range(DRIP_BYTES):
                self.wfile.write(b"x")
                self.wfile.flush()
                time.sleep(DRIP_DELAY)
        except (BrokenPipeError, ConnectionResetError):
            return

    def _reply(self, status, body):
        self.send_response(status)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


@pytest.fixture
def probe_server():
    """Run a local HTTP server for speed test endpoints; yields its base URL."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _ProbeHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address[:2]
        yield f"http://{host}:{port}"
    finally:
        server.shutdown()
        server.server_close()
        thread.join()


@pytest.fixture
def listening_port():
    """Yield the port of a local TCP socket that accepts connections."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.bind(("127.0.0.1", 0))
        server.listen(8)
        yield server.getsockname()[1]


@pytest.fixture
def closed_port():
    """Return a local port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]
