import logging

import httpx
import pytest

from nextcloud_webdav_client.client import WebDAVClient

logger = logging.getLogger(__name__)

BASE_URL = "https://cloud.example.com/remote.php/dav/files/alice/"
USERNAME = "alice"
PASSWORD = "secret"


class RecordingHandler:
    """MockTransport handler that records requests and replays canned responses.

    ``responder`` is either an ``httpx.Response``, a callable taking the request,
    or an exception instance to raise.
    """

    def __init__(self, responder):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        logger.debug(f"Mock transport received {request.method} {request.url}")
        if isinstance(self.responder, Exception):
            raise self.responder
        if callable(self.responder):
            return self.responder(request)
        return self.responder

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client():
    """Build a WebDAVClient backed by an httpx.MockTransport.

    Returns a factory ``(responder) -> (client, handler)``.
    """
    clients = []

    def _make(responder):
        handler = RecordingHandler(responder)
        client = WebDAVClient(
            BASE_URL, USERNAME, PASSWORD, transport=httpx.MockTransport(handler)
        )
        clients.append(client)
        return client, handler

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level changed by setup_logging()."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    levels = {
        name: logging.getLogger(name).level
        for name in (
            "",
            "nextcloud_webdav_client",
            "nextcloud_webdav_client.client",
            "httpx",
            "httpcore",
        )
    }
    yield root_logger
    root_logger.handlers[:] = handlers
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)
