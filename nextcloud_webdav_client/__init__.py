"""Synchronous WebDAV client for Nextcloud, ownCloud and other WebDAV servers."""

__version__ = "1.0.0"

from .client import WebDAVClient  # noqa: E402
from .exceptions import (  # noqa: E402
    LocalIOError,
    ParseError,
    ProtocolError,
    TransportError,
    WebDAVError,
)
from .models import WebDAVItem, WebDAVResponse  # noqa: E402

__all__ = [
    "WebDAVClient",
    "WebDAVItem",
    "WebDAVResponse",
    "WebDAVError",
    "TransportError",
    "ProtocolError",
    "ParseError",
    "LocalIOError",
]
