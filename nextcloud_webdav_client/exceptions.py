"""Exceptions raised inside the WebDAV client.

None of these escape a public ``WebDAVClient`` operation; they are converted
into a failed ``WebDAVResponse`` (or ``False`` for ``exists``) at the
operation boundary.
"""


class WebDAVError(Exception):
    """Base class for all WebDAV client errors."""


class TransportError(WebDAVError):
    """The request never produced an HTTP response (connection, timeout, bad URL)."""


class ProtocolError(WebDAVError):
    """The server answered with a non-2xx status code."""

    def __init__(self, status_code: int, reason_phrase: str):
        super().__init__(reason_phrase)
        self.status_code = status_code
        self.reason_phrase = reason_phrase


class ParseError(WebDAVError):
    """A multi-status body could not be parsed as XML."""

    def __init__(self, message: str = "Failed to parse XML response"):
        super().__init__(message)


class LocalIOError(WebDAVError):
    """A local file to upload is missing or unreadable."""
