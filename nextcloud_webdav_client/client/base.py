"""Base client holding connection settings and the shared request step."""

import logging
from abc import ABC

from httpx import (
    BaseTransport,
    BasicAuth,
    Client,
    HTTPTransport,
    InvalidURL,
    Request,
    RequestError,
    Response,
    Timeout,
)

from .. import __version__
from ..exceptions import ProtocolError, TransportError

logger = logging.getLogger(__name__)

USER_AGENT = f"nextcloud-webdav-client/{__version__}"


def log_request(request: Request):
    logger.debug("Request event hook: %s %s", request.method, request.url)


def log_response(response: Response):
    logger.debug(
        "Response [%s] %s %s",
        response.status_code,
        response.request.method,
        response.request.url,
    )


class DisableCookieTransport(BaseTransport):
    """This Transport disables cookies from accumulating in the httpx Client

    Thanks to: https://github.com/encode/httpx/issues/2992#issuecomment-2133258994
    """

    def __init__(self, transport: BaseTransport):
        self.transport = transport

    def handle_request(self, request: Request) -> Response:
        response = self.transport.handle_request(request)
        response.headers.pop("set-cookie", None)
        return response

    def close(self) -> None:
        self.transport.close()


def is_success(status_code: int) -> bool:
    """Any 2xx status counts as success."""
    return status_code // 100 == 2


class BaseWebDAVClient(ABC):
    """Base class owning the HTTP client, credentials and base URL."""

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        transport: BaseTransport | None = None,
        timeout: float = 30,
        connect_timeout: float = 5,
    ):
        """Initialize with the WebDAV root URL and BasicAuth credentials.

        Args:
            base_url: WebDAV root, e.g. https://cloud.example.com/remote.php/dav/files/alice/
            username: Username for BasicAuth
            password: Password or app password for BasicAuth
            transport: Optional httpx transport; tests inject ``httpx.MockTransport``
            timeout: Overall request timeout in seconds
            connect_timeout: Connection timeout in seconds
        """
        self.base_url = base_url.rstrip("/") + "/"
        self.username = username
        self._client = Client(
            auth=BasicAuth(username, password),
            headers={"User-Agent": USER_AGENT},
            transport=DisableCookieTransport(transport or HTTPTransport()),
            event_hooks={"request": [log_request], "response": [log_response]},
            timeout=Timeout(timeout=timeout, connect=connect_timeout),
        )

    def get_full_url(self, path: str) -> str:
        """Resolve a path relative to the base URL."""
        return self.base_url + path.lstrip("/")

    def _make_request(
        self,
        method: str,
        path: str,
        headers: dict[str, str] | None = None,
        content: bytes | str | None = None,
    ) -> Response:
        """Send one request and classify its status.

        Args:
            method: HTTP or WebDAV method
            path: Path relative to the base URL
            headers: Extra request headers
            content: Optional request body

        Returns:
            The 2xx response

        Raises:
            TransportError: If the request could not be built or no response
                was received
            ProtocolError: If the server answered with a non-2xx status
        """
        url = self.get_full_url(path)
        logger.debug(f"Making {method} request to {url}")

        # Header values must encode as ASCII; httpx raises UnicodeEncodeError
        # (a ValueError) while building the request otherwise.
        try:
            request = self._client.build_request(
                method, url, headers=headers, content=content
            )
        except (InvalidURL, ValueError, TypeError) as e:
            logger.warning(f"Could not build {method} request to {url}: {e}")
            raise TransportError(str(e)) from e

        try:
            response = self._client.send(request)
        except RequestError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise TransportError(str(e)) from e

        if not is_success(response.status_code):
            logger.debug(
                f"{method} {url} returned {response.status_code} {response.reason_phrase}"
            )
            raise ProtocolError(response.status_code, response.reason_phrase)

        return response

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Don't suppress exceptions
