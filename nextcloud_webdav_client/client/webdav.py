"""WebDAV client for Nextcloud/ownCloud file operations."""

import fnmatch
import logging
import mimetypes
import os

from ..config import Settings, get_settings
from ..exceptions import LocalIOError, ParseError, ProtocolError, TransportError
from ..models.webdav import WebDAVResponse
from .base import BaseWebDAVClient
from .propfind import (
    build_propfind_body,
    parse_multistatus,
    parse_prop,
    parse_responses,
    select_prop,
)

logger = logging.getLogger(__name__)


class WebDAVClient(BaseWebDAVClient):
    """Client for WebDAV operations.

    Every operation sends exactly one request (``search_files`` reuses
    ``list``) and returns a ``WebDAVResponse``; errors are reported through
    ``success``/``message`` rather than raised.
    """

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "WebDAVClient":
        settings.validate()
        return cls(
            settings.webdav_url,
            settings.webdav_username,
            settings.webdav_password,
            timeout=settings.timeout,
            connect_timeout=settings.connect_timeout,
            **kwargs,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "WebDAVClient":
        logger.info("Creating WebDAV client using env vars")
        return cls.from_settings(get_settings(), **kwargs)

    def list(self, path: str = "", depth: int | str = 1) -> WebDAVResponse:
        """List the contents of a collection via PROPFIND.

        Args:
            path: Collection path relative to the base URL
            depth: PROPFIND Depth header

        Returns:
            WebDAVResponse with one item per child resource. An empty
            collection is still a success.
        """
        logger.debug(f"Listing directory: {path}")

        headers = {"Depth": str(depth), "Content-Type": "text/xml"}
        try:
            response = self._make_request(
                "PROPFIND", path, headers=headers, content=build_propfind_body()
            )
            items = parse_multistatus(response.content)
        except TransportError as e:
            logger.error(f"Error listing directory '{path}': {e}")
            return WebDAVResponse.failure(f"Failed to list directory: {e}")
        except (ProtocolError, ParseError) as e:
            logger.warning(f"Listing directory '{path}' failed: {e}")
            return WebDAVResponse.failure(str(e))

        logger.debug(f"Found {len(items)} items in directory: {path}")
        return WebDAVResponse(success=True, items=items)

    def get_file_info(self, path: str) -> WebDAVResponse:
        """Get metadata for a single resource via PROPFIND with Depth 0.

        The returned item's ``name`` is the last segment of ``path``, while
        its ``path`` keeps the whole caller-supplied path (slashes trimmed)
        rather than only that last segment. The href the server reports is
        not used.
        """
        headers = {"Depth": "0", "Content-Type": "text/xml"}
        try:
            response = self._make_request(
                "PROPFIND", path, headers=headers, content=build_propfind_body()
            )
            responses = parse_responses(response.content)
        except TransportError as e:
            logger.error(f"Error getting file info for '{path}': {e}")
            return WebDAVResponse.failure(f"Failed to get file info: {e}")
        except (ProtocolError, ParseError) as e:
            logger.warning(f"Getting file info for '{path}' failed: {e}")
            return WebDAVResponse.failure(str(e))

        if not responses:
            logger.debug(f"File not found: {path}")
            return WebDAVResponse.failure("File not found")

        item = parse_prop(select_prop(responses[0]), path)
        return WebDAVResponse(success=True, items=[item])

    def download(self, path: str) -> WebDAVResponse:
        """Read a file's content via GET."""
        logger.debug(f"Reading file: {path}")

        try:
            response = self._make_request("GET", path)
        except TransportError as e:
            logger.error(f"Error downloading file '{path}': {e}")
            return WebDAVResponse.failure(f"Failed to download file: {e}")
        except ProtocolError as e:
            logger.warning(f"Downloading file '{path}' failed: {e}")
            return WebDAVResponse.failure(str(e))

        content = response.content
        logger.debug(f"Successfully read file '{path}' ({len(content)} bytes)")
        return WebDAVResponse(
            success=True,
            content=content,
            content_type=response.headers.get("content-type", ""),
        )

    def upload(self, remote_path: str, local_path: str) -> WebDAVResponse:
        """Upload a local file, guessing its MIME type from the file name."""
        try:
            content = self._read_local_file(local_path)
        except LocalIOError as e:
            logger.error(str(e))
            return WebDAVResponse.failure(str(e))

        mime_type, _ = mimetypes.guess_type(local_path)
        return self.upload_content(
            remote_path, content, mime_type or "application/octet-stream"
        )

    @staticmethod
    def _read_local_file(local_path: str) -> bytes:
        if not os.path.isfile(local_path):
            raise LocalIOError(f"Local file does not exist: {local_path}")
        try:
            with open(local_path, "rb") as fh:
                return fh.read()
        except OSError as e:
            raise LocalIOError(f"Failed to read local file: {local_path}") from e

    def upload_content(
        self, path: str, content: bytes | str, mime_type: str = "text/plain"
    ) -> WebDAVResponse:
        """Write content to a file via PUT."""
        logger.debug(f"Writing file: {path}")

        headers = {"Content-Type": mime_type}
        try:
            self._make_request("PUT", path, headers=headers, content=content)
        except TransportError as e:
            logger.error(f"Error uploading file '{path}': {e}")
            return WebDAVResponse.failure(f"Failed to upload file: {e}")
        except ProtocolError as e:
            logger.warning(f"Uploading file '{path}' failed: {e}")
            return WebDAVResponse.failure(str(e))

        logger.debug(f"Successfully wrote file '{path}'")
        return WebDAVResponse(success=True, message="File uploaded successfully")

    def delete(self, path: str) -> WebDAVResponse:
        """Delete a file or directory via DELETE."""
        logger.debug(f"Deleting WebDAV resource: {path}")

        try:
            self._make_request("DELETE", path)
        except TransportError as e:
            logger.error(f"Error deleting '{path}': {e}")
            return WebDAVResponse.failure(f"Failed to delete file: {e}")
        except ProtocolError as e:
            logger.warning(f"Deleting '{path}' failed: {e}")
            return WebDAVResponse.failure(str(e))

        logger.debug(f"Successfully deleted WebDAV resource '{path}'")
        return WebDAVResponse(success=True, message="File deleted successfully")

    def create_directory(self, path: str) -> WebDAVResponse:
        """Create a directory via MKCOL."""
        logger.debug(f"Creating directory: {path}")

        try:
            self._make_request("MKCOL", path)
        except TransportError as e:
            logger.error(f"Error creating directory '{path}': {e}")
            return WebDAVResponse.failure(f"Failed to create directory: {e}")
        except ProtocolError as e:
            # 405 Method Not Allowed means the directory already exists
            logger.warning(f"Creating directory '{path}' failed: {e}")
            return WebDAVResponse.failure(str(e))

        logger.debug(f"Successfully created directory '{path}'")
        return WebDAVResponse(success=True, message="Directory created successfully")

    def exists(self, path: str) -> bool:
        """Check whether a resource exists via HEAD. Never raises."""
        try:
            self._make_request("HEAD", path)
        except (TransportError, ProtocolError) as e:
            logger.debug(f"Resource '{path}' not available: {e}")
            return False
        return True

    def search_files(self, directory: str, pattern: str) -> WebDAVResponse:
        """Find files in ``directory`` whose name matches a shell glob.

        Directories are never matched. If listing fails, the listing's
        failure response is returned as is.
        """
        listing = self.list(directory)
        if not listing.success:
            return listing

        matches = [
            item
            for item in listing.items
            if not item.is_directory and fnmatch.fnmatchcase(item.name, pattern)
        ]
        logger.debug(
            f"{len(matches)} of {len(listing.items)} items in '{directory}' match '{pattern}'"
        )
        return WebDAVResponse(success=True, items=matches)
