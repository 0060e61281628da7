"""
Observability module for the WebDAV client.

Usage:
    from nextcloud_webdav_client.observability import setup_logging

    setup_logging(log_format="json", log_level="DEBUG")
"""

from nextcloud_webdav_client.observability.logging_config import (
    CredentialsFilter,
    setup_logging,
)

__all__ = [
    "CredentialsFilter",
    "setup_logging",
]
