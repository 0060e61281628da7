from .base import USER_AGENT, BaseWebDAVClient, DisableCookieTransport
from .webdav import WebDAVClient

__all__ = [
    "USER_AGENT",
    "BaseWebDAVClient",
    "DisableCookieTransport",
    "WebDAVClient",
]
