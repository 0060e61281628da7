from .webdav import WebDAVItem, WebDAVResponse

__all__ = ["WebDAVItem", "WebDAVResponse"]
