"""Pydantic models for WebDAV listings and operation results."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]
MARKDOWN_SUFFIXES = (".md", ".markdown")
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class WebDAVItem(BaseModel):
    """A file or directory entry on a WebDAV server."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Final path segment of the resource")
    path: str = Field(
        description="Path relative to the listed collection, without leading or trailing slash"
    )
    is_directory: bool = Field(False, description="Whether the resource is a collection")
    size: int = Field(0, ge=0, description="Size in bytes (0 for directories)")
    last_modified: datetime | None = Field(
        None, description="Last modification time reported by the server"
    )
    content_type: str = Field("", description="MIME type reported by the server")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formatted_size(self) -> str:
        """Human readable size using 1024 based units, e.g. ``2 KB`` or ``1.5 MB``."""
        if self.size == 0:
            return "0 B"

        value = float(self.size)
        index = 0
        while value >= 1024 and index < len(SIZE_UNITS) - 1:
            value /= 1024
            index += 1

        number = f"{round(value, 2):.2f}".rstrip("0").rstrip(".")
        return f"{number} {SIZE_UNITS[index]}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_markdown_file(self) -> bool:
        """Check if the item is a markdown file."""
        if self.is_directory:
            return False
        return self.name.lower().endswith(MARKDOWN_SUFFIXES)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formatted_last_modified(self) -> str | None:
        if self.last_modified is None:
            return None
        return self.last_modified.strftime(TIMESTAMP_FORMAT)

    def to_dict(self) -> dict[str, Any]:
        """Plain dictionary view including the derived display fields."""
        return {
            "name": self.name,
            "path": self.path,
            "is_directory": self.is_directory,
            "size": self.size,
            "formatted_size": self.formatted_size,
            "last_modified": self.formatted_last_modified,
            "content_type": self.content_type,
            "is_markdown_file": self.is_markdown_file,
        }


class WebDAVResponse(BaseModel):
    """Result envelope returned by every ``WebDAVClient`` operation.

    Failed responses only ever carry a ``message``; items and downloaded
    content are reserved for successful operations.
    """

    model_config = ConfigDict(frozen=True)

    success: bool = Field(False, description="Whether the operation succeeded")
    message: str = Field("", description="Status or error text")
    items: tuple[WebDAVItem, ...] = Field(
        (), description="Entries returned by the operation"
    )
    content: bytes | None = Field(None, description="File content (download only)")
    content_type: str | None = Field(
        None, description="MIME type of the content (download only)"
    )

    @model_validator(mode="after")
    def _failure_carries_only_message(self) -> "WebDAVResponse":
        if not self.success and (
            self.items or self.content is not None or self.content_type is not None
        ):
            raise ValueError("A failed response may only carry a message")
        return self

    @classmethod
    def failure(cls, message: str) -> "WebDAVResponse":
        return cls(success=False, message=message)
