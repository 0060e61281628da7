import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Client settings from environment variables."""

    # WebDAV connection settings
    webdav_url: Optional[str] = None  # e.g. https://cloud.example.com/remote.php/dav/files/alice/
    webdav_username: Optional[str] = None
    webdav_password: Optional[str] = None

    # Transport timeouts (seconds)
    timeout: float = 30
    connect_timeout: float = 5

    # Logging settings
    log_format: str = "text"  # "json" or "text"
    log_level: str = "INFO"

    def __post_init__(self):
        if self.log_format.lower() not in ("json", "text"):
            raise ValueError(
                f"Invalid log format '{self.log_format}', expected 'json' or 'text'"
            )
        if self.timeout <= 0 or self.connect_timeout <= 0:
            raise ValueError("Timeouts must be positive")

    def validate(self) -> None:
        """Check that everything needed to build a client is present.

        Raises:
            ValueError: Naming the missing environment variables
        """
        missing = [
            env_var
            for env_var, value in (
                ("WEBDAV_URL", self.webdav_url),
                ("WEBDAV_USERNAME", self.webdav_username),
                ("WEBDAV_PASSWORD", self.webdav_password),
            )
            if not value
        ]
        if missing:
            raise ValueError(f"WebDAV settings missing: {', '.join(missing)}")


def get_settings() -> Settings:
    """Get client settings from environment variables.

    Returns:
        Settings object with configuration values
    """
    return Settings(
        webdav_url=os.getenv("WEBDAV_URL"),
        webdav_username=os.getenv("WEBDAV_USERNAME"),
        webdav_password=os.getenv("WEBDAV_PASSWORD"),
        timeout=float(os.getenv("WEBDAV_TIMEOUT", "30")),
        connect_timeout=float(os.getenv("WEBDAV_CONNECT_TIMEOUT", "5")),
        log_format=os.getenv("LOG_FORMAT", "text"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
