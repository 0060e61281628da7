"""Unit tests for logging configuration."""

import base64
import json
import logging

import pytest

from nextcloud_webdav_client.observability.logging_config import (
    CredentialsFilter,
    setup_logging,
)


def _record(msg, *args) -> logging.LogRecord:
    return logging.LogRecord(
        name="httpx",
        level=logging.DEBUG,
        pathname="",
        lineno=0,
        msg=msg,
        args=args,
        exc_info=None,
    )


@pytest.mark.unit
class TestCredentialsFilter:
    """Tests for the CredentialsFilter."""

    def test_masks_basic_auth_header(self):
        token = base64.b64encode(b"alice:secret").decode()
        record = _record("Headers: {'authorization': 'Basic %s'}", token)

        assert CredentialsFilter().filter(record) is True
        assert token not in record.getMessage()
        assert "Basic ***" in record.getMessage()

    def test_leaves_other_messages_untouched(self):
        record = _record("PROPFIND %s returned %s", "/docs/", 207)

        assert CredentialsFilter().filter(record) is True
        assert record.getMessage() == "PROPFIND /docs/ returned 207"
        assert record.args == ("/docs/", 207)


@pytest.mark.unit
def test_setup_logging_json(capsys, restore_root_logger):
    setup_logging(log_format="json", log_level="INFO")

    logging.getLogger("nextcloud_webdav_client.client").info("listing %s", "docs")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["message"] == "listing docs"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "nextcloud_webdav_client.client"


@pytest.mark.unit
def test_setup_logging_text(capsys, restore_root_logger):
    setup_logging(log_format="text", log_level="WARNING")

    logger = logging.getLogger("nextcloud_webdav_client.client")
    logger.info("hidden")
    logger.warning("visible")

    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "WARNING" in err
    assert "nextcloud_webdav_client.client - visible" in err


@pytest.mark.unit
def test_setup_logging_quiets_httpx(restore_root_logger):
    setup_logging(log_format="text", log_level="DEBUG")

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("nextcloud_webdav_client").level == logging.DEBUG
