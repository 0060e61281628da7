"""Parsing of WebDAV PROPFIND multi-status responses."""

import logging
import xml.etree.ElementTree as ET
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import unquote

from ..exceptions import ParseError
from ..models.webdav import WebDAVItem

logger = logging.getLogger(__name__)

DAV_NS = "DAV:"


def _dav(tag: str) -> str:
    return f"{{{DAV_NS}}}{tag}"


def parse_http_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 1123 HTTP-date, returning None if it cannot be parsed."""
    if not value or not value.strip():
        return None
    try:
        return parsedate_to_datetime(value.strip())
    except (TypeError, ValueError) as e:
        logger.debug(f"Ignoring unparsable date '{value}': {e}")
        return None


def _parse_resourcetype(elem: ET.Element) -> Dict[str, Any]:
    return {"is_directory": elem.find(_dav("collection")) is not None}


def _parse_getlastmodified(elem: ET.Element) -> Dict[str, Any]:
    return {"last_modified": parse_http_date(elem.text)}


def _parse_getcontentlength(elem: ET.Element) -> Dict[str, Any]:
    try:
        size = int((elem.text or "").strip())
    except ValueError:
        logger.debug(f"Ignoring invalid content length '{elem.text}'")
        return {}
    return {"size": max(size, 0)}


def _parse_getcontenttype(elem: ET.Element) -> Dict[str, Any]:
    return {"content_type": (elem.text or "").strip()}


# DAV: property local-name -> extractor returning WebDAVItem field values
PROPERTY_PARSERS: Dict[str, Callable[[ET.Element], Dict[str, Any]]] = {
    "resourcetype": _parse_resourcetype,
    "getlastmodified": _parse_getlastmodified,
    "getcontentlength": _parse_getcontentlength,
    "getcontenttype": _parse_getcontenttype,
}


def build_propfind_body() -> str:
    """Build a PROPFIND request body asking for every property we parse."""
    props = "\n".join(f"        <d:{name}/>" for name in PROPERTY_PARSERS)
    return (
        '<?xml version="1.0"?>\n'
        '<d:propfind xmlns:d="DAV:">\n'
        "    <d:prop>\n"
        f"{props}\n"
        "    </d:prop>\n"
        "</d:propfind>"
    )


def parse_prop(prop: Optional[ET.Element], path: str) -> WebDAVItem:
    """Convert a ``<d:prop>`` element into a WebDAVItem.

    Args:
        prop: The property bag of one multi-status response, or None if the
            response had no usable propstat
        path: Path of the resource relative to the listed collection

    Returns:
        WebDAVItem whose name is the final segment of ``path``. Properties
        that are missing or malformed fall back to their defaults.
    """
    fields: Dict[str, Any] = {}
    if prop is not None:
        for name, extract in PROPERTY_PARSERS.items():
            elem = prop.find(_dav(name))
            if elem is not None:
                fields.update(extract(elem))

    if fields.get("is_directory"):
        fields["size"] = 0

    path = path.strip("/")
    return WebDAVItem(name=path.rsplit("/", 1)[-1], path=path, **fields)


def _is_success_status(status_line: str) -> bool:
    # e.g. "HTTP/1.1 200 OK"
    parts = status_line.split()
    return len(parts) >= 2 and parts[1].startswith("2")


def select_prop(response_elem: ET.Element) -> Optional[ET.Element]:
    """Return the ``prop`` element of the first successful propstat."""
    for propstat in response_elem.findall(_dav("propstat")):
        status = propstat.findtext(_dav("status"))
        if status is None or _is_success_status(status):
            return propstat.find(_dav("prop"))
    return None


def parse_responses(body: bytes | str) -> List[ET.Element]:
    """Parse a multi-status document and return its ``response`` elements.

    Raises:
        ParseError: If the body is not well-formed XML
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        logger.warning(f"Failed to parse multi-status response: {e}")
        raise ParseError() from e

    return root.findall(_dav("response"))


def parse_multistatus(body: bytes | str) -> List[WebDAVItem]:
    """Parse a PROPFIND multi-status body into a listing.

    The first response describes the listed collection itself and is used as
    the base path; every later response becomes one item with a path relative
    to that collection. Entries that resolve back to the collection are
    skipped. Server order is preserved.

    Hrefs are percent-decoded as URL paths with ``unquote``, not as form
    data, so a literal ``+`` in a file name stays ``+`` instead of becoming
    a space.

    Raises:
        ParseError: If the body is not well-formed XML
    """
    responses = parse_responses(body)
    if not responses:
        return []

    base_path = unquote(responses[0].findtext(_dav("href")) or "").rstrip("/")
    items = []

    for response_elem in responses[1:]:
        href = unquote(response_elem.findtext(_dav("href")) or "").rstrip("/")

        if base_path and href.startswith(f"{base_path}/"):
            relative_path = href[len(base_path) :]
        elif href == base_path:
            relative_path = ""
        else:
            relative_path = href
        relative_path = relative_path.strip("/")

        if not relative_path:
            continue

        items.append(parse_prop(select_prop(response_elem), relative_path))

    logger.debug(f"Parsed {len(items)} items below '{base_path}'")
    return items
