"""
Figma URL Parser

Parse Figma design URLs into (file key, node id) and build them back.
Failures are reported in the result, never raised.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import parse_qs, quote, unquote, urlparse

FIGMA_HOST = "figma.com"
FIGMA_BASE_URL = "https://www.figma.com"

# /file/<key> or /design/<key>
_FILE_KEY_PATTERN = re.compile(r"/(?:file|design)/([a-zA-Z0-9]+)(?:/([^/?#]*))?")
_FILE_KEY_CHARS = re.compile(r"[a-zA-Z0-9]+")
_NODE_ID_PATTERN = re.compile(r"node-id=([0-9]+(?:-|:|%3A|%3a)[0-9]+)")


@dataclass
class ParsedFigmaUrl:
    valid: bool
    file_key: Optional[str] = None
    node_id: Optional[str] = None
    file_name: Optional[str] = None
    page_id: Optional[int] = None
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = {"valid": self.valid}
        for key, value in (
            ("fileKey", self.file_key),
            ("nodeId", self.node_id),
            ("fileName", self.file_name),
            ("pageId", self.page_id),
            ("error", self.error),
        ):
            if value is not None:
                data[key] = value
        if self.warnings:
            data["warnings"] = list(self.warnings)
        return data


def normalize_node_id(node_id: str) -> str:
    """Convert node-id format from "795-156" (URL form) to "795:156" (API form)."""
    return unquote(node_id).replace("-", ":")


def parse_figma_url(url) -> ParsedFigmaUrl:
    """
    Parse a Figma URL to extract file key, node id and page id.

    Args:
        url: Figma file or design URL

    Returns:
        ParsedFigmaUrl; `valid` is False and `error` set when parsing fails
    """
    if not url or not isinstance(url, str):
        return ParsedFigmaUrl(valid=False, error="URL is required")

    url = url.strip()
    if FIGMA_HOST not in url.lower():
        return ParsedFigmaUrl(valid=False, error="Not a Figma URL")

    parsed = urlparse(url)
    match = _FILE_KEY_PATTERN.search(parsed.path or url)
    if not match:
        return ParsedFigmaUrl(valid=False, error="Could not find a file key in the URL")

    result = ParsedFigmaUrl(valid=True, file_key=match.group(1))
    if match.group(2):
        result.file_name = unquote(match.group(2))

    query = parse_qs(parsed.query)
    if "node-id" in query:
        result.node_id = normalize_node_id(query["node-id"][0])
    elif parsed.fragment:
        fragment = parse_qs(parsed.fragment)
        if "node-id" in fragment:
            result.node_id = normalize_node_id(fragment["node-id"][0])

    if "page-id" in query:
        raw_page = query["page-id"][0]
        if raw_page.isdigit():
            result.page_id = int(raw_page)
        else:
            result.warnings.append(f"Ignoring non-numeric page-id '{raw_page}'")

    return result


def validate_figma_url(url) -> ParsedFigmaUrl:
    """Same as `parse_figma_url`, plus advisory warnings about completeness."""
    result = parse_figma_url(url)
    if result.valid and result.node_id is None:
        result.warnings.append("No frame selected - importing all frames")
    return result


def extract_all_node_ids(text: str) -> List[str]:
    """Return every node id referenced in `text` (canonical colon form, first-seen order)."""
    if not text or not isinstance(text, str):
        return []
    seen = {}
    for raw in _NODE_ID_PATTERN.findall(text):
        seen.setdefault(normalize_node_id(raw), None)
    return list(seen)


def build_figma_url(
    file_key: str,
    node_id: Optional[str] = None,
    file_name: Optional[str] = None,
    page_id: Optional[int] = None,
) -> str:
    """Build a canonical design URL; inverse of `parse_figma_url`."""
    if not file_key:
        raise ValueError("file_key is required")
    if not _FILE_KEY_CHARS.fullmatch(file_key):
        raise ValueError(f"Invalid file_key '{file_key}' (expected letters and digits only)")
    url = f"{FIGMA_BASE_URL}/design/{file_key}"
    if file_name:
        url += "/" + quote(file_name.replace(" ", "-"), safe="-_.")
    params = []
    if node_id:
        params.append("node-id=" + node_id.replace(":", "-"))
    if page_id is not None:
        params.append(f"page-id={int(page_id)}")
    if params:
        url += "?" + "&".join(params)
    return url
