"""
Figma REST API 讀取

Fetches the document node forest and rendered node images. Only the
request/response boundary lives here; the import stages never touch I/O.
"""

import logging
import os
from typing import Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class FigmaAPIError(Exception):
    """Raised when a Figma API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FigmaAPIClient:
    """Figma REST API 唯讀封裝."""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(self, token: str, timeout: float = 30.0):
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "X-Figma-Token": token,
            "Content-Type": "application/json",
        })

    def _get(self, path: str, params: Optional[dict] = None) -> dict:
        url = f"{self.BASE_URL}{path}"
        try:
            resp = self.session.get(url, params=params or {}, timeout=self.timeout)
            resp.raise_for_status()
        except requests.HTTPError as e:
            status = getattr(e.response, "status_code", None)
            raise FigmaAPIError(f"GET {path} failed: {e}", status_code=status) from e
        except requests.RequestException as e:
            raise FigmaAPIError(f"GET {path} failed: {e}") from e
        return resp.json()

    def get_file(
        self,
        file_key: str,
        depth: Optional[int] = None,
        geometry: Optional[str] = None,
        version: Optional[str] = None,
    ) -> dict:
        params = {}
        if depth is not None:
            params["depth"] = depth
        if geometry:
            params["geometry"] = geometry
        if version:
            params["version"] = version
        return self._get(f"/files/{file_key}", params)

    def get_file_nodes(self, file_key: str, node_ids: List[str], depth: Optional[int] = None) -> dict:
        params = {"ids": ",".join(node_ids)}
        if depth is not None:
            params["depth"] = depth
        return self._get(f"/files/{file_key}/nodes", params)

    def fetch_document(
        self,
        file_key: str,
        node_ids: Optional[List[str]] = None,
        depth: Optional[int] = None,
        geometry: Optional[str] = None,
        version: Optional[str] = None,
    ) -> dict:
        """Return a file-shaped dict (`{"name", "document"}`) for the import stages.

        With `node_ids`, only those subtrees are fetched and placed on a
        synthetic page so the result has the same shape as a full file.
        """
        if not node_ids:
            return self.get_file(file_key, depth=depth, geometry=geometry, version=version)

        data = self.get_file_nodes(file_key, node_ids, depth=depth)
        documents = []
        for node_id in node_ids:
            entry = (data.get("nodes") or {}).get(node_id)
            if not entry or not entry.get("document"):
                logger.warning("Figma returned no document for node %s", node_id)
                continue
            documents.append(entry["document"])
        return {
            "name": data.get("name", ""),
            "document": {
                "id": "0:0",
                "name": data.get("name", ""),
                "type": "DOCUMENT",
                "children": [{"id": "0:1", "name": "Selection", "type": "CANVAS", "children": documents}],
            },
        }

    def get_images(self, file_key: str, node_ids: List[str], format: str = "png", scale: int = 2) -> Dict[str, Optional[str]]:
        data = self._get(f"/images/{file_key}", {"ids": ",".join(node_ids), "format": format, "scale": scale})
        if data.get("err"):
            raise FigmaAPIError(f"Image render failed: {data['err']}")
        return data.get("images") or {}

    def get_image_fills(self, file_key: str) -> Dict[str, str]:
        """imageRef → download URL for every image fill in the file."""
        data = self._get(f"/files/{file_key}/images")
        return (data.get("meta") or {}).get("images") or {}

    def download_assets(
        self,
        file_key: str,
        node_ids: List[str],
        output_dir: str,
        format: str = "png",
        scale: int = 2,
    ) -> Dict[str, str]:
        """Render and save node images. Returns {node_id: local path}.

        A failure on one node is logged and skipped; the rest continue.
        """
        if not node_ids:
            return {}
        urls = self.get_images(file_key, node_ids, format=format, scale=scale)
        os.makedirs(output_dir, exist_ok=True)
        saved = {}
        for node_id in node_ids:
            url = urls.get(node_id)
            if not url:
                logger.warning("No render URL for node %s, skipping", node_id)
                continue
            path = os.path.join(output_dir, f"{node_id.replace(':', '-')}@{scale}x.{format}")
            try:
                resp = requests.get(url, timeout=self.timeout)
                resp.raise_for_status()
                with open(path, "wb") as f:
                    f.write(resp.content)
            except (requests.RequestException, OSError) as e:
                logger.warning("Asset download failed for node %s: %s", node_id, e)
                continue
            saved[node_id] = path
        return saved
