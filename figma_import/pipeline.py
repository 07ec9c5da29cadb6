"""
Import pipeline — Figma document → tokens + component tree + generated files.

Token extraction always scans every page; conversion runs only on the
selected frames (all top-level frames when nothing is selected).
"""

import logging
import time
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from .component_converter import ComponentConverter, ConversionConfig
from .component_emitter import ComponentEmitter
from .models import FrameInfo, GeneratedFile, ImportResult
from .node_utils import to_component_name, walk_nodes
from .theme_emitter import ThemeEmitter
from .token_extractor import TokenExtractionConfig, TokenExtractor

logger = logging.getLogger(__name__)

MOBILE_MAX_WIDTH = 500
_FRAME_TYPES = ("FRAME", "COMPONENT", "COMPONENT_SET", "INSTANCE")


def _document_root(figma_file: dict) -> dict:
    return figma_file.get("document", figma_file)


def _pages(figma_file: dict) -> List[dict]:
    root = _document_root(figma_file)
    if root.get("type") == "DOCUMENT":
        return root.get("children") or []
    # A bare node or a single page was supplied.
    return [root]


def list_frames(figma_file: dict) -> List[FrameInfo]:
    """Top-level frames of every page, for choosing what to import."""
    frames = []
    for page in _pages(figma_file):
        for node in page.get("children") or []:
            if node.get("type") not in _FRAME_TYPES:
                continue
            bbox = node.get("absoluteBoundingBox") or {}
            width = bbox.get("width") or 0
            height = bbox.get("height") or 0
            frames.append(FrameInfo(
                id=node.get("id", ""),
                name=node.get("name", ""),
                width=width,
                height=height,
                page_id=page.get("id", ""),
                is_mobile_size=0 < width <= MOBILE_MAX_WIDTH,
                aspect_ratio=round(width / height, 4) if height else 0.0,
            ))
    return frames


def select_nodes(figma_file: dict, node_ids: Optional[Iterable[str]] = None) -> Tuple[List[dict], List[str]]:
    """Return (nodes to convert, warnings). Unknown ids are reported, not fatal."""
    pages = _pages(figma_file)
    wanted = list(node_ids or [])
    if not wanted:
        nodes = [
            node
            for page in pages
            for node in page.get("children") or []
            if node.get("type") in _FRAME_TYPES
        ]
        if not nodes and _document_root(figma_file).get("type") != "DOCUMENT":
            nodes = [_document_root(figma_file)]
        return nodes, []

    index: Dict[str, dict] = {}
    walk_nodes(pages, lambda n: index.setdefault(n.get("id", ""), n))

    nodes, warnings = [], []
    for node_id in wanted:
        node = index.get(node_id)
        if node is None:
            warnings.append(f"Node '{node_id}' not found in document")
            logger.warning("node %s not found in document", node_id)
            continue
        nodes.append(node)
    return nodes, warnings


class FigmaImporter:
    """Runs the pure import stages for one document."""

    def __init__(
        self,
        token_config: Optional[TokenExtractionConfig] = None,
        conversion_config: Optional[ConversionConfig] = None,
        target: str = "react-native",
        theme_path: str = "theme.config.js",
        components_dir: str = "components",
    ):
        self.extractor = TokenExtractor(token_config)
        self.converter = ComponentConverter(conversion_config)
        self.theme_emitter = ThemeEmitter(theme_path)
        self.component_emitter = ComponentEmitter(target, components_dir=components_dir)

    def run(
        self,
        figma_file: dict,
        file_key: str = "",
        node_ids: Optional[Iterable[str]] = None,
        figma_url: str = "",
        screen_name: Optional[str] = None,
    ) -> ImportResult:
        started = time.monotonic()
        pages = _pages(figma_file)

        tokens = self.extractor.extract(
            pages,
            file_key=file_key,
            source_pages=[p.get("id", "") for p in pages if p.get("type") == "CANVAS"],
        )

        nodes, warnings = select_nodes(figma_file, node_ids)
        if not node_ids:
            warnings.append("No frame selected - importing all frames")
        components = self.converter.convert_all(nodes)

        files: List[GeneratedFile] = [self.theme_emitter.generate(tokens)]
        used_names: Dict[str, int] = {}
        component_names = []
        for component in components:
            if component.omitted:
                continue
            name = _unique_name(to_component_name(component.name), used_names)
            component_names.append(name)
            files.append(self.component_emitter.generate(component, name))

        if component_names:
            title = screen_name or figma_file.get("name") or "Main"
            files.append(self.component_emitter.generate_screen(title, component_names))

        metadata = {
            "figmaUrl": figma_url,
            "fileKey": file_key,
            "importedAt": datetime.now(timezone.utc).isoformat(),
            "frameCount": len(nodes),
            "tokenCount": tokens.count,
            "componentCount": sum(1 for c in components for _ in c.walk()),
            "assetCount": sum(1 for c in components for n in c.walk() if n.source),
            "duration": round(time.monotonic() - started, 4),
        }
        return ImportResult(
            tokens=tokens,
            components=components,
            generated_files=files,
            warnings=warnings,
            metadata=metadata,
        )


def _unique_name(name: str, used: Dict[str, int]) -> str:
    count = used.get(name, 0)
    used[name] = count + 1
    if count == 0:
        return name
    return f"{name}{count + 1}"
