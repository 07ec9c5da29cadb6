"""
Generator — Figma file → project directory.

Fetches the document, runs the import stages and writes every
GeneratedFile under the output directory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .component_converter import ConversionConfig
from .figma_client import FigmaAPIClient
from .models import ComponentType, GeneratedFile, ImportResult
from .pipeline import FigmaImporter
from .token_extractor import TokenExtractionConfig

logger = logging.getLogger(__name__)

TOKENS_FILE = "design-tokens.json"
ASSETS_DIR = "assets"


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def write_generated_files(files: Iterable[GeneratedFile], output_dir: str) -> List[Path]:
    base = Path(output_dir)
    written = []
    for generated in files:
        path = base / generated.path
        _write(path, generated.content)
        written.append(path)
    return written


def write_tokens_json(result: ImportResult, output_dir: str) -> Path:
    path = Path(output_dir) / TOKENS_FILE
    _write(path, result.tokens.to_json() + "\n")
    return path


def _image_node_ids(result: ImportResult) -> List[str]:
    ids = []
    for component in result.components:
        for node in component.walk():
            if node.type == ComponentType.IMAGE and node.id not in ids:
                ids.append(node.id)
    return ids


def import_document(
    figma_file: dict,
    output_dir: str,
    file_key: str = "",
    target: str = "react-native",
    node_ids: Optional[List[str]] = None,
    figma_url: str = "",
    token_config: Optional[TokenExtractionConfig] = None,
    conversion_config: Optional[ConversionConfig] = None,
    theme_path: str = "theme.config.js",
    components_dir: str = "components",
) -> ImportResult:
    """Run the import on an already-loaded document and write the result."""
    importer = FigmaImporter(
        token_config=token_config,
        conversion_config=conversion_config,
        target=target,
        theme_path=theme_path,
        components_dir=components_dir,
    )
    result = importer.run(figma_file, file_key=file_key, node_ids=node_ids, figma_url=figma_url)
    write_generated_files(result.generated_files, output_dir)
    write_tokens_json(result, output_dir)
    return result


def generate_project(
    figma_token: str,
    file_key: str,
    output_dir: str,
    target: str = "react-native",
    node_ids: Optional[List[str]] = None,
    figma_url: str = "",
    token_config: Optional[TokenExtractionConfig] = None,
    conversion_config: Optional[ConversionConfig] = None,
    theme_path: str = "theme.config.js",
    components_dir: str = "components",
    download_images: bool = False,
    client: Optional[FigmaAPIClient] = None,
) -> ImportResult:
    client = client or FigmaAPIClient(figma_token)
    # Full file: tokens come from every page, select_nodes narrows conversion.
    figma_file = client.fetch_document(file_key)
    result = import_document(
        figma_file,
        output_dir,
        file_key=file_key,
        target=target,
        node_ids=node_ids,
        figma_url=figma_url,
        token_config=token_config,
        conversion_config=conversion_config,
        theme_path=theme_path,
        components_dir=components_dir,
    )

    if download_images:
        image_ids = _image_node_ids(result)
        saved = client.download_assets(file_key, image_ids, str(Path(output_dir) / ASSETS_DIR))
        for path in saved.values():
            result.generated_files.append(GeneratedFile(
                path=str(Path(path).relative_to(output_dir)),
                content="",
                kind="asset",
            ))
        missing = len(image_ids) - len(saved)
        if missing:
            result.warnings.append(f"{missing} image asset(s) could not be downloaded")
        logger.info("downloaded %d of %d image assets", len(saved), len(image_ids))

    manifest = Path(output_dir) / "import-result.json"
    _write(manifest, json.dumps(result.to_dict(), indent=2, ensure_ascii=False) + "\n")
    return result
