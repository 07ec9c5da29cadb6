"""
figma-import — Figma 設計匯入管線（Python）

Figma 文件 → design tokens → 元件樹 → Tailwind/NativeWind theme 與 JSX 元件。
"""

__version__ = "0.1.0"

from .url_parser import (
    ParsedFigmaUrl,
    parse_figma_url,
    validate_figma_url,
    extract_all_node_ids,
    build_figma_url,
)
from .models import (
    ColorToken,
    TypographyToken,
    SpacingToken,
    EffectToken,
    TokenMetadata,
    DesignTokens,
    ComponentType,
    ConvertedComponent,
    GeneratedFile,
    FrameInfo,
    ImportResult,
)
from .token_extractor import TokenExtractionConfig, TokenExtractor
from .component_converter import ConversionConfig, ClassificationRule, ComponentConverter, DEFAULT_RULES
from .style_mapper import StyleMapper, StyleResult
from .theme_emitter import ThemeEmitter
from .component_emitter import ComponentEmitter, TARGETS
from .pipeline import FigmaImporter, list_frames, select_nodes
from .figma_client import FigmaAPIClient, FigmaAPIError
from .config import load_config, validate_config
from .generator import generate_project, import_document, write_generated_files

__all__ = [
    "__version__",
    "ParsedFigmaUrl",
    "parse_figma_url",
    "validate_figma_url",
    "extract_all_node_ids",
    "build_figma_url",
    "ColorToken",
    "TypographyToken",
    "SpacingToken",
    "EffectToken",
    "TokenMetadata",
    "DesignTokens",
    "ComponentType",
    "ConvertedComponent",
    "GeneratedFile",
    "FrameInfo",
    "ImportResult",
    "TokenExtractionConfig",
    "TokenExtractor",
    "ConversionConfig",
    "ClassificationRule",
    "ComponentConverter",
    "DEFAULT_RULES",
    "StyleMapper",
    "StyleResult",
    "ThemeEmitter",
    "ComponentEmitter",
    "TARGETS",
    "FigmaImporter",
    "list_frames",
    "select_nodes",
    "FigmaAPIClient",
    "FigmaAPIError",
    "load_config",
    "validate_config",
    "generate_project",
    "import_document",
    "write_generated_files",
]
