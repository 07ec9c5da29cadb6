"""
Design Token Extractor

Walks every page/frame of a Figma document and collects colors,
typography, spacing and effects into a deduplicated DesignTokens set.

  - one pre-order pass, tokens queued in encounter order
  - deduplication per kind, first occurrence wins
  - spacing sorted ascending by value
  - nodes missing a sub-field are skipped for that kind only
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from .models import (
    ColorToken,
    DesignTokens,
    EffectToken,
    SpacingToken,
    TokenMetadata,
    TypographyToken,
)
from .node_utils import color_to_hex, color_to_rgb, format_number, slugify, walk_nodes

T = TypeVar("T")

_SPACING_FIELDS = ("paddingTop", "paddingRight", "paddingBottom", "paddingLeft", "itemSpacing")
_SHADOW_TYPES = ("DROP_SHADOW", "INNER_SHADOW")

# (upper bound inclusive, bucket)
_SIZE_BUCKETS = ((12, "xs"), (14, "sm"), (16, "base"), (20, "lg"), (24, "xl"))


@dataclass
class TokenExtractionConfig:
    extract_colors: bool = True
    extract_typography: bool = True
    extract_spacing: bool = True
    extract_effects: bool = True


class TokenExtractor:

    def __init__(self, config: Optional[TokenExtractionConfig] = None):
        self.config = config or TokenExtractionConfig()

    def extract(
        self,
        root_nodes: Iterable[dict],
        file_key: str = "",
        source_pages: Optional[Iterable[str]] = None,
    ) -> DesignTokens:
        colors: List[ColorToken] = []
        typography: List[TypographyToken] = []
        spacing: List[SpacingToken] = []
        effects: List[EffectToken] = []

        def visit(node: dict) -> None:
            name = node.get("name") or ""

            if self.config.extract_colors:
                for fill in node.get("fills") or []:
                    if fill.get("type") == "SOLID" and fill.get("color"):
                        colors.append(self._extract_color(fill["color"], name))

            if self.config.extract_typography and node.get("type") == "TEXT":
                style = node.get("style")
                if style and style.get("fontSize") and style.get("fontFamily"):
                    typography.append(self._extract_typography(style))

            if self.config.extract_spacing:
                spacing.extend(self._extract_spacing(node))

            if self.config.extract_effects:
                for effect in node.get("effects") or []:
                    if effect.get("type") in _SHADOW_TYPES:
                        effects.append(self._extract_effect(effect, name))

        walk_nodes(list(root_nodes or []), visit)

        return DesignTokens(
            colors=_dedupe(colors, lambda t: t.dedup_key),
            typography=_dedupe(typography, lambda t: t.dedup_key),
            spacing=sorted(_dedupe(spacing, lambda t: t.dedup_key), key=lambda t: t.value),
            effects=_dedupe(effects, lambda t: t.dedup_key),
            metadata=TokenMetadata(
                extracted_at=datetime.now(timezone.utc).isoformat(),
                file_key=file_key,
                source_pages=tuple(source_pages or ()),
            ),
        )

    def extract_document(self, figma_file: dict, file_key: str = "") -> DesignTokens:
        """Extract from a `GET /v1/files/:key` response (or its `document` node)."""
        document = figma_file.get("document", figma_file)
        pages = document.get("children") or []
        return self.extract(
            pages,
            file_key=file_key,
            source_pages=[p.get("id", "") for p in pages if p.get("type") == "CANVAS"],
        )

    # ════════════════════════════════════════════════════════════
    # Per-kind extraction
    # ════════════════════════════════════════════════════════════

    def _extract_color(self, color: dict, node_name: str) -> ColorToken:
        hex_value = color_to_hex(color)
        return ColorToken(
            name=f"color-{slugify(node_name)}-{hex_value[1:5]}",
            value=hex_value,
            rgb=color_to_rgb(color),
            opacity=color.get("a", 1),
        )

    def _extract_typography(self, style: dict) -> TypographyToken:
        font_size = style["fontSize"]
        font_weight = style.get("fontWeight", 400)
        return TypographyToken(
            name=typography_name(font_size, font_weight),
            font_family=style["fontFamily"],
            font_size=font_size,
            font_weight=font_weight,
            line_height=style.get("lineHeightPx") or font_size * 1.5,
            letter_spacing=style.get("letterSpacing"),
        )

    def _extract_spacing(self, node: dict) -> List[SpacingToken]:
        values: Dict[float, None] = {}
        for key in _SPACING_FIELDS:
            value = node.get(key)
            if isinstance(value, (int, float)) and value > 0:
                values.setdefault(value, None)
        return [SpacingToken(name=f"spacing-{format_number(v)}", value=v) for v in values]

    def _extract_effect(self, effect: dict, node_name: str) -> EffectToken:
        offset = effect.get("offset") or {}
        color = effect.get("color")
        return EffectToken(
            name=_dash_whitespace(f"shadow-{node_name}".lower()),
            x=offset.get("x") or 0,
            y=offset.get("y") or 0,
            blur=effect.get("radius") or 0,
            spread=effect.get("spread") or 0,
            color=color_to_hex(color) if color else "#000000",
            opacity=(color or {}).get("a") or 0.25,
        )


def typography_name(font_size: float, font_weight: float) -> str:
    if font_weight >= 700:
        weight = "bold"
    elif font_weight >= 500:
        weight = "medium"
    else:
        weight = "regular"
    size = "2xl"
    for bound, bucket in _SIZE_BUCKETS:
        if font_size <= bound:
            size = bucket
            break
    return f"text-{size}-{weight}"


def _dash_whitespace(text: str) -> str:
    return "-".join(text.split())


def _dedupe(tokens: List[T], key: Callable[[T], object]) -> List[T]:
    seen: Dict[object, T] = {}
    for token in tokens:
        seen.setdefault(key(token), token)
    return list(seen.values())
