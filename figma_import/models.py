"""
Data model — design tokens, converted components, generated files.

Token and component objects are built once per import run and never
mutated afterwards; `to_dict()` gives the camelCase JSON interchange shape.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


TOKEN_SET_VERSION = "1.0"


# ════════════════════════════════════════════════════════════
# Design Tokens
# ════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ColorToken:
    name: str
    value: str
    rgb: Dict[str, int]
    opacity: float
    usage: Optional[str] = None

    @property
    def dedup_key(self) -> str:
        return self.value

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "value": self.value,
            "rgb": dict(self.rgb),
            "opacity": self.opacity,
        }
        if self.usage:
            data["usage"] = self.usage
        return data


@dataclass(frozen=True)
class TypographyToken:
    name: str
    font_family: str
    font_size: float
    font_weight: float
    line_height: float
    letter_spacing: Optional[float] = None

    @property
    def dedup_key(self) -> tuple:
        return (self.font_family, self.font_size, self.font_weight)

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "fontFamily": self.font_family,
            "fontSize": self.font_size,
            "fontWeight": self.font_weight,
            "lineHeight": self.line_height,
        }
        if self.letter_spacing is not None:
            data["letterSpacing"] = self.letter_spacing
        return data


@dataclass(frozen=True)
class SpacingToken:
    name: str
    value: float

    @property
    def dedup_key(self) -> float:
        return self.value

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class EffectToken:
    name: str
    x: float = 0
    y: float = 0
    blur: float = 0
    spread: float = 0
    color: str = "#000000"
    opacity: float = 0.25
    type: str = "shadow"

    @property
    def dedup_key(self) -> tuple:
        return (self.blur, self.x, self.y)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type,
            "value": {
                "x": self.x,
                "y": self.y,
                "blur": self.blur,
                "spread": self.spread,
                "color": self.color,
                "opacity": self.opacity,
            },
        }


@dataclass(frozen=True)
class TokenMetadata:
    extracted_at: str
    file_key: str = ""
    source_pages: tuple = ()
    version: str = TOKEN_SET_VERSION

    def to_dict(self) -> dict:
        return {
            "extractedAt": self.extracted_at,
            "figmaFileKey": self.file_key,
            "sourcePages": list(self.source_pages),
            "version": self.version,
        }


@dataclass(frozen=True)
class DesignTokens:
    colors: List[ColorToken]
    typography: List[TypographyToken]
    spacing: List[SpacingToken]
    effects: List[EffectToken]
    metadata: TokenMetadata

    @property
    def count(self) -> int:
        return len(self.colors) + len(self.typography) + len(self.spacing) + len(self.effects)

    def to_dict(self) -> dict:
        return {
            "colors": [t.to_dict() for t in self.colors],
            "typography": [t.to_dict() for t in self.typography],
            "spacing": [t.to_dict() for t in self.spacing],
            "effects": [t.to_dict() for t in self.effects],
            "metadata": self.metadata.to_dict(),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict) -> "DesignTokens":
        """Rebuild a token set from its interchange JSON (e.g. a saved tokens.json)."""
        meta = data.get("metadata", {})
        return cls(
            colors=[
                ColorToken(
                    name=c["name"],
                    value=c["value"],
                    rgb=dict(c.get("rgb", {})),
                    opacity=c.get("opacity", 1),
                    usage=c.get("usage"),
                )
                for c in data.get("colors", [])
            ],
            typography=[
                TypographyToken(
                    name=t["name"],
                    font_family=t["fontFamily"],
                    font_size=t["fontSize"],
                    font_weight=t["fontWeight"],
                    line_height=t["lineHeight"],
                    letter_spacing=t.get("letterSpacing"),
                )
                for t in data.get("typography", [])
            ],
            spacing=[SpacingToken(name=s["name"], value=s["value"]) for s in data.get("spacing", [])],
            effects=[
                EffectToken(name=e["name"], type=e.get("type", "shadow"), **e.get("value", {}))
                for e in data.get("effects", [])
            ],
            metadata=TokenMetadata(
                extracted_at=meta.get("extractedAt", ""),
                file_key=meta.get("figmaFileKey", ""),
                source_pages=tuple(meta.get("sourcePages", [])),
                version=meta.get("version", TOKEN_SET_VERSION),
            ),
        )


# ════════════════════════════════════════════════════════════
# Converted Components
# ════════════════════════════════════════════════════════════

class ComponentType(str, Enum):
    FRAME = "Frame"
    TEXT = "Text"
    IMAGE = "Image"
    BUTTON = "Button"


_ATTRIBUTE_GROUPS = ("layout", "size", "background", "border", "spacing", "typography", "effects")


@dataclass
class ConvertedComponent:
    """One node of the framework-agnostic UI tree.

    Attribute groups are dicts keyed by the camelCase style names the
    emitters understand; a group is None when the source node had no data
    for it. `omitted` marks a placeholder left in place of a hidden node.
    """

    id: str
    name: str
    type: ComponentType = ComponentType.FRAME
    text: Optional[str] = None
    source: Optional[str] = None
    children: Optional[List["ConvertedComponent"]] = None
    layout: Optional[Dict[str, Any]] = None
    size: Optional[Dict[str, Any]] = None
    background: Optional[Dict[str, Any]] = None
    border: Optional[Dict[str, Any]] = None
    spacing: Optional[Dict[str, Any]] = None
    typography: Optional[Dict[str, Any]] = None
    effects: Optional[Dict[str, Any]] = None
    omitted: bool = False

    def walk(self) -> Iterator["ConvertedComponent"]:
        yield self
        for child in self.children or []:
            yield from child.walk()

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {"id": self.id, "name": self.name, "type": self.type.value}
        if self.text is not None:
            data["text"] = self.text
        if self.source is not None:
            data["source"] = self.source
        for group in _ATTRIBUTE_GROUPS:
            value = getattr(self, group)
            if value is not None:
                data[group] = value
        if self.omitted:
            data["omitted"] = True
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        return data


# ════════════════════════════════════════════════════════════
# Output artifacts
# ════════════════════════════════════════════════════════════

FILE_KINDS = ("theme", "component", "screen", "asset")


@dataclass(frozen=True)
class GeneratedFile:
    path: str
    content: str
    kind: str

    def __post_init__(self) -> None:
        if self.kind not in FILE_KINDS:
            raise ValueError(f"Unknown generated file kind: {self.kind!r}")

    def to_dict(self) -> dict:
        return {"path": self.path, "content": self.content, "type": self.kind}


@dataclass(frozen=True)
class FrameInfo:
    """Top-level frame summary used when choosing what to import."""

    id: str
    name: str
    width: float
    height: float
    page_id: str = ""
    is_mobile_size: bool = False
    aspect_ratio: float = 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "pageId": self.page_id,
            "isMobileSize": self.is_mobile_size,
            "aspectRatio": self.aspect_ratio,
        }


@dataclass
class ImportResult:
    tokens: DesignTokens
    components: List[ConvertedComponent]
    generated_files: List[GeneratedFile]
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "tokens": self.tokens.to_dict(),
            "components": [c.to_dict() for c in self.components],
            "generatedFiles": [f.to_dict() for f in self.generated_files],
            "warnings": list(self.warnings),
            "metadata": dict(self.metadata),
        }
