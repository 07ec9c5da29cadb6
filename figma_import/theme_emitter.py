"""
Theme Emitter — DesignTokens → Tailwind / NativeWind theme config.
"""

import json
from typing import Dict, List

from .models import ColorToken, DesignTokens, EffectToken, GeneratedFile, SpacingToken, TypographyToken
from .node_utils import format_number

BASE_UNIT_PX = 4
REM_PX = 16

_HEADER = """/**
 * Tailwind/NativeWind Theme Configuration
 * Generated from Figma design tokens
 */
"""


class ThemeEmitter:

    def __init__(self, path: str = "theme.config.js"):
        self.path = path

    def build(self, tokens: DesignTokens) -> dict:
        theme = {
            "colors": self._colors(tokens.colors),
            "fontSize": self._font_sizes(tokens.typography),
            "spacing": self._spacing(tokens.spacing),
        }
        if tokens.effects:
            theme["boxShadow"] = self._box_shadows(tokens.effects)
        return theme

    def emit(self, tokens: DesignTokens) -> str:
        theme = self.build(tokens)
        sections = [f"    {key}: {_indent_json(value, 4)}," for key, value in theme.items()]
        return (
            _HEADER
            + "\nmodule.exports = {\n  theme: {\n"
            + "\n".join(sections)
            + "\n  },\n};\n"
        )

    def generate(self, tokens: DesignTokens) -> GeneratedFile:
        return GeneratedFile(path=self.path, content=self.emit(tokens), kind="theme")

    def _colors(self, tokens: List[ColorToken]) -> Dict[str, Dict[str, str]]:
        colors: Dict[str, Dict[str, str]] = {}
        for token in tokens:
            parts = token.name.split("/")
            if len(parts) == 2:
                colors.setdefault(parts[0], {})[parts[1]] = token.value
            else:
                colors[token.name] = {"DEFAULT": token.value}
        return colors

    def _font_sizes(self, tokens: List[TypographyToken]) -> Dict[str, list]:
        return {
            token.name: [
                f"{format_number(token.font_size)}px",
                {"lineHeight": f"{format_number(token.line_height)}px"},
            ]
            for token in tokens
        }

    def _spacing(self, tokens: List[SpacingToken]) -> Dict[str, str]:
        return {
            format_number(token.value / BASE_UNIT_PX): f"{format_number(token.value / REM_PX)}rem"
            for token in tokens
        }

    def _box_shadows(self, tokens: List[EffectToken]) -> Dict[str, str]:
        shadows = {}
        for token in tokens:
            hex_value = token.color.lstrip("#")
            r, g, b = (int(hex_value[i:i + 2], 16) for i in (0, 2, 4))
            shadows[token.name] = (
                f"{format_number(token.x)}px {format_number(token.y)}px "
                f"{format_number(token.blur)}px {format_number(token.spread)}px "
                f"rgba({r}, {g}, {b}, {format_number(token.opacity)})"
            )
        return shadows


def _indent_json(value, level: int) -> str:
    text = json.dumps(value, indent=2, ensure_ascii=False)
    pad = " " * level
    return text.replace("\n", "\n" + pad)
