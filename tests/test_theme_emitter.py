"""
ThemeEmitter 單元測試
DesignTokens → Tailwind/NativeWind theme config（module.exports）。
"""
import json
import re

from figma_import.models import (
    ColorToken,
    DesignTokens,
    EffectToken,
    SpacingToken,
    TokenMetadata,
    TypographyToken,
)
from figma_import.theme_emitter import ThemeEmitter


def _tokens(colors=(), typography=(), spacing=(), effects=()):
    return DesignTokens(
        colors=list(colors),
        typography=list(typography),
        spacing=list(spacing),
        effects=list(effects),
        metadata=TokenMetadata(extracted_at="2024-01-01T00:00:00+00:00"),
    )


def _color(name, value):
    return ColorToken(name=name, value=value, rgb={"r": 0, "g": 0, "b": 0}, opacity=1)


def test_grouped_and_flat_colors():
    theme = ThemeEmitter().build(_tokens(colors=[
        _color("primary/500", "#4F46E5"),
        _color("primary/600", "#4338CA"),
        _color("color-card-FFFF", "#FFFFFF"),
    ]))
    assert theme["colors"] == {
        "primary": {"500": "#4F46E5", "600": "#4338CA"},
        "color-card-FFFF": {"DEFAULT": "#FFFFFF"},
    }


def test_font_size_entries():
    token = TypographyToken("text-base-regular", "Inter", 16, 400, 24.0)
    theme = ThemeEmitter().build(_tokens(typography=[token]))
    assert theme["fontSize"] == {"text-base-regular": ["16px", {"lineHeight": "24px"}]}


def test_spacing_in_rem_keyed_by_base_unit():
    theme = ThemeEmitter().build(_tokens(spacing=[SpacingToken("spacing-8", 8), SpacingToken("spacing-16", 16)]))
    assert theme["spacing"] == {"2": "0.5rem", "4": "1rem"}


def test_box_shadow_only_when_effects_present():
    assert "boxShadow" not in ThemeEmitter().build(_tokens())
    effect = EffectToken("shadow-card", x=0, y=2, blur=8, spread=0, color="#112233", opacity=0.1)
    theme = ThemeEmitter().build(_tokens(effects=[effect]))
    assert theme["boxShadow"] == {"shadow-card": "0px 2px 8px 0px rgba(17, 34, 51, 0.1)"}


def test_emit_is_module_exports():
    source = ThemeEmitter().emit(_tokens(spacing=[SpacingToken("spacing-16", 16)]))
    assert "module.exports = {" in source
    assert "  theme: {" in source
    assert source.endswith("  },\n};\n")
    # 每個區塊都是合法 JSON 物件
    match = re.search(r"spacing: (\{.*?\n    \}),", source, re.S)
    assert json.loads(match.group(1)) == {"4": "1rem"}


def test_emit_empty_tokens():
    source = ThemeEmitter().emit(_tokens())
    assert "colors: {}," in source
    assert "fontSize: {}," in source
    assert "spacing: {}," in source


def test_generate_returns_theme_file():
    generated = ThemeEmitter("tailwind.theme.js").generate(_tokens())
    assert generated.path == "tailwind.theme.js"
    assert generated.kind == "theme"
    assert generated.content == ThemeEmitter().emit(_tokens())
