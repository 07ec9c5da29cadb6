"""
TokenExtractor 單元測試
不需要 Figma Token，全部用假文件節點。
"""
import pytest

from figma_import.models import DesignTokens
from figma_import.token_extractor import TokenExtractionConfig, TokenExtractor, typography_name


def _make_node(**kwargs):
    base = {"id": "1:1", "type": "FRAME", "name": "Frame", "children": []}
    base.update(kwargs)
    return base


def _solid(r, g, b, a=1.0):
    return {"type": "SOLID", "color": {"r": r, "g": g, "b": b, "a": a}}


def _text(name="Label", size=16, weight=400, family="Inter", **style):
    return _make_node(
        type="TEXT",
        name=name,
        characters=name,
        style={"fontSize": size, "fontWeight": weight, "fontFamily": family, **style},
    )


# ─── Colors ─────────────────────────────────────────────────────────────────

class TestColors:
    def test_solid_fill_becomes_color_token(self):
        node = _make_node(name="Primary Button", fills=[_solid(1.0, 0.0, 0.0, 0.5)])
        tokens = TokenExtractor().extract([node])
        assert len(tokens.colors) == 1
        color = tokens.colors[0]
        assert color.value == "#FF0000"
        assert color.rgb == {"r": 255, "g": 0, "b": 0}
        assert color.opacity == 0.5
        assert color.name == "color-primary-button-FF00"

    def test_half_channels_round_up(self):
        node = _make_node(name="Rust", fills=[_solid(0.7, 0.3, 0.1)])
        color = TokenExtractor().extract([node]).colors[0]
        assert color.value == "#B34D1A"
        assert color.rgb == {"r": 179, "g": 77, "b": 26}
        assert color.name == "color-rust-B34D"

    def test_alpha_defaults_to_one(self):
        node = _make_node(fills=[{"type": "SOLID", "color": {"r": 0, "g": 0, "b": 0}}])
        assert TokenExtractor().extract([node]).colors[0].opacity == 1

    def test_non_solid_fills_ignored(self):
        node = _make_node(fills=[
            {"type": "GRADIENT_LINEAR", "gradientStops": []},
            {"type": "IMAGE", "imageRef": "abc"},
        ])
        assert TokenExtractor().extract([node]).colors == []

    def test_dedup_first_occurrence_wins(self):
        a = _make_node(id="1:1", name="First", fills=[_solid(1, 1, 1)])
        b = _make_node(id="1:2", name="Second", fills=[_solid(1, 1, 1, 0.3)])
        tokens = TokenExtractor().extract([a, b])
        assert len(tokens.colors) == 1
        assert tokens.colors[0].name.startswith("color-first-")
        assert tokens.colors[0].opacity == 1.0

    def test_nested_children_are_scanned(self):
        child = _make_node(id="2:1", name="Inner", fills=[_solid(0, 0, 1)])
        root = _make_node(children=[child])
        assert [c.value for c in TokenExtractor().extract([root]).colors] == ["#0000FF"]


# ─── Typography ─────────────────────────────────────────────────────────────

class TestTypography:
    def test_text_style_becomes_token(self):
        tokens = TokenExtractor().extract([_text(size=16, weight=400)])
        assert len(tokens.typography) == 1
        t = tokens.typography[0]
        assert t.name == "text-base-regular"
        assert t.font_family == "Inter"
        assert t.line_height == 24

    def test_line_height_px_used_when_present(self):
        tokens = TokenExtractor().extract([_text(lineHeightPx=20)])
        assert tokens.typography[0].line_height == 20

    def test_missing_font_family_skipped(self):
        node = _make_node(type="TEXT", style={"fontSize": 16})
        assert TokenExtractor().extract([node]).typography == []

    def test_non_text_style_ignored(self):
        node = _make_node(style={"fontSize": 16, "fontFamily": "Inter"})
        assert TokenExtractor().extract([node]).typography == []

    def test_dedup_by_family_size_weight(self):
        tokens = TokenExtractor().extract([
            _text("A", 16, 400),
            _text("B", 16, 400, lineHeightPx=30),
            _text("C", 16, 700),
        ])
        assert [t.name for t in tokens.typography] == ["text-base-regular", "text-base-bold"]
        assert tokens.typography[0].line_height == 24


@pytest.mark.parametrize("size,weight,expected", [
    (12, 400, "text-xs-regular"),
    (14, 500, "text-sm-medium"),
    (16, 700, "text-base-bold"),
    (18, 400, "text-lg-regular"),
    (24, 600, "text-xl-medium"),
    (32, 900, "text-2xl-bold"),
])
def test_typography_name_buckets(size, weight, expected):
    assert typography_name(size, weight) == expected


# ─── Spacing ────────────────────────────────────────────────────────────────

class TestSpacing:
    def test_padding_and_item_spacing_collected_sorted(self):
        node = _make_node(paddingTop=24, paddingBottom=8, paddingLeft=16, paddingRight=16, itemSpacing=4)
        tokens = TokenExtractor().extract([node])
        assert [s.value for s in tokens.spacing] == [4, 8, 16, 24]
        assert tokens.spacing[0].name == "spacing-4"

    def test_zero_values_ignored(self):
        node = _make_node(paddingTop=0, itemSpacing=0)
        assert TokenExtractor().extract([node]).spacing == []

    def test_dedup_across_nodes(self):
        a = _make_node(id="1:1", itemSpacing=16)
        b = _make_node(id="1:2", paddingTop=16)
        assert len(TokenExtractor().extract([a, b]).spacing) == 1


# ─── Effects ────────────────────────────────────────────────────────────────

class TestEffects:
    def test_drop_shadow(self):
        node = _make_node(name="Card Shadow", effects=[{
            "type": "DROP_SHADOW",
            "offset": {"x": 0, "y": 2},
            "radius": 8,
            "spread": 1,
            "color": {"r": 0, "g": 0, "b": 0, "a": 0.1},
        }])
        effect = TokenExtractor().extract([node]).effects[0]
        assert effect.name == "shadow-card-shadow"
        assert (effect.x, effect.y, effect.blur, effect.spread) == (0, 2, 8, 1)
        assert effect.color == "#000000"
        assert effect.opacity == 0.1

    def test_defaults_when_fields_missing(self):
        node = _make_node(name="Bare", effects=[{"type": "INNER_SHADOW"}])
        effect = TokenExtractor().extract([node]).effects[0]
        assert effect.opacity == 0.25
        assert effect.color == "#000000"
        assert effect.blur == 0

    def test_blur_effects_ignored(self):
        node = _make_node(effects=[{"type": "LAYER_BLUR", "radius": 4}])
        assert TokenExtractor().extract([node]).effects == []


# ─── Config / document ──────────────────────────────────────────────────────

def test_disabled_kinds_are_skipped():
    node = _make_node(fills=[_solid(1, 0, 0)], itemSpacing=8, children=[_text()])
    config = TokenExtractionConfig(extract_colors=False, extract_spacing=False)
    tokens = TokenExtractor(config).extract([node])
    assert tokens.colors == []
    assert tokens.spacing == []
    assert len(tokens.typography) == 1


def test_empty_input_yields_empty_token_set():
    tokens = TokenExtractor().extract([])
    assert tokens.count == 0
    assert tokens.to_dict()["metadata"]["version"] == "1.0"


def test_repeated_extraction_yields_same_tokens():
    forest = [
        _make_node(id="1:1", name="Card", fills=[_solid(1, 1, 1), _solid(0.7, 0.3, 0.1)], paddingTop=16,
                   effects=[{"type": "DROP_SHADOW", "radius": 4}],
                   children=[_text("Title", size=24, weight=700), _text("Body"), _text("Body copy")]),
        _make_node(id="1:2", name="Other", fills=[_solid(1, 1, 1, 0.4)], itemSpacing=8),
    ]

    def by_key(tokens):
        return {
            kind: {t.dedup_key: t.to_dict() for t in getattr(tokens, kind)}
            for kind in ("colors", "typography", "spacing", "effects")
        }

    first = TokenExtractor().extract(forest)
    second = TokenExtractor().extract(forest)
    assert first.count == second.count
    assert by_key(first) == by_key(second)


def test_extract_document_records_pages():
    figma_file = {
        "name": "App",
        "document": {
            "id": "0:0",
            "type": "DOCUMENT",
            "children": [
                {"id": "0:1", "type": "CANVAS", "name": "Page 1", "children": [_make_node(itemSpacing=8)]},
                {"id": "0:2", "type": "CANVAS", "name": "Page 2", "children": [_make_node(itemSpacing=12)]},
            ],
        },
    }
    tokens = TokenExtractor().extract_document(figma_file, file_key="KEY42")
    assert [s.value for s in tokens.spacing] == [8, 12]
    meta = tokens.metadata.to_dict()
    assert meta["figmaFileKey"] == "KEY42"
    assert meta["sourcePages"] == ["0:1", "0:2"]


def test_token_json_restores():
    node = _make_node(
        fills=[_solid(0.2, 0.4, 0.6)],
        itemSpacing=8,
        effects=[{"type": "DROP_SHADOW", "radius": 4}],
        children=[_text()],
    )
    tokens = TokenExtractor().extract([node], file_key="K")
    restored = DesignTokens.from_dict(tokens.to_dict())
    assert restored == tokens
