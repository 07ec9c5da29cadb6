"""
Component Converter — Figma node tree → ConvertedComponent tree

Classifies each node (Text / Button / Image / Frame) with an ordered rule
list and normalizes its layout, size, background, border, padding,
typography and shadow into framework-agnostic attribute groups.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .models import ComponentType, ConvertedComponent
from .node_utils import color_to_hex, format_number

_PRIMARY_ALIGN = {
    "MIN": "flex-start",
    "CENTER": "center",
    "MAX": "flex-end",
    "SPACE_BETWEEN": "space-between",
}
_COUNTER_ALIGN = {
    "MIN": "flex-start",
    "CENTER": "center",
    "MAX": "flex-end",
    "BASELINE": "baseline",
}
_TEXT_ALIGN = {
    "LEFT": "left",
    "CENTER": "center",
    "RIGHT": "right",
    "JUSTIFIED": "justify",
}
_DIRECTIONS = {"HORIZONTAL": "row", "VERTICAL": "column"}
_PADDING_FIELDS = ("paddingTop", "paddingRight", "paddingBottom", "paddingLeft")
_BUTTON_MARKERS = ("button", "btn", "cta")

DEFAULT_SHADOW_OPACITY = 0.25
DEFAULT_SHADOW_RADIUS = 4


@dataclass
class ConversionConfig:
    include_hidden: bool = False
    # TODO: flatten_groups and detect_lists are read but do not change the
    # tree yet; wire them up once group-collapsing and list detection rules exist.
    flatten_groups: bool = True
    detect_buttons: bool = True
    detect_lists: bool = True


# ════════════════════════════════════════════════════════════
# Classification rules
# ════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ClassificationRule:
    """One entry of the type classifier: first rule whose `matches` is true wins."""

    name: str
    component_type: ComponentType
    matches: Callable[[dict, ConversionConfig], bool]


def _is_text(node: dict, config: ConversionConfig) -> bool:
    return node.get("type") == "TEXT"


def _has_button_name(node: dict, config: ConversionConfig) -> bool:
    if not config.detect_buttons:
        return False
    name = (node.get("name") or "").lower()
    return any(marker in name for marker in _BUTTON_MARKERS)


def _has_image_fill(node: dict, config: ConversionConfig) -> bool:
    return any(fill.get("type") == "IMAGE" for fill in node.get("fills") or [])


text_rule = ClassificationRule("text", ComponentType.TEXT, _is_text)
button_name_rule = ClassificationRule("button-name", ComponentType.BUTTON, _has_button_name)
image_fill_rule = ClassificationRule("image-fill", ComponentType.IMAGE, _has_image_fill)

DEFAULT_RULES = (text_rule, button_name_rule, image_fill_rule)


def classify(
    node: dict,
    config: ConversionConfig,
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
) -> ComponentType:
    for rule in rules:
        if rule.matches(node, config):
            return rule.component_type
    return ComponentType.FRAME


# ════════════════════════════════════════════════════════════
# Converter
# ════════════════════════════════════════════════════════════

class ComponentConverter:

    def __init__(
        self,
        config: Optional[ConversionConfig] = None,
        rules: Sequence[ClassificationRule] = DEFAULT_RULES,
    ):
        self.config = config or ConversionConfig()
        self.rules = tuple(rules)

    def convert(self, node: dict) -> ConvertedComponent:
        """Convert one root node (frame, component, ...) and its subtree."""
        return self._convert_node(node)

    def convert_all(self, nodes: Sequence[dict]) -> List[ConvertedComponent]:
        return [self._convert_node(node) for node in nodes]

    def _convert_node(self, node: dict) -> ConvertedComponent:
        node_id = node.get("id", "")
        name = node.get("name", "")

        if not self.config.include_hidden and node.get("visible") is False:
            return ConvertedComponent(id=node_id, name=name, type=ComponentType.FRAME, omitted=True)

        component = ConvertedComponent(
            id=node_id,
            name=name,
            type=classify(node, self.config, self.rules),
        )

        if "layoutMode" in node:
            component.layout = self._extract_layout(node)

        bbox = node.get("absoluteBoundingBox")
        if bbox:
            component.size = {"width": bbox.get("width"), "height": bbox.get("height")}

        component.background = self._extract_background(node)
        component.border = self._extract_border(node)

        if "paddingTop" in node:
            component.spacing = {key: node.get(key) for key in _PADDING_FIELDS}

        if node.get("type") == "TEXT" and "characters" in node:
            component.text = node["characters"]
            style = node.get("style")
            if style:
                component.typography = self._extract_typography(node, style)

        if component.type == ComponentType.IMAGE:
            component.source = self._image_ref(node)

        component.effects = self._extract_effects(node)

        children = node.get("children")
        if children is not None:
            component.children = [
                self._convert_node(child)
                for child in children
                if self.config.include_hidden or child.get("visible") is not False
            ]

        return component

    # ════════════════════════════════════════════════════════════
    # Attribute groups
    # ════════════════════════════════════════════════════════════

    def _extract_layout(self, node: dict) -> dict:
        layout = {}
        direction = _DIRECTIONS.get(node.get("layoutMode"))
        if direction:
            layout["flexDirection"] = direction
        if node.get("primaryAxisAlignItems"):
            layout["justifyContent"] = _PRIMARY_ALIGN.get(node["primaryAxisAlignItems"], "flex-start")
        if node.get("counterAxisAlignItems"):
            layout["alignItems"] = _COUNTER_ALIGN.get(node["counterAxisAlignItems"], "stretch")
        if node.get("itemSpacing"):
            layout["gap"] = node["itemSpacing"]
        return layout

    def _extract_background(self, node: dict) -> Optional[dict]:
        for fill in node.get("fills") or []:
            if fill.get("type") == "SOLID" and fill.get("visible") is not False:
                if fill.get("color"):
                    return {"backgroundColor": color_to_hex(fill["color"])}
                return None
        return None

    def _extract_border(self, node: dict) -> Optional[dict]:
        strokes = node.get("strokes") or []
        if "cornerRadius" not in node and not strokes:
            return None
        border = {}
        if "cornerRadius" in node:
            border["borderRadius"] = node["cornerRadius"]
        if strokes and strokes[0].get("color"):
            border["borderColor"] = color_to_hex(strokes[0]["color"])
            border["borderWidth"] = 1
        return border

    def _extract_typography(self, node: dict, style: dict) -> dict:
        typography = {
            "fontSize": style.get("fontSize"),
            "fontWeight": format_number(style.get("fontWeight") or 400),
            "fontFamily": style.get("fontFamily"),
            "lineHeight": style.get("lineHeightPx"),
            "letterSpacing": style.get("letterSpacing"),
            "textAlign": _TEXT_ALIGN.get(style.get("textAlignHorizontal") or "LEFT", "left"),
        }
        # Text color lives in the node's fills, not in its style.
        for fill in node.get("fills") or []:
            if fill.get("type") == "SOLID" and fill.get("visible") is not False and fill.get("color"):
                typography["color"] = color_to_hex(fill["color"])
                break
        return {k: v for k, v in typography.items() if v is not None}

    def _extract_effects(self, node: dict) -> Optional[dict]:
        for effect in node.get("effects") or []:
            if effect.get("type") == "DROP_SHADOW" and effect.get("visible") is not False:
                color = effect.get("color")
                offset = effect.get("offset") or {}
                return {
                    "shadowColor": color_to_hex(color) if color else "#000000",
                    "shadowOffset": {"width": offset.get("x") or 0, "height": offset.get("y") or 0},
                    "shadowOpacity": (color or {}).get("a") or DEFAULT_SHADOW_OPACITY,
                    "shadowRadius": effect.get("radius") or DEFAULT_SHADOW_RADIUS,
                }
        return None

    def _image_ref(self, node: dict) -> Optional[str]:
        for fill in node.get("fills") or []:
            if fill.get("type") == "IMAGE":
                return fill.get("imageRef")
        return None
