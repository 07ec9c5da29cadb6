"""
Style Mapper — ConvertedComponent → utility classes + residual inline style.

Every value is looked up in a fixed scale table. A hit becomes a Tailwind /
NativeWind class; a miss becomes an inline style entry with the exact value,
so nothing is lost for values off the scale.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .models import ConvertedComponent

SPACING_SCALE = {4: "1", 8: "2", 12: "3", 16: "4", 20: "5", 24: "6", 32: "8", 40: "10", 48: "12"}
SIZE_SCALE = {16: "4", 24: "6", 32: "8", 48: "12", 64: "16", 96: "24", 128: "32"}
COLOR_PALETTE = {
    "#FFFFFF": "white",
    "#000000": "black",
    "#F3F4F6": "gray-100",
    "#E5E7EB": "gray-200",
    "#6B7280": "gray-500",
}
RADIUS_SCALE = {
    2: "rounded-sm", 4: "rounded", 6: "rounded-md", 8: "rounded-lg",
    12: "rounded-xl", 16: "rounded-2xl", 9999: "rounded-full",
}
FONT_SIZE_SCALE = {
    12: "text-xs", 14: "text-sm", 16: "text-base", 18: "text-lg",
    20: "text-xl", 24: "text-2xl", 30: "text-3xl", 36: "text-4xl",
}
FONT_WEIGHT_SCALE = {
    "100": "font-thin", "200": "font-extralight", "300": "font-light",
    "400": "font-normal", "500": "font-medium", "600": "font-semibold",
    "700": "font-bold", "800": "font-extrabold", "900": "font-black",
}
JUSTIFY_CLASSES = {
    "flex-start": "justify-start",
    "flex-end": "justify-end",
    "center": "justify-center",
    "space-between": "justify-between",
}
ALIGN_CLASSES = {
    "flex-start": "items-start",
    "flex-end": "items-end",
    "center": "items-center",
    "stretch": "items-stretch",
    "baseline": "items-baseline",
}
TEXT_ALIGN_CLASSES = {"left": "text-left", "center": "text-center", "right": "text-right", "justify": "text-justify"}

_SIDES = (("Top", "t"), ("Right", "r"), ("Bottom", "b"), ("Left", "l"))


@dataclass(frozen=True)
class StyleResult:
    class_name: str
    inline_style: Optional[Dict[str, Any]] = None


def _lookup(table: dict, value: Any) -> Optional[str]:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    try:
        return table.get(value)
    except TypeError:
        return None


class StyleMapper:

    def map(self, component: ConvertedComponent) -> StyleResult:
        classes: List[str] = []
        inline: Dict[str, Any] = {}

        self._map_layout(component.layout, classes, inline)
        self._map_size(component.size, classes, inline)
        self._map_background(component.background, classes, inline)
        self._map_border(component.border, classes, inline)
        self._map_padding(component.spacing, classes, inline)
        self._map_typography(component.typography, classes, inline)
        self._map_effects(component.effects, inline)

        return StyleResult(class_name=" ".join(classes), inline_style=inline or None)

    # ─── Layout ───

    def _map_layout(self, layout: Optional[dict], classes: list, inline: dict) -> None:
        if not layout:
            return
        direction = layout.get("flexDirection")
        if direction == "row":
            classes.append("flex-row")
        elif direction == "column":
            classes.append("flex-col")
        justify = layout.get("justifyContent")
        if justify:
            classes.append(JUSTIFY_CLASSES.get(justify, "justify-start"))
        align = layout.get("alignItems")
        if align:
            classes.append(ALIGN_CLASSES.get(align, "items-stretch"))
        gap = layout.get("gap")
        if gap:
            step = _lookup(SPACING_SCALE, gap)
            if step:
                classes.append(f"gap-{step}")
            else:
                inline["gap"] = gap

    # ─── Size ───

    def _map_size(self, size: Optional[dict], classes: list, inline: dict) -> None:
        if not size:
            return
        for key, prefix in (("width", "w"), ("height", "h")):
            value = size.get(key)
            if value == "full":
                classes.append(f"{prefix}-full")
            elif isinstance(value, (int, float)):
                step = _lookup(SIZE_SCALE, value)
                if step:
                    classes.append(f"{prefix}-{step}")
                else:
                    inline[key] = value

    # ─── Background ───

    def _map_background(self, background: Optional[dict], classes: list, inline: dict) -> None:
        color = (background or {}).get("backgroundColor")
        if not color:
            return
        name = _lookup(COLOR_PALETTE, color.upper())
        if name:
            classes.append(f"bg-{name}")
        else:
            inline["backgroundColor"] = color

    # ─── Border ───

    def _map_border(self, border: Optional[dict], classes: list, inline: dict) -> None:
        if not border:
            return
        radius = border.get("borderRadius")
        if radius:
            cls = _lookup(RADIUS_SCALE, radius)
            if cls:
                classes.append(cls)
            else:
                inline["borderRadius"] = radius
        width = border.get("borderWidth")
        if width:
            if width == 1:
                classes.append("border")
            else:
                inline["borderWidth"] = width
        color = border.get("borderColor")
        if color and width:
            name = _lookup(COLOR_PALETTE, color.upper())
            if name:
                classes.append(f"border-{name}")
            else:
                inline["borderColor"] = color

    # ─── Padding ───

    def _map_padding(self, spacing: Optional[dict], classes: list, inline: dict) -> None:
        if not spacing:
            return
        if spacing.get("padding"):
            self._padding_class("p", "padding", spacing["padding"], classes, inline)
            return

        sides = {suffix: spacing.get(f"padding{suffix}") or 0 for suffix, _ in _SIDES}
        if not any(sides.values()):
            return
        if len(set(sides.values())) == 1:
            self._padding_class("p", "padding", sides["Top"], classes, inline)
        elif sides["Top"] == sides["Bottom"] and sides["Left"] == sides["Right"]:
            if sides["Left"]:
                self._padding_class("px", "paddingHorizontal", sides["Left"], classes, inline)
            if sides["Top"]:
                self._padding_class("py", "paddingVertical", sides["Top"], classes, inline)
        else:
            for suffix, short in _SIDES:
                if sides[suffix]:
                    self._padding_class(f"p{short}", f"padding{suffix}", sides[suffix], classes, inline)

    def _padding_class(self, prefix: str, style_key: str, value: float, classes: list, inline: dict) -> None:
        step = _lookup(SPACING_SCALE, value)
        if step:
            classes.append(f"{prefix}-{step}")
        else:
            inline[style_key] = value

    # ─── Typography ───

    def _map_typography(self, typography: Optional[dict], classes: list, inline: dict) -> None:
        if not typography:
            return
        font_size = typography.get("fontSize")
        if font_size:
            cls = _lookup(FONT_SIZE_SCALE, font_size)
            if cls:
                classes.append(cls)
            else:
                inline["fontSize"] = font_size
        weight = typography.get("fontWeight")
        if weight:
            cls = _lookup(FONT_WEIGHT_SCALE, str(weight))
            if cls:
                classes.append(cls)
            else:
                inline["fontWeight"] = str(weight)
        align = typography.get("textAlign")
        if align:
            cls = TEXT_ALIGN_CLASSES.get(align)
            if cls:
                classes.append(cls)
            else:
                inline["textAlign"] = align
        color = typography.get("color")
        if color:
            name = _lookup(COLOR_PALETTE, color.upper())
            if name:
                classes.append(f"text-{name}")
            else:
                inline["color"] = color
        if typography.get("fontFamily"):
            inline["fontFamily"] = typography["fontFamily"]
        if typography.get("lineHeight"):
            inline["lineHeight"] = typography["lineHeight"]
        if typography.get("letterSpacing"):
            inline["letterSpacing"] = typography["letterSpacing"]

    # ─── Effects ───

    def _map_effects(self, effects: Optional[dict], inline: dict) -> None:
        if not effects:
            return
        for key in ("shadowColor", "shadowOffset", "shadowOpacity", "shadowRadius"):
            if effects.get(key) is not None:
                inline[key] = effects[key]
