"""Helpers shared by the token extractor, converter and emitters."""

import math
import re
from typing import Callable, Iterable, Optional


def walk_nodes(nodes: Iterable[dict], visit: Callable[[dict], None]) -> None:
    """Depth-first pre-order walk over a Figma node forest."""
    for node in nodes or []:
        if not isinstance(node, dict):
            continue
        visit(node)
        walk_nodes(node.get("children") or [], visit)


def _channel(value: Optional[float]) -> int:
    # half-up: 0.7 → 179
    return int(math.floor((value or 0) * 255 + 0.5))


def color_to_rgb(color: dict) -> dict:
    return {"r": _channel(color.get("r")), "g": _channel(color.get("g")), "b": _channel(color.get("b"))}


def color_to_hex(color: dict) -> str:
    """Figma 0..1 RGB → `#RRGGBB` (uppercase). Alpha is never part of the hex."""
    rgb = color_to_rgb(color)
    return f"#{rgb['r']:02X}{rgb['g']:02X}{rgb['b']:02X}"


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", (name or "").lower())
    return slug


def to_component_name(name: str) -> str:
    safe = "".join(ch if ch.isalnum() else " " for ch in name or "").strip()
    parts = [p for p in safe.split() if p]
    if not parts:
        return "Component"
    pascal = "".join(p[:1].upper() + p[1:] for p in parts)
    if pascal[0].isdigit():
        pascal = f"Component{pascal}"
    return pascal


def count_nodes(node: Optional[dict]) -> int:
    if not node:
        return 0
    n = 1
    for child in node.get("children", []) or []:
        n += count_nodes(child)
    return n


def format_number(value: float) -> str:
    """16.0 → "16", 1.5 → "1.5"."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
