"""
Component Emitter — ConvertedComponent tree → JSX source.

Targets:
  react-native  View / Text / Image / Pressable, NativeWind className
  react         div / span / img / button, Tailwind className

Every element carries a test id equal to the component id. Output depends
only on the tree and the style tables, so repeated runs are byte-identical.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .models import ComponentType, ConvertedComponent, GeneratedFile
from .node_utils import to_component_name
from .style_mapper import StyleMapper


@dataclass(frozen=True)
class TargetProfile:
    tags: Dict[ComponentType, str]
    test_id_attr: str
    image_source: str
    imports: str
    screen_wrapper: str


TARGETS: Dict[str, TargetProfile] = {
    "react-native": TargetProfile(
        tags={
            ComponentType.FRAME: "View",
            ComponentType.TEXT: "Text",
            ComponentType.IMAGE: "Image",
            ComponentType.BUTTON: "Pressable",
        },
        test_id_attr="testID",
        image_source="source={{{{ uri: {uri} }}}}",
        imports="import React from 'react';\nimport { View, Text, Image, Pressable } from 'react-native';\n",
        screen_wrapper="ScrollView",
    ),
    "react": TargetProfile(
        tags={
            ComponentType.FRAME: "div",
            ComponentType.TEXT: "span",
            ComponentType.IMAGE: "img",
            ComponentType.BUTTON: "button",
        },
        test_id_attr="data-testid",
        image_source="src={{{uri}}}",
        imports="import React from 'react';\n",
        screen_wrapper="main",
    ),
}

_JSX_SPECIAL = set("{}<>&")


def _attr(value: str) -> str:
    return str(value).replace("&", "&amp;").replace('"', "&quot;")


def _text_body(text: str) -> str:
    if not text:
        return ""
    if "\n" in text or text != text.strip() or _JSX_SPECIAL & set(text):
        return "{" + json.dumps(text, ensure_ascii=False) + "}"
    return text


class ComponentEmitter:

    def __init__(
        self,
        target: str = "react-native",
        style_mapper: Optional[StyleMapper] = None,
        components_dir: str = "components",
        screens_dir: str = "screens",
    ):
        if target not in TARGETS:
            valid = ", ".join(sorted(TARGETS))
            raise ValueError(f"Unsupported target '{target}' (expected one of: {valid})")
        self.target = target
        self.profile = TARGETS[target]
        self.style_mapper = style_mapper or StyleMapper()
        self.components_dir = components_dir
        self.screens_dir = screens_dir

    # ════════════════════════════════════════════════════════════
    # Tree → JSX
    # ════════════════════════════════════════════════════════════

    def emit(self, component: ConvertedComponent, indent: int = 0) -> str:
        if not isinstance(component, ConvertedComponent):
            raise TypeError(f"Expected ConvertedComponent, got {type(component).__name__}")
        tag = self.profile.tags.get(component.type)
        if tag is None:
            raise ValueError(f"Unknown component type: {component.type!r}")

        pad = "  " * indent
        style = self.style_mapper.map(component)

        props = f'\n{pad}  {self.profile.test_id_attr}="{_attr(component.id)}"'
        if style.class_name:
            props += f'\n{pad}  className="{style.class_name}"'
        if style.inline_style:
            props += f"\n{pad}  style={{{json.dumps(style.inline_style, separators=(',', ':'))}}}"

        if component.type == ComponentType.TEXT:
            return f"{pad}<{tag}{props}>\n{pad}  {_text_body(component.text or '')}\n{pad}</{tag}>"

        if component.type == ComponentType.IMAGE:
            uri = json.dumps(component.source or "")
            source = self.profile.image_source.format(uri=uri)
            alt = f'\n{pad}  alt="{_attr(component.name)}"' if self.target == "react" else ""
            return f"{pad}<{tag}{props}\n{pad}  {source}{alt}\n{pad}/>"

        children = component.children or []
        if not children:
            return f"{pad}<{tag}{props} />"
        inner = "\n".join(self.emit(child, indent + 1) for child in children)
        return f"{pad}<{tag}{props}>\n{inner}\n{pad}</{tag}>"

    # ════════════════════════════════════════════════════════════
    # Files
    # ════════════════════════════════════════════════════════════

    def component_path(self, name: str) -> str:
        return f"{self.components_dir}/{name}.tsx"

    def generate(self, component: ConvertedComponent, name: Optional[str] = None) -> GeneratedFile:
        component_name = name or to_component_name(component.name)
        body = self.emit(component, 2)
        content = (
            f"{self.profile.imports}\n"
            f"export default function {component_name}() {{\n"
            "  return (\n"
            f"{body}\n"
            "  );\n"
            "}\n"
        )
        return GeneratedFile(path=self.component_path(component_name), content=content, kind="component")

    def generate_screen(self, screen_name: str, component_names: Sequence[str]) -> GeneratedFile:
        name = f"{to_component_name(screen_name)}Screen"
        wrapper = self.profile.screen_wrapper
        imports: List[str] = [self.profile.imports.splitlines()[0]]
        if self.target == "react-native":
            imports.append(f"import {{ {wrapper} }} from 'react-native';")
        imports.extend(f"import {c} from '../{self.components_dir}/{c}';" for c in component_names)
        body = "\n".join(f"      <{c} />" for c in component_names)
        content = (
            "\n".join(imports)
            + "\n\n"
            f"export default function {name}() {{\n"
            "  return (\n"
            f"    <{wrapper}>\n"
            + (body + "\n" if body else "")
            + f"    </{wrapper}>\n"
            "  );\n"
            "}\n"
        )
        return GeneratedFile(path=f"{self.screens_dir}/{name}.tsx", content=content, kind="screen")
