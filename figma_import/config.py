"""設定檔載入與基本驗證."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from .component_converter import ConversionConfig
from .component_emitter import TARGETS
from .token_extractor import TokenExtractionConfig

DEFAULT_CONFIG_PATH = "figma-import.config.json"

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"figma", "tokens", "conversion", "output"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "figma": {"personalAccessToken", "fileKey"},
    "tokens": {"extractColors", "extractTypography", "extractSpacing", "extractEffects"},
    "conversion": {"includeHidden", "flattenGroups", "detectButtons", "detectLists"},
    "output": {"dir", "target", "componentsDir", "themeFile"},
}

_BOOLEAN_SECTIONS = ("tokens", "conversion")


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    # 頂層未知欄位
    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    # 各區塊欄位
    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"[{section}] 應為 JSON 物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    # tokens / conversion 開關皆為布林值
    for section in _BOOLEAN_SECTIONS:
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            continue
        for key, val in section_cfg.items():
            if not isinstance(val, bool):
                _warn(f"{section}.{key} 應為 true/false，目前是 {type(val).__name__}")

    # output.target 值驗證
    output_cfg = cfg.get("output", {})
    target = output_cfg.get("target") if isinstance(output_cfg, dict) else None
    if target and target not in TARGETS:
        valid = ", ".join(sorted(TARGETS))
        _warn(f"output.target '{target}' 不在已知值中（{valid}）")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def _section(cfg: dict, name: str) -> dict:
    section = cfg.get(name) or {}
    return section if isinstance(section, dict) else {}


def token_config_from(cfg: dict) -> TokenExtractionConfig:
    tokens = _section(cfg, "tokens")
    return TokenExtractionConfig(
        extract_colors=bool(tokens.get("extractColors", True)),
        extract_typography=bool(tokens.get("extractTypography", True)),
        extract_spacing=bool(tokens.get("extractSpacing", True)),
        extract_effects=bool(tokens.get("extractEffects", True)),
    )


def conversion_config_from(cfg: dict) -> ConversionConfig:
    conversion = _section(cfg, "conversion")
    return ConversionConfig(
        include_hidden=bool(conversion.get("includeHidden", False)),
        flatten_groups=bool(conversion.get("flattenGroups", True)),
        detect_buttons=bool(conversion.get("detectButtons", True)),
        detect_lists=bool(conversion.get("detectLists", True)),
    )


def output_options_from(cfg: dict) -> dict:
    output = _section(cfg, "output")
    return {
        "dir": output.get("dir") or "./generated",
        "target": output.get("target") or "react-native",
        "componentsDir": output.get("componentsDir") or "components",
        "themeFile": output.get("themeFile") or "theme.config.js",
    }


def resolve_token(cfg: dict) -> Optional[str]:
    """personalAccessToken in config, else the FIGMA_TOKEN environment variable."""
    return _section(cfg, "figma").get("personalAccessToken") or os.environ.get("FIGMA_TOKEN")
