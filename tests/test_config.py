"""
設定檔載入 / 驗證測試
validate_config 只印警告、不拋例外。
"""
import json

import pytest

from figma_import.config import (
    conversion_config_from,
    load_config,
    output_options_from,
    resolve_token,
    token_config_from,
    validate_config,
)


def test_missing_file_returns_empty(tmp_path):
    assert load_config(str(tmp_path / "nope.json")) == {}


def test_load_valid_config(tmp_path, capsys):
    cfg = {"figma": {"fileKey": "KEY42"}, "output": {"target": "react", "dir": "out"}}
    path = tmp_path / "figma-import.config.json"
    path.write_text(json.dumps(cfg), encoding="utf-8")
    assert load_config(str(path)) == cfg
    assert capsys.readouterr().out == ""


def test_non_object_config_returns_empty(tmp_path, capsys):
    path = tmp_path / "cfg.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_config(str(path)) == {}
    assert "格式錯誤" in capsys.readouterr().out


class TestValidateConfig:
    def test_unknown_top_key_warns(self, capsys):
        validate_config({"figmaa": {}})
        assert "figmaa" in capsys.readouterr().out

    def test_unknown_section_key_warns(self, capsys):
        validate_config({"tokens": {"extractColour": True}})
        assert "extractColour" in capsys.readouterr().out

    def test_non_boolean_flag_warns(self, capsys):
        validate_config({"conversion": {"includeHidden": "yes"}})
        assert "conversion.includeHidden" in capsys.readouterr().out

    def test_unknown_target_warns(self, capsys):
        validate_config({"output": {"target": "flutter"}})
        assert "flutter" in capsys.readouterr().out

    def test_section_not_object_warns(self, capsys):
        validate_config({"output": "dist"})
        assert "[output]" in capsys.readouterr().out

    def test_valid_config_is_silent(self, capsys):
        validate_config({
            "figma": {"personalAccessToken": "t", "fileKey": "k"},
            "tokens": {"extractColors": False},
            "conversion": {"includeHidden": True},
            "output": {"target": "react-native", "themeFile": "theme.js"},
        })
        assert capsys.readouterr().out == ""


def test_token_config_from():
    config = token_config_from({"tokens": {"extractEffects": False}})
    assert config.extract_colors and config.extract_typography and config.extract_spacing
    assert not config.extract_effects


def test_conversion_config_defaults():
    config = conversion_config_from({})
    assert not config.include_hidden
    assert config.detect_buttons


def test_output_options_defaults():
    assert output_options_from({"output": {"target": "react"}}) == {
        "dir": "./generated",
        "target": "react",
        "componentsDir": "components",
        "themeFile": "theme.config.js",
    }


def test_resolve_token_prefers_config(monkeypatch):
    monkeypatch.setenv("FIGMA_TOKEN", "from-env")
    assert resolve_token({"figma": {"personalAccessToken": "from-config"}}) == "from-config"
    assert resolve_token({}) == "from-env"


def test_resolve_token_missing(monkeypatch):
    monkeypatch.delenv("FIGMA_TOKEN", raising=False)
    assert resolve_token({}) is None
