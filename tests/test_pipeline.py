"""
匯入管線整合測試
Figma 文件 → tokens + 元件樹 + 產出檔案，全部用假文件，不需要網路。
"""
import pytest

from figma_import.models import ComponentType
from figma_import.pipeline import FigmaImporter, list_frames, select_nodes


def _hello_frame(node_id="1:1", name="Greeting", **kwargs):
    frame = {
        "id": node_id,
        "type": "FRAME",
        "name": name,
        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 375, "height": 812},
        "layoutMode": "HORIZONTAL",
        "itemSpacing": 16,
        "children": [{
            "id": f"{node_id}0",
            "type": "TEXT",
            "name": "Label",
            "characters": "Hello",
            "style": {"fontSize": 16, "fontWeight": 400, "fontFamily": "Inter"},
        }],
    }
    frame.update(kwargs)
    return frame


def _document(*frames, name="App"):
    return {
        "name": name,
        "document": {
            "id": "0:0",
            "type": "DOCUMENT",
            "children": [{"id": "0:1", "type": "CANVAS", "name": "Page 1", "children": list(frames)}],
        },
    }


# ─── End to end ─────────────────────────────────────────────────────────────

class TestHelloFrame:
    def setup_method(self):
        self.result = FigmaImporter().run(_document(_hello_frame()), file_key="KEY42", node_ids=["1:1"])

    def test_tokens(self):
        tokens = self.result.tokens
        assert [(s.name, s.value) for s in tokens.spacing] == [("spacing-16", 16)]
        assert [t.name for t in tokens.typography] == ["text-base-regular"]

    def test_component_tree(self):
        (frame,) = self.result.components
        assert frame.type == ComponentType.FRAME
        assert frame.layout == {"flexDirection": "row", "gap": 16}
        (text,) = frame.children
        assert text.type == ComponentType.TEXT
        assert text.text == "Hello"
        assert text.typography["fontSize"] == 16
        assert text.typography["fontWeight"] == "400"

    def test_generated_source(self):
        component_files = [f for f in self.result.generated_files if f.kind == "component"]
        assert [f.path for f in component_files] == ["components/Greeting.tsx"]
        content = component_files[0].content
        view_at = content.index("<View")
        text_at = content.index("<Text")
        assert view_at < text_at
        assert "\n        Hello\n" in content
        assert content.index("</Text>") < content.index("</View>")

    def test_file_kinds(self):
        assert [f.kind for f in self.result.generated_files] == ["theme", "component", "screen"]

    def test_metadata(self):
        meta = self.result.metadata
        assert meta["fileKey"] == "KEY42"
        assert meta["frameCount"] == 1
        assert meta["componentCount"] == 2
        assert meta["tokenCount"] == 2
        assert meta["assetCount"] == 0
        assert meta["duration"] >= 0
        assert self.result.warnings == []


def test_run_is_deterministic():
    doc = _document(_hello_frame(), _hello_frame("1:2", "Other"))
    first = FigmaImporter().run(doc)
    second = FigmaImporter().run(doc)
    assert [(f.path, f.content) for f in first.generated_files] == [(f.path, f.content) for f in second.generated_files]


def test_react_target():
    result = FigmaImporter(target="react").run(_document(_hello_frame()))
    content = next(f.content for f in result.generated_files if f.kind == "component")
    assert "data-testid" in content
    assert "<span" in content


# ─── Selection ──────────────────────────────────────────────────────────────

def test_no_selection_imports_all_frames_with_warning():
    result = FigmaImporter().run(_document(_hello_frame(), _hello_frame("1:2", "Other")))
    assert [c.id for c in result.components] == ["1:1", "1:2"]
    assert "No frame selected - importing all frames" in result.warnings


def test_duplicate_names_get_suffix():
    result = FigmaImporter().run(_document(_hello_frame(), _hello_frame("1:2")))
    paths = [f.path for f in result.generated_files if f.kind == "component"]
    assert paths == ["components/Greeting.tsx", "components/Greeting2.tsx"]


def test_hidden_root_is_not_emitted():
    result = FigmaImporter().run(_document(_hello_frame(), _hello_frame("1:2", "Ghost", visible=False)))
    assert result.components[1].omitted
    paths = [f.path for f in result.generated_files if f.kind == "component"]
    assert paths == ["components/Greeting.tsx"]


def test_unknown_node_id_is_warning():
    result = FigmaImporter().run(_document(_hello_frame()), node_ids=["9:9"])
    assert result.components == []
    assert any("9:9" in w for w in result.warnings)
    assert [f.kind for f in result.generated_files] == ["theme"]


def test_select_nested_node():
    nodes, warnings = select_nodes(_document(_hello_frame()), ["1:10"])
    assert [n["id"] for n in nodes] == ["1:10"]
    assert warnings == []


def test_tokens_scan_all_pages_even_with_selection():
    doc = _document(_hello_frame())
    doc["document"]["children"].append({
        "id": "0:2",
        "type": "CANVAS",
        "name": "Page 2",
        "children": [{"id": "5:1", "type": "FRAME", "name": "Other", "paddingTop": 24}],
    })
    result = FigmaImporter().run(doc, node_ids=["1:1"])
    assert [s.value for s in result.tokens.spacing] == [16, 24]
    assert result.tokens.metadata.source_pages == ("0:1", "0:2")


# ─── list_frames ────────────────────────────────────────────────────────────

def test_list_frames():
    desktop = _hello_frame("1:2", "Desktop", absoluteBoundingBox={"x": 0, "y": 0, "width": 1440, "height": 900})
    doc = _document(_hello_frame(), desktop, {"id": "1:3", "type": "TEXT", "name": "Loose text"})
    frames = list_frames(doc)
    assert [f.id for f in frames] == ["1:1", "1:2"]
    assert frames[0].is_mobile_size
    assert not frames[1].is_mobile_size
    assert frames[1].aspect_ratio == pytest.approx(1.6)
    assert frames[0].page_id == "0:1"
