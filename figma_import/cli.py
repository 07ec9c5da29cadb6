#!/usr/bin/env python3
"""
figma-import CLI — Figma → React Native / React 元件

  figma-import parse <url>                     # 解析 Figma 連結
  figma-import frames <url>                    # 列出可匯入的 frame
  figma-import tokens <url> [--output FILE]    # 抽取設計 token
  figma-import generate <url> [--target react] # 產生 theme + 元件
  figma-import watch <document.json>           # 監看快照並自動重新產生
"""

import argparse
import asyncio
import json
import os
import threading
import time
from typing import Optional

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from . import __version__
from .component_emitter import TARGETS
from .config import (
    DEFAULT_CONFIG_PATH,
    conversion_config_from,
    load_config,
    output_options_from,
    resolve_token,
    token_config_from,
)
from .figma_client import FigmaAPIClient, FigmaAPIError
from .generator import generate_project, import_document
from .pipeline import list_frames
from .token_extractor import TokenExtractor
from .url_parser import validate_figma_url


def _report_api_error(e: FigmaAPIError, file_key: str) -> None:
    if e.status_code == 403:
        print("❌ Figma API 403：Token 無效或已過期，請重新產生 FIGMA_TOKEN。")
    elif e.status_code == 404:
        print(f"❌ Figma API 404：找不到檔案 '{file_key}'，請確認連結是否正確。")
    else:
        print(f"❌ Figma API 錯誤：{e}")


def _print_warnings(warnings) -> None:
    for w in warnings:
        print(f"   ⚠️  {w}")


def _read_json(path: str) -> Optional[dict]:
    if not os.path.exists(path):
        print(f"❌ 找不到檔案 '{path}'。")
        return None
    with open(path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            print(f"❌ '{path}' 不是合法的 JSON：{e}")
            return None


def _resolve_reference(args, config: dict):
    """Return (file_key, node_ids, url) from the url argument or config, or None."""
    url = getattr(args, "url", None) or ""
    node_ids = list(getattr(args, "node_id", None) or [])
    if url:
        parsed = validate_figma_url(url)
        if not parsed.valid:
            print(f"❌ {parsed.error}")
            return None
        if parsed.node_id and parsed.node_id not in node_ids:
            node_ids.insert(0, parsed.node_id)
        return parsed.file_key, node_ids, url

    file_key = (config.get("figma") or {}).get("fileKey")
    if not file_key and not getattr(args, "input", None):
        print("❌ 請提供 Figma 連結、--input 快照，或在 config 的 figma.fileKey 設定檔案 key。")
        return None
    return file_key or "", node_ids, ""


def _load_document(args, config: dict, depth: Optional[int] = None):
    """Return (figma_file, file_key, node_ids, url); figma_file is None on failure."""
    ref = _resolve_reference(args, config)
    if ref is None:
        return None, "", [], ""
    file_key, node_ids, url = ref

    if getattr(args, "input", None):
        print(f"📄 Loading document: {args.input}")
        return _read_json(args.input), file_key, node_ids, url

    token = resolve_token(config)
    if not token:
        print(f"❌ 請設定 FIGMA_TOKEN 環境變數，或在 {DEFAULT_CONFIG_PATH} 的 figma.personalAccessToken 設定。")
        print("   取得方式：Figma → Settings → Personal access tokens → 新增")
        return None, file_key, node_ids, url

    print(f"📥 Fetching from Figma: {file_key}")
    client = FigmaAPIClient(token)
    try:
        # 取整份檔案：token 需掃描所有頁面
        figma_file = client.fetch_document(file_key, depth=depth)
    except FigmaAPIError as e:
        _report_api_error(e, file_key)
        return None, file_key, node_ids, url
    return figma_file, file_key, node_ids, url


def cmd_parse(args, config: dict):
    """Parse: 顯示 Figma 連結解析結果."""
    parsed = validate_figma_url(args.url)
    print(json.dumps(parsed.to_dict(), indent=2, ensure_ascii=False))
    if not parsed.valid:
        print(f"❌ {parsed.error}")


def cmd_frames(args, config: dict):
    """Frames: 列出每頁的頂層 frame."""
    figma_file, _, _, _ = _load_document(args, config, depth=2)
    if figma_file is None:
        return
    frames = list_frames(figma_file)
    if not frames:
        print("   ℹ️  沒有找到任何頂層 frame。")
        return
    for frame in frames:
        badge = "📱" if frame.is_mobile_size else "🖥️ "
        print(f"   {badge} {frame.id:<12} {frame.name}  ({frame.width:g}×{frame.height:g}, page {frame.page_id})")
    print(f"\nTotal frames: {len(frames)}")


def cmd_tokens(args, config: dict):
    """Tokens: 抽取 color / typography / spacing / effect token."""
    figma_file, file_key, _, _ = _load_document(args, config)
    if figma_file is None:
        return
    tokens = TokenExtractor(token_config_from(config)).extract_document(figma_file, file_key)
    print(
        f"   ✅ {len(tokens.colors)} colors, {len(tokens.typography)} typography, "
        f"{len(tokens.spacing)} spacing, {len(tokens.effects)} effects"
    )
    if args.output:
        os.makedirs(os.path.dirname(os.path.abspath(args.output)), exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(tokens.to_json() + "\n")
        print(f"   📄 Tokens saved to {args.output}")
    else:
        print(tokens.to_json())


def _run_generate(args, config: dict) -> bool:
    output = output_options_from(config)
    target = args.target or output["target"]
    output_dir = args.output or output["dir"]
    options = dict(
        target=target,
        token_config=token_config_from(config),
        conversion_config=conversion_config_from(config),
        theme_path=output["themeFile"],
        components_dir=output["componentsDir"],
    )

    if getattr(args, "input", None):
        figma_file, file_key, node_ids, url = _load_document(args, config)
        if figma_file is None:
            return False
        try:
            result = import_document(
                figma_file, output_dir, file_key=file_key, node_ids=node_ids, figma_url=url, **options
            )
        except (TypeError, ValueError) as e:
            print(f"❌ Generate failed: {e}")
            return False
    else:
        ref = _resolve_reference(args, config)
        if ref is None:
            return False
        file_key, node_ids, url = ref
        token = resolve_token(config)
        if not token:
            print(f"❌ 請設定 FIGMA_TOKEN 環境變數，或在 {DEFAULT_CONFIG_PATH} 的 figma.personalAccessToken 設定。")
            return False
        print(f"📥 Fetching from Figma: {file_key}")
        try:
            result = generate_project(
                figma_token=token,
                file_key=file_key,
                output_dir=output_dir,
                node_ids=node_ids,
                figma_url=url,
                download_images=args.download_images,
                **options,
            )
        except FigmaAPIError as e:
            _report_api_error(e, file_key)
            return False

    _print_warnings(result.warnings)
    meta = result.metadata
    print(
        f"   ✅ {meta['frameCount']} frames, {meta['componentCount']} components, "
        f"{meta['tokenCount']} tokens ({meta['duration']}s)"
    )
    for generated in result.generated_files:
        print(f"   📄 {generated.kind:<9} {generated.path}")
    print(f"✅ Generated {target} files to {output_dir}")
    return True


def cmd_generate(args, config: dict):
    """Generate: 產生 theme config、元件與 screen."""
    _run_generate(args, config)


class ChangeHandler(FileSystemEventHandler):
    """快照檔變更事件處理器，帶 debounce 防抖。"""

    def __init__(self, callback, loop: asyncio.AbstractEventLoop, debounce: float = 1.0, watched_path: Optional[str] = None):
        self.callback = callback
        self.loop = loop
        self.last_trigger = 0.0
        self.debounce_seconds = debounce
        self.watched_path = os.path.abspath(watched_path) if watched_path else None

    def _is_watched(self, path: str) -> bool:
        if self.watched_path:
            return os.path.abspath(path) == self.watched_path
        return path.endswith(".json")

    def on_modified(self, event):
        if event.is_directory:
            return
        if not self._is_watched(event.src_path):
            return
        current_time = time.time()
        if current_time - self.last_trigger < self.debounce_seconds:
            return
        self.last_trigger = current_time
        print(f"\n🔄 File changed: {event.src_path}")
        # loop 在獨立執行緒中 run_forever
        asyncio.run_coroutine_threadsafe(self.callback(), self.loop)

    # 編輯器常以「寫暫存檔再取代」方式存檔
    on_created = on_modified


def cmd_watch(args, config: dict):
    """Watch: 監聽 document 快照變更並自動重新產生."""
    snapshot = os.path.abspath(args.input)
    watch_dir = os.path.dirname(snapshot)
    print(f"👀 Watching '{snapshot}'...")
    print("   Press Ctrl+C to stop.")

    loop = asyncio.new_event_loop()

    async def generate_task():
        _run_generate(args, config)

    def run_loop():
        asyncio.set_event_loop(loop)
        loop.run_forever()

    loop_thread = threading.Thread(target=run_loop, daemon=True)
    loop_thread.start()

    # 初始執行一次
    future = asyncio.run_coroutine_threadsafe(generate_task(), loop)
    try:
        future.result(timeout=120)
    except Exception as e:
        print(f"   ⚠️  Initial generate failed: {e}")

    event_handler = ChangeHandler(generate_task, loop, debounce=args.debounce, watched_path=snapshot)
    observer = Observer()
    observer.schedule(event_handler, path=watch_dir, recursive=False)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\n👋 Stopping watch...")
        observer.stop()
    finally:
        observer.join()
        loop.call_soon_threadsafe(loop.stop)


def _add_source_args(p: argparse.ArgumentParser, url_required: bool = False) -> None:
    if url_required:
        p.add_argument("url", help="Figma URL (https://www.figma.com/design/KEY/Name?node-id=1-2)")
    else:
        p.add_argument("url", nargs="?", help="Figma URL (falls back to figma.fileKey in config)")
    p.add_argument("--input", "-i", help="Local document JSON (GET /v1/files response) instead of the API")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="figma-import: Figma → React Native / React components",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    parse_p = sub.add_parser("parse", help="Parse a Figma URL",
        epilog="Examples:\n  figma-import parse 'https://www.figma.com/design/abc123/App?node-id=1-2'",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    parse_p.add_argument("url", help="Figma URL")

    frames_p = sub.add_parser("frames", help="List top-level frames",
        epilog="Examples:\n  figma-import frames 'https://www.figma.com/design/abc123/App'\n  figma-import frames --input document.json",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_source_args(frames_p)

    tokens_p = sub.add_parser("tokens", help="Extract design tokens",
        epilog="Examples:\n  figma-import tokens 'https://www.figma.com/design/abc123/App' --output tokens.json\n  figma-import tokens --input document.json",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_source_args(tokens_p)
    tokens_p.add_argument("--output", "-o", help="Write tokens JSON to this file")

    gen_p = sub.add_parser("generate", help="Figma → theme config + components",
        epilog="Examples:\n  figma-import generate 'https://www.figma.com/design/abc123/App?node-id=1-2'\n"
               "  figma-import generate --input document.json --target react --output ./out",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_source_args(gen_p)
    gen_p.add_argument("--target", choices=sorted(TARGETS), help="Output target")
    gen_p.add_argument("--output", "-o", help="Output directory")
    gen_p.add_argument("--node-id", action="append", help="Frame id to import (repeatable)")
    gen_p.add_argument("--download-images", action="store_true", help="Render image nodes into assets/")

    watch_p = sub.add_parser("watch", help="Regenerate when a document snapshot changes",
        epilog="Examples:\n  figma-import watch document.json --output ./out",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    watch_p.add_argument("input", help="Document JSON to watch")
    watch_p.add_argument("--target", choices=sorted(TARGETS), help="Output target")
    watch_p.add_argument("--output", "-o", help="Output directory")
    watch_p.add_argument("--node-id", action="append", help="Frame id to import (repeatable)")
    watch_p.add_argument("--debounce", type=float, default=1.0, help="Seconds between regenerations")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)

    if args.command == "parse":
        cmd_parse(args, config)
    elif args.command == "frames":
        cmd_frames(args, config)
    elif args.command == "tokens":
        cmd_tokens(args, config)
    elif args.command == "generate":
        cmd_generate(args, config)
    elif args.command == "watch":
        cmd_watch(args, config)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
