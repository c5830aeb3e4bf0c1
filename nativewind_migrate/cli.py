#!/usr/bin/env python3
"""
nativewind-migrate CLI — styled-components / Tamagui / ui-core → NativeWind

  nativewind-migrate analyze src/Button.tsx          # 盤點樣式 pattern
  nativewind-migrate convert src/Button.tsx          # 自動轉換靜態樣式
  nativewind-migrate token '$coral100'               # 查詢 token 對應
  nativewind-migrate suggest src/Badge.tsx           # 產生遷移建議
  nativewind-migrate batch src --pattern '**/*'      # 整個目錄統計
  nativewind-migrate tailwind-config --output tailwind.config.js
  nativewind-migrate watch src                       # 檔案變更時重新分析
"""

import argparse
import json
import sys
import time
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from . import __version__
from .analyzer import DEFAULT_LIMIT, DEFAULT_PATTERN, analyze_file, batch_analyze
from .config import DEFAULT_CONFIG_PATH, load_config
from .converter import StyleConverter
from .migration import suggest_migration
from .patterns import to_jsonable
from .report import (
    analysis_report,
    batch_report,
    conversion_report,
    migration_report,
    token_report,
)
from .tailwind_config import generate_tailwind_config
from .token_resolver import CATEGORIES, TokenResolver, load_theme
from .typography_tokens import DEFAULT_LOCALE, LOCALES


def _emit(args, record, render) -> None:
    if args.json:
        print(json.dumps(to_jsonable(record), indent=2, ensure_ascii=False))
    else:
        print(render(record))


def _locale(args, config: dict) -> str:
    return getattr(args, "locale", None) or config.get("tokens", {}).get("locale") or DEFAULT_LOCALE


def _components(config: dict):
    return config.get("inline", {}).get("components") or None


def build_converter(args, config: dict) -> StyleConverter:
    """依 --theme / config.tokens.theme 建立 converter；沒有 theme 時使用內建色票."""
    theme = args.theme or config.get("tokens", {}).get("theme")
    resolver = TokenResolver(load_theme(theme)) if theme else None
    return StyleConverter(resolver=resolver, locale=_locale(args, config))


# ─── Commands ────────────────────────────────────────────────────────────────

def cmd_analyze(args, config: dict):
    """Analyze: 盤點單一檔案的樣式 pattern."""
    result = analyze_file(args.file, _components(config))
    _emit(args, result, analysis_report)


def cmd_convert(args, config: dict):
    """Convert: 轉換單一檔案中可自動轉換的 pattern."""
    converter = build_converter(args, config)
    source = Path(args.file).read_text(encoding="utf-8")
    output = converter.convert_source(source, _components(config))
    _emit(args, output, conversion_report)


def cmd_token(args, config: dict):
    """Token: 查詢單一設計 token 的 class 對應."""
    converter = build_converter(args, config)
    result = converter.resolver.resolve(args.token, category=args.category, locale=converter.locale)
    _emit(args, result, token_report)
    if not result.found:
        return 1


def cmd_suggest(args, config: dict):
    """Suggest: 為檔案或程式碼片段產生遷移建議."""
    if args.code:
        code = args.code
    elif args.file:
        code = Path(args.file).read_text(encoding="utf-8")
    else:
        print("❌ 請指定檔案，或以 --code 提供程式碼片段。")
        return 1
    converter = build_converter(args, config)
    spec = suggest_migration(code, context=args.context, converter=converter, components=_components(config))
    _emit(args, spec, migration_report)


def cmd_batch(args, config: dict):
    """Batch: 分析整個目錄並匯總."""
    batch_cfg = config.get("batch", {})
    pattern = args.pattern or batch_cfg.get("pattern") or DEFAULT_PATTERN
    limit = args.limit if args.limit is not None else (batch_cfg.get("limit") or DEFAULT_LIMIT)
    print(f"🔍 Scanning '{args.directory}' ({pattern}, limit {limit})...", file=sys.stderr)
    result = batch_analyze(
        args.directory,
        pattern=pattern,
        limit=limit,
        skip_dirs=batch_cfg.get("skipDirs"),
        components=_components(config),
    )
    _emit(args, result, batch_report)

    report_dir = config.get("output", {}).get("reportDir")
    if report_dir:
        path = Path(report_dir) / "batch-report.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(to_jsonable(result), f, indent=2, ensure_ascii=False)
        print(f"✅ Saved batch report to {path}", file=sys.stderr)


def cmd_tailwind_config(args, config: dict):
    """Tailwind-config: 產生 tailwind.config.js."""
    converter = build_converter(args, config)
    generated = generate_tailwind_config(
        include_legacy=not args.no_legacy,
        locale=converter.locale,
        resolver=converter.resolver,
    )
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(generated["configString"] + "\n")
        print(f"✅ Saved tailwind config to {args.output}")
    elif args.json:
        print(json.dumps(generated["config"], indent=2, ensure_ascii=False))
    else:
        print(generated["configString"])


# ─── Watch ───────────────────────────────────────────────────────────────────

_WATCHED_EXTENSIONS = (".tsx", ".ts", ".jsx", ".js")


class ChangeHandler(FileSystemEventHandler):
    """檔案變更事件處理器，帶 debounce 防抖。"""

    def __init__(self, callback, debounce: float = 1.0):
        self.callback = callback
        self.last_trigger = 0.0
        self.debounce_seconds = debounce

    def on_modified(self, event):
        if event.is_directory:
            return
        if not event.src_path.endswith(_WATCHED_EXTENSIONS):
            return
        current_time = time.time()
        if current_time - self.last_trigger < self.debounce_seconds:
            return
        self.last_trigger = current_time
        print(f"\n🔄 File changed: {event.src_path}")
        self.callback(event.src_path)

    on_created = on_modified


def cmd_watch(args, config: dict):
    """Watch: 監聽檔案變更並重新分析該檔案."""
    components = _components(config)
    print(f"👀 Watching for changes in '{args.directory}'...")
    print("   Press Ctrl+C to stop.")

    def reanalyze(path: str):
        try:
            result = analyze_file(path, components)
        except (OSError, UnicodeDecodeError) as e:
            print(f"   ⚠️  Cannot read {path}: {e}")
            return
        _emit(args, result, analysis_report)

    event_handler = ChangeHandler(reanalyze, debounce=args.debounce)
    observer = Observer()
    observer.schedule(event_handler, path=args.directory, recursive=True)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\n👋 Stopping watch...")
        observer.stop()
    finally:
        observer.join()


COMMANDS = {
    "analyze": cmd_analyze,
    "convert": cmd_convert,
    "token": cmd_token,
    "suggest": cmd_suggest,
    "batch": cmd_batch,
    "tailwind-config": cmd_tailwind_config,
    "watch": cmd_watch,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nativewind-migrate",
        description="nativewind-migrate: styled-components / Tamagui / ui-core → NativeWind",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--theme", help="Theme JSON (path or http(s) URL) replacing the built-in palette")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a report")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    analyze_p = sub.add_parser("analyze", help="Inventory style patterns in one file",
        epilog="Examples:\n  nativewind-migrate analyze src/Button.tsx\n  nativewind-migrate --json analyze src/Button.tsx",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    analyze_p.add_argument("file", help="Source file (.tsx / .ts / .jsx / .js)")

    convert_p = sub.add_parser("convert", help="Convert static styles to className",
        epilog="Examples:\n  nativewind-migrate convert src/Card.tsx\n  nativewind-migrate --theme theme.json convert src/Card.tsx",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    convert_p.add_argument("file", help="Source file")
    convert_p.add_argument("--locale", choices=LOCALES, help="Locale for typography fonts")

    token_p = sub.add_parser("token", help="Resolve a design token",
        epilog="Examples:\n  nativewind-migrate token '$coral100'\n  nativewind-migrate token '$body1R' --locale ja\n  nativewind-migrate token theme.main.colors.mono900",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    token_p.add_argument("token", help="Token (e.g. '$coral100', '$16', theme.fonts.heading1)")
    token_p.add_argument("--category", choices=CATEGORIES, help="Skip auto-detection")
    token_p.add_argument("--locale", choices=LOCALES, help="Locale for typography fonts")

    suggest_p = sub.add_parser("suggest", help="Suggest a migration approach",
        epilog="Examples:\n  nativewind-migrate suggest src/Badge.tsx\n  nativewind-migrate suggest --code 'const Box = styled.View`flex: 1;`'",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    suggest_p.add_argument("file", nargs="?", help="Source file")
    suggest_p.add_argument("--code", help="Code snippet instead of a file")
    suggest_p.add_argument("--context", help="Free-form note added to the example")
    suggest_p.add_argument("--locale", choices=LOCALES, help="Locale for typography fonts")

    batch_p = sub.add_parser("batch", help="Analyze a directory tree",
        epilog="Examples:\n  nativewind-migrate batch src\n  nativewind-migrate batch src --pattern '**/*' --limit 500",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    batch_p.add_argument("directory", help="Root directory")
    batch_p.add_argument("--pattern", help=f"File pattern (default {DEFAULT_PATTERN})")
    batch_p.add_argument("--limit", type=int, help=f"Max files to visit (default {DEFAULT_LIMIT})")

    tw_p = sub.add_parser("tailwind-config", help="Generate tailwind.config.js",
        epilog="Examples:\n  nativewind-migrate tailwind-config --output tailwind.config.js\n  nativewind-migrate tailwind-config --no-legacy --locale en",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    tw_p.add_argument("--no-legacy", action="store_true", help="Omit legacy-* colors")
    tw_p.add_argument("--locale", choices=LOCALES, help="Locale for body font aliases")
    tw_p.add_argument("--output", "-o", help="Write to file instead of stdout")

    watch_p = sub.add_parser("watch", help="Re-analyze files when they change",
        epilog="Examples:\n  nativewind-migrate watch src",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    watch_p.add_argument("directory", help="Directory to watch")
    watch_p.add_argument("--debounce", type=float, default=1.0, help="Seconds between re-analyses")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        config = load_config(args.config)
        output_cfg = config.get("output", {})
        if output_cfg.get("json"):
            args.json = True
        return handler(args, config) or 0
    except (OSError, ValueError) as e:
        print(f"❌ {args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
