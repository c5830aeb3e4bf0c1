"""
Orchestrator & Batch Aggregator

analyze_source：三種解析器跑過同一份原始碼，彙整 token 與可轉換統計。
batch_analyze：走訪目錄（略過 node_modules 等），逐檔分析後匯總。
"""

import os
from pathlib import Path
from typing import Iterable, Optional

from .converter import blocking_reasons
from .patterns import (
    AnalysisResult,
    AnalysisSummary,
    BatchResult,
    BatchSummary,
    ComplexCase,
    DeclarativePattern,
    PatternStats,
)
from .styled_components import parse_styled_components
from .tamagui import parse_tamagui
from .ui_core import parse_ui_core

DEFAULT_SKIP_DIRS = frozenset({"node_modules", "dist", "build", ".git", ".expo", "coverage"})

SOURCE_EXTENSIONS = (".tsx", ".ts", ".jsx", ".js")

# batch 接受的檔案樣式 → 副檔名
FILE_PATTERNS = {
    "**/*.tsx": (".tsx",),
    "**/*.ts": (".ts",),
    "**/*.jsx": (".jsx",),
    "**/*.js": (".js",),
    "**/*": SOURCE_EXTENSIONS,
}

DEFAULT_PATTERN = "**/*.tsx"
DEFAULT_LIMIT = 100


def is_ai_assisted(pattern) -> bool:
    """Tamagui 帶 variants、沒有函式型 variant 也沒有動態綁定."""
    return (
        isinstance(pattern, DeclarativePattern)
        and not pattern.parse_failed
        and bool(pattern.variants)
        and not pattern.has_dynamic_variants
        and not pattern.dynamic_bindings
    )


def collect_tokens(template: list, declarative: list, inline: list) -> list:
    """依出現順序收集所有設計 token 與 theme 參照（不重複）."""
    tokens = []
    for pattern in template:
        tokens.extend(pattern.external_theme_refs)
        tokens.extend(p.token for p in pattern.properties if p.token)
    for pattern in declarative:
        tokens.extend(v for v in pattern.static_styles.values() if isinstance(v, str) and v.startswith("$"))
        for variant in pattern.variants:
            for value in variant.values:
                tokens.extend(
                    v for v in value.styles.values() if isinstance(v, str) and v.startswith("$")
                )
    for pattern in inline:
        tokens.extend(a.token for a in pattern.style_attributes if a.token)
    return list(dict.fromkeys(tokens))


def summarize(patterns: list) -> AnalysisSummary:
    total = len(patterns)
    auto = sum(1 for p in patterns if p.is_auto_convertible)
    ai_assisted = sum(1 for p in patterns if is_ai_assisted(p))
    # manual 由差值得出，三者總和恆等於 total
    return AnalysisSummary(total=total, auto=auto, ai_assisted=ai_assisted, manual=total - auto - ai_assisted)


def analyze_source(source: str, file: str = "<source>", components: Optional[Iterable[str]] = None) -> AnalysisResult:
    template = parse_styled_components(source)
    declarative = parse_tamagui(source)
    inline = parse_ui_core(source, components)
    return AnalysisResult(
        file=file,
        template=template,
        declarative=declarative,
        inline=inline,
        summary=summarize([*template, *declarative, *inline]),
        tokens=collect_tokens(template, declarative, inline),
    )


def analyze_file(path: str, components: Optional[Iterable[str]] = None) -> AnalysisResult:
    """讀檔並分析；讀取失敗時 OSError 交給呼叫端處理."""
    source = Path(path).read_text(encoding="utf-8")
    return analyze_source(source, file=str(path), components=components)


# ─── Batch ───────────────────────────────────────────────────────────────────

def find_source_files(directory: str, pattern: str = DEFAULT_PATTERN, limit: int = DEFAULT_LIMIT, skip_dirs=None) -> list:
    """依名稱排序走訪目錄，回傳最多 limit 個符合樣式的檔案路徑."""
    if pattern not in FILE_PATTERNS:
        known = ", ".join(FILE_PATTERNS)
        raise ValueError(f"不支援的檔案樣式 '{pattern}'（可用：{known}）")
    root = Path(directory)
    if not root.is_dir():
        raise ValueError(f"目錄不存在：{directory}")

    extensions = FILE_PATTERNS[pattern]
    skip = DEFAULT_SKIP_DIRS if skip_dirs is None else frozenset(skip_dirs)
    found = []
    for current, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        for name in sorted(filenames):
            if not name.endswith(extensions) or name.endswith(".d.ts"):
                continue
            if len(found) >= limit:
                return found
            found.append(os.path.join(current, name))
    return found


_PATTERN_KEYS = (
    ("styledComponents", "template"),
    ("tamaguiStyled", "declarative"),
    ("uiCoreProps", "inline"),
)


def batch_analyze(
    directory: str,
    pattern: str = DEFAULT_PATTERN,
    limit: int = DEFAULT_LIMIT,
    skip_dirs=None,
    components: Optional[Iterable[str]] = None,
) -> BatchResult:
    """分析整個目錄；無法讀取的檔案列入 skipped_files，不中斷走訪."""
    files = find_source_files(directory, pattern, limit, skip_dirs)
    summary = BatchSummary()
    by_pattern = {key: PatternStats() for key, _ in _PATTERN_KEYS}
    token_usage = {}
    complex_cases = []
    skipped = []
    analyzed = 0

    for path in files:
        try:
            result = analyze_file(path, components)
        except (OSError, UnicodeDecodeError):
            skipped.append(path)
            continue
        analyzed += 1

        for key, attr in _PATTERN_KEYS:
            found = getattr(result, attr)
            if found:
                by_pattern[key].files += 1
                by_pattern[key].occurrences += len(found)
        for token in result.tokens:
            token_usage[token] = token_usage.get(token, 0) + 1

        counts = result.summary
        if counts.total == 0:
            continue
        if counts.auto == counts.total:
            summary.fully_auto_convertible += 1
        elif counts.auto > 0:
            summary.partially_auto_convertible += 1
        else:
            summary.manual_required += 1

        if counts.manual > 0:
            reasons = []
            for item in result.all_patterns:
                if item.is_auto_convertible or is_ai_assisted(item):
                    continue
                reasons.extend(reason for _, reason in blocking_reasons(item))
            complex_cases.append(
                ComplexCase(file_path=result.file, reason="; ".join(dict.fromkeys(reasons)))
            )

    return BatchResult(
        total_files=len(files),
        analyzed=analyzed,
        summary=summary,
        by_pattern=by_pattern,
        token_usage=token_usage,
        complex_cases=complex_cases,
        skipped_files=skipped,
    )
