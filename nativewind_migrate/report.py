"""可讀報告：analyze / convert / token / suggest / batch 的文字輸出."""

from .patterns import (
    AnalysisResult,
    BatchResult,
    ConversionOutput,
    MigrationSpec,
    TokenMappingResult,
)

_RULE = "═══════════════════════════════════════════════════════"


def _header(title: str) -> list:
    return [_RULE, f"  {title}", _RULE, ""]


def _footer(summary: str) -> list:
    return [_RULE, f"  {summary}", _RULE]


def _pattern_label(pattern) -> str:
    name = getattr(pattern, "component_name", None) or f"<{pattern.tag_name}>"
    return f"{name} ({pattern.kind}, line {pattern.location.line})"


def analysis_report(result: AnalysisResult) -> str:
    lines = _header(f"Style Analysis: {result.file}")
    for pattern in result.all_patterns:
        mark = "✅" if pattern.is_auto_convertible else "⚠️ "
        lines.append(f"  {mark} {_pattern_label(pattern)}")
        if pattern.parse_failed:
            lines.append("     unterminated style block")
        for binding in getattr(pattern, "dynamic_bindings", []):
            lines.append(f"     dynamic: {binding}")
        for ref in getattr(pattern, "external_theme_refs", []):
            lines.append(f"     theme:   {ref}")
        for variant in getattr(pattern, "variants", []):
            kind = "dynamic" if variant.is_dynamic else ", ".join(v.name for v in variant.values)
            lines.append(f"     variant {variant.name}: {kind}")
        for attr in getattr(pattern, "dynamic_attributes", []):
            lines.append(f"     dynamic: {attr.name}={{{attr.raw_value}}}")
    if result.tokens:
        lines.append("")
        lines.append(f"  tokens: {', '.join(result.tokens)}")
    lines.append("")
    s = result.summary
    return "\n".join(lines + _footer(
        f"Total {s.total} | auto {s.auto} | ai-assisted {s.ai_assisted} | manual {s.manual}"
    ))


def conversion_report(output: ConversionOutput) -> str:
    lines = _header("NativeWind Conversion")
    for item in output.conversions:
        lines.append(f"  ✅ line {item.line_number} [{item.kind}, {item.confidence}]")
        lines.extend(f"     {line}" for line in item.converted.splitlines())
        lines.append("")
    for item in output.skipped:
        lines.append(f"  ⏭️  line {item.line_number}: {item.reason}")
        lines.append(f"     → {item.suggested_approach}")
        lines.append("")
    return "\n".join(lines + _footer(
        f"Converted: {len(output.conversions)} | Skipped: {len(output.skipped)}"
    ))


def token_report(result: TokenMappingResult) -> str:
    if not result.found:
        return f"❌ {result.token}: {result.notes or 'no mapping'}"
    lines = [f"✅ {result.token} → {result.utility_class}  ({result.category}, {result.raw_value})"]
    if result.is_legacy:
        lines.append("   legacy token")
    if result.requires_custom_config:
        lines.append("   requires tailwind.config extension")
    if result.suggested_migration:
        lines.append(f"   suggested: {result.suggested_migration}")
    if result.notes:
        lines.append(f"   note: {result.notes}")
    return "\n".join(lines)


def migration_report(spec: MigrationSpec) -> str:
    lines = _header(f"Migration: {spec.approach} ({spec.analysis.pattern_type})")
    if spec.imports:
        lines.extend(f"  {imp}" for imp in spec.imports)
        lines.append("")
    if spec.class_names:
        lines.append(f"  classes: {' '.join(spec.class_names)}")
    if spec.analysis.dynamic_dependencies:
        lines.append(f"  depends on: {', '.join(spec.analysis.dynamic_dependencies)}")
    if spec.generated_config:
        lines.append("")
        lines.extend(f"  {line}" for line in spec.generated_config.splitlines())
    lines.append("")
    lines.extend(f"  {line}" for line in spec.example.splitlines())
    lines.append("")
    for warning in spec.warnings:
        lines.append(f"  ⚠️  {warning}")
    return "\n".join(lines + _footer(f"Warnings: {len(spec.warnings)}"))


def batch_report(result: BatchResult) -> str:
    lines = _header("Batch Analysis")
    s = result.summary
    lines.append(f"  files visited: {result.total_files}  analyzed: {result.analyzed}")
    lines.append(f"  fully auto:    {s.fully_auto_convertible}")
    lines.append(f"  partially:     {s.partially_auto_convertible}")
    lines.append(f"  manual:        {s.manual_required}")
    lines.append("")
    for key, stats in result.by_pattern.items():
        lines.append(f"  {key}: {stats.files} files, {stats.occurrences} occurrences")
    if result.token_usage:
        lines.append("")
        top = sorted(result.token_usage.items(), key=lambda kv: (-kv[1], kv[0]))[:10]
        for token, count in top:
            lines.append(f"  {count:>4}  {token}")
    if result.complex_cases:
        lines.append("")
        for case in result.complex_cases:
            lines.append(f"  ⚠️  {case.file_path}")
            lines.append(f"     {case.reason}")
    for path in result.skipped_files:
        lines.append(f"  ❌ unreadable: {path}")
    lines.append("")
    return "\n".join(lines + _footer(f"Complex cases: {len(result.complex_cases)}"))
