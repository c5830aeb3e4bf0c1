"""
資料模型：樣式 pattern、轉換結果、token 對應與分析彙總

所有紀錄皆為建構後即回傳的值物件；JSON 輸出使用 camelCase key。
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Optional, Union

StyleValue = Union[str, int, float]


@dataclass(frozen=True)
class SourceLocation:
    """1-based 行號與欄位."""
    line: int
    column: int


@dataclass
class StyleProperty:
    name: str
    raw_value: StyleValue
    is_static: bool
    dependencies: Optional[list] = None
    token: Optional[str] = None


@dataclass
class PassthroughAttribute:
    name: str
    raw_value: str


# ─── Patterns ────────────────────────────────────────────────────────────────

@dataclass
class TemplatePattern:
    """styled-components：`styled.View` / `styled(Base)` + template literal."""
    kind = "styled-component"

    component_name: str
    base_element_name: str
    properties: list
    dynamic_bindings: list
    external_theme_refs: list
    location: SourceLocation
    raw_text: str
    parse_failed: bool = False

    @property
    def is_auto_convertible(self) -> bool:
        return (
            not self.parse_failed
            and not self.dynamic_bindings
            and not self.external_theme_refs
            and all(p.is_static for p in self.properties)
        )


@dataclass
class VariantValue:
    name: str
    styles: dict


@dataclass
class Variant:
    name: str
    values: list
    is_dynamic: bool


@dataclass
class DeclarativePattern:
    """Tamagui：`styled(Base, { ... })`，可含 variants 區塊."""
    kind = "tamagui"

    component_name: str
    base_component_name: str
    static_styles: dict
    variants: list
    location: SourceLocation
    raw_text: str
    dynamic_bindings: list = field(default_factory=list)
    dynamic_styles: dict = field(default_factory=dict)  # key → 動態原始值
    parse_failed: bool = False

    @property
    def has_dynamic_variants(self) -> bool:
        return any(v.is_dynamic for v in self.variants)

    @property
    def is_auto_convertible(self) -> bool:
        return not self.parse_failed and not self.dynamic_bindings and not self.variants


@dataclass
class InlineAttributePattern:
    """ui-core：以 JSX 屬性表達樣式的 `<XStack gap={4}>`."""
    kind = "ui-core"

    tag_name: str
    style_attributes: list
    passthrough_attributes: list
    location: SourceLocation
    raw_text: str
    parse_failed: bool = False

    @property
    def dynamic_attributes(self) -> list:
        return [a for a in self.style_attributes if not a.is_static]

    @property
    def is_auto_convertible(self) -> bool:
        return not self.parse_failed and not self.dynamic_attributes


Pattern = Union[TemplatePattern, DeclarativePattern, InlineAttributePattern]


# ─── Token mapping ───────────────────────────────────────────────────────────

@dataclass
class TokenMappingResult:
    token: str
    utility_class: Optional[str]
    raw_value: str
    category: str
    is_legacy: bool = False
    requires_custom_config: bool = False
    notes: Optional[str] = None
    suggested_migration: Optional[str] = None
    utilities: Optional[list] = None

    @property
    def found(self) -> bool:
        return self.utility_class is not None


# ─── Conversion output ───────────────────────────────────────────────────────

@dataclass
class ConversionResult:
    original: str
    converted: str
    confidence: str
    line_number: int
    kind: str


@dataclass
class SkippedConversion:
    code: str
    reason: str
    line_number: int
    suggested_approach: str


@dataclass
class ConversionOutput:
    conversions: list = field(default_factory=list)
    skipped: list = field(default_factory=list)

    def extend(self, other: "ConversionOutput") -> None:
        self.conversions.extend(other.conversions)
        self.skipped.extend(other.skipped)

    def sort(self) -> None:
        self.conversions.sort(key=lambda c: c.line_number)
        self.skipped.sort(key=lambda s: s.line_number)


@dataclass
class MigrationAnalysis:
    pattern_type: str
    dynamic_dependencies: list
    conditional_logic: list
    legacy_tokens: Optional[list] = None


@dataclass
class MigrationSpec:
    analysis: MigrationAnalysis
    approach: str
    imports: list
    class_names: list
    dynamic_classes: list
    example: str
    warnings: list
    style_overrides: Optional[str] = None
    generated_config: Optional[str] = None


# ─── Analysis aggregates ─────────────────────────────────────────────────────

@dataclass
class AnalysisSummary:
    total: int
    auto: int
    ai_assisted: int
    manual: int


@dataclass
class AnalysisResult:
    file: str
    template: list
    declarative: list
    inline: list
    summary: AnalysisSummary
    tokens: list

    @property
    def all_patterns(self) -> list:
        return [*self.template, *self.declarative, *self.inline]


@dataclass
class PatternStats:
    files: int = 0
    occurrences: int = 0


@dataclass
class ComplexCase:
    file_path: str
    reason: str


@dataclass
class BatchSummary:
    fully_auto_convertible: int = 0
    partially_auto_convertible: int = 0
    manual_required: int = 0


@dataclass
class BatchResult:
    total_files: int
    analyzed: int
    summary: BatchSummary
    by_pattern: dict
    token_usage: dict
    complex_cases: list
    skipped_files: list = field(default_factory=list)


# ─── JSON ────────────────────────────────────────────────────────────────────

def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_jsonable(obj: Any) -> Any:
    """將 dataclass 樹轉成可 json.dump 的結構（欄位名轉 camelCase，dict key 保留原樣）."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        out = {}
        for f in dataclasses.fields(obj):
            value = getattr(obj, f.name)
            if value is None:
                continue
            out[_camel(f.name)] = to_jsonable(value)
        if hasattr(obj, "is_auto_convertible"):
            out["isAutoConvertible"] = obj.is_auto_convertible
        if hasattr(type(obj), "kind") and isinstance(getattr(type(obj), "kind"), str):
            out["kind"] = obj.kind
        return out
    if isinstance(obj, dict):
        return {k: to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    return obj
