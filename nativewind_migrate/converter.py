"""
Converters — pattern → NativeWind className 片段或略過紀錄

每個 pattern 只有兩種結果：轉換成功（ConversionResult）或略過（SkippedConversion，
附上阻擋原因與建議做法）。本層不做檔案以外的 I/O，也不修改傳入的 pattern。
"""

from pathlib import Path
from typing import Iterable, Optional

from .patterns import (
    ConversionOutput,
    ConversionResult,
    DeclarativePattern,
    InlineAttributePattern,
    SkippedConversion,
    TemplatePattern,
)
from .rules import (
    COLOR_PREFIXES,
    RADIUS_PREFIXES,
    SIZING_PREFIXES,
    SPACING_PREFIXES,
    RuleEngine,
    default_engine,
    join_utility,
)
from .styled_components import parse_styled_components
from .tamagui import parse_tamagui
from .token_resolver import TokenResolver, default_resolver
from .typography_tokens import DEFAULT_LOCALE
from .ui_core import parse_ui_core

# 原元件 → React Native 元素
TARGET_ELEMENTS = {
    "XStack": "View",
    "YStack": "View",
    "Stack": "View",
    "Typography": "Text",
    "Button": "TouchableOpacity",
    "View": "View",
    "Text": "Text",
    "Image": "Image",
    "TouchableOpacity": "TouchableOpacity",
    "Pressable": "Pressable",
    "ScrollView": "ScrollView",
    "TextInput": "TextInput",
}

UTILITY_PREFIXES = {**SPACING_PREFIXES, **SIZING_PREFIXES, **COLOR_PREFIXES, **RADIUS_PREFIXES}

# 屬性 → token 類別；不在表內的屬性交給 RuleEngine
TOKEN_CATEGORIES = {
    **{name: "spacing" for name in SPACING_PREFIXES},
    **{name: "spacing" for name in SIZING_PREFIXES},
    **{name: "color" for name in COLOR_PREFIXES},
    **{name: "radius" for name in RADIUS_PREFIXES},
    "fontFamily": "typography",
}

# 略過原因 → 建議做法
SKIP_APPROACHES = {
    "dynamic-bindings": "Use clsx for conditional classes or style prop for computed values",
    "dynamic-values": "Use clsx for conditional classes or style prop for computed values",
    "theme-refs": "Theme references need CSS variables or context-based styling",
    "static-variants": "Use cva (class-variance-authority) for variant-based styling",
    "dynamic-variants": "Function-based variants need manual conversion to computed classes or style props",
    "unterminated": "Style block could not be parsed; migrate this definition manually",
}


def target_element(name: str) -> str:
    return TARGET_ELEMENTS.get(name, "View")


def blocking_reasons(pattern) -> list:
    """回傳 [(cause, reason)]：哪些綁定、theme 參照或 variants 阻擋了自動轉換."""
    if pattern.parse_failed:
        return [("unterminated", "Unterminated style block; could not parse")]

    reasons = []
    if isinstance(pattern, TemplatePattern):
        if pattern.dynamic_bindings:
            reasons.append(("dynamic-bindings", f"Has dynamic props: {', '.join(pattern.dynamic_bindings)}"))
        elif any(not p.is_static for p in pattern.properties):
            names = [p.name for p in pattern.properties if not p.is_static]
            reasons.append(("dynamic-values", f"Has dynamic values: {', '.join(names)}"))
        if pattern.external_theme_refs:
            reasons.append(("theme-refs", f"Uses theme references: {', '.join(pattern.external_theme_refs)}"))
    elif isinstance(pattern, DeclarativePattern):
        if pattern.dynamic_bindings:
            reasons.append(("dynamic-bindings", f"Has dynamic props: {', '.join(pattern.dynamic_bindings)}"))
        dynamic = [v.name for v in pattern.variants if v.is_dynamic]
        static = [v.name for v in pattern.variants if not v.is_dynamic]
        if dynamic:
            reasons.append(("dynamic-variants", f"Has dynamic variants: {', '.join(dynamic)}"))
        if static:
            reasons.append(("static-variants", f"Has variants: {', '.join(static)}"))
    elif isinstance(pattern, InlineAttributePattern):
        deps = []
        for attr in pattern.dynamic_attributes:
            deps.extend(attr.dependencies or [attr.name])
        if deps:
            reasons.append(("dynamic-bindings", f"Has dynamic props: {', '.join(dict.fromkeys(deps))}"))
    return reasons


def _skipped(pattern, line: int) -> SkippedConversion:
    reasons = blocking_reasons(pattern)
    approaches = dict.fromkeys(SKIP_APPROACHES[cause] for cause, _ in reasons)
    return SkippedConversion(
        code=pattern.raw_text,
        reason="; ".join(reason for _, reason in reasons),
        line_number=line,
        suggested_approach="; ".join(approaches),
    )


def _render_static_attribute(name: str, value) -> str:
    if isinstance(value, str):
        return f'{name}="{value}"'
    return f"{name}={{{value}}}"


def _render_passthrough(attr) -> str:
    if attr.name == "...":
        return f"{{...{attr.raw_value}}}"
    if attr.raw_value == "true":
        return attr.name
    return f"{attr.name}={attr.raw_value}"


class StyleConverter:
    """以 RuleEngine + TokenResolver 把 pattern 轉成 className."""

    def __init__(
        self,
        resolver: Optional[TokenResolver] = None,
        engine: Optional[RuleEngine] = None,
        locale: str = DEFAULT_LOCALE,
    ):
        self.resolver = resolver or default_resolver()
        self.engine = engine or default_engine()
        self.locale = locale

    # ─── 單一屬性 ────────────────────────────────────────────────────────────

    def classes_for(self, name: str, value) -> list:
        """單一屬性 → class 清單（字體 token 可能展開成多個 class）；無對應回傳 []."""
        if isinstance(value, str) and value.startswith("$"):
            category = TOKEN_CATEGORIES.get(name)
            if category:
                result = self.resolver.resolve(value, category=category, locale=self.locale)
                if result.found:
                    if category == "typography":
                        return list(result.utilities or result.utility_class.split())
                    return [join_utility(UTILITY_PREFIXES[name], result.utility_class)]
        converted = self.engine.convert(name, value)
        return [converted] if converted else []

    def classes_for_styles(self, styles: dict) -> tuple:
        """styles → (classes, unmapped 屬性名稱)."""
        classes = []
        unmapped = []
        for name, value in styles.items():
            found = self.classes_for(name, value)
            if found:
                classes.extend(found)
            else:
                unmapped.append(name)
        return list(dict.fromkeys(classes)), unmapped

    # ─── 各 pattern ──────────────────────────────────────────────────────────

    def _replacement(self, pattern, component: str, base: str, styles: dict) -> ConversionResult:
        classes, unmapped = self.classes_for_styles(styles)
        lines = [f"// Replace {component} with:"]
        if unmapped:
            lines.append(f"// Unmapped: {', '.join(unmapped)}")
        lines.append(f'<{target_element(base)} className="{" ".join(classes)}">')
        if not classes:
            confidence = "low"
        elif unmapped:
            confidence = "medium"
        else:
            confidence = "high"
        return ConversionResult(
            original=pattern.raw_text,
            converted="\n".join(lines),
            confidence=confidence,
            line_number=pattern.location.line,
            kind=pattern.kind,
        )

    def convert_styled_component(self, pattern: TemplatePattern) -> ConversionOutput:
        output = ConversionOutput()
        if not pattern.is_auto_convertible:
            output.skipped.append(_skipped(pattern, pattern.location.line))
            return output
        styles = {p.name: p.raw_value for p in pattern.properties}
        output.conversions.append(
            self._replacement(pattern, pattern.component_name, pattern.base_element_name, styles)
        )
        return output

    def convert_tamagui_styled(self, pattern: DeclarativePattern) -> ConversionOutput:
        output = ConversionOutput()
        if not pattern.is_auto_convertible:
            output.skipped.append(_skipped(pattern, pattern.location.line))
            return output
        output.conversions.append(
            self._replacement(
                pattern, pattern.component_name, pattern.base_component_name, pattern.static_styles
            )
        )
        return output

    def convert_ui_core_props(self, pattern: InlineAttributePattern) -> ConversionOutput:
        """靜態屬性 → className；動態屬性搬到 style={{...}}（medium 信心）."""
        output = ConversionOutput()
        if pattern.parse_failed:
            output.skipped.append(_skipped(pattern, pattern.location.line))
            return output

        classes = []
        kept = []
        for attr in pattern.style_attributes:
            if not attr.is_static:
                continue
            found = self.classes_for(attr.name, attr.token or attr.raw_value)
            if found:
                classes.extend(found)
            else:
                kept.append(_render_static_attribute(attr.name, attr.raw_value))

        style_entries = [f"{a.name}: {a.raw_value}" for a in pattern.dynamic_attributes]
        existing = next((a for a in pattern.passthrough_attributes if a.name == "style"), None)
        others = [a for a in pattern.passthrough_attributes if a.name != "style"]

        style_attr = ""
        if style_entries and existing:
            inner = existing.raw_value.strip()[1:-1].strip()
            style_attr = f"style={{[{{ {', '.join(style_entries)} }}, {inner}]}}"
        elif style_entries:
            style_attr = f"style={{{{ {', '.join(style_entries)} }}}}"
        elif existing:
            style_attr = f"style={existing.raw_value}"

        class_attr = f'className="{" ".join(dict.fromkeys(classes))}"' if classes else ""
        attrs = [class_attr, style_attr, *kept, *(_render_passthrough(a) for a in others)]
        rendered = " ".join(a for a in attrs if a)

        confidence = "medium" if style_entries or kept else "high"
        output.conversions.append(
            ConversionResult(
                original=pattern.raw_text,
                converted=f"<{target_element(pattern.tag_name)}{' ' + rendered if rendered else ''}>",
                confidence=confidence,
                line_number=pattern.location.line,
                kind=pattern.kind,
            )
        )
        return output

    def convert_pattern(self, pattern) -> ConversionOutput:
        if isinstance(pattern, TemplatePattern):
            return self.convert_styled_component(pattern)
        if isinstance(pattern, DeclarativePattern):
            return self.convert_tamagui_styled(pattern)
        if isinstance(pattern, InlineAttributePattern):
            return self.convert_ui_core_props(pattern)
        raise TypeError(f"unsupported pattern: {type(pattern).__name__}")

    # ─── 整份原始碼 ──────────────────────────────────────────────────────────

    def convert_source(self, source: str, components: Optional[Iterable[str]] = None) -> ConversionOutput:
        output = ConversionOutput()
        patterns = [
            *parse_styled_components(source),
            *parse_tamagui(source),
            *parse_ui_core(source, components),
        ]
        for pattern in patterns:
            output.extend(self.convert_pattern(pattern))
        output.sort()
        return output


def _default_converter() -> StyleConverter:
    return StyleConverter()


def convert_styled_component(pattern: TemplatePattern) -> ConversionOutput:
    return _default_converter().convert_styled_component(pattern)


def convert_tamagui_styled(pattern: DeclarativePattern) -> ConversionOutput:
    return _default_converter().convert_tamagui_styled(pattern)


def convert_ui_core_props(pattern: InlineAttributePattern) -> ConversionOutput:
    return _default_converter().convert_ui_core_props(pattern)


def convert_source(source: str, components: Optional[Iterable[str]] = None) -> ConversionOutput:
    """解析整份原始碼並轉換所有 pattern；結果依行號排序."""
    return _default_converter().convert_source(source, components)


def convert_file(path: str, components: Optional[Iterable[str]] = None) -> ConversionOutput:
    source = Path(path).read_text(encoding="utf-8")
    return convert_source(source, components)
