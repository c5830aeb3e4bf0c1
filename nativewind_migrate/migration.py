"""
Migration-Spec 產生器

依程式碼片段中第一個需要處理的 pattern 選擇遷移做法：
  Tamagui + variants        → cva
  Tamagui 動態基礎值         → style-prop-hybrid
  styled-components 動態 props → clsx
  styled-components theme 參照 → className-only（附警告）
  ui-core 動態屬性           → style-prop-hybrid
  全部靜態                   → className-only
"""

import re
from typing import Iterable, Optional

from .converter import StyleConverter, target_element
from .cva_generator import generate_cva_config
from .legacy_tokens import LEGACY_COLORS, LEGACY_REF_IN_SOURCE
from .patterns import MigrationAnalysis, MigrationSpec
from .styled_components import parse_styled_components
from .tamagui import parse_tamagui
from .ui_core import parse_ui_core

CLSX_IMPORT = 'import clsx from "clsx"'

_BARE_LEGACY_COLOR = re.compile(r"\bcolors\.(\w+)")


def find_legacy_tokens(code: str) -> list:
    """片段中出現的舊主題參照（theme.main.colors.* / theme.fonts.* / colors.<legacy>）."""
    found = [m.group(0) for m in LEGACY_REF_IN_SOURCE.finditer(code)]
    for m in _BARE_LEGACY_COLOR.finditer(code):
        start = m.start()
        if code[max(0, start - 5):start] == "main." or m.group(1) not in LEGACY_COLORS:
            continue
        found.append(m.group(0))
    return list(dict.fromkeys(found))


def _legacy_warnings(tokens: list, converter: StyleConverter) -> list:
    warnings = []
    for token in tokens:
        result = converter.resolver.resolve(token, locale=converter.locale)
        if result.suggested_migration:
            warnings.append(f"Legacy token {token} → migrate to {result.suggested_migration}")
        elif result.found:
            warnings.append(f"Legacy token {token} maps to {result.utility_class} (custom config required)")
        else:
            warnings.append(f"Legacy token {token} has no registered mapping")
    return warnings


def _static_classes(properties, converter: StyleConverter) -> list:
    classes = []
    for prop in properties:
        if prop.is_static:
            classes.extend(converter.classes_for(prop.name, prop.token or prop.raw_value))
    return list(dict.fromkeys(classes))


def _template_migration(pattern, converter: StyleConverter) -> MigrationSpec:
    classes = _static_classes(pattern.properties, converter)
    element = target_element(pattern.base_element_name)
    dynamic_props = [p for p in pattern.properties if not p.is_static]
    warnings = []
    if pattern.external_theme_refs:
        warnings.append(
            f"Theme references found: {', '.join(pattern.external_theme_refs)}. "
            "Consider using CSS variables or NativeWind theme tokens."
        )

    if not pattern.dynamic_bindings:
        if not pattern.external_theme_refs:
            names = ", ".join(p.name for p in dynamic_props)
            warnings.append(f"Interpolated values without props: {names}. Keep them in a style prop.")
        return MigrationSpec(
            analysis=MigrationAnalysis(
                pattern_type=(
                    "styled-component-with-theme-refs"
                    if pattern.external_theme_refs
                    else "styled-component-with-dynamic-values"
                ),
                dynamic_dependencies=[],
                conditional_logic=[],
            ),
            approach="className-only",
            imports=[],
            class_names=classes,
            dynamic_classes=[],
            example=f'<{element} className="{" ".join(classes)}">',
            warnings=warnings,
        )

    bindings = pattern.dynamic_bindings
    conditions = ",\n        ".join(f'{name} && "conditional-class"' for name in bindings)
    example = "\n".join([
        f"function {pattern.component_name}({{ {', '.join(bindings)}, ...props }}) {{",
        "  return (",
        f"    <{element}",
        "      className={clsx(",
        f'        "{" ".join(classes)}",',
        "        // Add conditional classes based on props",
        f"        {conditions}",
        "      )}",
        "      {...props}",
        "    />",
        "  )",
        "}",
    ])
    return MigrationSpec(
        analysis=MigrationAnalysis(
            pattern_type="styled-component-with-dynamic-props",
            dynamic_dependencies=list(bindings),
            conditional_logic=[f"{p.name}: {p.raw_value}" for p in dynamic_props],
        ),
        approach="clsx",
        imports=[CLSX_IMPORT],
        class_names=classes,
        dynamic_classes=list(bindings),
        example=example,
        warnings=warnings,
    )


def _inline_migration(pattern, converter: StyleConverter) -> MigrationSpec:
    dynamic = pattern.dynamic_attributes
    classes = _static_classes(pattern.style_attributes, converter)
    element = target_element(pattern.tag_name)

    dependencies = []
    hints = []
    for attr in dynamic:
        dependencies.extend(attr.dependencies or [])
        value = str(attr.raw_value)
        if "?" in value and ":" in value:
            hints.append(f"// {attr.name}: {value} -> use clsx with ternary")
        else:
            hints.append(f"// {attr.name}: dynamic value - keep as style prop")

    style_entries = ", ".join(f"{a.name}: {a.raw_value}" for a in dynamic)
    example = "\n".join([
        f"<{element}",
        "  className={clsx(",
        f'    "{" ".join(classes)}",',
        *(f"    {hint}" for hint in hints),
        "  )}",
        "  // Keep truly dynamic values as style prop:",
        f"  style={{{{ {style_entries} }}}}",
        "/>",
    ])
    return MigrationSpec(
        analysis=MigrationAnalysis(
            pattern_type="ui-core-with-dynamic-props",
            dynamic_dependencies=list(dict.fromkeys(dependencies)),
            conditional_logic=[f"{a.name}: {a.raw_value}" for a in dynamic],
        ),
        approach="style-prop-hybrid",
        imports=[CLSX_IMPORT],
        class_names=classes,
        dynamic_classes=[a.name for a in dynamic],
        example=example,
        warnings=["Dynamic props detected. Use clsx for conditional classes and style prop for computed values."],
        style_overrides=f"style={{{{ {style_entries} }}}}",
    )


def _declarative_migration(pattern, converter: StyleConverter) -> MigrationSpec:
    """Tamagui 基礎值含執行期綁定、沒有 variants：靜態值轉 className，其餘留在 style."""
    classes, unmapped = converter.classes_for_styles(pattern.static_styles)
    element = target_element(pattern.base_component_name)
    bindings = pattern.dynamic_bindings
    style_entries = ", ".join(f"{key}: {raw}" for key, raw in pattern.dynamic_styles.items())

    lines = [f"<{element}", f'  className="{" ".join(classes)}"']
    if style_entries:
        lines.append(f"  style={{{{ {style_entries} }}}}")
    lines.append("/>")

    warnings = [f"Dynamic base values depend on: {', '.join(bindings)}. Keep them in a style prop."]
    if unmapped:
        warnings.append(f"Unmapped base styles: {', '.join(unmapped)}")
    return MigrationSpec(
        analysis=MigrationAnalysis(
            pattern_type="tamagui-styled-with-dynamic-values",
            dynamic_dependencies=list(bindings),
            conditional_logic=[f"{key}: {raw}" for key, raw in pattern.dynamic_styles.items()],
        ),
        approach="style-prop-hybrid",
        imports=[],
        class_names=classes,
        dynamic_classes=list(pattern.dynamic_styles),
        example="\n".join(lines),
        warnings=warnings,
        style_overrides=f"style={{{{ {style_entries} }}}}" if style_entries else None,
    )


def _static_migration(patterns: list, converter: StyleConverter) -> MigrationSpec:
    output = converter.convert_pattern(patterns[0])
    classes = []
    example = ""
    if output.conversions:
        example = output.conversions[0].converted
        found = re.search(r'className="([^"]*)"', example)
        if found:
            classes = found.group(1).split()
    return MigrationSpec(
        analysis=MigrationAnalysis(
            pattern_type=f"{patterns[0].kind}-static",
            dynamic_dependencies=[],
            conditional_logic=[],
        ),
        approach="className-only",
        imports=[],
        class_names=classes,
        dynamic_classes=[],
        example=example,
        warnings=[],
    )


def suggest_migration(
    code: str,
    context: Optional[str] = None,
    converter: Optional[StyleConverter] = None,
    components: Optional[Iterable[str]] = None,
) -> MigrationSpec:
    """為程式碼片段產生一份 MigrationSpec；context 會附在範例開頭作為說明."""
    converter = converter or StyleConverter()
    template = parse_styled_components(code)
    declarative = parse_tamagui(code)
    inline = parse_ui_core(code, components)

    with_variants = [p for p in declarative if p.variants]
    dynamic_template = [p for p in template if not p.is_auto_convertible and not p.parse_failed]
    dynamic_declarative = [p for p in declarative if not p.is_auto_convertible and not p.parse_failed]
    dynamic_inline = [p for p in inline if p.dynamic_attributes]

    if with_variants:
        spec = generate_cva_config(with_variants[0], converter)
    elif dynamic_template:
        spec = _template_migration(dynamic_template[0], converter)
    elif dynamic_declarative:
        spec = _declarative_migration(dynamic_declarative[0], converter)
    elif dynamic_inline:
        spec = _inline_migration(dynamic_inline[0], converter)
    else:
        convertible = [p for p in (*template, *declarative, *inline) if p.is_auto_convertible]
        if convertible:
            spec = _static_migration(convertible, converter)
        else:
            spec = MigrationSpec(
                analysis=MigrationAnalysis(
                    pattern_type="unknown",
                    dynamic_dependencies=[],
                    conditional_logic=[],
                ),
                approach="className-only",
                imports=[],
                class_names=[],
                dynamic_classes=[],
                example="// Could not determine pattern. Please provide more context.",
                warnings=["Could not parse the provided code snippet"],
            )

    legacy = find_legacy_tokens(code)
    if legacy:
        spec.analysis.legacy_tokens = legacy
        spec.warnings.extend(_legacy_warnings(legacy, converter))
    if context:
        spec.example = f"// Context: {context}\n{spec.example}"
    return spec
