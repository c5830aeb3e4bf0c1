"""
cva 產生器：Tamagui variants → class-variance-authority 設定

靜態 variant 展開成 base classes + 每個 value 一組 class 字串；
函式型 variant 只產生警告，不產生程式碼。
"""

import re
from typing import Optional

from .converter import StyleConverter, target_element
from .patterns import DeclarativePattern, MigrationAnalysis, MigrationSpec

CVA_IMPORT = 'import { cva, type VariantProps } from "class-variance-authority"'

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_][\w]*$")


def variants_variable(component_name: str) -> str:
    """StyledInput → styledInputVariants."""
    return component_name[:1].lower() + component_name[1:] + "Variants"


def _js_key(name: str) -> str:
    return name if _JS_IDENTIFIER.match(name) else f'"{name}"'


def render_cva(variable: str, base_classes: list, variants: dict) -> str:
    lines = [
        f"const {variable} = cva(",
        f'  "{" ".join(base_classes)}",',
        "  {",
        "    variants: {",
    ]
    for variant_name, values in variants.items():
        lines.append(f"      {_js_key(variant_name)}: {{")
        for value_name, classes in values.items():
            lines.append(f'        {_js_key(value_name)}: "{classes}",')
        lines.append("      },")
    lines.append("    },")
    lines.append("  }")
    lines.append(")")
    return "\n".join(lines)


def render_example(pattern: DeclarativePattern, variable: str, variant_names: list) -> str:
    element = target_element(pattern.base_component_name)
    component = pattern.component_name
    names = ", ".join(variant_names)
    params = f"{names}, children, ...props" if names else "children, ...props"
    lines = []
    if variant_names:
        lines.append(
            f"type {component}Props = VariantProps<typeof {variable}> & {{ children?: React.ReactNode }}"
        )
        lines.append("")
    lines.extend([
        f"function {component}({{ {params} }}: {component}Props) {{",
        "  return (",
        f"    <{element}",
        f"      className={{{variable}({{ {names} }})}}",
        "      {...props}",
        "    >",
        "      {children}",
        f"    </{element}>",
        "  )",
        "}",
    ])
    return "\n".join(lines)


def generate_cva_config(pattern: DeclarativePattern, converter: Optional[StyleConverter] = None) -> MigrationSpec:
    """把帶 variants 的 Tamagui 定義轉成 cva 設定與範例."""
    converter = converter or StyleConverter()
    warnings = []
    dynamic_dependencies = list(pattern.dynamic_bindings)
    conditional_logic = []

    base_classes, unmapped = converter.classes_for_styles(pattern.static_styles)
    if unmapped:
        warnings.append(f"Unmapped base styles: {', '.join(unmapped)}")
    if pattern.dynamic_bindings:
        warnings.append(
            f"Base styles reference runtime values: {', '.join(pattern.dynamic_bindings)}. Keep them in a style prop."
        )

    variants_config = {}
    for variant in pattern.variants:
        if variant.is_dynamic:
            warnings.append(
                f'Variant "{variant.name}" is dynamic (function-based). Manual conversion required.'
            )
            dynamic_dependencies.append(variant.name)
            continue
        variants_config[variant.name] = {}
        for value in variant.values:
            classes, missing = converter.classes_for_styles(value.styles)
            if missing:
                warnings.append(f"Unmapped styles in {variant.name}={value.name}: {', '.join(missing)}")
            variants_config[variant.name][value.name] = " ".join(classes)
            conditional_logic.append(f"{variant.name}={value.name}")

    variable = variants_variable(pattern.component_name)
    return MigrationSpec(
        analysis=MigrationAnalysis(
            pattern_type="tamagui-styled-with-variants",
            dynamic_dependencies=dynamic_dependencies,
            conditional_logic=conditional_logic,
        ),
        approach="cva",
        imports=[CVA_IMPORT],
        class_names=base_classes,
        dynamic_classes=list(variants_config),
        example=render_example(pattern, variable, list(variants_config)),
        warnings=warnings,
        generated_config=render_cva(variable, base_classes, variants_config),
    )
