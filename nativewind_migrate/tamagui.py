"""
Tamagui 解析器

辨識 `const X = styled(Base, { ... })`：最外層 key/value 為靜態樣式，
`variants` 區塊展開成 Variant / VariantValue。巢狀樣式物件（hoverStyle、pressStyle…）
不進入 static_styles。
"""

import re
from typing import Optional

from .expression import classify_expression
from .extractor import (
    UnterminatedBlockError,
    extract_balanced,
    find_top_level,
    location_at,
    split_top_level,
)
from .patterns import DeclarativePattern, Variant, VariantValue

TAMAGUI_HEADER = re.compile(r"const\s+(\w+)\s*=\s*styled\s*\(\s*(\w+)\s*,\s*\{")

# 不屬於樣式的設定 key
CONFIG_KEYS = frozenset({"name", "variants", "defaultVariants"})

_NUMBER = re.compile(r"^-?\d+(?:\.\d+)?$")
_QUOTED = re.compile(r"^(['\"])((?:\\.|(?!\1).)*)\1$", re.DOTALL)
_NO_VALUE = object()


def literal_value(raw: str):
    """字面值轉成 Python 值：字串去引號、數字轉 int/float；非字面值回傳 _NO_VALUE."""
    raw = raw.strip()
    quoted = _QUOTED.match(raw)
    if quoted:
        return quoted.group(2)
    if _NUMBER.match(raw):
        return float(raw) if "." in raw else int(raw)
    if raw in ("true", "false"):
        return raw
    return _NO_VALUE


def _split_entry(entry: str) -> tuple:
    """`key: value` → (key, value)；簡寫屬性或展開運算回傳 (entry, None)."""
    colon = find_top_level(entry, ":")
    if colon == -1:
        return entry, None
    key = entry[:colon].strip()
    quoted = _QUOTED.match(key)
    if quoted:
        key = quoted.group(2)
    return key, entry[colon + 1:].strip()


def _object_entries(obj_text: str) -> list:
    """`{ a: 1, b: { ... } }` → [(key, raw_value), ...]."""
    return [_split_entry(e) for e in split_top_level(obj_text.strip()[1:-1])]


def parse_style_object(obj_text: str) -> dict:
    """variant value-group 內的樣式物件：字面值保留，巢狀物件略過，其餘保留原文."""
    styles = {}
    for key, raw in _object_entries(obj_text):
        if raw is None or raw.startswith("{"):
            continue
        value = literal_value(raw)
        styles[key] = raw if value is _NO_VALUE else value
    return styles


def parse_variants(obj_text: str) -> list:
    variants = []
    for name, raw in _object_entries(obj_text):
        if raw is None:
            continue
        if not raw.startswith("{") or "=>" in raw:
            # 函式型 variant：只記錄，不展開
            variants.append(Variant(name=name, values=[], is_dynamic=True))
            continue
        values = []
        for value_name, group in _object_entries(raw):
            if group is None:
                continue
            if group.startswith("{"):
                values.append(VariantValue(name=value_name, styles=parse_style_object(group)))
            else:
                values.append(VariantValue(name=value_name, styles={}))
        variants.append(Variant(name=name, values=values, is_dynamic=False))
    return variants


def parse_config_object(obj_text: str) -> tuple:
    """解析 styled() 的第二個參數.

    Returns: (static_styles, variants, dynamic_bindings, dynamic_styles)
    """
    static_styles = {}
    dynamic_styles = {}
    variants = []
    bindings = []

    for key, raw in _object_entries(obj_text):
        if raw is None:
            # `...baseStyle` 或簡寫屬性：引用外部值
            name = key[3:] if key.startswith("...") else key
            bindings.append(name.strip())
            continue
        if key == "variants":
            if raw.startswith("{"):
                variants = parse_variants(raw)
            continue
        if key in CONFIG_KEYS or raw.startswith("{"):
            continue

        value = literal_value(raw)
        if value is not _NO_VALUE:
            static_styles[key] = value
            continue
        classification = classify_expression(raw)
        if classification.is_static:
            static_styles[key] = raw
        else:
            dynamic_styles[key] = raw
            bindings.extend(classification.dependencies)

    return static_styles, variants, list(dict.fromkeys(bindings)), dynamic_styles


def _parse_match(source: str, match) -> DeclarativePattern:
    brace = match.end() - 1
    location = location_at(source, match.start())
    obj_text: Optional[str] = extract_balanced(source, brace)

    if obj_text is not None:
        try:
            static_styles, variants, bindings, dynamic_styles = parse_config_object(obj_text)
        except UnterminatedBlockError:
            obj_text = None

    if obj_text is None:
        return DeclarativePattern(
            component_name=match.group(1),
            base_component_name=match.group(2),
            static_styles={},
            variants=[],
            location=location,
            raw_text=source[match.start():match.end()],
            parse_failed=True,
        )

    end = brace + len(obj_text)
    close = source.find(")", end)
    if close != -1 and not source[end:close].strip(" \t\n,"):
        end = close + 1
    return DeclarativePattern(
        component_name=match.group(1),
        base_component_name=match.group(2),
        static_styles=static_styles,
        variants=variants,
        location=location,
        raw_text=source[match.start():end],
        dynamic_bindings=bindings,
        dynamic_styles=dynamic_styles,
    )


def parse_tamagui(source: str) -> list:
    """找出所有 Tamagui styled(Base, {...}) 定義，依出現順序回傳 DeclarativePattern."""
    return [_parse_match(source, m) for m in TAMAGUI_HEADER.finditer(source)]
