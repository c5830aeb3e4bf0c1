"""
styled-components 解析器

辨識 styled.View`...` 與 styled(Base)`...` 形式的元件定義（可帶 `<Props>` 泛型），
把 template literal 內的 `property: value;` 拆成 StyleProperty。
含 `${...}` 的值視為動態，並收集其依賴與 theme 參照。
"""

import re
from typing import Optional

from .expression import classify_expression
from .extractor import extract_template_literal, find_interpolations, location_at
from .patterns import StyleProperty, TemplatePattern

STYLED_HEADER = re.compile(
    r"const\s+(\w+)\s*=\s*styled"
    r"(?:\.(\w+)(?:<[^>]*>)?|(?:<[^>]*>)?\((\w+)\))"
    r"\s*(?=`)"
)
THEME_REF = re.compile(r"theme\.[A-Za-z_.]+")

_DECLARATION = re.compile(r"^([A-Za-z-]+)\s*:\s*(.+)$", re.DOTALL)
_PLACEHOLDER = re.compile(r"\x00(\d+)\x00")
_TOKEN_VALUE = re.compile(r"^\$[\w.]+$")
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)


def kebab_to_camel(name: str) -> str:
    head, *rest = name.strip().split("-")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _unique(items) -> list:
    return list(dict.fromkeys(items))


def _mask_interpolations(body: str) -> tuple:
    """把 `${...}` 換成佔位符，避免其中的 `;` / `:` / `{` 干擾宣告切分."""
    regions = find_interpolations(body)
    masked = body
    for idx, region in enumerate(regions):
        masked = masked.replace(region, f"\x00{idx}\x00", 1)
    return masked, regions


def _top_level_css(masked: str) -> str:
    """移除巢狀區塊（`&:active { ... }`），只留最外層宣告."""
    out = []
    depth = 0
    for ch in masked:
        if ch == "{":
            depth += 1
            continue
        if ch == "}":
            depth = max(depth - 1, 0)
            out.append(";")
            continue
        if depth == 0:
            out.append(ch)
    return "".join(out)


def _unmask(text: str, regions: list) -> str:
    return _PLACEHOLDER.sub(lambda m: regions[int(m.group(1))], text)


def _placeholder_deps(text: str, regions: list) -> list:
    deps = []
    for m in _PLACEHOLDER.finditer(text):
        deps.extend(classify_expression(regions[int(m.group(1))]).dependencies)
    return _unique(deps)


def parse_template_body(body: str) -> tuple:
    """解析 template literal 內容（不含 backtick）.

    Returns: (properties, dynamic_bindings)
    """
    masked, regions = _mask_interpolations(_BLOCK_COMMENT.sub("", body))
    properties = []
    bindings = []

    for segment in re.split(r"[;\n]", _top_level_css(masked)):
        segment = segment.strip()
        if not segment or segment.startswith("//"):
            continue
        deps = _placeholder_deps(segment, regions)
        bindings.extend(deps)

        match = _DECLARATION.match(segment)
        if not match:
            # 獨立的 `${mixin}`：只貢獻依賴
            continue
        name = kebab_to_camel(match.group(1))
        value = _unmask(match.group(2).strip(), regions)
        if "${" in value:
            properties.append(
                StyleProperty(name=name, raw_value=value, is_static=False, dependencies=deps)
            )
        else:
            token = value if _TOKEN_VALUE.match(value) else None
            properties.append(StyleProperty(name=name, raw_value=value, is_static=True, token=token))

    return properties, _unique(bindings)


def _parse_match(source: str, match) -> TemplatePattern:
    component = match.group(1)
    base = match.group(2) or match.group(3)
    location = location_at(source, match.start())
    literal: Optional[str] = extract_template_literal(source, match.end())

    if literal is None:
        return TemplatePattern(
            component_name=component,
            base_element_name=base,
            properties=[],
            dynamic_bindings=[],
            external_theme_refs=[],
            location=location,
            raw_text=source[match.start():match.end()],
            parse_failed=True,
        )

    body = literal[1:-1]
    properties, bindings = parse_template_body(body)
    theme_refs = _unique(ref.rstrip(".") for ref in THEME_REF.findall(body))
    return TemplatePattern(
        component_name=component,
        base_element_name=base,
        properties=properties,
        dynamic_bindings=bindings,
        external_theme_refs=theme_refs,
        location=location,
        raw_text=source[match.start():match.end() + len(literal)],
    )


def parse_styled_components(source: str) -> list:
    """找出所有 styled-components 定義，依出現順序回傳 TemplatePattern."""
    return [_parse_match(source, m) for m in STYLED_HEADER.finditer(source)]
