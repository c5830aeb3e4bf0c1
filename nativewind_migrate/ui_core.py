"""
ui-core 解析器

ui-core 以 JSX 屬性表達樣式：`<XStack alignItems="center" gap={4}>`。
標籤一路掃到對應的 `>` / `/>`（大括號與引號內的 `>` 不算），
屬性分成樣式屬性與 passthrough（事件、children、style、展開…）。
"""

import re
from typing import Iterable, Optional

from .expression import classify_expression
from .extractor import extract_balanced, location_at, skip_string
from .patterns import InlineAttributePattern, PassthroughAttribute, StyleProperty

UI_CORE_COMPONENTS = ("XStack", "YStack", "Stack", "Typography", "Image", "Button")

NON_STYLE_PROPS = frozenset({
    "children",
    "key",
    "ref",
    "testID",
    "disabled",
    "source",
    "variant",
    "asChild",
    "style",
    "className",
    "nativeID",
    "numberOfLines",
    "resizeMode",
})

_ATTR_NAME = re.compile(r"[A-Za-z_$][\w$:.-]*")
_NUMBER = re.compile(r"^-?\d+(?:\.\d+)?$")
_QUOTED = re.compile(r"^(['\"`])((?:\\.|(?!\1).)*)\1$", re.DOTALL)


def is_passthrough(name: str) -> bool:
    if name in NON_STYLE_PROPS or name == "...":
        return True
    if name.startswith("accessibility") or name.startswith(("aria-", "data-")):
        return True
    return len(name) > 2 and name.startswith("on") and name[2].isupper()


def _scan_tag(source: str, start: int) -> Optional[int]:
    """從標籤名稱之後掃到結尾 `>`，回傳其位置；未結束回傳 None."""
    i = start
    n = len(source)
    while i < n:
        ch = source[i]
        if ch in "'\"":
            end = skip_string(source, i)
            if end is None:
                return None
            i = end
            continue
        if ch == "{":
            region = extract_balanced(source, i)
            if region is None:
                return None
            i += len(region)
            continue
        if ch == ">":
            return i
        if ch == "<":
            # 尚未關閉就遇到下一個標籤
            return None
        i += 1
    return None


def _read_attributes(body: str) -> list:
    """把標籤內文切成 [(name, raw_value, kind)]；kind 為 quoted / braced / bare / spread."""
    attrs = []
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch.isspace() or ch == "/":
            i += 1
            continue
        if ch == "{":
            region = extract_balanced(body, i) or body[i:]
            attrs.append(("...", region[1:-1].strip().lstrip(".").strip(), "spread"))
            i += len(region)
            continue
        match = _ATTR_NAME.match(body, i)
        if not match:
            i += 1
            continue
        name = match.group(0)
        i = match.end()
        eq = re.match(r"\s*=\s*", body[i:])
        if not eq:
            attrs.append((name, "true", "bare"))
            continue
        i += eq.end()
        if i < n and body[i] in "'\"":
            end = skip_string(body, i) or n
            attrs.append((name, body[i:end], "quoted"))
            i = end
        elif i < n and body[i] == "{":
            region = extract_balanced(body, i) or body[i:]
            attrs.append((name, region, "braced"))
            i += len(region)
        else:
            attrs.append((name, "", "bare"))
    return attrs


def _style_property(name: str, raw: str, kind: str) -> StyleProperty:
    if kind == "quoted":
        value = raw[1:-1]
        return StyleProperty(
            name=name,
            raw_value=value,
            is_static=True,
            token=value if value.startswith("$") else None,
        )
    if kind == "bare":
        return StyleProperty(name=name, raw_value=raw, is_static=True)

    inner = raw[1:-1].strip()
    if _NUMBER.match(inner):
        number = float(inner) if "." in inner else int(inner)
        return StyleProperty(name=name, raw_value=number, is_static=True)
    quoted = _QUOTED.match(inner)
    if quoted and "${" not in inner:
        value = quoted.group(2)
        return StyleProperty(
            name=name,
            raw_value=value,
            is_static=True,
            token=value if value.startswith("$") else None,
        )
    classification = classify_expression(inner)
    if classification.is_static:
        return StyleProperty(name=name, raw_value=inner, is_static=True)
    return StyleProperty(
        name=name,
        raw_value=inner,
        is_static=False,
        dependencies=classification.dependencies,
    )


def _parse_match(source: str, match) -> InlineAttributePattern:
    tag = match.group(1)
    location = location_at(source, match.start())
    close = _scan_tag(source, match.end())
    if close is None:
        line_end = source.find("\n", match.start())
        return InlineAttributePattern(
            tag_name=tag,
            style_attributes=[],
            passthrough_attributes=[],
            location=location,
            raw_text=source[match.start():line_end if line_end != -1 else len(source)],
            parse_failed=True,
        )

    style_attributes = []
    passthrough = []
    for name, raw, kind in _read_attributes(source[match.end():close]):
        if is_passthrough(name):
            passthrough.append(PassthroughAttribute(name=name, raw_value=raw))
        else:
            style_attributes.append(_style_property(name, raw, kind))

    return InlineAttributePattern(
        tag_name=tag,
        style_attributes=style_attributes,
        passthrough_attributes=passthrough,
        location=location,
        raw_text=source[match.start():close + 1],
    )


def parse_ui_core(source: str, components: Optional[Iterable[str]] = None) -> list:
    """找出 ui-core 元件標籤，依出現順序回傳 InlineAttributePattern.

    components 可覆寫要辨識的標籤名稱（預設 UI_CORE_COMPONENTS）。
    """
    names = tuple(components) if components else UI_CORE_COMPONENTS
    tag_re = re.compile(r"<(" + "|".join(map(re.escape, names)) + r")(?=[\s/>])")
    return [_parse_match(source, m) for m in tag_re.finditer(source)]
