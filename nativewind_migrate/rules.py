"""
Rule Engine — React Native 樣式屬性 → NativeWind class

每個屬性一條規則；convert 為純函式，對不認得的值回傳 None（不拋例外）。
數值規則：值恰好在刻度上才輸出刻度 class，否則輸出 `[值]` 任意值 class，不做四捨五入。
"""

from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Callable, NamedTuple, Optional

from .color_tokens import BUILTIN_COLOR_KEYWORDS, DESIGN_COLORS, lookup_color
from .spacing_tokens import (
    FULL_RADIUS_TOKEN,
    RADIUS_TOKEN,
    SPACING_TOKEN,
    format_px,
    parse_number,
    radius_suffix,
    spacing_suffix,
)
from .typography_tokens import FONT_FAMILY_TAILWIND_MAP


class ConversionRule(NamedTuple):
    property_name: str
    convert: Callable[[object], Optional[str]]


# ─── 對照表 ──────────────────────────────────────────────────────────────────

FLEX_DIRECTION = {
    "row": "flex-row",
    "row-reverse": "flex-row-reverse",
    "column": "flex-col",
    "column-reverse": "flex-col-reverse",
}
ALIGN_ITEMS = {
    "flex-start": "items-start",
    "flex-end": "items-end",
    "center": "items-center",
    "baseline": "items-baseline",
    "stretch": "items-stretch",
}
ALIGN_CONTENT = {
    "flex-start": "content-start",
    "flex-end": "content-end",
    "center": "content-center",
    "stretch": "content-stretch",
    "space-between": "content-between",
    "space-around": "content-around",
}
JUSTIFY_CONTENT = {
    "flex-start": "justify-start",
    "flex-end": "justify-end",
    "center": "justify-center",
    "space-between": "justify-between",
    "space-around": "justify-around",
    "space-evenly": "justify-evenly",
}
ALIGN_SELF = {
    "auto": "self-auto",
    "flex-start": "self-start",
    "flex-end": "self-end",
    "center": "self-center",
    "stretch": "self-stretch",
    "baseline": "self-baseline",
}
FLEX_WRAP = {"wrap": "flex-wrap", "nowrap": "flex-nowrap", "wrap-reverse": "flex-wrap-reverse"}
POSITION = {"absolute": "absolute", "relative": "relative"}
DISPLAY = {"flex": "flex", "none": "hidden"}
OVERFLOW = {"visible": "overflow-visible", "hidden": "overflow-hidden", "scroll": "overflow-scroll"}
TEXT_ALIGN = {"left": "text-left", "center": "text-center", "right": "text-right", "justify": "text-justify"}
TEXT_TRANSFORM = {"uppercase": "uppercase", "lowercase": "lowercase", "capitalize": "capitalize", "none": "normal-case"}
TEXT_DECORATION = {
    "underline": "underline",
    "line-through": "line-through",
    "none": "no-underline",
    "underline line-through": "underline line-through",
}
BORDER_STYLE = {"solid": "border-solid", "dashed": "border-dashed", "dotted": "border-dotted"}
FONT_WEIGHT = {
    "100": "font-thin",
    "200": "font-extralight",
    "300": "font-light",
    "400": "font-normal",
    "500": "font-medium",
    "600": "font-semibold",
    "700": "font-bold",
    "800": "font-extrabold",
    "900": "font-black",
    "normal": "font-normal",
    "bold": "font-bold",
}

Z_INDEX_SCALE = {0, 10, 20, 30, 40, 50}
SCALE_SCALE = {0, 50, 75, 90, 95, 100, 105, 110, 125, 150}
BORDER_WIDTH_SCALE = {2: "2", 4: "4", 8: "8"}

SPACING_PREFIXES = {
    "padding": "p",
    "paddingHorizontal": "px",
    "paddingVertical": "py",
    "paddingTop": "pt",
    "paddingBottom": "pb",
    "paddingLeft": "pl",
    "paddingRight": "pr",
    "paddingStart": "ps",
    "paddingEnd": "pe",
    "margin": "m",
    "marginHorizontal": "mx",
    "marginVertical": "my",
    "marginTop": "mt",
    "marginBottom": "mb",
    "marginLeft": "ml",
    "marginRight": "mr",
    "marginStart": "ms",
    "marginEnd": "me",
    "gap": "gap",
    "rowGap": "gap-y",
    "columnGap": "gap-x",
    "top": "top",
    "bottom": "bottom",
    "left": "left",
    "right": "right",
}
SIZING_PREFIXES = {
    "width": "w",
    "height": "h",
    "minWidth": "min-w",
    "maxWidth": "max-w",
    "minHeight": "min-h",
    "maxHeight": "max-h",
}
COLOR_PREFIXES = {
    "backgroundColor": "bg",
    "color": "text",
    "borderColor": "border",
    "borderTopColor": "border-t",
    "borderBottomColor": "border-b",
    "borderLeftColor": "border-l",
    "borderRightColor": "border-r",
}
BORDER_WIDTH_PREFIXES = {
    "borderWidth": "border",
    "borderTopWidth": "border-t",
    "borderBottomWidth": "border-b",
    "borderLeftWidth": "border-l",
    "borderRightWidth": "border-r",
}
RADIUS_PREFIXES = {
    "borderRadius": "rounded",
    "borderTopLeftRadius": "rounded-tl",
    "borderTopRightRadius": "rounded-tr",
    "borderBottomLeftRadius": "rounded-bl",
    "borderBottomRightRadius": "rounded-br",
}


def join_utility(prefix: str, suffix: str) -> str:
    """join_utility('rounded', '') → 'rounded'；join_utility('p', '4') → 'p-4'."""
    return prefix if suffix == "" else f"{prefix}-{suffix}"


def _text(value) -> str:
    return str(value).strip()


def _lookup(table: dict) -> Callable:
    return lambda value: table.get(_text(value))


def _decimal(value) -> Optional[Decimal]:
    try:
        number = Decimal(_text(value).rstrip("%").replace("px", ""))
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _plain(number) -> str:
    if isinstance(number, Decimal):
        number = number.normalize()
        return format(number, "f")
    if isinstance(number, float) and number.is_integer():
        number = int(number)
    return str(number)


# ─── 規則產生器 ──────────────────────────────────────────────────────────────

def _spacing_rule(prefix: str, sizing: bool = False) -> Callable:
    def convert(value) -> Optional[str]:
        text = _text(value)
        if text == "auto":
            return f"{prefix}-auto"
        if text.endswith("%"):
            if sizing and text == "100%":
                return f"{prefix}-full"
            return f"{prefix}-[{text}]"
        token = SPACING_TOKEN.match(text)
        if token:
            px = parse_number(token.group(1))
            return join_utility(prefix, spacing_suffix(px))
        px = parse_number(text)
        if px is None:
            return None
        if px < 0:
            return "-" + join_utility(prefix, spacing_suffix(-px))
        return join_utility(prefix, spacing_suffix(px))
    return convert


def _color_rule(prefix: str, colors: dict) -> Callable:
    def convert(value) -> Optional[str]:
        text = _text(value)
        if text.startswith("$"):
            found = lookup_color(colors, text)
            return join_utility(prefix, found[0]) if found else None
        if text.startswith("#"):
            return f"{prefix}-[{text}]"
        if text.startswith(("rgb(", "rgba(", "hsl(")):
            return f"{prefix}-[{text.replace(' ', '')}]"
        if text in BUILTIN_COLOR_KEYWORDS:
            return join_utility(prefix, text)
        return None
    return convert


def _border_width_rule(prefix: str) -> Callable:
    def convert(value) -> Optional[str]:
        px = parse_number(value)
        if px is None:
            return None
        if px == 0:
            return f"{prefix}-0"
        if px == 1:
            return prefix
        if px in BORDER_WIDTH_SCALE:
            return join_utility(prefix, BORDER_WIDTH_SCALE[px])
        return f"{prefix}-[{format_px(px)}]"
    return convert


def _radius_rule(prefix: str) -> Callable:
    def convert(value) -> Optional[str]:
        text = _text(value)
        if text == FULL_RADIUS_TOKEN:
            return join_utility(prefix, "full")
        token = RADIUS_TOKEN.match(text)
        px = parse_number(token.group(1)) if token else parse_number(text)
        if px is None or px < 0:
            return None
        return join_utility(prefix, radius_suffix(px))
    return convert


def _flex(value) -> Optional[str]:
    number = parse_number(value)
    if number is None:
        return None
    return "flex-1" if number == 1 else f"flex-[{_plain(number)}]"


def _grow_shrink(prefix: str) -> Callable:
    def convert(value) -> Optional[str]:
        number = parse_number(value)
        if number is None:
            return None
        if number == 1:
            return prefix
        if number == 0:
            return f"{prefix}-0"
        return f"{prefix}-[{_plain(number)}]"
    return convert


def _z_index(value) -> Optional[str]:
    number = parse_number(value)
    if number is None:
        return None
    if number in Z_INDEX_SCALE:
        return f"z-{_plain(number)}"
    return f"z-[{_plain(number)}]"


def _opacity(value) -> Optional[str]:
    number = _decimal(value)
    if number is None:
        return None
    text = _text(value)
    percent = number if text.endswith("%") else number * 100
    if 0 <= percent <= 100 and percent == percent.to_integral_value() and int(percent) % 5 == 0:
        return f"opacity-{int(percent)}"
    return f"opacity-[{text}]"


def _aspect_ratio(value) -> Optional[str]:
    text = _text(value).replace(" ", "")
    if "/" in text:
        return f"aspect-[{text}]"
    number = parse_number(text)
    if number is None:
        return None
    if number == 1:
        return "aspect-square"
    return f"aspect-[{_plain(number)}]"


def _font_weight(value) -> Optional[str]:
    return FONT_WEIGHT.get(_text(value))


def _font_family(value) -> Optional[str]:
    return FONT_FAMILY_TAILWIND_MAP.get(_text(value).strip("'\""))


def _px_rule(prefix: str) -> Callable:
    def convert(value) -> Optional[str]:
        px = parse_number(value)
        if px is None:
            return None
        return f"{prefix}-[{format_px(px)}]"
    return convert


def _letter_spacing(value) -> Optional[str]:
    px = parse_number(value)
    if px is None:
        return None
    if px == 0:
        return "tracking-normal"
    return f"tracking-[{format_px(px)}]"


def _rotate(value) -> Optional[str]:
    text = _text(value)
    number = parse_number(text.replace("deg", ""))
    if number is None:
        return None
    return f"rotate-[{_plain(number)}deg]"


def _scale(value) -> Optional[str]:
    number = _decimal(value)
    if number is None:
        return None
    if number == 1:
        # scale-100 為預設值
        return None
    percent = number * 100
    if percent == percent.to_integral_value() and int(percent) in SCALE_SCALE:
        return f"scale-{int(percent)}"
    return f"scale-[{_plain(number)}]"


# ─── Engine ──────────────────────────────────────────────────────────────────

class RuleEngine:
    """屬性 → 規則的對照表；建構後不再修改."""

    def __init__(self, colors: Optional[dict] = None):
        self.colors = colors or DESIGN_COLORS
        self._rules = self._build_rules()

    def _build_rules(self) -> dict:
        rules = {
            "flexDirection": _lookup(FLEX_DIRECTION),
            "alignItems": _lookup(ALIGN_ITEMS),
            "alignContent": _lookup(ALIGN_CONTENT),
            "justifyContent": _lookup(JUSTIFY_CONTENT),
            "alignSelf": _lookup(ALIGN_SELF),
            "flexWrap": _lookup(FLEX_WRAP),
            "flex": _flex,
            "flexGrow": _grow_shrink("grow"),
            "flexShrink": _grow_shrink("shrink"),
            "position": _lookup(POSITION),
            "display": _lookup(DISPLAY),
            "zIndex": _z_index,
            "overflow": _lookup(OVERFLOW),
            "opacity": _opacity,
            "aspectRatio": _aspect_ratio,
            "borderStyle": _lookup(BORDER_STYLE),
            "textAlign": _lookup(TEXT_ALIGN),
            "textTransform": _lookup(TEXT_TRANSFORM),
            "textDecorationLine": _lookup(TEXT_DECORATION),
            "fontWeight": _font_weight,
            "fontFamily": _font_family,
            "fontSize": _px_rule("text"),
            "lineHeight": _px_rule("leading"),
            "letterSpacing": _letter_spacing,
            "rotate": _rotate,
            "rotateZ": _rotate,
            "scale": _scale,
        }
        for name, prefix in SPACING_PREFIXES.items():
            rules[name] = _spacing_rule(prefix)
        for name, prefix in SIZING_PREFIXES.items():
            rules[name] = _spacing_rule(prefix, sizing=True)
        for name, prefix in COLOR_PREFIXES.items():
            rules[name] = _color_rule(prefix, self.colors)
        for name, prefix in BORDER_WIDTH_PREFIXES.items():
            rules[name] = _border_width_rule(prefix)
        for name, prefix in RADIUS_PREFIXES.items():
            rules[name] = _radius_rule(prefix)
        return rules

    @property
    def properties(self) -> list:
        return sorted(self._rules)

    def get_rule(self, property_name: str) -> Optional[ConversionRule]:
        convert = self._rules.get(property_name)
        if convert is None:
            return None
        return ConversionRule(property_name, convert)

    def convert(self, property_name: str, value) -> Optional[str]:
        convert = self._rules.get(property_name)
        if convert is None:
            return None
        return convert(value)


@lru_cache(maxsize=None)
def default_engine() -> RuleEngine:
    return RuleEngine()


def get_conversion_rule(property_name: str) -> Optional[ConversionRule]:
    return default_engine().get_rule(property_name)


def convert_property(property_name: str, value) -> Optional[str]:
    """以內建色票轉換單一屬性；沒有規則或值無法對應時回傳 None."""
    return default_engine().convert(property_name, value)
