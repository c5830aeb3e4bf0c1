"""間距與圓角刻度：px → Tailwind 刻度名稱."""

import re
from typing import Optional

# Tailwind 預設 spacing scale（1 單位 = 4px）
SPACING_SCALE = {
    0: "0",
    1: "px",
    2: "0.5",
    4: "1",
    6: "1.5",
    8: "2",
    10: "2.5",
    12: "3",
    14: "3.5",
    16: "4",
    20: "5",
    24: "6",
    28: "7",
    32: "8",
    36: "9",
    40: "10",
    44: "11",
    48: "12",
    56: "14",
    64: "16",
    80: "20",
    96: "24",
}

# px → `rounded-*` 後綴；空字串代表 `rounded`
RADIUS_SCALE = {
    0: "none",
    2: "sm",
    4: "",
    6: "md",
    8: "lg",
    12: "xl",
    16: "2xl",
    24: "3xl",
}

FULL_RADIUS_TOKEN = "$full"
FULL_RADIUS_PX = 9999

SPACING_TOKEN = re.compile(r"^\$(?:space|size)?(\d+(?:\.\d+)?)$")
RADIUS_TOKEN = re.compile(r"^\$(?:radius)?(\d+(?:\.\d+)?)$")


def format_px(px) -> str:
    """16 → '16px'；1.5 → '1.5px'."""
    if isinstance(px, float) and px.is_integer():
        px = int(px)
    return f"{px}px"


def _scale_key(px):
    if isinstance(px, float) and px.is_integer():
        return int(px)
    return px


def px_to_scale(px) -> Optional[str]:
    """刻度內的 px 回傳刻度名稱，否則 None（不四捨五入）."""
    return SPACING_SCALE.get(_scale_key(px))


def spacing_suffix(px) -> str:
    """刻度名稱，或 `[Npx]` 任意值."""
    scale = px_to_scale(px)
    return scale if scale is not None else f"[{format_px(px)}]"


def radius_suffix(px) -> str:
    if px >= FULL_RADIUS_PX:
        return "full"
    named = RADIUS_SCALE.get(_scale_key(px))
    return named if named is not None else f"[{format_px(px)}]"


def parse_number(text: str):
    """'16' / '16px' / '1.5' → 數值；其他回傳 None."""
    match = re.match(r"^(-?\d+(?:\.\d+)?)(?:px)?$", str(text).strip())
    if not match:
        return None
    raw = match.group(1)
    return float(raw) if "." in raw else int(raw)
