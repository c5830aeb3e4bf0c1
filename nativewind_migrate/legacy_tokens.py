"""舊主題 theme.main.colors.* 色票與建議的設計系統替代色."""

import re
from typing import Optional

LEGACY_COLORS = {
    "mono100": "#ffffff",
    "mono150": "#f3f3f3",
    "mono200": "#f0f0f0",
    "mono300": "#e0e0e0",
    "mono400": "#b0b0b0",
    "mono500": "#a0a0a0",
    "mono600": "#848484",
    "mono700": "#676767",
    "mono800": "#444444",
    "mono900": "#000000",
    "main300": "#ffd2c7",
    "main500": "#ffae9a",
    "main700": "#f98f75",
    "red200": "#ff7250",
    "red400": "#ff0000",
    "button500": "#c5b698",
    "buttonSpecial": "#c9b589",
    "rustyRed": "#c11a1a",
}

LEGACY_COLOR_MIGRATIONS = {
    "mono100": "white",
    "mono900": "black",
    "mono800": "gray-900",
    "mono700": "gray-700",
    "mono600": "gray-600",
    "mono500": "gray-500",
    "mono400": "gray-400",
    "mono300": "gray-100",
    "mono200": "gray-050",
    "main700": "coral-500",
    "main500": "coral-300",
    "main300": "coral-100",
    "red400": "red-500",
}

LEGACY_COLOR_REF = re.compile(r"^(?:theme\.main\.colors|colors)\.(\w+)$")
LEGACY_FONT_REF = re.compile(r"^theme\.fonts\.(\w+)$")

# 在程式碼片段中出現的舊主題參照
LEGACY_REF_IN_SOURCE = re.compile(r"\b(?:theme\.main\.colors|theme\.fonts)\.\w+")


def legacy_color_key(token: str) -> Optional[str]:
    """`theme.main.colors.mono900` / `colors.mono900` / `mono900` → `mono900`."""
    match = LEGACY_COLOR_REF.match(token)
    key = match.group(1) if match else token
    return key if key in LEGACY_COLORS else None


def legacy_class(key: str) -> str:
    return f"legacy-{key}"
