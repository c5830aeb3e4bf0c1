"""設計系統色票（預設值；可由 theme JSON 取代）."""

import re
from typing import Optional

COLOR_TOKEN = re.compile(r"^\$([a-z]+)(\d+)$")

# 與 Tailwind 預設色名相同者仍需 config：色值不同
DESIGN_COLORS = {
    "white": "#ffffff",
    "black": "#000000",
    "coral": {
        "050": "#fff4f1",
        "100": "#ffe4dc",
        "200": "#ffc9b9",
        "300": "#ffae9a",
        "400": "#fb9d86",
        "500": "#f98f75",
        "600": "#e0735a",
        "700": "#c25a43",
        "800": "#9a4433",
        "900": "#6e2f23",
    },
    "gray": {
        "050": "#f7f7f7",
        "100": "#f0f0f0",
        "200": "#e0e0e0",
        "300": "#c7c7c7",
        "400": "#b0b0b0",
        "500": "#a0a0a0",
        "600": "#848484",
        "700": "#676767",
        "800": "#4a4a4a",
        "900": "#222222",
    },
    "red": {
        "100": "#ffe5e0",
        "300": "#ff9c86",
        "500": "#ff4d2e",
        "700": "#c11a1a",
        "900": "#7a0f0f",
    },
    "green": {
        "100": "#e3f6e8",
        "300": "#9edcb0",
        "500": "#34a853",
        "700": "#23783a",
        "900": "#134222",
    },
    "blue": {
        "100": "#e3efff",
        "300": "#93bcff",
        "500": "#3a7bfd",
        "700": "#2456b8",
        "900": "#12306b",
    },
    "yellow": {
        "100": "#fff7d6",
        "300": "#ffe27a",
        "500": "#ffc700",
        "700": "#c29600",
        "900": "#6b5300",
    },
    "beige": {
        "100": "#f6f2ea",
        "300": "#e3d9c5",
        "500": "#c5b698",
        "700": "#9b8b6a",
        "900": "#5d5440",
    },
}

# Tailwind 內建、不需擴充 config 的色名
BUILTIN_COLOR_KEYWORDS = {"white": "#ffffff", "black": "#000000", "transparent": "transparent"}


def lookup_color(colors: dict, token: str) -> Optional[tuple]:
    """`$coral100` → ("coral-100", "#ffe4dc")；`$white` → ("white", "#ffffff")."""
    name = token.lstrip("$")
    flat = colors.get(name)
    if isinstance(flat, str):
        return name, flat

    match = COLOR_TOKEN.match(token)
    if not match:
        return None
    family, shade = match.groups()
    shades = colors.get(family)
    if not isinstance(shades, dict):
        return None
    if shade in shades:
        return f"{family}-{shade}", shades[shade]
    return None


def iter_color_classes(colors: dict):
    """依序產生 (class 名稱, 色值)，供 tailwind config 使用."""
    for name, value in colors.items():
        if isinstance(value, dict):
            for shade, hex_value in value.items():
                yield f"{name}-{shade}", hex_value
        else:
            yield name, value
