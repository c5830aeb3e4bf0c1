"""產生 NativeWind 用的 tailwind.config.js（色票、舊主題色、字型家族）."""

import json
from typing import Optional

from .color_tokens import iter_color_classes
from .legacy_tokens import LEGACY_COLORS, legacy_class
from .token_resolver import TokenResolver, default_resolver
from .typography_tokens import FONT_FAMILY_TAILWIND_MAP, LOCALE_FONT_MAP, normalize_locale

CONTENT_GLOBS = [
    "./App.{js,jsx,ts,tsx}",
    "./index.{js,jsx,ts,tsx}",
    "./src/**/*.{js,jsx,ts,tsx}",
]


def font_family_config(locale: str = "ko") -> dict:
    """`font-body-ko` → {"body-ko": ["GyeonggiBatangROTF"]}，另加語系別名 body / body-bold."""
    families = {}
    for font, utility in FONT_FAMILY_TAILWIND_MAP.items():
        families[utility[len("font-"):]] = [font]
    pair = LOCALE_FONT_MAP[normalize_locale(locale)]
    families["body"] = [pair["regular"]]
    families["body-bold"] = [pair["bold"]]
    return families


def color_config(resolver: TokenResolver, include_legacy: bool = True) -> dict:
    colors = dict(iter_color_classes(resolver.colors))
    if include_legacy:
        for key, value in LEGACY_COLORS.items():
            colors[legacy_class(key)] = value
    return colors


def _js_block(value: dict) -> str:
    text = json.dumps(value, indent=2, ensure_ascii=False)
    return text.replace("\n", "\n      ")


def generate_tailwind_config(include_legacy: bool = True, locale: str = "ko", resolver: Optional[TokenResolver] = None) -> dict:
    """回傳 {"config": ..., "configString": tailwind.config.js 內容}."""
    resolver = resolver or default_resolver()
    colors = color_config(resolver, include_legacy)
    font_family = font_family_config(locale)
    config = {"theme": {"extend": {"colors": colors, "fontFamily": font_family}}}

    content = ",\n".join(f"    '{glob}'" for glob in CONTENT_GLOBS)
    config_string = "\n".join([
        "/** @type {import('tailwindcss').Config} */",
        "module.exports = {",
        "  content: [",
        f"{content},",
        "  ],",
        "  presets: [require('nativewind/preset')],",
        "  theme: {",
        "    extend: {",
        f"      colors: {_js_block(colors)},",
        f"      fontFamily: {_js_block(font_family)},",
        "    },",
        "  },",
        "  plugins: [],",
        "}",
    ])
    return {"config": config, "configString": config_string}
