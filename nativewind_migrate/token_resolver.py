"""
Token Resolver — 設計 token → NativeWind utility class

指定 category 時直接查該表；未指定時依 TOKEN_DETECTORS 的順序自動判斷，
第一個成立者勝出。查不到一律回傳 category="unknown"（或該表的 unknown 結果），
不拋例外。
"""

import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Optional

import requests

from .color_tokens import BUILTIN_COLOR_KEYWORDS, DESIGN_COLORS, lookup_color
from .legacy_tokens import (
    LEGACY_COLOR_MIGRATIONS,
    LEGACY_COLOR_REF,
    LEGACY_COLORS,
    LEGACY_FONT_REF,
    legacy_class,
    legacy_color_key,
)
from .patterns import TokenMappingResult
from .spacing_tokens import (
    FULL_RADIUS_PX,
    FULL_RADIUS_TOKEN,
    RADIUS_SCALE,
    RADIUS_TOKEN,
    SPACING_TOKEN,
    format_px,
    px_to_scale,
    radius_suffix,
    spacing_suffix,
)
from .typography_tokens import (
    DEFAULT_LOCALE,
    DESIGN_TYPOGRAPHY,
    LEGACY_TYPOGRAPHY,
    TYPOGRAPHY_TOKEN,
    font_for_weight,
    legacy_font_for_locale,
    typography_utilities,
)

CATEGORIES = ("color", "spacing", "typography", "radius", "legacy")

_LETTERS_DIGITS = re.compile(r"^\$[a-z]+\d+$")
_DIGITS = re.compile(r"^\$\d+$")


def _unknown(token: str, category: str, note: str) -> TokenMappingResult:
    return TokenMappingResult(
        token=token, utility_class=None, raw_value=token, category=category, notes=note
    )


class TokenResolver:
    """依色票 / 字體表解析 token；表格建構後不再變動."""

    # (名稱, 判斷式, 處理方法名)；順序即優先權
    TOKEN_DETECTORS = (
        ("legacy-color-ref", lambda t: LEGACY_COLOR_REF.match(t) is not None, "_resolve_legacy_color"),
        ("legacy-font-ref", lambda t: LEGACY_FONT_REF.match(t) is not None, "_resolve_typography"),
        ("color-or-spacing", lambda t: _LETTERS_DIGITS.match(t) is not None, "_resolve_color_or_spacing"),
        ("spacing", lambda t: _DIGITS.match(t) is not None, "_resolve_spacing"),
        ("typography", lambda t: TYPOGRAPHY_TOKEN.match(t) is not None, "_resolve_typography"),
        ("radius", lambda t: t == FULL_RADIUS_TOKEN, "_resolve_radius"),
        ("color-keyword", lambda t: t in ("$white", "$black"), "_resolve_color"),
        ("legacy-key", lambda t: t in LEGACY_COLORS or t in LEGACY_TYPOGRAPHY, "_resolve_legacy"),
    )

    def __init__(self, palette: Optional[dict] = None):
        palette = palette or {}
        self.colors = palette.get("colors") or DESIGN_COLORS
        self.typography = palette.get("typography") or DESIGN_TYPOGRAPHY
        self._by_category = {
            "color": self._resolve_color,
            "spacing": self._resolve_spacing,
            "typography": self._resolve_typography,
            "radius": self._resolve_radius,
            "legacy": self._resolve_legacy,
        }

    def resolve(self, token: str, category: Optional[str] = None, locale: str = DEFAULT_LOCALE) -> TokenMappingResult:
        token = token.strip()
        if category:
            handler = self._by_category.get(category)
            if handler is None:
                return _unknown(token, "unknown", f"Unknown token category: {category}")
            return handler(token, locale)

        detected = self.detect(token)
        if detected is None:
            return _unknown(token, "unknown", f"Could not auto-detect token type for: {token}")
        return getattr(self, detected)(token, locale)

    def detect(self, token: str) -> Optional[str]:
        """回傳第一個成立的處理方法名；都不成立回傳 None."""
        for _name, predicate, handler in self.TOKEN_DETECTORS:
            if predicate(token):
                return handler
        return None

    # ─── Color ────────────────────────────────────────────────────────────────

    def _resolve_color(self, token: str, locale: str = DEFAULT_LOCALE) -> TokenMappingResult:
        found = lookup_color(self.colors, token)
        if found is None:
            return _unknown(token, "color", f"Unknown color token: {token}")
        utility, hex_value = found
        return TokenMappingResult(
            token=token,
            utility_class=utility,
            raw_value=hex_value,
            category="color",
            requires_custom_config=utility not in BUILTIN_COLOR_KEYWORDS,
        )

    def _resolve_color_or_spacing(self, token: str, locale: str = DEFAULT_LOCALE) -> TokenMappingResult:
        result = self._resolve_color(token, locale)
        if result.found:
            return result
        spacing = self._resolve_spacing(token, locale)
        if spacing.found:
            return spacing
        return _unknown(token, "color", f"Unknown color or spacing token: {token}")

    # ─── Spacing / radius ────────────────────────────────────────────────────

    def _resolve_spacing(self, token: str, locale: str = DEFAULT_LOCALE) -> TokenMappingResult:
        match = SPACING_TOKEN.match(token)
        if not match:
            return _unknown(token, "spacing", f"Unknown spacing token: {token}")
        raw = match.group(1)
        px = float(raw) if "." in raw else int(raw)
        standard = px_to_scale(px) is not None
        return TokenMappingResult(
            token=token,
            utility_class=spacing_suffix(px),
            raw_value=format_px(px),
            category="spacing",
            requires_custom_config=not standard,
            notes=None if standard else "Non-standard spacing; uses an arbitrary value class",
        )

    def _resolve_radius(self, token: str, locale: str = DEFAULT_LOCALE) -> TokenMappingResult:
        if token == FULL_RADIUS_TOKEN:
            return TokenMappingResult(
                token=token,
                utility_class="full",
                raw_value=format_px(FULL_RADIUS_PX),
                category="radius",
            )
        match = RADIUS_TOKEN.match(token)
        if not match:
            return _unknown(token, "radius", f"Unknown radius token: {token}")
        raw = match.group(1)
        px = float(raw) if "." in raw else int(raw)
        standard = px in RADIUS_SCALE
        return TokenMappingResult(
            token=token,
            utility_class=radius_suffix(px),
            raw_value=format_px(px),
            category="radius",
            requires_custom_config=not standard,
            notes=None if standard else "Non-standard radius; uses an arbitrary value class",
        )

    # ─── Typography ──────────────────────────────────────────────────────────

    def _resolve_typography(self, token: str, locale: str = DEFAULT_LOCALE) -> TokenMappingResult:
        entry = self.typography.get(token)
        if entry is not None:
            weight = entry.get("weight", "regular")
            font = font_for_weight(weight, locale)
            utilities = typography_utilities(
                font,
                entry["fontSize"],
                entry["lineHeight"],
                weight=weight,
                letter_spacing=entry.get("letterSpacing"),
            )
            return TokenMappingResult(
                token=token,
                utility_class=" ".join(utilities),
                raw_value=f"{entry['fontSize']}px/{entry['lineHeight']}px",
                category="typography",
                requires_custom_config=True,
                utilities=utilities,
            )

        match = LEGACY_FONT_REF.match(token)
        key = match.group(1) if match else token
        legacy = LEGACY_TYPOGRAPHY.get(key)
        if legacy is None:
            return _unknown(token, "typography", f"Unknown typography token: {token}")
        font = legacy_font_for_locale(legacy["fontFamily"], locale)
        utilities = typography_utilities(
            font,
            legacy["fontSize"],
            legacy["lineHeight"],
            letter_spacing=legacy.get("letterSpacing"),
        )
        return TokenMappingResult(
            token=token,
            utility_class=" ".join(utilities),
            raw_value=f"{legacy['fontSize']}px/{legacy['lineHeight']}px",
            category="typography",
            is_legacy=True,
            requires_custom_config=True,
            notes="Legacy typography token; prefer a design-system typography token",
            utilities=utilities,
        )

    # ─── Legacy ──────────────────────────────────────────────────────────────

    def _resolve_legacy_color(self, token: str, locale: str = DEFAULT_LOCALE) -> TokenMappingResult:
        key = legacy_color_key(token)
        if key is None:
            return _unknown(token, "color", f"Unknown legacy color: {token}")
        suggestion = LEGACY_COLOR_MIGRATIONS.get(key)
        if suggestion:
            note = f"Legacy color; migrate to {suggestion}"
        else:
            note = "Legacy color without a registered design-system equivalent"
        return TokenMappingResult(
            token=token,
            utility_class=legacy_class(key),
            raw_value=LEGACY_COLORS[key],
            category="color",
            is_legacy=True,
            requires_custom_config=True,
            notes=note,
            suggested_migration=suggestion,
        )

    def _resolve_legacy(self, token: str, locale: str = DEFAULT_LOCALE) -> TokenMappingResult:
        if legacy_color_key(token) is not None:
            return self._resolve_legacy_color(token, locale)
        match = LEGACY_FONT_REF.match(token)
        if match or token in LEGACY_TYPOGRAPHY:
            return self._resolve_typography(token, locale)
        return _unknown(token, "unknown", f"Unknown legacy token: {token}")


@lru_cache(maxsize=None)
def default_resolver() -> TokenResolver:
    return TokenResolver()


def resolve_token(token: str, category: Optional[str] = None, locale: str = DEFAULT_LOCALE) -> TokenMappingResult:
    """以內建色票解析單一 token."""
    return default_resolver().resolve(token, category=category, locale=locale)


# ─── Theme 載入 ──────────────────────────────────────────────────────────────

def load_theme(source: str, timeout: int = 10) -> dict:
    """讀取 theme JSON（本機路徑或 http(s) URL），回傳 TokenResolver 可用的 palette.

    格式：{"colors": {"white": "#fff", "coral": {"100": "#..."}}, "typography": {...}}
    """
    if source.startswith(("http://", "https://")):
        resp = requests.get(source, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    else:
        with open(Path(source), "r", encoding="utf-8") as f:
            data = json.load(f)

    if not isinstance(data, dict) or not isinstance(data.get("colors"), dict):
        raise ValueError(f"theme '{source}' 缺少 colors 物件")
    palette = {"colors": data["colors"]}
    if isinstance(data.get("typography"), dict):
        palette["typography"] = data["typography"]
    return palette
