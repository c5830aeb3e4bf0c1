"""
Token Resolver 單元測試
自動偵測順序、色票 / 間距 / 圓角 / 字體 / 舊主題 token，以及 theme JSON 載入。
HTTP 一律以 mock 取代，不連網。
"""
import json
import pytest
from unittest.mock import MagicMock, patch

from nativewind_migrate.token_resolver import TokenResolver, load_theme, resolve_token


# ─── color ──────────────────────────────────────────────────────────────────

class TestColorTokens:
    def test_design_color_requires_config(self):
        result = resolve_token("$coral100")
        assert result.category == "color"
        assert result.utility_class == "coral-100"
        assert result.raw_value == "#ffe4dc"
        assert result.requires_custom_config

    def test_builtin_keyword_needs_no_config(self):
        result = resolve_token("$white")
        assert result.utility_class == "white"
        assert not result.requires_custom_config

    def test_unknown_shade(self):
        result = resolve_token("$coral150")
        assert not result.found
        assert result.category == "color"


# ─── spacing / radius ───────────────────────────────────────────────────────

class TestSpacingTokens:
    def test_standard_spacing(self):
        result = resolve_token("$16")
        assert result.category == "spacing"
        assert result.utility_class == "4"
        assert result.raw_value == "16px"
        assert not result.requires_custom_config

    def test_non_standard_spacing(self):
        result = resolve_token("$18")
        assert result.utility_class == "[18px]"
        assert result.requires_custom_config

    def test_prefixed_spacing_falls_back_from_color(self):
        result = resolve_token("$space4")
        assert result.category == "spacing"
        assert result.utility_class == "1"

    def test_full_radius(self):
        result = resolve_token("$full")
        assert result.category == "radius"
        assert result.utility_class == "full"

    def test_explicit_radius_category(self):
        assert resolve_token("$8", category="radius").utility_class == "lg"


# ─── typography ─────────────────────────────────────────────────────────────

class TestTypographyTokens:
    def test_body_token_korean(self):
        result = resolve_token("$body1R")
        assert result.category == "typography"
        assert result.utility_class == "font-body-ko text-[16px] leading-[24px]"
        assert result.utilities == ["font-body-ko", "text-[16px]", "leading-[24px]"]

    def test_locale_switches_font(self):
        assert resolve_token("$body1R", locale="ja").utilities[0] == "font-body-ja"
        assert resolve_token("$heading1B", locale="en").utilities[0] == "font-body-en-bold"

    def test_medium_weight(self):
        assert "font-medium" in resolve_token("$label1M").utilities

    def test_legacy_font_reference(self):
        result = resolve_token("theme.fonts.heading1")
        assert result.is_legacy
        assert result.utilities == [
            "font-body-ko-bold", "text-[30px]", "leading-[30px]", "tracking-[1.02px]",
        ]

    def test_display_font_not_localized(self):
        result = resolve_token("theme.fonts.number1", locale="en")
        assert result.utilities[0] == "font-marker"


# ─── legacy ─────────────────────────────────────────────────────────────────

class TestLegacyTokens:
    def test_legacy_color_with_suggestion(self):
        result = resolve_token("theme.main.colors.mono900")
        assert result.is_legacy
        assert result.utility_class == "legacy-mono900"
        assert result.suggested_migration == "black"

    def test_legacy_color_without_suggestion(self):
        result = resolve_token("colors.buttonSpecial")
        assert result.utility_class == "legacy-buttonSpecial"
        assert result.suggested_migration is None

    def test_bare_legacy_key(self):
        assert resolve_token("mono900").utility_class == "legacy-mono900"


# ─── unknown ────────────────────────────────────────────────────────────────

def test_unknown_token():
    result = resolve_token("$unknownThing")
    assert not result.found
    assert result.category == "unknown"
    assert result.notes == "Could not auto-detect token type for: $unknownThing"


def test_unknown_category():
    result = resolve_token("$16", category="shadow")
    assert result.category == "unknown"
    assert not result.found


def test_detect_order():
    resolver = TokenResolver()
    assert resolver.detect("$coral100") == "_resolve_color_or_spacing"
    assert resolver.detect("$16") == "_resolve_spacing"
    assert resolver.detect("theme.main.colors.mono100") == "_resolve_legacy_color"
    assert resolver.detect("$???") is None


# ─── 重複解析 ───────────────────────────────────────────────────────────────

REPEATED_TOKENS = [
    "$coral100",
    "$white",
    "$16",
    "$18",
    "$body1R",
    "$heading1B",
    "theme.fonts.heading1",
    "theme.main.colors.mono900",
    "colors.buttonSpecial",
    "mono900",
    "$unknownThing",
]


@pytest.mark.parametrize("token", REPEATED_TOKENS)
def test_resolve_twice_is_identical(token):
    assert resolve_token(token) == resolve_token(token)


@pytest.mark.parametrize("token", REPEATED_TOKENS)
def test_locale_call_leaves_no_state(token):
    resolver = TokenResolver()
    first = resolver.resolve(token)
    resolver.resolve(token, locale="ja")
    assert resolver.resolve(token) == first
    assert TokenResolver().resolve(token) == first


# ─── load_theme ─────────────────────────────────────────────────────────────

THEME = {"colors": {"white": "#fff", "brand": {"500": "#123456"}}}


def test_load_theme_from_file(tmp_path):
    path = tmp_path / "theme.json"
    path.write_text(json.dumps(THEME), encoding="utf-8")
    palette = load_theme(str(path))
    resolver = TokenResolver(palette)
    assert resolver.resolve("$brand500").utility_class == "brand-500"
    assert not resolver.resolve("$coral100").found


def test_load_theme_from_url():
    resp = MagicMock()
    resp.json.return_value = THEME
    with patch("nativewind_migrate.token_resolver.requests.get", return_value=resp) as mock_get:
        palette = load_theme("https://example.com/theme.json")
    mock_get.assert_called_once_with("https://example.com/theme.json", timeout=10)
    resp.raise_for_status.assert_called_once()
    assert palette == {"colors": THEME["colors"]}


def test_load_theme_without_colors(tmp_path):
    path = tmp_path / "theme.json"
    path.write_text(json.dumps({"typography": {}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_theme(str(path))
