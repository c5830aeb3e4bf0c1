"""
字體排印 token

font-size / line-height 與語系無關；字型家族依語系挑選 regular / bold 一組。
展示用字型（MarkMyWords、KOTRAHOPE、NanumJungHagSaeng）不隨語系改變。
"""

import re

LOCALES = ("ko", "en", "ja", "tw", "zh", "de", "es", "fr", "vi", "th")
DEFAULT_LOCALE = "ko"

_LATIN = {"regular": "Maitree", "bold": "Maitree-SemiBold"}

LOCALE_FONT_MAP = {
    "ko": {"regular": "GyeonggiBatangROTF", "bold": "GyeonggiBatangBOTF"},
    "ja": {"regular": "Mamelon-4-Hi-Regular", "bold": "Mamelon-5-Hi-Regular"},
    "tw": {"regular": "FakePearl-Regular", "bold": "FakePearl-SemiBold"},
    "zh": {"regular": "FakePearl-Regular", "bold": "FakePearl-SemiBold"},
    "en": _LATIN,
    "de": _LATIN,
    "es": _LATIN,
    "fr": _LATIN,
    "vi": _LATIN,
    "th": _LATIN,
}

FONT_FAMILY_TAILWIND_MAP = {
    "GyeonggiBatangBOTF": "font-body-ko-bold",
    "GyeonggiBatangROTF": "font-body-ko",
    "Mamelon-4-Hi-Regular": "font-body-ja",
    "Mamelon-5-Hi-Regular": "font-body-ja-bold",
    "FakePearl-Regular": "font-body-tw",
    "FakePearl-SemiBold": "font-body-tw-bold",
    "Maitree": "font-body-en",
    "Maitree-SemiBold": "font-body-en-bold",
    "MarkMyWords": "font-marker",
    "KOTRAHOPE": "font-kotra",
    "NanumJungHagSaeng": "font-nanum",
}

DISPLAY_FONTS = frozenset({"MarkMyWords", "KOTRAHOPE", "NanumJungHagSaeng"})

# 韓文字型在舊主題中代表的字重
_KO_WEIGHT = {"GyeonggiBatangROTF": "regular", "GyeonggiBatangBOTF": "bold"}

TYPOGRAPHY_TOKEN = re.compile(r"^\$(display|body|headline|heading|caption|label|title|badge)\d")

# ─── 設計系統 ────────────────────────────────────────────────────────────────

DESIGN_TYPOGRAPHY = {
    "$display1B": {"fontSize": 32, "lineHeight": 40, "weight": "bold"},
    "$headline1B": {"fontSize": 28, "lineHeight": 36, "weight": "bold"},
    "$headline2B": {"fontSize": 24, "lineHeight": 32, "weight": "bold"},
    "$headline3B": {"fontSize": 22, "lineHeight": 28, "weight": "bold"},
    "$heading1B": {"fontSize": 20, "lineHeight": 28, "weight": "bold"},
    "$heading2B": {"fontSize": 18, "lineHeight": 26, "weight": "bold"},
    "$heading3B": {"fontSize": 16, "lineHeight": 24, "weight": "bold"},
    "$body1R": {"fontSize": 16, "lineHeight": 24, "weight": "regular"},
    "$body1M": {"fontSize": 16, "lineHeight": 24, "weight": "medium"},
    "$body2R": {"fontSize": 15, "lineHeight": 24, "weight": "regular"},
    "$body2M": {"fontSize": 15, "lineHeight": 24, "weight": "medium"},
    "$body3R": {"fontSize": 14, "lineHeight": 22, "weight": "regular"},
    "$body3M": {"fontSize": 14, "lineHeight": 22, "weight": "medium"},
    "$caption1R": {"fontSize": 13, "lineHeight": 20, "weight": "regular"},
    "$caption2R": {"fontSize": 12, "lineHeight": 18, "weight": "regular"},
    "$label1M": {"fontSize": 14, "lineHeight": 20, "weight": "medium"},
    "$label2M": {"fontSize": 12, "lineHeight": 16, "weight": "medium"},
    "$badge1M": {"fontSize": 12, "lineHeight": 16, "weight": "medium"},
    "$badge2M": {"fontSize": 11, "lineHeight": 14, "weight": "medium"},
    "$badge3M": {"fontSize": 10, "lineHeight": 14, "weight": "medium"},
    "$title1Bold": {"fontSize": 18, "lineHeight": 26, "weight": "bold"},
    "$title2Bold": {"fontSize": 16, "lineHeight": 24, "weight": "bold"},
}

# ─── 舊主題 theme.fonts.* ────────────────────────────────────────────────────

_B = "GyeonggiBatangBOTF"
_R = "GyeonggiBatangROTF"
_NANUM = "NanumJungHagSaeng"
_MARKER = "MarkMyWords"


def _legacy(font: str, size: int, line: int, spacing=None) -> dict:
    entry = {"fontFamily": font, "fontSize": size, "lineHeight": line}
    if spacing is not None:
        entry["letterSpacing"] = spacing
    return entry


LEGACY_TYPOGRAPHY = {
    "heading1": _legacy(_B, 30, 30, 1.02),
    "heading2": _legacy(_B, 24, 30, 0.82),
    "title1Bold": _legacy(_B, 20, 30, 0.68),
    "title1Regular": _legacy(_R, 20, 30, 0.68),
    "title2": _legacy(_R, 18, 25, 0.68),
    "title3Bold": _legacy(_B, 17, 27, 0.58),
    "title3Regular": _legacy(_R, 17, 27, 0.58),
    "title4": _legacy(_B, 15, 27, 0.68),
    "body1Bold": _legacy(_B, 15, 23, 0.68),
    "body1Regular": _legacy(_R, 15, 23, 0.68),
    "body2Bold": _legacy(_B, 13, 23, 0.2),
    "body2Regular": _legacy(_R, 13, 23, 0.2),
    "body3Bold": _legacy(_B, 12, 18, 0.18),
    "body3Regular": _legacy(_R, 12, 18, 0.18),
    "body4": _legacy(_B, 11, 18),
    "username1": _legacy(_B, 14, 26),
    "username2": _legacy(_B, 12, 18),
    "petDiary1": _legacy(_NANUM, 24, 22),
    "petDiary2": _legacy(_NANUM, 20, 22),
    "petDiary3": _legacy(_NANUM, 17, 18),
    "petDiary4": _legacy(_NANUM, 17, 18),
    "description": _legacy(_R, 12, 18),
    "number1": _legacy(_MARKER, 30, 36),
    "number2": _legacy(_MARKER, 24, 20),
    "number3": _legacy(_MARKER, 20, 20),
    "number4": _legacy(_MARKER, 15, 22),
    "number5": _legacy(_MARKER, 12, 15),
    "number6": _legacy(_MARKER, 10, 20),
    "itemBody": _legacy(_B, 11, 15),
    "banner": _legacy(_NANUM, 17, 17),
    "emotion": _legacy(_NANUM, 20, 22),
    "error": _legacy(_R, 12, 15),
    "warning": _legacy(_R, 12, 15),
    "date1": _legacy(_R, 11, 16, 0.18),
    "caption": _legacy("KOTRAHOPE", 13, 15),
}


def normalize_locale(locale: str) -> str:
    return locale if locale in LOCALE_FONT_MAP else DEFAULT_LOCALE


def font_for_weight(weight: str, locale: str) -> str:
    """依字重（regular / medium / bold）挑出該語系的字型名稱."""
    pair = LOCALE_FONT_MAP[normalize_locale(locale)]
    return pair["bold"] if weight == "bold" else pair["regular"]


def legacy_font_for_locale(font: str, locale: str) -> str:
    """舊主題的韓文字型換成目標語系的同字重字型；展示字型原樣保留."""
    if font in DISPLAY_FONTS or font not in _KO_WEIGHT:
        return font
    return font_for_weight(_KO_WEIGHT[font], locale)


def _number(value) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def typography_utilities(font: str, size, line_height, weight: str = "regular", letter_spacing=None) -> list:
    """組出字體 utility 片段：字型、字級、行高、字重、字距."""
    utilities = [
        FONT_FAMILY_TAILWIND_MAP.get(font, f"font-['{font}']"),
        f"text-[{_number(size)}px]",
        f"leading-[{_number(line_height)}px]",
    ]
    if weight == "medium":
        utilities.append("font-medium")
    if letter_spacing is not None:
        utilities.append(f"tracking-[{_number(letter_spacing)}px]")
    return utilities
