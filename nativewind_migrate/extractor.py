"""
巢狀分隔符擷取

不做完整語法解析：只以深度計數找出 `{...}` / `(...)` / template literal 區段。
找不到對應的結尾一律回傳 None，不猜測、不拋例外。
"""

from typing import Optional

from .patterns import SourceLocation

_QUOTES = ("'", '"', "`")


class UnterminatedBlockError(ValueError):
    """解析器內部使用：區段沒有結尾。只在單一 pattern 範圍內被攔截。"""


def location_at(text: str, offset: int) -> SourceLocation:
    """由字元位移換算 1-based 行號與欄位."""
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return SourceLocation(line=line, column=offset - line_start + 1)


def skip_string(text: str, start: int) -> Optional[int]:
    """從引號位置開始略過字串，回傳結尾引號之後的位置；未結束則回傳 None."""
    quote = text[start]
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if quote == "`" and text.startswith("${", i):
            region = extract_balanced(text, i + 1)
            if region is None:
                return None
            i += 1 + len(region)
            continue
        if ch == quote:
            return i + 1
        i += 1
    return None


def extract_balanced(
    text: str, start: int, open_char: str = "{", close_char: str = "}"
) -> Optional[str]:
    """回傳 text[start] 開始、深度歸零處結束（含）的子字串.

    text[start] 必須是 open_char。字串常值中的分隔符不計入深度。
    """
    if start < 0 or start >= len(text) or text[start] != open_char:
        return None

    depth = 0
    i = start
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _QUOTES:
            end = skip_string(text, i)
            if end is None:
                return None
            i = end
            continue
        if ch == open_char:
            depth += 1
        elif ch == close_char:
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
        i += 1
    return None


def extract_template_literal(text: str, start: int) -> Optional[str]:
    """擷取 backtick 開頭的 template literal（含內部 `${...}`）."""
    if start < 0 or start >= len(text) or text[start] != "`":
        return None
    end = skip_string(text, start)
    if end is None:
        return None
    return text[start:end]


def find_interpolations(template: str) -> list:
    """列出 template 內容中所有 `${...}` 區段（含 `${` 與 `}`）."""
    found = []
    i = 0
    while True:
        i = template.find("${", i)
        if i == -1:
            return found
        region = extract_balanced(template, i + 1)
        if region is None:
            return found
        found.append("$" + region)
        i += 1 + len(region)


# ─── Top-level scanning（物件 / 參數列）─────────────────────────────────────

_OPENERS = "({["
_CLOSERS = ")}]"


def _skip_comment(text: str, i: int) -> int:
    """若 i 位於註解開頭，回傳註解結束位置；否則回傳 i."""
    if text.startswith("//", i):
        end = text.find("\n", i)
        return len(text) if end == -1 else end
    if text.startswith("/*", i):
        end = text.find("*/", i + 2)
        return len(text) if end == -1 else end + 2
    return i


def split_top_level(body: str, separator: str = ",") -> list:
    """以深度 0 的分隔符切開 body，略過字串與註解；回傳去除空白後的非空片段."""
    parts = []
    current = []
    depth = 0
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch in _QUOTES:
            end = skip_string(body, i)
            if end is None:
                raise UnterminatedBlockError(f"unterminated string at {i}")
            current.append(body[i:end])
            i = end
            continue
        skipped = _skip_comment(body, i)
        if skipped != i:
            i = skipped
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
        elif ch == separator and depth == 0:
            parts.append("".join(current).strip())
            current = []
            i += 1
            continue
        current.append(ch)
        i += 1
    parts.append("".join(current).strip())
    return [p for p in parts if p]


def find_top_level(text: str, char: str) -> int:
    """回傳深度 0、字串外第一個 char 的位置；找不到為 -1."""
    depth = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _QUOTES:
            end = skip_string(text, i)
            if end is None:
                return -1
            i = end
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
        elif ch == char and depth == 0:
            return i
        i += 1
    return -1
