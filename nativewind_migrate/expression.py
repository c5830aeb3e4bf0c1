"""
表達式分類器：判斷一個原始值是靜態，或依賴外部綁定（props / theme / 變數）

規則依序比對，第一個成立者勝出；順序即優先權：
  1. `${...}` 內含解構參數的箭頭函式 → 解構出的名稱
  2. backtick 字串內含 `${...}` 插值 → 插值內的依賴與字串外的識別字
  3. 已知動態根（props / theme ...）的屬性存取 → 根名稱
  4. 三元運算或短路（&& / ||） → 所有裸識別字
  5. 識別字旁的算術運算子 → 運算元識別字
  6. 單一裸識別字 → 該識別字
  7. 其餘 → 靜態
"""

import re
from dataclasses import dataclass, field
from typing import Callable, NamedTuple

from .extractor import extract_template_literal, find_interpolations

LITERAL_KEYWORDS = frozenset({"true", "false", "null", "undefined"})
DYNAMIC_ROOTS = ("props", "theme", "state", "color", "colors")

_STRING_LITERAL = re.compile(
    r"'(?:\\.|[^'\\])*'|\"(?:\\.|[^\"\\])*\"|`(?:\\.|[^`\\])*`"
)
_DESTRUCTURED_ARROW = re.compile(r"\(\s*\{([^}]*)\}\s*(?::[^)]*)?\)\s*=>")
_MEMBER_ACCESS = re.compile(
    r"(?<![\w$.])(" + "|".join(DYNAMIC_ROOTS) + r")\s*(?:\?\.|\.|\[)"
)
_CONDITIONAL = re.compile(r"\?(?![.?])[^:]*:|&&|\|\||(?<![!=])!(?!=)")
_ARITHMETIC = re.compile(
    r"(?<![\w$.])[A-Za-z_$][\w$]*\s*[-+*/%]\s*[\w$('\"`]"
    r"|[\w$)\]'\"`]\s*[-+*/%]\s*[A-Za-z_$]"
    r"|^\s*[-+]\s*[A-Za-z_$]"
)
_IDENTIFIER = re.compile(r"(?<![\w$.])(?<!\?\.)[A-Za-z_$][\w$]*")
_BARE_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
_NUMERIC = re.compile(r"^-?\d+(?:\.\d+)?$")
_QUOTED = re.compile(r"^(['\"`])(?:\\.|(?!\1).)*\1$", re.DOTALL)


@dataclass
class Classification:
    is_static: bool
    dependencies: list = field(default_factory=list)
    rule: str = "static"


class _Expr(NamedTuple):
    raw: str
    inner: str
    bare: str  # inner，字串常值已清空


class ClassificationRule(NamedTuple):
    name: str
    predicate: Callable[[_Expr], bool]
    handler: Callable[[_Expr], list]


def _unique(names) -> list:
    return list(dict.fromkeys(names))


def _blank_strings(expr: str) -> str:
    return _STRING_LITERAL.sub("''", expr)


def _unwrap(raw: str) -> str:
    text = raw.strip()
    if text.startswith("${") and text.endswith("}"):
        return text[2:-1].strip()
    return text


def _identifiers(bare: str) -> list:
    names = [m.group(0) for m in _IDENTIFIER.finditer(bare)]
    return _unique(n for n in names if n not in LITERAL_KEYWORDS)


def _destructured_names(expr: _Expr) -> list:
    names = []
    for match in _DESTRUCTURED_ARROW.finditer(expr.raw):
        for part in match.group(1).split(","):
            part = part.strip()
            if part.startswith("..."):
                part = part[3:]
            name = re.split(r"[:=]", part, maxsplit=1)[0].strip()
            if name:
                names.append(name)
    return _unique(names)


def _template_interpolations(inner: str) -> list:
    """inner 中每個 backtick 字串內的 `${...}` 區段."""
    found = []
    start = inner.find("`")
    while start != -1:
        literal = extract_template_literal(inner, start)
        if literal is None:
            break
        found.extend(find_interpolations(literal[1:-1]))
        start = inner.find("`", start + len(literal))
    return found


def _template_dependencies(expr: _Expr) -> list:
    names = _identifiers(expr.bare)
    for region in _template_interpolations(expr.inner):
        names.extend(classify_expression(region).dependencies)
    return _unique(names)


CLASSIFICATION_RULES = (
    ClassificationRule(
        "destructured-arrow",
        lambda e: "${" in e.raw and _DESTRUCTURED_ARROW.search(e.raw) is not None,
        _destructured_names,
    ),
    ClassificationRule(
        "template-interpolation",
        lambda e: bool(_template_interpolations(e.inner)),
        _template_dependencies,
    ),
    ClassificationRule(
        "member-access",
        lambda e: _MEMBER_ACCESS.search(e.bare) is not None,
        lambda e: _unique(m.group(1) for m in _MEMBER_ACCESS.finditer(e.bare)),
    ),
    ClassificationRule(
        "conditional",
        lambda e: _CONDITIONAL.search(e.bare) is not None,
        lambda e: _identifiers(e.bare),
    ),
    ClassificationRule(
        "arithmetic",
        lambda e: _ARITHMETIC.search(e.bare) is not None,
        lambda e: _identifiers(e.bare),
    ),
    ClassificationRule(
        "identifier",
        lambda e: (
            _BARE_IDENTIFIER.match(e.inner) is not None
            and e.inner not in LITERAL_KEYWORDS
        ),
        lambda e: [e.inner],
    ),
)


def classify_expression(raw: str) -> Classification:
    """分類單一原始值；回傳 is_static、依賴名稱與命中的規則名稱."""
    inner = _unwrap(raw)
    if _NUMERIC.match(inner) or _QUOTED.match(inner):
        if "${" not in inner:
            return Classification(is_static=True)
    expr = _Expr(raw=raw, inner=inner, bare=_blank_strings(inner))
    for rule in CLASSIFICATION_RULES:
        if rule.predicate(expr):
            return Classification(
                is_static=False, dependencies=rule.handler(expr), rule=rule.name
            )
    return Classification(is_static=True)


def is_static_expression(raw: str) -> bool:
    return classify_expression(raw).is_static
