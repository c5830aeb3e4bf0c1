"""
styled-components 解析器單元測試
靜態宣告、${} 動態值、theme 參照、巢狀區塊與未結束的 template literal。
"""
import pytest

from nativewind_migrate.styled_components import kebab_to_camel, parse_styled_components


STATIC_SOURCE = """
const Container = styled.View`
  flex: 1;
  padding: 16px;
  background-color: white;
`
"""

DYNAMIC_SOURCE = """
const Box = styled.View<{ active: boolean }>`
  padding: 8px;
  background-color: ${({ active }) => (active ? '#fff' : '#000')};
`
"""

THEME_SOURCE = """
const Title = styled.Text`
  font-size: 16px;
  color: ${({ theme }) => theme.colors.primary};
`
"""


def parse_one(source):
    patterns = parse_styled_components(source)
    assert len(patterns) == 1
    return patterns[0]


# ─── 靜態 ───────────────────────────────────────────────────────────────────

class TestStaticTemplate:
    def test_properties_camel_cased(self):
        pattern = parse_one(STATIC_SOURCE)
        assert [p.name for p in pattern.properties] == ["flex", "padding", "backgroundColor"]
        assert [p.raw_value for p in pattern.properties] == ["1", "16px", "white"]

    def test_auto_convertible(self):
        pattern = parse_one(STATIC_SOURCE)
        assert pattern.component_name == "Container"
        assert pattern.base_element_name == "View"
        assert pattern.dynamic_bindings == []
        assert pattern.is_auto_convertible

    def test_location_points_at_definition(self):
        pattern = parse_one(STATIC_SOURCE)
        assert pattern.location.line == 2
        assert pattern.location.column == 1

    def test_raw_text_includes_literal(self):
        pattern = parse_one(STATIC_SOURCE)
        assert pattern.raw_text.startswith("const Container = styled.View`")
        assert pattern.raw_text.endswith("`")

    def test_styled_call_form(self):
        pattern = parse_one("const Btn = styled(Pressable)`\n  margin-top: 4px;\n`")
        assert pattern.base_element_name == "Pressable"
        assert pattern.properties[0].name == "marginTop"

    def test_nested_block_ignored(self):
        source = "const Row = styled.View`\n  flex-direction: row;\n  &:active {\n    opacity: 0.5;\n  }\n`"
        pattern = parse_one(source)
        assert [p.name for p in pattern.properties] == ["flexDirection"]


# ─── 動態 ───────────────────────────────────────────────────────────────────

class TestDynamicTemplate:
    def test_dynamic_value_dependencies(self):
        pattern = parse_one(DYNAMIC_SOURCE)
        bg = pattern.properties[1]
        assert bg.name == "backgroundColor"
        assert not bg.is_static
        assert bg.dependencies == ["active"]
        assert "${" in bg.raw_value

    def test_bindings_block_auto_conversion(self):
        pattern = parse_one(DYNAMIC_SOURCE)
        assert pattern.dynamic_bindings == ["active"]
        assert not pattern.is_auto_convertible

    def test_standalone_mixin_only_adds_binding(self):
        source = "const Card = styled.View`\n  ${shadowMixin};\n  padding: 4px;\n`"
        pattern = parse_one(source)
        assert [p.name for p in pattern.properties] == ["padding"]
        assert pattern.dynamic_bindings == ["shadowMixin"]

    def test_theme_refs_collected(self):
        pattern = parse_one(THEME_SOURCE)
        assert pattern.external_theme_refs == ["theme.colors.primary"]
        assert pattern.dynamic_bindings == ["theme"]
        assert not pattern.is_auto_convertible


# ─── 錯誤處理 ───────────────────────────────────────────────────────────────

def test_unterminated_literal_marks_parse_failed():
    source = "const Broken = styled.View`\n  flex: 1;\n"
    pattern = parse_one(source)
    assert pattern.parse_failed
    assert pattern.properties == []
    assert not pattern.is_auto_convertible


def test_multiple_definitions_in_order():
    patterns = parse_styled_components(STATIC_SOURCE + DYNAMIC_SOURCE)
    assert [p.component_name for p in patterns] == ["Container", "Box"]


def test_no_match():
    assert parse_styled_components("const x = 1;") == []


@pytest.mark.parametrize("name,expected", [
    ("background-color", "backgroundColor"),
    ("border-top-left-radius", "borderTopLeftRadius"),
    ("flex", "flex"),
])
def test_kebab_to_camel(name, expected):
    assert kebab_to_camel(name) == expected
