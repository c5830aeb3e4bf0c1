"""
ui-core 解析器單元測試
JSX 樣式屬性 / passthrough 分類、動態屬性依賴、未關閉標籤。
"""
import pytest

from nativewind_migrate.ui_core import is_passthrough, parse_ui_core


def parse_one(source, components=None):
    patterns = parse_ui_core(source, components)
    assert len(patterns) == 1
    return patterns[0]


def attr(pattern, name):
    return next(a for a in pattern.style_attributes if a.name == name)


# ─── 樣式屬性 ───────────────────────────────────────────────────────────────

class TestStyleAttributes:
    def test_quoted_and_numeric_values(self):
        pattern = parse_one('<XStack alignItems="center" gap={8} padding="$4">')
        assert attr(pattern, "alignItems").raw_value == "center"
        assert attr(pattern, "gap").raw_value == 8
        padding = attr(pattern, "padding")
        assert padding.raw_value == "$4"
        assert padding.token == "$4"
        assert pattern.is_auto_convertible

    def test_quoted_inside_braces_is_static(self):
        pattern = parse_one("<YStack backgroundColor={'$coral100'} />")
        bg = attr(pattern, "backgroundColor")
        assert bg.is_static
        assert bg.token == "$coral100"

    def test_conditional_attribute_is_dynamic(self):
        pattern = parse_one("<XStack color={isActive ? '$gray900' : '$gray400'} />")
        color = attr(pattern, "color")
        assert not color.is_static
        assert color.dependencies == ["isActive"]
        assert not pattern.is_auto_convertible
        assert pattern.dynamic_attributes == [color]

    def test_template_literal_with_interpolation_is_dynamic(self):
        pattern = parse_one("<XStack width={`${pct}%`} />")
        width = attr(pattern, "width")
        assert not width.is_static
        assert width.dependencies == ["pct"]
        assert not pattern.is_auto_convertible

    def test_template_literal_without_interpolation_is_static(self):
        pattern = parse_one("<XStack flexDirection={`row`} />")
        assert attr(pattern, "flexDirection").is_static
        assert pattern.is_auto_convertible

    def test_arrow_inside_braces_does_not_close_tag(self):
        source = "<XStack onPress={() => setOpen(a > b)} gap={4}>\n  <Typography>Hi</Typography>\n</XStack>"
        patterns = parse_ui_core(source)
        assert [p.tag_name for p in patterns] == ["XStack", "Typography"]
        assert attr(patterns[0], "gap").raw_value == 4


# ─── Passthrough ────────────────────────────────────────────────────────────

class TestPassthrough:
    def test_events_and_spread(self):
        pattern = parse_one('<YStack {...rest} onPress={handlePress} testID="row" gap={4}>')
        names = [a.name for a in pattern.passthrough_attributes]
        assert names == ["...", "onPress", "testID"]
        spread, on_press, test_id = pattern.passthrough_attributes
        assert spread.raw_value == "rest"
        assert on_press.raw_value == "{handlePress}"
        assert test_id.raw_value == '"row"'
        assert [a.name for a in pattern.style_attributes] == ["gap"]

    def test_bare_boolean_attribute(self):
        pattern = parse_one("<Button disabled onPress={submit}>")
        assert pattern.passthrough_attributes[0].name == "disabled"
        assert pattern.passthrough_attributes[0].raw_value == "true"

    @pytest.mark.parametrize("name", [
        "children", "style", "onLongPress", "accessibilityLabel", "aria-label", "data-id", "...",
    ])
    def test_is_passthrough(self, name):
        assert is_passthrough(name)

    @pytest.mark.parametrize("name", ["padding", "color", "one", "on"])
    def test_is_not_passthrough(self, name):
        assert not is_passthrough(name)


# ─── 標籤掃描 ───────────────────────────────────────────────────────────────

def test_unclosed_tag_before_next_tag():
    patterns = parse_ui_core("<XStack padding={4}\n<YStack gap={2}>")
    assert patterns[0].parse_failed
    assert not patterns[0].is_auto_convertible
    assert not patterns[1].parse_failed


def test_unclosed_tag_at_eof():
    pattern = parse_one("<XStack gap={4}")
    assert pattern.parse_failed


def test_closing_tags_ignored():
    patterns = parse_ui_core("<Typography>Hello</Typography>")
    assert len(patterns) == 1
    assert patterns[0].style_attributes == []


def test_custom_component_names():
    pattern = parse_one("<Box padding={4} />", components=["Box"])
    assert pattern.tag_name == "Box"
    assert parse_ui_core("<Box padding={4} />") == []


def test_location_and_raw_text():
    source = "return (\n  <YStack gap={4}>\n"
    pattern = parse_one(source)
    assert (pattern.location.line, pattern.location.column) == (2, 3)
    assert pattern.raw_text == "<YStack gap={4}>"
