"""
cva 產生器單元測試
Tamagui variants → class-variance-authority 設定字串、範例與警告。
"""
from nativewind_migrate.cva_generator import (
    CVA_IMPORT,
    generate_cva_config,
    render_cva,
    variants_variable,
)
from nativewind_migrate.tamagui import parse_tamagui


CHIP_SOURCE = """
const Chip = styled(View, {
  name: 'Chip',
  borderRadius: '$full',
  backgroundColor: '$coral100',
  variants: {
    size: {
      small: { paddingHorizontal: 8, height: 24 },
      large: { paddingHorizontal: 16, height: 40 },
    },
  },
})
"""


def make_pattern(source=CHIP_SOURCE):
    return parse_tamagui(source)[0]


class TestGenerateCvaConfig:
    def test_static_variants_have_no_warnings(self):
        spec = generate_cva_config(make_pattern())
        assert spec.warnings == []
        assert spec.approach == "cva"
        assert spec.imports == [CVA_IMPORT]
        assert spec.analysis.pattern_type == "tamagui-styled-with-variants"

    def test_base_and_variant_classes(self):
        spec = generate_cva_config(make_pattern())
        assert spec.class_names == ["rounded-full", "bg-coral-100"]
        assert spec.dynamic_classes == ["size"]
        assert 'const chipVariants = cva(' in spec.generated_config
        assert '"rounded-full bg-coral-100",' in spec.generated_config
        assert 'small: "px-2 h-6",' in spec.generated_config
        assert 'large: "px-4 h-10",' in spec.generated_config

    def test_conditional_logic_lists_values(self):
        spec = generate_cva_config(make_pattern())
        assert spec.analysis.conditional_logic == ["size=small", "size=large"]

    def test_example_uses_variant_props(self):
        spec = generate_cva_config(make_pattern())
        assert "type ChipProps = VariantProps<typeof chipVariants>" in spec.example
        assert "className={chipVariants({ size })}" in spec.example
        assert "<View" in spec.example

    def test_dynamic_variant_warns(self):
        source = """
const Label = styled(Paragraph, {
  variants: {
    size: (val) => ({ fontSize: val }),
    tone: { muted: { color: '$gray500' } },
  },
})
"""
        spec = generate_cva_config(make_pattern(source))
        assert 'Variant "size" is dynamic (function-based). Manual conversion required.' in spec.warnings
        assert spec.dynamic_classes == ["tone"]
        assert "size" in spec.analysis.dynamic_dependencies
        assert 'muted: "text-gray-500",' in spec.generated_config

    def test_unmapped_variant_style_warns(self):
        source = """
const Box = styled(View, {
  variants: {
    elevated: { true: { shadowRadius: 4, padding: 8 } },
  },
})
"""
        spec = generate_cva_config(make_pattern(source))
        assert spec.warnings == ["Unmapped styles in elevated=true: shadowRadius"]
        assert 'true: "p-2",' in spec.generated_config


def test_variants_variable():
    assert variants_variable("StyledInput") == "styledInputVariants"


def test_render_cva_quotes_non_identifier_keys():
    text = render_cva("xVariants", ["flex"], {"size": {"2xl": "p-8"}})
    assert '"2xl": "p-8",' in text
    assert text.startswith("const xVariants = cva(")
    assert text.endswith(")")
