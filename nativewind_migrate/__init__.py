"""
nativewind-migrate — React Native 樣式遷移分析（styled-components / Tamagui / ui-core → NativeWind）

盤點樣式 pattern、把靜態樣式轉成 className，並為動態樣式產生遷移建議（clsx / cva）。
"""

__version__ = "0.1.0"

from .patterns import (
    TemplatePattern,
    DeclarativePattern,
    InlineAttributePattern,
    StyleProperty,
    TokenMappingResult,
    ConversionOutput,
    MigrationSpec,
    AnalysisResult,
    BatchResult,
    to_jsonable,
)
from .extractor import extract_balanced
from .expression import classify_expression
from .styled_components import parse_styled_components
from .tamagui import parse_tamagui
from .ui_core import parse_ui_core
from .rules import RuleEngine, convert_property, get_conversion_rule
from .token_resolver import TokenResolver, resolve_token, load_theme
from .converter import StyleConverter, convert_source, convert_file
from .cva_generator import generate_cva_config
from .migration import suggest_migration
from .analyzer import analyze_source, analyze_file, batch_analyze
from .tailwind_config import generate_tailwind_config
from .config import load_config, validate_config

__all__ = [
    "__version__",
    "TemplatePattern",
    "DeclarativePattern",
    "InlineAttributePattern",
    "StyleProperty",
    "TokenMappingResult",
    "ConversionOutput",
    "MigrationSpec",
    "AnalysisResult",
    "BatchResult",
    "to_jsonable",
    "extract_balanced",
    "classify_expression",
    "parse_styled_components",
    "parse_tamagui",
    "parse_ui_core",
    "RuleEngine",
    "convert_property",
    "get_conversion_rule",
    "TokenResolver",
    "resolve_token",
    "load_theme",
    "StyleConverter",
    "convert_source",
    "convert_file",
    "generate_cva_config",
    "suggest_migration",
    "analyze_source",
    "analyze_file",
    "batch_analyze",
    "generate_tailwind_config",
    "load_config",
    "validate_config",
]
