"""設定檔載入與基本驗證."""

import json
from pathlib import Path
from typing import Any

from .analyzer import FILE_PATTERNS
from .typography_tokens import LOCALES

DEFAULT_CONFIG_PATH = "nativewind-migrate.config.json"

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"tokens", "batch", "inline", "output"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "tokens": {"locale", "theme"},
    "batch": {"pattern", "limit", "skipDirs"},
    "inline": {"components"},
    "output": {"json", "reportDir"},
}


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    # 頂層未知欄位
    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    # 各區塊欄位
    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"'{section}' 應為物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    tokens = cfg.get("tokens", {}) if isinstance(cfg.get("tokens"), dict) else {}
    batch = cfg.get("batch", {}) if isinstance(cfg.get("batch"), dict) else {}
    inline = cfg.get("inline", {}) if isinstance(cfg.get("inline"), dict) else {}

    # tokens.locale 值驗證
    locale = tokens.get("locale")
    if locale and locale not in LOCALES:
        valid = ", ".join(LOCALES)
        _warn(f"tokens.locale '{locale}' 不在已知值中（{valid}），將使用 ko")

    # tokens.theme 存在性提示（URL 不檢查）
    theme = tokens.get("theme")
    if theme and not str(theme).startswith(("http://", "https://")) and not Path(theme).exists():
        _warn(f"tokens.theme '{theme}' 檔案不存在（將使用內建色票）")

    # batch.pattern 值驗證
    pattern = batch.get("pattern")
    if pattern and pattern not in FILE_PATTERNS:
        valid = ", ".join(FILE_PATTERNS)
        _warn(f"batch.pattern '{pattern}' 不在已知值中（{valid}）")

    # batch.limit 值類型
    limit = batch.get("limit")
    if limit is not None and (not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0):
        _warn(f"batch.limit 應為正整數，目前是 {limit!r}")

    skip_dirs = batch.get("skipDirs")
    if skip_dirs is not None and not isinstance(skip_dirs, list):
        _warn(f"batch.skipDirs 應為字串陣列，目前是 {type(skip_dirs).__name__}")

    components = inline.get("components")
    if components is not None and (
        not isinstance(components, list) or not all(isinstance(c, str) for c in components)
    ):
        _warn("inline.components 應為字串陣列")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg
