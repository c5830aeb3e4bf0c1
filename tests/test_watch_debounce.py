"""
Watch Mode / ChangeHandler debounce 單元測試
不需要真實檔案系統事件，用 mock event 物件測試過濾與防抖邏輯。
"""
import time
import pytest
from unittest.mock import MagicMock, patch

from nativewind_migrate.cli import ChangeHandler, _WATCHED_EXTENSIONS


# ─── helper: 建立假 FileModifiedEvent ────────────────────────────────────────

def make_event(src_path: str, is_directory: bool = False):
    ev = MagicMock()
    ev.is_directory = is_directory
    ev.src_path = src_path
    return ev


# ─── ChangeHandler.on_modified 過濾邏輯 ──────────────────────────────────────

class TestChangeHandlerFilter:
    """測試 on_modified 的過濾條件：目錄、副檔名、callback 呼叫。"""

    def setup_method(self):
        self.callback = MagicMock()
        self.handler = ChangeHandler(self.callback, debounce=0.0)

    def test_directory_event_ignored(self):
        self.handler.on_modified(make_event("/src/components/", is_directory=True))
        self.callback.assert_not_called()

    def test_non_watched_extension_ignored(self):
        for ext in [".png", ".md", ".json", ".lock", ".css"]:
            self.handler.on_modified(make_event(f"/src/file{ext}"))
        self.callback.assert_not_called()

    def test_watched_extensions_trigger_callback(self):
        for ext in _WATCHED_EXTENSIONS:
            self.handler.last_trigger = 0  # 重置 debounce
            self.handler.on_modified(make_event(f"/src/Button{ext}"))
        assert self.callback.call_count == len(_WATCHED_EXTENSIONS)

    def test_callback_receives_path(self):
        self.handler.on_modified(make_event("/src/Card.tsx"))
        self.callback.assert_called_once_with("/src/Card.tsx")

    def test_created_event_handled(self):
        self.handler.on_created(make_event("/src/New.tsx"))
        self.callback.assert_called_once_with("/src/New.tsx")


# ─── debounce ───────────────────────────────────────────────────────────────

class TestChangeHandlerDebounce:
    def test_rapid_events_collapsed(self):
        callback = MagicMock()
        handler = ChangeHandler(callback, debounce=10.0)
        handler.on_modified(make_event("/src/A.tsx"))
        handler.on_modified(make_event("/src/A.tsx"))
        handler.on_modified(make_event("/src/B.tsx"))
        callback.assert_called_once_with("/src/A.tsx")

    def test_event_after_window_triggers(self):
        callback = MagicMock()
        handler = ChangeHandler(callback, debounce=1.0)
        with patch("nativewind_migrate.cli.time.time", side_effect=[100.0, 100.5, 102.0]):
            handler.on_modified(make_event("/src/A.tsx"))
            handler.on_modified(make_event("/src/A.tsx"))
            handler.on_modified(make_event("/src/A.tsx"))
        assert callback.call_count == 2

    def test_last_trigger_updated(self):
        handler = ChangeHandler(MagicMock(), debounce=0.0)
        before = time.time()
        handler.on_modified(make_event("/src/A.tsx"))
        assert handler.last_trigger >= before

    def test_default_debounce(self):
        handler = ChangeHandler(MagicMock())
        assert handler.debounce_seconds == pytest.approx(1.0)
        assert handler.last_trigger == 0.0
