"""
CLI 整合測試
直接呼叫 main(argv)，以 tmp_path 當工作目錄，檢查輸出與回傳碼。
"""
import json
import pytest

from nativewind_migrate.cli import main


STATIC_STYLED = "const Container = styled.View`\n  flex: 1;\n  padding: 16px;\n`\n"

DYNAMIC_STYLED = (
    "const Box = styled.View`\n"
    "  padding: 8px;\n"
    "  background-color: ${({ active }) => (active ? '#fff' : '#000')};\n"
    "`\n"
)


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    """每個測試都在乾淨的暫存目錄執行，不讀到專案內的設定檔。"""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return str(path)


# ─── token ──────────────────────────────────────────────────────────────────

class TestTokenCommand:
    def test_found(self, capsys):
        assert main(["token", "$coral100"]) == 0
        assert "coral-100" in capsys.readouterr().out

    def test_not_found_returns_1(self, capsys):
        assert main(["token", "$nope"]) == 1
        assert "❌" in capsys.readouterr().out

    def test_json_output(self, capsys):
        assert main(["--json", "token", "$16"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["utilityClass"] == "4"
        assert data["rawValue"] == "16px"
        assert data["requiresCustomConfig"] is False

    def test_locale_from_config(self, workdir, capsys):
        write(workdir / "nativewind-migrate.config.json", json.dumps({"tokens": {"locale": "ja"}}))
        assert main(["token", "$body1R"]) == 0
        assert "font-body-ja" in capsys.readouterr().out

    def test_theme_option(self, workdir, capsys):
        theme = write(workdir / "theme.json", json.dumps({"colors": {"brand": {"500": "#123456"}}}))
        assert main(["--theme", theme, "token", "$brand500"]) == 0
        assert "brand-500" in capsys.readouterr().out


# ─── analyze / convert ──────────────────────────────────────────────────────

def test_analyze_json(workdir, capsys):
    path = write(workdir / "Card.tsx", STATIC_STYLED)
    assert main(["--json", "analyze", path]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["summary"]["total"] == 1
    template = data["template"][0]
    assert template["componentName"] == "Container"
    assert template["isAutoConvertible"] is True
    assert template["kind"] == "styled-component"


def test_analyze_report(workdir, capsys):
    path = write(workdir / "Box.tsx", DYNAMIC_STYLED)
    assert main(["analyze", path]) == 0
    out = capsys.readouterr().out
    assert "Box (styled-component, line 1)" in out
    assert "dynamic: active" in out


def test_analyze_missing_file(workdir, capsys):
    assert main(["analyze", str(workdir / "missing.tsx")]) == 1
    assert "❌ analyze failed" in capsys.readouterr().out


def test_convert_report(workdir, capsys):
    path = write(workdir / "Card.tsx", STATIC_STYLED + DYNAMIC_STYLED)
    assert main(["convert", path]) == 0
    out = capsys.readouterr().out
    assert 'className="flex-1 p-4"' in out
    assert "Converted: 1 | Skipped: 1" in out


# ─── suggest ────────────────────────────────────────────────────────────────

def test_suggest_code(capsys):
    assert main(["--json", "suggest", "--code", DYNAMIC_STYLED]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["approach"] == "clsx"
    assert data["analysis"]["dynamicDependencies"] == ["active"]


def test_suggest_file_with_context(workdir, capsys):
    path = write(workdir / "Card.tsx", STATIC_STYLED)
    assert main(["suggest", path, "--context", "card"]) == 0
    assert "// Context: card" in capsys.readouterr().out


def test_suggest_without_input(capsys):
    assert main(["suggest"]) == 1
    assert "❌" in capsys.readouterr().out


# ─── batch ──────────────────────────────────────────────────────────────────

def test_batch_json(workdir, capsys):
    write(workdir / "src" / "Static.tsx", STATIC_STYLED)
    write(workdir / "src" / "Dynamic.tsx", DYNAMIC_STYLED)
    assert main(["--json", "batch", str(workdir / "src")]) == 0
    captured = capsys.readouterr()
    data = json.loads(captured.out)
    assert data["summary"]["fullyAutoConvertible"] == 1
    assert data["summary"]["manualRequired"] == 1
    assert data["byPattern"]["styledComponents"]["occurrences"] == 2
    assert "Scanning" in captured.err


def test_batch_report(workdir, capsys):
    write(workdir / "src" / "Dynamic.tsx", DYNAMIC_STYLED)
    assert main(["batch", str(workdir / "src")]) == 0
    out = capsys.readouterr().out
    assert "Complex cases: 1" in out
    assert "Has dynamic props: active" in out


def test_batch_missing_directory(workdir, capsys):
    assert main(["batch", str(workdir / "nope")]) == 1
    assert "❌ batch failed" in capsys.readouterr().out


def test_batch_pattern_from_config(workdir, capsys):
    write(workdir / "nativewind-migrate.config.json", json.dumps({"batch": {"pattern": "**/*.js"}}))
    write(workdir / "src" / "a.js", STATIC_STYLED)
    write(workdir / "src" / "b.tsx", STATIC_STYLED)
    assert main(["--json", "batch", str(workdir / "src")]) == 0
    assert json.loads(capsys.readouterr().out)["totalFiles"] == 1


def test_batch_zero_limit(workdir, capsys):
    write(workdir / "src" / "Static.tsx", STATIC_STYLED)
    assert main(["--json", "batch", str(workdir / "src"), "--limit", "0"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["totalFiles"] == 0
    assert data["analyzed"] == 0


def test_batch_output_config(workdir, capsys):
    cfg = {"output": {"json": True, "reportDir": str(workdir / "reports")}}
    write(workdir / "nativewind-migrate.config.json", json.dumps(cfg))
    write(workdir / "src" / "Static.tsx", STATIC_STYLED)
    assert main(["batch", str(workdir / "src")]) == 0
    captured = capsys.readouterr()
    assert json.loads(captured.out)["analyzed"] == 1
    saved = json.loads((workdir / "reports" / "batch-report.json").read_text(encoding="utf-8"))
    assert saved["summary"]["fullyAutoConvertible"] == 1
    assert "Saved batch report" in captured.err


# ─── tailwind-config ────────────────────────────────────────────────────────

def test_tailwind_config_output_file(workdir, capsys):
    target = workdir / "tailwind.config.js"
    assert main(["tailwind-config", "--output", str(target)]) == 0
    assert "✅ Saved tailwind config" in capsys.readouterr().out
    assert "nativewind/preset" in target.read_text(encoding="utf-8")


def test_tailwind_config_json(capsys):
    assert main(["--json", "tailwind-config", "--no-legacy"]) == 0
    data = json.loads(capsys.readouterr().out)
    colors = data["theme"]["extend"]["colors"]
    assert "coral-100" in colors
    assert "legacy-mono900" not in colors


# ─── misc ───────────────────────────────────────────────────────────────────

def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "nativewind-migrate" in capsys.readouterr().out
