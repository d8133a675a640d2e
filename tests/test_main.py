from pathlib import Path

import pytest

import main as cli_main
from mermaidpng.errors import RenderHostError


def no_prompt(question: str, default: str) -> str:
    return ""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    for name in ("LOG_FILE", "RENDER_TIMEOUT_SEC", "FONT_SIZE", "LOG_MAX_BYTES", "LOG_BACKUPS"):
        monkeypatch.delenv(name, raising=False)


def test_missing_input_exits_non_zero(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    called = []
    monkeypatch.setattr(cli_main, "convert", lambda *a, **kw: called.append(a))

    code = cli_main.main([str(tmp_path / "missing.mmd"), str(tmp_path / "out.png")], no_prompt)

    assert code == 1
    assert called == []
    assert list(tmp_path.iterdir()) == []


def test_success_passes_resolved_request(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    src = tmp_path / "a.mmd"
    src.write_text("graph TD", encoding="utf-8")
    seen = {}

    async def fake_convert(request, settings):
        seen["request"] = request
        return None

    monkeypatch.setattr(cli_main, "convert", fake_convert)

    code = cli_main.main([str(src), "", "neon", "transparent", "x", "640", "-1"], no_prompt)

    assert code == 0
    req = seen["request"]
    assert req.output_path == (tmp_path / "a.png").resolve()
    assert req.theme.value == "default"
    assert req.background_color == "transparent"
    assert (req.scale, req.width, req.height) == (2.0, 640, 1080)


def test_fatal_host_error_exits_non_zero(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    src = tmp_path / "a.mmd"
    src.write_text("graph TD", encoding="utf-8")

    async def broken(request, settings):
        raise RenderHostError("no chromium")

    monkeypatch.setattr(cli_main, "convert", broken)
    assert cli_main.main([str(src), "o.png", "dark", "white", "1", "10", "10"], no_prompt) == 1


def test_uncreatable_output_dir_exits_non_zero(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    src = tmp_path / "a.mmd"
    src.write_text("graph TD", encoding="utf-8")
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    code = cli_main.main(
        [str(src), str(blocker / "out.png"), "dark", "white", "1", "10", "10"], no_prompt
    )

    assert code == 1
    assert "Cannot create output directory" in caplog.text
    assert blocker.read_text(encoding="utf-8") == "not a directory"
