"""Tests for the command-line interface."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import io
import json

import pytest

from promptfence.cli import main


def _run(monkeypatch, capsys, argv, stdin=""):
    monkeypatch.setattr(sys, "stdin", io.StringIO(stdin))
    code = main(argv)
    return code, capsys.readouterr().out


def test_check_block(monkeypatch, capsys):
    code, out = _run(monkeypatch, capsys, ["--preset", "finance", "check"],
                     "Pay DE89370400440532013000")
    data = json.loads(out)
    assert code == 0
    assert data["preset"] == "finance"
    assert data["action"] == "BLOCK"
    assert data["types"] == ["IBAN"]
    assert data["matches"] == [{"type": "IBAN", "start": 4, "end": 26}]
    assert "DE89370400440532013000" not in out


def test_check_exit_code(monkeypatch, capsys):
    code, _ = _run(monkeypatch, capsys, ["--preset", "finance", "check", "--exit-code"],
                   "Pay DE89370400440532013000")
    assert code == 2
    code, _ = _run(monkeypatch, capsys, ["check", "--exit-code"], "mail a@b.com")
    assert code == 1
    code, _ = _run(monkeypatch, capsys, ["check", "--exit-code"], "nothing to see")
    assert code == 0


def test_check_no_block_flag(monkeypatch, capsys):
    _, out = _run(monkeypatch, capsys, ["--preset", "finance", "--no-block", "check"],
                  "Pay DE89370400440532013000")
    assert json.loads(out)["action"] == "ALLOW"


def test_check_with_anonymize(monkeypatch, capsys):
    _, out = _run(monkeypatch, capsys, ["check", "--anonymize"], "contact a@b.com now")
    data = json.loads(out)
    assert data["text"] == "contact [EMAIL] now"


def test_anonymize(monkeypatch, capsys):
    _, out = _run(monkeypatch, capsys, ["anonymize"], "call +45 12 34 56 78 today")
    assert out == "call [PHONE] today"


def test_presets(monkeypatch, capsys):
    _, out = _run(monkeypatch, capsys, ["presets"])
    data = json.loads(out)
    assert set(data) == {"personal", "finance", "health", "workplace", "developer"}
    assert data["finance"]["rules"]["IBAN"] == "BLOCK"


def test_config_file(monkeypatch, capsys, tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("preset: developer\n", encoding="utf-8")
    _, out = _run(monkeypatch, capsys, ["--config", str(path), "check"], "password=hunter22")
    data = json.loads(out)
    assert data["preset"] == "developer"
    assert data["action"] == "BLOCK"
    assert data["types"] == ["PASSWORD"]


def test_bad_config_file_is_usage_error(monkeypatch, capsys, tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("promptfence: finance\n", encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", io.StringIO("hello"))
    with pytest.raises(SystemExit) as exc:
        main(["--config", str(path), "check"])
    assert exc.value.code == 2
    assert "must be a mapping" in capsys.readouterr().err
