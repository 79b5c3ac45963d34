"""Tests for the versiongen command-line tool."""

import importlib.util
import json
from pathlib import Path

import pytest

CLI_PATH = Path(__file__).resolve().parent.parent / "tools" / "versiongen.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("versiongen", CLI_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def bundled_data(monkeypatch):
    monkeypatch.delenv("PHONVER_CONFIG", raising=False)
    monkeypatch.delenv("PHONVER_SYLLABLES", raising=False)


class TestEncode:
    def test_smart(self, cli, capsys):
        cli.main(["encode", "9622927"])
        assert capsys.readouterr().out == "rit-gabusi\n"

    def test_plain(self, cli, capsys):
        cli.main(["encode", "9622927", "--plain"])
        assert capsys.readouterr().out == "ritgabusi\n"

    def test_json(self, cli, capsys):
        cli.main(["--json", "encode", "9622927", "--hyphenated"])
        assert json.loads(capsys.readouterr().out) == {"value": 9622927, "version": "rit-ga-bu-si"}

    def test_negative(self, cli, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["encode", "-1"])
        assert exc.value.code == 1
        assert capsys.readouterr().err.startswith("ERROR:")


class TestGenerate:
    def test_json(self, cli, capsys):
        cli.main(["--json", "generate", "1700000000"])
        info = json.loads(capsys.readouterr().out)
        assert info["interval"] == 180
        assert info["normalized"] == 9444444
        assert info["compressed"] is False

    def test_fixed_interval(self, cli, capsys):
        cli.main(["--json", "generate", "1700000000", "--interval", "3600", "--plain"])
        info = json.loads(capsys.readouterr().out)
        assert info["interval"] == 3600
        assert "-" not in info["version"]


class TestParse:
    def test_json(self, cli, capsys):
        cli.main(["--json", "parse", "rit-gabusi", "--interval", "1"])
        result = json.loads(capsys.readouterr().out)
        assert result["normalized"] == 9622927
        assert result["syllables"] == ["rit", "ga", "bu", "si"]

    def test_text(self, cli, capsys):
        cli.main(["parse", "rit gabusi"])
        out = capsys.readouterr().out
        assert "rit-ga-bu-si" in out
        assert "9,622,927" in out

    def test_date_out_of_range(self, cli, capsys):
        cli.main(["--json", "parse", "babababebaba"])
        result = json.loads(capsys.readouterr().out)
        assert result["normalized"] == 128 ** 5
        assert result["date"] is None

    def test_date_out_of_range_text(self, cli, capsys):
        cli.main(["parse", "babababebaba"])
        assert "out of range" in capsys.readouterr().out

    def test_unparseable(self, cli, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["parse", "xyz"])
        assert exc.value.code == 1
        assert "ERROR:" in capsys.readouterr().err


class TestOtherCommands:
    def test_validate_ok(self, cli, capsys):
        cli.main(["validate", "kat-kat"])
        assert "valid" in capsys.readouterr().out

    def test_validate_bad(self, cli, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["validate", "kat-kax"])
        assert exc.value.code == 1
        assert "INVALID" in capsys.readouterr().out

    def test_stats(self, cli, capsys):
        cli.main(["--json", "stats"])
        stats = json.loads(capsys.readouterr().out)
        assert stats["total_syllables"] == 128

    def test_annotate(self, cli, capsys):
        cli.main(["--json", "annotate", "kat-kat"])
        data = json.loads(capsys.readouterr().out)
        assert data["rating"] == "Memorable"
        assert data["nickname"] == "KatKat the Mirror"

    def test_custom_inventory(self, cli, capsys, tmp_path):
        path = tmp_path / "syl.json"
        path.write_text(json.dumps(["ba", "ko", "lu", "mi"]))
        cli.main(["--syllables", str(path), "encode", "5", "--plain"])
        assert capsys.readouterr().out == "koko\n"
