"""Tests for the assistkit command line interface."""
import json

import pytest
from typer.testing import CliRunner

from assistkit.orchestrator.cli import app

runner = CliRunner()


@pytest.fixture
def rust_file(tmp_path):
    def write(content: str, name: str = "fixture.rs"):
        path = tmp_path / name
        path.write_text(content)
        return path
    return write


# ─── group ───────────────────────────────────────────────────────────────────

class TestGroupCommand:
    def test_thousands(self):
        result = runner.invoke(app, ["group", "4242420"])
        assert result.exit_code == 0
        assert result.output == "4_242_420\n"

    def test_custom_size(self):
        result = runner.invoke(app, ["group", "2A2A2A", "--size", "4"])
        assert result.output == "2A_2A2A\n"

    def test_non_positive_size(self):
        result = runner.invoke(app, ["group", "1234", "--size", "0"])
        assert result.exit_code == 1


# ─── list ────────────────────────────────────────────────────────────────────

class TestListCommand:
    def test_lists_number_assists(self, rust_file):
        path = rust_file("const X: u32 = 42_4200;\n")
        result = runner.invoke(app, ["list", str(path), "--offset", "17"])
        assert result.exit_code == 0
        assert "remove_digit_separators" in result.output
        assert "separate_thousands" in result.output

    def test_nothing_applicable(self, rust_file):
        path = rust_file("fn main() {}\n")
        result = runner.invoke(app, ["list", str(path), "--offset", "3"])
        assert result.exit_code == 0
        assert "No assists applicable" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["list", str(tmp_path / "nope.rs"), "--offset", "0"])
        assert result.exit_code == 1

    def test_missing_caret(self, rust_file):
        path = rust_file("let x = 1;\n")
        result = runner.invoke(app, ["list", str(path)])
        assert result.exit_code == 1

    def test_offset_outside_file(self, rust_file):
        path = rust_file("let x = 1;\n")
        result = runner.invoke(app, ["list", str(path), "--offset", "500"])
        assert result.exit_code == 1


# ─── resolve ─────────────────────────────────────────────────────────────────

class TestResolveCommand:
    def test_apply_split_from_marker(self, rust_file):
        path = rust_file('fn f() { let s = "random<|>string"; }')
        result = runner.invoke(app, ["resolve", str(path), "--apply", "split_string"])
        assert result.exit_code == 0
        assert result.output == 'fn f() { let s = concat!("random",<|> "string"); }'

    def test_apply_remove_separators(self, rust_file):
        path = rust_file("let x = 1_000u32;")
        result = runner.invoke(
            app, ["resolve", str(path), "--range", "8:16", "--apply", "remove_digit_separators"]
        )
        assert result.exit_code == 0
        assert result.output == "let x = 1000u32<|>;"

    def test_json(self, rust_file):
        path = rust_file("let x = 4242420;")
        result = runner.invoke(app, ["resolve", str(path), "--offset", "10", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert [entry["id"] for entry in payload] == ["separate_thousands"]
        assert payload[0]["edit"]["operations"] == [
            {"start": 8, "end": 15, "text": "4_242_420"},
        ]

    def test_write(self, rust_file):
        path = rust_file("let x = 0b101010101;")
        result = runner.invoke(
            app, ["resolve", str(path), "--offset", "12", "--apply", "separate_bytes", "--write"]
        )
        assert result.exit_code == 0
        assert path.read_text() == "let x = 0b1_01010101;"

    def test_unknown_assist(self, rust_file):
        path = rust_file("let x = 4242420;")
        result = runner.invoke(app, ["resolve", str(path), "--offset", "10", "--apply", "flip_comma"])
        assert result.exit_code == 1
        assert "flip_comma" in result.output

    def test_python_file_detected(self, rust_file):
        path = rust_file("x = 4242420\n", name="script.py")
        result = runner.invoke(app, ["resolve", str(path), "--offset", "6", "--json"])
        assert result.exit_code == 0
        assert [entry["id"] for entry in json.loads(result.output)] == ["separate_thousands"]

    def test_invalid_range(self, rust_file):
        path = rust_file("let x = 1;")
        result = runner.invoke(app, ["resolve", str(path), "--range", "5:2"])
        assert result.exit_code == 1
