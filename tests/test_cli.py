from __future__ import annotations

import json
from pathlib import Path

import pytest

from fencemap.cli import main


DOC = "# Usage\n\n<!-- global foo -->\n```js\nfoo(1);\n```\n\n> ```ts\n> let a = 1;\n> ```\n"


@pytest.fixture
def readme(tmp_path: Path) -> Path:
    p = tmp_path / "README.md"
    p.write_text(DOC, encoding="utf-8")
    return p


def test_extract_prints_sources(readme: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["extract", str(readme)]) == 0
    out = capsys.readouterr().out
    assert ":: 0.js" in out
    assert "/*global foo*/\nfoo(1);" in out
    assert ":: 1.ts" in out
    assert "let a = 1;" in out


def test_extract_json(readme: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["extract", "--json", str(readme)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        str(readme.resolve()): [
            {"identifier": "0.js", "text": "/*global foo*/\nfoo(1);"},
            {"identifier": "1.ts", "text": "let a = 1;"},
        ]
    }


def test_translate_batches(readme: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    diags = tmp_path / "diags.json"
    diags.write_text(
        json.dumps(
            [
                [{"ruleId": "no-undef", "line": 2, "column": 0, "endLine": 2, "endColumn": 3}],
                [{"ruleId": "prefer-const", "line": 1, "column": 4, "endLine": 1, "endColumn": 5}],
            ]
        ),
        encoding="utf-8",
    )
    assert main(["translate", str(readme), "--diagnostics", str(diags)]) == 0
    out = json.loads(capsys.readouterr().out)
    assert [(m["ruleId"], m["line"], m["column"]) for m in out] == [("no-undef", 5, 0), ("prefer-const", 9, 6)]


def test_translate_eslint_json_output(readme: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    diags = tmp_path / "eslint.json"
    diags.write_text(
        json.dumps(
            [
                {"filePath": "/tmp/out/1.ts", "messages": [{"ruleId": "x", "line": 1, "column": 0}]},
                {"filePath": "/tmp/out/0.js", "messages": []},
            ]
        ),
        encoding="utf-8",
    )
    assert main(["translate", str(readme), "--diagnostics", str(diags)]) == 0
    out = json.loads(capsys.readouterr().out)
    assert [(m["line"], m["column"]) for m in out] == [(9, 2)]


def test_translate_mismatch_is_reported(readme: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    diags = tmp_path / "diags.json"
    diags.write_text("[[]]", encoding="utf-8")
    assert main(["translate", str(readme), "--diagnostics", str(diags)]) == 1
    assert "error:" in capsys.readouterr().err


def test_config_option(readme: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = tmp_path / "fencemap.toml"
    cfg.write_text('[tool.fencemap]\nlanguages = ["ts"]\n', encoding="utf-8")
    assert main(["--config", str(cfg), "extract", "--json", str(readme)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload[str(readme.resolve())] == [{"identifier": "0.ts", "text": "let a = 1;"}]
