from __future__ import annotations

import importlib.util
import io
import json
import sys
from pathlib import Path

import pytest
from loguru import logger


SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "run_review_parse.py"


@pytest.fixture
def cli():
    spec = importlib.util.spec_from_file_location("run_review_parse", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    yield module

    # main() replaces the loguru sink; restore a default one for later tests.
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_json_output_for_review_file(cli, review_file, capsys):
    rc = cli.main([str(review_file), "--format", "json", "--log-level", "ERROR"])
    assert rc == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["sections"]["badCode"].startswith("function sum")
    assert payload["sections"]["issues"][0] == "Missing semicolon after the return statement."
    assert payload["lineDiffs"] == [
        {"kind": "change", "line": 2, "badText": "return a + b", "fixText": "return a + b;"}
    ]
    assert payload["summary"]["line_diffs"]["change"] == 1


@pytest.mark.unit
def test_text_output_for_review_file(cli, review_file, capsys):
    rc = cli.main([str(review_file), "--format", "text", "--log-level", "ERROR"])
    assert rc == 0

    out = capsys.readouterr().out
    assert out.startswith("Bad Code:\n")
    assert "Line-by-line suggestions:" in out


@pytest.mark.unit
def test_json_payload_file_is_unwrapped(cli, tmp_path, capsys):
    path = tmp_path / "response.json"
    path.write_text(json.dumps({"review": "Issues\n- off by one\n"}), encoding="utf-8")

    rc = cli.main([str(path), "--format", "json", "--log-level", "ERROR"])
    assert rc == 0
    assert json.loads(capsys.readouterr().out)["sections"]["issues"] == ["off by one"]


@pytest.mark.unit
def test_stdin_input(cli, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"Suggestions\n- add docs\n")))

    rc = cli.main(["-", "--format", "text", "--log-level", "ERROR"])
    assert rc == 0
    assert capsys.readouterr().out == "Suggestions:\n- add docs\n"


@pytest.mark.unit
def test_diff_mode(cli, tmp_path, capsys):
    before = tmp_path / "before.js"
    after = tmp_path / "after.js"
    before.write_text("a\nb", encoding="utf-8")
    after.write_text("a", encoding="utf-8")

    rc = cli.main(["--before", str(before), "--after", str(after), "--format", "json", "--log-level", "ERROR"])
    assert rc == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["lineDiffs"] == [{"kind": "remove", "line": 2, "badText": "b"}]
    assert payload["summary"] == {"change": 0, "add": 0, "remove": 1}


@pytest.mark.unit
def test_diff_mode_text_without_differences(cli, tmp_path, capsys):
    before = tmp_path / "before.js"
    before.write_text("same\n", encoding="utf-8")

    rc = cli.main(["--before", str(before), "--after", str(before), "--format", "text", "--log-level", "ERROR"])
    assert rc == 0
    assert capsys.readouterr().out == "No line differences.\n"


@pytest.mark.unit
def test_missing_file_returns_exit_code_2(cli, tmp_path, capsys):
    rc = cli.main([str(tmp_path / "missing.md"), "--log-level", "ERROR"])
    assert rc == 2
    assert "does not exist" in capsys.readouterr().out


@pytest.mark.unit
def test_oversized_file_returns_exit_code_2(cli, review_file, capsys):
    rc = cli.main([str(review_file), "--max-bytes", "10", "--log-level", "ERROR"])
    assert rc == 2
    assert "too large" in capsys.readouterr().out


@pytest.mark.unit
def test_oversized_stdin_returns_exit_code_2(cli, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"Issues\n" + b"- x\n" * 40)))

    rc = cli.main(["-", "--max-bytes", "10", "--log-level", "ERROR"])
    assert rc == 2
    assert "too large" in capsys.readouterr().out


@pytest.mark.unit
def test_stdin_within_limit_is_accepted(cli, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"Issues\n- x\n")))

    rc = cli.main(["-", "--max-bytes", "12", "--format", "text", "--log-level", "ERROR"])
    assert rc == 0
    assert capsys.readouterr().out == "Issues:\n- x\n"


@pytest.mark.unit
def test_before_without_after_is_a_usage_error(cli, tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--before", str(tmp_path / "a.js")])
    assert exc.value.code == 2


@pytest.mark.unit
def test_review_file_required_without_diff_mode(cli):
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 2
