"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from click.testing import CliRunner
from interactive_parse.cli import cli, main

_SAMPLE_SCHEMA = Path(__file__).resolve().parents[3] / "samples" / "sample-command-schema.json"


def _write_answers(tmp_path: Path, answers: list[object]) -> Path:
    path = tmp_path / "answers.yaml"
    path.write_text(yaml.safe_dump(answers), encoding="utf-8")
    return path


def test_prompt_command_prints_collected_value(tmp_path: Path) -> None:
    answers_path = _write_answers(tmp_path, ["Clone", True, "a", True, "b", False, "main"])
    runner = CliRunner()

    result = runner.invoke(
        cli, ["prompt", "--schema", str(_SAMPLE_SCHEMA), "--answers", str(answers_path)]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "subcommand": {"Clone": {"address": ["a", "b"]}},
        "arg": "main",
    }


def test_prompt_command_replays_backtrack_tokens(tmp_path: Path) -> None:
    answers_path = _write_answers(
        tmp_path, ["Commit", True, "wip", "<back>", "Commit", True, "fix bug", "HEAD"]
    )
    runner = CliRunner()

    result = runner.invoke(
        cli, ["prompt", "--schema", str(_SAMPLE_SCHEMA), "--answers", str(answers_path)]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "subcommand": {"Commit": {"message": "fix bug"}},
        "arg": "HEAD",
    }


def test_prompt_command_writes_output_file(tmp_path: Path) -> None:
    answers_path = _write_answers(tmp_path, ["Commit", False, "main"])
    output_path = tmp_path / "value.json"
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "prompt",
            "--schema",
            str(_SAMPLE_SCHEMA),
            "--answers",
            str(answers_path),
            "--output",
            str(output_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert str(output_path.resolve()) in result.output
    assert json.loads(output_path.read_text(encoding="utf-8")) == {
        "subcommand": {"Commit": {"message": None}},
        "arg": "main",
    }


def test_cancelled_session_exits_with_abort(tmp_path: Path, capsys) -> None:
    answers_path = _write_answers(tmp_path, ["Clone", "<cancel>"])

    exit_code = main(
        ["prompt", "--schema", str(_SAMPLE_SCHEMA), "--answers", str(answers_path)]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Aborted." in captured.err
    assert captured.out == ""


def test_exhausted_answer_script_is_reported_without_traceback(tmp_path: Path, capsys) -> None:
    answers_path = _write_answers(tmp_path, ["Clone"])

    exit_code = main(
        ["prompt", "--schema", str(_SAMPLE_SCHEMA), "--answers", str(answers_path)]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Answer script exhausted" in captured.err
    assert "Traceback" not in captured.err


def test_null_answer_for_text_prompt_is_reported(tmp_path: Path, capsys) -> None:
    answers_path = tmp_path / "answers.yaml"
    answers_path.write_text("- Commit\n- true\n- ~\n", encoding="utf-8")

    exit_code = main(
        ["prompt", "--schema", str(_SAMPLE_SCHEMA), "--answers", str(answers_path)]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Missing text answer" in captured.err
    assert "Traceback" not in captured.err


def test_answers_file_must_contain_a_list(tmp_path: Path, capsys) -> None:
    answers_path = tmp_path / "answers.yaml"
    answers_path.write_text("subcommand: Clone\n", encoding="utf-8")

    exit_code = main(
        ["prompt", "--schema", str(_SAMPLE_SCHEMA), "--answers", str(answers_path)]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "must contain a list" in captured.err


def test_prompt_command_accepts_yaml_schema_and_config(tmp_path: Path) -> None:
    schema_path = tmp_path / "point.yaml"
    schema_path.write_text(
        yaml.safe_dump(
            {
                "type": "object",
                "properties": {"x": {"type": "integer"}, "y": {"type": "number"}},
            }
        ),
        encoding="utf-8",
    )
    config_path = tmp_path / "interactive-parse.yaml"
    config_path.write_text("prompts:\n  show_breadcrumbs: false\n", encoding="utf-8")
    answers_path = _write_answers(tmp_path, ["seven", "7", "1.5"])
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "prompt",
            "--schema",
            str(schema_path),
            "--config",
            str(config_path),
            "--answers",
            str(answers_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"x": 7, "y": 1.5}


def test_invalid_log_level_is_rejected(tmp_path: Path, capsys) -> None:
    answers_path = _write_answers(tmp_path, [])

    exit_code = main(
        [
            "prompt",
            "--schema",
            str(_SAMPLE_SCHEMA),
            "--answers",
            str(answers_path),
            "--log-level",
            "chatty",
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "must be one of" in captured.err


def test_show_schema_prints_outline() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["show-schema", "--schema", str(_SAMPLE_SCHEMA)])

    assert result.exit_code == 0, result.output
    assert "root: struct <Command>" in result.output
    assert "subcommand: enum (tagged)" in result.output
    assert "address: sequence" in result.output


def test_generate_config_writes_file_and_refuses_overwrite(tmp_path: Path) -> None:
    runner = CliRunner()
    target = tmp_path / "interactive-parse.yaml"

    first = runner.invoke(cli, ["generate-config", "--output", str(target)])
    assert first.exit_code == 0, first.output
    assert target.exists()
    assert "prompts:" in target.read_text(encoding="utf-8")

    exit_code = main(["generate-config", "--output", str(target)])
    assert exit_code == 1
