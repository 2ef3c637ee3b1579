import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from revision_metrics import cli

runner = CliRunner()


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_analyze_prints_json(tmp_path: Path):
    source = _write(tmp_path / "doc.txt", "The cat sat on the mat. The dog ran quickly.")

    result = runner.invoke(cli.app, ["analyze", "--input-path", str(source)])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["word_count"] == 10
    assert payload["sentence_count"] == 2
    assert payload["file"] == str(source)


def test_analyze_respects_top_n(tmp_path: Path):
    source = _write(tmp_path / "doc.txt", "alpha beta gamma alpha")

    result = runner.invoke(
        cli.app, ["analyze", "--input-path", str(source), "--top-n", "1"]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["word_frequency"] == [{"word": "alpha", "count": 2}]


def test_analyze_rejects_non_utf8(tmp_path: Path):
    source = tmp_path / "doc.txt"
    source.write_bytes(b"\xff\xfe\x00bad bytes \x81")

    result = runner.invoke(cli.app, ["analyze", "--input-path", str(source)])

    assert result.exit_code != 0


def test_compare_without_summary(tmp_path: Path):
    original = _write(tmp_path / "a.txt", "One two.")
    revised = _write(tmp_path / "b.txt", "One two three four.")

    result = runner.invoke(
        cli.app, ["compare", "--original", str(original), "--revised", str(revised)]
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["deltas"]["Total Word Count"] == 100.0
    assert "summary" not in payload


def test_compare_writes_output_file(tmp_path: Path):
    original = _write(tmp_path / "a.txt", "One two.")
    revised = _write(tmp_path / "b.txt", "One two three.")
    target = tmp_path / "out" / "comparison.json"

    result = runner.invoke(
        cli.app,
        [
            "compare",
            "--original",
            str(original),
            "--revised",
            str(revised),
            "--output-path",
            str(target),
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(target.read_text(encoding="utf-8"))["revised"]["word_count"] == 3


class _FakeSummaryClient:
    instances = []

    def __init__(self, settings, api_key):
        self.settings = settings
        self.api_key = api_key
        _FakeSummaryClient.instances.append(self)

    def summarize(self, *, prompt, metadata):
        return "Revised text is longer."


def test_compare_with_summary(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(cli, "OpenAISummaryClient", _FakeSummaryClient)
    monkeypatch.setenv("REVISION_KEY", "sk-env")
    _FakeSummaryClient.instances.clear()
    original = _write(tmp_path / "a.txt", "One two.")
    revised = _write(tmp_path / "b.txt", "One two three four.")

    result = runner.invoke(
        cli.app,
        [
            "compare",
            "--original",
            str(original),
            "--revised",
            str(revised),
            "--summarize",
            "--openai-api-key-env",
            "REVISION_KEY",
            "--openai-model",
            "gpt-test",
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["summary"] == "Revised text is longer."
    (instance,) = _FakeSummaryClient.instances
    assert instance.api_key == "sk-env"
    assert instance.settings.model == "gpt-test"


def test_compare_summary_without_key_fails(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(cli, "OpenAISummaryClient", _FakeSummaryClient)
    monkeypatch.setenv("OPENAI_API_KEY", "")
    original = _write(tmp_path / "a.txt", "One two.")
    revised = _write(tmp_path / "b.txt", "One two three.")

    result = runner.invoke(
        cli.app,
        ["compare", "--original", str(original), "--revised", str(revised), "--summarize"],
    )

    assert result.exit_code == 2


class _FailingSummaryClient(_FakeSummaryClient):
    def summarize(self, *, prompt, metadata):
        raise RuntimeError("OpenAI summary failed after retries.")


def test_compare_keeps_metrics_when_summary_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setattr(cli, "OpenAISummaryClient", _FailingSummaryClient)
    original = _write(tmp_path / "a.txt", "One two.")
    revised = _write(tmp_path / "b.txt", "One two three four.")

    result = runner.invoke(
        cli.app,
        [
            "compare",
            "--original",
            str(original),
            "--revised",
            str(revised),
            "--summarize",
            "--openai-api-key",
            "sk-test",
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["deltas"]["Total Word Count"] == 100.0
    assert "summary" not in payload
    assert payload["summary_error"] == "OpenAI summary failed after retries."


def test_summary_enabled_from_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(cli, "OpenAISummaryClient", _FakeSummaryClient)
    config = _write(tmp_path / "config.yaml", "openai:\n  enabled: true\n  api_key: sk-file\n")
    original = _write(tmp_path / "a.txt", "One two.")
    revised = _write(tmp_path / "b.txt", "One two three.")

    result = runner.invoke(
        cli.app,
        [
            "compare",
            "--original",
            str(original),
            "--revised",
            str(revised),
            "--config",
            str(config),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "summary" in json.loads(result.stdout)


def test_print_config_outputs_yaml():
    result = runner.invoke(cli.app, ["print-config"])

    assert result.exit_code == 0
    assert "top_n_words: 20" in result.stdout
    assert "openai:" in result.stdout
