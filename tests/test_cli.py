import json

from typer.testing import CliRunner

from conftest import FakeBackend, story_responder

from draftsmith.__main__ import app
from draftsmith.models import dump
from draftsmith.parsing import parse_summary
from draftsmith.store import FileArtifactStore

runner = CliRunner()


def test_parse_command(tmp_path, summary_text, plot):
    txt = tmp_path / "summary.txt"
    txt.write_text(summary_text, "utf-8")
    plotto = tmp_path / "plotto.json"
    plotto.write_text(json.dumps(dump(plot)), "utf-8")

    result = runner.invoke(app, ["parse", str(txt), "--plot", str(plotto), "--chapters", "2"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["title"] == "Fresh Beginnings"
    assert [c["title"] for c in data["chapterList"]] == ["The Signal", "The Handshake"]
    assert data["characters"][1]["name"] == "Nora Vance"


def test_parse_command_reports_format_error(tmp_path):
    txt = tmp_path / "summary.txt"
    txt.write_text("No title here\n\nPlot Summary: x", "utf-8")
    result = runner.invoke(app, ["parse", str(txt)])
    assert result.exit_code == 1
    assert "FormatError" in result.output


def test_parse_command_count_mismatch(tmp_path, summary_text):
    txt = tmp_path / "summary.txt"
    txt.write_text(summary_text, "utf-8")
    result = runner.invoke(app, ["parse", str(txt), "--chapters", "10"])
    assert result.exit_code == 1
    assert "ChapterCountMismatch" in result.output


def test_run_rejects_bad_config(tmp_path):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"chapter_count": 0}), "utf-8")
    result = runner.invoke(app, ["run", "--config", str(cfg), "--var-dir", str(tmp_path / "var")])
    assert result.exit_code == 1
    assert not (tmp_path / "var").exists()


def test_parse_command_reports_broken_plot_file(tmp_path, summary_text):
    txt = tmp_path / "summary.txt"
    txt.write_text(summary_text, "utf-8")
    plotto = tmp_path / "plotto.json"
    plotto.write_text("{not json", "utf-8")
    result = runner.invoke(app, ["parse", str(txt), "--plot", str(plotto)])
    assert result.exit_code == 1
    assert "FormatError" in result.output


def test_run_rejects_plot_file_before_creating_run_dir(tmp_path):
    plotto = tmp_path / "plotto.json"
    plotto.write_text(json.dumps({"cast": [{"name": "a"}]}), "utf-8")
    result = runner.invoke(app, ["run", "--plot", str(plotto), "--var-dir", str(tmp_path / "var")])
    assert result.exit_code == 1
    assert "FormatError" in result.output
    assert not (tmp_path / "var").exists()


def test_assemble_command(tmp_path, summary_text):
    store = FileArtifactStore(tmp_path)
    store.write_json("summary.json", dump(parse_summary(summary_text)))
    store.write("src/ch-1-sc-1.md", "Rain fell.")
    result = runner.invoke(app, ["assemble", str(tmp_path)])
    assert result.exit_code == 0, result.output
    text = (tmp_path / "manuscript.md").read_text("utf-8")
    assert text.startswith("# Fresh Beginnings\n\n## Chapter 1: The Signal\n\nRain fell.")


def test_assemble_command_without_scenes_fails(tmp_path, summary_text):
    FileArtifactStore(tmp_path).write_json("summary.json", dump(parse_summary(summary_text)))
    result = runner.invoke(app, ["assemble", str(tmp_path)])
    assert result.exit_code == 1
    assert "FormatError" in result.output


def test_run_command_writes_a_full_draft(tmp_path, monkeypatch, restore_root):
    built = {}

    def fake_backend(**kwargs):
        built.update(kwargs)
        return FakeBackend(responder=story_responder)

    monkeypatch.setattr("draftsmith.__main__.OpenAIBackend", fake_backend)
    var = tmp_path / "var"
    result = runner.invoke(app, [
        "run", "--var-dir", str(var), "--chapters", "2", "--seed", "3", "--max-tokens", "500",
    ])

    assert result.exit_code == 0, result.output
    assert built["max_tokens"] == 500
    (run_dir,) = list(var.iterdir())
    assert (run_dir / "summary.json").is_file()
    assert (run_dir / "src" / "ch-2-sc-4.md").read_text("utf-8") == (
        "Rain fell on the server farm.\nShe logged in.\n\nThe story went on."
    )
    manuscript = (run_dir / "manuscript.md").read_text("utf-8")
    assert manuscript.startswith("# Fresh Beginnings\n\n## Chapter 1: The Signal")
