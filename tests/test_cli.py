from __future__ import annotations

import importlib
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from docxref.core.artifact import read_artifact, write_artifact
from docxref.ui.cli import app
from docxref.ui.cli.presenter import fragment_text
import docxref.ui.cli.state as cli_state


app_module = importlib.import_module("docxref.ui.cli.app")
FIXTURES = Path(__file__).parent / "fixtures" / "doc"
DEBUG = FIXTURES / "implementors" / "core" / "fmt" / "trait.Debug.js"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _reset_state(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_state, "_CLI_STATE", cli_state.CLIState())


def test_help_lists_commands(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("list", "show", "merge"):
        assert command in result.stdout


def test_list_summarises_traits(runner: CliRunner) -> None:
    result = runner.invoke(app, ["list", str(FIXTURES)])
    assert result.exit_code == 0, result.output
    assert "core::fmt::Debug" in result.stdout
    assert "core::iter::traits::IntoIterator" in result.stdout


def test_show_single_script_plain(runner: CliRunner) -> None:
    result = runner.invoke(app, ["show", str(DEBUG), "--plain"])
    assert result.exit_code == 0, result.output
    assert "impl Debug for Map" in result.stdout
    assert "<a class" not in result.stdout


def test_show_filters_by_trait_and_group(runner: CliRunner) -> None:
    result = runner.invoke(
        app,
        [
            "show",
            str(FIXTURES),
            "--trait",
            "core::iter::traits::IntoIterator",
            "--group",
            "itertools",
            "--plain",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "RcIter" in result.stdout
    assert "VecDeque" not in result.stdout
    assert "Debug" not in result.stdout


def test_show_unknown_trait_fails(runner: CliRunner) -> None:
    result = runner.invoke(app, ["show", str(FIXTURES), "--trait", "core::Missing"])
    assert result.exit_code == 1


def test_show_uses_configured_doc_root(runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "docxref.yml"
    config.write_text(
        f"doc_root: {FIXTURES.as_posix()}\nplain_text: true\nexclude_groups: [itertools]\n",
        encoding="utf-8",
    )
    result = runner.invoke(app, ["--config", str(config), "show"])
    assert result.exit_code == 0, result.output
    assert "OrderedSet" in result.stdout
    assert "GroupByLazy" not in result.stdout


def test_show_without_root_fails(runner: CliRunner) -> None:
    result = runner.invoke(app, ["show"])
    assert result.exit_code == 1


def test_invalid_config_fails(runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "docxref.yml"
    config.write_text("bogus: true\n", encoding="utf-8")
    result = runner.invoke(app, ["--config", str(config), "list", str(FIXTURES)])
    assert result.exit_code == 1


def test_strict_mode_reports_broken_scripts(runner: CliRunner, tmp_path: Path) -> None:
    root = tmp_path / "implementors"
    (root / "core").mkdir(parents=True)
    (root / "core" / "trait.Bad.js").write_text("garbage", encoding="utf-8")
    config = tmp_path / "docxref.yml"
    config.write_text("strict: true\n", encoding="utf-8")

    lenient = runner.invoke(app, ["list", str(tmp_path)], env={"COLUMNS": "400"})
    assert lenient.exit_code == 0, lenient.output
    assert "warning: Skipping" in lenient.output
    assert "trait.Bad.js" in lenient.output

    strict = runner.invoke(app, ["--config", str(config), "list", str(tmp_path)])
    assert strict.exit_code == 1


def _write_pair(tmp_path: Path) -> tuple[Path, Path]:
    first = write_artifact(tmp_path / "a" / "trait.Demo.js", {"x": ["one"], "y": ["two"]})
    second = write_artifact(tmp_path / "b" / "trait.Demo.js", {"x": ["three"]})
    return first, second


def test_merge_replaces_groups_by_default(runner: CliRunner, tmp_path: Path) -> None:
    first, second = _write_pair(tmp_path)
    output = tmp_path / "out" / "trait.Demo.js"

    result = runner.invoke(app, ["merge", str(output), str(first), str(second)])

    assert result.exit_code == 0, result.output
    assert "Wrote 2 group(s) with 2 implementor(s)" in result.stdout
    assert read_artifact(output) == {"x": ["three"], "y": ["two"]}


def test_merge_appends_with_config(runner: CliRunner, tmp_path: Path) -> None:
    first, second = _write_pair(tmp_path)
    output = tmp_path / "trait.Merged.js"
    config = tmp_path / "docxref.yml"
    config.write_text("merge: append\n", encoding="utf-8")

    result = runner.invoke(
        app, ["--config", str(config), "merge", str(output), str(first), str(second)]
    )

    assert result.exit_code == 0, result.output
    assert read_artifact(output) == {"x": ["one", "three"], "y": ["two"]}


def test_merge_reports_malformed_input(runner: CliRunner, tmp_path: Path) -> None:
    broken = tmp_path / "trait.Broken.js"
    broken.write_text("garbage", encoding="utf-8")
    result = runner.invoke(app, ["merge", str(tmp_path / "out.js"), str(broken)])
    assert result.exit_code == 1
    assert not (tmp_path / "out.js").exists()


def test_fragment_text_strips_markup() -> None:
    fragment = (
        'impl&lt;T&gt; <a class="trait" href="x.html">IntoIterator</a> for '
        '<a class="struct" href="y.html">Thing</a>&lt;T&gt;'
    )
    assert fragment_text(fragment) == "impl<T> IntoIterator for Thing<T>"


def test_verbose_errors_include_exception_type(runner: CliRunner, tmp_path: Path) -> None:
    broken = tmp_path / "trait.Broken.js"
    broken.write_text("garbage", encoding="utf-8")

    quiet = runner.invoke(app, ["merge", str(tmp_path / "out.js"), str(broken)])
    assert "error:" in quiet.output
    assert "type: ArtifactFormatError" not in quiet.output

    verbose = runner.invoke(app, ["-v", "merge", str(tmp_path / "out.js"), str(broken)])
    assert verbose.exit_code == 1
    assert "type: ArtifactFormatError" in verbose.output
    assert "caused by:" not in verbose.output

    very_verbose = runner.invoke(app, ["-vv", "merge", str(tmp_path / "out.js"), str(broken)])
    assert "caused by:" in very_verbose.output
    assert "No implementors assignments found." in very_verbose.output


def test_render_message_adds_hint_from_cause(capsys: pytest.CaptureFixture[str]) -> None:
    cli_state.set_cli_state(verbosity=1)
    try:
        raise ValueError("unknown key 'bogus'")
    except ValueError as cause:
        error = RuntimeError("Invalid configuration")
        error.__cause__ = cause

    cli_state.emit_error("Invalid configuration", exception=error)

    err = capsys.readouterr().err
    assert "error: Invalid configuration" in err
    assert "hint: unknown key 'bogus'" in err
    assert "type: RuntimeError" in err


def _failing_app() -> None:
    raise RuntimeError("boom")


def test_main_reports_unexpected_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(app_module, "app", _failing_app)

    with pytest.raises(typer.Exit) as excinfo:
        app_module.main()

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "error: boom" in err
    assert "Traceback" not in err


def test_main_prints_traceback_in_debug_mode(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(app_module, "app", _failing_app)
    cli_state.set_cli_state(debug=True)

    with pytest.raises(typer.Exit):
        app_module.main()

    err = capsys.readouterr().err
    assert "Traceback" in err
    assert "boom" in err
