"""End-to-end CLI coverage for the ``update``, ``comments``, ``deploy`` and
``info`` commands."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

import lib_cli_exit_tools

from lib_yaml_updater import cli
from lib_yaml_updater.domain.errors import InvalidIgnoredPath


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def test_cli_update_reports_change(default_template: Path, write_yaml) -> None:
    config = write_yaml("config.yml", "a:\n  b: 5\n")
    args = ["update", "--default", str(default_template), "--file", str(config)]

    first = _runner().invoke(cli.cli, args)
    assert first.exit_code == 0
    assert json.loads(first.output) == {"file": str(config), "changed": True}
    assert "  b: 5\n" in config.read_text(encoding="utf-8")

    second = _runner().invoke(cli.cli, args)
    assert second.exit_code == 0
    assert json.loads(second.output)["changed"] is False


def test_cli_update_dry_run_prints_merge(default_template: Path, write_yaml) -> None:
    config = write_yaml("config.yml", "x:\n  y:\n    mine: 1\n")
    result = _runner().invoke(
        cli.cli,
        ["update", "--default", str(default_template), "--file", str(config), "--ignore", " x.y ", "--dry-run"],
    )
    assert result.exit_code == 0
    assert "x:\n  y:\n    mine: 1\n  z: 3\n" in result.output
    assert config.read_text(encoding="utf-8") == "x:\n  y:\n    mine: 1\n"


def test_cli_update_invalid_ignored_path_fails(default_template: Path, write_yaml) -> None:
    config = write_yaml("config.yml", "a:\n  b: 5\n")
    result = _runner().invoke(
        cli.cli,
        ["update", "--default", str(default_template), "--file", str(config), "--ignore", "a.b"],
    )
    assert result.exit_code != 0
    assert isinstance(result.exception, InvalidIgnoredPath)


def test_cli_comments_outputs_json(default_template: Path) -> None:
    result = _runner().invoke(cli.cli, ["comments", "--source", str(default_template), "--indent", "2"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["a"] == "# Main settings\n"
    assert payload["x"] == "# x section\n"
    assert payload["null"] == "\n# end of file\n"


def test_cli_deploy_command(default_template: Path, tmp_path: Path) -> None:
    destination = tmp_path / "user" / "config.yml"
    args = ["deploy", "--source", str(default_template), "--destination", str(destination)]

    first = _runner().invoke(cli.cli, args)
    assert first.exit_code == 0
    assert json.loads(first.output) == [str(destination)]

    destination.write_text("a:\n  b: 1\n", encoding="utf-8")
    second = _runner().invoke(cli.cli, args)
    assert second.exit_code == 0
    assert json.loads(second.output) == []
    assert destination.read_text(encoding="utf-8") == "a:\n  b: 1\n"

    forced = _runner().invoke(cli.cli, [*args, "--force"])
    assert forced.exit_code == 0
    assert json.loads(forced.output) == [str(destination)]
    assert destination.read_text(encoding="utf-8") == default_template.read_text(encoding="utf-8")


def test_cli_info_handles_missing_metadata(monkeypatch) -> None:
    """`cli info` must degrade gracefully when package metadata is unavailable."""

    def _raise_pkg_not_found(*_args, **_kwargs):
        raise cli.metadata.PackageNotFoundError()

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output


def test_cli_main_restores_traceback_flag(default_template: Path, write_yaml) -> None:
    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    config = write_yaml("config.yml", "a:\n  b: 5\n")
    exit_code = cli.main(
        ["--traceback", "update", "--default", str(default_template), "--file", str(config)],
        restore_traceback=True,
    )
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback


def test_cli_main_reports_missing_file(default_template: Path, tmp_path: Path) -> None:
    exit_code = cli.main(["update", "--default", str(default_template), "--file", str(tmp_path / "absent.yml")])
    assert exit_code != 0
