"""End-to-end coverage of :class:`YAMLUpdater` against files on disk.

Each test writes a default template and a user file below ``tmp_path`` and
checks the exact bytes the updater leaves behind.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from lib_yaml_updater import (
    DirectoryResourceLoader,
    InvalidFormat,
    InvalidIgnoredPath,
    NotFound,
    WriteError,
    YAMLUpdater,
    update_file,
)

CUSTOMISED = """\
a:
  b: 5
x:
  y:
    # custom
    extra: true
    k: changed
"""

MERGED = """\
# Main settings
a:
  # hello
  b: 5
  c: 1
# x section
x:
  y:
    # custom
    extra: true
    k: changed
  z: 3
list:
- one
- two

# end of file
"""


def test_update_merges_values_comments_and_ignored_sections(default_template: Path, write_yaml) -> None:
    """User values and the ignored section survive; missing keys arrive with their comments."""

    config = write_yaml("config.yml", CUSTOMISED)
    assert update_file(default_template, config, ["x.y"]) is True
    assert config.read_text(encoding="utf-8") == MERGED


def test_second_update_is_a_no_op(default_template: Path, write_yaml) -> None:
    config = write_yaml("config.yml", CUSTOMISED)
    assert update_file(default_template, config, ["x.y"]) is True
    modified = config.stat().st_mtime_ns
    assert update_file(default_template, config, ["x.y"]) is False
    assert config.stat().st_mtime_ns == modified


def test_empty_file_receives_the_whole_template(default_template: Path, write_yaml, default_text: str) -> None:
    config = write_yaml("config.yml", "")
    assert update_file(default_template, config) is True
    assert config.read_text(encoding="utf-8") == default_text


def test_render_leaves_the_file_untouched(default_template: Path, write_yaml) -> None:
    config = write_yaml("config.yml", CUSTOMISED)
    updater = YAMLUpdater.from_paths(default_template, config, ["x.y"])
    assert updater.render() == MERGED
    assert config.read_text(encoding="utf-8") == CUSTOMISED


def test_updater_exposes_its_caches(default_template: Path, write_yaml) -> None:
    config = write_yaml("config.yml", CUSTOMISED)
    updater = YAMLUpdater.from_paths(default_template, config, ["x.y"])
    assert updater.file == config
    assert updater.default.get("a.b") == 10
    assert updater.current.get("a.b") == 5
    assert updater.comments["a"] == "# Main settings\n"
    assert updater.comments[None] == "\n# end of file\n"
    assert list(updater.ignored_blocks) == ["x.y"]


def test_numeric_keys_in_ignored_paths(write_yaml) -> None:
    default = write_yaml("default.yml", "groups:\n  1:\n    name: admin\n  2:\n    name: user\n")
    config = write_yaml("config.yml", "groups:\n  1:\n    name: root\n    extra: x\n")
    assert update_file(default, config, ["groups.1"]) is True
    assert config.read_text(encoding="utf-8") == (
        "groups:\n  1:\n    name: root\n    extra: x\n  2:\n    name: user\n"
    )


def test_invalid_ignored_path_raises_before_writing(default_template: Path, write_yaml) -> None:
    config = write_yaml("config.yml", CUSTOMISED)
    with pytest.raises(InvalidIgnoredPath) as excinfo:
        update_file(default_template, config, ["a.b"])
    assert excinfo.value.path == "a.b"
    assert config.read_text(encoding="utf-8") == CUSTOMISED


def test_ignored_path_absent_from_default_logs_warning(default_template: Path, write_yaml, caplog) -> None:
    config = write_yaml("config.yml", "custom:\n  keep: 1\n")
    with caplog.at_level(logging.WARNING, logger="lib_yaml_updater"):
        updater = YAMLUpdater.from_paths(default_template, config, ["custom"])
    assert [record.message for record in caplog.records] == ["ignored_path_not_in_default"]
    assert caplog.records[0].context["ignored"] == "custom"
    assert "custom" not in updater.render()


def test_missing_file_raises_not_found(default_template: Path, tmp_path: Path) -> None:
    with pytest.raises(NotFound, match="File does not exist"):
        YAMLUpdater.from_paths(default_template, tmp_path / "config.yml")


def test_missing_resource_raises_not_found(tmp_path: Path, write_yaml) -> None:
    config = write_yaml("config.yml", "a: 1\n")
    with pytest.raises(NotFound):
        YAMLUpdater(DirectoryResourceLoader(tmp_path), "absent.yml", config)


def test_invalid_yaml_raises_invalid_format(default_template: Path, write_yaml) -> None:
    config = write_yaml("config.yml", "a: [unclosed\n")
    with pytest.raises(InvalidFormat):
        YAMLUpdater.from_paths(default_template, config)


def test_dotted_default_keys_are_rejected(write_yaml) -> None:
    default = write_yaml("default.yml", "server:\n  'host.name': x\n")
    config = write_yaml("config.yml", "")
    with pytest.raises(InvalidFormat, match="host.name"):
        YAMLUpdater.from_paths(default, config)


def test_write_failure_raises_write_error(default_template: Path, write_yaml, monkeypatch, caplog) -> None:
    config = write_yaml("config.yml", CUSTOMISED)
    updater = YAMLUpdater.from_paths(default_template, config, ["x.y"])

    def _refuse(self, data):
        raise PermissionError("read-only file system")

    monkeypatch.setattr(Path, "write_bytes", _refuse)
    with caplog.at_level(logging.ERROR, logger="lib_yaml_updater"):
        with pytest.raises(WriteError, match="read-only"):
            updater.update()
    assert caplog.records[-1].message == "update_failed"


def test_update_events_are_logged(default_template: Path, write_yaml, caplog) -> None:
    config = write_yaml("config.yml", CUSTOMISED)
    with caplog.at_level(logging.INFO, logger="lib_yaml_updater"):
        update_file(default_template, config, ["x.y"])
        update_file(default_template, config, ["x.y"])
    messages = [record.message for record in caplog.records]
    assert messages == ["update_written", "update_unchanged"]
    assert caplog.records[0].context["path"] == str(config)


def test_byte_order_mark_keeps_leading_comment(write_yaml) -> None:
    default = write_yaml("default.yml", "\ufeff# top\na: 1\n")
    config = write_yaml("config.yml", "")
    assert update_file(default, config) is True
    assert config.read_text(encoding="utf-8") == "# top\na: 1\n"
