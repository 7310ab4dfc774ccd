"""CLI adapter for ``lib_yaml_updater`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose the updater via a command line interface so operators can reconcile a
configuration file with a newer default, inspect comment attribution, or place
a default template without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_update` – runs :class:`lib_yaml_updater.core.YAMLUpdater`.
* :func:`cli_comments` – prints the comment map of a YAML file as JSON.
* :func:`cli_deploy` – copies a default template into place.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It invokes the composition root and never
reaches into adapter implementation details directly. ``lib_cli_exit_tools``
centralises the exit code strategy so all commands behave consistently across
shells and CI.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.file_loaders.structured import YAMLFileLoader
from .application.comments import extract_comments
from .core import YAMLUpdater
from .files import deploy_file

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000


def _resolve_version() -> str:
    """Return the installed package version with sensible fallbacks.

    Returns
    -------
    str
        Distribution version if available, otherwise ``"0.0.0"``.
    """

    try:
        return metadata.version("lib_yaml_updater")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Format-preserving YAML configuration updater",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_yaml_updater",
    message="lib_yaml_updater version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_yaml_updater")
    except metadata.PackageNotFoundError:
        click.echo("lib_yaml_updater (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_yaml_updater')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("update", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--default",
    "default",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
    required=True,
    help="Default template providing keys, order, and comments",
)
@click.option(
    "--file",
    "file",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
    required=True,
    help="User-edited YAML file to update in place",
)
@click.option(
    "--ignore",
    "ignored",
    multiple=True,
    help="Dotted path of a section to keep exactly as in --file (repeatable)",
)
@click.option(
    "--dry-run/--no-dry-run",
    default=False,
    help="Print the merged document instead of writing it",
    show_default=True,
)
def cli_update(default: Path, file: Path, ignored: Sequence[str], dry_run: bool) -> None:
    """Merge *default* into *file*, keeping user values and ignored sections.

    What
    -----
    Emits ``{"file": ..., "changed": ...}`` as JSON. With ``--dry-run`` the
    merged document is printed and the file is left alone.
    """

    updater = YAMLUpdater.from_paths(default, file, _normalize_ignored(ignored))
    if dry_run:
        click.echo(updater.render(), nl=False)
        return
    changed = updater.update()
    click.echo(json.dumps({"file": str(file), "changed": changed}, indent=2))


@cli.command("comments", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--source",
    "source",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
    required=True,
    help="YAML file whose comments should be attributed",
)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
def cli_comments(source: Path, indent: Optional[int]) -> None:
    """Print the comment block attributed to each dotted key as JSON.

    Comments after the last key are listed under ``"null"``.
    """

    document = YAMLFileLoader().load(str(source))
    comments = extract_comments(document.text, document.paths)
    click.echo(json.dumps(dict(comments), indent=indent, ensure_ascii=False))


@cli.command("deploy", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--source",
    "source",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
    required=True,
    help="Default template that should be copied",
)
@click.option(
    "--destination",
    type=click.Path(path_type=Path, file_okay=True, dir_okay=False),
    required=True,
    help="Where the user-editable copy should live",
)
@click.option(
    "--force/--no-force",
    default=False,
    help="Overwrite an existing destination if set",
    show_default=True,
)
def cli_deploy(source: Path, destination: Path, force: bool) -> None:
    """Copy *source* to *destination* unless a user file already exists.

    Emits a JSON array listing the file that was created or overwritten.
    """

    written = deploy_file(source, destination, force=force)
    click.echo(json.dumps([str(destination)] if written else [], indent=2))


def _normalize_ignored(values: Sequence[str]) -> tuple[str, ...]:
    """Strip whitespace and drop empty entries while preserving order."""

    return tuple(value.strip() for value in values if value.strip())


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_yaml_updater",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
