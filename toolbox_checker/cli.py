"""CLI entry point: toolbox-check.

Subcommands:
    toolbox-check check myapp                  # Load or discover, then verify
    toolbox-check check myapp --regenerate     # Force a fresh discovery
    toolbox-check show                         # Print the cached manifest
    toolbox-check clear                        # Delete the cached manifest
"""

from __future__ import annotations

import sys
from importlib import metadata
from pathlib import Path

import click

from toolbox_checker.checker import REGENERATE, ToolboxChecker
from toolbox_checker.core.config import Settings
from toolbox_checker.core.logging import setup_logging
from toolbox_checker.exceptions import ConfigError, ToolboxCheckerError
from toolbox_checker.host import AutoConsole, ClickConsole, PythonVersionChecker
from toolbox_checker.manifest import delete_manifest, read_manifest
from toolbox_checker.models import CheckStatus
from toolbox_checker.progress import DiscoveryProgress, FileProgress
from toolbox_checker.schemas import CheckReport

EXIT_CODES = {
    CheckStatus.SUCCESS: 0,
    CheckStatus.INCOMPLETE: 1,
    CheckStatus.ABORTED: 2,
}


def _app_version(app_name: str) -> str | None:
    """Installed version of ``app_name``, if it is a distribution."""
    try:
        return metadata.version(app_name)
    except metadata.PackageNotFoundError:
        return None


def _echo_progress(p: FileProgress) -> None:
    click.echo(f"\rChecked {p.done} of {p.total} files", nl=p.done >= p.total, err=True)


def _settings(ctx: click.Context) -> Settings:
    return ctx.obj["settings"]


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Toolbox checker: find, cache and verify the packages an app requires."""
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CODES[CheckStatus.ABORTED])
    setup_logging("DEBUG" if verbose else settings.log_level, settings.log_format)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@main.command("check")
@click.argument("app_name")
@click.option("--regenerate", is_flag=True, help="Delete the cached list and rediscover")
@click.option("--root", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Application root (default: nearest directory with the anchor file)")
@click.option("--cache-file", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Manifest cache file")
@click.option("--exclude", multiple=True, help="Glob or directory name to skip (repeatable)")
@click.option("--app-version", default=None, help="Version shown in the banner")
@click.option("--yes", "assume_yes", is_flag=True, help="Accept every confirmation")
@click.option("--no", "assume_no", is_flag=True, help="Decline every confirmation")
@click.option("--json", "as_json", is_flag=True, help="Output a JSON report")
@click.pass_context
def check(
    ctx: click.Context,
    app_name: str,
    regenerate: bool,
    root: Path | None,
    cache_file: Path | None,
    exclude: tuple[str, ...],
    app_version: str | None,
    assume_yes: bool,
    assume_no: bool,
    as_json: bool,
) -> None:
    """Check that every package APP_NAME requires is installed."""
    if assume_yes and assume_no:
        raise click.UsageError("--yes and --no are mutually exclusive")
    settings = _settings(ctx)
    try:
        if not app_name.strip():
            raise ConfigError("app_name", app_name, "must not be empty")

        progress = DiscoveryProgress()
        progress.callbacks.append(_echo_progress)

        checker = ToolboxChecker(
            cache_file=cache_file or Path(settings.cache_file),
            root=root,
            anchor=settings.anchor,
            exclude=[*settings.exclude, *exclude],
            app_version=app_version or _app_version(app_name),
            version_checker=PythonVersionChecker(settings.min_python),
            console=(
                AutoConsole(assume_yes, err=as_json)
                if assume_yes or assume_no
                else ClickConsole(err=as_json)
            ),
            progress=progress,
        )
        result = checker.check(app_name, [REGENERATE] if regenerate else [])
    except ToolboxCheckerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CODES[CheckStatus.ABORTED])

    if as_json:
        click.echo(CheckReport.from_result(app_name, result).model_dump_json(indent=2))
    elif result.status is CheckStatus.ABORTED:
        click.echo("Toolbox check aborted: required toolbox list is unavailable.", err=True)
    elif result.status is CheckStatus.SUCCESS:
        click.echo(f"All {len(result.manifest)} required toolboxes are installed.")
    else:
        click.echo(f"{len(result.missing)} of {len(result.manifest)} required toolboxes are missing.")

    sys.exit(EXIT_CODES[result.status])


@main.command("show")
@click.option("--cache-file", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Manifest cache file")
@click.pass_context
def show(ctx: click.Context, cache_file: Path | None) -> None:
    """Print the cached manifest, one package per line."""
    path = cache_file or Path(_settings(ctx).cache_file)
    if not path.is_file():
        click.echo(f"No cached toolbox list at {path}", err=True)
        sys.exit(1)
    for name in read_manifest(path):
        click.echo(name)


@main.command("clear")
@click.option("--cache-file", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Manifest cache file")
@click.pass_context
def clear(ctx: click.Context, cache_file: Path | None) -> None:
    """Delete the cached manifest so the next check rediscovers it."""
    path = cache_file or Path(_settings(ctx).cache_file)
    if delete_manifest(path):
        click.echo(f"Deleted {path}")
    else:
        click.echo(f"No cached toolbox list at {path}")


if __name__ == "__main__":
    main()
