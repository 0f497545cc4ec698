"""Main CLI application entry point.

Defines the Typer application: parses flags, loads configuration,
determines the home cell and runs the traversal.
"""

from pathlib import Path
from typing import Annotated

import click
import typer
from pydantic import ValidationError
from typer.core import TyperCommand

from afswalk import __version__
from afswalk.afs.client import FsClient
from afswalk.afs.reporter import Reporter
from afswalk.afs.walker import Walker
from afswalk.core.config import ConfigError, WalkConfig, load_config
from afswalk.core.errors import FatalSetupError
from afswalk.core.log import configure_logging, verbosity_to_level
from afswalk.utils.formatting import print_error, print_warning
from afswalk.utils.shell import command_exists

app = typer.Typer(
    name="afswalk",
    help="Report AFS mount points and access lists within one cell.",
    no_args_is_help=False,
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"afswalk version {__version__}")
        raise typer.Exit()


class WalkCommand(TyperCommand):
    """Command class that reports every usage error with exit code 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def _usage_error(ctx: typer.Context, message: str) -> typer.Exit:
    typer.echo(ctx.get_usage(), err=True)
    print_error(message)
    return typer.Exit(code=1)


@app.command(cls=WalkCommand)
def walk(
    ctx: typer.Context,
    root: Annotated[
        str | None,
        typer.Argument(help="Directory to start from (default: /afs or config root)."),
    ] = None,
    debug: Annotated[
        int,
        typer.Option(
            "-d",
            "--debug",
            count=True,
            help="Raise debug verbosity; repeat for more detail.",
        ),
    ] = 0,
    cell: Annotated[
        str | None,
        typer.Option(
            "--cell",
            help="Cell to inventory (default: the workstation's cell).",
        ),
    ] = None,
    mounts: Annotated[
        bool | None,
        typer.Option(
            "--mounts/--no-mounts",
            help="Report mount points.",
            show_default=False,
        ),
    ] = None,
    acls: Annotated[
        bool | None,
        typer.Option(
            "--acls/--no-acls",
            help="Report access control lists.",
            show_default=False,
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file (default: ~/.config/afswalk/config.toml).",
        ),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Walk an AFS tree and report mount points and/or ACLs.

    Volumes mounted more than once are descended only the first time,
    and mounts into other cells are reported but not followed.

    Examples:
        afswalk                             # Mount points below /afs
        afswalk --acls --no-mounts          # Only ACLs that change
        afswalk --cell example.org /afs     # Explicit home cell
        afswalk -dd /afs/example.org        # Trace every probe
    """
    configure_logging(verbosity_to_level(debug))

    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    report_mounts = config.mounts if mounts is None else mounts
    report_acls = config.acls if acls is None else acls
    if not report_mounts and not report_acls:
        raise _usage_error(ctx, "Nothing to report: enable --mounts and/or --acls.")

    if root is not None:
        try:
            config = WalkConfig.model_validate({**config.model_dump(), "root": root})
        except (ValueError, ValidationError) as e:
            raise _usage_error(ctx, f"Invalid root '{root}': must be an absolute path.") from e

    if not command_exists(config.fs_command):
        print_error(f"AFS command '{config.fs_command}' not found.")
        raise typer.Exit(code=1)

    client = FsClient(config.fs_command, timeout=config.timeout_seconds)

    home_cell = cell.lower() if cell else client.workstation_cell(Path(config.this_cell_file))
    if not home_cell:
        print_error("Cannot determine the home cell; use --cell.")
        raise typer.Exit(code=1)

    reporter = Reporter(home_cell, mounts=report_mounts, acls=report_acls)
    walker = Walker(client, reporter, home_cell, root=config.root, acls=report_acls)

    try:
        stats = walker.run()
    except FatalSetupError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if stats.probe_failures:
        print_warning(
            f"{stats.probe_failures} director"
            f"{'y' if stats.probe_failures == 1 else 'ies'} could not be examined."
        )


if __name__ == "__main__":
    app()
