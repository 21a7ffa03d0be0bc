from __future__ import annotations

from pathlib import Path

import click
import rich_click

import rql

from .context import CLIContext
from .logging import configure_logging, restore_logging


@click.group(
    name="rql",
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"], "auto_envvar_prefix": "RQL"},
    cls=rich_click.RichGroup,
)
@click.option(
    "--output",
    type=click.Choice(["tree", "text", "repr", "json"]),
    default="tree",
    show_default=True,
    help="Output format.",
)
@click.option("--json", "json_flag", is_flag=True, help="Alias for --output json.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress warnings and error details.")
@click.option("-v", "verbose", count=True, help="Increase verbosity (-v, -vv).")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write log records to this file.",
)
@click.version_option(version=rql.__version__, prog_name="rql")
@click.pass_context
def cli(
    click_ctx: click.Context,
    *,
    output: str,
    json_flag: bool,
    quiet: bool,
    verbose: int,
    log_file: Path | None,
) -> None:
    """Parse and inspect rql filter queries such as and(eq(foo,"a"),gt(n,1))."""
    if click_ctx.invoked_subcommand is None:
        click.echo(click_ctx.get_help())
        raise click.exceptions.Exit(0)

    out = "json" if json_flag else output
    click_ctx.obj = CLIContext(
        output=out,  # type: ignore[arg-type]
        quiet=quiet,
        verbosity=verbose,
        log_file=log_file,
    )

    previous_logging = configure_logging(verbosity=verbose, log_file=log_file)
    click_ctx.call_on_close(lambda: restore_logging(previous_logging))


# Register commands
from .commands.parse_cmd import parse_cmd as _parse_cmd  # noqa: E402
from .commands.tokens_cmd import tokens_cmd as _tokens_cmd  # noqa: E402
from .commands.version_cmd import version_cmd as _version_cmd  # noqa: E402

cli.add_command(_parse_cmd)
cli.add_command(_tokens_cmd)
cli.add_command(_version_cmd)
