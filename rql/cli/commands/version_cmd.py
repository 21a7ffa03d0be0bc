from __future__ import annotations

import platform

import click
import rich_click

import rql
from rql.query import Infix
from rql.tokens import KEYWORDS, RESERVED_KEYWORDS

from ..context import CLIContext
from ..runner import CommandOutput, run_command


def _grammar_summary() -> dict[str, list[str]]:
    """Keywords the parser accepts, and those it only reserves."""
    reserved = [name for name, token_type in KEYWORDS.items() if token_type in RESERVED_KEYWORDS]
    return {
        "comparators": [infix.keyword for infix in Infix],
        "combinators": ["and", "or"],
        "reserved": sorted(reserved),
    }


@click.command(name="version", cls=rich_click.RichCommand)
@click.pass_obj
def version_cmd(ctx: CLIContext) -> None:
    """Show version information and the supported query keywords."""

    def fn(_: CLIContext, _warnings: list[str]) -> CommandOutput:
        data = {
            "version": rql.__version__,
            "pythonVersion": platform.python_version(),
            "platform": platform.platform(),
            "grammar": _grammar_summary(),
        }
        return CommandOutput(data=data)

    run_command(ctx, command="version", fn=fn)
