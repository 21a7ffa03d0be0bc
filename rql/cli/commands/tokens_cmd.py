from __future__ import annotations

from pathlib import Path

import click
import rich_click

from rql.lexer import tokenize

from ..context import CLIContext, read_query_text
from ..runner import CommandOutput, run_command


@click.command(name="tokens", cls=rich_click.RichCommand)
@click.argument("query", required=False)
@click.option(
    "-f",
    "--file",
    "file_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Read the query from a file.",
)
@click.pass_obj
def tokens_cmd(ctx: CLIContext, query: str | None, file_path: Path | None) -> None:
    """Print the token stream of QUERY (standard input by default)."""

    def fn(_: CLIContext, _warnings: list[str]) -> CommandOutput:
        text = read_query_text(query, file_path)
        tokens = [
            {
                "type": token.type.name,
                "literal": token.literal,
                "text": str(token),
                "pos": token.pos,
            }
            for token in tokenize(text)
        ]
        return CommandOutput(data={"tokens": tokens}, input_length=len(text))

    run_command(ctx, command="tokens", fn=fn)
