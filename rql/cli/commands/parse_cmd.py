from __future__ import annotations

from pathlib import Path

import click
import rich_click

from rql.parser import Parser
from rql.tokens import TokenType

from ..context import CLIContext, read_query_text
from ..runner import CommandOutput, run_command


@click.command(name="parse", cls=rich_click.RichCommand)
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
def parse_cmd(ctx: CLIContext, query: str | None, file_path: Path | None) -> None:
    """Parse QUERY and print its tree.

    QUERY defaults to standard input; pass '-' to read it explicitly.
    """

    def fn(_: CLIContext, warnings: list[str]) -> CommandOutput:
        text = read_query_text(query, file_path)
        parser = Parser(text)
        parsed = parser.parse_query()
        if parser.cur_token.type != TokenType.EOF:
            warnings.append(
                f"Ignoring input after the query, starting at position {parser.cur_token.pos} "
                f"({parser.cur_token.describe()})"
            )
        data = {
            "query": parsed.to_dict(),
            "text": str(parsed),
            "repr": repr(parsed),
        }
        return CommandOutput(data=data, warnings=warnings, input_length=len(text))

    run_command(ctx, command="parse", fn=fn)
