from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import click

from .errors import CLIError

OutputFormat = Literal["tree", "text", "repr", "json"]

# Query arguments that mean "read standard input"
STDIN_MARKERS = ("", "-")


@dataclass
class CLIContext:
    output: OutputFormat
    quiet: bool
    verbosity: int
    log_file: Path | None


def _read_stdin() -> str:
    try:
        return click.get_text_stream("stdin").read()
    except OSError as e:
        raise CLIError(f"Failed to read standard input: {e}", error_type="io_error") from None


def read_query_text(query: str | None, file_path: Path | None) -> str:
    """Resolve the query source: a file, the argument itself, or stdin."""
    if file_path is None:
        if query is None or query in STDIN_MARKERS:
            return _read_stdin()
        return query

    if query not in (None, *STDIN_MARKERS):
        raise CLIError("Pass the query either as an argument or with --file, not both.")
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CLIError(
            f"Failed to read query file: {e}",
            error_type="io_error",
            details={"path": str(file_path)},
        ) from None
