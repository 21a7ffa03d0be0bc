from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from rql.query import Infix

from .results import CommandResult


@dataclass(frozen=True, slots=True)
class RenderSettings:
    output: str  # "tree" | "text" | "repr" | "json"
    quiet: bool
    verbosity: int


def _error_title(error_type: str) -> str:
    mapping = {
        "usage_error": "Usage error",
        "io_error": "I/O error",
        "parse_error": "Parse error",
        "not_implemented": "Not supported",
        "internal_error": "Internal error",
    }
    return mapping.get((error_type or "").strip(), "Error")


def _render_error_details(
    *,
    stderr: Console,
    hint: str | None,
    details: dict[str, Any] | None,
    settings: RenderSettings,
) -> None:
    if settings.quiet:
        return
    if hint:
        stderr.print(f"Hint: {hint}", markup=False, highlight=False)
    if details and settings.verbosity >= 1:
        for key, value in details.items():
            stderr.print(f"  {key}: {value}", markup=False, highlight=False)


# =============================================================================
# Query trees
# =============================================================================


def _format_literal(value: dict[str, Any]) -> str:
    kind = value.get("type")
    raw = value.get("value")
    if kind == "string":
        return f'"{raw}"'
    if kind == "boolean":
        return "true" if raw else "false"
    return str(raw)


def _node_label(node: dict[str, Any]) -> Text:
    if "and" in node:
        return Text("and", style="bold")
    if "or" in node:
        return Text("or", style="bold")
    if "filter" in node:
        flt = node["filter"]
        symbol = Infix(flt["op"]).symbol
        return Text(f"{flt['field']} {symbol} {_format_literal(flt['value'])}")
    if "sort" in node:
        sort = node["sort"]
        return Text(f"sort {sort['direction']}{_format_literal(sort['value'])}")
    return Text("none", style="dim")


def _add_children(tree: Tree, node: dict[str, Any]) -> Tree:
    for child in node.get("and", node.get("or", [])):
        _add_children(tree.add(_node_label(child)), child)
    return tree


def query_tree(node: dict[str, Any]) -> Tree:
    """Build a rich Tree from ``Query.to_dict()`` output."""
    return _add_children(Tree(_node_label(node)), node)


def tokens_table(tokens: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("pos", justify="right")
    table.add_column("type")
    table.add_column("literal")
    for token in tokens:
        table.add_row(str(token["pos"]), token["type"], token["literal"])
    return table


# =============================================================================
# Entry point
# =============================================================================


def render_result(result: CommandResult, *, settings: RenderSettings) -> int:
    stdout = Console(file=sys.stdout, force_terminal=False)
    stderr = Console(file=sys.stderr, force_terminal=False)

    if settings.output == "json":
        payload = result.model_dump(by_alias=True, mode="json")
        sys.stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")
        return 0

    if not result.ok:
        if result.error is not None:
            title = _error_title(result.error.type)
            stderr.print(f"{title}: {result.error.message}", markup=False, highlight=False)
            _render_error_details(
                stderr=stderr,
                hint=result.error.hint,
                details=result.error.details,
                settings=settings,
            )
        else:
            stderr.print("Error")
        return 0

    data = result.data if isinstance(result.data, dict) else {}
    if result.command == "parse":
        if settings.output in ("text", "repr"):
            # Plain write: rich would wrap long queries
            sys.stdout.write(f"{data.get(settings.output, '')}\n")
            return 0
        stdout.print(query_tree(data.get("query", {})))
    elif result.command == "tokens":
        if settings.output == "text":
            sys.stdout.write(" ".join(t["text"] for t in data.get("tokens", [])) + "\n")
            return 0
        stdout.print(tokens_table(data.get("tokens", [])))
    elif result.command == "version":
        stdout.print(Text(data.get("version", ""), style="bold"))
        for label, keywords in data.get("grammar", {}).items():
            stdout.print(f"{label}: {', '.join(keywords)}", markup=False, highlight=False)
    else:
        stdout.print(Text(json.dumps(data, ensure_ascii=False)))
    return 0
