# topmark:header:start
#
#   project      : CartSniff
#   file         : schemes.py
#   file_relpath : src/cartsniff/cli/commands/schemes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CartSniff `schemes` command.

Lists every bankswitching scheme CartSniff can report, with its description
and (with ``--long``) the filename extensions that force it.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from cartsniff.cli.console import get_console
from cartsniff.cli.options import output_format_option
from cartsniff.core.formats import OutputFormat
from cartsniff.detection.extensions import extensions_for
from cartsniff.schemes import SchemeId

if TYPE_CHECKING:
    from cartsniff.cli.console import ConsoleLike


def _serialize(scheme: SchemeId, *, show_details: bool) -> dict[str, Any]:
    record: dict[str, Any] = {"scheme": scheme.value, "label": scheme.label}
    if show_details:
        record["extensions"] = extensions_for(scheme)
    return record


@click.command(
    name="schemes",
    help="List all bankswitching schemes.",
    epilog="""
Scheme keys are the values printed by 'cartsniff detect'. Naming a ROM with one of
the listed extensions forces its scheme.
""",
)
@output_format_option
@click.option(
    "--long",
    "show_details",
    is_flag=True,
    help="Also show the filename extensions that select each scheme.",
)
@click.pass_context
def schemes_command(
    ctx: click.Context,
    *,
    output_format: OutputFormat | None = None,
    show_details: bool = False,
) -> None:
    """List the bankswitching schemes.

    Args:
        ctx (click.Context): Click context (holds the console).
        output_format (OutputFormat | None): Output format; plain text when None.
        show_details (bool): Include extension tokens per scheme.
    """
    console: ConsoleLike = get_console(ctx)
    fmt: OutputFormat = output_format or OutputFormat.TEXT
    records: list[dict[str, Any]] = [_serialize(s, show_details=show_details) for s in SchemeId]

    if fmt == OutputFormat.JSON:
        console.print(json.dumps(records, indent=2))
        return
    if fmt == OutputFormat.NDJSON:
        for record in records:
            console.print(json.dumps(record))
        return
    if fmt == OutputFormat.MARKDOWN:
        header = "| Scheme | Description |" + (" Extensions |" if show_details else "")
        console.print(header)
        console.print("|---|---|" + ("---|" if show_details else ""))
        for record in records:
            row = f"| `{record['scheme']}` | {record['label']} |"
            if show_details:
                row += " " + ", ".join(f"`.{e.lower()}`" for e in record["extensions"]) + " |"
            console.print(row)
        return

    width: int = max(len(s.value) for s in SchemeId)
    for record in records:
        line = f"{console.styled(record['scheme'].ljust(width), bold=True)}  {record['label']}"
        if show_details and record["extensions"]:
            line += console.styled(
                "  [" + ", ".join(f".{e.lower()}" for e in record["extensions"]) + "]", dim=True
            )
        console.print(line)
