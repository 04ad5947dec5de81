# topmark:header:start
#
#   project      : CartSniff
#   file         : version.py
#   file_relpath : src/cartsniff/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CartSniff `version` command.

Prints the CartSniff version installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from cartsniff.cli.console import get_console
from cartsniff.cli.options import output_format_option
from cartsniff.constants import CARTSNIFF_VERSION
from cartsniff.core.formats import OutputFormat
from cartsniff.utils.version import pep440_to_semver

if TYPE_CHECKING:
    from cartsniff.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of CartSniff.",
)
@click.option(
    "--semver",
    is_flag=True,
    default=False,
    help="Render the version as SemVer instead of PEP 440 (maps rc→-rc.N, dev→-dev.N).",
)
@output_format_option
@click.pass_context
def version_command(
    ctx: click.Context,
    *,
    output_format: OutputFormat | None = None,
    semver: bool = False,
) -> None:
    """Show the current version of CartSniff.

    Args:
        ctx (click.Context): Click context (holds the console and verbosity).
        output_format (OutputFormat | None): Output format; plain text when None.
        semver (bool): Render as SemVer if True, PEP 440 (default) if False.
    """
    console: ConsoleLike = get_console(ctx)
    verbosity: int = int(ctx.obj.get("verbosity_level", 0))

    version_text: str = CARTSNIFF_VERSION
    if semver:
        try:
            version_text = pep440_to_semver(CARTSNIFF_VERSION)
        except ValueError as exc:
            # Fall back to the raw version
            if verbosity > 0:
                console.warn(str(exc))

    scheme: str = "semver" if semver else "pep440"
    fmt: OutputFormat = output_format or OutputFormat.TEXT
    if fmt in (OutputFormat.JSON, OutputFormat.NDJSON):
        console.print(json.dumps({"version": version_text, "format": scheme}))
    elif fmt == OutputFormat.MARKDOWN:
        console.print("# CartSniff Version\n")
        console.print(f"**CartSniff version ({scheme}): {version_text}**")
    elif verbosity > 0:
        console.print(console.styled(f"CartSniff version ({scheme}):", bold=True, underline=True))
        console.print(f"    {console.styled(version_text, bold=True)}")
    else:
        console.print(console.styled(version_text, bold=True))
