# topmark:header:start
#
#   project      : CartSniff
#   file         : detect.py
#   file_relpath : src/cartsniff/cli/commands/detect.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CartSniff `detect` command.

Reads each ROM image given on the command line (or ``-`` for STDIN), runs
[`detect_scheme`][cartsniff.detection.detector.detect_scheme] and prints one
result per image.

Input:
  - ROM paths as positional arguments.
  - ``-`` reads one image from STDIN; ``--stdin-filename`` supplies the filename
    whose extension may hint the scheme.

Exit codes:
  - 0 when every image was read, otherwise the code of the first read error
    (66 missing file, 77 permission denied, 74 other I/O errors); images that
    could be read are still reported.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from cartsniff.cli.console import get_console
from cartsniff.cli.errors import CartsniffConfigError, CartsniffError, CartsniffUsageError
from cartsniff.cli.exit_codes import ExitCode
from cartsniff.cli.io import STDIN_SENTINEL, read_rom_file, read_rom_stream
from cartsniff.cli.options import common_config_options, output_format_option
from cartsniff.config import ConfigLoadError, MutableConfig
from cartsniff.config.logging import get_logger
from cartsniff.core.formats import OutputFormat
from cartsniff.detection import detect_scheme, match_by_extension
from cartsniff.schemes import SchemeId

if TYPE_CHECKING:
    from cartsniff.cli.console import ConsoleLike
    from cartsniff.cli.io import RomInput
    from cartsniff.config import Config
    from cartsniff.config.logging import CartsniffLogger

logger: CartsniffLogger = get_logger(__name__)


def detection_source(filename: str, rom: RomInput) -> str:
    """Return which input decided the scheme: ``extension``, ``content`` or ``default``."""
    if filename and match_by_extension(filename) is not SchemeId.AUTO:
        return "extension"
    if rom.data:
        return "content"
    return "default"


def detect_rom(rom: RomInput, *, use_extension: bool) -> dict[str, Any]:
    """Classify one ROM input and return its result record.

    Args:
        rom (RomInput): The image to classify.
        use_extension (bool): Whether the filename extension may force the scheme.

    Returns:
        dict[str, Any]: ``path``, ``scheme``, ``label``, ``source`` and ``size``.
    """
    filename: str = rom.filename if use_extension else ""
    scheme: SchemeId = detect_scheme(filename, rom.data)
    return {
        "path": rom.source,
        "scheme": scheme.value,
        "label": scheme.label,
        "source": detection_source(filename, rom),
        "size": rom.size,
    }


def _render_text(console: ConsoleLike, record: dict[str, Any], *, verbosity: int) -> None:
    line: str = (
        f"{record['path']}: {console.styled(record['scheme'], bold=True)} ({record['label']})"
    )
    if verbosity > 0:
        line += console.styled(f" [{record['source']}, {record['size']} bytes]", dim=True)
    console.print(line)


def _md_cell(value: object) -> str:
    return str(value).replace("|", "\\|")


def _render_markdown(console: ConsoleLike, records: list[dict[str, Any]]) -> None:
    console.print("| ROM | Scheme | Description | Source | Size |")
    console.print("|---|---|---|---|---:|")
    for r in records:
        cells = (r["path"], r["scheme"], r["label"], r["source"], r["size"])
        console.print("| " + " | ".join(_md_cell(c) for c in cells) + " |")


def _resolve_config(
    *,
    config_paths: tuple[str, ...],
    no_config: bool,
    use_extension: bool | None,
    max_size: int | None,
    output_format: OutputFormat | None,
) -> Config:
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            extra_config_files=[Path(p) for p in config_paths],
            no_config=no_config,
        )
    except ConfigLoadError as exc:
        raise CartsniffConfigError(str(exc)) from exc
    draft.apply_cli_args(
        use_extension=use_extension,
        max_rom_size=max_size,
        output_format=output_format,
    )
    config: Config = draft.freeze()
    logger.debug("Effective config: %s", config)
    return config


@click.command(
    name="detect",
    help="Detect the bankswitching scheme of Atari 2600 ROM images.",
)
@click.argument("roms", nargs=-1, type=str, metavar="ROM...")
@click.option(
    "--extension/--no-extension",
    "use_extension",
    default=None,
    help="Let filename extensions force the scheme (default: on).",
)
@click.option(
    "--max-size",
    "max_size",
    type=click.IntRange(min=0),
    default=None,
    metavar="BYTES",
    help="Largest image read for content detection; larger ones are classified by name only.",
)
@click.option(
    "--stdin-filename",
    "stdin_filename",
    type=str,
    default=None,
    help="Filename (for its extension) of the image read from STDIN via '-'.",
)
@common_config_options
@output_format_option
@click.pass_context
def detect_command(
    ctx: click.Context,
    *,
    roms: tuple[str, ...],
    use_extension: bool | None,
    max_size: int | None,
    stdin_filename: str | None,
    config_paths: tuple[str, ...],
    no_config: bool,
    output_format: OutputFormat | None,
) -> None:
    """Detect the bankswitching scheme of each ROM image.

    Args:
        ctx (click.Context): Click context (holds the console and verbosity).
        roms (tuple[str, ...]): ROM paths; ``-`` reads STDIN.
        use_extension (bool | None): CLI override for ``use_extension``.
        max_size (int | None): CLI override for ``max_rom_size``.
        stdin_filename (str | None): Filename hint for the STDIN image.
        config_paths (tuple[str, ...]): Extra config files.
        no_config (bool): Skip config discovery.
        output_format (OutputFormat | None): CLI override for ``output_format``.
    """
    console: ConsoleLike = get_console(ctx)
    verbosity: int = int(ctx.obj.get("verbosity_level", 0))

    if not roms:
        raise CartsniffUsageError("No ROM given. Pass one or more paths, or '-' for STDIN.")
    if roms.count(STDIN_SENTINEL) > 1:
        raise CartsniffUsageError("'-' (STDIN) may be given only once.")
    if stdin_filename is not None and STDIN_SENTINEL not in roms:
        raise CartsniffUsageError("--stdin-filename requires '-' as a ROM argument.")

    config: Config = _resolve_config(
        config_paths=config_paths,
        no_config=no_config,
        use_extension=use_extension,
        max_size=max_size,
        output_format=output_format,
    )
    fmt: OutputFormat = config.output_format

    records: list[dict[str, Any]] = []
    exit_code: ExitCode = ExitCode.SUCCESS
    for arg in roms:
        try:
            if arg == STDIN_SENTINEL:
                rom: RomInput = read_rom_stream(
                    click.get_binary_stream("stdin"),
                    filename=stdin_filename or "",
                    max_size=config.max_rom_size,
                )
            else:
                rom = read_rom_file(arg, max_size=config.max_rom_size)
        except CartsniffError as exc:
            console.error(exc.format_message())
            if exit_code == ExitCode.SUCCESS:
                exit_code = ExitCode(exc.exit_code)
            continue

        if rom.oversized and verbosity >= 0:
            console.warn(
                f"{rom.source}: {rom.size} bytes exceeds the {config.max_rom_size} byte limit; "
                "classified by filename only."
            )
        record: dict[str, Any] = detect_rom(rom, use_extension=config.use_extension)
        records.append(record)

        if fmt == OutputFormat.NDJSON:
            console.print(json.dumps(record))
        elif fmt == OutputFormat.TEXT:
            _render_text(console, record, verbosity=verbosity)

    if fmt == OutputFormat.JSON:
        console.print(json.dumps(records, indent=2))
    elif fmt == OutputFormat.MARKDOWN:
        _render_markdown(console, records)

    if exit_code != ExitCode.SUCCESS:
        ctx.exit(int(exit_code))
