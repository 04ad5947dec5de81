# topmark:header:start
#
#   project      : CartSniff
#   file         : formats.py
#   file_relpath : src/cartsniff/core/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output format vocabulary shared by the CLI and the configuration layer.

Machine formats (JSON, NDJSON) are stable and colorless.
"""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Attributes:
        TEXT: Human-friendly text output; may include ANSI color if enabled.
        MARKDOWN: A Markdown table.
        JSON: A single JSON document.
        NDJSON: One JSON object per line (newline-delimited JSON).
    """

    # Human formats:
    TEXT = "text"
    MARKDOWN = "markdown"

    # Machine formats:
    JSON = "json"
    NDJSON = "ndjson"


def is_machine_format(fmt: OutputFormat | None) -> bool:
    """Return True for formats intended for machine consumption."""
    return fmt in {OutputFormat.JSON, OutputFormat.NDJSON}


def parse_output_format(raw: str | None) -> OutputFormat | None:
    """Return the `OutputFormat` whose value matches ``raw`` (case-insensitive), or None."""
    if raw is None:
        return None
    token: str = raw.strip().lower()
    for fmt in OutputFormat:
        if fmt.value == token:
            return fmt
    return None
