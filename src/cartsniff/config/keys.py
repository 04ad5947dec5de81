# topmark:header:start
#
#   project      : CartSniff
#   file         : keys.py
#   file_relpath : src/cartsniff/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for CartSniff configuration.

Keys defined here are the external configuration API (``cartsniff.toml`` and
``[tool.cartsniff]`` in ``pyproject.toml``); renaming one is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by CartSniff configuration."""

    # pyproject.toml nesting: [tool.cartsniff]
    SECTION_TOOL: Final[str] = "tool"

    # [detect]
    SECTION_DETECT: Final[str] = "detect"

    KEY_USE_EXTENSION: Final[str] = "use_extension"
    KEY_MAX_ROM_SIZE: Final[str] = "max_rom_size"
    KEY_OUTPUT_FORMAT: Final[str] = "output_format"
