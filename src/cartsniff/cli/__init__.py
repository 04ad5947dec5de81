# topmark:header:start
#
#   project      : CartSniff
#   file         : __init__.py
#   file_relpath : src/cartsniff/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CartSniff CLI package.

Click command definitions and the supporting console, option and I/O helpers.
The console script entry point is ``cartsniff = "cartsniff.cli.main:cli"``.

All subcommands live in [`cartsniff.cli.commands`][].
"""

from __future__ import annotations

__all__: list[str] = []
# Do NOT import .main or commands at module import time
