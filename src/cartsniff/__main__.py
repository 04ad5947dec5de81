# topmark:header:start
#
#   project      : CartSniff
#   file         : __main__.py
#   file_relpath : src/cartsniff/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running CartSniff via ``python -m cartsniff``.

Equivalent to running the ``cartsniff`` console script.

Examples:
    Detect the scheme of a ROM image::

        python -m cartsniff detect pitfall2.bin
"""

from __future__ import annotations

from cartsniff.cli.main import cli

if __name__ == "__main__":
    cli()
