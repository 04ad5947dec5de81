# topmark:header:start
#
#   project      : CartSniff
#   file         : __init__.py
#   file_relpath : src/cartsniff/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CartSniff subcommands (``detect``, ``schemes``, ``version``)."""

from __future__ import annotations
