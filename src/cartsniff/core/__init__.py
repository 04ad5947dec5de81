# topmark:header:start
#
#   project      : CartSniff
#   file         : __init__.py
#   file_relpath : src/cartsniff/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across CartSniff."""

from __future__ import annotations
