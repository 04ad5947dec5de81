# topmark:header:start
#
#   project      : CartSniff
#   file         : __init__.py
#   file_relpath : src/cartsniff/detection/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bankswitching scheme detection (the UI-agnostic core).

Nothing in this package reads files, parses arguments or consults
configuration: every operation is a pure function of a filename and/or a byte
buffer.

Modules:

- ``signatures``: byte pattern search and the signature tables
- ``predicates``: per-scheme content heuristics
- ``rules``: size buckets and the ordered detection rules
- ``content``: content classification
- ``extensions``: filename extension hints
- ``detector``: `detect_scheme`, combining both sources
"""

from __future__ import annotations

from cartsniff.detection.content import classify_by_content
from cartsniff.detection.detector import RomImage, detect_scheme
from cartsniff.detection.extensions import match_by_extension
from cartsniff.detection.signatures import search_for_bytes

__all__ = [
    "RomImage",
    "classify_by_content",
    "detect_scheme",
    "match_by_extension",
    "search_for_bytes",
]
