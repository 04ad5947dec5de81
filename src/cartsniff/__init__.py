# topmark:header:start
#
#   project      : CartSniff
#   file         : __init__.py
#   file_relpath : src/cartsniff/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CartSniff package.

CartSniff determines which bankswitching scheme an Atari 2600 cartridge image
uses, from its filename extension, its bytes, or both. It exposes a small typed
API (`detect_scheme`) and a ``cartsniff`` command line tool.
"""

from __future__ import annotations

from cartsniff.detection import (
    RomImage,
    classify_by_content,
    detect_scheme,
    match_by_extension,
    search_for_bytes,
)
from cartsniff.schemes import SchemeId

__all__ = [
    "RomImage",
    "SchemeId",
    "classify_by_content",
    "detect_scheme",
    "match_by_extension",
    "search_for_bytes",
]
