# topmark:header:start
#
#   project      : CartSniff
#   file         : extensions.py
#   file_relpath : src/cartsniff/detection/extensions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Filename extension hints.

Harmony and Stella users can force a bankswitching scheme by naming the image
with a scheme-specific extension (``game.F8S``, ``game.DPP``, ...). Generic ROM
suffixes (``.a26``, ``.bin``, ``.rom``) carry no hint and map to `SchemeId.AUTO`;
the Harmony custom-driver suffix ``.cu`` selects `SchemeId.CUSTOM`.

Matching is case-insensitive and only considers the text after the last ``.``
of the basename.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from cartsniff.config.logging import CartsniffLogger, get_logger
from cartsniff.schemes import SchemeId

if TYPE_CHECKING:
    from collections.abc import Mapping

logger: CartsniffLogger = get_logger(__name__)

_EXTENSIONS: Final[dict[str, SchemeId]] = {
    # Generic (no hint)
    "A26": SchemeId.AUTO,
    "BIN": SchemeId.AUTO,
    "ROM": SchemeId.AUTO,
    # Multicarts
    "084": SchemeId.S0840,
    "0840": SchemeId.S0840,
    "2N1": SchemeId.S2IN1,
    "4N1": SchemeId.S4IN1,
    "8N1": SchemeId.S8IN1,
    "16N": SchemeId.S16IN1,
    "16N1": SchemeId.S16IN1,
    "32N": SchemeId.S32IN1,
    "32N1": SchemeId.S32IN1,
    "64N": SchemeId.S64IN1,
    "64N1": SchemeId.S64IN1,
    "128": SchemeId.S128IN1,
    "128N1": SchemeId.S128IN1,
    # Single schemes
    "2K": SchemeId.S2K,
    "3E": SchemeId.S3E,
    "3F": SchemeId.S3F,
    "4A5": SchemeId.S4A50,
    "4A50": SchemeId.S4A50,
    "4K": SchemeId.S4K,
    "4KS": SchemeId.S4KSC,
    "4KSC": SchemeId.S4KSC,
    "AR": SchemeId.AR,
    "BF": SchemeId.BF,
    "BFS": SchemeId.BFSC,
    "BFSC": SchemeId.BFSC,
    "CM": SchemeId.CM,
    "CTY": SchemeId.CTY,
    "CU": SchemeId.CUSTOM,
    "CV": SchemeId.CV,
    "CVP": SchemeId.CVP,
    "DAS": SchemeId.DASH,
    "DASH": SchemeId.DASH,
    "DF": SchemeId.DF,
    "DFS": SchemeId.DFSC,
    "DFSC": SchemeId.DFSC,
    "DPC": SchemeId.DPC,
    "DPP": SchemeId.DPCP,
    "DPCP": SchemeId.DPCP,
    "E0": SchemeId.E0,
    "E7": SchemeId.E7,
    "EF": SchemeId.EF,
    "EFS": SchemeId.EFSC,
    "EFSC": SchemeId.EFSC,
    "F0": SchemeId.F0,
    "F4": SchemeId.F4,
    "F4S": SchemeId.F4SC,
    "F4SC": SchemeId.F4SC,
    "F6": SchemeId.F6,
    "F6S": SchemeId.F6SC,
    "F6SC": SchemeId.F6SC,
    "F8": SchemeId.F8,
    "F8S": SchemeId.F8SC,
    "F8SC": SchemeId.F8SC,
    "FA": SchemeId.FA,
    "FA2": SchemeId.FA2,
    "FE": SchemeId.FE,
    "MDM": SchemeId.MDM,
    "SB": SchemeId.SB,
    "UA": SchemeId.UA,
    "WD": SchemeId.WD,
    "X07": SchemeId.X07,
}

EXTENSION_TABLE: Final[Mapping[str, SchemeId]] = MappingProxyType(_EXTENSIONS)


def extension_token(filename: str) -> str:
    """Return the upper-cased extension token of ``filename``.

    Both ``/`` and ``\\`` are treated as directory separators, so a dot in a
    directory name is never mistaken for an extension.

    Args:
        filename (str): The ROM filename (with or without directories).

    Returns:
        str: The text after the last ``.`` of the basename, upper-cased; an empty
        string when there is none.
    """
    basename: str = filename.replace("\\", "/").rsplit("/", 1)[-1]
    _, dot, ext = basename.rpartition(".")
    if not dot:
        return ""
    return ext.upper()


def match_by_extension(filename: str) -> SchemeId:
    """Return the scheme forced by the extension of ``filename``.

    Args:
        filename (str): The ROM filename.

    Returns:
        SchemeId: The mapped scheme, or `SchemeId.AUTO` for a generic, unknown,
        empty or missing extension.
    """
    token: str = extension_token(filename)
    scheme: SchemeId = EXTENSION_TABLE.get(token, SchemeId.AUTO)
    logger.trace("Extension token '%s' of '%s' maps to %s", token, filename, scheme)
    return scheme


def extensions_for(scheme: SchemeId) -> list[str]:
    """Return the extension tokens that select ``scheme``, in table order."""
    return [token for token, mapped in EXTENSION_TABLE.items() if mapped is scheme]
