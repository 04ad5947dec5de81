# topmark:header:start
#
#   project      : CartSniff
#   file         : schemes.py
#   file_relpath : src/cartsniff/schemes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bankswitching scheme identifiers.

`SchemeId` is the closed set of cartridge hardware variants CartSniff can report.
Each member's ``.value`` is the stable key printed by the CLI (``"F8SC"``,
``"DPC+"``, ...); ``.label`` is a short human description. Members whose key
starts with a digit are named with an ``S`` prefix (``SchemeId.S3E``).
"""

from __future__ import annotations

from cartsniff.core.enum_mixins import KeyedStrEnum


class SchemeId(KeyedStrEnum):
    """Bankswitching scheme of an Atari 2600 cartridge image.

    ``AUTO`` doubles as the "unknown" value: it is what the extension matcher
    reports for generic or unrecognized suffixes and what `detect_scheme`
    returns when neither a filename hint nor content is available.
    """

    AUTO = ("AUTO", "Auto-detect")
    S0840 = ("0840", "8K EconoBanking")
    S2IN1 = ("2IN1", "2-in-1 multicart (4-64K)")
    S4IN1 = ("4IN1", "4-in-1 multicart (8-64K)")
    S8IN1 = ("8IN1", "8-in-1 multicart (16-64K)")
    S16IN1 = ("16IN1", "16-in-1 multicart (32-64K)")
    S32IN1 = ("32IN1", "32-in-1 multicart (64/128K)")
    S64IN1 = ("64IN1", "64-in-1 multicart (128/256K)")
    S128IN1 = ("128IN1", "128-in-1 multicart (256/512K)")
    S2K = ("2K", "64-2048 bytes Atari")
    S3E = ("3E", "32-in-1 Tigervision + RAM")
    S3F = ("3F", "512K Tigervision")
    S4A50 = ("4A50", "64K 4A50 + RAM")
    S4K = ("4K", "4K Atari")
    S4KSC = ("4KSC", "CPUWIZ 4K + RAM")
    AR = ("AR", "Supercharger")
    BF = ("BF", "CPUWIZ 256K")
    BFSC = ("BFSC", "CPUWIZ 256K + RAM")
    CM = ("CM", "SpectraVideo CompuMate")
    CTY = ("CTY", "CDW - Chetiry")
    CUSTOM = ("CUSTOM", "Custom ARM driver (Harmony)", ("CU",))
    CV = ("CV", "Commavid extra RAM")
    CVP = ("CVP", "Extended Commavid", ("CV+",))
    DASH = ("DASH", "Experimental")
    DF = ("DF", "CPUWIZ 128K")
    DFSC = ("DFSC", "CPUWIZ 128K + RAM")
    DPC = ("DPC", "Pitfall II")
    DPCP = ("DPC+", "Enhanced DPC", ("DPCP", "DPP"))
    E0 = ("E0", "8K Parker Bros")
    E7 = ("E7", "16K M-network")
    EF = ("EF", "64K H. Runner")
    EFSC = ("EFSC", "64K H. Runner + RAM")
    F0 = ("F0", "Dynacom Megaboy")
    F4 = ("F4", "32K Atari")
    F4SC = ("F4SC", "32K Atari + RAM")
    F6 = ("F6", "16K Atari")
    F6SC = ("F6SC", "16K Atari + RAM")
    F8 = ("F8", "8K Atari")
    F8SC = ("F8SC", "8K Atari + RAM")
    FA = ("FA", "CBS RAM Plus")
    FA2 = ("FA2", "CBS RAM Plus 24/28K")
    FE = ("FE", "8K Decathlon")
    MDM = ("MDM", "Menu Driven Megacart")
    SB = ("SB", "128-256K SUPERbank")
    UA = ("UA", "8K UA Ltd.")
    WD = ("WD", "Experimental")
    X07 = ("X07", "64K AtariAge")


DEFAULT_SCHEME: SchemeId = SchemeId.AUTO
