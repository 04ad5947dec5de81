# topmark:header:start
#
#   project      : CartSniff
#   file         : signatures.py
#   file_relpath : src/cartsniff/detection/signatures.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Byte signature search and the signature tables used by the content predicates.

Every content predicate in [`cartsniff.detection.predicates`][] is built on the
single primitive `search_for_bytes`: find a byte pattern in the image and require
a minimum number of occurrences. The patterns themselves are 6502 instruction
sequences (mostly hotspot accesses that trigger a bank switch) or ASCII markers
left in the image by the cart's ARM driver or by its developer.

The signature values come from the Stella emulator's cart auto-detection, which
credits the MESS project, "stella@casperkitty.com", Thomas Jentzsch and RevEng
of AtariAge for several of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, TypeAlias, Union

if TYPE_CHECKING:
    from collections.abc import Iterable

RomBytes: TypeAlias = Union[bytes, bytearray]


def search_for_bytes(
    image: RomBytes,
    pattern: bytes,
    min_hits: int = 1,
    *,
    size: int | None = None,
) -> bool:
    """Return True if ``pattern`` occurs at least ``min_hits`` times in the image.

    Every start offset ``0 <= i <= size - len(pattern)`` is considered, so
    overlapping occurrences all count. Scanning stops as soon as ``min_hits``
    occurrences have been seen.

    Args:
        image (bytes | bytearray): The ROM image.
        pattern (bytes): The byte sequence to search for.
        min_hits (int): Minimum number of occurrences required.
        size (int | None): Number of leading bytes of ``image`` to search.
            Defaults to (and is clamped to) ``len(image)``.

    Returns:
        bool: True if the signature was found at least ``min_hits`` times.
    """
    limit: int = len(image) if size is None else max(0, min(size, len(image)))
    if not pattern or len(pattern) > limit:
        return False
    if min_hits <= 0:
        return True

    hits = 0
    pos: int = image.find(pattern, 0, limit)
    while pos != -1:
        hits += 1
        if hits >= min_hits:
            return True
        pos = image.find(pattern, pos + 1, limit)
    return False


@dataclass(frozen=True)
class Signature:
    """A byte pattern plus the number of times it must occur.

    Attributes:
        pattern (bytes): The byte sequence to look for.
        min_hits (int): Minimum number of occurrences for a positive match.
        description (str): Human-readable description (usually the disassembly).
    """

    pattern: bytes
    min_hits: int = 1
    description: str = ""

    def __post_init__(self) -> None:
        if not self.pattern:
            raise ValueError("Signature pattern must not be empty")

    def found_in(self, image: RomBytes, *, size: int | None = None) -> bool:
        """Return True if this signature occurs at least ``min_hits`` times in ``image``."""
        return search_for_bytes(image, self.pattern, self.min_hits, size=size)


def any_found_in(
    signatures: Iterable[Signature],
    image: RomBytes,
    *,
    size: int | None = None,
) -> bool:
    """Return True if any of ``signatures`` is found in ``image``."""
    return any(sig.found_in(image, size=size) for sig in signatures)


# --- Signature tables -----------------------------------------------------------

# ARM code contains one of these loader patterns in the first 1K
ARM_LOADER: Final[tuple[Signature, ...]] = (
    Signature(bytes((0xA0, 0xC1, 0x1F, 0xE0)), 1, "ARM loader (A0 C1 1F E0)"),
    Signature(bytes((0x00, 0x80, 0x02, 0xE0)), 1, "ARM loader (00 80 02 E0)"),
)
ARM_SEARCH_WINDOW: Final[int] = 1024

# 0840 bankswitching is triggered by accessing $0800 or $0840 at least twice
ECONOBANKING_0840: Final[tuple[Signature, ...]] = (
    Signature(bytes((0xAD, 0x00, 0x08)), 2, "LDA $0800"),
    Signature(bytes((0xAD, 0x40, 0x08)), 2, "LDA $0840"),
    Signature(bytes((0x2C, 0x00, 0x08)), 2, "BIT $0800"),
    Signature(bytes((0x0C, 0x00, 0x08, 0x4C)), 2, "NOP $0800; JMP ..."),
    Signature(bytes((0x0C, 0xFF, 0x0F, 0x4C)), 2, "NOP $0FFF; JMP ..."),
)

# 3E stores the bank number in $3E, commonly followed by an immediate LDA
TIGERVISION_3E: Final[Signature] = Signature(
    bytes((0x85, 0x3E, 0xA9, 0x00)), 1, "STA $3E; LDA #$00"
)

# 3F stores the bank number in $3F; at least two banks means at least two stores
TIGERVISION_3F: Final[Signature] = Signature(bytes((0x85, 0x3F)), 2, "STA $3F")

# Chetiry carts carry the developer's marker string
CHETIRY_MARKER: Final[Signature] = Signature(b"LENIN", 1, "'LENIN' marker")

# CV RAM is accessed at $F3FF (write) and $F400 (read)
COMMAVID: Final[tuple[Signature, ...]] = (
    Signature(bytes((0x9D, 0xFF, 0xF3)), 1, "STA $F3FF,X"),
    Signature(bytes((0x99, 0x00, 0xF4)), 1, "STA $F400,Y"),
)

# DPC+ ARM drivers contain the string 'DPC+' twice
DPC_PLUS_MARKER: Final[Signature] = Signature(b"DPC+", 2, "'DPC+' marker")

# E0 hotspots $FE0-$FF9, absolute non-indexed; only known sequences are searched
PARKER_BROS_E0: Final[tuple[Signature, ...]] = (
    Signature(bytes((0x8D, 0xE0, 0x1F)), 1, "STA $1FE0"),
    Signature(bytes((0x8D, 0xE0, 0x5F)), 1, "STA $5FE0"),
    Signature(bytes((0x8D, 0xE9, 0xFF)), 1, "STA $FFE9"),
    Signature(bytes((0x0C, 0xE0, 0x1F)), 1, "NOP $1FE0"),
    Signature(bytes((0xAD, 0xE0, 0x1F)), 1, "LDA $1FE0"),
    Signature(bytes((0xAD, 0xE9, 0xFF)), 1, "LDA $FFE9"),
    Signature(bytes((0xAD, 0xED, 0xFF)), 1, "LDA $FFED"),
    Signature(bytes((0xAD, 0xF3, 0xBF)), 1, "LDA $BFF3"),
)

# E7 hotspots $FE0-$FE6, absolute non-indexed
M_NETWORK_E7: Final[tuple[Signature, ...]] = (
    Signature(bytes((0xAD, 0xE2, 0xFF)), 1, "LDA $FFE2"),
    Signature(bytes((0xAD, 0xE5, 0xFF)), 1, "LDA $FFE5"),
    Signature(bytes((0xAD, 0xE5, 0x1F)), 1, "LDA $1FE5"),
    Signature(bytes((0xAD, 0xE7, 0x1F)), 1, "LDA $1FE7"),
    Signature(bytes((0x0C, 0xE7, 0x1F)), 1, "NOP $1FE7"),
    Signature(bytes((0x8D, 0xE7, 0xFF)), 1, "STA $FFE7"),
    Signature(bytes((0x8D, 0xE7, 0x1F)), 1, "STA $1FE7"),
)

# Newer EF carts store 'EFEF' or 'EFSC' starting at $FFF8
EF_MARKER: Final[Signature] = Signature(b"EFEF", 1, "'EFEF' marker")
EFSC_MARKER: Final[Signature] = Signature(b"EFSC", 1, "'EFSC' marker")
EF_MARKER_WINDOW: Final[int] = 8

# Older EF carts switch to bank 0 via $FE0, usually with a NOP or LDA
HOMESTAR_RUNNER_EF: Final[tuple[Signature, ...]] = (
    Signature(bytes((0x0C, 0xE0, 0xFF)), 1, "NOP $FFE0"),
    Signature(bytes((0xAD, 0xE0, 0xFF)), 1, "LDA $FFE0"),
    Signature(bytes((0x0C, 0xE0, 0x1F)), 1, "NOP $1FE0"),
    Signature(bytes((0xAD, 0xE0, 0x1F)), 1, "LDA $1FE0"),
)

# F6 selects bank 0 through hotspot $1FF6
ATARI_F6: Final[tuple[Signature, ...]] = (
    Signature(bytes((0xAD, 0xF6, 0xFF)), 1, "LDA $FFF6"),
    Signature(bytes((0xAD, 0xF6, 0x1F)), 1, "LDA $1FF6"),
    Signature(bytes((0x8D, 0xF6, 0xFF)), 1, "STA $FFF6"),
    Signature(bytes((0x8D, 0xF6, 0x1F)), 1, "STA $1FF6"),
    Signature(bytes((0x2C, 0xF6, 0xFF)), 1, "BIT $FFF6"),
    Signature(bytes((0x2C, 0xF6, 0x1F)), 1, "BIT $1FF6"),
)

# FE bankswitching is very weird, but always seems to include a 'JSR $xxxx'
ACTIVISION_FE: Final[tuple[Signature, ...]] = (
    Signature(bytes((0x20, 0x00, 0xD0, 0xC6, 0xC5)), 1, "JSR $D000; DEC $C5"),
    Signature(bytes((0x20, 0xC3, 0xF8, 0xA5, 0x82)), 1, "JSR $F8C3; LDA $82"),
    Signature(bytes((0xD0, 0xFB, 0x20, 0x73, 0xFE)), 1, "BNE $FB; JSR $FE73"),
    Signature(bytes((0x20, 0x00, 0xF0, 0x84, 0xD6)), 1, "JSR $F000; STY $D6"),
)

# SB switches banks by accessing $0800
SUPERBANK_SB: Final[tuple[Signature, ...]] = (
    Signature(bytes((0xBD, 0x00, 0x08)), 1, "LDA $0800,X"),
    Signature(bytes((0xAD, 0x00, 0x08)), 1, "LDA $0800"),
)

# UA switches to bank 1 by accessing $0240
UA_LTD: Final[tuple[Signature, ...]] = (
    Signature(bytes((0x8D, 0x40, 0x02)), 1, "STA $240"),
    Signature(bytes((0xAD, 0x40, 0x02)), 1, "LDA $240"),
    Signature(bytes((0xBD, 0x1F, 0x02)), 1, "LDA $21F,X"),
)

# X07 switches to bank 0, 1, 2, ... by accessing $08xD
ATARIAGE_X07: Final[tuple[Signature, ...]] = (
    Signature(bytes((0xAD, 0x0D, 0x08)), 1, "LDA $080D"),
    Signature(bytes((0xAD, 0x1D, 0x08)), 1, "LDA $081D"),
    Signature(bytes((0xAD, 0x2D, 0x08)), 1, "LDA $082D"),
    Signature(bytes((0x0C, 0x0D, 0x08)), 1, "NOP $080D"),
    Signature(bytes((0x0C, 0x1D, 0x08)), 1, "NOP $081D"),
    Signature(bytes((0x0C, 0x2D, 0x08)), 1, "NOP $082D"),
)
