# topmark:header:start
#
#   project      : CartSniff
#   file         : roms.py
#   file_relpath : tests/roms.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Synthetic ROM image builders for the detection tests.

Real cartridge dumps are not redistributable, so tests plant the exact byte
sequences a rule looks for into a neutral filler image.

The filler is drawn from `FILLER_ALPHABET`: bytes that occur in no signature,
no marker string and never form a 4A50 reset vector. Its pseudo-random order
keeps the two halves of an image different and the SuperChip RAM ports
mismatched, so an unmodified filler image matches no content rule at all and
is classified by its size default.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from cartsniff.detection.predicates import BANK_SIZE, SUPERCHIP_RAM_SIZE

KIB: Final[int] = 1024

FILLER_ALPHABET: Final[bytes] = bytes((0x11, 0x22, 0x33, 0x55, 0x66, 0x77, 0x88, 0x9A))

# Offset of the first planted pattern and distance between planted patterns
PLANT_OFFSET: Final[int] = 0x100
PLANT_SPACING: Final[int] = 0x40


def filler(size: int, *, seed: int = 0x2600) -> bytearray:
    """Return ``size`` bytes of neutral filler (deterministic for a given seed)."""
    out = bytearray(size)
    state: int = seed
    for i in range(size):
        state = (state * 1103515245 + 12345) & 0x7FFFFFFF
        out[i] = FILLER_ALPHABET[(state >> 16) & 0x07]
    return out


def plant(image: bytearray, pattern: bytes, offset: int) -> bytearray:
    """Overwrite ``image`` at ``offset`` with ``pattern`` and return it."""
    image[offset : offset + len(pattern)] = pattern
    return image


def rom_with(
    size: int,
    patterns: Iterable[bytes] = (),
    *,
    offset: int = PLANT_OFFSET,
    spacing: int = PLANT_SPACING,
) -> bytearray:
    """Return a filler image of ``size`` bytes with ``patterns`` planted in order.

    Args:
        size (int): Image size in bytes.
        patterns (Iterable[bytes]): Byte sequences to plant.
        offset (int): Offset of the first pattern.
        spacing (int): Distance between the start of consecutive patterns.

    Returns:
        bytearray: The image.
    """
    image: bytearray = filler(size)
    for i, pattern in enumerate(patterns):
        plant(image, pattern, offset + i * spacing)
    return image


def repeated(pattern: bytes, times: int) -> list[bytes]:
    """Return ``pattern`` ``times`` times, for planting a signature with a hit count."""
    return [pattern] * times


def mirrored(half: bytes | bytearray) -> bytearray:
    """Return an image made of two copies of ``half``."""
    return bytearray(half) + bytearray(half)


def with_superchip(image: bytearray, *, fill: int = 0x00) -> bytearray:
    """Fill the RAM area at the start of every whole 4K bank with ``fill`` and return the image."""
    for bank in range(0, len(image) - BANK_SIZE + 1, BANK_SIZE):
        image[bank : bank + SUPERCHIP_RAM_SIZE] = bytes((fill,)) * SUPERCHIP_RAM_SIZE
    return image


def with_tail(image: bytearray, marker: bytes, *, from_end: int) -> bytearray:
    """Plant ``marker`` so that it starts ``from_end`` bytes before the end of ``image``."""
    return plant(image, marker, len(image) - from_end)
