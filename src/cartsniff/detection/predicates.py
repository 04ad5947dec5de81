# topmark:header:start
#
#   project      : CartSniff
#   file         : predicates.py
#   file_relpath : src/cartsniff/detection/predicates.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Content heuristics: "is this image probably scheme X?".

Each predicate inspects a ROM image (the whole buffer is the image; its length
is the image size) and answers deterministically, with no state shared between
calls. A predicate never reads past the end of the buffer: if the image is too
short for an offset or pattern it references, the answer is simply ``False``.

Most predicates are thin wrappers around signature tables from
[`cartsniff.detection.signatures`][]; the rest are structural checks (SuperChip
RAM fill, 4A50 vectors, FA2 padding). `probable_ef_variant` is the one
multi-outcome heuristic and returns the detected sub-variant instead of a bool.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from cartsniff.detection.signatures import (
    ACTIVISION_FE,
    ARM_LOADER,
    ARM_SEARCH_WINDOW,
    ATARI_F6,
    ATARIAGE_X07,
    CHETIRY_MARKER,
    COMMAVID,
    DPC_PLUS_MARKER,
    ECONOBANKING_0840,
    EF_MARKER,
    EF_MARKER_WINDOW,
    EFSC_MARKER,
    HOMESTAR_RUNNER_EF,
    M_NETWORK_E7,
    PARKER_BROS_E0,
    SUPERBANK_SB,
    TIGERVISION_3E,
    TIGERVISION_3F,
    UA_LTD,
    any_found_in,
)
from cartsniff.schemes import SchemeId

if TYPE_CHECKING:
    from cartsniff.detection.signatures import RomBytes

BANK_SIZE: Final[int] = 4096
SUPERCHIP_RAM_SIZE: Final[int] = 256

# 4A50 keeps $4A50 in the NMI vector ($1FFA-$1FFB of the last page)
_4A50_NMI_OFFSET_FROM_END: Final[int] = 6
_RESET_VECTOR: Final[int] = 0xFFFC

# The 32K FA2 layout pads everything from 29K to 32K with zeros
_FA2_PADDING: Final[range] = range(29 * 1024, 32 * 1024)


def halves_identical(image: RomBytes) -> bool:
    """Return True if the image is non-empty and its two halves are identical.

    A 4K image made of two copies of the same 2K, or an 8K image made of two
    copies of the same 4K, is really the smaller image.
    """
    size = len(image)
    if size == 0 or size % 2:
        return False
    half = size // 2
    return image[:half] == image[half:]


def is_probably_sc(image: RomBytes) -> bool:
    """Return True if the image is probably a SuperChip (256 bytes RAM).

    A SuperChip cart overlays its RAM on the first 256 bytes of every 4K bank,
    so dumps hold a single repeated byte there. Only whole 4K banks are checked.
    """
    banks = len(image) // BANK_SIZE
    if banks == 0:
        return False
    for bank in range(0, banks * BANK_SIZE, BANK_SIZE):
        ram = image[bank : bank + SUPERCHIP_RAM_SIZE]
        if ram != bytes((ram[0],)) * SUPERCHIP_RAM_SIZE:
            return False
    return True


def is_probably_arm(image: RomBytes) -> bool:
    """Return True if the image probably contains ARM code in the first 1K."""
    return any_found_in(ARM_LOADER, image, size=ARM_SEARCH_WINDOW)


def is_probably_0840(image: RomBytes) -> bool:
    """Return True if the image is probably a 0840 bankswitching cartridge."""
    return any_found_in(ECONOBANKING_0840, image)


def is_probably_3e(image: RomBytes) -> bool:
    """Return True if the image is probably a 3E bankswitching cartridge."""
    return TIGERVISION_3E.found_in(image)


def is_probably_3f(image: RomBytes) -> bool:
    """Return True if the image is probably a 3F bankswitching cartridge."""
    return TIGERVISION_3F.found_in(image)


def is_probably_4a50(image: RomBytes) -> bool:
    """Return True if the image is probably a 4A50 bankswitching cartridge.

    4A50 carts store $4A50 at the NMI vector in the last page of ROM. Failing
    that, the program usually starts in $1Fxx with ``NOP $6Exx`` or
    ``NOP $6Fxx``, which is checked through the reset vector.
    """
    size = len(image)
    if size < _4A50_NMI_OFFSET_FROM_END:
        return False
    nmi = size - _4A50_NMI_OFFSET_FROM_END
    if image[nmi] == 0x50 and image[nmi + 1] == 0x4A:
        return True

    if size <= _RESET_VECTOR + 1:
        return False
    lo, hi = image[_RESET_VECTOR], image[_RESET_VECTOR + 1]
    if hi & 0x1F != 0x1F:
        return False
    start = hi * 256 + lo
    if start + 2 >= size:
        return False
    return image[start] == 0x0C and (image[start + 2] & 0xFE) == 0x6E


def is_probably_cty(image: RomBytes) -> bool:
    """Return True if the image is probably a CTY bankswitching cartridge."""
    return CHETIRY_MARKER.found_in(image)


def is_probably_cv(image: RomBytes) -> bool:
    """Return True if the image is probably a CV bankswitching cartridge."""
    return any_found_in(COMMAVID, image)


def is_probably_dpc_plus(image: RomBytes) -> bool:
    """Return True if the image is probably a DPC+ bankswitching cartridge.

    The DPC+ ARM driver contains the string 'DPC+' twice. All Harmony/Melody
    custom drivers also contain 0x10ADAB1E ("LOADABLE"), which is not needed here.
    """
    return DPC_PLUS_MARKER.found_in(image)


def is_probably_e0(image: RomBytes) -> bool:
    """Return True if the image is probably an E0 bankswitching cartridge."""
    return any_found_in(PARKER_BROS_E0, image)


def is_probably_e7(image: RomBytes) -> bool:
    """Return True if the image is probably an E7 bankswitching cartridge."""
    return any_found_in(M_NETWORK_E7, image)


def probable_ef_variant(image: RomBytes) -> SchemeId | None:
    """Return EF or EFSC if the image is probably an EF-family cartridge, else None.

    Newer EF carts identify themselves with 'EFEF' or 'EFSC' at $FFF8. Older
    ones are recognized by a switch to bank 0; SuperChip RAM then decides
    between the two variants.

    Args:
        image (RomBytes): The ROM image.

    Returns:
        SchemeId | None: ``SchemeId.EF``, ``SchemeId.EFSC`` or ``None``.
    """
    size = len(image)
    if size >= EF_MARKER_WINDOW:
        tail = image[size - EF_MARKER_WINDOW :]
        if EF_MARKER.found_in(tail):
            return SchemeId.EF
        if EFSC_MARKER.found_in(tail):
            return SchemeId.EFSC

    if any_found_in(HOMESTAR_RUNNER_EF, image):
        return SchemeId.EFSC if is_probably_sc(image) else SchemeId.EF
    return None


def is_probably_ef(image: RomBytes) -> bool:
    """Return True if the image is probably an EF or EFSC bankswitching cartridge."""
    return probable_ef_variant(image) is not None


def is_probably_f6(image: RomBytes) -> bool:
    """Return True if the image is probably an F6 bankswitching cartridge."""
    return any_found_in(ATARI_F6, image)

def is_probably_fa2(image: RomBytes) -> bool:
    """Return True if the image is probably a 32K FA2 bankswitching cartridge.

    The 24K and 28K versions are the only candidates at those sizes; the 32K
    version is recognized by all zeros in the 29K-32K area.
    """
    if len(image) < _FA2_PADDING.stop:
        return False
    return not any(image[_FA2_PADDING.start : _FA2_PADDING.stop])


def is_probably_fe(image: RomBytes) -> bool:
    """Return True if the image is probably an FE bankswitching cartridge."""
    return any_found_in(ACTIVISION_FE, image)

def is_probably_sb(image: RomBytes) -> bool:
    """Return True if the image is probably an SB bankswitching cartridge."""
    return any_found_in(SUPERBANK_SB, image)


def is_probably_ua(image: RomBytes) -> bool:
    """Return True if the image is probably a UA bankswitching cartridge."""
    return any_found_in(UA_LTD, image)


def is_probably_x07(image: RomBytes) -> bool:
    """Return True if the image is probably an X07 bankswitching cartridge."""
    return any_found_in(ATARIAGE_X07, image)
