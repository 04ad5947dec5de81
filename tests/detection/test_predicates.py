# topmark:header:start
#
#   project      : CartSniff
#   file         : test_predicates.py
#   file_relpath : tests/detection/test_predicates.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the content predicates.

Signature-based predicates are checked against every entry of their signature
table: the planted signature must be recognized, and flipping one byte of one
planted copy must make the predicate fail. Structural predicates get
hand-built images.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cartsniff.detection import predicates as p
from cartsniff.detection import signatures as sig
from cartsniff.schemes import SchemeId
from tests.conftest import parametrize
from tests.roms import (
    FILLER_ALPHABET,
    KIB,
    PLANT_OFFSET,
    filler,
    mirrored,
    plant,
    repeated,
    rom_with,
    with_superchip,
    with_tail,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from cartsniff.detection.signatures import RomBytes, Signature

_TABLES: list[tuple[Callable[[RomBytes], bool], tuple[Signature, ...]]] = [
    (p.is_probably_arm, sig.ARM_LOADER),
    (p.is_probably_0840, sig.ECONOBANKING_0840),
    (p.is_probably_3e, (sig.TIGERVISION_3E,)),
    (p.is_probably_3f, (sig.TIGERVISION_3F,)),
    (p.is_probably_cty, (sig.CHETIRY_MARKER,)),
    (p.is_probably_cv, sig.COMMAVID),
    (p.is_probably_dpc_plus, (sig.DPC_PLUS_MARKER,)),
    (p.is_probably_e0, sig.PARKER_BROS_E0),
    (p.is_probably_e7, sig.M_NETWORK_E7),
    (p.is_probably_ef, sig.HOMESTAR_RUNNER_EF),
    (p.is_probably_f6, sig.ATARI_F6),
    (p.is_probably_fe, sig.ACTIVISION_FE),
    (p.is_probably_sb, sig.SUPERBANK_SB),
    (p.is_probably_ua, sig.UA_LTD),
    (p.is_probably_x07, sig.ATARIAGE_X07),
]

_SIGNATURE_CASES = [
    pytest.param(predicate, signature, id=f"{predicate.__name__}-{signature.description}")
    for predicate, table in _TABLES
    for signature in table
]


@parametrize(("predicate", "signature"), _SIGNATURE_CASES)
def test_planted_signature_is_recognized(
    predicate: Callable[[RomBytes], bool], signature: Signature
) -> None:
    image = rom_with(8 * KIB, repeated(signature.pattern, signature.min_hits))
    assert predicate(image)


@parametrize(("predicate", "signature"), _SIGNATURE_CASES)
def test_one_flipped_byte_defeats_the_signature(
    predicate: Callable[[RomBytes], bool], signature: Signature
) -> None:
    image = rom_with(8 * KIB, repeated(signature.pattern, signature.min_hits))
    image[PLANT_OFFSET] = FILLER_ALPHABET[2]
    assert not predicate(image)


def test_filler_matches_no_signature() -> None:
    image = filler(64 * KIB)
    for predicate, _ in _TABLES:
        assert not predicate(image), predicate.__name__


def test_predicates_are_false_on_an_empty_image() -> None:
    for predicate, _ in _TABLES:
        assert not predicate(b""), predicate.__name__
    assert not p.halves_identical(b"")
    assert not p.is_probably_sc(b"")
    assert not p.is_probably_4a50(b"")
    assert not p.is_probably_fa2(b"")
    assert p.probable_ef_variant(b"") is None


# --- ARM --------------------------------------------------------------------------


def test_arm_loader_must_end_within_the_first_kilobyte() -> None:
    pattern: bytes = sig.ARM_LOADER[0].pattern

    assert p.is_probably_arm(plant(filler(32 * KIB), pattern, 1024 - len(pattern)))
    assert not p.is_probably_arm(plant(filler(32 * KIB), pattern, 1024 - len(pattern) + 1))
    assert not p.is_probably_arm(plant(filler(32 * KIB), pattern, 2000))


# --- Mirrors and SuperChip ------------------------------------------------------


def test_halves_identical() -> None:
    assert p.halves_identical(mirrored(filler(2 * KIB)))
    assert not p.halves_identical(filler(4 * KIB))
    assert not p.halves_identical(b"abc")


def test_superchip_ram_in_every_bank() -> None:
    image = with_superchip(filler(16 * KIB), fill=0xFF)
    assert p.is_probably_sc(image)

    # Break the RAM fill in the last bank only
    image[3 * 4096 + 200] ^= 0xFF
    assert not p.is_probably_sc(image)


def test_superchip_ram_is_one_repeated_byte_per_bank() -> None:
    image = filler(8 * KIB)
    plant(image, bytes(256), 0)
    plant(image, bytes((0xFF,)) * 256, 4096)
    assert p.is_probably_sc(image)


def test_table_repeated_at_bank_start_is_not_superchip() -> None:
    image = filler(8 * KIB)
    for bank in (0, 4096):
        plant(image, bytes(range(128)) * 2, bank)
    assert not p.is_probably_sc(image)


def test_superchip_only_checks_whole_banks() -> None:
    assert not p.is_probably_sc(bytes(4095))
    assert p.is_probably_sc(bytes(4096))
    # A trailing partial bank is not checked
    assert p.is_probably_sc(bytes(4096) + bytes(range(100)))


# --- 4A50 -------------------------------------------------------------------------


def test_4a50_nmi_vector() -> None:
    image = with_tail(filler(64 * KIB), bytes((0x50, 0x4A)), from_end=6)
    assert p.is_probably_4a50(image)
    assert not p.is_probably_4a50(filler(64 * KIB))


def _4a50_startup(third_byte: int) -> bytearray:
    image = filler(64 * KIB)
    plant(image, bytes((0x00, 0x1F)), 0xFFFC)  # reset vector -> $1F00
    plant(image, bytes((0x0C, 0x00, third_byte)), 0x1F00)
    return image


@parametrize(("third_byte", "expected"), [(0x6E, True), (0x6F, True), (0x6D, False)])
def test_4a50_startup_code(third_byte: int, expected: bool) -> None:
    assert p.is_probably_4a50(_4a50_startup(third_byte)) is expected


def test_4a50_reset_vector_outside_1fxx_is_ignored() -> None:
    image = _4a50_startup(0x6E)
    image[0xFFFD] = 0x1E
    assert not p.is_probably_4a50(image)


def test_4a50_short_images_are_not_probed_past_the_end() -> None:
    assert not p.is_probably_4a50(b"\x50\x4a")
    assert p.is_probably_4a50(b"\x50\x4a\x00\x00\x00\x00")
    assert not p.is_probably_4a50(filler(4 * KIB))


# --- EF -----------------------------------------------------------------------------


@parametrize(
    ("marker", "from_end", "expected"),
    [
        (b"EFEF", 8, SchemeId.EF),
        (b"EFSC", 8, SchemeId.EFSC),
        (b"EFSC", 4, SchemeId.EFSC),
    ],
)
def test_ef_marker_in_the_last_eight_bytes(
    marker: bytes, from_end: int, expected: SchemeId
) -> None:
    image = with_tail(filler(64 * KIB), marker, from_end=from_end)
    assert p.probable_ef_variant(image) is expected
    assert p.is_probably_ef(image)


def test_ef_marker_outside_the_tail_is_ignored() -> None:
    image = plant(filler(64 * KIB), b"EFEF", PLANT_OFFSET)
    assert p.probable_ef_variant(image) is None
    assert not p.is_probably_ef(image)


def test_ef_bank_switch_with_superchip_is_efsc() -> None:
    pattern: bytes = sig.HOMESTAR_RUNNER_EF[0].pattern
    plain = rom_with(64 * KIB, [pattern])
    with_ram = with_superchip(rom_with(64 * KIB, [pattern]))

    assert p.probable_ef_variant(plain) is SchemeId.EF
    assert p.probable_ef_variant(with_ram) is SchemeId.EFSC


# --- FA2 and FE ---------------------------------------------------------------------


def _fa2_image() -> bytearray:
    image = filler(32 * KIB)
    image[29 * KIB :] = bytes(3 * KIB)
    return image


def test_fa2_zero_padding() -> None:
    assert p.is_probably_fa2(_fa2_image())


def test_fa2_padding_must_be_all_zero() -> None:
    image = _fa2_image()
    image[31 * KIB] = 0x01
    assert not p.is_probably_fa2(image)


def test_fa2_needs_32k() -> None:
    assert not p.is_probably_fa2(bytes(28 * KIB))


def test_fe_ignores_f8_hotspot_writes() -> None:
    fe: bytes = sig.ACTIVISION_FE[0].pattern
    f8_store = bytes((0x8D, 0xF9, 0x1F))
    assert p.is_probably_fe(rom_with(8 * KIB, [fe, f8_store, f8_store]))
