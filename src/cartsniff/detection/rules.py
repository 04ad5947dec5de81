# topmark:header:start
#
#   project      : CartSniff
#   file         : rules.py
#   file_relpath : src/cartsniff/detection/rules.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ordered detection rules and image size buckets.

The content classifier is a fixed, ordered list of `(scheme, predicate)` pairs,
each gated by the image size buckets it applies to. The order is significant:
several signatures overlap (an 8K image can contain both E0 and 3E hotspot
accesses), and the earlier rule wins.

Exports:
    SizeClass: Image size buckets.
    DetectionRule: One `(scheme, predicate)` pair plus its size gate.
    DETECTION_RULES (tuple[DetectionRule, ...]): The rules, in evaluation order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Final, Protocol, Union

from cartsniff.detection.predicates import (
    halves_identical,
    is_probably_0840,
    is_probably_3e,
    is_probably_3f,
    is_probably_4a50,
    is_probably_arm,
    is_probably_cty,
    is_probably_cv,
    is_probably_dpc_plus,
    is_probably_e0,
    is_probably_e7,
    is_probably_f6,
    is_probably_fa2,
    is_probably_fe,
    is_probably_sb,
    is_probably_sc,
    is_probably_ua,
    is_probably_x07,
    probable_ef_variant,
)
from cartsniff.schemes import SchemeId

if TYPE_CHECKING:
    from cartsniff.detection.signatures import RomBytes

KIB: Final[int] = 1024

# Supercharger tape images are multiples of 8448 bytes (or the 6K raw dump)
AR_LOAD_SIZE: Final[int] = 8448
AR_RAW_SIZE: Final[int] = 6 * KIB


class SizeClass(Enum):
    """Image size buckets used to gate detection rules.

    Attributes:
        AR: Supercharger load images (multiples of 8448 bytes, or 6K).
        TINY: Non-empty images smaller than 2K (and the empty image).
        K2: Exactly 2K.
        K4: Exactly 4K.
        K8: Exactly 8K.
        DPC: Pitfall II images (10K, or 10K plus the 255 byte DPC tail).
        K12: Exactly 12K.
        K16: Exactly 16K.
        K24_28: 24K or 28K (FA2 without ARM driver padding).
        K29: 29K (Harmony-style images with the 1K ARM driver).
        K32: Exactly 32K.
        K64: Exactly 64K.
        K128: Exactly 128K.
        K256: Exactly 256K.
        OTHER: Anything else.
    """

    AR = "ar"
    TINY = "tiny"
    K2 = "2k"
    K4 = "4k"
    K8 = "8k"
    DPC = "dpc"
    K12 = "12k"
    K16 = "16k"
    K24_28 = "24k-28k"
    K29 = "29k"
    K32 = "32k"
    K64 = "64k"
    K128 = "128k"
    K256 = "256k"
    OTHER = "other"


# Exact sizes; AR and TINY are range checks and handled in `classify_size`
_EXACT_SIZES: Final[dict[int, SizeClass]] = {
    2 * KIB: SizeClass.K2,
    4 * KIB: SizeClass.K4,
    8 * KIB: SizeClass.K8,
    10 * KIB: SizeClass.DPC,
    10 * KIB + 255: SizeClass.DPC,
    12 * KIB: SizeClass.K12,
    16 * KIB: SizeClass.K16,
    24 * KIB: SizeClass.K24_28,
    28 * KIB: SizeClass.K24_28,
    29 * KIB: SizeClass.K29,
    32 * KIB: SizeClass.K32,
    64 * KIB: SizeClass.K64,
    128 * KIB: SizeClass.K128,
    256 * KIB: SizeClass.K256,
}

_SIZE_DEFAULTS: Final[dict[SizeClass, SchemeId]] = {
    SizeClass.AR: SchemeId.AR,
    SizeClass.TINY: SchemeId.S2K,
    SizeClass.K2: SchemeId.S2K,
    SizeClass.K4: SchemeId.S4K,
    SizeClass.K8: SchemeId.F8,
    SizeClass.DPC: SchemeId.DPC,
    SizeClass.K12: SchemeId.FA,
    SizeClass.K16: SchemeId.F6,
    SizeClass.K24_28: SchemeId.FA2,
    SizeClass.K29: SchemeId.DPCP,
    SizeClass.K32: SchemeId.F4,
    SizeClass.K64: SchemeId.F0,
    SizeClass.K128: SchemeId.SB,
    SizeClass.K256: SchemeId.SB,
    SizeClass.OTHER: SchemeId.S4K,
}


def classify_size(size: int) -> SizeClass:
    """Map an image size to its `SizeClass` bucket.

    The Supercharger check runs first, so 8448-byte multiples and 6K never fall
    in any other bucket. A size of 0 (or less) is ``TINY``.

    Args:
        size (int): The image size in bytes.

    Returns:
        SizeClass: The matching bucket.
    """
    if size > 0 and (size % AR_LOAD_SIZE == 0 or size == AR_RAW_SIZE):
        return SizeClass.AR
    if size < 2 * KIB:
        return SizeClass.TINY
    return _EXACT_SIZES.get(size, SizeClass.OTHER)


def default_scheme_for_size(size: int) -> SchemeId:
    """Return the scheme assumed for an image of ``size`` bytes when no rule matches."""
    return _SIZE_DEFAULTS[classify_size(size)]


class RulePredicate(Protocol):
    """Protocol for detection rule predicates.

    A predicate inspects the whole image and returns either a boolean, or (for
    multi-outcome heuristics) the detected `SchemeId` / ``None``.
    """

    def __call__(self, image: RomBytes) -> Union[bool, SchemeId, None]:
        """Inspect ``image`` and return the match result."""
        ...


@dataclass(frozen=True)
class DetectionRule:
    """A content heuristic bound to the scheme it reports.

    Attributes:
        name (str): Stable rule identifier (used in logs and tests).
        scheme (SchemeId): Scheme reported when a boolean predicate matches.
        predicate (RulePredicate): The content heuristic.
        size_classes (frozenset[SizeClass]): Buckets in which the rule is evaluated.
        description (str): Human-readable description of the rule.
    """

    name: str
    scheme: SchemeId
    predicate: RulePredicate
    size_classes: frozenset[SizeClass] = field(default_factory=frozenset)
    description: str = ""

    def applies_to(self, size_class: SizeClass) -> bool:
        """Return True if the rule is evaluated for images in ``size_class``."""
        return size_class in self.size_classes

    def evaluate(self, image: RomBytes) -> SchemeId | None:
        """Run the predicate on ``image``.

        Args:
            image (RomBytes): The effective ROM image.

        Returns:
            SchemeId | None: The scheme returned by a multi-outcome predicate,
            ``self.scheme`` for a truthy boolean result, or ``None`` if the rule
            does not match.
        """
        result = self.predicate(image)
        if isinstance(result, SchemeId):
            return result
        return self.scheme if result else None


def _sizes(*classes: SizeClass) -> frozenset[SizeClass]:
    return frozenset(classes)


# 3E and 3F are probed in every size without a better fixed-size candidate
_TIGERVISION_SIZES: Final[frozenset[SizeClass]] = _sizes(
    SizeClass.K8,
    SizeClass.K16,
    SizeClass.K32,
    SizeClass.K64,
    SizeClass.K128,
    SizeClass.K256,
    SizeClass.OTHER,
)

DETECTION_RULES: Final[tuple[DetectionRule, ...]] = (
    DetectionRule(
        name="cv",
        scheme=SchemeId.CV,
        predicate=is_probably_cv,
        size_classes=_sizes(SizeClass.K2, SizeClass.K4),
        description="Commavid RAM accesses",
    ),
    DetectionRule(
        name="mirrored-2k",
        scheme=SchemeId.S2K,
        predicate=halves_identical,
        size_classes=_sizes(SizeClass.K4),
        description="4K image made of two copies of the same 2K",
    ),
    DetectionRule(
        name="superchip-4k",
        scheme=SchemeId.S4KSC,
        predicate=is_probably_sc,
        size_classes=_sizes(SizeClass.K4),
        description="4K with SuperChip RAM",
    ),
    DetectionRule(
        name="superchip-8k",
        scheme=SchemeId.F8SC,
        predicate=is_probably_sc,
        size_classes=_sizes(SizeClass.K8),
        description="8K with SuperChip RAM",
    ),
    DetectionRule(
        name="mirrored-4k",
        scheme=SchemeId.S4K,
        predicate=halves_identical,
        size_classes=_sizes(SizeClass.K8),
        description="8K image made of two copies of the same 4K",
    ),
    DetectionRule(
        name="e0",
        scheme=SchemeId.E0,
        predicate=is_probably_e0,
        size_classes=_sizes(SizeClass.K8),
        description="Parker Bros hotspot accesses",
    ),
    DetectionRule(
        name="superchip-16k",
        scheme=SchemeId.F6SC,
        predicate=is_probably_sc,
        size_classes=_sizes(SizeClass.K16),
        description="16K with SuperChip RAM",
    ),
    DetectionRule(
        name="e7",
        scheme=SchemeId.E7,
        predicate=is_probably_e7,
        size_classes=_sizes(SizeClass.K12, SizeClass.K16),
        description="M-Network hotspot accesses",
    ),
    DetectionRule(
        name="superchip-32k",
        scheme=SchemeId.F4SC,
        predicate=is_probably_sc,
        size_classes=_sizes(SizeClass.K32),
        description="32K with SuperChip RAM",
    ),
    DetectionRule(
        name="3e",
        scheme=SchemeId.S3E,
        predicate=is_probably_3e,
        size_classes=_TIGERVISION_SIZES,
        description="Tigervision bank store to $3E",
    ),
    DetectionRule(
        name="f6",
        scheme=SchemeId.F6,
        predicate=is_probably_f6,
        size_classes=_sizes(SizeClass.K16),
        description="Atari 16K hotspot accesses",
    ),
    DetectionRule(
        name="3f",
        scheme=SchemeId.S3F,
        predicate=is_probably_3f,
        size_classes=_TIGERVISION_SIZES,
        description="Tigervision bank stores to $3F",
    ),
    DetectionRule(
        name="ua",
        scheme=SchemeId.UA,
        predicate=is_probably_ua,
        size_classes=_sizes(SizeClass.K8),
        description="UA Ltd. hotspot accesses",
    ),
    DetectionRule(
        name="fe",
        scheme=SchemeId.FE,
        predicate=is_probably_fe,
        size_classes=_sizes(SizeClass.K8),
        description="Activision subroutine calls",
    ),
    DetectionRule(
        name="0840",
        scheme=SchemeId.S0840,
        predicate=is_probably_0840,
        size_classes=_sizes(SizeClass.K8),
        description="EconoBanking hotspot accesses",
    ),
    DetectionRule(
        name="4a50",
        scheme=SchemeId.S4A50,
        predicate=is_probably_4a50,
        size_classes=_sizes(SizeClass.K64, SizeClass.K128),
        description="4A50 NMI vector or startup code",
    ),
    DetectionRule(
        name="ef",
        scheme=SchemeId.EF,
        predicate=probable_ef_variant,
        size_classes=_sizes(SizeClass.K64),
        description="Homestar Runner EF/EFSC",
    ),
    DetectionRule(
        name="x07",
        scheme=SchemeId.X07,
        predicate=is_probably_x07,
        size_classes=_sizes(SizeClass.K64),
        description="AtariAge X07 hotspot accesses",
    ),
    DetectionRule(
        name="sb",
        scheme=SchemeId.SB,
        predicate=is_probably_sb,
        size_classes=_sizes(SizeClass.K128),
        description="SUPERbank hotspot accesses",
    ),
    DetectionRule(
        name="dpc-plus",
        scheme=SchemeId.DPCP,
        predicate=is_probably_dpc_plus,
        size_classes=_sizes(SizeClass.K32),
        description="DPC+ ARM driver marker",
    ),
    DetectionRule(
        name="arm-custom",
        scheme=SchemeId.CUSTOM,
        predicate=is_probably_arm,
        size_classes=_sizes(SizeClass.K32),
        description="Custom ARM code in the first 1K",
    ),
    DetectionRule(
        name="arm-fa2",
        scheme=SchemeId.FA2,
        predicate=is_probably_arm,
        size_classes=_sizes(SizeClass.K29),
        description="FA2 image with the Harmony ARM driver",
    ),
    DetectionRule(
        name="cty",
        scheme=SchemeId.CTY,
        predicate=is_probably_cty,
        size_classes=_sizes(SizeClass.K32),
        description="Chetiry marker string",
    ),
    DetectionRule(
        name="fa2",
        scheme=SchemeId.FA2,
        predicate=is_probably_fa2,
        size_classes=_sizes(SizeClass.K32),
        description="32K FA2 with zero padding from 29K",
    ),
)


def rules_for_size(size: int) -> tuple[DetectionRule, ...]:
    """Return the rules evaluated for an image of ``size`` bytes, in order."""
    size_class: SizeClass = classify_size(size)
    return tuple(rule for rule in DETECTION_RULES if rule.applies_to(size_class))
