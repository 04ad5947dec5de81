# topmark:header:start
#
#   project      : CartSniff
#   file         : content.py
#   file_relpath : src/cartsniff/detection/content.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Content-based scheme classification.

`classify_by_content` walks the rules that
[`rules_for_size`][cartsniff.detection.rules.rules_for_size] keeps for the image
size bucket, in table order; the first rule that matches decides. When none
does, the size-based default is returned.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cartsniff.config.logging import CartsniffLogger, get_logger
from cartsniff.detection.rules import (
    SizeClass,
    classify_size,
    default_scheme_for_size,
    rules_for_size,
)

if TYPE_CHECKING:
    from cartsniff.detection.signatures import RomBytes
    from cartsniff.schemes import SchemeId

logger: CartsniffLogger = get_logger(__name__)


def classify_by_content(image: RomBytes, size: int | None = None) -> SchemeId:
    """Guess the bankswitching scheme of ``image`` from its bytes.

    Args:
        image (RomBytes): The ROM image.
        size (int | None): Number of leading bytes that make up the image.
            Defaults to (and is clamped to) ``len(image)``.

    Returns:
        SchemeId: The scheme of the first matching rule, or the default for the
        image size.
    """
    effective: RomBytes = image
    if size is not None and 0 <= size < len(image):
        effective = image[:size]
    elif size is not None and size < 0:
        effective = image[:0]
    image_size: int = len(effective)

    size_class: SizeClass = classify_size(image_size)
    logger.trace("Classifying %d byte image (size class %s)", image_size, size_class.value)

    for rule in rules_for_size(image_size):
        scheme: SchemeId | None = rule.evaluate(effective)
        if scheme is not None:
            logger.debug("Rule '%s' matched: %s", rule.name, scheme)
            return scheme
        logger.trace("Rule '%s' did not match", rule.name)

    fallback: SchemeId = default_scheme_for_size(image_size)
    logger.debug("No rule matched; size default for %d bytes: %s", image_size, fallback)
    return fallback
