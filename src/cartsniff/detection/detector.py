# topmark:header:start
#
#   project      : CartSniff
#   file         : detector.py
#   file_relpath : src/cartsniff/detection/detector.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Top-level scheme detection.

`detect_scheme` combines the two sources of information about a ROM image:

1. the filename extension, which (when it names a scheme) is authoritative;
2. the image content, classified by the ordered detection rules.

It works with only a filename, only content, or both, and always returns a
best guess. It never raises for any combination of inputs and keeps no state
between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cartsniff.config.logging import CartsniffLogger, get_logger
from cartsniff.detection.content import classify_by_content
from cartsniff.detection.extensions import match_by_extension
from cartsniff.schemes import DEFAULT_SCHEME, SchemeId

if TYPE_CHECKING:
    from cartsniff.detection.signatures import RomBytes

logger: CartsniffLogger = get_logger(__name__)


@dataclass(frozen=True)
class RomImage:
    """Read-only view over a ROM byte buffer and its effective size.

    Attributes:
        data (RomBytes | None): The buffer; ``None`` means "no content".
        size (int): Number of leading bytes of ``data`` that make up the image.
    """

    data: RomBytes | None
    size: int

    @classmethod
    def of(cls, data: RomBytes | None, size: int | None = None) -> RomImage:
        """Build a view with ``size`` defaulted and clamped to the buffer length.

        Args:
            data (RomBytes | None): The buffer, or ``None``.
            size (int | None): Requested size. ``None`` means the whole buffer; a
                negative value becomes 0; a value larger than the buffer is
                clamped to its length.

        Returns:
            RomImage: The normalized view.
        """
        available: int = 0 if data is None else len(data)
        if size is None:
            return cls(data, available)
        if size < 0:
            logger.debug("Negative image size %d treated as 0", size)
            return cls(data, 0)
        if size > available:
            logger.debug("Image size %d clamped to buffer length %d", size, available)
            return cls(data, available)
        return cls(data, size)

    @property
    def has_content(self) -> bool:
        """True if there is a buffer with at least one byte in view."""
        return self.data is not None and self.size > 0

    @property
    def bytes(self) -> RomBytes:
        """The bytes in view (the buffer itself when the view covers all of it)."""
        if self.data is None:
            return b""
        if self.size == len(self.data):
            return self.data
        return self.data[: self.size]


def detect_scheme(
    filename: str | None,
    image: RomBytes | None = None,
    size: int | None = None,
) -> SchemeId:
    """Determine the bankswitching scheme of a ROM image.

    Args:
        filename (str | None): The ROM filename, used for its extension hint.
            ``None`` or ``""`` skips the extension check.
        image (RomBytes | None): The ROM bytes, or ``None`` if unavailable.
        size (int | None): Number of leading bytes of ``image`` to consider.
            Defaults to ``len(image)``.

    Returns:
        SchemeId: The scheme named by the extension if it names one; otherwise
        the content classification when content is available; otherwise
        `SchemeId.AUTO`.
    """
    if filename:
        by_name: SchemeId = match_by_extension(filename)
        if by_name is not SchemeId.AUTO:
            logger.trace("'%s': scheme %s from extension", filename, by_name)
            return by_name

    rom: RomImage = RomImage.of(image, size)
    if rom.has_content:
        scheme: SchemeId = classify_by_content(rom.bytes)
        logger.trace("'%s': scheme %s from %d bytes of content", filename or "", scheme, rom.size)
        return scheme

    logger.trace("'%s': no extension hint and no content", filename or "")
    return DEFAULT_SCHEME
