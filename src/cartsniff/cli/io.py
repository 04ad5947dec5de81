# topmark:header:start
#
#   project      : CartSniff
#   file         : io.py
#   file_relpath : src/cartsniff/cli/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ROM input for the CLI.

Reading files is the CLI's job; the detection core only ever sees bytes. Each
input (a path, or ``-`` for STDIN) becomes a `RomInput`. Images larger than the
configured limit are not loaded: they are classified by filename only.

OS errors are mapped to the matching CLI error (and thus exit code).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from cartsniff.cli.errors import (
    CartsniffError,
    CartsniffFileNotFoundError,
    CartsniffIOError,
    CartsniffPermissionDeniedError,
)
from cartsniff.config.logging import get_logger

if TYPE_CHECKING:
    from typing import BinaryIO

    from cartsniff.config.logging import CartsniffLogger

logger: CartsniffLogger = get_logger(__name__)

STDIN_SENTINEL = "-"


@dataclass(frozen=True)
class RomInput:
    """A ROM image as seen by the CLI.

    Attributes:
        source (str): What the user passed (a path, or ``-``).
        filename (str): Filename whose extension may hint the scheme.
        data (bytes | None): The image bytes; None if the image exceeded the size limit.
        size (int): Size of the image in bytes (also when it was not loaded).
    """

    source: str
    filename: str
    data: bytes | None
    size: int

    @property
    def oversized(self) -> bool:
        """True if the image was too large to be loaded."""
        return self.data is None


def _os_error_to_cli(path: str, exc: OSError) -> CartsniffError:
    """Map an `OSError` raised while reading ``path`` to a CLI error."""
    if isinstance(exc, FileNotFoundError):
        return CartsniffFileNotFoundError(f"{path}: no such file")
    if isinstance(exc, PermissionError):
        return CartsniffPermissionDeniedError(f"{path}: permission denied")
    if isinstance(exc, IsADirectoryError):
        return CartsniffIOError(f"{path}: is a directory")
    return CartsniffIOError(f"{path}: {exc.strerror or exc}")


def read_rom_file(path: str, *, max_size: int) -> RomInput:
    """Read a ROM image from disk.

    Args:
        path (str): Path of the ROM file.
        max_size (int): Largest image loaded; larger files are returned without data.

    Returns:
        RomInput: The image.

    Raises:
        CartsniffFileNotFoundError: If ``path`` does not exist.
        CartsniffPermissionDeniedError: If ``path`` is not readable.
        CartsniffIOError: For any other read failure (including directories).
    """
    rom_path = Path(path)
    try:
        if rom_path.is_dir():
            raise IsADirectoryError(path)
        size: int = rom_path.stat().st_size
        if size > max_size:
            logger.info("%s: %d bytes exceeds limit of %d bytes; not loaded", path, size, max_size)
            return RomInput(source=path, filename=path, data=None, size=size)
        data: bytes = rom_path.read_bytes()
    except OSError as exc:
        logger.error("Cannot read %s: %s", path, exc)
        raise _os_error_to_cli(path, exc) from exc

    logger.debug("Read %d bytes from %s", len(data), path)
    return RomInput(source=path, filename=path, data=data, size=len(data))


def read_rom_stream(stream: BinaryIO, *, filename: str, max_size: int) -> RomInput:
    """Read a ROM image from a binary stream (STDIN).

    At most ``max_size + 1`` bytes are kept in memory; if the stream holds more
    than ``max_size`` bytes, the rest is drained and the image is returned
    without data.

    Args:
        stream (BinaryIO): The stream to read.
        filename (str): Filename hint for the image (``--stdin-filename``).
        max_size (int): Largest image loaded.

    Returns:
        RomInput: The image.

    Raises:
        CartsniffIOError: If reading the stream fails.
    """
    try:
        data: bytes = stream.read(max_size + 1)
        if len(data) <= max_size:
            logger.debug("Read %d bytes from STDIN", len(data))
            return RomInput(source=STDIN_SENTINEL, filename=filename, data=data, size=len(data))
        size: int = len(data)
        chunk: bytes = stream.read(64 * 1024)
        while chunk:
            size += len(chunk)
            chunk = stream.read(64 * 1024)
    except OSError as exc:
        logger.error("Cannot read STDIN: %s", exc)
        raise _os_error_to_cli("<stdin>", exc) from exc

    logger.info("STDIN: %d bytes exceeds limit of %d bytes; not loaded", size, max_size)
    return RomInput(source=STDIN_SENTINEL, filename=filename, data=None, size=size)
