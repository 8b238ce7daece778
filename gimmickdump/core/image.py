#!/usr/bin/env python3
"""
Read-only access to a captured memory image.

All reads are bounds checked against the image size and raise
ImageBoundsError instead of silently returning short data.
"""

import logging
from pathlib import Path

from .exceptions import ImageBoundsError, InputFileError

logger = logging.getLogger(__name__)


class MemoryImage:
    """Immutable byte buffer holding a whole memory dump"""

    def __init__(self, data: bytes):
        self._data = bytes(data)

    @classmethod
    def from_file(cls, dump_path) -> 'MemoryImage':
        """Load a complete dump file into memory.

        Args:
            dump_path: Path to the raw RAM dump

        Returns:
            MemoryImage over the file contents

        Raises:
            InputFileError: If the file does not exist or cannot be read
        """
        path = Path(dump_path)
        if not path.is_file():
            raise InputFileError(f"Memory dump not found: {path}")
        try:
            data = path.read_bytes()
        except OSError as e:
            raise InputFileError(f"Failed to read memory dump {path}: {e}") from e

        logger.debug("Loaded %d bytes from %s", len(data), path)
        return cls(data)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def data(self) -> bytes:
        return self._data

    def _check_range(self, offset: int, size: int) -> None:
        if offset < 0 or size < 0 or offset + size > len(self._data):
            raise ImageBoundsError(offset, size, len(self._data))

    def read(self, offset: int, size: int) -> bytes:
        """Return exactly ``size`` bytes starting at ``offset``."""
        self._check_range(offset, size)
        return self._data[offset:offset + size]

    def read_until_terminator(self, offset: int, terminator: int = 0) -> bytes:
        """Collect bytes from ``offset`` up to the terminator or end of image.

        The terminator itself is not included. An offset equal to the image
        size yields no bytes; anything past it is a bounds error.
        """
        self._check_range(offset, 0)
        end = self._data.find(bytes([terminator]), offset)
        if end == -1:
            end = len(self._data)
        return self._data[offset:end]
