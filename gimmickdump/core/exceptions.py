#!/usr/bin/env python3
"""
Exception hierarchy for gimmick table extraction.

Every fatal condition of a run is a GimmickDumpError so commands can report
it with a single handler.
"""


class GimmickDumpError(Exception):
    """Base exception for gimmickdump failures"""


class InputFileError(GimmickDumpError):
    """Raised when the memory dump cannot be found or read"""


class ImageBoundsError(GimmickDumpError):
    """Raised when an offset or slice falls outside the memory image"""

    def __init__(self, offset: int, size: int, image_size: int):
        self.offset = offset
        self.size = size
        self.image_size = image_size
        super().__init__(
            f"Read of {size} byte(s) at offset 0x{offset:X} is outside the "
            f"0x{image_size:X} byte memory image (truncated or corrupt dump?)")


class ResourceNameDecodeError(GimmickDumpError):
    """Raised when a resource name is not valid UTF-8"""


class ReportWriteError(GimmickDumpError):
    """Raised when the report file cannot be created or written"""
