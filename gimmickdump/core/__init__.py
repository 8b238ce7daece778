#!/usr/bin/env python3
"""
Core decoding components for gimmickdump.

This package provides the table layout, the memory image reader and the
gimmick table decoder. Nothing in here touches the filesystem apart from
MemoryImage.from_file.
"""

from .models import TableLayout, GimmickEntry, GIMMICK_TABLE, DECODE_ERROR_MARKER
from .exceptions import (
    GimmickDumpError,
    InputFileError,
    ImageBoundsError,
    ResourceNameDecodeError,
    ReportWriteError,
)
from .address import virtual_to_offset
from .image import MemoryImage
from .decoder import GimmickTableDecoder, decode_gimmick_table

__all__ = [
    'TableLayout', 'GimmickEntry', 'GIMMICK_TABLE', 'DECODE_ERROR_MARKER',
    'GimmickDumpError', 'InputFileError', 'ImageBoundsError',
    'ResourceNameDecodeError', 'ReportWriteError',
    'virtual_to_offset', 'MemoryImage',
    'GimmickTableDecoder', 'decode_gimmick_table',
]
