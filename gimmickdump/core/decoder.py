#!/usr/bin/env python3
"""
Gimmick table decoding.

This module walks the fixed-stride gimmick table of a memory image and
resolves the string pointers of every entry. Each 16 byte entry is laid out
as:

    0x0  u32  description pointer (Shift-JIS, NUL terminated)
    0x4  u32  resource name pointer (ASCII, NUL terminated)
    0x8  u32  build function address
    0xC  u8   "common" flag
    0xD       padding
"""

import codecs
import logging
import struct
from typing import List, Optional, Union

from .exceptions import ResourceNameDecodeError
from .image import MemoryImage
from .models import DECODE_ERROR_MARKER, GIMMICK_TABLE, GimmickEntry, TableLayout

logger = logging.getLogger(__name__)

# Windows-31J, for the NEC/IBM extensions and the user-defined area
DESCRIPTION_ENCODING = 'cp932'
RESOURCE_NAME_ENCODING = 'utf-8'

FLAG_OFFSET = 0xC

_ENTRY_POINTERS = struct.Struct('>III')

# A leading byte-order mark overrides Shift-JIS for the whole description
_BOM_ENCODINGS = (
    (codecs.BOM_UTF8, 'utf-8'),
    (codecs.BOM_UTF16_LE, 'utf-16-le'),
    (codecs.BOM_UTF16_BE, 'utf-16-be'),
)

# cp932 maps the lone bytes 0xA0 and 0xFD-0xFF to these private use
# characters; in Shift_JIS those bytes are invalid
_UNMAPPED_SINGLE_BYTES = {
    '\uf8f0': 0xA0,
    '\uf8f1': 0xFD,
    '\uf8f2': 0xFE,
    '\uf8f3': 0xFF,
}


def decode_description(raw: bytes) -> str:
    """Decode description bytes as Shift-JIS, honouring a leading BOM.

    Raises:
        UnicodeDecodeError: If the bytes are not valid in the chosen encoding
    """
    for bom, encoding in _BOM_ENCODINGS:
        if raw.startswith(bom):
            return raw[len(bom):].decode(encoding)

    text = raw.decode(DESCRIPTION_ENCODING)
    for char in text:
        if char in _UNMAPPED_SINGLE_BYTES:
            byte = _UNMAPPED_SINGLE_BYTES[char]
            raise UnicodeDecodeError(
                DESCRIPTION_ENCODING, raw, 0, len(raw),
                f"unmapped single byte 0x{byte:02X}")
    return text


class GimmickTableDecoder:
    """Decodes every slot of a gimmick table from a memory image"""

    def __init__(self, image: Union[MemoryImage, bytes, bytearray],
                 layout: TableLayout = GIMMICK_TABLE):
        """Initialize the decoder.

        Args:
            image: Memory image, or the raw bytes of one
            layout: Location and geometry of the table
        """
        if not isinstance(image, MemoryImage):
            image = MemoryImage(image)
        self.image = image
        self.layout = layout

    def decode(self) -> List[GimmickEntry]:
        """Decode all table slots in order.

        Returns:
            One GimmickEntry per slot, entry N for slot N

        Raises:
            ImageBoundsError: If the table or a string pointer lies outside the image
            ResourceNameDecodeError: If a resource name is not valid UTF-8
        """
        logger.info("Decoding %d gimmick entries at offset 0x%X (stride 0x%X)",
                    self.layout.entry_count, self.layout.table_offset,
                    self.layout.stride)

        entries = [self._decode_entry(index)
                   for index in range(self.layout.entry_count)]

        failed = sum(1 for entry in entries if entry.description_failed)
        if failed:
            logger.warning("%d description(s) could not be decoded", failed)
        return entries

    def _decode_entry(self, index: int) -> GimmickEntry:
        raw = self.image.read(self.layout.entry_offset(index), self.layout.stride)
        description_ptr, resource_name_ptr, build_function = \
            _ENTRY_POINTERS.unpack_from(raw)
        is_common = (raw[FLAG_OFFSET] if len(raw) > FLAG_OFFSET else 0) != 0

        logger.debug("Entry 0x%X: description=0x%08X resource=0x%08X "
                     "build=0x%08X common=%s", index, description_ptr,
                     resource_name_ptr, build_function, is_common)

        return GimmickEntry(
            index=index,
            description=self._read_description(index, description_ptr),
            resource_name=self._read_resource_name(index, resource_name_ptr),
            build_function_address=build_function,
            is_common=is_common,
        )

    def _read_string_bytes(self, address: int) -> Optional[bytes]:
        """Resolve a string pointer, or None for a null pointer."""
        if address == 0:
            return None
        return self.image.read_until_terminator(self.layout.to_offset(address))

    def _read_description(self, index: int, address: int) -> Optional[str]:
        """Descriptions that fail to decode become DECODE_ERROR_MARKER."""
        raw = self._read_string_bytes(address)
        if raw is None:
            return None
        try:
            return decode_description(raw)
        except UnicodeDecodeError as e:
            logger.warning("Entry 0x%X: description at 0x%08X is not valid "
                           "Shift-JIS: %s", index, address, e)
            return DECODE_ERROR_MARKER

    def _read_resource_name(self, index: int, address: int) -> Optional[str]:
        """Resource names are always ASCII; anything else aborts the run."""
        raw = self._read_string_bytes(address)
        if raw is None:
            return None
        try:
            return raw.decode(RESOURCE_NAME_ENCODING)
        except UnicodeDecodeError as e:
            raise ResourceNameDecodeError(
                f"Entry 0x{index:X}: resource name at 0x{address:08X} is not "
                f"valid UTF-8: {e}") from e


def decode_gimmick_table(image: Union[MemoryImage, bytes, bytearray],
                         layout: TableLayout = GIMMICK_TABLE) -> List[GimmickEntry]:
    """Convenience function to decode a gimmick table

    Args:
        image: Memory image, or the raw bytes of one
        layout: Location and geometry of the table

    Returns:
        Decoded entries in table slot order
    """
    return GimmickTableDecoder(image, layout).decode()
