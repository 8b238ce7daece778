#!/usr/bin/env python3
"""
Data models for the gimmick table.

TableLayout describes where the table lives in the dumped address space and
GimmickEntry is one decoded slot of it.
"""

from dataclasses import dataclass
from typing import Optional

from .address import virtual_to_offset

# Replaces a whole description that is not valid Shift-JIS
DECODE_ERROR_MARKER = "<DECODE_ERROR>"

# Size of the three big-endian pointer fields at the start of each entry
POINTER_FIELDS_SIZE = 12


@dataclass(frozen=True)
class TableLayout:
    """Fixed location and geometry of a table inside a memory dump"""
    base_address: int
    start_address: int
    end_address: int
    stride: int

    def __post_init__(self):
        if self.stride < POINTER_FIELDS_SIZE:
            raise ValueError(
                f"Stride {self.stride} is too small for a "
                f"{POINTER_FIELDS_SIZE}-byte entry header")
        if self.start_address < self.base_address:
            raise ValueError(
                f"Table start 0x{self.start_address:X} lies below the image "
                f"base 0x{self.base_address:X}")
        if self.end_address <= self.start_address:
            raise ValueError(
                f"Table end 0x{self.end_address:X} must be above table start "
                f"0x{self.start_address:X}")
        if (self.end_address - self.start_address) % self.stride:
            raise ValueError(
                f"Table size 0x{self.end_address - self.start_address:X} is not "
                f"a multiple of the 0x{self.stride:X} byte stride")

    @property
    def entry_count(self) -> int:
        """Number of whole entries between start and end."""
        return (self.end_address - self.start_address) // self.stride

    @property
    def table_offset(self) -> int:
        """File offset of the first entry."""
        return self.to_offset(self.start_address)

    def to_offset(self, address: int) -> int:
        """Translate a virtual address using this layout's image base."""
        return virtual_to_offset(address, self.base_address)

    def entry_offset(self, index: int) -> int:
        """File offset of the entry in slot ``index``."""
        return self.table_offset + index * self.stride


# Gimmick table in a Dolphin MEM1 dump (mapped at 0x80000000)
GIMMICK_TABLE = TableLayout(
    base_address=0x80000000,
    start_address=0x8083B468,
    end_address=0x8083CF98,
    stride=0x10,
)


@dataclass(frozen=True)
class GimmickEntry:
    """One decoded slot of the gimmick table"""
    index: int
    description: Optional[str]
    resource_name: Optional[str]
    build_function_address: int
    is_common: bool

    @property
    def has_build_function(self) -> bool:
        return self.build_function_address != 0

    @property
    def description_failed(self) -> bool:
        return self.description == DECODE_ERROR_MARKER
