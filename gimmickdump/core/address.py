#!/usr/bin/env python3
"""
Virtual address to dump offset translation.

An "offset" is relative to the start of the dump file, an "address" is
relative to the game's memory map.
"""


def virtual_to_offset(address: int, base: int) -> int:
    """Translate a virtual address into an offset within a dump mapped at ``base``.

    No range checking happens here. A negative or oversized result is
    rejected by MemoryImage when it is used.

    Args:
        address: Virtual address as seen by the running program
        base: Virtual address of the first byte of the dump

    Returns:
        Offset into the dump file
    """
    return address - base
