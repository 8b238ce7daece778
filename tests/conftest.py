"""Shared pytest fixtures for gimmickdump tests."""

import pytest

from gimmickdump.core.models import GIMMICK_TABLE

from image_builder import ImageBuilder, SMALL_LAYOUT


@pytest.fixture
def small_builder():
    """Builder for a three entry table in a small image."""
    return ImageBuilder(SMALL_LAYOUT)


@pytest.fixture
def gimmick_dump(tmp_path):
    """
    Write a dump file using the real gimmick table geometry.

    Slot 0 has both strings, a build function and the common flag; slot 1 has
    only a resource name; every other slot is zero.

    Returns:
        Path to the dump file
    """
    builder = ImageBuilder(GIMMICK_TABLE)
    description = builder.add_string('スイッチ'.encode('shift_jis'))
    resource = builder.add_string(b'switch01')
    builder.set_entry(0, description=description, resource_name=resource,
                      build_function=0x80123ABC, flag=1)
    builder.set_entry(1, resource_name=resource)

    dump_path = tmp_path / 'mem1.raw'
    dump_path.write_bytes(builder.build())
    return dump_path


@pytest.fixture
def truncated_dump(tmp_path):
    """Dump file that ends in the middle of the gimmick table."""
    dump_path = tmp_path / 'truncated.raw'
    dump_path.write_bytes(bytes(GIMMICK_TABLE.table_offset + 0x18))
    return dump_path
