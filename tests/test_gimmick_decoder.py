#!/usr/bin/env python3
"""
Unit tests for gimmick table decoding

Covers the per-field rules of a table entry:
1. Null pointers decode as absent
2. Shift-JIS descriptions, with a visible marker when undecodable
3. Resource names, which abort the run when undecodable
4. Build function addresses and the common flag
5. Truncated images and out of range pointers
"""

import logging
import unittest

import pytest

from gimmickdump.core.decoder import GimmickTableDecoder, decode_description, decode_gimmick_table
from gimmickdump.core.exceptions import ImageBoundsError, ResourceNameDecodeError
from gimmickdump.core.image import MemoryImage
from gimmickdump.core.models import DECODE_ERROR_MARKER, GIMMICK_TABLE

from image_builder import ImageBuilder, SMALL_LAYOUT


class TestDecodeEntries(unittest.TestCase):
    """Test decoding of well formed tables"""

    def setUp(self):
        self.builder = ImageBuilder(SMALL_LAYOUT)

    def decode(self):
        return decode_gimmick_table(self.builder.build(), SMALL_LAYOUT)

    def test_entry_count_matches_layout(self):
        """Every slot produces an entry, even when all fields are zero"""
        entries = self.decode()
        self.assertEqual(len(entries), SMALL_LAYOUT.entry_count)
        self.assertEqual([e.index for e in entries], [0, 1, 2])

    def test_zero_pointers_are_absent(self):
        """Null pointers decode as None, never as empty or error text"""
        entry = self.decode()[0]
        self.assertIsNone(entry.description)
        self.assertIsNone(entry.resource_name)
        self.assertEqual(entry.build_function_address, 0)
        self.assertFalse(entry.is_common)

    def test_round_trip_strings(self):
        """Two payloads decode exactly, zero pointer fields stay absent"""
        description = self.builder.add_string('ドア（大）'.encode('shift_jis'))
        resource = self.builder.add_string(b'door_big')
        self.builder.set_entry(0, description=description)
        self.builder.set_entry(1, resource_name=resource)
        self.builder.set_entry(2, description=description, resource_name=resource)

        entries = self.decode()

        self.assertEqual(entries[0].description, 'ドア（大）')
        self.assertIsNone(entries[0].resource_name)
        self.assertIsNone(entries[1].description)
        self.assertEqual(entries[1].resource_name, 'door_big')
        self.assertEqual(entries[2].description, 'ドア（大）')
        self.assertEqual(entries[2].resource_name, 'door_big')

    def test_ascii_description(self):
        description = self.builder.add_string(b'Switch A')
        self.builder.set_entry(0, description=description)
        self.assertEqual(self.decode()[0].description, 'Switch A')

    def test_pointer_to_empty_string(self):
        """A pointer straight at a terminator gives an empty string"""
        empty = self.builder.add_string(b'')
        self.builder.set_entry(0, description=empty, resource_name=empty)
        entry = self.decode()[0]
        self.assertEqual(entry.description, '')
        self.assertEqual(entry.resource_name, '')

    def test_build_function_keeps_high_bits(self):
        self.builder.set_entry(0, build_function=0xFFFFFFFF)
        self.builder.set_entry(1, build_function=0x8001A2B4)
        entries = self.decode()
        self.assertEqual(entries[0].build_function_address, 0xFFFFFFFF)
        self.assertEqual(entries[1].build_function_address, 0x8001A2B4)

    def test_common_flag(self):
        """Any nonzero flag byte means common"""
        self.builder.set_entry(0, flag=1)
        self.builder.set_entry(1, flag=0xFF)
        self.builder.set_entry(2, flag=0)
        self.assertEqual([e.is_common for e in self.decode()], [True, True, False])

    def test_padding_is_ignored(self):
        offset = SMALL_LAYOUT.entry_offset(0)
        self.builder.data[offset + 13:offset + 16] = b'\xAA\xBB\xCC'
        self.assertFalse(self.decode()[0].is_common)

    def test_unterminated_string_reads_to_end(self):
        """A string running into the end of the image is not an error"""
        builder = ImageBuilder(SMALL_LAYOUT, size=0x40)
        tail = builder.add_string(b'tail', terminate=False)
        builder.set_entry(0, description=tail, resource_name=tail)
        image = builder.build()
        self.assertEqual(len(image), 0x44)

        entry = decode_gimmick_table(image, SMALL_LAYOUT)[0]
        self.assertEqual(entry.description, 'tail')
        self.assertEqual(entry.resource_name, 'tail')

    def test_accepts_memory_image(self):
        image = MemoryImage(self.builder.build())
        decoder = GimmickTableDecoder(image, SMALL_LAYOUT)
        self.assertIs(decoder.image, image)
        self.assertEqual(len(decoder.decode()), 3)


class TestDecodeErrors(unittest.TestCase):
    """Test the two string error policies and bounds failures"""

    def setUp(self):
        self.builder = ImageBuilder(SMALL_LAYOUT)

    def decode(self):
        return decode_gimmick_table(self.builder.build(), SMALL_LAYOUT)

    def test_invalid_description_becomes_marker(self):
        """Bad Shift-JIS replaces the whole field and decoding continues"""
        bad = self.builder.add_string(b'AB\x82')
        good = self.builder.add_string('タル'.encode('shift_jis'))
        resource = self.builder.add_string(b'barrel')
        self.builder.set_entry(0, description=bad, resource_name=resource, flag=1)
        self.builder.set_entry(1, description=good)

        entries = self.decode()

        self.assertEqual(entries[0].description, DECODE_ERROR_MARKER)
        self.assertTrue(entries[0].description_failed)
        self.assertEqual(entries[0].resource_name, 'barrel')
        self.assertTrue(entries[0].is_common)
        self.assertEqual(entries[1].description, 'タル')
        self.assertEqual(len(entries), 3)

    def test_invalid_unterminated_description(self):
        builder = ImageBuilder(SMALL_LAYOUT, size=0x40)
        bad = builder.add_string(b'\x82', terminate=False)
        builder.set_entry(0, description=bad)
        entry = decode_gimmick_table(builder.build(), SMALL_LAYOUT)[0]
        self.assertEqual(entry.description, DECODE_ERROR_MARKER)

    def test_invalid_resource_name_is_fatal(self):
        """Resource names have no recovery marker"""
        bad = self.builder.add_string(b'name\xff')
        self.builder.set_entry(1, resource_name=bad)
        with self.assertRaises(ResourceNameDecodeError) as ctx:
            self.decode()
        self.assertIsInstance(ctx.exception.__cause__, UnicodeDecodeError)

    def test_truncated_table(self):
        """An image ending inside the table fails the whole decode"""
        builder = ImageBuilder(SMALL_LAYOUT, size=0x38)
        with self.assertRaises(ImageBoundsError):
            decode_gimmick_table(builder.build(), SMALL_LAYOUT)

    def test_pointer_past_image(self):
        image_size = len(self.builder.data)
        self.builder.set_entry(0, description=self.builder.address_of(image_size + 0x10))
        with self.assertRaises(ImageBoundsError):
            self.decode()

    def test_pointer_below_base(self):
        """Nonzero pointers below the image base are out of range"""
        self.builder.set_entry(0, resource_name=0x00001000)
        with self.assertRaises(ImageBoundsError):
            self.decode()


def test_real_layout_on_blank_image():
    """Entry count depends only on the layout, not on image content"""
    image = bytes(GIMMICK_TABLE.to_offset(GIMMICK_TABLE.end_address))
    entries = decode_gimmick_table(image)
    assert len(entries) == 435
    assert all(entry.description is None for entry in entries)
    assert all(not entry.is_common for entry in entries)


def test_real_layout_one_byte_short():
    image = bytes(GIMMICK_TABLE.to_offset(GIMMICK_TABLE.end_address) - 1)
    with pytest.raises(ImageBoundsError):
        decode_gimmick_table(image)


def test_description_failure_is_logged(small_builder, caplog):
    bad = small_builder.add_string(b'\x82')
    small_builder.set_entry(2, description=bad)
    with caplog.at_level(logging.WARNING, logger='gimmickdump.core.decoder'):
        entries = decode_gimmick_table(small_builder.build(), SMALL_LAYOUT)
    assert entries[2].description == DECODE_ERROR_MARKER
    assert 'Entry 0x2' in caplog.text
    assert '1 description(s) could not be decoded' in caplog.text


@pytest.mark.parametrize('payload', [
    b'A\xa0B',
    b'A\xfdB',
    b'A\xfeB',
    b'A\xffB',
    b'\xff',
    b'A\x81\x20B',
    b'AB\x82',
])
def test_invalid_shift_jis_becomes_marker(small_builder, payload):
    """Stray single bytes, bad trail bytes and cut off lead bytes"""
    description = small_builder.add_string(payload)
    resource = small_builder.add_string(b'lift')
    small_builder.set_entry(0, description=description, resource_name=resource)
    small_builder.set_entry(1, description=small_builder.add_string(b'ok'))

    entries = decode_gimmick_table(small_builder.build(), SMALL_LAYOUT)

    assert entries[0].description == DECODE_ERROR_MARKER
    assert entries[0].resource_name == 'lift'
    assert entries[1].description == 'ok'


@pytest.mark.parametrize('payload, text', [
    ('□'.encode('shift_jis'), '□'),
    ('①Ⅱ'.encode('cp932'), '①Ⅱ'),
    ('ｽｲｯﾁ'.encode('shift_jis'), 'ｽｲｯﾁ'),
    (b'\xf0\x40', '\ue000'),
])
def test_valid_shift_jis_variants(payload, text):
    """0xA0 as a trail byte, NEC extensions, half-width kana, user-defined area"""
    assert decode_description(payload) == text


@pytest.mark.parametrize('payload, text', [
    (b'\xef\xbb\xbfCaf\xc3\xa9', 'Café'),
    (b'\xff\xfe\xae\x30', 'ギ'),
    (b'\xfe\xff\x30\xae', 'ギ'),
])
def test_byte_order_mark_selects_unicode(payload, text):
    """A leading BOM decodes the rest as UTF-8 or UTF-16"""
    assert decode_description(payload) == text


@pytest.mark.parametrize('payload', [
    b'\xef\xbb\xbf\xff',
    b'\xff\xfe\xae',
])
def test_invalid_after_byte_order_mark(small_builder, payload):
    small_builder.set_entry(0, description=small_builder.add_string(payload))
    entry = decode_gimmick_table(small_builder.build(), SMALL_LAYOUT)[0]
    assert entry.description == DECODE_ERROR_MARKER


if __name__ == '__main__':
    unittest.main()
