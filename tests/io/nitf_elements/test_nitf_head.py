import numpy
import pytest

from nitfkit.io.base import FormatError
from nitfkit.io.cursor import FieldCursor
from nitfkit.io.nitf_elements.nitf_head import NITFHeader, NITFHeader0, ImageSegmentsType, \
    SymbolSegmentsType, LabelSegmentsType
from nitfkit.io.nitf_elements.tres.collection import TRECollector, TRESource

from tests import unittest, extension_block, tre_record

# the minimal header, with no segments and empty extension blocks
_MINIMUM_LENGTH = 388
_HL_OFFSET = 354


class TestNITFHeader(unittest.TestCase):
    def test_minimal(self):
        header = NITFHeader(FTITLE='minimal')
        header.update_header_length()
        value = header.to_bytes()
        self.assertEqual(len(value), _MINIMUM_LENGTH)
        self.assertEqual(header.HL, _MINIMUM_LENGTH)
        self.assertEqual(value[:9], b'NITF02.10')
        self.assertEqual(value[_HL_OFFSET:_HL_OFFSET + 6], b'000388')
        self.assertEqual(header.file_type, 'NITF02.10')
        self.assertEqual(header.identifier, 'minimal')

        parsed = NITFHeader.from_cursor(FieldCursor(value), tre_handler=TRECollector())
        self.assertEqual(parsed.FTITLE, 'minimal')
        self.assertEqual(parsed.CLEVEL, 3)
        self.assertEqual(parsed.FBKGC, b'\x00\x00\x00')
        for kind in parsed.segment_kinds():
            self.assertEqual(parsed.segment_table(kind).count, 0)
        self.assertEqual(parsed.to_bytes(), value)

    def test_segment_tables(self):
        header = NITFHeader(FHDR='NSIF', FVER='01.00')
        self.assertEqual(header.segment_kinds(), ('image', 'graphics', 'text', 'des', 'res'))
        header.set_segment_table('image', [439, 500], [1000, 2000000])
        header.set_segment_table('des', [200, ], [77, ])
        header.update_header_length()
        self.assertEqual(header.HL, _MINIMUM_LENGTH + 2*16 + 13)
        value = header.to_bytes()
        self.assertEqual(
            value[_HL_OFFSET + 6:_HL_OFFSET + 9 + 32],
            b'002' + b'000439' + b'0000001000' + b'000500' + b'0002000000')

        parsed = NITFHeader.from_bytes(value, 0)
        self.assertEqual(parsed.file_type, 'NSIF01.00')
        images = parsed.segment_table('image')
        self.assertIsInstance(images, ImageSegmentsType)
        self.assertEqual(images.count, 2)
        self.assertEqual(images.subhead_sizes.tolist(), [439, 500])
        self.assertEqual(images.item_sizes.tolist(), [1000, 2000000])
        self.assertEqual(parsed.segment_table('des').item_sizes.tolist(), [77, ])
        self.assertEqual(parsed.segment_table('graphics').count, 0)
        with self.assertRaises(KeyError):
            parsed.segment_table('symbol')

    def test_extension_blocks(self):
        header = NITFHeader()
        value = header.to_bytes()[:-10] + \
            extension_block(tre_record('TSTUDH', b'user')) + \
            extension_block(tre_record('TSTXHD', b'extended'))
        handler = TRECollector()
        parsed = NITFHeader.from_cursor(FieldCursor(value), tre_handler=handler)
        self.assertEqual(parsed.UserHeader.source, TRESource.FILE_HEADER_USER_DATA)
        self.assertEqual(parsed.ExtendedHeader.source, TRESource.FILE_HEADER_EXTENDED_DATA)
        self.assertEqual(list(parsed.tres.keys()), ['TSTUDH', 'TSTXHD'])
        self.assertEqual(parsed.get_bytes_length(), len(value))

    def test_invalid_profile(self):
        value = NITFHeader().to_bytes()
        with self.assertRaises(FormatError) as context:
            NITFHeader.from_bytes(b'NOTF' + value[4:], 0)
        self.assertEqual(context.exception.field, 'FHDR')

    def test_truncated(self):
        value = NITFHeader().to_bytes()
        with self.assertRaises(FormatError):
            NITFHeader.from_bytes(value[:300], 0)

    def test_bad_table_count(self):
        value = bytearray(NITFHeader().to_bytes())
        value[_HL_OFFSET + 6:_HL_OFFSET + 9] = b'0X1'
        with self.assertRaises(FormatError) as context:
            NITFHeader.from_bytes(bytes(value), 0)
        self.assertEqual(context.exception.field, 'NUMI')
        self.assertEqual(context.exception.offset, _HL_OFFSET + 6)


class TestNITFHeader0(unittest.TestCase):
    def test_minimal(self):
        header = NITFHeader0(FTITLE='version 2.0')
        header.update_header_length()
        value = header.to_bytes()
        self.assertEqual(len(value), _MINIMUM_LENGTH)
        self.assertEqual(value[:9], b'NITF02.00')
        self.assertEqual(value[_HL_OFFSET:_HL_OFFSET + 6], b'000388')
        parsed = NITFHeader0.from_bytes(value, 0)
        self.assertEqual(parsed.FSCOP, '00000')
        self.assertEqual(parsed.segment_kinds(), ('image', 'symbol', 'label', 'text', 'des', 'res'))
        self.assertEqual(parsed.to_bytes(), value)

    def test_symbol_and_label_tables(self):
        header = NITFHeader0()
        header.set_segment_table('symbol', [260, ], [123456, ])
        header.set_segment_table('label', [230, 231], [80, 999])
        header.update_header_length()
        parsed = NITFHeader0.from_bytes(header.to_bytes(), 0)
        symbols = parsed.segment_table('symbol')
        self.assertIsInstance(symbols, SymbolSegmentsType)
        self.assertEqual(symbols.item_sizes.tolist(), [123456, ])
        labels = parsed.segment_table('label')
        self.assertIsInstance(labels, LabelSegmentsType)
        self.assertEqual(labels.subhead_sizes.tolist(), [230, 231])
        self.assertEqual(parsed.HL, _MINIMUM_LENGTH + 10 + 2*7)
        with self.assertRaises(KeyError):
            parsed.segment_table('graphics')

    def test_nsif_not_permitted(self):
        value = NITFHeader0().to_bytes()
        with self.assertRaises(FormatError):
            NITFHeader0.from_bytes(b'NSIF' + value[4:], 0)


def test_frozen_tables():
    header = NITFHeader()
    header.set_segment_table('text', [285, ], [10, ])
    header.freeze()
    table = header.segment_table('text')
    with pytest.raises(ValueError):
        table.item_sizes[0] = 11
    with pytest.raises(AttributeError):
        header.FTITLE = 'changed'
    with pytest.raises(AttributeError):
        header.set_segment_table('text', [], [])


def test_table_shape():
    with pytest.raises(ValueError):
        ImageSegmentsType(numpy.zeros((2, ), dtype=numpy.int64), numpy.zeros((3, ), dtype=numpy.int64))
