import numpy
import pytest

from nitfkit.io.base import FormatError
from nitfkit.io.cursor import FieldCursor
from nitfkit.io.nitf_elements.base import UnknownTRE
from nitfkit.io.nitf_elements.symbol import SymbolSegmentHeader, lut_entry_size
from nitfkit.io.nitf_elements.tres.collection import TRECollector, TRESource

from tests import unittest, symbol_subheader, extension_block, tre_record, text_field
from tests.io.nitf_elements.test_tre import _mtirpa_payload

# the symbol subheader through NELUT
_FIXED_LENGTH = 253


def _decode(value):
    cursor = FieldCursor(value, file_type='NITF02.00')
    handler = TRECollector()
    header = SymbolSegmentHeader.from_cursor(cursor, tre_handler=handler)
    return header, cursor, handler


class TestSymbolSubheader(unittest.TestCase):
    def test_grayscale_lut(self):
        value = symbol_subheader(stype='B', scolor='G', nelut=2, lut=b'\x10\x20', extended=b'00000')
        header, cursor, handler = _decode(value)
        self.assertEqual(cursor.tell(), len(value))
        self.assertEqual(cursor.tell(), _FIXED_LENGTH + 2 + 5)
        self.assertEqual(header.SID, 'SYM01')
        self.assertEqual(header.identifier, 'SYM01')
        self.assertEqual(header.STYPE, 'B')
        self.assertEqual(header.SCOLOR, 'G')
        self.assertEqual(header.NELUT, 2)
        self.assertEqual(header.DLUT.shape, (2, 1))
        self.assertEqual(header.DLUT[:, 0].tolist(), [0x10, 0x20])
        self.assertEqual(len(header.tres), 0)
        self.assertEqual(len(handler.diagnostics), 0)
        self.assertEqual(header.to_bytes(), value)
        self.assertEqual(header.get_bytes_length(), len(value))

    def test_colour_lut(self):
        lut = bytes(range(6))
        value = symbol_subheader(stype='B', scolor='C', nelut=2, lut=lut, extended=b'00000')
        header, cursor, _ = _decode(value)
        self.assertEqual(header.DLUT.shape, (2, 3))
        self.assertEqual(header.DLUT[1].tolist(), [3, 4, 5])
        self.assertEqual(header.to_bytes(), value)

    def test_lut_not_permitted(self):
        value = symbol_subheader(stype='B', scolor='M', nelut=1, lut=b'\x00', extended=b'00000')
        cursor = FieldCursor(value)
        with self.assertRaises(FormatError) as context:
            SymbolSegmentHeader.from_cursor(cursor, tre_handler=TRECollector())
        self.assertEqual(context.exception.field, 'NELUT')
        self.assertEqual(context.exception.offset, _FIXED_LENGTH - 3)
        # only the NELUT field was consumed past the fixed fields
        self.assertEqual(cursor.tell(), _FIXED_LENGTH)

    def test_lut_for_cgm(self):
        value = symbol_subheader(stype='C', scolor='C', nelut=1, lut=b'\x00\x00\x00', extended=b'00000')
        with self.assertRaises(FormatError) as context:
            _decode(value)
        self.assertEqual(context.exception.field, 'NELUT')

    def test_no_lut(self):
        value = symbol_subheader(stype='O', scolor='M', extended=b'00000')
        header, cursor, _ = _decode(value)
        self.assertIsNone(header.DLUT)
        self.assertEqual(header.NELUT, 0)
        self.assertEqual(cursor.tell(), _FIXED_LENGTH + 5)

    def test_extended_subheader(self):
        record = tre_record('TSTXYZ', b'0123456789')
        block = extension_block(record)
        self.assertEqual(block[:5], b'00024')
        value = symbol_subheader(extended=block)
        header, cursor, handler = _decode(value)
        self.assertEqual(cursor.tell(), len(value))
        self.assertEqual(header.UserHeader.OFL, 0)
        self.assertEqual(header.UserHeader.source, TRESource.SYMBOL_EXTENDED_DATA)
        self.assertEqual(list(header.tres.keys()), ['TSTXYZ', ])
        tre = header.tres['TSTXYZ']
        self.assertIsInstance(tre, UnknownTRE)
        self.assertEqual(tre.DATA, b'0123456789')
        self.assertEqual(tre.EL, 10)
        self.assertEqual(header.to_bytes(), value)

    def test_extended_subheader_overrun(self):
        record = tre_record('TSTXYZ', b'0123456789')
        # the declared length claims one more byte than the TRE occupies
        block = b'00025000' + record + b'X'
        value = symbol_subheader(extended=block)
        with self.assertRaises(FormatError) as context:
            _decode(value)
        self.assertEqual(context.exception.field, 'CETAG')

    def test_truncated_lut(self):
        value = symbol_subheader(stype='B', scolor='C', nelut=2, lut=b'\x00\x00\x00')
        with self.assertRaises(FormatError) as context:
            _decode(value)
        self.assertEqual(context.exception.field, 'DLUT')

    def test_invalid_code(self):
        value = symbol_subheader(stype='X', extended=b'00000')
        with self.assertRaises(FormatError) as context:
            _decode(value)
        self.assertEqual(context.exception.field, 'STYPE')
        self.assertIn('Invalid code', context.exception.message)

    def test_wrong_magic(self):
        value = b'LA' + symbol_subheader(extended=b'00000')[2:]
        with self.assertRaises(FormatError) as context:
            _decode(value)
        self.assertEqual(context.exception.field, 'SY')

    def test_locations(self):
        value = symbol_subheader(sloc=(-10, 25), sloc2=(300, -4000), extended=b'00000')
        header, _, _ = _decode(value)
        self.assertEqual(header.SLOC.as_tuple(), (-10, 25))
        self.assertEqual(header.SLOC2.as_tuple(), (300, -4000))
        self.assertEqual(header.to_bytes(), value)

    def test_frozen(self):
        value = symbol_subheader(stype='B', scolor='G', nelut=1, lut=b'\x01', extended=b'00000')
        header, _, _ = _decode(value)
        header.freeze()
        with self.assertRaises(AttributeError):
            header.SID = 'OTHER'
        with self.assertRaises(ValueError):
            header.DLUT[0, 0] = 2
        with self.assertRaises(TypeError):
            header.tres['TSTXYZ'] = None

    def test_frozen_twice(self):
        value = symbol_subheader(extended=extension_block(tre_record('TSTXYZ', b'abc')))
        header, _, _ = _decode(value)
        header.freeze()
        header.freeze()
        self.assertTrue(header.frozen)
        self.assertTrue(header.UserHeader.data.frozen)
        self.assertEqual(header.to_bytes(), value)

    def test_frozen_tre_fields(self):
        payload = _mtirpa_payload([('LOCATION ONE', b'A')])
        value = symbol_subheader(extended=extension_block(tre_record('MTIRPA', payload)))
        header, _, _ = _decode(value)
        header.freeze()
        tre = header.tres['MTIRPA']
        with self.assertRaises(AttributeError):
            tre.DATA.DESTP = 'XX'
        with self.assertRaises(AttributeError):
            tre.DATA.VTGTs[0].TGLOC = 'ELSEWHERE'
        with self.assertRaises(AttributeError):
            tre.DATA = payload
        self.assertEqual(tre.DATA.DESTP, '01')
        self.assertEqual(tre.DATA.VTGTs[0].TGLOC, 'LOCATION ONE')
        self.assertEqual(header.to_bytes(), value)

    def test_security_code_trailing_tab(self):
        security = b'U' + text_field('CODEWORD\t', 40) + b' '*120 + b' '*6
        value = symbol_subheader(security=security, extended=b'00000')
        header, cursor, _ = _decode(value)
        self.assertEqual(cursor.tell(), len(value))
        self.assertEqual(header.Security.CODE, 'CODEWORD\t')
        self.assertEqual(header.to_bytes(), value)

    def test_empty_extension_block(self):
        # a present extension block holding only the overflow indicator
        value = symbol_subheader(extended=b'00003000')
        header, cursor, handler = _decode(value)
        self.assertEqual(cursor.tell(), len(value))
        self.assertEqual(header.UserHeader.OFL, 0)
        self.assertEqual(header.UserHeader.tres, ())
        self.assertEqual(len(header.tres), 0)
        self.assertEqual(header.to_bytes(), value)
        self.assertEqual(header.get_bytes_length(), len(value))


def test_lut_entry_size():
    assert lut_entry_size('B', 'C') == 3
    assert lut_entry_size('B', 'G') == 1
    assert lut_entry_size('B', 'M') is None
    assert lut_entry_size('O', 'C') is None


def test_construct_with_dlut():
    header = SymbolSegmentHeader(SID='SYM02', STYPE='B', SCOLOR='G', DLUT=numpy.arange(3, dtype=numpy.uint8)[:, numpy.newaxis])
    assert header.NELUT == 3
    assert header.to_bytes()[_FIXED_LENGTH - 3:_FIXED_LENGTH + 3] == b'003\x00\x01\x02'
    parsed = SymbolSegmentHeader.from_bytes(header.to_bytes(), 0)
    assert parsed.DLUT[:, 0].tolist() == [0, 1, 2]

    with pytest.raises(ValueError):
        SymbolSegmentHeader(STYPE='B', SCOLOR='M', DLUT=numpy.zeros((2, 1), dtype=numpy.uint8))
