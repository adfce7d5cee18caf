import pathlib
import tempfile
from io import BytesIO

import pytest

from nitfkit.compliance import NITFError
from nitfkit.io.base import FormatError, UnsupportedVariantError
from nitfkit.io.nitf import NITFParser, parse_nitf
from nitfkit.io.parse_strategy import AllDataParseStrategy, HeaderOnlyParseStrategy, SlottedParseStrategy, \
    RETAIN_DATA, SKIP
from nitfkit.io.nitf_elements.base import UnknownTRE
from nitfkit.io.nitf_elements.image import ImageSegmentHeader, ImageSegmentHeader0, ImageBand, ImageBands, \
    ImageBands0
from nitfkit.io.nitf_elements.nitf_head import NITFHeader, NITFHeader0
from nitfkit.io.nitf_elements.symbol import SymbolSegmentHeader
from nitfkit.io.nitf_elements.tres.collection import TRESource

from tests import unittest, build_nitf, extension_block, tre_record, symbol_subheader, label_subheader, \
    graphics_subheader, text_subheader, text_subheader0, des_subheader, res_subheader, SECURITY_20
from tests.io.nitf_elements.test_tre import _mtirpa_payload

_FL_OFFSET = 342
_HL_OFFSET = 354

_IMAGE_DATA = bytes(range(16))


def _image_subheader(iid='IMG01', extended=None):
    value = ImageSegmentHeader(
        IID1=iid, NROWS=4, NCOLS=4, Bands=ImageBands(values=[ImageBand(IREPBAND='M'), ])).to_bytes()
    if extended is not None:
        value = value[:-5] + extended
    return value


def _image_subheader0(iid='IMG01'):
    return ImageSegmentHeader0(
        IID=iid, NROWS=4, NCOLS=4, Bands=ImageBands0(values=[ImageBand(IREPBAND='M'), ])).to_bytes()


def _file_21(extra_des=None, image_extended=None):
    des = [(des_subheader('TEST_DES', user=b'ab'), b'desdata'), ]
    if extra_des is not None:
        des.extend(extra_des)
    return build_nitf({
        'image': [(_image_subheader('IMG01', extended=image_extended), _IMAGE_DATA),
                  (_image_subheader('IMG02'), _IMAGE_DATA[::-1])],
        'graphics': [(graphics_subheader('GRA01'), b'CGMDATA'), ],
        'text': [(text_subheader('TXT01'), b'hello world'), ],
        'des': des,
        'res': [(res_subheader('TEST_RES'), b'resdata'), ]})


def _file_20():
    return build_nitf({
        'image': [(_image_subheader0('IMG01'), _IMAGE_DATA), ],
        'symbol': [(symbol_subheader(stype='B', scolor='G', nelut=2, lut=b'\x10\x20', extended=b'00000'), b'\x00'*8), ],
        'label': [(label_subheader('LAB01'), b'label text'), ],
        'text': [(text_subheader0('TXT01'), b'hello world'), ],
        'des': [(des_subheader('TEST_DES', security=SECURITY_20), b'desdata'), ],
        'res': [(res_subheader('TEST_RES', security=SECURITY_20), b'resdata'), ]}, version='02.00')


def _replace(value, offset, field):
    return value[:offset] + field + value[offset + len(field):]


class TestParse21(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_dir = pathlib.Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_all_segments(self):
        value, header = _file_21()
        result = parse_nitf(value)
        self.assertEqual(len(result.diagnostics), 0)

        nitf_header = result.nitf_header
        self.assertIsInstance(nitf_header, NITFHeader)
        self.assertEqual(nitf_header.file_type, 'NITF02.10')
        self.assertEqual(nitf_header.HL, header.HL)
        self.assertEqual(nitf_header.FL, len(value))
        self.assertTrue(nitf_header.frozen)

        self.assertEqual([entry.identifier for entry in result.image_segment_headers], ['IMG01', 'IMG02'])
        self.assertEqual(result.image_segment_data, (_IMAGE_DATA, _IMAGE_DATA[::-1]))
        self.assertEqual(result.image_segment_headers[1].data_length, len(_IMAGE_DATA))
        self.assertEqual(result.graphics_segment_headers[0].identifier, 'GRA01')
        self.assertEqual(result.graphics_segment_data, (b'CGMDATA', ))
        self.assertEqual(result.text_segment_data, (b'hello world', ))
        self.assertEqual(result.des_segment_headers[0].UserHeader.data, b'ab')
        self.assertEqual(result.des_segment_data, (b'desdata', ))
        self.assertEqual(result.res_segment_data, (b'resdata', ))
        self.assertEqual(result.symbol_segment_headers, ())
        self.assertEqual(result.label_segment_headers, ())
        for entry in result.image_segment_headers:
            self.assertTrue(entry.frozen)

    def test_nsif(self):
        value, _ = build_nitf(
            {'text': [(text_subheader('TXT01'), b'text'), ]}, header_kwargs={'FHDR': 'NSIF', 'FVER': '01.00'})
        result = parse_nitf(value)
        self.assertEqual(result.nitf_header.file_type, 'NSIF01.00')
        self.assertEqual(result.text_segment_data, (b'text', ))

    def test_empty_file(self):
        value, _ = build_nitf({})
        self.assertEqual(len(value), 388)
        result = parse_nitf(value)
        self.assertEqual(len(result.diagnostics), 0)
        self.assertEqual(result.image_segment_headers, ())

    def test_header_only(self):
        value, _ = _file_21()
        result = parse_nitf(value, strategy=HeaderOnlyParseStrategy())
        self.assertEqual(len(result.image_segment_headers), 2)
        self.assertEqual(result.image_segment_data, ())
        self.assertIsNone(result.data_source('image', 0))
        self.assertEqual(len(result.res_segment_headers), 1)

    def test_skip(self):
        value, _ = _file_21()
        result = parse_nitf(value, strategy=SlottedParseStrategy(default=RETAIN_DATA, image=SKIP, graphics=SKIP))
        self.assertEqual(result.image_segment_headers, ())
        self.assertEqual(result.graphics_segment_headers, ())
        self.assertEqual(result.text_segment_data, (b'hello world', ))
        self.assertEqual(len(result.diagnostics), 0)

    def test_file_path(self):
        value, _ = _file_21()
        path = self.tmp_dir / 'example.ntf'
        path.write_bytes(value)
        result = parse_nitf(str(path))
        self.assertEqual(len(result.image_segment_headers), 2)
        with path.open('rb') as fi:
            result = parse_nitf(fi)
            self.assertFalse(fi.closed)
        self.assertEqual(result.res_segment_data, (b'resdata', ))


class TestParse20(unittest.TestCase):
    def test_all_segments(self):
        value, _ = _file_20()
        result = parse_nitf(value)
        self.assertEqual(len(result.diagnostics), 0)
        self.assertIsInstance(result.nitf_header, NITFHeader0)
        self.assertEqual(result.nitf_header.file_type, 'NITF02.00')
        self.assertIsInstance(result.image_segment_headers[0], ImageSegmentHeader0)

        symbol = result.symbol_segment_headers[0]
        self.assertIsInstance(symbol, SymbolSegmentHeader)
        self.assertEqual(symbol.identifier, 'SYM01')
        self.assertEqual(symbol.DLUT[:, 0].tolist(), [0x10, 0x20])
        self.assertEqual(result.symbol_segment_data, (b'\x00'*8, ))

        self.assertEqual(result.label_segment_headers[0].identifier, 'LAB01')
        self.assertEqual(result.label_segment_data, (b'label text', ))
        self.assertEqual(result.text_segment_headers[0].identifier, 'TXT01')
        self.assertEqual(result.des_segment_headers[0].identifier, 'TEST_DES')
        self.assertEqual(result.res_segment_data, (b'resdata', ))
        self.assertEqual(result.graphics_segment_headers, ())

    def test_version_11(self):
        value, _ = _file_20()
        value = _replace(value, 4, b'01.10')
        result = parse_nitf(value)
        self.assertEqual(result.nitf_header.FVER, '01.10')
        self.assertEqual(len(result.symbol_segment_headers), 1)

    def test_parsed_tres_read_only(self):
        payload = _mtirpa_payload([('LOCATION ONE', b'A')])
        value, _ = build_nitf({
            'symbol': [(symbol_subheader(extended=extension_block(tre_record('MTIRPA', payload))), b'symbol'), ]},
            version='02.00')
        result = parse_nitf(value)
        tre = result.symbol_segment_headers[0].tres['MTIRPA']
        with self.assertRaises(AttributeError):
            tre.DATA.DESTP = 'XX'
        with self.assertRaises(AttributeError):
            tre.DATA.VTGTs[0].TGLOC = 'ELSEWHERE'
        self.assertEqual(tre.DATA.DESTP, '01')

    def test_symbol_lut_not_permitted(self):
        value, _ = build_nitf({
            'symbol': [(symbol_subheader(stype='B', scolor='M', nelut=1, lut=b'\x00', extended=b'00000'), b''), ]},
            version='02.00')
        with self.assertRaises(FormatError) as context:
            parse_nitf(value)
        self.assertEqual(context.exception.field, 'NELUT')
        self.assertEqual(context.exception.segment_kind, 'symbol')
        self.assertEqual(context.exception.segment_index, 0)
        self.assertEqual(context.exception.offset, 388 + 10 + 250)


class TestMalformed(unittest.TestCase):
    def test_not_nitf(self):
        value, _ = _file_21()
        with self.assertRaises(FormatError) as context:
            parse_nitf(b'JUNK' + value[4:])
        self.assertEqual(context.exception.field, 'FHDR')
        self.assertEqual(context.exception.offset, 0)
        self.assertEqual(context.exception.segment_kind, 'file header')

    def test_too_short(self):
        with self.assertRaises(FormatError):
            parse_nitf(b'NITF')

    def test_unsupported_version(self):
        value, _ = build_nitf({'text': [(text_subheader(), b'text'), ]}, header_kwargs={'FVER': '03.00'})
        with self.assertRaises(UnsupportedVariantError):
            parse_nitf(value)

    def test_lenient(self):
        value, _ = build_nitf({'text': [(text_subheader(), b'text'), ]}, header_kwargs={'FVER': '03.00'})
        result = parse_nitf(value, lenient=True)
        self.assertEqual(result.nitf_header.FVER, '03.00')
        self.assertEqual(result.text_segment_data, (b'text', ))
        self.assertEqual(len(result.diagnostics), 1)
        self.assertIn('NITF03.00', result.diagnostics[0].message)

    def test_header_length_mismatch(self):
        value, _ = _file_21()
        value = _replace(value, _HL_OFFSET, b'999999')
        with self.assertRaises(FormatError) as context:
            parse_nitf(value)
        self.assertEqual(context.exception.field, 'HL')
        self.assertEqual(context.exception.segment_kind, 'file header')

    def test_subheader_length_mismatch(self):
        value, _ = build_nitf({'text': [(text_subheader() + b'X', b'text'), ]})
        with self.assertRaises(FormatError) as context:
            parse_nitf(value)
        self.assertEqual(context.exception.segment_kind, 'text')
        self.assertEqual(context.exception.segment_index, 0)
        self.assertIn('Declared subheader length', context.exception.message)

    def test_subheader_too_short(self):
        subheader = text_subheader()
        value, _ = build_nitf({'text': [(subheader[:-3], subheader[-3:] + b'text'), ]})
        with self.assertRaises(FormatError) as context:
            parse_nitf(value)
        self.assertEqual(context.exception.segment_kind, 'text')

    def test_truncated_data(self):
        value, _ = _file_21()
        with self.assertRaises(FormatError) as context:
            parse_nitf(value[:-3])
        self.assertEqual(context.exception.segment_kind, 'res')
        self.assertEqual(context.exception.segment_index, 0)

    def test_invalid_code_context(self):
        value, _ = build_nitf({
            'image': [(_image_subheader('IMG01'), _IMAGE_DATA), ],
            'graphics': [(graphics_subheader('GRA01').replace(b'C00100', b'X00100', 1), b''), ]})
        with self.assertRaises(NITFError) as context:
            parse_nitf(value)
        self.assertEqual(context.exception.segment_kind, 'graphics')
        self.assertEqual(context.exception.field, 'SCOLOR')

    def test_trailing_bytes(self):
        value, _ = _file_21()
        result = parse_nitf(value + b'extra')
        messages = [entry.message for entry in result.diagnostics]
        self.assertEqual(len(messages), 2)
        self.assertIn('5 bytes following the last segment', messages[0])
        self.assertIn('Declared file length', messages[1])

    def test_file_length_mismatch(self):
        value, _ = _file_21()
        value = _replace(value, _FL_OFFSET, b'000000000001')
        result = parse_nitf(value)
        self.assertEqual(len(result.diagnostics), 1)
        self.assertIn('Declared file length 1', result.diagnostics[0].message)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            parse_nitf('/this/path/does/not/exist.ntf')

    def test_bad_input(self):
        with self.assertRaises(TypeError):
            parse_nitf(12)


class TestTREOverflow(unittest.TestCase):
    def test_overflow_to_image(self):
        image_extended = extension_block(tre_record('TSTAAA', b'original'), ofl=3)
        overflow = (
            des_subheader('TRE_OVERFLOW', overflow=('IXSHD', 1)),
            tre_record('TSTBBB', b'overflow') + tre_record('TSTAAA', b'replaced'))
        value, _ = _file_21(extra_des=[overflow, ], image_extended=image_extended)
        result = parse_nitf(value)

        image = result.image_segment_headers[0]
        self.assertEqual(image.ExtendedHeader.OFL, 3)
        self.assertEqual(list(image.tres.keys()), ['TSTAAA', 'TSTBBB'])
        self.assertEqual(image.tres['TSTAAA'].DATA, b'replaced')
        self.assertEqual(image.tres['TSTBBB'].DATA, b'overflow')
        self.assertEqual(len(result.image_segment_headers[1].tres), 0)

        self.assertEqual(len(result.diagnostics), 1)
        self.assertEqual(result.diagnostics[0].tag, 'TSTAAA')
        self.assertEqual(result.diagnostics[0].source, TRESource.TRE_OVERFLOW)

        des = result.des_segment_headers[1]
        self.assertTrue(des.is_tre_overflow)
        self.assertEqual(result.des_segment_data[1], overflow[1])

    def test_overflow_to_file_header(self):
        overflow = (des_subheader('TRE_OVERFLOW', overflow=('XHD', 0)), tre_record('TSTCCC', b'file'))
        value, _ = _file_21(extra_des=[overflow, ])
        result = parse_nitf(value, strategy=HeaderOnlyParseStrategy())
        self.assertIsInstance(result.nitf_header.tres['TSTCCC'], UnknownTRE)
        self.assertEqual(len(result.diagnostics), 0)
        self.assertEqual(result.des_segment_data, ())

    def test_overflow_version_20(self):
        overflow = (
            des_subheader('Controlled Extensions', overflow=('UDHD', 0), security=SECURITY_20),
            tre_record('TSTCCC', b'file'))
        value, _ = build_nitf({'des': [overflow, ]}, version='02.00')
        result = parse_nitf(value)
        self.assertIn('TSTCCC', result.nitf_header.tres)

    def test_overflow_to_missing_item(self):
        overflow = (des_subheader('TRE_OVERFLOW', overflow=('IXSHD', 3)), tre_record('TSTBBB', b'lost'))
        value, _ = _file_21(extra_des=[overflow, ])
        result = parse_nitf(value)
        self.assertEqual(len(result.diagnostics), 1)
        self.assertIn('discarded', result.diagnostics[0].message)
        for image in result.image_segment_headers:
            self.assertNotIn('TSTBBB', image.tres)

    def test_overflow_to_skipped_kind(self):
        overflow = (des_subheader('TRE_OVERFLOW', overflow=('IXSHD', 1)), tre_record('TSTBBB', b'lost'))
        value, _ = _file_21(extra_des=[overflow, ])
        result = parse_nitf(value, strategy=SlottedParseStrategy(default=RETAIN_DATA, image=SKIP))
        self.assertEqual(len(result.diagnostics), 1)
        self.assertIn('discarded', result.diagnostics[0].message)

    def test_overflow_skipped_des(self):
        overflow = (des_subheader('TRE_OVERFLOW', overflow=('IXSHD', 1)), tre_record('TSTBBB', b'lost'))
        value, _ = _file_21(extra_des=[overflow, ])
        result = parse_nitf(value, strategy=SlottedParseStrategy(default=RETAIN_DATA, des=SKIP))
        self.assertNotIn('TSTBBB', result.image_segment_headers[0].tres)
        self.assertEqual(len(result.diagnostics), 0)

    def test_malformed_overflow(self):
        overflow = (des_subheader('TRE_OVERFLOW', overflow=('IXSHD', 1)), b'TSTBBB00099short')
        value, _ = _file_21(extra_des=[overflow, ])
        with self.assertRaises(FormatError) as context:
            parse_nitf(value)
        self.assertEqual(context.exception.field, 'CEL')
        self.assertEqual(context.exception.segment_kind, 'des')
        self.assertEqual(context.exception.segment_index, 1)


def test_strategy_single_use():
    value, _ = _file_21()
    strategy = AllDataParseStrategy()
    parse_nitf(value, strategy=strategy)
    assert strategy.is_built
    with pytest.raises(ValueError):
        NITFParser(value, strategy=strategy)


def test_strategy_type():
    value, _ = _file_21()
    with pytest.raises(TypeError):
        NITFParser(value, strategy='all')


def test_parser_file_name():
    value, _ = _file_21()
    assert NITFParser(value).file_name == '<bytes>'
    assert NITFParser(BytesIO(value)).file_name == '<file like object>'
