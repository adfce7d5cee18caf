"""
Module laying out the parse of a complete NITF 2.0, NITF 2.1, or NSIF 1.0 file.

The file header is decoded first, and its segment tables give the subheader
and data sizes of every segment. The segments are then visited in on-disk
order, and each subheader is decoded against exactly its declared size.
"""

__classification__ = "UNCLASSIFIED"


import logging
import os
from io import BytesIO
from typing import Union, BinaryIO, Optional

from nitfkit.io.base import FormatError, UnsupportedVariantError
from nitfkit.io.cursor import FieldCursor
from nitfkit.io.utils import is_file_like, is_nitf
from nitfkit.io.parse_strategy import NITFParseStrategy, NITFParseResult, AllDataParseStrategy, \
    RETAIN_DATA, SKIP

from nitfkit.io.nitf_elements.nitf_head import NITFHeader, NITFHeader0
from nitfkit.io.nitf_elements.image import ImageSegmentHeader, ImageSegmentHeader0
from nitfkit.io.nitf_elements.graphics import GraphicsSegmentHeader
from nitfkit.io.nitf_elements.symbol import SymbolSegmentHeader
from nitfkit.io.nitf_elements.label import LabelSegmentHeader
from nitfkit.io.nitf_elements.text import TextSegmentHeader, TextSegmentHeader0
from nitfkit.io.nitf_elements.des import DataExtensionHeader, DataExtensionHeader0
from nitfkit.io.nitf_elements.res import ReservedExtensionHeader, ReservedExtensionHeader0
from nitfkit.io.nitf_elements.tres.collection import TRESource


logger = logging.getLogger(__name__)

_unhandled_version_text = 'Unhandled NITF version `{}`'

# file type -> (file header, segment kind -> subheader)
_LAYOUT_21 = (
    NITFHeader,
    {
        'image': ImageSegmentHeader,
        'graphics': GraphicsSegmentHeader,
        'text': TextSegmentHeader,
        'des': DataExtensionHeader,
        'res': ReservedExtensionHeader})
_LAYOUT_20 = (
    NITFHeader0,
    {
        'image': ImageSegmentHeader0,
        'symbol': SymbolSegmentHeader,
        'label': LabelSegmentHeader,
        'text': TextSegmentHeader0,
        'des': DataExtensionHeader0,
        'res': ReservedExtensionHeader0})
_LAYOUTS = {
    'NITF02.10': _LAYOUT_21,
    'NSIF01.00': _LAYOUT_21,
    'NITF02.00': _LAYOUT_20,
    'NITF01.10': _LAYOUT_20}

# DESOFLW -> the segment kind(s) whose header the overflowed TREs belong to
_OVERFLOW_KINDS = {
    'UDHD': None,
    'XHD': None,
    'UDID': ('image', ),
    'IXSHD': ('image', ),
    'SXSHD': ('graphics', 'symbol'),
    'LXSHD': ('label', ),
    'TXSHD': ('text', )}


class NITFParser(object):
    """
    Parses a complete NITF file, handing the file header and each decoded
    segment to the parse strategy in on-disk order.
    """

    __slots__ = ('_file_name', '_source', '_close_after', '_strategy', '_lenient')

    def __init__(
            self,
            file_object: Union[str, bytes, BinaryIO],
            strategy: Optional[NITFParseStrategy] = None,
            lenient: bool = False):
        """

        Parameters
        ----------
        file_object : str|bytes|BinaryIO
            file name for a NITF file, the file bytes, or file like object
            opened in binary mode.
        strategy : None|NITFParseStrategy
            The parse strategy, which must not have been used for another parse.
            Defaults to :class:`AllDataParseStrategy`.
        lenient : bool
            Decode a file of unknown version using the NITF 2.1 layout, recording
            the fact as a diagnostic, rather than raising an `UnsupportedVariantError`.
        """

        self._file_name = None
        self._source = None
        self._close_after = False
        self._lenient = bool(lenient)

        if strategy is None:
            strategy = AllDataParseStrategy()
        if not isinstance(strategy, NITFParseStrategy):
            raise TypeError('strategy must be a NITFParseStrategy, got type {}'.format(type(strategy)))
        if strategy.nitf_header is not None or strategy.is_built:
            raise ValueError('The parse strategy has already been used, and parse strategies are single use')
        self._strategy = strategy

        if isinstance(file_object, str):
            if not os.path.isfile(file_object):
                raise FileNotFoundError('Path {} is not a file'.format(file_object))
            self._file_name = file_object
            self._source = open(file_object, 'rb')
            self._close_after = True
        elif isinstance(file_object, (bytes, bytearray, memoryview)):
            self._file_name = '<bytes>'
            self._source = BytesIO(bytes(file_object))
            self._close_after = True
        elif is_file_like(file_object):
            self._source = file_object
            if hasattr(file_object, 'name') and isinstance(file_object.name, str):
                self._file_name = file_object.name
            else:
                self._file_name = '<file like object>'
        else:
            raise TypeError('file_object is required to be a file like object, bytes, or string path to a file.')

    @property
    def file_name(self) -> Optional[str]:
        """
        None|str: the file name, which may not be useful if the input was based
        on a file like object
        """

        return self._file_name

    @property
    def strategy(self) -> NITFParseStrategy:
        """
        NITFParseStrategy: The parse strategy.
        """

        return self._strategy

    def _get_layout(self):
        is_nitf_file, file_type = is_nitf(self._source, return_version=True)
        if not is_nitf_file:
            value = self._source.read(4)
            self._source.seek(-len(value), os.SEEK_CUR)
            raise FormatError(
                'Not a NITF file, wrong magic {!r}'.format(value), field='FHDR', offset=0,
                segment_kind='file header')

        layout = _LAYOUTS.get(file_type, None)
        if layout is not None:
            return file_type, layout
        if not self._lenient:
            raise UnsupportedVariantError(_unhandled_version_text.format(file_type))
        self._strategy.report(
            'Decoding file {} of unhandled version {} using the NITF 02.10 layout'.format(
                self._file_name, file_type))
        return file_type, _LAYOUT_21

    def _parse_file_header(self, cursor, header_type):
        tre_handler = self._strategy.tre_handler
        try:
            start = cursor.tell()
            header = header_type.from_cursor(cursor, tre_handler=tre_handler)
            consumed = cursor.tell() - start
            if header.HL != consumed:
                raise FormatError(
                    'Declared header length {} does not match the {} bytes decoded'.format(header.HL, consumed),
                    field='HL')
        except FormatError as e:
            e.add_context('file header')
            raise
        logger.info(
            'Parsed {} file header of {}, with segment counts {}'.format(
                cursor.file_type, self._file_name,
                {kind: header.segment_table(kind).count for kind in header.segment_kinds()}))
        return header

    def _parse_segment(self, cursor, kind, index, subheader_type, subhead_size, item_size):
        retention = self._strategy.retention(kind)
        if retention == SKIP:
            cursor.skip(subhead_size + item_size, name='{} segment'.format(kind))
            return

        window = cursor.window(subhead_size, name='{} subheader'.format(kind))
        header = subheader_type.from_cursor(
            window, tre_handler=self._strategy.tre_handler, data_length=item_size)
        if window.remaining != 0:
            raise FormatError(
                'Declared subheader length {} does not match the {} bytes decoded'.format(
                    subhead_size, window.tell()),
                offset=window.offset)
        logger.debug('Decoded {} subheader {} of {}'.format(kind, index, self._file_name))

        overflow = (kind == 'des' and header.is_tre_overflow)
        if retention == RETAIN_DATA or overflow:
            data_offset = cursor.offset
            data = cursor.read_bytes(item_size, name='{} data'.format(kind))
        else:
            data_offset = None
            data = None
            cursor.skip(item_size, name='{} data'.format(kind))

        if overflow:
            self._merge_overflow(header, FieldCursor(data, file_type=cursor.file_type, base_offset=data_offset))
        self._strategy.add_segment(kind, header, data=data if retention == RETAIN_DATA else None)

    def _find_overflow_target(self, header):
        target, item = header.overflow_target
        if target not in _OVERFLOW_KINDS:
            return None
        kinds = _OVERFLOW_KINDS[target]
        if kinds is None:
            return self._strategy.nitf_header
        for kind in kinds:
            headers = self._strategy.segment_headers(kind)
            if 0 < item <= len(headers):
                return headers[item - 1]
        return None

    def _merge_overflow(self, header, cursor):
        tres = self._strategy.parse_tres(cursor, cursor.remaining, TRESource.TRE_OVERFLOW)
        target = self._find_overflow_target(header)
        if target is None:
            self._strategy.report(
                'The TRE overflow segment targets item {} of {}, which has not been '
                'decoded, so its {} TREs are discarded'.format(header.DESITEM, header.DESOFLW, len(tres)),
                source=TRESource.TRE_OVERFLOW)
            return
        target.merge_tres(self._strategy.tre_handler, tres, TRESource.TRE_OVERFLOW)

    def parse(self) -> NITFParseResult:
        """
        Parse the file.

        Returns
        -------
        NITFParseResult

        Raises
        ------
        FormatError
            For any malformed or inconsistent content.
        UnsupportedVariantError
            For a file of unknown version, unless lenient.
        """

        try:
            file_type, (header_type, subheader_types) = self._get_layout()
            cursor = FieldCursor(self._source, file_type=file_type)
            nitf_header = self._parse_file_header(cursor, header_type)
            self._strategy.set_nitf_header(nitf_header)

            for kind in nitf_header.segment_kinds():
                table = nitf_header.segment_table(kind)
                for index in range(table.count):
                    try:
                        self._parse_segment(
                            cursor, kind, index, subheader_types[kind],
                            int(table.subhead_sizes[index]), int(table.item_sizes[index]))
                    except FormatError as e:
                        e.add_context(kind, index)
                        raise

            if cursor.remaining != 0:
                self._strategy.report(
                    'There are {} bytes following the last segment of {}'.format(
                        cursor.remaining, self._file_name))
            total = cursor.tell() + cursor.remaining
            if nitf_header.FL != total:
                self._strategy.report(
                    'Declared file length {} does not match the {} bytes of the file'.format(nitf_header.FL, total))
        finally:
            if self._close_after:
                self._close_after = False
                self._source.close()
        return self._strategy.build()


def parse_nitf(
        file_object: Union[str, bytes, BinaryIO],
        strategy: Optional[NITFParseStrategy] = None,
        lenient: bool = False) -> NITFParseResult:
    """
    Parse the given NITF file.

    Parameters
    ----------
    file_object : str|bytes|BinaryIO
    strategy : None|NITFParseStrategy
    lenient : bool

    Returns
    -------
    NITFParseResult
    """

    return NITFParser(file_object, strategy=strategy, lenient=lenient).parse()
