"""
The main NITF header definitions.
"""

__classification__ = "UNCLASSIFIED"

import logging
from collections import OrderedDict

import numpy

from .base import NITFSegmentHeader, UserHeaderType, _IntegerDescriptor,\
    _StringDescriptor, _StringEnumDescriptor, _NITFElementDescriptor, _RawDescriptor, \
    _ItemArrayHeaders
from .security import NITFSecurityTags, NITFSecurityTags0
from .tres.collection import TRESource

logger = logging.getLogger(__name__)


#############
# NITF 2.1 version

class ImageSegmentsType(_ItemArrayHeaders):
    """
    This holds the image subheader and item sizes.
    """

    _subhead_len = 6
    _item_len = 10
    _count_name = 'NUMI'


class GraphicsSegmentsType(_ItemArrayHeaders):
    """
    This holds the graphics subheader and item sizes.
    """

    _subhead_len = 4
    _item_len = 6
    _count_name = 'NUMS'


class TextSegmentsType(_ItemArrayHeaders):
    """
    This holds the text subheader size and item sizes.
    """

    _subhead_len = 4
    _item_len = 5
    _count_name = 'NUMT'


class DataExtensionsType(_ItemArrayHeaders):
    """
    This holds the data extension subheader and item sizes.
    """

    _subhead_len = 4
    _item_len = 9
    _count_name = 'NUMDES'


class ReservedExtensionsType(_ItemArrayHeaders):
    """
    This holds the reserved extension subheader and item sizes.
    """

    _subhead_len = 4
    _item_len = 7
    _count_name = 'NUMRES'


class _NITFHeaderBase(NITFSegmentHeader):
    """
    The fields and segment table access shared by the file headers of all versions.
    """

    _identifier_field = 'FTITLE'
    _tre_fields = ('UserHeader', 'ExtendedHeader')
    # segment kind -> segment table attribute, in on-disk order
    _segment_tables = OrderedDict()
    CLEVEL = _IntegerDescriptor(
        'CLEVEL', True, 2, default_value=3,
        docstring='Complexity Level. This field shall contain the complexity level required to '
                  'interpret fully all components of the file.')  # type: int
    STYPE = _StringDescriptor(
        'STYPE', True, 4, default_value='BF01',
        docstring='Standard Type. Standard type or capability, nominally `BF01`.')  # type: str
    OSTAID = _StringDescriptor(
        'OSTAID', True, 10, default_value='',
        docstring='Originating Station ID. The identification code or name of the originating '
                  'organization, system, station, or product.')  # type: str
    FDT = _StringDescriptor(
        'FDT', True, 14, default_value='',
        docstring='File Date and Time. The time (UTC) of the files origination.')  # type: str
    FTITLE = _StringDescriptor(
        'FTITLE', True, 80, default_value='',
        docstring='File Title. This field shall contain the title of the file.')  # type: str
    ENCRYP = _StringDescriptor(
        'ENCRYP', True, 1, default_value='0',
        docstring='Encryption. Read, and otherwise ignored.')  # type: str
    OPHONE = _StringDescriptor(
        'OPHONE', True, 18, default_value='',
        docstring='Originator Phone Number.')  # type: str
    FL = _IntegerDescriptor(
        'FL', True, 12, default_value=0,
        docstring='The size in bytes of the entire file.')  # type: int
    HL = _IntegerDescriptor(
        'HL', True, 6, default_value=0,
        docstring='The declared length of this header in bytes. For a decoded header, this '
                  'is verified against the bytes consumed.')  # type: int
    ImageSegments = _NITFElementDescriptor(
        'ImageSegments', True, ImageSegmentsType, default_args={},
        docstring='The image segment basic information.')  # type: ImageSegmentsType
    TextSegments = _NITFElementDescriptor(
        'TextSegments', True, TextSegmentsType, default_args={},
        docstring='The text segment basic information.')  # type: TextSegmentsType
    DataExtensions = _NITFElementDescriptor(
        'DataExtensions', True, DataExtensionsType, default_args={},
        docstring='The data extension basic information.')  # type: DataExtensionsType
    ReservedExtensions = _NITFElementDescriptor(
        'ReservedExtensions', True, ReservedExtensionsType, default_args={},
        docstring='The reserved extension basic information.')  # type: ReservedExtensionsType
    UserHeader = _NITFElementDescriptor(
        'UserHeader', True, UserHeaderType, default_args={},
        parse_args={'source': TRESource.FILE_HEADER_USER_DATA, 'names': ('UDHDL', 'UDHOFL')},
        docstring='User defined header - TRE list.')  # type: UserHeaderType
    ExtendedHeader = _NITFElementDescriptor(
        'ExtendedHeader', True, UserHeaderType, default_args={},
        parse_args={'source': TRESource.FILE_HEADER_EXTENDED_DATA, 'names': ('XHDL', 'XHDLOFL')},
        docstring='Extended header - TRE list.')  # type: UserHeaderType

    @property
    def file_type(self):
        """
        str: The profile name and version, e.g. `NITF02.10`.
        """

        return '{}{}'.format(self.FHDR, self.FVER)

    @classmethod
    def segment_kinds(cls):
        """
        The segment kinds present for this version, in on-disk order.

        Returns
        -------
        Tuple[str, ...]
        """

        return tuple(cls._segment_tables.keys())

    def segment_table(self, kind):
        """
        Get the segment size table for the given segment kind.

        Parameters
        ----------
        kind : str

        Returns
        -------
        _ItemArrayHeaders
        """

        if kind not in self._segment_tables:
            raise KeyError(
                'Segment kind {} is not defined for {}'.format(kind, self.__class__.__name__))
        return getattr(self, self._segment_tables[kind])

    def set_segment_table(self, kind, subhead_sizes, item_sizes):
        """
        Set the segment size table for the given segment kind.

        Parameters
        ----------
        kind : str
        subhead_sizes : numpy.ndarray|list
        item_sizes : numpy.ndarray|list
        """

        if kind not in self._segment_tables:
            raise KeyError(
                'Segment kind {} is not defined for {}'.format(kind, self.__class__.__name__))
        field = self._segment_tables[kind]
        table_type = getattr(self.__class__, field).the_type
        setattr(self, field, table_type(
            numpy.array(subhead_sizes, dtype=numpy.int64), numpy.array(item_sizes, dtype=numpy.int64)))

    def update_header_length(self):
        """
        Set `HL` to the serialized length of this header.

        Returns
        -------
        None
        """

        self.HL = self.get_bytes_length()


class NITFHeader(_NITFHeaderBase):
    """
    The main NITF file header for NITF version 2.1 (and NSIF version 1.0) - see
    standards document MIL-STD-2500C for more information.
    """

    _ordering = (
        'FHDR', 'FVER', 'CLEVEL', 'STYPE',
        'OSTAID', 'FDT', 'FTITLE', 'Security',
        'FSCOP', 'FSCPYS', 'ENCRYP', 'FBKGC',
        'ONAME', 'OPHONE', 'FL', 'HL',
        'ImageSegments', 'GraphicsSegments', 'NUMX',
        'TextSegments', 'DataExtensions', 'ReservedExtensions',
        'UserHeader', 'ExtendedHeader')
    _lengths = {
        'FHDR': 4, 'FVER': 5, 'CLEVEL': 2, 'STYPE': 4,
        'OSTAID': 10, 'FDT': 14, 'FTITLE': 80,
        'FSCOP': 5, 'FSCPYS': 5, 'ENCRYP': 1, 'FBKGC': 3,
        'ONAME': 24, 'OPHONE': 18, 'FL': 12, 'HL': 6,
        'NUMX': 3}
    _segment_tables = OrderedDict([
        ('image', 'ImageSegments'),
        ('graphics', 'GraphicsSegments'),
        ('text', 'TextSegments'),
        ('des', 'DataExtensions'),
        ('res', 'ReservedExtensions')])
    FHDR = _StringEnumDescriptor(
        'FHDR', True, 4, {'NITF', 'NSIF'}, default_value='NITF',
        docstring='File Profile Name. `NITF`, or `NSIF` for the NATO profile.')  # type: str
    FVER = _StringDescriptor(
        'FVER', True, 5, default_value='02.10',
        docstring='File Version. `02.10` for NITF, or `01.00` for NSIF.')  # type: str
    Security = _NITFElementDescriptor(
        'Security', True, NITFSecurityTags, default_args={},
        docstring='The file security tags.')  # type: NITFSecurityTags
    FSCOP = _IntegerDescriptor(
        'FSCOP', True, 5, default_value=0,
        docstring='File Copy Number.')  # type: int
    FSCPYS = _IntegerDescriptor(
        'FSCPYS', True, 5, default_value=0,
        docstring='File Number of Copies.')  # type: int
    FBKGC = _RawDescriptor(
        'FBKGC', True, 3, default_value=b'\x00\x00\x00',
        docstring='File Background Color, as red, green, blue components.')  # type: bytes
    ONAME = _StringDescriptor(
        'ONAME', True, 24, default_value='',
        docstring='Originator Name.')  # type: str
    GraphicsSegments = _NITFElementDescriptor(
        'GraphicsSegments', True, GraphicsSegmentsType, default_args={},
        docstring='The graphics segment basic information.')  # type: GraphicsSegmentsType
    NUMX = _IntegerDescriptor(
        'NUMX', True, 3, default_value=0,
        docstring='Reserved for future use.')  # type: int


#############
# NITF 2.0 version

class SymbolSegmentsType(_ItemArrayHeaders):
    """
    This holds the symbol subheader and item sizes.
    """

    _subhead_len = 4
    _item_len = 6
    _count_name = 'NUMS'


class LabelSegmentsType(_ItemArrayHeaders):
    """
    This holds the label subheader and item sizes.
    """

    _subhead_len = 4
    _item_len = 3
    _count_name = 'NUML'


class NITFHeader0(_NITFHeaderBase):
    """
    The main NITF file header for NITF version 2.0 - see standards document
    MIL-STD-2500A for more information.
    """

    _ordering = (
        'FHDR', 'FVER', 'CLEVEL', 'STYPE', 'OSTAID', 'FDT', 'FTITLE', 'Security',
        'FSCOP', 'FSCPYS', 'ENCRYP', 'ONAME', 'OPHONE', 'FL', 'HL',
        'ImageSegments', 'SymbolSegments', 'LabelSegments', 'TextSegments',
        'DataExtensions', 'ReservedExtensions', 'UserHeader', 'ExtendedHeader')
    _lengths = {
        'FHDR': 4, 'FVER': 5, 'CLEVEL': 2, 'STYPE': 4,
        'OSTAID': 10, 'FDT': 14, 'FTITLE': 80,
        'FSCOP': 5, 'FSCPYS': 5, 'ENCRYP': 1,
        'ONAME': 27, 'OPHONE': 18, 'FL': 12, 'HL': 6}
    _segment_tables = OrderedDict([
        ('image', 'ImageSegments'),
        ('symbol', 'SymbolSegments'),
        ('label', 'LabelSegments'),
        ('text', 'TextSegments'),
        ('des', 'DataExtensions'),
        ('res', 'ReservedExtensions')])
    FHDR = _StringEnumDescriptor(
        'FHDR', True, 4, {'NITF', }, default_value='NITF',
        docstring='File Profile Name.')  # type: str
    FVER = _StringDescriptor(
        'FVER', True, 5, default_value='02.00',
        docstring='File Version, `02.00`.')  # type: str
    Security = _NITFElementDescriptor(
        'Security', True, NITFSecurityTags0, default_args={},
        docstring='The file security tags.')  # type: NITFSecurityTags0
    FSCOP = _StringDescriptor(
        'FSCOP', True, 5, default_value='00000',
        docstring='File Copy Number.')  # type: str
    FSCPYS = _StringDescriptor(
        'FSCPYS', True, 5, default_value='00000',
        docstring='File Number of Copies.')  # type: str
    ONAME = _StringDescriptor(
        'ONAME', True, 27, default_value='',
        docstring='Originator Name.')  # type: str
    SymbolSegments = _NITFElementDescriptor(
        'SymbolSegments', True, SymbolSegmentsType, default_args={},
        docstring='The symbols segment basic information.')  # type: SymbolSegmentsType
    LabelSegments = _NITFElementDescriptor(
        'LabelSegments', True, LabelSegmentsType, default_args={},
        docstring='The labels segment basic information.')  # type: LabelSegmentsType
