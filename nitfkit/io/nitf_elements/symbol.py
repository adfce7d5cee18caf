"""
The symbol header element definition - only applies to NITF 2.0
"""

__classification__ = "UNCLASSIFIED"


import logging
import numpy

from nitfkit.io.base import FormatError
from .base import NITFSegmentHeader, NITFLocation, UserHeaderType, _IntegerDescriptor, \
    _StringDescriptor, _StringEnumDescriptor, _NITFElementDescriptor, _RawDescriptor, \
    _MagicDescriptor
from .security import NITFSecurityTags0
from .tres.collection import TRESource

logger = logging.getLogger(__name__)


class SymbolType(object):
    """
    The symbol type codes.
    """

    BITMAP = 'B'
    CGM = 'C'
    OBJECT = 'O'
    values = frozenset((BITMAP, CGM, OBJECT))


class SymbolColour(object):
    """
    The symbol colour codes.
    """

    COLOUR_LUT = 'C'
    GRAYSCALE_LUT = 'G'
    BLACK = 'K'
    MONOCHROME = 'M'
    NOT_APPLICABLE = 'N'
    values = frozenset((COLOUR_LUT, GRAYSCALE_LUT, BLACK, MONOCHROME, NOT_APPLICABLE))


# the only (STYPE, SCOLOR) pairs permitted a look-up table, and the bytes per entry
_LUT_ENTRY_SIZES = {
    (SymbolType.BITMAP, SymbolColour.COLOUR_LUT): 3,
    (SymbolType.BITMAP, SymbolColour.GRAYSCALE_LUT): 1,
}


def lut_entry_size(symbol_type, symbol_colour):
    """
    Get the number of bytes per look-up table entry for the given symbol
    type and colour, or `None` if a look-up table is not permitted.

    Parameters
    ----------
    symbol_type : str
    symbol_colour : str

    Returns
    -------
    None|int
    """

    return _LUT_ENTRY_SIZES.get((symbol_type, symbol_colour), None)


class SymbolSegmentHeader(NITFSegmentHeader):
    """
    Symbol segment subheader for NITF version 2.0 - see standards document
    MIL-STD-2500A for more information.
    """

    _ordering = (
        'SY', 'SID', 'SNAME', 'Security', 'ENCRYP', 'STYPE',
        'NLIPS', 'NPIXPL', 'NWDTH', 'NBPP', 'SDLVL', 'SALVL', 'SLOC',
        'SLOC2', 'SCOLOR', 'SNUM', 'SROT', 'DLUT', 'UserHeader')
    _lengths = {
        'SY': 2, 'SID': 10, 'SNAME': 20, 'ENCRYP': 1, 'STYPE': 1,
        'NLIPS': 4, 'NPIXPL': 4, 'NWDTH': 4, 'NBPP': 1,
        'SDLVL': 3, 'SALVL': 3, 'SCOLOR': 1,
        'SNUM': 6, 'SROT': 3}
    _identifier_field = 'SID'
    _tre_fields = ('UserHeader', )
    SY = _MagicDescriptor('SY', 'SY', docstring='File part type.')  # type: str
    SID = _StringDescriptor(
        'SID', True, 10, default_value='',
        docstring='Symbol Identifier.')  # type: str
    SNAME = _StringDescriptor(
        'SNAME', True, 20, default_value='',
        docstring='Symbol Name.')  # type: str
    Security = _NITFElementDescriptor(
        'Security', True, NITFSecurityTags0, default_args={},
        docstring='The security tags.')  # type: NITFSecurityTags0
    ENCRYP = _StringDescriptor(
        'ENCRYP', True, 1, default_value='0',
        docstring='Encryption. Read, and otherwise ignored.')  # type: str
    STYPE = _StringEnumDescriptor(
        'STYPE', True, 1, SymbolType.values, default_value=SymbolType.BITMAP,
        docstring='Symbol Type. :code:`B` for bitmap, :code:`C` for computer graphics '
                  'metafile, or :code:`O` for object.')  # type: str
    NLIPS = _IntegerDescriptor(
        'NLIPS', True, 4, default_value=0,
        docstring='Number of Lines Per Symbol.')  # type: int
    NPIXPL = _IntegerDescriptor(
        'NPIXPL', True, 4, default_value=0,
        docstring='Number of Pixels Per Line.')  # type: int
    NWDTH = _IntegerDescriptor(
        'NWDTH', True, 4, default_value=0,
        docstring='Line Width.')  # type: int
    NBPP = _IntegerDescriptor(
        'NBPP', True, 1, default_value=1,
        docstring='Number of Bits Per Pixel.')  # type: int
    SDLVL = _IntegerDescriptor(
        'SDLVL', True, 3, default_value=1,
        docstring='Display Level.')  # type: int
    SALVL = _IntegerDescriptor(
        'SALVL', True, 3, default_value=0,
        docstring='Attachment Level.')  # type: int
    SLOC = _NITFElementDescriptor(
        'SLOC', True, NITFLocation, default_args={},
        docstring='Symbol Location, relative to the item to which the symbol is attached.')  # type: NITFLocation
    SLOC2 = _NITFElementDescriptor(
        'SLOC2', True, NITFLocation, default_args={},
        docstring='Second Symbol Location, for symbols defined by two points.')  # type: NITFLocation
    SCOLOR = _StringEnumDescriptor(
        'SCOLOR', True, 1, SymbolColour.values, default_value=SymbolColour.NOT_APPLICABLE,
        docstring='Symbol Colour.')  # type: str
    SNUM = _RawDescriptor(
        'SNUM', True, 6, default_value=b'000000',
        docstring='Symbol Number.')  # type: bytes
    SROT = _IntegerDescriptor(
        'SROT', True, 3, default_value=0,
        docstring='Symbol Rotation, in degrees.')  # type: int
    UserHeader = _NITFElementDescriptor(
        'UserHeader', True, UserHeaderType, default_args={},
        parse_args={'source': TRESource.SYMBOL_EXTENDED_DATA, 'names': ('SXSHDL', 'SXSOFL')},
        docstring='Extended subheader - TRE list.')  # type: UserHeaderType

    def __init__(self, **kwargs):
        self._DLUT = None
        super(SymbolSegmentHeader, self).__init__(**kwargs)

    @property
    def DLUT(self):
        """
        The Look-up Table (LUT) data, of shape `(NELUT, bytes per entry)`.

        Returns
        -------
        None|numpy.ndarray
        """

        return self._DLUT

    @DLUT.setter
    def DLUT(self, value):
        if value is None:
            self._DLUT = None
            return

        if not isinstance(value, numpy.ndarray):
            raise TypeError('DLUT must be a numpy array')
        if value.dtype.name != 'uint8':
            raise ValueError('DLUT must be a numpy array of dtype uint8, got {}'.format(value.dtype.name))
        if value.ndim != 2 or value.shape[1] not in (1, 3):
            raise ValueError('DLUT must be a two-dimensional array of shape (N, 1) or (N, 3).')
        if value.shape[0] > 999:
            raise ValueError(
                'The number of DLUT entries must be 999 or fewer. '
                'Got DLUT shape {}'.format(value.shape))
        entry_size = lut_entry_size(self.STYPE, self.SCOLOR)
        if value.shape[0] > 0 and entry_size != value.shape[1]:
            raise ValueError(
                'A DLUT of shape {} is not valid for STYPE {} and SCOLOR {}'.format(
                    value.shape, self.STYPE, self.SCOLOR))
        self._DLUT = value

    def freeze(self):
        if self._DLUT is not None:
            self._DLUT.setflags(write=False)
        super(SymbolSegmentHeader, self).freeze()

    @property
    def NELUT(self):
        """
        int: Number of LUT Entries.
        """

        return 0 if self._DLUT is None else self._DLUT.shape[0]

    def _get_attribute_bytes(self, attribute):
        if attribute == 'DLUT':
            out = '{0:03d}'.format(self.NELUT).encode()
            if self.NELUT > 0:
                out += self._DLUT.tobytes()
            return out
        else:
            return super(SymbolSegmentHeader, self)._get_attribute_bytes(attribute)

    def _get_attribute_length(self, attribute):
        if attribute == 'DLUT':
            return 3 + (0 if self._DLUT is None else self._DLUT.size)
        else:
            return super(SymbolSegmentHeader, self)._get_attribute_length(attribute)

    @classmethod
    def _parse_attribute(cls, fields, attribute, cursor, tre_handler):
        if attribute == 'DLUT':
            start = cursor.offset
            nelut = cursor.read_integer(3, name='NELUT')
            if nelut == 0:
                fields['DLUT'] = None
                return
            entry_size = lut_entry_size(fields['STYPE'], fields['SCOLOR'])
            if entry_size is None:
                raise FormatError(
                    'LUT only valid for bitmap symbols with colour or grayscale LUT colour format, '
                    'got {} LUT entries for STYPE {} and SCOLOR {}'.format(
                        nelut, fields['STYPE'], fields['SCOLOR']),
                    field='NELUT', offset=start)
            lut = cursor.read_bytes(nelut*entry_size, name='DLUT')
            fields['DLUT'] = numpy.frombuffer(lut, dtype=numpy.uint8).reshape((nelut, entry_size)).copy()
            return
        super(SymbolSegmentHeader, cls)._parse_attribute(fields, attribute, cursor, tre_handler)
