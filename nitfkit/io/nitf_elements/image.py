# -*- coding: utf-8 -*-
"""
The image subheader definitions.

Only the header content is decoded. The image data block, including any
block or pad pixel mask for the masked compression codes, is left as
uninterpreted bytes.
"""

import logging

import numpy

from .base import NITFSegmentHeader, NITFElement, NITFLoop, NITFLocation, UserHeaderType, \
    _IntegerDescriptor, _StringDescriptor, _StringEnumDescriptor, _NITFElementDescriptor, \
    _MagicDescriptor
from .security import NITFSecurityTags, NITFSecurityTags0
from .tres.collection import TRESource


__classification__ = "UNCLASSIFIED"

logger = logging.getLogger(__name__)

_IC_VALUES = {
    'NC', 'NM', 'C1', 'C3', 'C4', 'C5', 'C6', 'C7', 'C8', 'I1',
    'M1', 'M3', 'M4', 'M5', 'M6', 'M7', 'M8'}
_IC_VALUES0 = _IC_VALUES.union({'C0', 'C2', 'M0', 'M2'})
_UNCOMPRESSED = ('NC', 'NM')
_PVTYPE_VALUES = {'INT', 'B', 'SI', 'R', 'C'}
_IREP_VALUES = {'MONO', 'RGB', 'RGB/LUT', 'MULTI', 'NODISPLY', 'NVECTOR', 'POLAR', 'VPH', 'YCbCr601'}


class ImageBand(NITFElement):
    """
    Single image band, part of the image bands collection
    """

    _ordering = ('IREPBAND', 'ISUBCAT', 'IFC', 'IMFLT', 'LUTD')
    _lengths = {'IREPBAND': 2, 'ISUBCAT': 6, 'IFC': 1, 'IMFLT': 3}
    IREPBAND = _StringDescriptor(
        'IREPBAND', True, 2, default_value='',
        docstring='Representation. The processing required to display this band, with '
                  'regard to the general image type recorded in `IREP`.')  # type: str
    ISUBCAT = _StringDescriptor(
        'ISUBCAT', True, 6, default_value='',
        docstring='Subcategory. The significance of the band with regard to the image '
                  'category `ICAT`.')  # type: str
    IFC = _StringEnumDescriptor(
        'IFC', True, 1, {'N', }, default_value='N',
        docstring='Image Filter Condition.')  # type: str
    IMFLT = _StringDescriptor(
        'IMFLT', True, 3, default_value='',
        docstring='Standard Image Filter Code. Reserved for future use.')  # type: str

    def __init__(self, **kwargs):
        self._LUTD = None
        super(ImageBand, self).__init__(**kwargs)

    def freeze(self):
        if self._LUTD is not None:
            self._LUTD.setflags(write=False)
        super(ImageBand, self).freeze()

    @property
    def LUTD(self):
        """
        The Look-up Table (LUT) data, of shape `(NLUTS, NELUT)`.

        Returns
        -------
        None|numpy.ndarray
        """

        return self._LUTD

    @LUTD.setter
    def LUTD(self, value):
        if value is None:
            self._LUTD = None
            return

        if not isinstance(value, numpy.ndarray):
            raise TypeError('LUTD must be a numpy array')
        if value.dtype.name != 'uint8':
            raise ValueError('LUTD must be a numpy array of dtype uint8, got {}'.format(value.dtype.name))
        if value.ndim != 2:
            raise ValueError('LUTD must be a two-dimensional array')
        if value.shape[0] > 4:
            raise ValueError(
                'The number of LUTD bands (axis 0) must be 4 or fewer. '
                'Got LUTD shape {}'.format(value.shape))
        if value.shape[1] > 65536:
            raise ValueError(
                'The number of LUTD elements (axis 1) must be 65536 or fewer. '
                'Got LUTD shape {}'.format(value.shape))
        self._LUTD = value

    @property
    def NLUTS(self):
        """
        int: Number of LUTS for the Image Band.
        """

        return 0 if self._LUTD is None else self._LUTD.shape[0]

    @property
    def NELUT(self):
        """
        int: Number of LUT Entries for the Image Band.
        """

        return 0 if self._LUTD is None else self._LUTD.shape[1]

    def _get_attribute_bytes(self, attribute):
        if attribute == 'LUTD':
            if self.NLUTS == 0:
                return b'0'
            return '{0:1d}{1:05d}'.format(self.NLUTS, self.NELUT).encode() + self._LUTD.tobytes()
        else:
            return super(ImageBand, self)._get_attribute_bytes(attribute)

    def _get_attribute_length(self, attribute):
        if attribute == 'LUTD':
            nluts = self.NLUTS
            if nluts == 0:
                return 1
            else:
                return 6 + nluts*self.NELUT
        else:
            return super(ImageBand, self)._get_attribute_length(attribute)

    @classmethod
    def _parse_attribute(cls, fields, attribute, cursor, tre_handler):
        if attribute == 'LUTD':
            nluts = cursor.read_integer(1, name='NLUTS')
            if nluts == 0:
                fields['LUTD'] = None
            else:
                nelut = cursor.read_integer(5, name='NELUT')
                lutd = cursor.read_bytes(nluts*nelut, name='LUTD')
                fields['LUTD'] = numpy.frombuffer(lutd, dtype=numpy.uint8).reshape((nluts, nelut)).copy()
            return
        super(ImageBand, cls)._parse_attribute(fields, attribute, cursor, tre_handler)


class ImageBands(NITFLoop):
    """
    The image bands, with the count escaped to the `XBANDS` field when more than 9.
    """

    _child_class = ImageBand
    _count_size = 1
    _count_name = 'NBANDS'

    @classmethod
    def _parse_count(cls, cursor):
        count = cursor.read_integer(cls._count_size, name=cls._count_name)
        if count == 0:
            # (only) if there are more than 9, a longer field is used
            count = cursor.read_integer(5, name='XBANDS')
        return count

    def _counts_bytes(self):
        siz = len(self.values)
        if siz <= 9:
            return '{0:1d}'.format(siz).encode()
        else:
            return '0{0:05d}'.format(siz).encode()

    def get_bytes_length(self):
        extra = 5 if len(self.values) > 9 else 0
        return super(ImageBands, self).get_bytes_length() + extra


class ImageBands0(NITFLoop):
    """
    The NITF 2.0 image bands, at most 9.
    """

    _child_class = ImageBand
    _count_size = 1
    _count_name = 'NBANDS'


class ImageComment(NITFElement):
    _ordering = ('COMMENT', )
    _lengths = {'COMMENT': 80}
    COMMENT = _StringDescriptor('COMMENT', True, 80, default_value='', docstring='The image comment')


class ImageComments(NITFLoop):
    _child_class = ImageComment
    _count_size = 1
    _count_name = 'NICOM'


class _ImageSegmentHeaderBase(NITFSegmentHeader):
    """
    The fields shared by the image subheaders of all versions.
    """

    _no_geolocation = ('', )
    _tre_fields = ('UserHeader', 'ExtendedHeader')
    IM = _MagicDescriptor('IM', 'IM', docstring='File part type.')  # type: str
    IDATIM = _StringDescriptor(
        'IDATIM', True, 14, default_value='',
        docstring='Image Date and Time, the time (UTC) of the image acquisition.')  # type: str
    TGTID = _StringDescriptor(
        'TGTID', True, 17, default_value='',
        docstring='Target Identifier, in the format :code:`BBBBBBBBBBOOOOOCC`.')  # type: str
    ENCRYP = _StringDescriptor(
        'ENCRYP', True, 1, default_value='0',
        docstring='Encryption. Read, and otherwise ignored.')  # type: str
    ISORCE = _StringDescriptor(
        'ISORCE', True, 42, default_value='',
        docstring='Image Source. A description of the source of the image.')  # type: str
    NROWS = _IntegerDescriptor(
        'NROWS', True, 8, default_value=0,
        docstring='Number of Significant Rows in Image.')  # type: int
    NCOLS = _IntegerDescriptor(
        'NCOLS', True, 8, default_value=0,
        docstring='Number of Significant Columns in Image.')  # type: int
    PVTYPE = _StringEnumDescriptor(
        'PVTYPE', True, 3, _PVTYPE_VALUES, default_value='INT',
        docstring='Pixel Value Type. The computer representation used for the value of each '
                  'pixel for each band in the image.')  # type: str
    IREP = _StringEnumDescriptor(
        'IREP', True, 8, _IREP_VALUES, default_value='NODISPLY',
        docstring='Image Representation. The processing required in order to display '
                  'the image.')  # type: str
    ICAT = _StringDescriptor(
        'ICAT', True, 8, default_value='VIS',
        docstring='Image Category. The specific category of image, raster or grid data.')  # type: str
    ABPP = _IntegerDescriptor(
        'ABPP', True, 2, default_value=8,
        docstring='Actual Bits-Per-Pixel Per Band, the number of significant bits for the '
                  'value in each band of each pixel without compression.')  # type: int
    PJUST = _StringEnumDescriptor(
        'PJUST', True, 1, {'L', 'R'}, default_value='R',
        docstring='Pixel Justification. When `ABPP` is not equal to `NBPP`, whether the '
                  'significant bits are left (:code:`L`) or right (:code:`R`) justified.')  # type: str
    IGEOLO = _StringDescriptor(
        'IGEOLO', False, 60, default_value=None,
        docstring='Image Geographic Location. The approximate location of the four image '
                  'corners, in the representation given by `ICORDS`. Absent when `ICORDS` '
                  'indicates no geolocation.')  # type: str
    Comments = _NITFElementDescriptor(
        'Comments', True, ImageComments, default_args={},
        docstring='The image comments.')  # type: ImageComments
    COMRAT = _StringDescriptor(
        'COMRAT', False, 4, default_value=None,
        docstring='Compression Rate Code. Absent when `IC` is :code:`NC` or :code:`NM`.')  # type: str
    ISYNC = _IntegerDescriptor(
        'ISYNC', True, 1, default_value=0,
        docstring='Image Sync code. Reserved for future use.')  # type: int
    IMODE = _StringDescriptor(
        'IMODE', True, 1, default_value='P',
        docstring='Image Mode. How the image pixels are stored in the NITF file.')  # type: str
    NBPR = _IntegerDescriptor(
        'NBPR', True, 4, default_value=1,
        docstring='Number of Blocks Per Row.')  # type: int
    NBPC = _IntegerDescriptor(
        'NBPC', True, 4, default_value=1,
        docstring='Number of Blocks Per Column.')  # type: int
    NPPBH = _IntegerDescriptor(
        'NPPBH', True, 4, default_value=0,
        docstring='Number of Pixels Per Block Horizontal.')  # type: int
    NPPBV = _IntegerDescriptor(
        'NPPBV', True, 4, default_value=0,
        docstring='Number of Pixels Per Block Vertical.')  # type: int
    NBPP = _IntegerDescriptor(
        'NBPP', True, 2, default_value=8,
        docstring='Number of Bits Per Pixel Per Band.')  # type: int
    IDLVL = _IntegerDescriptor(
        'IDLVL', True, 3, default_value=1,
        docstring='Image Display Level.')  # type: int
    IALVL = _IntegerDescriptor(
        'IALVL', True, 3, default_value=0,
        docstring='Attachment Level.')  # type: int
    ILOC = _NITFElementDescriptor(
        'ILOC', True, NITFLocation, default_args={},
        docstring='Image Location. The location of the first pixel of the first line, as an '
                  'offset from the item to which the image is attached.')  # type: NITFLocation
    IMAG = _StringDescriptor(
        'IMAG', True, 4, default_value='1.0',
        docstring='Image Magnification, relative to the original source image.')  # type: str
    UserHeader = _NITFElementDescriptor(
        'UserHeader', True, UserHeaderType, default_args={},
        parse_args={'source': TRESource.IMAGE_USER_DATA, 'names': ('UDIDL', 'UDOFL')},
        docstring='User defined image data - TRE list.')  # type: UserHeaderType
    ExtendedHeader = _NITFElementDescriptor(
        'ExtendedHeader', True, UserHeaderType, default_args={},
        parse_args={'source': TRESource.IMAGE_EXTENDED_DATA, 'names': ('IXSHDL', 'IXSOFL')},
        docstring='Extended subheader - TRE list.')  # type: UserHeaderType

    @property
    def is_compressed(self):
        """
        bool: Is the image data compressed?
        """

        return self.IC not in _UNCOMPRESSED

    @classmethod
    def _parse_attribute(cls, fields, attribute, cursor, tre_handler):
        super(_ImageSegmentHeaderBase, cls)._parse_attribute(fields, attribute, cursor, tre_handler)
        if attribute == 'IC' and fields['IC'] in _UNCOMPRESSED:
            fields['COMRAT'] = None
        elif attribute == 'ICORDS' and fields['ICORDS'] in cls._no_geolocation:
            fields['IGEOLO'] = None


#########
# NITF 2.1 version

class ImageSegmentHeader(_ImageSegmentHeaderBase):
    """
    The image segment header - see standards document MIL-STD-2500C for more
    information.
    """

    _ordering = (
        'IM', 'IID1', 'IDATIM', 'TGTID',
        'IID2', 'Security', 'ENCRYP', 'ISORCE',
        'NROWS', 'NCOLS', 'PVTYPE', 'IREP',
        'ICAT', 'ABPP', 'PJUST', 'ICORDS',
        'IGEOLO', 'Comments', 'IC', 'COMRAT', 'Bands',
        'ISYNC', 'IMODE', 'NBPR', 'NBPC', 'NPPBH',
        'NPPBV', 'NBPP', 'IDLVL', 'IALVL',
        'ILOC', 'IMAG', 'UserHeader', 'ExtendedHeader')
    _lengths = {
        'IM': 2, 'IID1': 10, 'IDATIM': 14, 'TGTID': 17,
        'IID2': 80, 'ENCRYP': 1, 'ISORCE': 42,
        'NROWS': 8, 'NCOLS': 8, 'PVTYPE': 3, 'IREP': 8,
        'ICAT': 8, 'ABPP': 2, 'PJUST': 1, 'ICORDS': 1,
        'IGEOLO': 60, 'IC': 2, 'COMRAT': 4, 'ISYNC': 1, 'IMODE': 1,
        'NBPR': 4, 'NBPC': 4, 'NPPBH': 4, 'NPPBV': 4,
        'NBPP': 2, 'IDLVL': 3, 'IALVL': 3, 'IMAG': 4}
    _identifier_field = 'IID1'
    IID1 = _StringDescriptor(
        'IID1', True, 10, default_value='',
        docstring='Image Identifier 1.')  # type: str
    IID2 = _StringDescriptor(
        'IID2', True, 80, default_value='',
        docstring='Image Identifier 2.')  # type: str
    Security = _NITFElementDescriptor(
        'Security', True, NITFSecurityTags, default_args={},
        docstring='The image security tags.')  # type: NITFSecurityTags
    ICORDS = _StringEnumDescriptor(
        'ICORDS', True, 1, {'', 'U', 'G', 'N', 'S', 'D'}, default_value='',
        docstring='Image Coordinate Representation. Blank when there is no `IGEOLO`.')  # type: str
    IC = _StringEnumDescriptor(
        'IC', True, 2, _IC_VALUES, default_value='NC',
        docstring='Image Compression.')  # type: str
    Bands = _NITFElementDescriptor(
        'Bands', True, ImageBands, default_args={},
        docstring='The image bands.')  # type: ImageBands


#########
# NITF 2.0 version

class ImageSegmentHeader0(_ImageSegmentHeaderBase):
    """
    The image segment header for NITF version 2.0 - see standards document
    MIL-STD-2500A for more information.
    """

    _ordering = (
        'IM', 'IID', 'IDATIM', 'TGTID',
        'ITITLE', 'Security', 'ENCRYP', 'ISORCE',
        'NROWS', 'NCOLS', 'PVTYPE', 'IREP',
        'ICAT', 'ABPP', 'PJUST', 'ICORDS',
        'IGEOLO', 'Comments', 'IC', 'COMRAT', 'Bands',
        'ISYNC', 'IMODE', 'NBPR', 'NBPC', 'NPPBH',
        'NPPBV', 'NBPP', 'IDLVL', 'IALVL',
        'ILOC', 'IMAG', 'UserHeader', 'ExtendedHeader')
    _lengths = {
        'IM': 2, 'IID': 10, 'IDATIM': 14, 'TGTID': 17,
        'ITITLE': 80, 'ENCRYP': 1, 'ISORCE': 42,
        'NROWS': 8, 'NCOLS': 8, 'PVTYPE': 3, 'IREP': 8,
        'ICAT': 8, 'ABPP': 2, 'PJUST': 1, 'ICORDS': 1,
        'IGEOLO': 60, 'IC': 2, 'COMRAT': 4, 'ISYNC': 1, 'IMODE': 1,
        'NBPR': 4, 'NBPC': 4, 'NPPBH': 4, 'NPPBV': 4,
        'NBPP': 2, 'IDLVL': 3, 'IALVL': 3, 'IMAG': 4}
    _identifier_field = 'IID'
    _no_geolocation = ('N', )
    IID = _StringDescriptor(
        'IID', True, 10, default_value='',
        docstring='Image Identifier.')  # type: str
    ITITLE = _StringDescriptor(
        'ITITLE', True, 80, default_value='',
        docstring='Image Title.')  # type: str
    Security = _NITFElementDescriptor(
        'Security', True, NITFSecurityTags0, default_args={},
        docstring='The image security tags.')  # type: NITFSecurityTags0
    ICORDS = _StringEnumDescriptor(
        'ICORDS', True, 1, {'U', 'G', 'C', 'N'}, default_value='N',
        docstring='Image Coordinate Representation. :code:`N` when there is no `IGEOLO`.')  # type: str
    IC = _StringEnumDescriptor(
        'IC', True, 2, _IC_VALUES0, default_value='NC',
        docstring='Image Compression.')  # type: str
    Bands = _NITFElementDescriptor(
        'Bands', True, ImageBands0, default_args={},
        docstring='The image bands.')  # type: ImageBands0
