# -*- coding: utf-8 -*-
"""
The graphics header element definition - applies only to NITF 2.1 (and NSIF 1.0).
"""

from .base import NITFSegmentHeader, NITFLocation, UserHeaderType, _IntegerDescriptor, \
    _StringDescriptor, _StringEnumDescriptor, _NITFElementDescriptor, _MagicDescriptor
from .security import NITFSecurityTags
from .tres.collection import TRESource

__classification__ = "UNCLASSIFIED"


class GraphicsSegmentHeader(NITFSegmentHeader):
    """
    Graphics segment subheader - see standards document MIL-STD-2500C for more
    information.
    """

    _ordering = (
        'SY', 'SID', 'SNAME', 'Security', 'ENCRYP', 'SFMT',
        'SSTRUCT', 'SDLVL', 'SALVL', 'SLOC', 'SBND1',
        'SCOLOR', 'SBND2', 'SRES2', 'UserHeader')
    _lengths = {
        'SY': 2, 'SID': 10, 'SNAME': 20, 'ENCRYP': 1,
        'SFMT': 1, 'SSTRUCT': 13, 'SDLVL': 3, 'SALVL': 3,
        'SCOLOR': 1, 'SRES2': 2}
    _identifier_field = 'SID'
    _tre_fields = ('UserHeader', )
    SY = _MagicDescriptor('SY', 'SY', docstring='File part type.')  # type: str
    SID = _StringDescriptor(
        'SID', True, 10, default_value='',
        docstring='Graphic Identifier. This field shall contain a valid alphanumeric identification code '
                  'associated with the graphic. The valid codes are determined by the application.')  # type: str
    SNAME = _StringDescriptor(
        'SNAME', True, 20, default_value='',
        docstring='Graphic name. This field shall contain an alphanumeric name for the graphic.')  # type: str
    Security = _NITFElementDescriptor(
        'Security', True, NITFSecurityTags, default_args={},
        docstring='The security tags.')  # type: NITFSecurityTags
    ENCRYP = _StringDescriptor(
        'ENCRYP', True, 1, default_value='0',
        docstring='Encryption. Read, and otherwise ignored.')  # type: str
    SFMT = _StringDescriptor(
        'SFMT', True, 1, default_value='C',
        docstring='Graphic Type. This field shall contain a valid indicator of the '
                  'representation type of the graphic.')  # type: str
    SSTRUCT = _IntegerDescriptor(
        'SSTRUCT', True, 13, default_value=0,
        docstring='Reserved for Future Use.')  # type: int
    SDLVL = _IntegerDescriptor(
        'SDLVL', True, 3, default_value=1,
        docstring='Graphic Display Level. The valid values are :code:`1-999`, and the '
                  'display level of each displayable file component shall be unique.')  # type: int
    SALVL = _IntegerDescriptor(
        'SALVL', True, 3, default_value=0,
        docstring='Graphic Attachment Level. Either 0, or the display level value of any other '
                  'image or graphic in the file.')  # type: int
    SLOC = _NITFElementDescriptor(
        'SLOC', True, NITFLocation, default_args={},
        docstring='Graphic Location. The location of the graphic origin, as an offset from the '
                  'location of the item to which it is attached, or from the origin of '
                  'the CCS when unattached.')  # type: NITFLocation
    SBND1 = _NITFElementDescriptor(
        'SBND1', True, NITFLocation, default_args={},
        docstring='First Graphic Bound Location. The upper left corner of the bounding box '
                  'for the CGM graphic.')  # type: NITFLocation
    SCOLOR = _StringEnumDescriptor(
        'SCOLOR', True, 1, {'C', 'M'}, default_value='M',
        docstring='Graphic Color. :code:`C` if the CGM contains any color pieces or '
                  ':code:`M` if it is monochrome.')  # type: str
    SBND2 = _NITFElementDescriptor(
        'SBND2', True, NITFLocation, default_args={},
        docstring='Second Graphic Bound Location. The lower right corner of the bounding box '
                  'for the CGM graphic.')  # type: NITFLocation
    SRES2 = _IntegerDescriptor(
        'SRES2', True, 2, default_value=0,
        docstring='Reserved for Future Use.')  # type: int
    UserHeader = _NITFElementDescriptor(
        'UserHeader', True, UserHeaderType, default_args={},
        parse_args={'source': TRESource.GRAPHIC_EXTENDED_DATA, 'names': ('SXSHDL', 'SXSOFL')},
        docstring='Extended subheader - TRE list.')  # type: UserHeaderType
