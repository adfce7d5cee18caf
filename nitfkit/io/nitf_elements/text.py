# -*- coding: utf-8 -*-
"""
The text segment subheader definitions.
"""

from .base import NITFSegmentHeader, UserHeaderType, _IntegerDescriptor,\
    _StringDescriptor, _StringEnumDescriptor, _NITFElementDescriptor, _MagicDescriptor
from .security import NITFSecurityTags, NITFSecurityTags0
from .tres.collection import TRESource

__classification__ = "UNCLASSIFIED"

_TEXT_FORMATS = {'', 'MTF', 'STA', 'UT1', 'U8S'}


########
# NITF 2.1

class TextSegmentHeader(NITFSegmentHeader):
    """
    Text Segment Subheader for NITF version 2.1 - see standards document
    MIL-STD-2500C for more information.
    """

    _ordering = (
        'TE', 'TEXTID', 'TXTALVL', 'TXTDT', 'TXTITL', 'Security',
        'ENCRYP', 'TXTFMT', 'UserHeader')
    _lengths = {
        'TE': 2, 'TEXTID': 7, 'TXTALVL': 3, 'TXTDT': 14, 'TXTITL': 80,
        'ENCRYP': 1, 'TXTFMT': 3}
    _identifier_field = 'TEXTID'
    _tre_fields = ('UserHeader', )
    TE = _MagicDescriptor('TE', 'TE', docstring='File part type.')  # type: str
    TEXTID = _StringDescriptor(
        'TEXTID', True, 7, default_value='',
        docstring='Text Identifier. This field shall contain a valid alphanumeric identification '
                  'code associated with the text item.')  # type: str
    TXTALVL = _IntegerDescriptor(
        'TXTALVL', True, 3, default_value=0,
        docstring='Text Attachment Level. This field shall contain a valid value that '
                  'indicates the attachment level of the text.')  # type: int
    TXTDT = _StringDescriptor(
        'TXTDT', True, 14, default_value='',
        docstring='Text Date and Time, in the format :code:`YYYYMMDDhhmmss`')  # type: str
    TXTITL = _StringDescriptor(
        'TXTITL', True, 80, default_value='',
        docstring='Text Title.')  # type: str
    Security = _NITFElementDescriptor(
        'Security', True, NITFSecurityTags, default_args={},
        docstring='The security tags.')  # type: NITFSecurityTags
    ENCRYP = _StringDescriptor(
        'ENCRYP', True, 1, default_value='0',
        docstring='Encryption. Read, and otherwise ignored.')  # type: str
    TXTFMT = _StringEnumDescriptor(
        'TXTFMT', True, 3, _TEXT_FORMATS, default_value='',
        docstring='Text Format. :code:`MTF` for USMTF, :code:`STA` for BCS, :code:`UT1` '
                  'for ECS text formatting, and :code:`U8S` for U8S text formatting.')  # type: str
    UserHeader = _NITFElementDescriptor(
        'UserHeader', True, UserHeaderType, default_args={},
        parse_args={'source': TRESource.TEXT_EXTENDED_DATA, 'names': ('TXSHDL', 'TXSOFL')},
        docstring='Extended subheader - TRE list.')  # type: UserHeaderType


########
# NITF 2.0

class TextSegmentHeader0(NITFSegmentHeader):
    """
    Text Segment Subheader for NITF version 2.0 - see standards document
    MIL-STD-2500A for more information.
    """

    _ordering = (
        'TE', 'TEXTID', 'TXTDT', 'TXTITL', 'Security',
        'ENCRYP', 'TXTFMT', 'UserHeader')
    _lengths = {
        'TE': 2, 'TEXTID': 10, 'TXTDT': 14, 'TXTITL': 80,
        'ENCRYP': 1, 'TXTFMT': 3}
    _identifier_field = 'TEXTID'
    _tre_fields = ('UserHeader', )
    TE = _MagicDescriptor('TE', 'TE', docstring='File part type.')  # type: str
    TEXTID = _StringDescriptor(
        'TEXTID', True, 10, default_value='',
        docstring='Text Identifier.')  # type: str
    TXTDT = _StringDescriptor(
        'TXTDT', True, 14, default_value='',
        docstring='Text Date and Time, in the format :code:`DDhhmmssZMONYY`')  # type: str
    TXTITL = _StringDescriptor(
        'TXTITL', True, 80, default_value='',
        docstring='Text Title.')  # type: str
    Security = _NITFElementDescriptor(
        'Security', True, NITFSecurityTags0, default_args={},
        docstring='The security tags.')  # type: NITFSecurityTags0
    ENCRYP = _StringDescriptor(
        'ENCRYP', True, 1, default_value='0',
        docstring='Encryption. Read, and otherwise ignored.')  # type: str
    TXTFMT = _StringEnumDescriptor(
        'TXTFMT', True, 3, _TEXT_FORMATS, default_value='',
        docstring='Text Format.')  # type: str
    UserHeader = _NITFElementDescriptor(
        'UserHeader', True, UserHeaderType, default_args={},
        parse_args={'source': TRESource.TEXT_EXTENDED_DATA, 'names': ('TXSHDL', 'TXSOFL')},
        docstring='Extended subheader - TRE list.')  # type: UserHeaderType
