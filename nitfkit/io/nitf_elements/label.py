"""
The label segment subheader definition - applies only to NITF version 2.0
"""

from .base import NITFSegmentHeader, NITFLocation, UserHeaderType, _IntegerDescriptor, \
    _RawDescriptor, _StringDescriptor, _NITFElementDescriptor, _MagicDescriptor
from .security import NITFSecurityTags0
from .tres.collection import TRESource

__classification__ = "UNCLASSIFIED"


class LabelSegmentHeader(NITFSegmentHeader):
    """
    Label segment subheader for NITF version 2.0 - see standards document
    MIL-STD-2500A for more information.
    """

    _ordering = (
        'LA', 'LID', 'Security', 'ENCRYP', 'LFS', 'LCW', 'LCH',
        'LDLVL', 'LALVL', 'LLOC', 'LTC', 'LBC', 'UserHeader')
    _lengths = {
        'LA': 2, 'LID': 10, 'ENCRYP': 1, 'LFS': 1, 'LCW': 2, 'LCH': 2,
        'LDLVL': 3, 'LALVL': 3, 'LTC': 3, 'LBC': 3}
    _identifier_field = 'LID'
    _tre_fields = ('UserHeader', )
    #######
    LA = _MagicDescriptor('LA', 'LA', docstring='File part type.')  # type: str
    LID = _StringDescriptor(
        'LID', True, 10, default_value='',
        docstring='Label Identifier.')  # type: str
    Security = _NITFElementDescriptor(
        'Security', True, NITFSecurityTags0, default_args={},
        docstring='The security tags.')  # type: NITFSecurityTags0
    ENCRYP = _StringDescriptor(
        'ENCRYP', True, 1, default_value='0',
        docstring='Encryption. Read, and otherwise ignored.')  # type: str
    LFS = _StringDescriptor(
        'LFS', True, 1, default_value='',
        docstring='Label Font Style.')  # type: str
    LCW = _StringDescriptor(
        'LCW', True, 2, default_value='00',
        docstring='Label Cell Width.')  # type: str
    LCH = _StringDescriptor(
        'LCH', True, 2, default_value='00',
        docstring='Label Cell Height.')  # type: str
    LDLVL = _IntegerDescriptor(
        'LDLVL', True, 3, default_value=1,
        docstring='Display Level.')  # type: int
    LALVL = _IntegerDescriptor(
        'LALVL', True, 3, default_value=0,
        docstring='Attachment Level.')  # type: int
    LLOC = _NITFElementDescriptor(
        'LLOC', True, NITFLocation, default_args={},
        docstring='Label Location.')  # type: NITFLocation
    LTC = _RawDescriptor(
        'LTC', True, 3, default_value=b'\x00\x00\x00',
        docstring='Label Text Colour, as red, green, blue.')  # type: bytes
    LBC = _RawDescriptor(
        'LBC', True, 3, default_value=b'\xff\xff\xff',
        docstring='Label Background Colour, as red, green, blue.')  # type: bytes
    UserHeader = _NITFElementDescriptor(
        'UserHeader', True, UserHeaderType, default_args={},
        parse_args={'source': TRESource.LABEL_EXTENDED_DATA, 'names': ('LXSHDL', 'LXSOFL')},
        docstring='Extended subheader - TRE list.')  # type: UserHeaderType
