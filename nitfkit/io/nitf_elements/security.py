"""
The security tags definitions, common to the file header and every subheader.

The security fields are treated as an opaque block - each field is read as
text and written back verbatim, without any interpretation of the codes.
"""

__classification__ = "UNCLASSIFIED"

import logging

from .base import NITFElement, _StringDescriptor

logger = logging.getLogger(__name__)


class NITFSecurityTags(NITFElement):
    """
    The NITF 2.1 (and NSIF 1.0) security tags - a fixed 167 byte block.
    """

    _ordering = (
        'CLAS', 'CLSY', 'CODE', 'CTLH',
        'REL', 'DCTP', 'DCDT', 'DCXM',
        'DG', 'DGDT', 'CLTX', 'CATP',
        'CAUT', 'CRSN', 'SRDT', 'CTLN')
    _lengths = {
        'CLAS': 1, 'CLSY': 2, 'CODE': 11, 'CTLH': 2,
        'REL': 20, 'DCTP': 2, 'DCDT': 8, 'DCXM': 4,
        'DG': 1, 'DGDT': 8, 'CLTX': 43, 'CATP': 1,
        'CAUT': 40, 'CRSN': 1, 'SRDT': 8, 'CTLN': 15}
    CLAS = _StringDescriptor(
        'CLAS', True, 1, default_value='U',
        docstring='Security Classification. Nominally one of `T`, `S`, `C`, `R`, or `U`.')  # type: str
    CLSY = _StringDescriptor(
        'CLSY', True, 2, default_value='',
        docstring='Security Classification System.')  # type: str
    CODE = _StringDescriptor(
        'CODE', True, 11, default_value='',
        docstring='Codewords.')  # type: str
    CTLH = _StringDescriptor(
        'CTLH', True, 2, default_value='',
        docstring='Control and Handling.')  # type: str
    REL = _StringDescriptor(
        'REL', True, 20, default_value='',
        docstring='Releasing Instructions.')  # type: str
    DCTP = _StringDescriptor(
        'DCTP', True, 2, default_value='',
        docstring='Declassification Type.')  # type: str
    DCDT = _StringDescriptor(
        'DCDT', True, 8, default_value='',
        docstring='Declassification Date, in the format `CCYYMMDD`.')  # type: str
    DCXM = _StringDescriptor(
        'DCXM', True, 4, default_value='',
        docstring='Declassification Exemption.')  # type: str
    DG = _StringDescriptor(
        'DG', True, 1, default_value='',
        docstring='Downgrade.')  # type: str
    DGDT = _StringDescriptor(
        'DGDT', True, 8, default_value='',
        docstring='Downgrade Date, in the format `CCYYMMDD`.')  # type: str
    CLTX = _StringDescriptor(
        'CLTX', True, 43, default_value='',
        docstring='Classification Text.')  # type: str
    CATP = _StringDescriptor(
        'CATP', True, 1, default_value='',
        docstring='Classification Authority Type.')  # type: str
    CAUT = _StringDescriptor(
        'CAUT', True, 40, default_value='',
        docstring='Classification Authority.')  # type: str
    CRSN = _StringDescriptor(
        'CRSN', True, 1, default_value='',
        docstring='Classification Reason.')  # type: str
    SRDT = _StringDescriptor(
        'SRDT', True, 8, default_value='',
        docstring='Security Source Date, in the format `CCYYMMDD`.')  # type: str
    CTLN = _StringDescriptor(
        'CTLN', True, 15, default_value='',
        docstring='Security Control Number.')  # type: str


class NITFSecurityTags0(NITFElement):
    """
    The NITF 2.0 security tags. The downgrading event field `DEVT` is only
    present when the downgrade field `DWNG` has the value `999998`.
    """

    _ordering = (
        'CLAS', 'CODE', 'CTLH', 'REL', 'CAUT', 'CTLN', 'DWNG', 'DEVT')
    _lengths = {
        'CLAS': 1, 'CODE': 40, 'CTLH': 40, 'REL': 40,
        'CAUT': 20, 'CTLN': 20, 'DWNG': 6, 'DEVT': 40}
    _downgrade_event = '999998'
    CLAS = _StringDescriptor(
        'CLAS', True, 1, default_value='U',
        docstring='Security Classification. Nominally one of `T`, `S`, `C`, `R`, or `U`.')  # type: str
    CODE = _StringDescriptor(
        'CODE', True, 40, default_value='',
        docstring='Codewords.')  # type: str
    CTLH = _StringDescriptor(
        'CTLH', True, 40, default_value='',
        docstring='Control and Handling.')  # type: str
    REL = _StringDescriptor(
        'REL', True, 40, default_value='',
        docstring='Releasing Instructions.')  # type: str
    CAUT = _StringDescriptor(
        'CAUT', True, 20, default_value='',
        docstring='Classification Authority.')  # type: str
    CTLN = _StringDescriptor(
        'CTLN', True, 20, default_value='',
        docstring='Security Control Number.')  # type: str
    DWNG = _StringDescriptor(
        'DWNG', True, 6, default_value='',
        docstring='Security Downgrade. Either a date `YYMMDD`, `999999` for originating agency '
                  'determination required, `999998` for downgrading event, or blank.')  # type: str
    DEVT = _StringDescriptor(
        'DEVT', False, 40, default_value='',
        docstring='Downgrading Event.')  # type: str

    def _get_attribute_length(self, fld):
        if fld == 'DEVT' and self.DWNG != self._downgrade_event:
            return 0
        return super(NITFSecurityTags0, self)._get_attribute_length(fld)

    def _get_attribute_bytes(self, fld):
        if fld == 'DEVT' and self.DWNG != self._downgrade_event:
            return b''
        return super(NITFSecurityTags0, self)._get_attribute_bytes(fld)

    @classmethod
    def minimum_length(cls):
        return sum(cls._lengths.values()) - cls._lengths['DEVT']

    @classmethod
    def _parse_attribute(cls, fields, attribute, cursor, tre_handler):
        super(NITFSecurityTags0, cls)._parse_attribute(fields, attribute, cursor, tre_handler)
        if attribute == 'DWNG' and fields['DWNG'] != cls._downgrade_event:
            fields['DEVT'] = None
