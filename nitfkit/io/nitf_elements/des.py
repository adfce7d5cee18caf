# -*- coding: utf-8 -*-
"""
The data extension header element definition.

A data extension segment with identifier `TRE_OVERFLOW` (or, for NITF 2.0,
`Registered Extensions` or `Controlled Extensions`) carries TREs which did not
fit in the header area indicated by `DESOFLW`, of the item number `DESITEM`.
Only those segments have the `DESOFLW` and `DESITEM` fields.
"""

import logging
from typing import Optional, Tuple

from .base import NITFSegmentHeader, Unstructured, _IntegerDescriptor,\
    _StringDescriptor, _StringEnumDescriptor, _NITFElementDescriptor, _MagicDescriptor
from .security import NITFSecurityTags, NITFSecurityTags0

__classification__ = "UNCLASSIFIED"

logger = logging.getLogger(__name__)

# the header areas into which overflow TREs may be merged
_OVERFLOW_TARGETS = {'UDHD', 'XHD', 'UDID', 'IXSHD', 'SXSHD', 'LXSHD', 'TXSHD'}


class DESUserHeader(Unstructured):
    """
    The data extension user defined subheader, uninterpreted.
    """

    _size_len = 4
    _size_name = 'DESSHL'


class _DataExtensionHeaderBase(NITFSegmentHeader):
    _id_field = None  # type: Optional[str]
    _overflow_ids = ('TRE_OVERFLOW', )
    DE = _MagicDescriptor('DE', 'DE', docstring='File part type.')  # type: str
    DESVER = _IntegerDescriptor(
        'DESVER', True, 2, default_value=1,
        docstring='Version of the Data Definition. This field shall contain the alphanumeric '
                  'version number of the use of the tag. The version number is assigned as '
                  'part of the registration process.')  # type: int
    DESOFLW = _StringEnumDescriptor(
        'DESOFLW', False, 6, _OVERFLOW_TARGETS, default_value=None,
        docstring='DES Overflowed Header Type. Only present for TRE overflow segments, and '
                  'indicates the header area to which the enclosed TREs belong.')  # type: Optional[str]
    DESITEM = _IntegerDescriptor(
        'DESITEM', False, 3, default_value=None,
        docstring='DES Data Item Overflowed. Only present for TRE overflow segments, and '
                  'contains the one-up number of the item of the type indicated in `DESOFLW` '
                  'to which the enclosed TREs belong, or 0 for the file header.')  # type: Optional[int]
    UserHeader = _NITFElementDescriptor(
        'UserHeader', True, DESUserHeader, default_args={},
        docstring='The DES user defined subheader.')  # type: DESUserHeader

    @property
    def is_tre_overflow(self):
        """
        bool: Does this segment carry overflowed TREs?
        """

        return getattr(self, self._id_field) in self._overflow_ids

    @property
    def overflow_target(self):
        # type: () -> Optional[Tuple[str, int]]
        """
        None|Tuple[str, int]: The (`DESOFLW`, `DESITEM`) pair for an overflow segment.
        """

        if not self.is_tre_overflow:
            return None
        return self.DESOFLW, self.DESITEM

    @classmethod
    def _parse_attribute(cls, fields, attribute, cursor, tre_handler):
        super(_DataExtensionHeaderBase, cls)._parse_attribute(fields, attribute, cursor, tre_handler)
        if attribute == cls._id_field and fields[attribute] not in cls._overflow_ids:
            fields['DESOFLW'] = None
            fields['DESITEM'] = None


##########
# DES - NITF 2.1 version

class DataExtensionHeader(_DataExtensionHeaderBase):
    """
    The data extension subheader - see standards document MIL-STD-2500C for more
    information.
    """

    _ordering = ('DE', 'DESID', 'DESVER', 'Security', 'DESOFLW', 'DESITEM', 'UserHeader')
    _lengths = {'DE': 2, 'DESID': 25, 'DESVER': 2, 'DESOFLW': 6, 'DESITEM': 3}
    _identifier_field = 'DESID'
    _id_field = 'DESID'
    DESID = _StringDescriptor(
        'DESID', True, 25, default_value='',
        docstring='Unique DES Type Identifier. This field shall contain a valid alphanumeric '
                  'identifier properly registered with the ISMC.')  # type: str
    Security = _NITFElementDescriptor(
        'Security', True, NITFSecurityTags, default_args={},
        docstring='The security tags.')  # type: NITFSecurityTags


##########
# DES - NITF 2.0 version

class DataExtensionHeader0(_DataExtensionHeaderBase):
    """
    The data extension subheader for NITF version 2.0 - see standards document
    MIL-STD-2500A for more information.
    """

    _ordering = ('DE', 'DESTAG', 'DESVER', 'Security', 'DESOFLW', 'DESITEM', 'UserHeader')
    _lengths = {'DE': 2, 'DESTAG': 25, 'DESVER': 2, 'DESOFLW': 6, 'DESITEM': 3}
    _identifier_field = 'DESTAG'
    _id_field = 'DESTAG'
    _overflow_ids = ('TRE_OVERFLOW', 'Registered Extensions', 'Controlled Extensions')
    DESTAG = _StringDescriptor(
        'DESTAG', True, 25, default_value='',
        docstring='Unique DES Type Identifier. This field shall contain a valid alphanumeric '
                  'identifier properly registered with the ISMC.')  # type: str
    Security = _NITFElementDescriptor(
        'Security', True, NITFSecurityTags0, default_args={},
        docstring='The security tags.')  # type: NITFSecurityTags0
