# -*- coding: utf-8 -*-
"""
The reserved extension subheader definitions.
"""

from .base import NITFSegmentHeader, Unstructured, _IntegerDescriptor,\
    _StringDescriptor, _NITFElementDescriptor, _MagicDescriptor
from .security import NITFSecurityTags, NITFSecurityTags0

__classification__ = "UNCLASSIFIED"


class RESUserHeader(Unstructured):
    """
    The reserved extension user defined subheader, uninterpreted.
    """

    _size_len = 4
    _size_name = 'RESSHL'


class ReservedExtensionHeader(NITFSegmentHeader):
    """
    The reserved extension subheader - see standards document MIL-STD-2500C for more
    information.
    """

    _ordering = ('RE', 'RESID', 'RESVER', 'Security', 'UserHeader')
    _lengths = {'RE': 2, 'RESID': 25, 'RESVER': 2}
    _identifier_field = 'RESID'
    RE = _MagicDescriptor('RE', 'RE', docstring='File part type.')  # type: str
    RESID = _StringDescriptor(
        'RESID', True, 25, default_value='',
        docstring='Unique RES Type Identifier. This field shall contain a valid alphanumeric '
                  'identifier properly registered with the ISMC.')  # type: str
    RESVER = _IntegerDescriptor(
        'RESVER', True, 2, default_value=1,
        docstring='Version of the Data Definition.')  # type: int
    Security = _NITFElementDescriptor(
        'Security', True, NITFSecurityTags, default_args={},
        docstring='The security tags.')  # type: NITFSecurityTags
    UserHeader = _NITFElementDescriptor(
        'UserHeader', True, RESUserHeader, default_args={},
        docstring='The RES user defined subheader.')  # type: RESUserHeader


class ReservedExtensionHeader0(ReservedExtensionHeader):
    """
    The reserved extension subheader for NITF version 2.0 - see standards
    document MIL-STD-2500A for more information.
    """

    Security = _NITFElementDescriptor(
        'Security', True, NITFSecurityTags0, default_args={},
        docstring='The security tags.')  # type: NITFSecurityTags0
