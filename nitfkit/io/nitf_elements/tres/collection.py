"""
Budgeted decoding of TRE areas, and the merge of decoded TREs into a segment.

A TRE area is a run of records, each a six character tag, a five digit length
and that many payload bytes. The declared length of the area is a budget which
the records must exhaust exactly.
"""

__classification__ = "UNCLASSIFIED"

import logging
from typing import Callable, Optional, Union

from nitfkit.io.base import FormatError, ParseDiagnostics
from nitfkit.io.cursor import FieldCursor
from ..base import TRE, UnknownTRE, TREList
from .registration import decode_tre

logger = logging.getLogger(__name__)

_TAG_LEN = 6
_EL_LEN = 5


class TRESource(object):
    """
    The names of the header areas (and data extension) from which TREs are read.
    """

    FILE_HEADER_USER_DATA = 'file header user defined data'
    FILE_HEADER_EXTENDED_DATA = 'file header extended data'
    IMAGE_USER_DATA = 'image user defined data'
    IMAGE_EXTENDED_DATA = 'image extended subheader data'
    GRAPHIC_EXTENDED_DATA = 'graphic extended subheader data'
    SYMBOL_EXTENDED_DATA = 'symbol extended subheader data'
    LABEL_EXTENDED_DATA = 'label extended subheader data'
    TEXT_EXTENDED_DATA = 'text extended subheader data'
    TRE_OVERFLOW = 'TRE overflow'
    values = (
        FILE_HEADER_USER_DATA, FILE_HEADER_EXTENDED_DATA,
        IMAGE_USER_DATA, IMAGE_EXTENDED_DATA, GRAPHIC_EXTENDED_DATA,
        SYMBOL_EXTENDED_DATA, LABEL_EXTENDED_DATA, TEXT_EXTENDED_DATA,
        TRE_OVERFLOW)


class TRECollector(object):
    """
    Decodes TRE areas against a length budget, and merges the decoded TREs into
    the TRE mapping of a segment. Recoverable problems are recorded in the
    associated :class:`ParseDiagnostics`.
    """

    __slots__ = ('_decoder', '_diagnostics')

    def __init__(
            self,
            decoder: Optional[Callable[[str, bytes], Optional[TRE]]] = None,
            diagnostics: Optional[ParseDiagnostics] = None):
        """

        Parameters
        ----------
        decoder : None|callable
            Called as `decoder(tag, payload)`, returning the decoded TRE or `None`
            if the tag is not known. Defaults to the TRE registry.
        diagnostics : None|ParseDiagnostics
        """

        self._decoder = decode_tre if decoder is None else decoder
        if not callable(self._decoder):
            raise TypeError('decoder must be callable')
        self._diagnostics = ParseDiagnostics() if diagnostics is None else diagnostics

    @property
    def diagnostics(self) -> ParseDiagnostics:
        """
        ParseDiagnostics: The collection of recoverable inconsistencies.
        """

        return self._diagnostics

    def decode(self, tag: str, payload: bytes, source: Optional[str] = None) -> TRE:
        """
        Decode a single TRE payload, falling back to raw bytes.

        Parameters
        ----------
        tag : str
        payload : bytes
        source : None|str

        Returns
        -------
        TRE
        """

        try:
            tre = self._decoder(tag, payload)
        except Exception as e:
            self._diagnostics.report(
                'Retaining TRE {} as raw bytes, because decoding failed '
                'with exception\n\t{}'.format(tag, e), source=source, tag=tag)
            return UnknownTRE(tag, payload)

        if tre is None:
            logger.debug('No decoder registered for TRE {}'.format(tag))
            return UnknownTRE(tag, payload)
        if not isinstance(tre, TRE):
            raise TypeError(
                'TRE decoder returned type {} for tag {}'.format(type(tre), tag))

        decoded = getattr(tre, 'decoded_length', tre.EL)
        if decoded > len(payload):
            self._diagnostics.report(
                'Retaining TRE {} as raw bytes, because the decoder consumed {} '
                'bytes of a {} byte payload'.format(tag, decoded, len(payload)),
                source=source, tag=tag)
            return UnknownTRE(tag, payload)
        elif decoded < len(payload):
            self._diagnostics.report(
                'TRE {} decoder consumed {} bytes of a {} byte payload, the '
                'remaining bytes are retained uninterpreted'.format(tag, decoded, len(payload)),
                source=source, tag=tag)
        return tre

    def parse_tres(self, cursor: FieldCursor, length: int, source: Optional[str] = None) -> TREList:
        """
        Read TREs from the cursor until exactly `length` bytes are consumed.

        Parameters
        ----------
        cursor : FieldCursor
        length : int
            The TRE area budget in bytes.
        source : None|str
            The TRE source, see :class:`TRESource`.

        Returns
        -------
        TREList
        """

        if length < 0:
            raise FormatError(
                'Negative TRE area length {}'.format(length), offset=cursor.offset)

        area = cursor.window(length, name=source)
        tres = []
        while area.remaining > 0:
            if area.remaining < _TAG_LEN + _EL_LEN:
                raise FormatError(
                    'TRE header requires {} bytes, but only {} bytes remain of the '
                    '{} byte TRE area'.format(_TAG_LEN + _EL_LEN, area.remaining, length),
                    field='CETAG', offset=area.offset)
            tag = area.read_text(_TAG_LEN, name='CETAG')
            el_offset = area.offset
            el = area.read_integer(_EL_LEN, name='CEL')
            if el > area.remaining:
                raise FormatError(
                    'TRE {} declares length {}, but only {} bytes remain of the '
                    '{} byte TRE area'.format(tag, el, area.remaining, length),
                    field='CEL', offset=el_offset)
            payload = area.read_bytes(el, name=tag)
            tres.append(self.decode(tag, payload, source=source))
        return TREList(tres=tres)

    def merge(self, target: dict, tres: Union[TREList, list, tuple], source: Optional[str] = None) -> None:
        """
        Merge the TREs into the target mapping of tag to TRE. A repeated tag
        replaces the earlier TRE, and is recorded as an inconsistency.

        Parameters
        ----------
        target : dict
        tres : TREList|List[TRE]|Tuple[TRE, ...]
        source : None|str
        """

        if isinstance(tres, TREList):
            tres = tres.tres
        for tre in tres:
            if tre.TAG in target:
                self._diagnostics.report(
                    'TRE {} is repeated, and the later instance replaces the '
                    'earlier'.format(tre.TAG), source=source, tag=tre.TAG)
            target[tre.TAG] = tre
