"""
The error taxonomy and non-fatal diagnostics for NITF decoding.

Structural problems are always fatal to the current parse, since NITF header
fields are positionally dependent and a misread field desynchronizes every
subsequent read. Recoverable problems are collected as
:class:`MetadataInconsistency` instances in a :class:`ParseDiagnostics`
collection, which accompanies the successful parse result.
"""

__classification__ = "UNCLASSIFIED"

import logging
from typing import List, Optional, Tuple

from nitfkit.compliance import NITFError

logger = logging.getLogger(__name__)


class FormatError(NITFError):
    """
    Malformed or inconsistent bytes - wrong magic, a non-numeric integer field,
    an invalid enumerated code, an illegal variant combination, or a length
    budget overrun.
    """

    def __init__(self, message, field=None, offset=None, segment_kind=None, segment_index=None):
        self.message = message
        self.field = field
        self.offset = offset
        self.segment_kind = segment_kind
        self.segment_index = segment_index
        super(FormatError, self).__init__(message)

    def add_context(self, segment_kind: str, segment_index: Optional[int] = None) -> None:
        """
        Annotate the error with the segment being decoded, if not already set.

        Parameters
        ----------
        segment_kind : str
        segment_index : None|int
        """

        if self.segment_kind is None:
            self.segment_kind = segment_kind
            self.segment_index = segment_index

    def __str__(self):
        parts = []
        if self.segment_kind is not None:
            if self.segment_index is None:
                parts.append(self.segment_kind)
            else:
                parts.append('{} {}'.format(self.segment_kind, self.segment_index))
        if self.field is not None:
            parts.append('field {}'.format(self.field))
        if self.offset is not None:
            parts.append('offset {}'.format(self.offset))
        if len(parts) == 0:
            return self.message
        return '{} ({})'.format(self.message, ', '.join(parts))


class UnsupportedVariantError(NITFError):
    """
    A structurally valid but unhandled combination, for example an unknown
    file version. Fatal unless the parse was opened in lenient mode.
    """


class MetadataInconsistency(object):
    """
    A recoverable inconsistency discovered while decoding, such as a duplicated
    TRE tag or a TRE decoder which consumed fewer bytes than declared.
    """

    __slots__ = ('_message', '_source', '_tag')

    def __init__(self, message: str, source: Optional[str] = None, tag: Optional[str] = None):
        self._message = message
        self._source = source
        self._tag = tag

    @property
    def message(self) -> str:
        """
        str: The description of the inconsistency.
        """

        return self._message

    @property
    def source(self) -> Optional[str]:
        """
        None|str: Where the inconsistency was found, for example the TRE source.
        """

        return self._source

    @property
    def tag(self) -> Optional[str]:
        """
        None|str: The TRE tag involved, if any.
        """

        return self._tag

    def __eq__(self, other):
        if not isinstance(other, MetadataInconsistency):
            return NotImplemented
        return (self._message, self._source, self._tag) == (other._message, other._source, other._tag)

    def __hash__(self):
        return hash((self._message, self._source, self._tag))

    def __repr__(self):
        return 'MetadataInconsistency({!r}, source={!r}, tag={!r})'.format(
            self._message, self._source, self._tag)


class ParseDiagnostics(object):
    """
    Accumulates the non-fatal inconsistencies found during a single parse.
    """

    __slots__ = ('_entries', )

    def __init__(self):
        self._entries = []  # type: List[MetadataInconsistency]

    def report(self, message: str, source: Optional[str] = None, tag: Optional[str] = None) -> MetadataInconsistency:
        """
        Record and log an inconsistency.

        Parameters
        ----------
        message : str
        source : None|str
        tag : None|str

        Returns
        -------
        MetadataInconsistency
        """

        entry = MetadataInconsistency(message, source=source, tag=tag)
        logger.warning(message)
        self._entries.append(entry)
        return entry

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __getitem__(self, item):
        return self._entries[item]

    def as_tuple(self) -> Tuple[MetadataInconsistency, ...]:
        """
        Tuple[MetadataInconsistency, ...]: the entries recorded so far.
        """

        return tuple(self._entries)
