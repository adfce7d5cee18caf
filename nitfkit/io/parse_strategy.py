"""
The parse strategies, which decide per segment kind what is retained as a NITF
file is parsed, and accumulate the decoded content of a single parse.

A parse strategy is a builder owned by exactly one parse. As the parse proceeds,
the file header and then each decoded segment is handed to the strategy in
on-disk order. When the parse completes, :meth:`NITFParseStrategy.build`
produces the immutable :class:`NITFParseResult`.
"""

__classification__ = "UNCLASSIFIED"

import logging
from collections import OrderedDict
from io import BytesIO
from typing import Callable, Dict, List, Optional, Tuple

from nitfkit.io.base import ParseDiagnostics, MetadataInconsistency
from nitfkit.io.cursor import FieldCursor
from nitfkit.io.nitf_elements.base import TRE, TREList, NITFSegmentHeader
from nitfkit.io.nitf_elements.tres.collection import TRECollector

logger = logging.getLogger(__name__)


RETAIN_DATA = 'retain_data'
"""
Retain both the segment header and the segment data bytes.
"""

RETAIN_HEADER = 'retain_header'
"""
Retain the segment header, skipping the segment data after length accounting.
"""

SKIP = 'skip'
"""
Neither decode nor retain the segment, skipping it using the declared sizes.
"""

_RETENTION_VALUES = (RETAIN_DATA, RETAIN_HEADER, SKIP)

SEGMENT_KINDS = ('image', 'graphics', 'symbol', 'label', 'text', 'des', 'res')
"""
The segment kind names, in on-disk order. Graphics segments only occur in NITF
2.1, and symbol and label segments only occur in NITF 2.0.
"""


def _validate_kind(kind):
    if kind not in SEGMENT_KINDS:
        raise KeyError('Unknown segment kind {}, must be one of {}'.format(kind, SEGMENT_KINDS))


def _validate_retention(kind, value):
    if value not in _RETENTION_VALUES:
        raise ValueError(
            'Got retention {} for segment kind {}, which must be one of '
            '{}'.format(value, kind, _RETENTION_VALUES))
    return value


class NITFParseResult(object):
    """
    The immutable result of parsing a NITF file. The segment headers are frozen,
    and every sequence is a tuple in on-disk order.
    """

    __slots__ = ('_nitf_header', '_headers', '_data', '_retention', '_diagnostics')

    def __init__(self, nitf_header, headers, data, retention, diagnostics):
        """

        Parameters
        ----------
        nitf_header : nitfkit.io.nitf_elements.nitf_head.NITFHeader|nitfkit.io.nitf_elements.nitf_head.NITFHeader0
        headers : Dict[str, Tuple[NITFSegmentHeader, ...]]
        data : Dict[str, Tuple[bytes, ...]]
        retention : Dict[str, str]
        diagnostics : Tuple[MetadataInconsistency, ...]
        """

        object.__setattr__(self, '_nitf_header', nitf_header)
        object.__setattr__(self, '_headers', {kind: tuple(headers.get(kind, ())) for kind in SEGMENT_KINDS})
        object.__setattr__(self, '_data', {kind: tuple(data.get(kind, ())) for kind in SEGMENT_KINDS})
        object.__setattr__(self, '_retention', {kind: retention[kind] for kind in SEGMENT_KINDS})
        object.__setattr__(self, '_diagnostics', tuple(diagnostics))

    def __setattr__(self, key, value):
        raise AttributeError('NITFParseResult is immutable')

    @property
    def nitf_header(self):
        """
        NITFHeader|NITFHeader0: The file header.
        """

        return self._nitf_header

    @property
    def diagnostics(self):
        # type: () -> Tuple[MetadataInconsistency, ...]
        """
        Tuple[MetadataInconsistency, ...]: The recoverable inconsistencies found
        during the parse.
        """

        return self._diagnostics

    def retention(self, kind):
        """
        Get the retention used for the given segment kind.

        Parameters
        ----------
        kind : str

        Returns
        -------
        str
        """

        _validate_kind(kind)
        return self._retention[kind]

    def retains_data(self, kind):
        """
        Were the data bytes retained for the given segment kind?

        Parameters
        ----------
        kind : str

        Returns
        -------
        bool
        """

        return self.retention(kind) == RETAIN_DATA

    def segment_headers(self, kind):
        # type: (str) -> Tuple[NITFSegmentHeader, ...]
        """
        Get the retained headers for the given segment kind.

        Parameters
        ----------
        kind : str

        Returns
        -------
        Tuple[NITFSegmentHeader, ...]
        """

        _validate_kind(kind)
        return self._headers[kind]

    def segment_data(self, kind):
        # type: (str) -> Tuple[bytes, ...]
        """
        Get the retained data blocks for the given segment kind. This is empty
        unless the data was retained.

        Parameters
        ----------
        kind : str

        Returns
        -------
        Tuple[bytes, ...]
        """

        _validate_kind(kind)
        return self._data[kind]

    def data_source(self, kind, index):
        """
        Construct a new seekable byte source over the retained data of the given
        segment. Each call provides an independent source.

        Parameters
        ----------
        kind : str
        index : int

        Returns
        -------
        None|BytesIO
            `None` if the data for this kind was not retained.
        """

        if not self.retains_data(kind):
            return None
        return BytesIO(self._data[kind][index])

    @property
    def image_segment_headers(self):
        return self._headers['image']

    @property
    def image_segment_data(self):
        return self._data['image']

    @property
    def graphics_segment_headers(self):
        return self._headers['graphics']

    @property
    def graphics_segment_data(self):
        return self._data['graphics']

    @property
    def symbol_segment_headers(self):
        return self._headers['symbol']

    @property
    def symbol_segment_data(self):
        return self._data['symbol']

    @property
    def label_segment_headers(self):
        return self._headers['label']

    @property
    def label_segment_data(self):
        return self._data['label']

    @property
    def text_segment_headers(self):
        return self._headers['text']

    @property
    def text_segment_data(self):
        return self._data['text']

    @property
    def des_segment_headers(self):
        return self._headers['des']

    @property
    def des_segment_data(self):
        return self._data['des']

    @property
    def res_segment_headers(self):
        return self._headers['res']

    @property
    def res_segment_data(self):
        return self._data['res']

    def get_headers_json(self):
        """
        Get a json (i.e. dict) representation of the NITF header elements.

        Returns
        -------
        dict
        """

        out = OrderedDict([('header', self._nitf_header.to_json()), ])
        for kind in SEGMENT_KINDS:
            if len(self._headers[kind]) > 0:
                out['{}_subheaders'.format(kind)] = [entry.to_json() for entry in self._headers[kind]]
        return out


class NITFParseStrategy(object):
    """
    The base parse strategy, which retains the header and data of every segment.
    Extensions decide the retention per segment kind by overriding
    :meth:`retention`.
    """

    def __init__(self, tre_decoder=None):
        # type: (Optional[Callable[[str, bytes], Optional[TRE]]]) -> None
        """

        Parameters
        ----------
        tre_decoder : None|callable
            The TRE decoder, called as `tre_decoder(tag, payload)` and returning
            the decoded TRE or `None`. Defaults to the TRE registry.
        """

        self._diagnostics = ParseDiagnostics()
        self._tre_handler = TRECollector(decoder=tre_decoder, diagnostics=self._diagnostics)
        self._nitf_header = None
        self._headers = {kind: [] for kind in SEGMENT_KINDS}  # type: Dict[str, List[NITFSegmentHeader]]
        self._data = {kind: [] for kind in SEGMENT_KINDS}  # type: Dict[str, List[bytes]]
        self._result = None  # type: Optional[NITFParseResult]

    @property
    def tre_handler(self):
        """
        TRECollector: The TRE handler for this parse.
        """

        return self._tre_handler

    @property
    def diagnostics(self):
        """
        ParseDiagnostics: The recoverable inconsistencies recorded so far.
        """

        return self._diagnostics

    @property
    def nitf_header(self):
        """
        None|NITFHeader|NITFHeader0: The file header, once it is decoded.
        """

        return self._nitf_header

    @property
    def is_built(self):
        """
        bool: Has the result been built?
        """

        return self._result is not None

    def retention(self, kind):
        """
        The retention for the given segment kind.

        Parameters
        ----------
        kind : str

        Returns
        -------
        str
            One of `RETAIN_DATA`, `RETAIN_HEADER`, or `SKIP`.
        """

        _validate_kind(kind)
        return RETAIN_DATA

    def _check_open(self):
        if self._result is not None:
            raise ValueError(
                'The parse result for this {} has been built, and it can not be '
                'modified'.format(self.__class__.__name__))

    def report(self, message, source=None, tag=None):
        """
        Record a recoverable inconsistency.

        Parameters
        ----------
        message : str
        source : None|str
        tag : None|str

        Returns
        -------
        MetadataInconsistency
        """

        return self._diagnostics.report(message, source=source, tag=tag)

    def parse_tres(self, cursor, length, source=None):
        # type: (FieldCursor, int, Optional[str]) -> TREList
        """
        Decode a TRE area of the given length, using the TRE decoder of this strategy.

        Parameters
        ----------
        cursor : FieldCursor
        length : int
        source : None|str

        Returns
        -------
        TREList
        """

        return self._tre_handler.parse_tres(cursor, length, source)

    def set_nitf_header(self, header):
        """
        Set the file header, which happens exactly once per parse.

        Parameters
        ----------
        header : NITFHeader|NITFHeader0
        """

        self._check_open()
        if self._nitf_header is not None:
            raise ValueError('The file header has already been set, and parse strategies are single use')
        self._nitf_header = header

    def add_segment(self, kind, header, data=None):
        """
        Append a decoded segment. This must be called in on-disk order.

        Parameters
        ----------
        kind : str
        header : NITFSegmentHeader
        data : None|bytes
            The segment data, which is only kept when the data is retained for
            this kind.
        """

        self._check_open()
        retention = self.retention(kind)
        if retention == SKIP:
            raise ValueError('Segment kind {} is configured to be skipped'.format(kind))
        if not isinstance(header, NITFSegmentHeader):
            raise TypeError('header must be a NITFSegmentHeader, got {}'.format(type(header)))

        self._headers[kind].append(header)
        if retention == RETAIN_DATA:
            if not isinstance(data, bytes):
                raise TypeError('The data for segment kind {} is retained, and bytes are required'.format(kind))
            self._data[kind].append(data)

    def segment_headers(self, kind):
        """
        Get the headers added so far for the given kind.

        Parameters
        ----------
        kind : str

        Returns
        -------
        Tuple[NITFSegmentHeader, ...]
        """

        _validate_kind(kind)
        return tuple(self._headers[kind])

    def build(self):
        """
        Freeze everything accumulated, and produce the parse result. Repeated
        calls return the same result.

        Returns
        -------
        NITFParseResult
        """

        if self._result is not None:
            return self._result
        if self._nitf_header is None:
            raise ValueError('The file header has not been set')

        self._nitf_header.freeze()
        for kind in SEGMENT_KINDS:
            for header in self._headers[kind]:
                header.freeze()
        retention = {kind: self.retention(kind) for kind in SEGMENT_KINDS}
        self._result = NITFParseResult(
            self._nitf_header, self._headers, self._data, retention, self._diagnostics.as_tuple())
        return self._result


class SlottedParseStrategy(NITFParseStrategy):
    """
    A fully configurable parse strategy, with the retention given per segment
    kind. Kinds not specified use the `default` retention.
    """

    def __init__(self, tre_decoder=None, default=RETAIN_HEADER, **retention):
        """

        Parameters
        ----------
        tre_decoder : None|callable
        default : str
            The retention for any kind not specified.
        retention
            The retention per segment kind, for example
            :code:`SlottedParseStrategy(image=RETAIN_DATA, des=SKIP)`.
        """

        _validate_retention('default', default)
        for kind in retention:
            _validate_kind(kind)
        self._retention = {
            kind: _validate_retention(kind, retention.get(kind, default)) for kind in SEGMENT_KINDS}
        super(SlottedParseStrategy, self).__init__(tre_decoder=tre_decoder)

    def retention(self, kind):
        _validate_kind(kind)
        return self._retention[kind]


class AllDataParseStrategy(SlottedParseStrategy):
    """
    Retain the header and data of every segment.
    """

    def __init__(self, tre_decoder=None):
        super(AllDataParseStrategy, self).__init__(tre_decoder=tre_decoder, default=RETAIN_DATA)


class HeaderOnlyParseStrategy(SlottedParseStrategy):
    """
    Retain every header, and no segment data.
    """

    def __init__(self, tre_decoder=None):
        super(HeaderOnlyParseStrategy, self).__init__(tre_decoder=tre_decoder, default=RETAIN_HEADER)


class ImageDataParseStrategy(SlottedParseStrategy):
    """
    Retain every header, and the data of the image segments only.
    """

    def __init__(self, tre_decoder=None):
        super(ImageDataParseStrategy, self).__init__(
            tre_decoder=tre_decoder, default=RETAIN_HEADER, image=RETAIN_DATA)
