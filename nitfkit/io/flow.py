"""
The post-parse consumption of the segments of a NITF file.

:class:`NITFSegmentsFlow` hands the already decoded segments of a
:class:`NITFParseResult` to caller supplied handlers, in on-disk order. Each
method returns the flow, so that traversals may be chained. A new byte source is
constructed over the retained data for each handler call, so traversals never
share state, and may be repeated.

Examples
--------
.. code-block:: python

    from nitfkit.io.flow import open_nitf

    images = []
    open_nitf('example.ntf') \\
        .file_header(lambda header: print(header.FTITLE)) \\
        .for_each_image(lambda header, source: images.append((header.identifier, source.read())))
"""

__classification__ = "UNCLASSIFIED"

import logging
from typing import Callable, BinaryIO, Optional, Union

from nitfkit.io.nitf import parse_nitf
from nitfkit.io.parse_strategy import NITFParseResult, NITFParseStrategy

logger = logging.getLogger(__name__)


class NITFSegmentsFlow(object):
    """
    Fluent, chainable, consumption of the segments of a parsed NITF file.
    """

    __slots__ = ('_result', )

    def __init__(self, parse_result: NITFParseResult):
        """

        Parameters
        ----------
        parse_result : NITFParseResult
        """

        if not isinstance(parse_result, NITFParseResult):
            raise TypeError(
                'parse_result must be a NITFParseResult, got type {}'.format(type(parse_result)))
        self._result = parse_result

    @property
    def result(self) -> NITFParseResult:
        """
        NITFParseResult: The parse result.
        """

        return self._result

    @property
    def diagnostics(self):
        """
        Tuple[nitfkit.io.base.MetadataInconsistency, ...]: The recoverable
        inconsistencies found during the parse.
        """

        return self._result.diagnostics

    def file_header(self, handler: Callable) -> 'NITFSegmentsFlow':
        """
        Pass the file header to the handler.

        Parameters
        ----------
        handler : callable
            Called once, as `handler(header)`.

        Returns
        -------
        NITFSegmentsFlow
        """

        handler(self._result.nitf_header)
        return self

    def _for_each_with_data(self, kind, handler):
        for index, header in enumerate(self._result.segment_headers(kind)):
            handler(header, self._result.data_source(kind, index))
        return self

    def _for_each_header(self, kind, handler):
        for header in self._result.segment_headers(kind):
            handler(header)
        return self

    def for_each_image(self, handler: Callable) -> 'NITFSegmentsFlow':
        """
        Pass each image segment to the handler, in on-disk order.

        Parameters
        ----------
        handler : callable
            Called as `handler(header, source)`, where `source` is a new
            :class:`io.BytesIO` over the image data, or `None` if the image data
            was not retained.

        Returns
        -------
        NITFSegmentsFlow
        """

        return self._for_each_with_data('image', handler)

    def for_each_graphic(self, handler: Callable) -> 'NITFSegmentsFlow':
        """
        Pass each graphic segment to the handler, as `handler(header, source)`.
        See :meth:`for_each_image`.
        """

        return self._for_each_with_data('graphics', handler)

    def for_each_symbol(self, handler: Callable) -> 'NITFSegmentsFlow':
        """
        Pass each symbol segment to the handler, as `handler(header, source)`.
        See :meth:`for_each_image`.
        """

        return self._for_each_with_data('symbol', handler)

    def for_each_label(self, handler: Callable) -> 'NITFSegmentsFlow':
        """
        Pass each label segment to the handler, as `handler(header, source)`.
        See :meth:`for_each_image`.
        """

        return self._for_each_with_data('label', handler)

    def for_each_text(self, handler: Callable) -> 'NITFSegmentsFlow':
        """
        Pass each text segment to the handler, as `handler(header, source)`.
        See :meth:`for_each_image`.
        """

        return self._for_each_with_data('text', handler)

    def for_each_data_segment(self, handler: Callable) -> 'NITFSegmentsFlow':
        """
        Pass each data extension segment header to the handler, in on-disk order.

        Parameters
        ----------
        handler : callable
            Called as `handler(header)`.

        Returns
        -------
        NITFSegmentsFlow
        """

        return self._for_each_header('des', handler)

    def for_each_reserved_segment(self, handler: Callable) -> 'NITFSegmentsFlow':
        """
        Pass each reserved extension segment header to the handler, as `handler(header)`.
        """

        return self._for_each_header('res', handler)


def open_nitf(
        file_object: Union[str, bytes, BinaryIO],
        strategy: Optional[NITFParseStrategy] = None,
        lenient: bool = False) -> NITFSegmentsFlow:
    """
    Parse the given NITF file, and get the segment flow over the result.

    Parameters
    ----------
    file_object : str|bytes|BinaryIO
    strategy : None|NITFParseStrategy
    lenient : bool

    Returns
    -------
    NITFSegmentsFlow
    """

    return NITFSegmentsFlow(parse_nitf(file_object, strategy=strategy, lenient=lenient))
