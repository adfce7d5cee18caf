"""
The sequential field reader used by every header decoder.

NITF headers are sequences of fixed width fields. Text fields are space padded,
and numeric fields are zero padded ASCII digits. The cursor reads these
strictly in order, and fails fast on truncated or malformed content.
"""

__classification__ = "UNCLASSIFIED"

import logging
import os
from typing import Union, BinaryIO, Optional

from nitfkit.io.base import FormatError
from nitfkit.io.utils import is_file_like

logger = logging.getLogger(__name__)

_DIGITS = frozenset(b'0123456789')
_SIGNS = frozenset(b'+-')


class FieldCursor(object):
    """
    Sequential reader over a bytes buffer or a binary file object.
    """

    __slots__ = (
        '_buffer', '_file_object', '_position', '_base_offset', '_size',
        '_file_type', '_encoding')

    def __init__(
            self,
            source: Union[bytes, bytearray, memoryview, BinaryIO],
            file_type: Optional[str] = None,
            encoding: str = 'latin-1',
            base_offset: int = 0):
        """

        Parameters
        ----------
        source : bytes|bytearray|memoryview|BinaryIO
            The bytes to read, or a file like object opened in binary mode and
            positioned at the start of the content.
        file_type : None|str
            The file type and version context, e.g. `NITF02.10`.
        encoding : str
            The encoding used for text fields.
        base_offset : int
            The absolute offset of the beginning of `source`, only used for
            error reporting.
        """

        self._buffer = None
        self._file_object = None
        self._position = 0
        self._base_offset = int(base_offset)
        self._size = None
        self._file_type = file_type
        self._encoding = encoding

        if isinstance(source, (bytes, bytearray, memoryview)):
            self._buffer = bytes(source)
            self._size = len(self._buffer)
        elif is_file_like(source):
            self._file_object = source
            self._base_offset += source.tell()
            current = source.tell()
            source.seek(0, os.SEEK_END)
            self._size = source.tell() - current
            source.seek(current, os.SEEK_SET)
        else:
            raise TypeError(
                'source must be a bytes object or a binary file like object, '
                'got type {}'.format(type(source)))

    @property
    def file_type(self) -> Optional[str]:
        """
        None|str: The active file type and version context, e.g. `NITF02.10`.
        """

        return self._file_type

    @file_type.setter
    def file_type(self, value):
        self._file_type = value

    @property
    def encoding(self) -> str:
        """
        str: The encoding used for text fields.
        """

        return self._encoding

    @property
    def remaining(self) -> int:
        """
        int: The number of bytes which remain to be read.
        """

        return self._size - self._position

    def tell(self) -> int:
        """
        The number of bytes consumed so far.

        Returns
        -------
        int
        """

        return self._position

    @property
    def offset(self) -> int:
        """
        int: The absolute offset of the next byte to be read.
        """

        return self._base_offset + self._position

    def _fetch(self, length: int, name: Optional[str]) -> bytes:
        if length < 0:
            raise ValueError('length must be non-negative, got {}'.format(length))
        if length > self.remaining:
            raise FormatError(
                'Truncated input, requested {} bytes with only {} remaining'.format(length, self.remaining),
                field=name, offset=self.offset)
        if self._buffer is not None:
            out = self._buffer[self._position:self._position + length]
        else:
            out = self._file_object.read(length)
            if len(out) != length:
                raise FormatError(
                    'Truncated input, requested {} bytes and read {}'.format(length, len(out)),
                    field=name, offset=self.offset)
        self._position += length
        return out

    def read_bytes(self, length: int, name: Optional[str] = None) -> bytes:
        """
        Read exactly `length` raw bytes.

        Parameters
        ----------
        length : int
        name : None|str
            The field name, for error reporting.

        Returns
        -------
        bytes
        """

        return self._fetch(length, name)

    def read_text(self, length: int, name: Optional[str] = None) -> str:
        """
        Read a fixed width text field, with trailing padding removed.

        Parameters
        ----------
        length : int
        name : None|str

        Returns
        -------
        str
        """

        start = self.offset
        value = self._fetch(length, name)
        try:
            return value.decode(self._encoding).rstrip(' ')
        except UnicodeDecodeError as e:
            raise FormatError(
                'Failed decoding text field value {!r}: {}'.format(value, e),
                field=name, offset=start)

    def read_integer(self, length: int, name: Optional[str] = None, signed: bool = False) -> int:
        """
        Read a fixed width field of ASCII digits as an integer.

        Parameters
        ----------
        length : int
        name : None|str
        signed : bool
            Permit a single leading `+` or `-`.

        Returns
        -------
        int
        """

        start = self.offset
        value = self._fetch(length, name)
        digits = value
        if signed and len(value) > 1 and value[0] in _SIGNS:
            digits = value[1:]
        if len(digits) == 0 or any(entry not in _DIGITS for entry in digits):
            raise FormatError(
                'Expected {} ASCII digits, got {!r}'.format(length, value),
                field=name, offset=start)
        return int(value)

    def skip(self, length: int, name: Optional[str] = None) -> None:
        """
        Advance past `length` bytes.

        Parameters
        ----------
        length : int
        name : None|str
        """

        if length < 0:
            raise ValueError('length must be non-negative, got {}'.format(length))
        if length > self.remaining:
            raise FormatError(
                'Truncated input, cannot skip {} bytes with only {} remaining'.format(length, self.remaining),
                field=name, offset=self.offset)
        if self._buffer is None:
            self._file_object.seek(length, os.SEEK_CUR)
        self._position += length

    def verify_magic(self, token: Union[str, bytes], name: Optional[str] = None) -> str:
        """
        Verify that the next bytes match the expected magic token.

        Parameters
        ----------
        token : str|bytes
        name : None|str

        Returns
        -------
        str
            The token which was read.
        """

        if isinstance(token, str):
            token = token.encode(self._encoding)
        start = self.offset
        value = self._fetch(len(token), name)
        if value != token:
            raise FormatError(
                'Wrong magic, expected {!r} and got {!r}'.format(token, value),
                field=name, offset=start)
        return value.decode(self._encoding)

    def window(self, length: int, name: Optional[str] = None) -> 'FieldCursor':
        """
        Get a cursor over exactly the next `length` bytes, and advance past them.

        Parameters
        ----------
        length : int
        name : None|str

        Returns
        -------
        FieldCursor
        """

        start = self.offset
        value = self._fetch(length, name)
        return FieldCursor(value, file_type=self._file_type, encoding=self._encoding, base_offset=start)
