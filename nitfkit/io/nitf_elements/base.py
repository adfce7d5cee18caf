# -*- coding: utf-8 -*-
"""
Base NITF Header functionality definition.

Every NITF header kind is described by a per-kind field table - the ordered
field names in `_ordering`, the serialized widths in `_lengths`, and a
descriptor per field which knows how to read that field from a
:class:`FieldCursor`. The shared :meth:`NITFElement.from_cursor` machinery
walks that table in on-wire order, and variant gated fields are handled by
overriding :meth:`NITFElement._parse_attribute`.
"""

import logging
from weakref import WeakKeyDictionary
from typing import Union, List, Tuple, Optional
from collections import OrderedDict
from types import MappingProxyType

import numpy

from nitfkit.compliance import bytes_to_string
from nitfkit.io.base import FormatError
from nitfkit.io.cursor import FieldCursor


__classification__ = "UNCLASSIFIED"

logger = logging.getLogger(__name__)


# Base NITF type

class BaseNITFElement(object):

    def __setattr__(self, key, value):
        if getattr(self, '_frozen', False):
            raise AttributeError(
                'Instance of {} is frozen, and attribute {} cannot be '
                'assigned'.format(self.__class__.__name__, key))
        object.__setattr__(self, key, value)

    @property
    def frozen(self):
        """
        bool: Has this element been frozen, prohibiting further modification?
        """

        return getattr(self, '_frozen', False)

    def freeze(self):
        """
        Make this element (and any child elements) read only.

        Returns
        -------
        None
        """

        object.__setattr__(self, '_frozen', True)

    @classmethod
    def minimum_length(cls):
        """
        The minimum size in bytes that takes to write this header element.

        Returns
        -------
        int
        """

        raise NotImplementedError

    def get_bytes_length(self):
        """
        Get the length of the serialized bytes array

        Returns
        -------
        int
        """

        raise NotImplementedError

    def to_bytes(self):
        """
        Write the object to a properly packed str.

        Returns
        -------
        bytes
        """

        raise NotImplementedError

    @classmethod
    def from_cursor(cls, cursor, tre_handler=None, **kwargs):
        """
        Read the element from the cursor, consuming exactly its serialized length.

        Parameters
        ----------
        cursor : FieldCursor
        tre_handler : None|nitfkit.io.nitf_elements.tres.collection.TRECollector
            The handler for decoding and merging any TREs encountered.
        kwargs
            Element specific parsing arguments.

        Returns
        -------
        BaseNITFElement
        """

        raise NotImplementedError

    @classmethod
    def from_bytes(cls, value, start, **kwargs):
        """

        Parameters
        ----------
        value: bytes
            the header bytes to scrape
        start : int
            the beginning location in the bytes
        kwargs
            Passed through to :meth:`from_cursor`.

        Returns
        -------
        BaseNITFElement
        """

        cursor = FieldCursor(value[start:], base_offset=start)
        return cls.from_cursor(cursor, **kwargs)

    def to_json(self):
        """
        Serialize element to a json representation. This is intended to allow
        a simple presentation of the element.

        Returns
        -------
        dict
        """

        raise NotImplementedError


def _freeze_value(value):
    if isinstance(value, BaseNITFElement):
        value.freeze()
    elif isinstance(value, (list, tuple)):
        for entry in value:
            _freeze_value(entry)


# Basic input and output interpreters

def _get_bytes(val, length):
    if val is None:
        return b''
    elif isinstance(val, int):
        frm_str = '{0:0' + str(length) + 'd}'
        return frm_str.format(val).encode('utf-8')
    elif isinstance(val, str):
        frm_str = '{0:' + str(length) + 's}'
        return frm_str.format(val).encode('latin-1')
    elif isinstance(val, bytes):
        if len(val) >= length:
            return val[:length]
        else:
            return val + b'\x00' * (length - len(val))
    else:
        raise TypeError('Unhandled type {}'.format(type(val)))


def _parse_int(val, length, default, name, instance):
    """
    Parse and/or validate the integer input.

    Parameters
    ----------
    val : None|int|bytes
    length : int
    default : None|int

    Returns
    -------
    int
    """

    if val is None:
        return default
    else:
        val = int(val)

    if -10**(length-1) < val < 10**length:
        return val
    raise ValueError(
        'Integer {} cannot be rendered as a string of {} characters for '
        'attribute {} of class {}'.format(val, length, name, instance.__class__.__name__))


def _parse_str(val, length, default, name, instance):
    """
    Parse and/or validate the string input.

    Parameters
    ----------
    val : None|str|bytes
    length : int
    default : None|str

    Returns
    -------
    str
    """

    if val is None:
        return default

    if isinstance(val, bytes):
        val = bytes_to_string(val, encoding='latin-1')
    elif not isinstance(val, str):
        val = str(val)

    val = val.rstrip(' ')
    if len(val) <= length:
        return val
    else:
        logger.warning(
            'Got string input value of length {} for attribute {} of class {}, '
            'which is longer than the allowed length {}, so '
            'truncating'.format(len(val), name, instance.__class__.__name__, length))
        return val[:length]


def _parse_bytes(val, length, default, name, instance):
    """
    Validate the raw/bytes input.

    Parameters
    ----------
    val : None|bytes
    length : int
    default : None|bytes

    Returns
    -------
    bytes
    """

    if val is None:
        return default
    elif isinstance(val, bytes):
        if len(val) <= length:
            return val
        else:
            logger.warning(
                'Got bytes input value of length {} for attribute {} of class {}, '
                'which is longer than the allowed length {}, so '
                'truncating'.format(len(val), name, instance.__class__.__name__, length))
            return val[:length]
    else:
        raise TypeError(
            'Expected type bytes for attribute {} of class {}, '
            'and got {}'.format(name, instance.__class__.__name__, type(val)))


def _parse_nitf_element(val, nitf_type, default_args, name, instance):
    if not issubclass(nitf_type, BaseNITFElement):
        raise TypeError(
            'nitf_type for attribute {} of class {} must be a subclass of '
            'BaseNITFElement'.format(name, nitf_type.__class__.__name__))

    if val is None:
        if default_args is None:
            return None
        return nitf_type(**default_args)
    elif isinstance(val, bytes):
        return nitf_type.from_bytes(val, 0)
    elif isinstance(val, nitf_type):
        return val
    else:
        raise ValueError(
            'Attribute {} for class {} requires an input of type bytes or {}. '
            'Got {}'.format(name, instance.__class__.__name__, nitf_type, type(val)))


# NITF Descriptors

class _BasicDescriptor(object):
    """A descriptor object for reusable properties. Note that is is required that the calling instance is hashable."""
    _typ_string = None

    def __init__(self, name, required, length, docstring=''):
        self.data = WeakKeyDictionary()  # our instance reference dictionary
        # WeakDictionary use is subtle here. A reference to a particular class instance in this dictionary
        # should not be the thing keeping a particular class instance from being destroyed.
        self.name = name
        self.required = required
        self.length = length

        self.__doc__ = docstring
        self._format_docstring()

    def _format_docstring(self):
        docstring = self.__doc__
        if docstring is None:
            docstring = ''
        if (self._typ_string is not None) and (not docstring.startswith(self._typ_string)):
            docstring = '{} {}'.format(self._typ_string, docstring)

        suff = self._docstring_suffix()
        if suff is not None:
            docstring = '{} {}'.format(docstring, suff)

        if not self.required:
            docstring = '{} {}'.format(docstring, ' **Conditional.**')
        self.__doc__ = docstring

    def _docstring_suffix(self):
        return None

    def _get_default(self, instance):
        return None

    def read(self, cursor, tre_handler=None):
        """
        Read the value for this field from the cursor.

        Parameters
        ----------
        cursor : FieldCursor
        tre_handler : None|nitfkit.io.nitf_elements.tres.collection.TRECollector

        Returns
        -------
        object
        """

        raise NotImplementedError

    def __get__(self, instance, owner):
        """The getter.

        Parameters
        ----------
        instance : object
            the calling class instance
        owner : object
            the type of the class - that is, the actual object to which this descriptor is assigned

        Returns
        -------
        object
            the return value
        """

        if instance is None:
            # this has been access on the class, so return the class
            return self

        fetched = self.data.get(instance, None)
        if fetched is not None or not self.required:
            return fetched
        else:
            msg = 'Required field {} of class {} is not populated.'.format(self.name, instance.__class__.__name__)
            raise AttributeError(msg)

    def __set__(self, instance, value):
        """The setter method.

        Parameters
        ----------
        instance : object
            the calling class instance
        value
            the value to use in setting - the type depends of the specific extension of this base class

        Returns
        -------
        bool
            this base class, and only this base class, handles the required compliance and None behavior and has
            a return. This returns True if this the setting value was None, and False otherwise.
        """

        if getattr(instance, '_frozen', False):
            raise AttributeError(
                'Instance of {} is frozen, and attribute {} cannot be '
                'assigned'.format(instance.__class__.__name__, self.name))

        # NOTE: This is intended to handle this case for every extension of this class. Hence the boolean return,
        # which extensions SHOULD NOT implement. This is merely to follow DRY principles.
        if value is None:
            default_value = self._get_default(instance)
            if default_value is not None:
                self.data[instance] = default_value
                return True
            elif self.required:
                raise ValueError(
                    'Attribute {} of class {} cannot be assigned None.'.format(self.name, instance.__class__.__name__))
            self.data[instance] = None
            return True
        # note that the remainder must be implemented in each extension
        return False  # this is probably a bad habit, but this returns something for convenience alone


class _StringDescriptor(_BasicDescriptor):
    """A descriptor for string type"""
    _typ_string = 'str:'

    def __init__(self, name, required, length, default_value='', docstring=None):
        self._default_value = default_value
        super(_StringDescriptor, self).__init__(
            name, required, length, docstring=docstring)

    def _get_default(self, instance):
        return self._default_value

    def _docstring_suffix(self):
        if self._default_value is not None and len(self._default_value) > 0:
            return ' Default value is :code:`{}`.'.format(self._default_value)

    def read(self, cursor, tre_handler=None):
        return cursor.read_text(self.length, name=self.name)

    def __set__(self, instance, value):
        if super(_StringDescriptor, self).__set__(instance, value):  # the None handler...kinda hacky
            return
        self.data[instance] = _parse_str(value, self.length, self._default_value, self.name, instance)


class _StringEnumDescriptor(_BasicDescriptor):
    """A descriptor for enumerated (specified) string type.
    **The valid entries are case-sensitive and should be stripped of white space on each end.**"""
    _typ_string = 'str:'

    def __init__(self, name, required, length, values, default_value=None, docstring=None):
        self.values = values
        self._default_value = default_value
        super(_StringEnumDescriptor, self).__init__(
            name, required, length, docstring=docstring)
        if (self._default_value is not None) and (self._default_value not in self.values):
            self._default_value = None

    def _get_default(self, instance):
        return self._default_value

    def _docstring_suffix(self):
        suff = ' Takes values in :code:`{}`.'.format(sorted(self.values))
        if self._default_value is not None and len(self._default_value) > 0:
            suff += ' Default value is :code:`{}`.'.format(self._default_value)
        return suff

    def read(self, cursor, tre_handler=None):
        start = cursor.offset
        value = cursor.read_text(self.length, name=self.name)
        if value not in self.values:
            raise FormatError(
                'Invalid code {!r}, must be one of {}'.format(value, sorted(self.values)),
                field=self.name, offset=start)
        return value

    def __set__(self, instance, value):
        if value is None:
            if self._default_value is not None:
                super(_StringEnumDescriptor, self).__set__(instance, self._default_value)
                self.data[instance] = self._default_value
            else:
                super(_StringEnumDescriptor, self).__set__(instance, value)
            return

        if super(_StringEnumDescriptor, self).__set__(instance, value):
            return
        val = _parse_str(value, self.length, self._default_value, self.name, instance)

        if val in self.values:
            self.data[instance] = val
        else:
            raise ValueError(
                'Attribute {} of class {} received {}, but values ARE REQUIRED to be '
                'one of {}.'.format(self.name, instance.__class__.__name__, value, sorted(self.values)))


class _MagicDescriptor(_BasicDescriptor):
    """A descriptor for the constant field which opens a header"""
    _typ_string = 'str:'

    def __init__(self, name, value, docstring=None):
        self.value = value
        super(_MagicDescriptor, self).__init__(
            name, True, len(value), docstring=docstring)

    def _docstring_suffix(self):
        return ' Always :code:`{}`.'.format(self.value)

    def read(self, cursor, tre_handler=None):
        return cursor.verify_magic(self.value, name=self.name)

    def __get__(self, instance, owner):
        if instance is None:
            return self
        return self.value

    def __set__(self, instance, value):
        if value is None:
            return
        value = _parse_str(value, self.length, None, self.name, instance)
        if value != self.value:
            raise ValueError(
                'Attribute {} of class {} must be {}, got {}'.format(
                    self.name, instance.__class__.__name__, self.value, value))


class _IntegerDescriptor(_BasicDescriptor):
    """A descriptor for integer type"""
    _typ_string = 'int:'

    def __init__(self, name, required, length, default_value=0, signed=False, docstring=None):
        self._default_value = default_value
        self.signed = signed
        super(_IntegerDescriptor, self).__init__(
            name, required, length, docstring=docstring)

    def _get_default(self, instance):
        return self._default_value

    def _docstring_suffix(self):
        if self._default_value is not None:
            return ' Default value is :code:`{}`.'.format(self._default_value)

    def read(self, cursor, tre_handler=None):
        return cursor.read_integer(self.length, name=self.name, signed=self.signed)

    def __set__(self, instance, value):
        if super(_IntegerDescriptor, self).__set__(instance, value):  # the None handler...kinda hacky
            return

        iv = _parse_int(value, self.length, self._default_value, self.name, instance)
        if iv < 0 and not self.signed:
            raise ValueError(
                'Attribute {} of class {} requires a non-negative value, '
                'got {}'.format(self.name, instance.__class__.__name__, iv))
        self.data[instance] = iv


class _RawDescriptor(_BasicDescriptor):
    """A descriptor for bytes type"""
    _typ_string = 'bytes:'

    def __init__(self, name, required, length, default_value=None, docstring=None):
        self._default_value = default_value
        super(_RawDescriptor, self).__init__(
            name, required, length, docstring=docstring)

    def _get_default(self, instance):
        return self._default_value

    def read(self, cursor, tre_handler=None):
        return cursor.read_bytes(self.length, name=self.name)

    def __set__(self, instance, value):
        if super(_RawDescriptor, self).__set__(instance, value):  # the None handler...kinda hacky
            return

        iv = _parse_bytes(value, self.length, self._default_value, self.name, instance)
        self.data[instance] = iv


class _NITFElementDescriptor(_BasicDescriptor):
    """A descriptor for properties of a specified type assumed to be an extension of BaseNITFElement"""

    def __init__(self, name, required, the_type, default_args=None, parse_args=None, docstring=None):
        self.the_type = the_type
        self._typ_string = the_type.__name__ + ':'
        self._default_args = default_args
        self._parse_args = {} if parse_args is None else parse_args
        super(_NITFElementDescriptor, self).__init__(name, required, None, docstring=docstring)

    def _get_default(self, instance):
        if self._default_args is not None:
            return self.the_type(**self._default_args)
        return None

    def read(self, cursor, tre_handler=None):
        return self.the_type.from_cursor(cursor, tre_handler=tre_handler, **self._parse_args)

    def __set__(self, instance, value):
        if super(_NITFElementDescriptor, self).__set__(instance, value):  # the None handler...kinda hacky
            return

        self.data[instance] = _parse_nitf_element(value, self.the_type, self._default_args, self.name, instance)


# Concrete NITF element types

class NITFElement(BaseNITFElement):
    _ordering = ()
    _lengths = {}

    def __init__(self, **kwargs):
        for fld in self._ordering:
            try:
                setattr(self, fld, kwargs.get(fld, None))
            except Exception:
                logger.critical('Failed setting attribute {} for class {}'.format(fld, self.__class__))
                raise

    def freeze(self):
        for fld in self._ordering:
            _freeze_value(getattr(self, fld, None))
        super(NITFElement, self).freeze()

    @classmethod
    def minimum_length(cls):
        """
        The minimum size in bytes that takes to write this header element.

        Returns
        -------
        int
        """

        return sum(cls._lengths.values())

    def _get_attribute_length(self, fld):
        if fld not in self._ordering:
            return 0

        if fld in self._lengths:
            # an unpopulated conditional field is absent on the wire
            return 0 if getattr(self, fld) is None else self._lengths[fld]
        else:
            val = getattr(self, fld)
            if val is None:
                return 0
            elif isinstance(val, BaseNITFElement):
                return val.get_bytes_length()
            else:
                raise TypeError(
                    'Unhandled type {} for attribute {} of '
                    'class {}'.format(type(val), fld, self.__class__.__name__))

    def _get_attribute_bytes(self, fld):
        if fld not in self._ordering:
            return b''

        val = getattr(self, fld)
        if isinstance(val, BaseNITFElement):
            return val.to_bytes()
        elif fld in self._lengths:
            return _get_bytes(val, self._lengths[fld])
        elif val is None:
            return b''
        else:
            raise ValueError(
                'Unhandled attribute {} for class {}'.format(fld, self.__class__.__name__))

    def get_bytes_length(self):
        """
        Get the length of the serialized bytes array

        Returns
        -------
        int
        """

        return sum(self._get_attribute_length(fld) for fld in self._ordering)

    def to_bytes(self):
        """
        Write the object to a properly packed str.

        Returns
        -------
        bytes
        """

        return b''.join(self._get_attribute_bytes(fld) for fld in self._ordering)

    @classmethod
    def _parse_attribute(cls, fields, attribute, cursor, tre_handler):
        """
        Read the given attribute from the cursor, in on-wire order.

        Parameters
        ----------
        fields : dict
            The attribute:value dictionary.
        attribute : str
            The attribute name.
        cursor : FieldCursor
            The cursor, positioned at the start of this attribute.
        tre_handler : None|nitfkit.io.nitf_elements.tres.collection.TRECollector

        Returns
        -------
        None
        """

        if attribute not in cls._ordering:
            raise ValueError('Unexpected attribute {}'.format(attribute))

        if attribute in fields:
            # already determined by a preceding variant gate
            return
        descriptor = getattr(cls, attribute, None)
        if isinstance(descriptor, _BasicDescriptor):
            fields[attribute] = descriptor.read(cursor, tre_handler=tre_handler)
        elif attribute in cls._lengths:
            fields[attribute] = cursor.read_text(cls._lengths[attribute], name=attribute)
        else:
            raise ValueError('Cannot parse attribute {} for class {}'.format(attribute, cls))

    @classmethod
    def _read_fields(cls, cursor, tre_handler):
        fields = OrderedDict()
        for fld in cls._ordering:
            cls._parse_attribute(fields, fld, cursor, tre_handler)
        return fields

    @classmethod
    def from_cursor(cls, cursor, tre_handler=None, **kwargs):
        return cls(**cls._read_fields(cursor, tre_handler))

    def to_json(self):
        out = OrderedDict()
        for fld in self._ordering:
            if self._get_attribute_length(fld) == 0:
                continue
            value = getattr(self, fld)
            if value is None:
                out[fld] = ''
            elif isinstance(value, (str, int, bytes)):
                out[fld] = value
            elif isinstance(value, BaseNITFElement):
                out[fld] = value.to_json()
            elif isinstance(value, numpy.ndarray):
                out[fld] = value.tolist()
            else:
                logger.error(
                    'Got unhandled type `{}` for json serialization for '
                    'attribute `{}` of class {}'.format(type(value), fld, self.__class__))
        return out


class NITFLoop(NITFElement):
    __slots__ = ('_values', )
    _ordering = ('values', )
    _child_class = None  # must be a subclass of NITFElement
    _count_size = 0  # type: int
    _count_name = None  # type: Optional[str]

    def __init__(self, values=None, **kwargs):
        if not issubclass(self._child_class, NITFElement):
            raise TypeError('_child_class for {} must be a subclass of NITFElement'.format(self.__class__.__name__))
        self._values = tuple()
        super(NITFLoop, self).__init__(values=values, **kwargs)

    def freeze(self):
        _freeze_value(self._values)
        BaseNITFElement.freeze(self)

    @property
    def values(self):  # type: () -> Tuple[_child_class, ...]
        return self._values

    @values.setter
    def values(self, value):
        if value is None:
            self._values = ()
            return
        if not isinstance(value, tuple):
            value = tuple(value)
        for i, entry in enumerate(value):
            if not isinstance(entry, self._child_class):
                raise TypeError(
                    'values must be of type {}, got entry {} of type {}'.format(self._child_class, i, type(entry)))
        self._values = value

    def __len__(self):
        return len(self._values)

    def __getitem__(self, item):  # type: (Union[int, slice]) -> Union[_child_class, List[_child_class]]
        return self._values[item]

    def get_bytes_length(self):
        return self._count_size + sum(entry.get_bytes_length() for entry in self._values)

    @classmethod
    def minimum_length(cls):
        return cls._count_size

    @classmethod
    def _parse_count(cls, cursor):
        return cursor.read_integer(cls._count_size, name=cls._count_name)

    @classmethod
    def from_cursor(cls, cursor, tre_handler=None, **kwargs):
        if not issubclass(cls._child_class, NITFElement):
            raise TypeError('_child_class for {} must be a subclass of NITFElement'.format(cls.__name__))

        count = cls._parse_count(cursor)
        if count == 0:
            return cls(values=None)

        values = [cls._child_class.from_cursor(cursor, tre_handler=tre_handler) for _ in range(count)]
        return cls(values=values)

    def _counts_bytes(self):
        frm_str = '{0:0'+str(self._count_size) + 'd}'
        return frm_str.format(len(self.values)).encode('utf-8')

    def to_bytes(self):
        return self._counts_bytes() + b''.join(entry.to_bytes() for entry in self._values)

    def to_json(self):
        return [entry.to_json() for entry in self._values]


class NITFLocation(NITFElement):
    """
    A location as a pair of signed row and column offsets, each five digits.
    """

    _ordering = ('ROW', 'COL')
    _lengths = {'ROW': 5, 'COL': 5}
    ROW = _IntegerDescriptor(
        'ROW', True, 5, default_value=0, signed=True,
        docstring='The row offset. Positive values are down.')  # type: int
    COL = _IntegerDescriptor(
        'COL', True, 5, default_value=0, signed=True,
        docstring='The column offset. Positive values are to the right.')  # type: int

    def __str__(self):
        return '({}, {})'.format(self.ROW, self.COL)

    def as_tuple(self):
        """
        Tuple[int, int]: The (row, column) pair.
        """

        return self.ROW, self.COL


class Unstructured(NITFElement):
    """
    A possible NITF element pattern which is largely unparsed -
    just a bytes array of a given length
    """

    __slots__ = ('_data', )
    _ordering = ('data', )
    _size_len = 1
    _size_name = None  # type: Optional[str]

    def __init__(self, data=None, **kwargs):
        self._data = None
        if not (isinstance(self._size_len, int) and self._size_len > 0):
            raise TypeError(
                'class variable _size_len for {} must be a positive '
                'integer'.format(self.__class__.__name__))
        super(Unstructured, self).__init__(data=data, **kwargs)

    @property
    def data(self):  # type: () -> Union[None, bytes, NITFElement]
        return self._data

    @data.setter
    def data(self, value):
        if value is None:
            self._data = None
            return

        if not isinstance(value, (bytes, NITFElement)):
            raise TypeError(
                'data requires bytes or NITFElement type. '
                'Got type {}'.format(type(value)))
        siz_lim = 10**self._size_len - 1
        if isinstance(value, bytes):
            len_cond = (len(value) > siz_lim)
        else:
            len_cond = value.get_bytes_length() > siz_lim
        if len_cond:
            raise ValueError('The provided data is longer than {}'.format(siz_lim))
        self._data = value
        self._populate_data()

    def _populate_data(self):
        """
        Populate the _data attribute from bytes to some other appropriate object.

        Returns
        -------
        None
        """

        pass

    @classmethod
    def minimum_length(cls):
        return cls._size_len

    def _get_attribute_bytes(self, attribute):
        if attribute == 'data':
            siz_frm = '{0:0' + str(self._size_len) + '}'
            data = self.data
            if data is None:
                return b'0'*self._size_len
            if isinstance(data, NITFElement):
                data = data.to_bytes()
            if isinstance(data, bytes):
                return siz_frm.format(len(data)).encode('utf-8') + data
            else:
                raise TypeError(
                    'Got unexpected data type {} for attribute {} of class {}'.format(
                        type(data), attribute, self.__class__))
        return super(Unstructured, self)._get_attribute_bytes(attribute)

    def _get_attribute_length(self, attribute):
        if attribute == 'data':
            data = self.data
            if data is None:
                return self._size_len
            elif isinstance(data, NITFElement):
                return self._size_len + data.get_bytes_length()
            else:
                return self._size_len + len(data)
        return super(Unstructured, self)._get_attribute_length(attribute)

    @classmethod
    def _parse_attribute(cls, fields, attribute, cursor, tre_handler):
        if attribute == 'data':
            length = cursor.read_integer(cls._size_len, name=cls._size_name)
            fields['data'] = cursor.read_bytes(length, name=cls._size_name) if length > 0 else None
            return
        super(Unstructured, cls)._parse_attribute(fields, attribute, cursor, tre_handler)


class _ItemArrayHeaders(BaseNITFElement):
    """
    Item array in the NITF header (i.e. Image Segment, Text Segment).
    This is not really meant to be used directly.
    """

    __slots__ = ('subhead_sizes', 'item_sizes')
    _subhead_len = 0
    _item_len = 0
    _count_name = None  # type: Optional[str]

    def __init__(self, subhead_sizes=None, item_sizes=None, **kwargs):
        """

        Parameters
        ----------
        subhead_sizes : numpy.ndarray|None
        item_sizes : numpy.ndarray|None
        """

        if subhead_sizes is None or item_sizes is None:
            subhead_sizes = numpy.zeros((0, ), dtype=numpy.int64)
            item_sizes = numpy.zeros((0,), dtype=numpy.int64)
        if subhead_sizes.shape != item_sizes.shape or len(item_sizes.shape) != 1:
            raise ValueError(
                'the subhead_offsets and item_offsets arrays must one-dimensional and the same length')

        self.subhead_sizes = subhead_sizes
        """
        numpy.ndarray: the subheader sizes
        """

        self.item_sizes = item_sizes
        """
        numpy.ndarray: the item size
        """

        super(_ItemArrayHeaders, self).__init__(**kwargs)

    def freeze(self):
        self.subhead_sizes.setflags(write=False)
        self.item_sizes.setflags(write=False)
        super(_ItemArrayHeaders, self).freeze()

    @property
    def count(self):
        """
        int: The number of segments.
        """

        return int(self.subhead_sizes.size)

    def get_bytes_length(self):
        return 3 + (self._subhead_len + self._item_len)*self.subhead_sizes.size

    @classmethod
    def minimum_length(cls):
        return 3

    @classmethod
    def from_cursor(cls, cursor, tre_handler=None, **kwargs):
        count = cursor.read_integer(3, name=cls._count_name)
        subhead_sizes = numpy.zeros((count, ), dtype=numpy.int64)
        item_sizes = numpy.zeros((count, ), dtype=numpy.int64)
        for i in range(count):
            subhead_sizes[i] = cursor.read_integer(cls._subhead_len, name='{}[{}] subheader size'.format(cls._count_name, i))
            item_sizes[i] = cursor.read_integer(cls._item_len, name='{}[{}] item size'.format(cls._count_name, i))
        return cls(subhead_sizes, item_sizes)

    def to_bytes(self):
        out = '{0:03d}'.format(self.subhead_sizes.size)
        subh_frm = '{0:0' + str(self._subhead_len) + 'd}'
        item_frm = '{0:0' + str(self._item_len) + 'd}'
        for sh_off, it_off in zip(self.subhead_sizes, self.item_sizes):
            out += subh_frm.format(int(sh_off)) + item_frm.format(int(it_off))
        return out.encode()

    def to_json(self):
        return OrderedDict([
            ('subheader_sizes', self.subhead_sizes.tolist()),
            ('item_sizes', self.item_sizes.tolist())])


######
# TRE Elements

class TRE(BaseNITFElement):
    """
    An abstract TRE class - this should not be instantiated directly.
    """

    @property
    def TAG(self):
        """
        str: The TRE tag.
        """

        raise NotImplementedError

    @property
    def DATA(self):
        """
        The TRE data.
        """

        raise NotImplementedError

    @property
    def EL(self):
        """
        int: The TRE element length.
        """

        raise NotImplementedError

    def get_bytes_length(self):
        return 11 + self.EL

    def to_bytes(self):
        raise NotImplementedError

    @classmethod
    def minimum_length(cls):
        return 11

    def to_json(self):
        out = OrderedDict([('tag', self.TAG), ('length', self.EL)])
        if isinstance(self.DATA, bytes):
            out['data'] = self.DATA
        else:
            out['data'] = self.DATA.to_json()
        return out


class UnknownTRE(TRE):
    """
    A TRE with no registered decoder, or which failed decoding, kept as raw bytes.
    """

    __slots__ = ('_TAG', '_data')

    def __init__(self, TAG, data):
        """

        Parameters
        ----------
        TAG : str|bytes
        data : bytes
        """

        self._data = None
        if isinstance(TAG, bytes):
            TAG = TAG.decode('latin-1')

        if not isinstance(TAG, str):
            raise TypeError('TAG must be a string. Got {}'.format(type(TAG)))
        TAG = TAG.strip()
        if len(TAG) > 6:
            raise ValueError('TAG must be 6 or fewer characters')

        self._TAG = TAG
        self.DATA = data

    @property
    def TAG(self):
        return self._TAG

    @property
    def DATA(self):  # type: () -> bytes
        return self._data

    @DATA.setter
    def DATA(self, value):
        if not isinstance(value, bytes):
            raise TypeError('data must be a bytes instance. Got {}'.format(type(value)))
        self._data = value

    @property
    def EL(self):
        return len(self._data)

    def to_bytes(self):
        return '{0:6s}{1:05d}'.format(self.TAG, self.EL).encode('utf-8') + self._data

    def __repr__(self):
        return 'UnknownTRE({!r}, {!r})'.format(self._TAG, self._data)


class TREList(NITFElement):
    """
    A list of TREs, in on-wire order. This is meant to be used indirectly through
    one of the header type objects, which controls the parsing appropriately.
    """

    __slots__ = ('_tres', )
    _ordering = ('tres', )

    def __init__(self, tres=None, **kwargs):
        self._tres = []
        super(TREList, self).__init__(tres=tres, **kwargs)

    def freeze(self):
        if self.frozen:
            return
        object.__setattr__(self, '_tres', tuple(self._tres))
        _freeze_value(self._tres)
        BaseNITFElement.freeze(self)

    @property
    def tres(self):
        # type: () -> Union[List[TRE], Tuple[TRE, ...]]
        return self._tres

    @tres.setter
    def tres(self, value):
        if value is None:
            self._tres = []
            return

        if not isinstance(value, (list, tuple)):
            raise TypeError('tres must be a list or tuple')

        for i, entry in enumerate(value):
            if not isinstance(entry, TRE):
                raise TypeError(
                    'Each entry of tres must be of type TRE. '
                    'Entry {} is type {}'.format(i, type(entry)))
        self._tres = list(value)

    def _get_attribute_bytes(self, attribute):
        if attribute == 'tres':
            if len(self._tres) == 0:
                return b''
            return b''.join(entry.to_bytes() for entry in self._tres)
        return super(TREList, self)._get_attribute_bytes(attribute)

    def _get_attribute_length(self, attribute):
        if attribute == 'tres':
            if len(self._tres) == 0:
                return 0
            return sum(entry.get_bytes_length() for entry in self._tres)
        return super(TREList, self)._get_attribute_length(attribute)

    @classmethod
    def from_cursor(cls, cursor, tre_handler=None, source=None, **kwargs):
        if tre_handler is None:
            from .tres.collection import TRECollector
            tre_handler = TRECollector()
        return tre_handler.parse_tres(cursor, cursor.remaining, source)

    def __len__(self):
        return len(self._tres)

    def __getitem__(self, item):
        # type: (Union[int, slice, str]) -> Union[None, TRE, List[TRE]]
        if isinstance(item, (int, slice)):
            return self._tres[item]
        elif isinstance(item, str):
            for entry in self.tres:
                if entry.TAG == item:
                    return entry
            return None
        else:
            raise TypeError('Got unhandled type {}'.format(type(item)))

    def to_json(self):
        return [entry.to_json() for entry in self._tres]


class UserHeaderType(Unstructured):
    """
    A length prefixed extension block - a length field, and when that length is
    non-zero, an overflow indicator followed by the TREs.
    """

    __slots__ = ('_data', '_ofl', '_source')
    _ordering = ('data', )
    _size_len = 5
    _ofl_len = 3

    def __init__(self, OFL=None, data=None, source=None, **kwargs):
        self._ofl = None
        self._data = None
        self._source = source
        self.OFL = OFL
        super(UserHeaderType, self).__init__(data=data, **kwargs)

    @property
    def OFL(self):  # type: () -> int
        """
        int: The overflow indicator - the one-up index of the DES holding
        overflowed TREs, or 0.
        """

        return self._ofl

    @OFL.setter
    def OFL(self, value):
        if value is None:
            self._ofl = 0
            return

        value = int(value)
        if not (0 <= value <= 999):
            raise ValueError('ofl requires an integer value in the range 0-999.')
        self._ofl = value

    @property
    def source(self):
        """
        None|str: The TRE source for this extension block.
        """

        return self._source

    @property
    def tres(self):
        """
        Tuple[TRE, ...]: The TREs in this block, in on-wire order.
        """

        if isinstance(self._data, TREList):
            return tuple(self._data.tres)
        return ()

    def _populate_data(self):
        if isinstance(self._data, bytes):
            self._data = TREList.from_bytes(self._data, 0, source=self._source)

    @classmethod
    def minimum_length(cls):
        return cls._size_len

    def _get_attribute_bytes(self, attribute):
        if attribute == 'data':
            siz_frm = '{0:0' + str(self._size_len) + 'd}'
            ofl_frm = '{0:0' + str(self._ofl_len) + 'd}'
            data = self.data
            # an empty TRE list still carries its overflow indicator
            if data is None:
                return b'0'*self._size_len
            if isinstance(data, NITFElement):
                data = data.to_bytes()
            if isinstance(data, bytes):
                return siz_frm.format(len(data) + self._ofl_len).encode('utf-8') + \
                    ofl_frm.format(self._ofl).encode('utf-8') + data
            else:
                raise TypeError('Got unexpected data type {}'.format(type(data)))
        return super(Unstructured, self)._get_attribute_bytes(attribute)

    def _get_attribute_length(self, attribute):
        if attribute == 'data':
            data = self.data
            if data is None:
                return self._size_len
            elif isinstance(data, NITFElement):
                return self._size_len + self._ofl_len + data.get_bytes_length()
            else:
                return self._size_len + self._ofl_len + len(data)
        return super(UserHeaderType, self)._get_attribute_length(attribute)

    @classmethod
    def from_cursor(cls, cursor, tre_handler=None, source=None, names=('UDL', 'OFL'), **kwargs):
        """
        Read the extension block, delegating the TRE area to the TRE handler.

        Parameters
        ----------
        cursor : FieldCursor
        tre_handler : None|nitfkit.io.nitf_elements.tres.collection.TRECollector
        source : None|str
            The TRE source identifier, see :class:`TRESource`.
        names : Tuple[str, str]
            The names of the length and overflow fields, for error reporting.

        Returns
        -------
        UserHeaderType
        """

        length_name, ofl_name = names
        start = cursor.offset
        length = cursor.read_integer(cls._size_len, name=length_name)
        if length == 0:
            return cls(OFL=0, data=None, source=source)
        if length < cls._ofl_len:
            raise FormatError(
                'Extension block length {} is shorter than the overflow '
                'indicator width {}'.format(length, cls._ofl_len),
                field=length_name, offset=start)
        ofl = cursor.read_integer(cls._ofl_len, name=ofl_name)
        if tre_handler is None:
            from .tres.collection import TRECollector
            tre_handler = TRECollector()
        tres = tre_handler.parse_tres(cursor, length - cls._ofl_len, source)
        return cls(OFL=ofl, data=tres, source=source)


class NITFSegmentHeader(NITFElement):
    """
    Common functionality for the file header and the segment subheaders - the
    identifier, the declared data length, and the merged TRE mapping.
    """

    _identifier_field = None  # type: Optional[str]
    _tre_fields = ()  # type: Tuple[str, ...]

    def __init__(self, **kwargs):
        self._data_length = None
        self._tres = OrderedDict()
        super(NITFSegmentHeader, self).__init__(**kwargs)

    def freeze(self):
        if self.frozen:
            return
        for tre in self._tres.values():
            tre.freeze()
        object.__setattr__(self, '_tres', MappingProxyType(self._tres))
        super(NITFSegmentHeader, self).freeze()

    @property
    def identifier(self):
        """
        None|str: The segment identifier.
        """

        if self._identifier_field is None:
            return None
        return getattr(self, self._identifier_field)

    @property
    def data_length(self):
        """
        None|int: The length in bytes of the segment data block, as declared in
        the file header.
        """

        return self._data_length

    @data_length.setter
    def data_length(self, value):
        if value is not None:
            value = int(value)
            if value < 0:
                raise ValueError('data_length must be non-negative')
        self._data_length = value

    @property
    def tres(self):
        """
        OrderedDict: The merged TRE mapping of tag to TRE, from every extension
        block of this header (and any overflow DES). This is a read only view
        once the header is frozen.
        """

        return self._tres

    def extension_blocks(self):
        """
        Get the populated extension blocks of this header.

        Returns
        -------
        List[UserHeaderType]
        """

        out = []
        for fld in self._tre_fields:
            value = getattr(self, fld, None)
            if isinstance(value, UserHeaderType):
                out.append(value)
        return out

    def merge_tres(self, tre_handler, tres, source=None):
        """
        Merge the given TREs into the TRE mapping of this header.

        Parameters
        ----------
        tre_handler : nitfkit.io.nitf_elements.tres.collection.TRECollector
        tres : TREList|List[TRE]|Tuple[TRE, ...]
        source : None|str
        """

        if self.frozen:
            raise AttributeError(
                'Instance of {} is frozen, and TREs cannot be merged'.format(self.__class__.__name__))
        tre_handler.merge(self._tres, tres, source)

    @classmethod
    def from_cursor(cls, cursor, tre_handler=None, data_length=None, **kwargs):
        if tre_handler is None:
            from .tres.collection import TRECollector
            tre_handler = TRECollector()
        out = cls(**cls._read_fields(cursor, tre_handler))
        out.data_length = data_length
        for block in out.extension_blocks():
            out.merge_tres(tre_handler, block.tres, block.source)
        return out
