"""
Common file type checks.
"""

__classification__ = "UNCLASSIFIED"


import os
from typing import Union, Tuple, BinaryIO, Any, Optional


_NITF_PROFILES = (b'NITF', b'NSIF')


###########
# general file type checks

def is_file_like(the_input: Any) -> bool:
    """
    Verify whether the provided input appear to provide a "file-like object". This
    term is used ubiquitously, but not all usages are identical. In this case, we
    mean that there exist callable attributes `read`, `seek`, and `tell`.

    Note that this does not check the mode (binary/string or read/write/append),
    as it is not clear that there is any generally accessible way to do so.

    Parameters
    ----------
    the_input

    Returns
    -------
    bool
    """

    out = True
    for attribute in ['read', 'seek', 'tell']:
        value = getattr(the_input, attribute, None)
        out &= callable(value)
    return out


def _fetch_initial_bytes(file_name: Union[str, bytes, BinaryIO], size: int) -> Optional[bytes]:
    header = b''
    if isinstance(file_name, (bytes, bytearray, memoryview)):
        header = bytes(file_name[:size])
    elif is_file_like(file_name):
        current_location = file_name.tell()
        file_name.seek(0, os.SEEK_SET)
        header = file_name.read(size)
        file_name.seek(current_location, os.SEEK_SET)
    elif isinstance(file_name, str):
        if not os.path.isfile(file_name):
            return None

        with open(file_name, 'rb') as fi:
            header = fi.read(size)

    if len(header) != size:
        return None
    return header


def is_nitf(
        file_name: Union[str, bytes, BinaryIO],
        return_version=False) -> Union[bool, Tuple[bool, Optional[str]]]:
    """
    Test whether the given input is a NITF (or NSIF) file.

    Parameters
    ----------
    file_name : str|bytes|BinaryIO
    return_version : bool

    Returns
    -------
    is_nitf_file: bool
        Is the file a NITF file, based solely on checking initial bytes.
    file_type: None|str
        Only returned is `return_version=True`. The profile name and version,
        e.g. `NITF02.10`. Will be `None` in the event that `is_nitf_file=False`.
    """

    header = _fetch_initial_bytes(file_name, 9)
    if header is None:
        if return_version:
            return False, None
        else:
            return False

    ihead = header[:4]
    vers = header[4:]
    if ihead in _NITF_PROFILES:
        try:
            file_type = ihead.decode('ascii') + vers.decode('ascii')
            return (True, file_type) if return_version else True
        except ValueError:
            pass

    return (False, None) if return_version else False
