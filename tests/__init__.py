"""
Shared helpers for constructing synthetic NITF content.

The field level builders produce bytes by hand, so that the decoders are checked
against independently constructed input. The whole file builder assembles
subheaders and data with a file header whose segment tables, `HL` and `FL`
are consistent.
"""

import unittest
import logging

from nitfkit.io.nitf_elements.nitf_head import NITFHeader, NITFHeader0


logging.basicConfig(level=logging.WARNING)

# NITF 2.1 security block, unclassified with every other field blank
SECURITY_21 = b'U' + b' '*166
# NITF 2.0 security block, unclassified with a blank downgrade, so no DEVT
SECURITY_20 = b'U' + b' '*160 + b' '*6


def text_field(value, length):
    """
    Space padded text field.
    """

    out = value.encode('latin-1') if isinstance(value, str) else value
    if len(out) > length:
        raise ValueError('Value {!r} is longer than {}'.format(value, length))
    return out + b' '*(length - len(out))


def int_field(value, length):
    """
    Zero padded integer field.
    """

    out = '{0:0{1}d}'.format(value, length).encode('ascii')
    if len(out) != length:
        raise ValueError('Value {} does not fit in {} digits'.format(value, length))
    return out


def location(row, col):
    return int_field(row, 5) + int_field(col, 5)


def tre_record(tag, payload):
    """
    A TRE as tag, length and payload.
    """

    return text_field(tag, 6) + int_field(len(payload), 5) + payload


def extension_block(tres=b'', ofl=0):
    """
    A length prefixed extension block holding the given TRE records.
    """

    if len(tres) == 0 and ofl == 0:
        return b'00000'
    return int_field(len(tres) + 3, 5) + int_field(ofl, 3) + tres


def symbol_subheader(
        sid='SYM01', sname='', stype='B', scolor='G', nelut=0, lut=b'',
        sloc=(0, 0), sloc2=(0, 0), snum=b'000000', extended=b'', security=SECURITY_20):
    """
    A NITF 2.0 symbol subheader.
    """

    return b'SY' + text_field(sid, 10) + text_field(sname, 20) + security + b'0' + \
        text_field(stype, 1) + int_field(8, 4) + int_field(8, 4) + int_field(1, 4) + \
        int_field(1, 1) + int_field(1, 3) + int_field(0, 3) + location(*sloc) + location(*sloc2) + \
        text_field(scolor, 1) + snum + int_field(0, 3) + int_field(nelut, 3) + lut + extended


def label_subheader(lid='LABEL01', extended=b'00000'):
    """
    A NITF 2.0 label subheader.
    """

    return b'LA' + text_field(lid, 10) + SECURITY_20 + b'0' + b' ' + b'00' + b'00' + \
        int_field(2, 3) + int_field(0, 3) + location(10, -20) + b'\x00\x00\x00' + b'\xff\xff\xff' + extended


def text_subheader(textid='TXT01', title='', extended=b'00000'):
    """
    A NITF 2.1 text subheader.
    """

    return b'TE' + text_field(textid, 7) + int_field(0, 3) + text_field('20200101120000', 14) + \
        text_field(title, 80) + SECURITY_21 + b'0' + text_field('STA', 3) + extended


def text_subheader0(textid='TXT01', title='', extended=b'00000'):
    """
    A NITF 2.0 text subheader.
    """

    return b'TE' + text_field(textid, 10) + text_field('01120000ZJAN20', 14) + \
        text_field(title, 80) + SECURITY_20 + b'0' + text_field('STA', 3) + extended


def graphics_subheader(sid='GRA01', extended=b'00000'):
    """
    A NITF 2.1 graphic subheader.
    """

    return b'SY' + text_field(sid, 10) + text_field('graphic', 20) + SECURITY_21 + b'0' + b'C' + \
        int_field(0, 13) + int_field(3, 3) + int_field(0, 3) + location(0, 0) + location(1, 2) + \
        b'C' + location(100, 200) + int_field(0, 2) + extended


def des_subheader(desid='TEST_DES', overflow=None, user=b'', security=SECURITY_21):
    """
    A NITF 2.1 (or with `security=SECURITY_20`, 2.0) data extension subheader.
    `overflow` is the (DESOFLW, DESITEM) pair for a TRE overflow segment.
    """

    out = b'DE' + text_field(desid, 25) + int_field(1, 2) + security
    if overflow is not None:
        out += text_field(overflow[0], 6) + int_field(overflow[1], 3)
    return out + int_field(len(user), 4) + user


def res_subheader(resid='TEST_RES', user=b'', security=SECURITY_21):
    return b'RE' + text_field(resid, 25) + int_field(1, 2) + security + int_field(len(user), 4) + user


def build_nitf(segments, version='02.10', header_kwargs=None):
    """
    Assemble a complete file.

    Parameters
    ----------
    segments : dict
        Segment kind -> list of (subheader bytes, data bytes).
    version : str
        One of `02.10` or `02.00`. The `FVER` may be overridden in `header_kwargs`.
    header_kwargs : None|dict
        Additional file header fields.

    Returns
    -------
    (bytes, NITFHeader|NITFHeader0)
    """

    header_kwargs = {} if header_kwargs is None else header_kwargs
    header_type = NITFHeader0 if version == '02.00' else NITFHeader
    header = header_type(FTITLE='synthetic test file', **header_kwargs)
    body = b''
    for kind in header.segment_kinds():
        entries = segments.get(kind, [])
        header.set_segment_table(
            kind, [len(subheader) for subheader, _ in entries], [len(data) for _, data in entries])
        for subheader, data in entries:
            body += subheader + data
    header.update_header_length()
    header.FL = header.HL + len(body)
    return header.to_bytes() + body, header
