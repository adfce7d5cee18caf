"""
The BLOCKA TRE - image block information. The payload is a fixed 123 bytes,
describing the corner locations of one block of a blocked image.

The corner fields are kept as text, since any of them may be blank filled.
Payload bytes beyond the 123 interpreted here are retained by the extension
as its remainder, and are not counted in :attr:`BLOCKA.decoded_length`.
"""

from ..tre_elements import TREExtension, TREElement

__classification__ = "UNCLASSIFIED"


class BLOCKAType(TREElement):
    def __init__(self, value):
        super(BLOCKAType, self).__init__()
        self.add_field('BLOCK_INSTANCE', 's', 2, value)
        self.add_field('N_GRAY', 's', 5, value)
        self.add_field('L_LINES', 's', 5, value)
        self.add_field('LAYOVER_ANGLE', 's', 3, value)
        self.add_field('SHADOW_ANGLE', 's', 3, value)
        self.add_field('RESERVED_001', 's', 16, value)
        self.add_field('FRLC_LOC', 's', 21, value)
        self.add_field('LRLC_LOC', 's', 21, value)
        self.add_field('LRFC_LOC', 's', 21, value)
        self.add_field('FRFC_LOC', 's', 21, value)
        self.add_field('RESERVED_002', 's', 5, value)

    @property
    def corner_locations(self):
        """
        Tuple[str, str, str, str]: The block corner locations, in the order
        first row/first column, first row/last column, last row/last column,
        last row/first column. Blank corners are empty strings.
        """

        return self.FRFC_LOC, self.FRLC_LOC, self.LRLC_LOC, self.LRFC_LOC


class BLOCKA(TREExtension):
    _tag_value = 'BLOCKA'
    _data_type = BLOCKAType
    payload_length = 123
