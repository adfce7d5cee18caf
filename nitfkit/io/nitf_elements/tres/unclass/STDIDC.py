"""
The STDIDC TRE - standard identifier of the collection. The payload is a
fixed 89 bytes.
"""

import numpy

from ..tre_elements import TREExtension, TREElement

__classification__ = "UNCLASSIFIED"


class STDIDCType(TREElement):
    def __init__(self, value):
        super(STDIDCType, self).__init__()
        self.add_field('ACQUISITION_DATE', 's', 14, value)
        self.add_field('MISSION', 's', 14, value)
        self.add_field('PASS', 's', 2, value)
        self.add_field('OP_NUM', 's', 3, value)
        self.add_field('START_SEGMENT', 's', 2, value)
        self.add_field('REPRO_NUM', 's', 2, value)
        self.add_field('REPLAY_REGEN', 's', 3, value)
        self.add_field('BLANK_FILL', 's', 1, value)
        self.add_field('START_COLUMN', 's', 3, value)
        self.add_field('START_ROW', 's', 5, value)
        self.add_field('END_SEGMENT', 's', 2, value)
        self.add_field('END_COLUMN', 's', 3, value)
        self.add_field('END_ROW', 's', 5, value)
        self.add_field('COUNTRY', 's', 2, value)
        self.add_field('WAC', 's', 4, value)
        self.add_field('LOCATION', 's', 11, value)
        self.add_field('RESERV01', 's', 5, value)
        self.add_field('RESERV02', 's', 8, value)

    def get_acquisition_time(self):
        """
        Interpret the acquisition date, of the form `CCYYMMDDhhmmss`.

        Returns
        -------
        None|numpy.datetime64
            `None` when the field is blank or not a valid date.
        """

        value = self.ACQUISITION_DATE
        if len(value) != 14 or not value.isdigit():
            return None
        try:
            return numpy.datetime64('{}-{}-{}T{}:{}:{}'.format(
                value[:4], value[4:6], value[6:8], value[8:10], value[10:12], value[12:14]), 's')
        except ValueError:
            return None


class STDIDC(TREExtension):
    _tag_value = 'STDIDC'
    _data_type = STDIDCType
    payload_length = 89
