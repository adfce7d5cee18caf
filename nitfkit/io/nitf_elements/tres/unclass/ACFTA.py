"""
The ACFTA TRE - aircraft information. The layout is determined by the payload
length, which is one of 132, 154 or 199 bytes. The 199 byte layout is that of
ACFTB, without the LOC_ACCY, ROW_SPACING_UNITS and COL_SPACING_UNITS fields.
"""

from ..tre_elements import TREExtension, TREElement

__classification__ = "UNCLASSIFIED"


class ACFTA_132Type(TREElement):
    def __init__(self, value):
        super(ACFTA_132Type, self).__init__()
        self.add_field('AC_MSN_ID', 's', 10, value)
        self.add_field('SCTYPE', 's', 1, value)
        self.add_field('SCNUM', 's', 4, value)
        self.add_field('SENSOR_ID', 's', 3, value)
        self.add_field('PATCH_TOT', 's', 4, value)
        self.add_field('MTI_TOT', 's', 3, value)
        self.add_field('PDATE', 's', 7, value)
        self.add_field('IMHOSTNO', 's', 3, value)
        self.add_field('IMREQID', 's', 5, value)
        self.add_field('SCENE_SOURCE', 's', 1, value)
        self.add_field('MPLAN', 's', 2, value)
        self.add_field('ENTLOC', 's', 21, value)
        self.add_field('ENTALT', 's', 6, value)
        self.add_field('EXITLOC', 's', 21, value)
        self.add_field('EXITALT', 's', 6, value)
        self.add_field('TMAP', 's', 7, value)
        self.add_field('RCS', 's', 3, value)
        self.add_field('ROW_SPACING', 's', 7, value)
        self.add_field('COL_SPACING', 's', 7, value)
        self.add_field('SENSERIAL', 's', 4, value)
        self.add_field('ABSWVER', 's', 7, value)


class ACFTA_132(TREExtension):
    _tag_value = 'ACFTA'
    _data_type = ACFTA_132Type


class ACFTA_154Type(TREElement):
    def __init__(self, value):
        super(ACFTA_154Type, self).__init__()
        self.add_field('AC_MSN_ID', 's', 10, value)
        self.add_field('AC_TAIL_NO', 's', 10, value)
        self.add_field('SENSOR_ID', 's', 10, value)
        self.add_field('SCENE_SOURCE', 's', 1, value)
        self.add_field('SCNUM', 's', 6, value)
        self.add_field('PDATE', 's', 8, value)
        self.add_field('IMHOSTNO', 's', 6, value)
        self.add_field('IMREQID', 's', 5, value)
        self.add_field('MPLAN', 's', 3, value)
        self.add_field('ENTLOC', 's', 21, value)
        self.add_field('ENTALT', 's', 6, value)
        self.add_field('EXITLOC', 's', 21, value)
        self.add_field('EXITALT', 's', 6, value)
        self.add_field('TMAP', 's', 7, value)
        self.add_field('ROW_SPACING', 's', 7, value)
        self.add_field('COL_SPACING', 's', 7, value)
        self.add_field('SENSERIAL', 's', 6, value)
        self.add_field('ABSWVER', 's', 7, value)
        self.add_field('PATCH_TOT', 's', 4, value)
        self.add_field('MTI_TOT', 's', 3, value)


class ACFTA_154(TREExtension):
    _tag_value = 'ACFTA'
    _data_type = ACFTA_154Type


class ACFTA_199Type(TREElement):
    def __init__(self, value):
        super(ACFTA_199Type, self).__init__()
        self.add_field('AC_MSN_ID', 's', 20, value)
        self.add_field('AC_TAIL_NO', 's', 10, value)
        self.add_field('AC_TO', 's', 12, value)
        self.add_field('SENSOR_ID_TYPE', 's', 4, value)
        self.add_field('SENSOR_ID', 's', 6, value)
        self.add_field('SCENE_SOURCE', 's', 1, value)
        self.add_field('SCNUM', 's', 6, value)
        self.add_field('PDATE', 's', 8, value)
        self.add_field('IMHOSTNO', 's', 6, value)
        self.add_field('IMREQID', 's', 5, value)
        self.add_field('MPLAN', 's', 3, value)
        self.add_field('ENTLOC', 's', 25, value)
        self.add_field('ENTELV', 's', 6, value)
        self.add_field('ELVUNIT', 's', 1, value)
        self.add_field('EXITLOC', 's', 25, value)
        self.add_field('EXITELV', 's', 6, value)
        self.add_field('TMAP', 's', 7, value)
        self.add_field('ROW_SPACING', 's', 7, value)
        self.add_field('COL_SPACING', 's', 7, value)
        self.add_field('FOCAL_LENGTH', 's', 6, value)
        self.add_field('SENSERIAL', 's', 6, value)
        self.add_field('ABSWVER', 's', 7, value)
        self.add_field('CAL_DATE', 's', 8, value)
        self.add_field('PATCH_TOT', 's', 4, value)
        self.add_field('MTI_TOT', 's', 3, value)


class ACFTA_199(TREExtension):
    _tag_value = 'ACFTA'
    _data_type = ACFTA_199Type


class ACFTA(TREExtension):
    _tag_value = 'ACFTA'
    _versions = {132: ACFTA_132, 154: ACFTA_154, 199: ACFTA_199}

    def __init__(self):
        raise ValueError(
            'Not to be implemented directly. '
            'Use of one ACFTA_132, ACFTA_154, or ACFTA_199')

    @classmethod
    def from_payload(cls, value):
        """

        Parameters
        ----------
        value : bytes

        Returns
        -------
        ACFTA_132|ACFTA_154|ACFTA_199
        """

        the_type = cls._versions.get(len(value), None)
        if the_type is None:
            raise ValueError(
                'the data must be length {}. Got {}'.format(sorted(cls._versions), len(value)))
        return the_type.from_payload(value)
