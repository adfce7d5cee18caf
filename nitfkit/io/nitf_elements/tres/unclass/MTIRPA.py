"""
The MTIRPA TRE - moving target indicator report. The payload is a 38 byte
report header followed by one 34 byte record per target, the count being
given by NVTGT. A report declaring more targets than the payload holds fails
to decode, and the record is then kept undecoded by the TRE collector.
"""

from ..tre_elements import TREExtension, TREElement

__classification__ = "UNCLASSIFIED"


class VTGT(TREElement):
    def __init__(self, value):
        super(VTGT, self).__init__()
        self.add_field('TGLOC', 's', 21, value)
        self.add_field('TGRDV', 's', 4, value)
        self.add_field('TGGSP', 's', 3, value)
        self.add_field('TGHEA', 's', 3, value)
        self.add_field('TGSIG', 's', 2, value)
        self.add_field('TGCAT', 's', 1, value)


class MTIRPAType(TREElement):
    def __init__(self, value):
        super(MTIRPAType, self).__init__()
        self.add_field('DESTP', 's', 2, value)
        self.add_field('MTPID', 's', 3, value)
        self.add_field('PCHNO', 's', 4, value)
        self.add_field('WAMFN', 's', 5, value)
        self.add_field('WAMBN', 's', 1, value)
        self.add_field('UTC', 's', 8, value)
        self.add_field('SQNTA', 's', 5, value)
        self.add_field('COSGZ', 's', 7, value)
        self.add_field('NVTGT', 'd', 3, value)
        self.add_loop('VTGTs', self.NVTGT, VTGT, value)

    @property
    def target_locations(self):
        """
        Tuple[str, ...]: The location of each reported target, in report order.
        """

        return tuple(entry.TGLOC for entry in self.VTGTs)


class MTIRPA(TREExtension):
    """
    The decoded length is the header plus 34 bytes per reported target.
    """

    _tag_value = 'MTIRPA'
    _data_type = MTIRPAType
    header_length = 38
    target_length = 34
