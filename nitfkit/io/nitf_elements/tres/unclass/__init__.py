"""
Decoders for a selection of unclassified TREs.
"""

__classification__ = "UNCLASSIFIED"
