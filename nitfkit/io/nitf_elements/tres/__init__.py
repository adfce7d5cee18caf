__classification__ = "UNCLASSIFIED"
