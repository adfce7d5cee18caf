__classification__ = "UNCLASSIFIED"


def open(file_name, strategy=None, lenient=False):
    """
    Given a NITF file, parse it and return the segment flow over the result.

    Parameters
    ----------
    file_name : str|bytes|BinaryIO
    strategy : None|nitfkit.io.parse_strategy.NITFParseStrategy
        The parse strategy. Defaults to retaining every header and all data.
    lenient : bool
        Decode files of unknown version with the NITF 2.1 layout, rather than
        raising an `UnsupportedVariantError`.

    Returns
    -------
    nitfkit.io.flow.NITFSegmentsFlow

    Raises
    ------
    nitfkit.compliance.NITFError
    """

    from .flow import open_nitf
    return open_nitf(file_name, strategy=strategy, lenient=lenient)
