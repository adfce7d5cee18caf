"""
A TRE plugin package, registered explicitly by the registry tests.
"""
