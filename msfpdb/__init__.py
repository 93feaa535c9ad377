"""Read MSF stream blocks, the DBI stream and CodeView records of PDB files."""

__version__ = "0.1.0"
__all__ = ["dbi_stream", "dbi_types", "msf", "timing"]