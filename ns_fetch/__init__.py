"""ns-fetch - NetSuite REST record client with CSV/Excel import."""

__version__ = "0.1.0"
