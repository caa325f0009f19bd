"""depman - an in-memory package dependency manager."""

__version__ = "0.1.0"
