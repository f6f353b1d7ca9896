"""Student bulk upload tool for the placement portal."""

__version__ = "0.1.0"
