"""Noter - release note fragment compiler."""

__version__ = "0.3.0"
