"""Client-side task orchestration for the PDF Studio toolkit."""

__version__ = "0.1.0"
