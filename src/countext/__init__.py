"""countext: count files per extension, stem or filename."""

__version__ = "1.0.0"
