"""relist - Batch rename files by editing their names in a text editor."""

__version__ = "0.1.0"
