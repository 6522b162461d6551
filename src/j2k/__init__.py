"""j2k - use a game controller as a keyboard."""

__version__ = "0.1.0"
