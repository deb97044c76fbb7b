"""Select a pass entry field with fuzzel and copy or type it."""

__version__ = "0.1.0"
