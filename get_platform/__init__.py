"""get-platform — resolve the native binary target for the current host."""

__version__ = "0.1.0"
