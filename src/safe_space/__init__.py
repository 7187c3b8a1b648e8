"""Safe Space community API."""

__version__ = "0.1.0"
