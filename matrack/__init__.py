"""Browser client for the military asset-tracking service."""

__version__ = "0.1.0"
