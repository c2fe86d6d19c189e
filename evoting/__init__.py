"""Electronic voting backend."""

__version__ = "0.1.0"
