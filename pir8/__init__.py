"""PIR8 naval strategy rules engine."""

__version__ = "0.1.0"
