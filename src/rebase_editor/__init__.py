"""Editor substitute for planned Git interactive rebases."""

__version__ = "0.1.0"
