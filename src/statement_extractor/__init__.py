"""Credit card statement field extraction engine."""

__version__ = "0.1.0"
