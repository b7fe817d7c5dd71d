"""Switch Tools API: scripted CLI access to an access switch over SSH."""

__version__ = "0.1.0"
