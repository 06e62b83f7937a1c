"""ndf - free and used space of mounted volumes."""

__version__ = "0.1.0"
