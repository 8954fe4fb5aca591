"""devinit-client - resolve template variables and drive the devinit generator."""

__version__ = "0.1.0"
