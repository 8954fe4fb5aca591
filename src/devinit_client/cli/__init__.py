"""Command line interface for devinit-client."""

from .main import cli

__all__ = ["cli"]
