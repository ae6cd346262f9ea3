"""CarbonScope command line interface."""

from carbonscope.cli.main import app, main

__all__ = ["app", "main"]
