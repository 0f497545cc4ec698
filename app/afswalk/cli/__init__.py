"""CLI package for afswalk.

This package contains the Typer application.
"""

from afswalk.cli.main import app

__all__ = ["app"]
