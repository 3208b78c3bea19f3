"""Command-line interface for blueprint2d.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Fuse, cut and intersect profile files
- JSON profile or SVG drawing output, chosen by file suffix
- Profile inspection and text outlining
- Detailed error reporting
"""

from blueprint2d.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
