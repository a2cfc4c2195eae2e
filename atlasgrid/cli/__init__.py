"""
CLI module for Atlasgrid.

This module provides command-line interface for listing grid labels,
generating grid overlays and locating points on a sheet.
"""

from atlasgrid.cli.commands import main

__all__ = ["main"]
