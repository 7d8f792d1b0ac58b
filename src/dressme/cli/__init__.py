"""Command-line interface for dressme."""

from .app import app, main

__all__ = ["app", "main"]
