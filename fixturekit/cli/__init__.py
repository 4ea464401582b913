"""CLI package for fixturekit."""

from .cli import app

__all__ = ["app"]
