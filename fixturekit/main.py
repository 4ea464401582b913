#!/usr/bin/env python3
"""
fixturekit: console entry point.

This module is a thin shim that exposes the CLI app from fixturekit.cli.

Usage:
    fixturekit plan [OPTIONS] TARGET
    fixturekit backends
"""

from fixturekit.cli import app

if __name__ == "__main__":
    app()
