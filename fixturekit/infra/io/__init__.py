"""I/O utilities for fixturekit.

This package contains:
- config_loader: fixturekit.yaml loading
- log_output: Logging handler setup
"""
