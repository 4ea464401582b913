"""Infrastructure layer package.

This package contains the pieces that touch libraries and the environment:
- backends: Fake backends built on unittest.mock
- io/: Config file loading and logging setup
- tools/: Environment (.env) loading
"""
