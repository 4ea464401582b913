"""Pytest configuration for fixturekit tests."""

import os

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Configure test environment before collection.

    Clears FIXTUREKIT_* variables so a developer's shell or .env cannot
    change the defaults the tests assert on.
    """
    for name in ("FIXTUREKIT_BACKEND", "FIXTUREKIT_DEEP", "FIXTUREKIT_DETECT_CYCLES"):
        os.environ.pop(name, None)


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Default unmarked tests to unit category."""
    for item in items:
        if any(marker in item.keywords for marker in ("unit", "integration")):
            continue
        item.add_marker(pytest.mark.unit)
