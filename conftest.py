"""Root conftest: load the fixturekit plugin when it is not installed."""

pytest_plugins = ["fixturekit.pytest_plugin"]
