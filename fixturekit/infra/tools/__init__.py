"""Environment helpers for fixturekit."""
