"""Environment loading for fixturekit.

FIXTUREKIT_* variables may live in a ``.env`` file next to the test suite.
Call load_env() before FixtureConfig.from_env() (the pytest plugin and the
CLI do this).
"""

from pathlib import Path

from dotenv import load_dotenv


def load_env(repo_path: Path | None = None) -> bool:
    """Load ``.env`` from ``repo_path`` (default: current directory).

    Existing environment variables win over the file.

    Returns:
        True if a .env file was found and loaded.
    """
    base = repo_path if repo_path is not None else Path.cwd()
    return load_dotenv(dotenv_path=base / ".env", override=False)
