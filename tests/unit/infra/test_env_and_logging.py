"""Unit tests for .env loading and console logging setup."""

from __future__ import annotations

import logging
import os
from io import StringIO
from typing import TYPE_CHECKING

import pytest

from fixturekit.config import FixtureConfig
from fixturekit.infra.io.log_output import configure_logging
from fixturekit.infra.tools.env import load_env

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

pytestmark = pytest.mark.unit


_ENV_NAMES = ("FIXTUREKIT_BACKEND", "FIXTUREKIT_DEEP", "FIXTUREKIT_DETECT_CYCLES")


@pytest.fixture
def restore_fixturekit_env() -> Iterator[None]:
    """Undo variables load_dotenv writes straight into os.environ."""
    saved = {name: os.environ.get(name) for name in _ENV_NAMES}
    yield
    for name, value in saved.items():
        if value is None:
            os.environ.pop(name, None)
        else:
            os.environ[name] = value


@pytest.mark.usefixtures("restore_fixturekit_env")
class TestLoadEnv:
    """Tests for load_env."""

    def test_missing_file_returns_false(self, tmp_path: Path) -> None:
        assert load_env(tmp_path) is False

    def test_loads_variables_from_file(self, tmp_path: Path) -> None:
        os.environ.pop("FIXTUREKIT_DEEP", None)
        (tmp_path / ".env").write_text("FIXTUREKIT_DEEP=true\n")

        assert load_env(tmp_path) is True
        assert os.environ["FIXTUREKIT_DEEP"] == "true"

    def test_loaded_variables_do_not_outlive_the_test(self) -> None:
        assert "FIXTUREKIT_DEEP" not in os.environ
        assert FixtureConfig.from_env() == FixtureConfig()

    def test_existing_variables_win(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FIXTUREKIT_BACKEND", "autospec")
        (tmp_path / ".env").write_text(
            "FIXTUREKIT_BACKEND=spec\nFIXTUREKIT_DETECT_CYCLES=false\n"
        )

        load_env(tmp_path)

        assert os.environ["FIXTUREKIT_BACKEND"] == "autospec"
        assert os.environ["FIXTUREKIT_DETECT_CYCLES"] == "false"


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("fixturekit")
    level = logger.level
    handlers = logger.handlers[:]
    yield logger
    for handler in logger.handlers[:]:
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_verbose_logs_debug_records(self, package_logger: logging.Logger) -> None:
        stream = StringIO()
        configure_logging(verbose=True, stream=stream)

        logging.getLogger("fixturekit.domain.resolver").debug("resolved %r", int)

        output = stream.getvalue()
        assert "DEBUG fixturekit.domain.resolver: resolved <class 'int'>" in output

    def test_default_level_hides_debug(self, package_logger: logging.Logger) -> None:
        stream = StringIO()
        configure_logging(stream=stream)

        logging.getLogger("fixturekit.registry").debug("hidden")
        logging.getLogger("fixturekit.registry").warning("shown")

        assert "hidden" not in stream.getvalue()
        assert "WARNING fixturekit.registry: shown" in stream.getvalue()

    def test_second_call_replaces_handler(self, package_logger: logging.Logger) -> None:
        first = configure_logging()
        second = configure_logging()

        assert first not in package_logger.handlers
        assert second in package_logger.handlers
