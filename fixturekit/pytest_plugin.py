"""pytest plugin for fixturekit.

Registered through the ``pytest11`` entry point. At startup it loads
``.env`` and ``fixturekit.yaml`` from the rootdir and configures
``default_registry``; ``--fixturekit-backend`` overrides the backend.

Fixtures:
- fake_registry: the default registry, with its factories restored after
  the test
- recording_factories: wraps every factory slot of the default registry so
  the test can assert which factory received which type
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

import pytest

from fixturekit.core.errors import ConfigurationError
from fixturekit.core.protocols import FakeFactory
from fixturekit.infra.io.config_loader import load_config
from fixturekit.infra.tools.env import load_env
from fixturekit.registry import FakeFactoryRegistry, configure, default_registry


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("fixturekit")
    group.addoption(
        "--fixturekit-backend",
        dest="fixturekit_backend",
        default=None,
        help="Fake backend for fixturekit's default registry (autospec, spec)",
    )


def pytest_configure(config: pytest.Config) -> None:
    load_env(config.rootpath)
    try:
        fixture_config = load_config(config.rootpath)
        backend = config.getoption("fixturekit_backend", default=None)
        if backend:
            fixture_config = replace(fixture_config, backend=backend)
            errors = fixture_config.validate()
            if errors:
                raise ConfigurationError(errors)
    except ConfigurationError as e:
        raise pytest.UsageError(str(e)) from e
    configure(fixture_config)


@dataclass(frozen=True)
class RecordedCall:
    """One call to a fake factory."""

    kind: str
    type: Any
    args: tuple[object, ...]
    result: Any


@dataclass
class RecordingFactories:
    """Records calls to the factories of a registry.

    Each slot keeps delegating to the factory it wrapped, so the fakes
    produced are unchanged.
    """

    calls: list[RecordedCall] = field(default_factory=list)

    def wrap(self, kind: str, delegate: FakeFactory) -> FakeFactory:
        def factory(tp: Any, args: Sequence[object]) -> Any:
            result = delegate(tp, args)
            self.calls.append(RecordedCall(kind, tp, tuple(args), result))
            return result

        return factory

    def install(self, registry: FakeFactoryRegistry) -> None:
        registry.register_stub_factory(self.wrap("stub", registry.stub))
        registry.register_mock_factory(self.wrap("mock", registry.mock))
        registry.register_strict_mock_factory(
            self.wrap("strict_mock", registry.strict_mock)
        )
        registry.register_partial_mock_factory(
            self.wrap("partial_mock", registry.partial_mock)
        )

    def of_kind(self, kind: str) -> list[RecordedCall]:
        return [call for call in self.calls if call.kind == kind]

    def types(self, kind: str) -> list[Any]:
        return [call.type for call in self.of_kind(kind)]


@pytest.fixture
def fake_registry() -> Iterator[FakeFactoryRegistry]:
    """The default registry; factories registered by the test are undone."""
    saved = default_registry.snapshot()
    try:
        yield default_registry
    finally:
        default_registry.restore(saved)


@pytest.fixture
def recording_factories(fake_registry: FakeFactoryRegistry) -> RecordingFactories:
    """Record every factory call made through the default registry."""
    recorder = RecordingFactories()
    recorder.install(fake_registry)
    return recorder
