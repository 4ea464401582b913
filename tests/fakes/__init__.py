"""In-memory fakes and sample classes for fixturekit tests.

Sample classes model a small ordering service so the builder has realistic
constructors to work on: protocols and abstract classes (capability types),
primitives, text, and nested concrete classes.

Available fakes:
- FactoryRecorder: Fake factories that record (kind, type, args) and return
  spec'd mocks tagged with the kind that produced them
- InMemoryRepository: Hand-built Repository implementation for overrides

Usage:
    from tests.fakes import FactoryRecorder, OrderService

    def test_something():
        recorder = FactoryRecorder()
        registry = recorder.registry()
        service = Builder(OrderService, registry).build()
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable
from unittest import mock

from fixturekit import FakeFactoryRegistry, FixtureConfig, fixture_constructor
from fixturekit.core.protocols import FakeFactory
from fixturekit.pytest_plugin import RecordingFactories

T = TypeVar("T")

# =============================================================================
# Sample classes
# =============================================================================


@runtime_checkable
class Repository(Protocol):
    def load(self, key: str) -> dict[str, Any]: ...

    def save(self, key: str, value: dict[str, Any]) -> None: ...


class Clock(ABC):
    @abstractmethod
    def now(self) -> float: ...


class Priority(Enum):
    LOW = "low"
    HIGH = "high"


class OrderService:
    """Target with constructor (Repository, int, str)."""

    def __init__(self, repository: Repository, retries: int, region: str) -> None:
        self.repository = repository
        self.retries = retries
        self.region = region

    def place(self, key: str) -> dict[str, Any]:
        order = self.repository.load(key)
        self.repository.save(key, order)
        return order


class Settings:
    def __init__(self, name: str, limit: int, priority: Priority) -> None:
        self.name = name
        self.limit = limit
        self.priority = priority


class Gateway:
    """Concrete dependency with a lean and a rich constructor."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.clock: Clock | None = None

    @classmethod
    @fixture_constructor
    def with_clock(cls, settings: Settings, clock: Clock) -> Gateway:
        gateway = cls(settings)
        gateway.clock = clock
        return gateway


class Checkout:
    def __init__(self, gateway: Gateway, repository: Repository, tags: list[str]) -> None:
        self.gateway = gateway
        self.repository = repository
        self.tags = tags


class Mirror:
    """Takes two parameters of the same declared type."""

    def __init__(self, primary: Repository, replica: Repository, label: str) -> None:
        self.primary = primary
        self.replica = replica
        self.label = label


class Parent:
    def __init__(self, child: Child) -> None:
        self.child = child


class Child:
    def __init__(self, parent: Parent) -> None:
        self.parent = parent


class Broken:
    def __init__(self, missing: NotAClass) -> None:  # noqa: F821
        self.missing = missing


@dataclass
class Invoice:
    number: int
    customer: str
    lines: list[str] = field(default_factory=list)


class Counter:
    def __init__(self, start: int) -> None:
        self.value = start

    def increment(self) -> int:
        self.value += 1
        return self.value


class ScheduledJob:
    """Constructor with a keyword-only parameter."""

    def __init__(self, repository: Repository, *, retries: int) -> None:
        self.repository = repository
        self.retries = retries

    def attempts(self) -> int:
        return self.retries + 1


class Box(Generic[T]):
    def __init__(self, label: str) -> None:
        self.label = label


class Shipment:
    """Depends on a parameterised generic class."""

    def __init__(self, box: Box[str]) -> None:
        self.box = box


@dataclass
class Record:
    id: int


class AuditedRecord(Record):
    """Plain subclass of a dataclass with its own __init__."""

    def __init__(self, repository: Repository) -> None:
        super().__init__(0)
        self.repository = repository


class ArchivedRecord(Record):
    """Plain subclass inheriting the generated __init__."""


# =============================================================================
# Fakes
# =============================================================================


class InMemoryRepository:
    """Repository implementation backed by a dict."""

    def __init__(self) -> None:
        self.rows: dict[str, dict[str, Any]] = {}

    def load(self, key: str) -> dict[str, Any]:
        return self.rows.get(key, {"key": key})

    def save(self, key: str, value: dict[str, Any]) -> None:
        self.rows[key] = value


def _tagged_fake(kind: str, tp: Any, args: Sequence[object]) -> Any:
    fake = mock.NonCallableMagicMock(spec=tp) if isinstance(tp, type) else mock.MagicMock()
    fake.fixture_kind = kind
    fake.fixture_args = tuple(args)
    return fake


@dataclass
class FactoryRecorder:
    """Fake factories recording every call.

    Recording goes through the plugin's RecordingFactories. The factories
    behind it return a mock spec'd on the requested type (so the builder's
    instance check passes) tagged with ``fixture_kind`` and
    ``fixture_args``, so tests can tell which factory produced which value.
    """

    recording: RecordingFactories = field(default_factory=RecordingFactories)

    @property
    def calls(self) -> list[tuple[str, Any, tuple[object, ...]]]:
        return [(call.kind, call.type, call.args) for call in self.recording.calls]

    def _factory(self, kind: str) -> FakeFactory:
        return self.recording.wrap(kind, functools.partial(_tagged_fake, kind))

    @property
    def stub(self) -> FakeFactory:
        return self._factory("stub")

    @property
    def mock(self) -> FakeFactory:
        return self._factory("mock")

    @property
    def strict_mock(self) -> FakeFactory:
        return self._factory("strict_mock")

    @property
    def partial_mock(self) -> FakeFactory:
        return self._factory("partial_mock")

    def registry(self, config: FixtureConfig | None = None) -> FakeFactoryRegistry:
        """A fresh registry whose four slots record into this recorder."""
        registry = FakeFactoryRegistry(config if config is not None else FixtureConfig())
        registry.register_stub_factory(functools.partial(_tagged_fake, "stub"))
        registry.register_mock_factory(functools.partial(_tagged_fake, "mock"))
        registry.register_strict_mock_factory(
            functools.partial(_tagged_fake, "strict_mock")
        )
        registry.register_partial_mock_factory(
            functools.partial(_tagged_fake, "partial_mock")
        )
        self.recording.install(registry)
        return registry

    def of_kind(self, kind: str) -> list[tuple[Any, tuple[object, ...]]]:
        return [(call.type, call.args) for call in self.recording.of_kind(kind)]
