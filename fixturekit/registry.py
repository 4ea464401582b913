"""FakeFactoryRegistry: the swappable fake factories.

A registry holds one function per fake kind (stub, mock, strict mock,
partial mock) plus the transaction-stub setter. ``default_registry`` is the
process-wide instance every builder uses unless it is handed its own.

Mutating a registry is not thread-safe; do it during serial test setup, or
use override() to swap factories for one block:

    with default_registry.override(stub=recording_stub):
        service = Builder(Service).build()
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from fixturekit.config import FixtureConfig
from fixturekit.core.protocols import FakeFactory, TransactionStubSetter
from fixturekit.infra.backends import BackendRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrySnapshot:
    """Saved factory slots, restorable with FakeFactoryRegistry.restore()."""

    stub: FakeFactory
    mock: FakeFactory
    strict_mock: FakeFactory
    partial_mock: FakeFactory
    transaction_stub_setter: TransactionStubSetter


class FakeFactoryRegistry:
    """Process-wide configuration of fake factories.

    Attributes:
        config: The FixtureConfig this registry was built from.
        stub, mock, strict_mock, partial_mock: ``(type, args) -> fake``.
        transaction_stub_setter: ``(transaction_factory, get_transaction) -> None``.
    """

    def __init__(self, config: FixtureConfig | None = None) -> None:
        self._load(config if config is not None else FixtureConfig())

    @classmethod
    def from_config(cls, config: FixtureConfig) -> FakeFactoryRegistry:
        """Create a registry whose slots come from ``config.backend``.

        Raises:
            UnknownBackendError: If the backend name is not recognized.
        """
        return cls(config)

    def _load(self, config: FixtureConfig) -> None:
        backend = BackendRegistry().get(config.backend)
        self.config = config
        self.stub: FakeFactory = backend.stub
        self.mock: FakeFactory = backend.mock
        self.strict_mock: FakeFactory = backend.strict_mock
        self.partial_mock: FakeFactory = backend.partial_mock
        self.transaction_stub_setter: TransactionStubSetter = (
            backend.transaction_stub_setter
        )
        logger.debug("fake registry loaded backend %s", backend.name)

    def configure(self, config: FixtureConfig) -> None:
        """Reset every slot from ``config``, replacing any registered override."""
        self._load(config)

    def register_stub_factory(self, factory: FakeFactory) -> None:
        self.stub = factory

    def register_mock_factory(self, factory: FakeFactory) -> None:
        self.mock = factory

    def register_strict_mock_factory(self, factory: FakeFactory) -> None:
        self.strict_mock = factory

    def register_partial_mock_factory(self, factory: FakeFactory) -> None:
        self.partial_mock = factory

    def register_transaction_stub_setter(self, setter: TransactionStubSetter) -> None:
        self.transaction_stub_setter = setter

    def snapshot(self) -> RegistrySnapshot:
        return RegistrySnapshot(
            stub=self.stub,
            mock=self.mock,
            strict_mock=self.strict_mock,
            partial_mock=self.partial_mock,
            transaction_stub_setter=self.transaction_stub_setter,
        )

    def restore(self, snapshot: RegistrySnapshot) -> None:
        self.stub = snapshot.stub
        self.mock = snapshot.mock
        self.strict_mock = snapshot.strict_mock
        self.partial_mock = snapshot.partial_mock
        self.transaction_stub_setter = snapshot.transaction_stub_setter

    @contextmanager
    def override(
        self,
        *,
        stub: FakeFactory | None = None,
        mock: FakeFactory | None = None,
        strict_mock: FakeFactory | None = None,
        partial_mock: FakeFactory | None = None,
        transaction_stub_setter: TransactionStubSetter | None = None,
    ) -> Iterator[FakeFactoryRegistry]:
        """Swap the given slots for the duration of the block.

        The previous slots are restored on exit, also when the block raises.
        Slots registered inside the block are discarded too.
        """
        saved = self.snapshot()
        if stub is not None:
            self.stub = stub
        if mock is not None:
            self.mock = mock
        if strict_mock is not None:
            self.strict_mock = strict_mock
        if partial_mock is not None:
            self.partial_mock = partial_mock
        if transaction_stub_setter is not None:
            self.transaction_stub_setter = transaction_stub_setter
        try:
            yield self
        finally:
            self.restore(saved)


default_registry = FakeFactoryRegistry()


def resolve_registry(registry: FakeFactoryRegistry | None) -> FakeFactoryRegistry:
    return registry if registry is not None else default_registry


def configure(config: FixtureConfig) -> FakeFactoryRegistry:
    """Reload ``default_registry`` in place from ``config``."""
    default_registry.configure(config)
    return default_registry


def register_stub_factory(factory: FakeFactory) -> None:
    default_registry.register_stub_factory(factory)


def register_mock_factory(factory: FakeFactory) -> None:
    default_registry.register_mock_factory(factory)


def register_strict_mock_factory(factory: FakeFactory) -> None:
    default_registry.register_strict_mock_factory(factory)


def register_partial_mock_factory(factory: FakeFactory) -> None:
    default_registry.register_partial_mock_factory(factory)


def register_transaction_stub_setter(setter: TransactionStubSetter) -> None:
    default_registry.register_transaction_stub_setter(setter)


def stub_transaction(
    transaction_factory: Any,
    get_transaction: Callable[[], Any],
    registry: FakeFactoryRegistry | None = None,
) -> None:
    """Make a transaction-factory fake hand out ``get_transaction()``.

    Delegates to the registry's transaction-stub setter so callers do not
    depend on one backend's stubbing syntax.
    """
    resolve_registry(registry).transaction_stub_setter(
        transaction_factory, get_transaction
    )
