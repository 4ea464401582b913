"""Collaborator contracts for fixturekit.

The builder and resolver only ever talk to fake backends through these
callable shapes, so swapping the mocking library never touches the
resolution engine.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

# =============================================================================
# Type Aliases
# =============================================================================

# Fake factory: (type to fake, positional constructor arguments) -> fake.
# Must return an object usable as the given type, ready for immediate use.
FakeFactory = Callable[[Any, Sequence[object]], object]

# Instantiation strategy used by the builder for the top-level target.
# Same shape as FakeFactory; plain construction is one such strategy.
InstantiationStrategy = Callable[[Any, Sequence[object]], object]

# Caller-supplied partial mock constructor: (ordered arguments) -> target.
PartialMockFactory = Callable[[Sequence[object]], Any]


# =============================================================================
# Transaction stubbing seam
# =============================================================================


@runtime_checkable
class Transaction(Protocol):
    """A unit of work handed out by a TransactionFactory."""

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@runtime_checkable
class TransactionFactory(Protocol):
    """Creates transactions. Faked in tests and stubbed via the setter hook."""

    def create(self) -> Transaction: ...


# (transaction factory fake, producer of the value create() should return)
TransactionStubSetter = Callable[[Any, Callable[[], Any]], None]
