"""Fake backends built on unittest.mock.

A backend bundles the four fake factories plus the transaction-stub setter.
Two backends ship with fixturekit:

- autospec (default): ``create_autospec(tp, instance=True)``; calls are
  checked against the real method signatures.
- spec: ``NonCallableMagicMock(spec=tp)``; attribute names are checked,
  signatures are not.

Fakes are usable immediately; unittest.mock has no record/replay phase.

Strict mocks raise UnexpectedCallError from every public method until the
test opts in with expect():

    fake = Builder.generate_strict_mock(Repository)
    expect(fake, "load", return_value=row)
"""

from __future__ import annotations

import collections.abc
import typing
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, get_origin
from unittest import mock

from fixturekit.core.errors import UnknownBackendError
from fixturekit.core.protocols import FakeFactory, TransactionStubSetter
from fixturekit.domain.constructors import select_constructor

_UNSET = object()


class UnexpectedCallError(AssertionError):
    """Raised when a strict mock method is called without an expectation."""

    def __init__(self, type_name: str, method: str) -> None:
        self.type_name = type_name
        self.method = method
        super().__init__(f"Unexpected call to {type_name}.{method}()")


def _fakeable_class(tp: Any) -> type | None:
    """Return the class to spec a fake on, or None for an unspecced fake."""
    if tp is Any or isinstance(tp, typing.TypeVar):
        return None
    origin = get_origin(tp)
    if origin is not None:
        tp = origin
    if tp is collections.abc.Callable:
        return None
    return tp if isinstance(tp, type) else None


def _public_methods(tp: type) -> list[str]:
    return [
        name
        for name in dir(tp)
        if not name.startswith("_") and callable(getattr(tp, name, None))
    ]


def _arm_strict(fake: Any, tp: type) -> Any:
    for name in _public_methods(tp):
        getattr(fake, name).side_effect = UnexpectedCallError(tp.__qualname__, name)
    return fake


def expect(fake: Any, method: str, return_value: Any = _UNSET, side_effect: Any = None) -> Any:
    """Allow ``method`` on a strict mock and return its child mock."""
    child = getattr(fake, method)
    child.side_effect = side_effect
    if return_value is not _UNSET:
        child.return_value = return_value
    return child


# =============================================================================
# autospec backend
# =============================================================================


def autospec_fake(tp: Any, args: Sequence[object]) -> Any:
    cls = _fakeable_class(tp)
    if cls is None:
        return mock.MagicMock()
    return mock.create_autospec(cls, instance=True)


def autospec_strict_mock(tp: Any, args: Sequence[object]) -> Any:
    cls = _fakeable_class(tp)
    if cls is None:
        return mock.MagicMock(side_effect=UnexpectedCallError(repr(tp), "__call__"))
    return _arm_strict(mock.create_autospec(cls, instance=True, spec_set=True), cls)


# =============================================================================
# spec backend
# =============================================================================


def spec_fake(tp: Any, args: Sequence[object]) -> Any:
    cls = _fakeable_class(tp)
    if cls is None:
        return mock.MagicMock()
    return mock.NonCallableMagicMock(spec=cls)


def spec_strict_mock(tp: Any, args: Sequence[object]) -> Any:
    cls = _fakeable_class(tp)
    if cls is None:
        return mock.MagicMock(side_effect=UnexpectedCallError(repr(tp), "__call__"))
    return _arm_strict(mock.NonCallableMagicMock(spec_set=cls), cls)


# =============================================================================
# shared
# =============================================================================


def partial_mock(tp: Any, args: Sequence[object]) -> Any:
    """Build a real instance and turn its public methods into spies.

    The instance comes from the richest constructor of ``tp``, the one the
    builder computes ``args`` for; keyword-only parameters are passed by name.

    Data attributes stay real. Each public method is replaced on the instance
    by a MagicMock wrapping the bound method: calls go through to the real
    code until the test sets ``return_value`` or ``side_effect``.
    """
    cls = get_origin(tp) or tp
    instance = select_constructor(cls, most_parameters=True).invoke(args)
    for name in _public_methods(type(instance)):
        bound = getattr(instance, name)
        setattr(instance, name, mock.MagicMock(wraps=bound, name=name))
    return instance


def stub_get_transaction(transaction_factory: Any, get_transaction: Callable[[], Any]) -> None:
    """Make ``transaction_factory.create()`` return ``get_transaction()``."""
    transaction_factory.create.return_value = get_transaction()


@dataclass(frozen=True)
class FakeBackend:
    """The factory functions one mocking backend contributes."""

    name: str
    stub: FakeFactory
    mock: FakeFactory
    strict_mock: FakeFactory
    partial_mock: FakeFactory
    transaction_stub_setter: TransactionStubSetter = stub_get_transaction


class BackendRegistry:
    """Registry of built-in fake backends.

    Example:
        >>> BackendRegistry().get("spec").name
        'spec'
    """

    DEFAULT: ClassVar[str] = "autospec"

    _BACKENDS: ClassVar[dict[str, FakeBackend]] = {
        "autospec": FakeBackend(
            name="autospec",
            stub=autospec_fake,
            mock=autospec_fake,
            strict_mock=autospec_strict_mock,
            partial_mock=partial_mock,
        ),
        "spec": FakeBackend(
            name="spec",
            stub=spec_fake,
            mock=spec_fake,
            strict_mock=spec_strict_mock,
            partial_mock=partial_mock,
        ),
    }

    def get(self, name: str) -> FakeBackend:
        """Return the backend called ``name``.

        Raises:
            UnknownBackendError: If the name is not recognized.
        """
        if name not in self._BACKENDS:
            raise UnknownBackendError(name, self.list_backends())
        return self._BACKENDS[name]

    def list_backends(self) -> list[str]:
        """Return a sorted list of backend names."""
        return sorted(self._BACKENDS.keys())
