"""InstanceBuilder and the Builder facade.

A builder is single use: register overrides with with_dependency(), then
call exactly one of build(), build_mock() or build_partial_mock().

    service = (
        Builder(OrderService)
        .with_dependency(Repository, in_memory_repo)
        .build()
    )

Every constructor parameter without an override is filled by a
DependencyResolver over the registry's stub factory. The three build
variants differ only in how the top-level target is instantiated:

- build(): the selected constructor, called with the real arguments
- build_mock(): the registry's mock factory
- build_partial_mock(): a caller-supplied ``(args) -> target`` function,
  or the registry's partial-mock factory when none is given

Subclasses may override before_dependency_resolution() and before_build()
to inject last-moment overrides or adjust resolved values.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Generic, TypeVar, cast

from fixturekit.core.errors import (
    BuildFailureError,
    DuplicateDependencyError,
    ResolutionFailureError,
    SingleUseViolationError,
    type_name,
)
from fixturekit.core.protocols import (
    FakeFactory,
    InstantiationStrategy,
    PartialMockFactory,
)
from fixturekit.domain.classification import normalize_annotation
from fixturekit.domain.constructors import select_constructor
from fixturekit.domain.resolver import DependencyResolver
from fixturekit.registry import FakeFactoryRegistry, resolve_registry

logger = logging.getLogger(__name__)

T = TypeVar("T")


def ensure_instance(value: Any, target: Any) -> Any:
    """Check that ``value`` is usable as ``target``.

    Skipped for annotations isinstance() cannot check (non-runtime
    protocols, generic aliases).

    Raises:
        ResolutionFailureError: If ``value`` is not an instance of ``target``.
    """
    if not isinstance(target, type):
        return value
    try:
        matches = isinstance(value, target)
    except TypeError:
        return value
    if not matches:
        mismatch = TypeError(
            f"factory returned {type(value).__qualname__}, "
            f"expected {type_name(target)}"
        )
        raise ResolutionFailureError(target, mismatch) from mismatch
    return value


class InstanceBuilder(Generic[T]):
    """Single-use builder for one instance of ``target``.

    Args:
        target: The class to build.
        registry: Fake factories and defaults to use (default:
            ``fixturekit.registry.default_registry``).
    """

    def __init__(self, target: type[T], registry: FakeFactoryRegistry | None = None) -> None:
        self._target = target
        self._registry = resolve_registry(registry)
        self._dependencies: dict[Any, Any] = {}
        self._is_built = False

    @property
    def target(self) -> type[T]:
        return self._target

    @property
    def is_built(self) -> bool:
        return self._is_built

    @property
    def dependencies(self) -> dict[Any, Any]:
        """A copy of the registered overrides."""
        return dict(self._dependencies)

    def with_dependency(self, dependency_type: Any, value: Any) -> InstanceBuilder[T]:
        """Use ``value`` for every constructor parameter declared as ``dependency_type``.

        The key is the declared type, never ``type(value)``. It is normalized
        like parameter annotations, so ``Repository | None`` and
        ``Repository`` are the same key.

        Raises:
            DuplicateDependencyError: If ``dependency_type`` is already registered.
        """
        key = normalize_annotation(dependency_type)
        if key in self._dependencies:
            raise DuplicateDependencyError(dependency_type)
        self._dependencies[key] = value
        return self

    def build(self, deep: bool | None = None) -> T:
        """Build the target with its real constructor."""
        return self._build(None, deep)

    def build_mock(self, deep: bool | None = None) -> T:
        """Build the target through the registry's mock factory."""
        return self._build(self._registry.mock, deep)

    def build_partial_mock(
        self,
        deep: bool | None = None,
        partial_factory: PartialMockFactory | None = None,
    ) -> T:
        """Build the target through a partial-mock constructor.

        Args:
            deep: Deep resolution of nested concrete dependencies.
            partial_factory: ``(args) -> target``; receives the resolved
                arguments in constructor order. Defaults to the registry's
                partial-mock factory.
        """
        if partial_factory is None:
            return self._build(self._registry.partial_mock, deep)
        factory = partial_factory
        return self._build(lambda _tp, args: factory(args), deep)

    def before_dependency_resolution(
        self, dependencies: dict[Any, Any], parameter_types: Sequence[Any]
    ) -> None:
        """Hook: called before unresolved parameters are filled."""

    def before_build(
        self, dependencies: dict[Any, Any], parameter_values: dict[Any, Any]
    ) -> None:
        """Hook: called with every parameter value before instantiation."""

    def _build(self, instantiate: InstantiationStrategy | None, deep: bool | None) -> T:
        if self._is_built:
            raise SingleUseViolationError(self._target)
        self._is_built = True
        effective_deep = self._registry.config.deep if deep is None else deep
        logger.debug(
            "building %s (deep=%s, overrides=%d)",
            type_name(self._target),
            effective_deep,
            len(self._dependencies),
        )
        try:
            constructor = select_constructor(self._target, most_parameters=True)
            parameter_types = constructor.parameter_types
            self.before_dependency_resolution(self._dependencies, parameter_types)
            parameter_values = self._fill_dependencies(
                parameter_types, self._registry.stub, effective_deep
            )
            self.before_build(self._dependencies, parameter_values)
            args = [parameter_values[tp] for tp in parameter_types]
            if instantiate is None:
                instance = constructor.invoke(args)
            else:
                instance = instantiate(self._target, args)
            result = ensure_instance(instance, self._target)
        except Exception as e:
            logger.debug("failed to build %s: %s", type_name(self._target), e)
            raise BuildFailureError(self._target, e) from e
        self._dependencies = {}
        return cast("T", result)

    def _fill_dependencies(
        self, parameter_types: Sequence[Any], fake_factory: FakeFactory, deep: bool
    ) -> dict[Any, Any]:
        resolver = DependencyResolver(
            fake_factory,
            deep=deep,
            detect_cycles=self._registry.config.detect_cycles,
        )
        values: dict[Any, Any] = {}
        for tp in parameter_types:
            if tp in values:
                continue
            if tp in self._dependencies:
                values[tp] = self._dependencies[tp]
            else:
                values[tp] = resolver.resolve(tp)
        return values


class Builder(InstanceBuilder[T]):
    """InstanceBuilder plus one-shot fakes of a type.

    The static methods skip override bookkeeping entirely; ``deep=None`` uses
    the registry config like the build methods do:

        repo = Builder.generate_stub(Repository)
        client = Builder.generate_mock(HttpClient, deep=True)
    """

    @staticmethod
    def generate_stub(
        target: type[T],
        deep: bool | None = None,
        registry: FakeFactoryRegistry | None = None,
    ) -> T:
        registry = resolve_registry(registry)
        return _generate(target, registry.stub, deep, registry)

    @staticmethod
    def generate_mock(
        target: type[T],
        deep: bool | None = None,
        registry: FakeFactoryRegistry | None = None,
    ) -> T:
        registry = resolve_registry(registry)
        return _generate(target, registry.mock, deep, registry)

    @staticmethod
    def generate_strict_mock(
        target: type[T],
        deep: bool | None = None,
        registry: FakeFactoryRegistry | None = None,
    ) -> T:
        registry = resolve_registry(registry)
        return _generate(target, registry.strict_mock, deep, registry)


def _generate(
    target: type[T],
    fake_factory: FakeFactory,
    deep: bool | None,
    registry: FakeFactoryRegistry,
) -> T:
    resolver = DependencyResolver(
        fake_factory,
        deep=registry.config.deep if deep is None else deep,
        detect_cycles=registry.config.detect_cycles,
    )
    return cast("T", ensure_instance(resolver.resolve(target), target))
