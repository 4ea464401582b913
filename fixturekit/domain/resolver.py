"""DependencyResolver: produce one value for a declared type.

Resolution order:
1. PRIMITIVE -> zero value
2. TEXT -> ""
3. CAPABILITY -> fake_factory(tp, [])
4. CONCRETE -> pick a constructor (richest when deep, leanest otherwise),
   resolve its parameters recursively and hand them to
   fake_factory(tp, args). The fake factory, not the real constructor,
   creates the value so tests can stub the nested object too.

Each level wraps failures in ResolutionFailureError, so a failing leaf
surfaces as a chain naming every type on the path to it.
"""

from __future__ import annotations

import logging
from typing import Any, get_origin

from fixturekit.core.errors import CyclicDependencyError, ResolutionFailureError
from fixturekit.core.models import TypeKind
from fixturekit.core.protocols import FakeFactory
from fixturekit.domain.classification import classify, normalize_annotation, zero_value
from fixturekit.domain.constructors import select_constructor

logger = logging.getLogger(__name__)


class DependencyResolver:
    """Resolves declared types to values using a single fake factory.

    Args:
        fake_factory: Creates fakes for capability and concrete types.
        deep: Use the richest constructor of nested concrete types instead
            of the leanest.
        detect_cycles: Raise CyclicDependencyError when a concrete type
            re-enters its own resolution. When off, a cycle recurses until
            RecursionError, which is wrapped like any other failure.
    """

    def __init__(
        self,
        fake_factory: FakeFactory,
        *,
        deep: bool = False,
        detect_cycles: bool = True,
    ) -> None:
        self._fake_factory = fake_factory
        self._deep = deep
        self._detect_cycles = detect_cycles
        self._chain: list[Any] = []

    @property
    def deep(self) -> bool:
        return self._deep

    def resolve(self, tp: Any) -> Any:
        """Produce a value satisfying ``tp``.

        Raises:
            ResolutionFailureError: If any step fails; the original error is
                chained as ``__cause__``.
        """
        tp = normalize_annotation(tp)
        try:
            value = self._resolve(tp)
        except CyclicDependencyError:
            raise
        except Exception as e:
            raise ResolutionFailureError(tp, e) from e
        return value

    def _resolve(self, tp: Any) -> Any:
        kind = classify(tp)
        if kind is TypeKind.PRIMITIVE:
            value = zero_value(tp)
        elif kind is TypeKind.TEXT:
            value = ""
        elif kind is TypeKind.CAPABILITY:
            value = self._fake_factory(tp, [])
        else:
            value = self._resolve_concrete(tp)
        logger.debug("resolved %r as %s", tp, kind.value)
        return value

    def _resolve_concrete(self, tp: type) -> Any:
        if self._detect_cycles and tp in self._chain:
            raise CyclicDependencyError(tp, self._chain)
        self._chain.append(tp)
        try:
            constructor = select_constructor(
                get_origin(tp) or tp, most_parameters=self._deep
            )
            args = [self.resolve(p) for p in constructor.parameter_types]
        finally:
            self._chain.pop()
        return self._fake_factory(tp, args)
