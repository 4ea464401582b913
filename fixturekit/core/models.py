"""Derived data used during resolution.

Nothing here outlives a single build call: signatures are recomputed each
time a type is resolved and plan steps are produced on demand.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any


class TypeKind(Enum):
    """How the resolver produces a value for a type."""

    PRIMITIVE = "primitive"  # has a zero value
    TEXT = "text"  # resolved to ""
    CAPABILITY = "capability"  # only satisfiable by a fake
    CONCRETE = "concrete"  # constructed via its own constructor


@dataclass(frozen=True)
class ConstructorParameter:
    """One parameter of a constructor, with its normalized annotation."""

    name: str
    annotation: Any
    keyword_only: bool = False


@dataclass(frozen=True)
class ConstructorSignature:
    """A constructor of a class: ``__init__`` or an alternate classmethod.

    Attributes:
        owner: The class this constructor creates.
        name: ``"__init__"`` or the classmethod name.
        factory: Callable that runs the constructor with real arguments.
        parameters: Ordered parameters; keyword-only ones come last.
        declaration_index: 0 for ``__init__``, then class-body order.
    """

    owner: type
    name: str
    factory: Callable[..., Any]
    parameters: tuple[ConstructorParameter, ...]
    declaration_index: int = 0

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def parameter_types(self) -> list[Any]:
        return [p.annotation for p in self.parameters]

    def invoke(self, args: Sequence[object]) -> Any:
        """Run the constructor with arguments in declared parameter order."""
        if len(args) != self.arity:
            raise TypeError(
                f"{self.owner.__qualname__}.{self.name} takes {self.arity} "
                f"arguments, got {len(args)}"
            )
        positional: list[object] = []
        keywords: dict[str, object] = {}
        for parameter, value in zip(self.parameters, args, strict=True):
            if parameter.keyword_only:
                keywords[parameter.name] = value
            else:
                positional.append(value)
        return self.factory(*positional, **keywords)


@dataclass(frozen=True)
class PlanStep:
    """How one constructor parameter would be filled by a build."""

    position: int
    name: str
    annotation: Any
    kind: TypeKind | None
    source: str
