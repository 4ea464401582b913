"""Constructor discovery and selection.

A class exposes its ``__init__`` signature plus any alternate-constructor
classmethods marked with @fixture_constructor:

    class Connection:
        def __init__(self, dsn: str) -> None: ...

        @classmethod
        @fixture_constructor
        def with_pool(cls, dsn: str, pool: Pool, timeout: float) -> Connection: ...

select_constructor() picks the richest (or leanest) of them. Ties go to the
lowest declaration index, i.e. ``__init__`` first, then class-body order.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable
from typing import Any, TypeVar

from fixturekit.core.errors import ConstructorNotFoundError
from fixturekit.core.models import ConstructorParameter, ConstructorSignature
from fixturekit.domain.classification import normalize_annotation

_MARKER = "__fixture_constructor__"

F = TypeVar("F", bound=Callable[..., Any])


def fixture_constructor(func: F) -> F:
    """Mark a classmethod as an alternate constructor visible to builders.

    Works above or below @classmethod.
    """
    target = func.__func__ if isinstance(func, classmethod) else func
    setattr(target, _MARKER, True)
    return func


def _is_marked(attribute: object) -> bool:
    return isinstance(attribute, classmethod) and getattr(
        attribute.__func__, _MARKER, False
    )


def _function_hints(owner: type, func: object) -> dict[str, Any]:
    if not (inspect.isfunction(func) or inspect.ismethod(func)):
        return {}
    try:
        return typing.get_type_hints(func)
    except Exception as e:
        raise ConstructorNotFoundError(
            owner, f"cannot evaluate annotations: {e}"
        ) from e


def _generated_init_owner(tp: type) -> type | None:
    """Return the dataclass whose generated ``__init__`` ``tp`` uses, if any."""
    owner = next((k for k in tp.__mro__ if "__init__" in vars(k)), None)
    if owner is None or "__dataclass_params__" not in vars(owner):
        return None
    return owner if owner.__dataclass_params__.init else None


def _init_hints(tp: type) -> dict[str, Any]:
    owner = _generated_init_owner(tp)
    if owner is not None:
        # Generated __init__ annotations may not evaluate in its globals
        try:
            return typing.get_type_hints(owner)
        except Exception as e:
            raise ConstructorNotFoundError(
                tp, f"cannot evaluate annotations: {e}"
            ) from e
    return _function_hints(tp, tp.__init__)


def _parameters(
    signature: inspect.Signature, hints: dict[str, Any]
) -> tuple[ConstructorParameter, ...]:
    parameters: list[ConstructorParameter] = []
    for parameter in signature.parameters.values():
        if parameter.kind in (
            inspect.Parameter.VAR_POSITIONAL,
            inspect.Parameter.VAR_KEYWORD,
        ):
            continue
        keyword_only = parameter.kind is inspect.Parameter.KEYWORD_ONLY
        if keyword_only and parameter.default is not inspect.Parameter.empty:
            continue
        annotation = hints.get(parameter.name, parameter.annotation)
        parameters.append(
            ConstructorParameter(
                name=parameter.name,
                annotation=normalize_annotation(annotation),
                keyword_only=keyword_only,
            )
        )
    return tuple(parameters)


def _signature(owner: type, func: Callable[..., Any]) -> inspect.Signature:
    try:
        return inspect.signature(func)
    except (TypeError, ValueError) as e:
        raise ConstructorNotFoundError(owner, str(e)) from e


def list_accessible_constructors(tp: type) -> list[ConstructorSignature]:
    """Return the constructors of ``tp`` in declaration order.

    Raises:
        ConstructorNotFoundError: If the signature of ``tp`` cannot be read.
    """
    constructors = [
        ConstructorSignature(
            owner=tp,
            name="__init__",
            factory=tp,
            parameters=_parameters(_signature(tp, tp), _init_hints(tp)),
            declaration_index=0,
        )
    ]

    seen: set[str] = set()
    for klass in tp.__mro__:
        for name, attribute in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if not _is_marked(attribute):
                continue
            bound = getattr(tp, name)
            constructors.append(
                ConstructorSignature(
                    owner=tp,
                    name=name,
                    factory=bound,
                    parameters=_parameters(
                        _signature(tp, bound), _function_hints(tp, bound.__func__)
                    ),
                    declaration_index=len(constructors),
                )
            )
    return constructors


def select_constructor(tp: type, most_parameters: bool) -> ConstructorSignature:
    """Pick the constructor with the most (or fewest) parameters.

    Sorting is stable, so among equal arities the lowest declaration index
    wins.
    """
    constructors = list_accessible_constructors(tp)
    ordered = sorted(constructors, key=lambda c: c.arity, reverse=most_parameters)
    return ordered[0]
