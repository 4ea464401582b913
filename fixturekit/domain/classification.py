"""Closed classification of annotations into TypeKind.

Every annotation the resolver can handle maps to exactly one TypeKind:

- TEXT: ``str``
- PRIMITIVE: numbers, bytes, enums, ``Literal[...]``, ``None`` and the
  builtin containers; each has a zero value
- CAPABILITY: ``Any``, type variables, protocols, abstract classes and the
  ``collections.abc`` interfaces; only a fake can satisfy them
- CONCRETE: every other class

Wrappers that do not change how a value is produced are stripped first
(see normalize_annotation).
"""

from __future__ import annotations

import inspect
import types
import typing
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Literal, get_args, get_origin

from fixturekit.core.errors import UnsupportedTypeError
from fixturekit.core.models import TypeKind

# Exact classes whose no-argument call yields their zero state.
# Subclasses are not included: a NamedTuple is a tuple subclass but must be
# built from its fields.
_ZERO_CONSTRUCTIBLE: frozenset[type] = frozenset(
    {
        bool,
        int,
        float,
        complex,
        bytes,
        bytearray,
        Decimal,
        Fraction,
        list,
        dict,
        set,
        frozenset,
        tuple,
    }
)


def normalize_annotation(annotation: Any) -> Any:
    """Strip annotation wrappers down to the type that gets resolved.

    - missing annotation -> ``Any``
    - ``None`` -> ``NoneType``
    - ``Annotated[X, ...]`` -> ``X``
    - ``X | None`` / ``Optional[X]`` -> ``X``; other unions -> first member
    - ``NewType("Name", X)`` -> ``X``
    """
    if annotation is inspect.Parameter.empty:
        return Any
    if annotation is None:
        return types.NoneType
    origin = get_origin(annotation)
    if origin is typing.Annotated:
        return normalize_annotation(get_args(annotation)[0])
    if origin is typing.Union or origin is types.UnionType:
        members = [a for a in get_args(annotation) if a is not types.NoneType]
        if not members:
            return types.NoneType
        return normalize_annotation(members[0])
    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return normalize_annotation(supertype)
    return annotation


def _is_protocol(tp: type) -> bool:
    return bool(getattr(tp, "_is_protocol", False))


def classify(tp: Any) -> TypeKind:
    """Classify an annotation.

    Raises:
        UnsupportedTypeError: If the annotation is not a class or a known
            typing construct.
    """
    tp = normalize_annotation(tp)
    if tp is str:
        return TypeKind.TEXT
    if tp is types.NoneType:
        return TypeKind.PRIMITIVE
    if tp is Any or isinstance(tp, typing.TypeVar):
        return TypeKind.CAPABILITY

    origin = get_origin(tp)
    if origin is Literal:
        return TypeKind.PRIMITIVE
    if origin is type:
        raise UnsupportedTypeError(tp, "class objects cannot be faked")
    if origin is not None:
        # Parameterised generics classify by their origin class
        return classify(origin)

    if not isinstance(tp, type):
        raise UnsupportedTypeError(tp, "annotation is not a class")
    if tp in _ZERO_CONSTRUCTIBLE or issubclass(tp, Enum):
        return TypeKind.PRIMITIVE
    if _is_protocol(tp) or inspect.isabstract(tp) or tp.__module__ == "collections.abc":
        return TypeKind.CAPABILITY
    return TypeKind.CONCRETE


def zero_value(tp: Any) -> Any:
    """Return the zero value of a PRIMITIVE annotation."""
    tp = normalize_annotation(tp)
    if tp is types.NoneType:
        return None
    origin = get_origin(tp)
    if origin is Literal:
        return get_args(tp)[0]
    if origin is not None:
        tp = origin
    if isinstance(tp, type) and issubclass(tp, Enum):
        members = list(tp)
        if not members:
            raise UnsupportedTypeError(tp, "enum has no members")
        return members[0]
    return tp()
