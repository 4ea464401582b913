"""Dry-run description of how a builder would fill a constructor.

describe_plan() mirrors InstanceBuilder's parameter handling without calling
any fake factory, so it is safe to run against production classes from the
CLI.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, get_origin

from fixturekit.core.errors import ResolutionFailureError
from fixturekit.core.models import PlanStep, TypeKind
from fixturekit.domain.classification import classify, normalize_annotation, zero_value
from fixturekit.domain.constructors import select_constructor


def _describe(tp: Any, deep: bool) -> tuple[TypeKind | None, str]:
    try:
        kind = classify(tp)
        if kind is TypeKind.PRIMITIVE:
            return kind, f"zero value ({zero_value(tp)!r})"
        if kind is TypeKind.TEXT:
            return kind, "empty string"
        if kind is TypeKind.CAPABILITY:
            return kind, "stub"
        constructor = select_constructor(get_origin(tp) or tp, most_parameters=deep)
        return kind, f"stub via {constructor.name} ({constructor.arity} args)"
    except ResolutionFailureError as e:
        return None, f"unresolvable: {e}"


def describe_plan(
    target: type, deep: bool = False, overrides: Iterable[Any] = ()
) -> list[PlanStep]:
    """Describe every parameter of ``target``'s richest constructor.

    Args:
        target: The class a builder would build.
        deep: Describe nested concrete types with their richest constructor.
        overrides: Types that would be registered with with_dependency().

    Raises:
        ConstructorNotFoundError: If ``target``'s constructors cannot be read.
    """
    overridden = {normalize_annotation(tp) for tp in overrides}
    constructor = select_constructor(target, most_parameters=True)
    steps: list[PlanStep] = []
    for position, parameter in enumerate(constructor.parameters):
        if parameter.annotation in overridden:
            kind, source = None, "override"
        else:
            kind, source = _describe(parameter.annotation, deep)
        steps.append(
            PlanStep(
                position=position,
                name=parameter.name,
                annotation=parameter.annotation,
                kind=kind,
                source=source,
            )
        )
    return steps
