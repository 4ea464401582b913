"""Exception taxonomy for fixturekit.

Every failure surfaces synchronously to the caller of a build or facade
method. Nothing is retried: fixture construction is deterministic, so the
fix is always in the test setup (register a missing override, add a
resolvable constructor, etc.).

Key types:
- FixtureError: Base class for all fixturekit errors
- DuplicateDependencyError: Same dependency type registered twice on a builder
- SingleUseViolationError: A builder was asked to build a second time
- ResolutionFailureError: A dependency subtree could not be produced
- BuildFailureError: The builder boundary wrapper around any build failure
"""

from __future__ import annotations

from collections.abc import Sequence


def type_name(tp: object) -> str:
    """Return a readable name for a class or annotation."""
    if isinstance(tp, type):
        return tp.__qualname__
    return repr(tp)


class FixtureError(Exception):
    """Base exception for fixturekit errors."""

    pass


class DuplicateDependencyError(FixtureError):
    """Raised when a dependency type is registered twice on one builder.

    Example:
        >>> raise DuplicateDependencyError(Repository)
        DuplicateDependencyError: A dependency of type Repository has already been registered.
    """

    def __init__(self, dependency_type: object) -> None:
        self.dependency_type = dependency_type
        super().__init__(
            f"A dependency of type {type_name(dependency_type)} has already been registered."
        )


class SingleUseViolationError(FixtureError):
    """Raised when any build variant is called on an already-built builder."""

    def __init__(self, target: type) -> None:
        self.target = target
        super().__init__(
            f"Target {type_name(target)} may only be built once per builder instance."
        )


class ResolutionFailureError(FixtureError):
    """Raised when a value cannot be produced for a type.

    Wraps the original cause (also available as ``__cause__``) and names
    the type whose subtree failed.
    """

    def __init__(self, tp: object, cause: BaseException | None = None) -> None:
        self.type = tp
        self.cause = cause
        super().__init__(f"Failed to create dependency stub for type {type_name(tp)}")


class CyclicDependencyError(ResolutionFailureError):
    """Raised when a concrete type (transitively) depends on itself.

    Example:
        >>> raise CyclicDependencyError(Parent, [Parent, Child])
        CyclicDependencyError: Cyclic dependency detected: Parent -> Child -> Parent
    """

    def __init__(self, tp: object, chain: Sequence[object]) -> None:
        self.chain = [*chain, tp]
        super().__init__(tp)
        self.args = (
            "Cyclic dependency detected: "
            + " -> ".join(type_name(t) for t in self.chain),
        )


class UnsupportedTypeError(ResolutionFailureError):
    """Raised when an annotation cannot be classified."""

    def __init__(self, tp: object, reason: str) -> None:
        self.reason = reason
        super().__init__(tp)
        self.args = (f"Unsupported dependency type {type_name(tp)}: {reason}",)


class ConstructorNotFoundError(ResolutionFailureError):
    """Raised when no usable constructor can be found for a class."""

    def __init__(self, tp: object, reason: str) -> None:
        self.reason = reason
        super().__init__(tp)
        self.args = (f"No usable constructor for type {type_name(tp)}: {reason}",)


class BuildFailureError(FixtureError):
    """Raised at the builder boundary for any failure while building."""

    def __init__(self, target: type, cause: BaseException) -> None:
        self.target = target
        self.cause = cause
        super().__init__(f"Failed to build instance of type {type_name(target)}.")


class ConfigurationError(FixtureError):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        message = "Configuration validation failed:\n" + "\n".join(
            f"  - {e}" for e in errors
        )
        super().__init__(message)


class UnknownBackendError(FixtureError):
    """Raised when a fake backend name is not recognized.

    Example:
        >>> raise UnknownBackendError("rhino", ["autospec", "spec"])
        UnknownBackendError: Unknown fake backend 'rhino'. Available backends: autospec, spec
    """

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        if self.available:
            available_str = ", ".join(sorted(self.available))
            message = f"Unknown fake backend '{name}'. Available backends: {available_str}"
        else:
            message = f"Unknown fake backend '{name}'"
        super().__init__(message)
