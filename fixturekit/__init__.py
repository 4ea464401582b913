"""fixturekit: build test subjects with every missing dependency faked."""

from fixturekit.config import FixtureConfig
from fixturekit.core.errors import (
    BuildFailureError,
    ConfigurationError,
    ConstructorNotFoundError,
    CyclicDependencyError,
    DuplicateDependencyError,
    FixtureError,
    ResolutionFailureError,
    SingleUseViolationError,
    UnknownBackendError,
    UnsupportedTypeError,
)
from fixturekit.core.models import TypeKind
from fixturekit.domain.builder import Builder, InstanceBuilder
from fixturekit.domain.classification import classify
from fixturekit.domain.constructors import fixture_constructor
from fixturekit.domain.plan import describe_plan
from fixturekit.domain.resolver import DependencyResolver
from fixturekit.infra.backends import UnexpectedCallError, expect
from fixturekit.registry import (
    FakeFactoryRegistry,
    configure,
    default_registry,
    register_mock_factory,
    register_partial_mock_factory,
    register_strict_mock_factory,
    register_stub_factory,
    register_transaction_stub_setter,
    stub_transaction,
)

__version__ = "0.1.0"
__all__ = [
    "BuildFailureError",
    "Builder",
    "ConfigurationError",
    "ConstructorNotFoundError",
    "CyclicDependencyError",
    "DependencyResolver",
    "DuplicateDependencyError",
    "FakeFactoryRegistry",
    "FixtureConfig",
    "FixtureError",
    "InstanceBuilder",
    "ResolutionFailureError",
    "SingleUseViolationError",
    "TypeKind",
    "UnexpectedCallError",
    "UnknownBackendError",
    "UnsupportedTypeError",
    "__version__",
    "classify",
    "configure",
    "default_registry",
    "describe_plan",
    "expect",
    "fixture_constructor",
    "register_mock_factory",
    "register_partial_mock_factory",
    "register_strict_mock_factory",
    "register_stub_factory",
    "register_transaction_stub_setter",
    "stub_transaction",
]
