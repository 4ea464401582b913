"""Configuration dataclass for fixturekit.

Provides FixtureConfig for the process-wide defaults of the fake registry
and the builders. It can be constructed programmatically, loaded from
environment variables with from_env(), or from a fixturekit.yaml file via
fixturekit.infra.io.config_loader.load_config().

Environment Variables:
    FIXTUREKIT_BACKEND: Fake backend name (default: autospec)
    FIXTUREKIT_DEEP: Default deep-resolution flag for builders (default: false)
    FIXTUREKIT_DETECT_CYCLES: Raise CyclicDependencyError on cycles (default: true)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any

from fixturekit.core.errors import ConfigurationError
from fixturekit.infra.backends import BackendRegistry

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _parse_bool(name: str, raw: str, errors: list[str]) -> bool | None:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    errors.append(f"{name} must be a boolean (true/false), got: {raw!r}")
    return None


@dataclass(frozen=True)
class FixtureConfig:
    """Defaults shared by every builder using a registry.

    Attributes:
        backend: Name of the fake backend supplying the default factories.
            Env: FIXTUREKIT_BACKEND (default: autospec)
        deep: Deep resolution when a build call passes ``deep=None``.
            Env: FIXTUREKIT_DEEP (default: false)
        detect_cycles: Raise CyclicDependencyError instead of recursing until
            RecursionError. Env: FIXTUREKIT_DETECT_CYCLES (default: true)

    Example:
        config = FixtureConfig(backend="spec", deep=True)
        config = FixtureConfig.from_env()
    """

    backend: str = BackendRegistry.DEFAULT
    deep: bool = False
    detect_cycles: bool = True

    @classmethod
    def from_env(
        cls, base: FixtureConfig | None = None, *, validate: bool = True
    ) -> FixtureConfig:
        """Create a FixtureConfig from environment variables.

        Unset variables keep the value from ``base`` (or the defaults).

        Raises:
            ConfigurationError: If a variable is malformed, or if
                validate=True and the resulting configuration is invalid.
        """
        config = base if base is not None else cls()
        errors: list[str] = []
        changes: dict[str, Any] = {}

        backend = os.environ.get("FIXTUREKIT_BACKEND") or None
        if backend is not None:
            changes["backend"] = backend.strip()

        for field_name, env_name in (
            ("deep", "FIXTUREKIT_DEEP"),
            ("detect_cycles", "FIXTUREKIT_DETECT_CYCLES"),
        ):
            raw = os.environ.get(env_name)
            if raw:
                parsed = _parse_bool(env_name, raw, errors)
                if parsed is not None:
                    changes[field_name] = parsed

        if errors:
            raise ConfigurationError(errors)

        config = replace(config, **changes)
        if validate:
            errors = config.validate()
            if errors:
                raise ConfigurationError(errors)
        return config

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of error messages. Empty list if configuration is valid.
        """
        errors: list[str] = []
        available = BackendRegistry().list_backends()
        if self.backend not in available:
            errors.append(
                f"backend must be one of {', '.join(available)}, got: {self.backend!r}"
            )
        for field in fields(self):
            if field.type in ("bool", bool) and not isinstance(
                getattr(self, field.name), bool
            ):
                errors.append(f"{field.name} must be a boolean")
        return errors
