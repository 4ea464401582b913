"""Integration tests for the fixturekit pytest plugin fixtures.

The plugin is loaded by the root conftest, so these tests use its fixtures
directly, the way a downstream test suite would.
"""

from __future__ import annotations

import pytest

from fixturekit import Builder, expect
from fixturekit.infra.backends import UnexpectedCallError, autospec_fake
from fixturekit.pytest_plugin import RecordingFactories
from fixturekit.registry import FakeFactoryRegistry, default_registry
from tests.fakes import (
    Checkout,
    Clock,
    FactoryRecorder,
    Gateway,
    OrderService,
    Repository,
    Settings,
)

pytestmark = pytest.mark.integration


class TestFakeRegistryFixture:
    def test_is_default_registry(self, fake_registry: FakeFactoryRegistry) -> None:
        assert fake_registry is default_registry

    def test_registration_is_visible_to_builders(
        self, fake_registry: FakeFactoryRegistry
    ) -> None:
        marker = InMemoryMarker()
        fake_registry.register_stub_factory(lambda tp, args: marker.for_type(tp))

        service = Builder(OrderService).build()

        assert service.repository is marker.fakes[Repository]

    def test_previous_registration_was_undone(
        self, fake_registry: FakeFactoryRegistry
    ) -> None:
        assert fake_registry.stub is autospec_fake


class InMemoryMarker:
    """Produces one autospec fake per type and remembers it."""

    def __init__(self) -> None:
        self.fakes: dict[object, object] = {}

    def for_type(self, tp: object) -> object:
        self.fakes[tp] = autospec_fake(tp, ())
        return self.fakes[tp]


class TestRecordingFactories:
    """The recording_factories fixture."""

    def test_records_stub_calls_during_build(
        self, recording_factories: RecordingFactories
    ) -> None:
        checkout = Builder(Checkout).build(deep=True)

        assert recording_factories.types("stub") == [
            Settings,
            Clock,
            Gateway,
            Repository,
        ]
        assert checkout.repository is recording_factories.of_kind("stub")[-1].result

    def test_records_strict_mock_and_fakes_stay_real(
        self, recording_factories: RecordingFactories
    ) -> None:
        repository = Builder.generate_strict_mock(Repository)

        (call,) = recording_factories.of_kind("strict_mock")
        assert call.type is Repository
        assert call.args == ()
        assert call.result is repository
        with pytest.raises(UnexpectedCallError):
            repository.load("k")
        expect(repository, "load", return_value={})
        assert repository.load("k") == {}

    def test_records_partial_mock(self, recording_factories: RecordingFactories) -> None:
        service = Builder(OrderService).with_dependency(int, 3).build_partial_mock()

        (call,) = recording_factories.of_kind("partial_mock")
        assert call.type is OrderService
        assert call.args[1:] == (3, "")
        assert isinstance(service, OrderService)
        service.place("k")
        service.place.assert_called_once_with("k")
        service.repository.load.assert_called_once_with("k")


class TestFactoryRecorderSharesRecording:
    def test_registry_calls_land_in_recording_factories(self) -> None:
        recorder = FactoryRecorder()

        Builder.generate_stub(Repository, registry=recorder.registry())

        assert isinstance(recorder.recording, RecordingFactories)
        assert recorder.recording.types("stub") == [Repository]
        assert recorder.calls == [("stub", Repository, ())]
