"""Pytest configuration and shared fixtures for cloud resource nuke tests."""

from __future__ import annotations
import datetime
import pytest
from typing import Callable

from botocore.exceptions import ClientError

from cloud_resource_nuke.core import ResourceType, ResourceTypeRegistry
from cloud_resource_nuke.models import ResourceDescriptor

NOW = datetime.datetime(2024, 6, 1, 12, 0, tzinfo=datetime.timezone.utc)


class DescriptorBuilder:
    """Builder pattern for creating test resource descriptors.

    Descriptors default to an unprotected, day-old resource in us-east-1.
    """

    def __init__(self):
        self._identifier = "res-0001"
        self._region = "us-east-1"
        self._resource_type = "widgets"
        self._created_at: datetime.datetime | None = NOW - datetime.timedelta(days=1)
        self._protected = False
        self._name = ""

    def with_identifier(self, identifier: str) -> DescriptorBuilder:
        self._identifier = identifier
        return self

    def with_region(self, region: str) -> DescriptorBuilder:
        self._region = region
        return self

    def with_resource_type(self, resource_type: str) -> DescriptorBuilder:
        self._resource_type = resource_type
        return self

    def created_hours_ago(self, hours: float) -> DescriptorBuilder:
        self._created_at = NOW - datetime.timedelta(hours=hours)
        return self

    def without_creation_time(self) -> DescriptorBuilder:
        self._created_at = None
        return self

    def protected(self) -> DescriptorBuilder:
        self._protected = True
        return self

    def with_name(self, name: str) -> DescriptorBuilder:
        self._name = name
        return self

    def build(self) -> ResourceDescriptor:
        return ResourceDescriptor(
            identifier=self._identifier,
            region=self._region,
            resource_type=self._resource_type,
            created_at=self._created_at,
            protected=self._protected,
            name=self._name,
        )


class FakeProvider:
    """In-memory provider backing fake resource types.

    ``resources`` maps (region, resource type) to descriptors. Every list and
    delete call is recorded so tests can assert on ordering and batching.
    """

    def __init__(self):
        self.resources: dict[tuple[str, str], list[ResourceDescriptor]] = {}
        self.list_calls: list[tuple[str, str]] = []
        self.delete_calls: list[tuple[str, str, list[str]]] = []
        self.delete_failures: dict[str, list[Exception]] = {}
        self.list_failures: dict[tuple[str, str], Exception] = {}

    def add(self, resource_type: str, region: str, count: int, **kwargs) -> None:
        descriptors = self.resources.setdefault((region, resource_type), [])
        start = len(descriptors)
        for i in range(start, start + count):
            descriptors.append(
                ResourceDescriptor(
                    identifier=f"{resource_type}-{region}-{i:03d}",
                    region=region,
                    resource_type=resource_type,
                    **kwargs,
                )
            )

    def fail_deletes(self, resource_type: str, *errors: Exception) -> None:
        """Queue errors raised by successive delete calls of a resource type."""
        self.delete_failures.setdefault(resource_type, []).extend(errors)

    def resource_type(
        self,
        name: str,
        max_batch_size: int = 0,
        regions: frozenset[str] | None = None,
    ) -> ResourceType:
        def list_resources(region: str) -> list[ResourceDescriptor]:
            self.list_calls.append((region, name))
            if (region, name) in self.list_failures:
                raise self.list_failures[(region, name)]
            return list(self.resources.get((region, name), []))

        def delete_resources(region: str, identifiers: list[str]) -> None:
            self.delete_calls.append((region, name, list(identifiers)))
            queued = self.delete_failures.get(name)
            if queued:
                raise queued.pop(0)

        return ResourceType(
            name=name,
            list_resources=list_resources,
            delete_resources=delete_resources,
            max_batch_size=max_batch_size,
            regions=regions,
        )


# Shared fixtures


@pytest.fixture
def descriptor_builder():
    """Fixture that returns a new DescriptorBuilder."""
    return DescriptorBuilder()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def make_registry(fake_provider) -> Callable[..., ResourceTypeRegistry]:
    """Registry factory: pass (name, max_batch_size) pairs in nuke order."""

    def _make(*specs, regions: dict[str, frozenset[str]] | None = None):
        regions = regions or {}
        types = [
            fake_provider.resource_type(name, size, regions.get(name))
            for name, size in specs
        ]
        return ResourceTypeRegistry(types, [name for name, _ in specs])

    return _make


@pytest.fixture
def no_sleep(monkeypatch):
    """Record executor sleeps instead of waiting."""
    sleeps: list[float] = []
    monkeypatch.setattr(
        "cloud_resource_nuke.core.executor.time.sleep", sleeps.append
    )
    return sleeps


@pytest.fixture
def make_client_error():
    """Factory for botocore ClientErrors with a given error code."""

    def _create(code: str, operation: str = "DeleteResource") -> ClientError:
        return ClientError(
            {"Error": {"Code": code, "Message": f"{code} raised"}}, operation
        )

    return _create


@pytest.fixture
def throttling_error(make_client_error):
    return make_client_error("RequestLimitExceeded", "TerminateInstances")
