"""Unit tests for the batched deletion pass."""

import pytest

from cloud_resource_nuke.core import build_inventory, nuke_batch, nuke_inventory
from cloud_resource_nuke.errors import PartialBatchError, RateLimitedError
from cloud_resource_nuke.models import ExclusionPolicy, NukeError
from cloud_resource_nuke.models.config import (
    BATCH_PAUSE_SECONDS,
    RATE_LIMIT_COOLDOWN_SECONDS,
)


@pytest.mark.unit
class TestNukeBatch:
    def test_success_returns_none(self, fake_provider, no_sleep):
        resource_type = fake_provider.resource_type("ec2")

        assert nuke_batch(resource_type, "us-east-1", ["i-1", "i-2"]) is None
        assert fake_provider.delete_calls == [("us-east-1", "ec2", ["i-1", "i-2"])]
        assert no_sleep == []

    def test_rate_limit_retries_same_batch(
        self, fake_provider, no_sleep, throttling_error
    ):
        """
        GIVEN a delete that is throttled twice before succeeding
        WHEN the batch is nuked
        THEN the same batch is retried after each cooldown and no error is returned
        """
        resource_type = fake_provider.resource_type("ec2")
        fake_provider.fail_deletes("ec2", throttling_error, throttling_error)

        assert nuke_batch(resource_type, "us-east-1", ["i-1"]) is None
        assert fake_provider.delete_calls == [("us-east-1", "ec2", ["i-1"])] * 3
        assert no_sleep == [RATE_LIMIT_COOLDOWN_SECONDS] * 2

    def test_retry_after_throttle_skips_completed_identifiers(
        self, fake_provider, no_sleep
    ):
        """
        GIVEN a batch throttled after its first identifier was deleted
        WHEN the batch is nuked
        THEN the retry only sends the identifiers that were not completed
        """
        resource_type = fake_provider.resource_type("widgets")
        fake_provider.fail_deletes(
            "widgets", RateLimitedError("slow down", completed=["w-1"])
        )

        assert nuke_batch(resource_type, "us-east-1", ["w-1", "w-2", "w-3"]) is None
        assert fake_provider.delete_calls == [
            ("us-east-1", "widgets", ["w-1", "w-2", "w-3"]),
            ("us-east-1", "widgets", ["w-2", "w-3"]),
        ]
        assert no_sleep == [RATE_LIMIT_COOLDOWN_SECONDS]

    def test_throttle_after_whole_batch_completed_does_not_retry(
        self, fake_provider, no_sleep
    ):
        resource_type = fake_provider.resource_type("widgets")
        fake_provider.fail_deletes(
            "widgets", RateLimitedError("slow down", completed=["w-1", "w-2"])
        )

        assert nuke_batch(resource_type, "us-east-1", ["w-1", "w-2"]) is None
        assert len(fake_provider.delete_calls) == 1
        assert no_sleep == []

    def test_terminal_error_after_throttle_names_remaining_identifiers(
        self, fake_provider, no_sleep, make_client_error
    ):
        resource_type = fake_provider.resource_type("widgets")
        fake_provider.fail_deletes(
            "widgets",
            RateLimitedError("slow down", completed=["w-1"]),
            make_client_error("DependencyViolation"),
        )

        error = nuke_batch(resource_type, "us-east-1", ["w-1", "w-2"])

        assert list(error.identifiers) == ["w-2"]

    def test_terminal_error_names_whole_batch(
        self, fake_provider, no_sleep, make_client_error
    ):
        resource_type = fake_provider.resource_type("ebs")
        cause = make_client_error("VolumeInUse")
        fake_provider.fail_deletes("ebs", cause)

        error = nuke_batch(resource_type, "us-west-2", ["vol-1", "vol-2"])

        assert isinstance(error, NukeError)
        assert error.region == "us-west-2"
        assert error.resource_type == "ebs"
        assert list(error.identifiers) == ["vol-1", "vol-2"]
        assert error.error is cause
        assert len(fake_provider.delete_calls) == 1

    def test_partial_failure_names_only_failed_identifiers(
        self, fake_provider, no_sleep
    ):
        resource_type = fake_provider.resource_type("snap")
        fake_provider.fail_deletes(
            "snap", PartialBatchError("snap", {"snap-2": RuntimeError("InUse")})
        )

        error = nuke_batch(resource_type, "us-east-1", ["snap-1", "snap-2"])

        assert list(error.identifiers) == ["snap-2"]
        assert "snap-2" in str(error)

    def test_custom_rate_limit_predicate(self, fake_provider, no_sleep):
        resource_type = fake_provider.resource_type("ec2")
        fake_provider.fail_deletes("ec2", ValueError("slow down"))

        error = nuke_batch(
            resource_type,
            "us-east-1",
            ["i-1"],
            is_rate_limited=lambda e: isinstance(e, ValueError),
        )

        assert error is None
        assert no_sleep == [RATE_LIMIT_COOLDOWN_SECONDS]


@pytest.mark.unit
class TestNukeInventory:
    def test_batches_with_pause_between_them(
        self, fake_provider, make_registry, no_sleep
    ):
        """
        GIVEN 25 resources of a type whose batch limit is 10
        WHEN the inventory is nuked
        THEN three batches of 10, 10 and 5 run with a pause after the first two
        """
        registry = make_registry(("widgets", 10))
        fake_provider.add("widgets", "region-a", 25)
        inventory = build_inventory(registry, ["region-a"], ExclusionPolicy())

        errors = nuke_inventory(registry, inventory)

        assert errors == []
        assert [len(ids) for _, _, ids in fake_provider.delete_calls] == [10, 10, 5]
        assert no_sleep == [BATCH_PAUSE_SECONDS, BATCH_PAUSE_SECONDS]

    def test_single_batch_has_no_pause(self, fake_provider, make_registry, no_sleep):
        registry = make_registry(("widgets", 0))
        fake_provider.add("widgets", "region-a", 120)
        inventory = build_inventory(registry, ["region-a"], ExclusionPolicy())

        nuke_inventory(registry, inventory)

        assert len(fake_provider.delete_calls) == 1
        assert no_sleep == []

    def test_types_nuked_in_order_within_region(
        self, fake_provider, make_registry, no_sleep
    ):
        registry = make_registry(("asg", 0), ("elb", 0), ("ec2", 0), ("ebs", 0))
        for name in ("ebs", "ec2", "asg"):
            fake_provider.add(name, "us-east-1", 1)
        fake_provider.add("elb", "us-west-2", 1)
        inventory = build_inventory(
            registry, ["us-east-1", "us-west-2"], ExclusionPolicy()
        )

        nuke_inventory(registry, inventory)

        assert [(r, t) for r, t, _ in fake_provider.delete_calls] == [
            ("us-east-1", "asg"),
            ("us-east-1", "ec2"),
            ("us-east-1", "ebs"),
            ("us-west-2", "elb"),
        ]

    def test_failed_batch_does_not_stop_siblings(
        self, fake_provider, make_registry, no_sleep, make_client_error
    ):
        """
        GIVEN a first batch that fails terminally
        WHEN the inventory is nuked
        THEN later batches, types and regions still run and one error is returned
        """
        registry = make_registry(("widgets", 2), ("gadgets", 0))
        fake_provider.add("widgets", "region-a", 4)
        fake_provider.add("gadgets", "region-a", 1)
        fake_provider.add("widgets", "region-b", 1)
        fake_provider.fail_deletes("widgets", make_client_error("DependencyViolation"))
        inventory = build_inventory(
            registry, ["region-a", "region-b"], ExclusionPolicy()
        )

        errors = nuke_inventory(registry, inventory)

        assert len(errors) == 1
        assert list(errors[0].identifiers) == [
            "widgets-region-a-000",
            "widgets-region-a-001",
        ]
        assert len(fake_provider.delete_calls) == 4

    def test_empty_inventory_deletes_nothing(self, fake_provider, make_registry):
        registry = make_registry(("widgets", 0))
        inventory = build_inventory(registry, ["region-a"], ExclusionPolicy())

        assert nuke_inventory(registry, inventory) == []
        assert fake_provider.delete_calls == []
