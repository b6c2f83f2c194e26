"""Auto Scaling resource types: groups and launch configurations."""

from __future__ import annotations
from botocore.exceptions import ClientError

from ..models import ResourceDescriptor
from ..utils import get_error_code
from .common import delete_each, get_client, parse_aws_timestamp, waiter_config


def is_name_not_found(error: ClientError) -> bool:
    """Auto Scaling reports unknown group and configuration names as ValidationError."""
    return (
        get_error_code(error) == "ValidationError"
        and "not found" in str(error).lower()
    )


def list_auto_scaling_groups(region: str) -> list[ResourceDescriptor]:
    autoscaling = get_client("autoscaling", region)
    paginator = autoscaling.get_paginator("describe_auto_scaling_groups")
    descriptors = []

    for page in paginator.paginate():
        for group in page["AutoScalingGroups"]:
            descriptors.append(
                ResourceDescriptor(
                    identifier=group["AutoScalingGroupName"],
                    region=region,
                    resource_type="asg",
                    created_at=parse_aws_timestamp(group.get("CreatedTime")),
                )
            )

    return descriptors


def delete_auto_scaling_groups(region: str, group_names: list[str]) -> None:
    """Force-delete groups (terminating their instances) and wait until they are gone."""
    autoscaling = get_client("autoscaling", region)
    delete_each(
        "asg",
        group_names,
        lambda name: autoscaling.delete_auto_scaling_group(
            AutoScalingGroupName=name, ForceDelete=True
        ),
        is_not_found=is_name_not_found,
        wait=lambda deleted: autoscaling.get_waiter("group_not_exists").wait(
            AutoScalingGroupNames=deleted, WaiterConfig=waiter_config()
        ),
    )


def list_launch_configurations(region: str) -> list[ResourceDescriptor]:
    autoscaling = get_client("autoscaling", region)
    paginator = autoscaling.get_paginator("describe_launch_configurations")
    descriptors = []

    for page in paginator.paginate():
        for config in page["LaunchConfigurations"]:
            descriptors.append(
                ResourceDescriptor(
                    identifier=config["LaunchConfigurationName"],
                    region=region,
                    resource_type="lc",
                    created_at=parse_aws_timestamp(config.get("CreatedTime")),
                )
            )

    return descriptors


def delete_launch_configurations(region: str, config_names: list[str]) -> None:
    autoscaling = get_client("autoscaling", region)
    delete_each(
        "lc",
        config_names,
        lambda name: autoscaling.delete_launch_configuration(
            LaunchConfigurationName=name
        ),
        is_not_found=is_name_not_found,
    )
